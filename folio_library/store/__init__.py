"""Content store collaborators used by the synchronization core.

Public Interface:
    - ContentStore: Protocol the core depends on
    - HttpContentStore: Store over the foliod admin API
    - LocalContentStore: Store over an in-process AdminDatabase
    - StoreError, StoreNotFoundError, StoreUnavailableError: Failure taxonomy
"""

from .base import ContentStore
from .errors import StoreError
from .errors import StoreNotFoundError
from .errors import StoreUnavailableError
from .http import HttpContentStore
from .local import LocalContentStore

__all__ = [
    "ContentStore",
    "HttpContentStore",
    "LocalContentStore",
    "StoreError",
    "StoreNotFoundError",
    "StoreUnavailableError",
]
