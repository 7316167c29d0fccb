"""Content synchronization core.

Keeps the admin console's view of pages and settings in one in-memory cache:

- ResourceCache: bulk collection + selected item, TTL-gated, single refresh at a time
- KeyedRequestCoalescer: per-key overrides, one in-flight fetch per key
- SettingsCache: single settings documents with single-flight refresh
- write_through / LoadingTracker: store-first write policy shared by all of them
- ContentProvider: the above wired to one ContentStore
"""

from .coalescer import KeyedRequestCoalescer
from .provider import ContentProvider
from .provider import open_provider
from .resource_cache import DEFAULT_TTL_SECONDS
from .resource_cache import ResourceCache
from .settings_cache import SettingsCache
from .write_through import LoadingTracker
from .write_through import write_through

__all__ = [
    "ContentProvider",
    "DEFAULT_TTL_SECONDS",
    "KeyedRequestCoalescer",
    "LoadingTracker",
    "ResourceCache",
    "SettingsCache",
    "open_provider",
    "write_through",
]
