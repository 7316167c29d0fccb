"""folio_library - content models, store access and the content synchronization core.

All business logic lives here; foliod provides the thin HTTP wrapper.
"""

__version__ = "0.1.0"
