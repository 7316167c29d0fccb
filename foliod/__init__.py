"""foliod - admin content API for folio.

Thin FastAPI wrapper over folio_library's admin database.
"""
