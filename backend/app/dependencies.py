from .queries import SchoolStore

_store = SchoolStore()


def get_store() -> SchoolStore:
    """Store used by the school routes; tests override this dependency."""
    return _store
