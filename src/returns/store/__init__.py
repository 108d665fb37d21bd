"""Return store registry: pluggable persistence for return records."""

import os

_store_instance = None


def get_return_store():
    """Return the configured return store (singleton).

    ``RETURN_STORE=repository`` (the default) persists through the returns
    domain's protean repository; ``memory`` keeps records in process.
    """
    global _store_instance
    if _store_instance is None:
        backend = os.environ.get("RETURN_STORE", "repository")
        if backend == "repository":
            from returns.store.repository import RepositoryReturnStore

            _store_instance = RepositoryReturnStore()
        elif backend == "memory":
            from returns.store.memory import InMemoryReturnStore

            _store_instance = InMemoryReturnStore()
        else:
            raise ValueError(f"Unknown return store: {backend}")
    return _store_instance


def reset_return_store():
    """Reset the return store singleton (useful for testing)."""
    global _store_instance
    _store_instance = None
