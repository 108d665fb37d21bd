"""Process-wide lifecycle service built from the configured stores."""

from returns.record.lifecycle import ReturnLifecycle
from returns.store import get_return_store
from shared.users import get_user_store

_lifecycle: ReturnLifecycle | None = None


def get_lifecycle() -> ReturnLifecycle:
    """Return the lifecycle service (singleton).

    The instance owns the per-return locks, so every request must share it.
    """
    global _lifecycle
    if _lifecycle is None:
        _lifecycle = ReturnLifecycle(store=get_return_store(), users=get_user_store())
    return _lifecycle


def set_lifecycle(lifecycle: ReturnLifecycle) -> None:
    global _lifecycle
    _lifecycle = lifecycle


def reset_lifecycle():
    """Reset the lifecycle singleton (useful for testing)."""
    global _lifecycle
    _lifecycle = None
