"""Audit log registry.

``AUDIT_LOG=repository`` (the default) persists entries through the
notifications domain; ``memory`` keeps them in a list for development and
tests. Any other log plugs in through ``set_audit_log`` at startup.
"""

import os

from notifications.audit.memory import InMemoryAuditLog
from notifications.audit.port import AuditEntry, AuditLog

_audit_log: AuditLog | None = None


def get_audit_log() -> AuditLog:
    """Return the configured audit log (singleton)."""
    global _audit_log
    if _audit_log is None:
        backend = os.environ.get("AUDIT_LOG", "repository")
        if backend == "repository":
            from notifications.audit.repository import RepositoryAuditLog

            _audit_log = RepositoryAuditLog()
        elif backend == "memory":
            _audit_log = InMemoryAuditLog()
        else:
            raise ValueError(f"Unknown audit log: {backend}")
    return _audit_log


def set_audit_log(audit_log: AuditLog) -> None:
    global _audit_log
    _audit_log = audit_log


def reset_audit_log():
    """Reset the audit log singleton (useful for testing)."""
    global _audit_log
    _audit_log = None


__all__ = ["AuditEntry", "AuditLog", "InMemoryAuditLog", "get_audit_log", "reset_audit_log", "set_audit_log"]
