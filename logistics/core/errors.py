"""
Error hierarchy for the logistics data-access layer.

Driver errors (pymongo.errors.PyMongoError) are never wrapped; they propagate
as-is and abort whatever was running.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class LogisticsError(Exception):
    """Base class for errors raised by this package."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def as_dict(self) -> Dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class SchemaError(LogisticsError):
    """Schema state that the initializer cannot reconcile."""


class SchemaConflictError(SchemaError):
    """An index exists under the expected name but over different keys."""

    def __init__(self, collection: str, name: str, expected, found) -> None:
        super().__init__(
            f"index {collection}.{name} exists with keys {found}, expected {expected}",
            details={
                "collection": collection,
                "index": name,
                "expected": [list(k) for k in expected],
                "found": [list(k) for k in found],
            },
        )
        self.collection = collection
        self.name = name


class InvalidTransitionError(LogisticsError):
    """A status change not allowed by the transition table."""

    def __init__(self, kind: str, src: Optional[str], dst: str) -> None:
        super().__init__(
            f"{kind} cannot move from {src} to {dst}",
            details={"kind": kind, "from": src, "to": dst},
        )
        self.src = src
        self.dst = dst


class NotFoundError(LogisticsError):
    """No active record matched the lookup key."""
