"""Centralized error descriptors and helpers."""
from __future__ import annotations

from dataclasses import dataclass

from .models import ErrorRecord


@dataclass(frozen=True)
class ErrorDescriptor:
    code: str
    message_key: str
    action_key: str


def build_error(descriptor: ErrorDescriptor, **context: object) -> ErrorRecord:
    """Create an ErrorRecord with safe stringified context."""

    str_context = {key: str(value) for key, value in context.items()}
    return ErrorRecord(
        code=descriptor.code,
        message_key=descriptor.message_key,
        action_key=descriptor.action_key,
        context=str_context,
    )


ERROR_INVALID_FILENAME = ErrorDescriptor(
    code="GC001",
    message_key="error.invalid_filename.message",
    action_key="error.invalid_filename.action",
)

ERROR_CATALOG_LOAD_FAILED = ErrorDescriptor(
    code="GC002",
    message_key="error.catalog_load_failed.message",
    action_key="error.catalog_load_failed.action",
)

ERROR_EXPORT_FAILED = ErrorDescriptor(
    code="GC003",
    message_key="error.export_failed.message",
    action_key="error.export_failed.action",
)

__all__ = [
    "ERROR_CATALOG_LOAD_FAILED",
    "ERROR_EXPORT_FAILED",
    "ERROR_INVALID_FILENAME",
    "ErrorDescriptor",
    "build_error",
]
