"""blockdag-layout error codes and exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ErrorCategory(IntEnum):
    SUCCESS = 0x00
    VALIDATION = 0x01
    LOOKUP = 0x02
    SOURCE = 0x03
    INTERNAL = 0xFF


class ErrorCode(IntEnum):
    # Success
    SUCCESS = 0x0000

    # Validation
    INVALID_DIMENSIONS = 0x0100
    INVALID_RECORD = 0x0101
    INVALID_DEPTH = 0x0102
    INVALID_FORMAT = 0x0103

    # Lookup
    NODE_NOT_FOUND = 0x0200

    # Source
    SOURCE_UNAVAILABLE = 0x0300
    SOURCE_BAD_RESPONSE = 0x0301

    # Internal
    INTERNAL_ERROR = 0xFF00
    UNKNOWN = 0xFFFF

    @property
    def category(self) -> ErrorCategory:
        return ErrorCategory(self.value >> 8)


@dataclass(frozen=True)
class LayoutError(Exception):
    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.name}({self.code:#06x}): {self.message}"


# Traceback and chaining attributes bypass the frozen check.
_EXCEPTION_ATTRS = frozenset(("__traceback__", "__context__", "__cause__", "__suppress_context__"))
_frozen_setattr = LayoutError.__setattr__


def _layout_error_setattr(self: LayoutError, name: str, value: object) -> None:
    if name in _EXCEPTION_ATTRS:
        object.__setattr__(self, name, value)
    else:
        _frozen_setattr(self, name, value)


LayoutError.__setattr__ = _layout_error_setattr  # type: ignore[method-assign]


def err(code: ErrorCode, message: str) -> LayoutError:
    return LayoutError(code=code, message=message)
