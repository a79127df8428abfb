"""Package-specific exception types."""

from __future__ import annotations


class CompileError(ValueError):
    """Base class for compilation-related errors."""


class MalformedConstructError(CompileError):
    """Raised when a link or image label is not followed by its target.

    The compiler treats this as fatal for the whole document: no partial
    output survives it.

    Args:
        construct: Name of the construct, ``"link"`` or ``"image"``.
        position: Zero-based offset of the ``@`` or ``!`` marker.
    """

    def __init__(self, construct: str, position: int):
        self.construct = construct
        self.position = position
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"Malformed {self.construct} at offset {self.position}: "
            "expected '(' after the closing ']'"
        )
