"""Data models for siteflon."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class OpenState(Enum):
    """Constructs that stay open until a matching marker closes them.

    Attributes:
        BOLD: Opened and closed by ``*``.
        ITALICS: Opened and closed by ``/``.
        UNDERLINE: Opened and closed by ``_``.
        HEADING: Opened by a run of ``#``, closed by a newline.
    """

    BOLD = auto()
    ITALICS = auto()
    UNDERLINE = auto()
    HEADING = auto()


@dataclass
class CompilerContext:
    """Encapsulate compiler state for a single compilation run.

    Attributes:
        source: Text being compiled; never modified.
        preserve_newlines: Render bare newlines as ``<br>``.
        cursor: Index of the next unconsumed character.
        open_states: Stack of open constructs; only the top is ever inspected.
        heading_levels: Level of each open heading, innermost last.
        output: Emitted HTML pieces.
    """

    source: str
    preserve_newlines: bool = False
    cursor: int = 0
    open_states: list[OpenState] = field(default_factory=list)
    heading_levels: list[int] = field(default_factory=list)
    output: list[str] = field(default_factory=list)

    @property
    def at_end(self) -> bool:
        return self.cursor >= len(self.source)

    @property
    def top_state(self) -> OpenState | None:
        return self.open_states[-1] if self.open_states else None


@dataclass
class ImageLabel:
    """Fields captured from an image label such as ``[alt::100::50]``.

    Attributes:
        alt: Alternative text; empty when omitted.
        width: Width attribute value; empty when omitted.
        height: Height attribute value; empty when omitted.
    """

    alt: str = ""
    width: str = ""
    height: str = ""
