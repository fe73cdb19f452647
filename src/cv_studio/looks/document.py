"""Block tree describing a paginated document independently of any renderer.

Looks build a :class:`LookDocument` out of these immutable blocks; the
renderer lays them out on fixed-size pages. All distances are in points.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Literal

__all__ = [
    "A4",
    "Block",
    "Bullets",
    "Columns",
    "LookDocument",
    "Margins",
    "PageGeometry",
    "ProficiencyBar",
    "Row",
    "Rule",
    "Spacer",
    "Stack",
    "Text",
    "TextStyle",
]

RGB = tuple[int, int, int]
BLACK: RGB = (0, 0, 0)


@dataclass(frozen=True, slots=True)
class PageGeometry:
    width: float
    height: float


A4 = PageGeometry(width=595.28, height=841.89)


@dataclass(frozen=True, slots=True)
class Margins:
    top: float
    right: float
    bottom: float
    left: float

    @classmethod
    def uniform(cls, value: float) -> Margins:
        return cls(value, value, value, value)


@dataclass(frozen=True, slots=True)
class TextStyle:
    size: float = 10.0
    bold: bool = False
    italic: bool = False
    color: RGB = BLACK
    align: Literal["L", "C", "R", "J"] = "L"
    family: str | None = None  # None inherits the document font


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Text:
    content: str
    style: TextStyle = field(default_factory=TextStyle)
    space_after: float = 0.0


@dataclass(frozen=True, slots=True)
class Row:
    """One line with left-aligned and right-aligned text."""

    left: str
    right: str
    style: TextStyle = field(default_factory=TextStyle)
    right_style: TextStyle | None = None
    space_after: float = 0.0


@dataclass(frozen=True, slots=True)
class Bullets:
    items: tuple[str, ...]
    style: TextStyle = field(default_factory=TextStyle)
    marker: str = "-"
    indent: float = 10.0
    space_after: float = 0.0


@dataclass(frozen=True, slots=True)
class Rule:
    thickness: float = 0.5
    color: RGB = BLACK
    space_before: float = 2.0
    space_after: float = 4.0


@dataclass(frozen=True, slots=True)
class Spacer:
    height: float


@dataclass(frozen=True, slots=True)
class ProficiencyBar:
    label: str
    fraction: float
    style: TextStyle = field(default_factory=TextStyle)
    bar_color: RGB = BLACK
    track_color: RGB = (220, 220, 220)
    height: float = 4.0
    space_after: float = 6.0


@dataclass(frozen=True, slots=True)
class Stack:
    """An ordered group of blocks, typically one CV section."""

    children: tuple[Block, ...]
    name: str = ""


@dataclass(frozen=True, slots=True)
class Columns:
    """Sidebar and main column side by side; the sidebar sits on the left."""

    sidebar: tuple[Block, ...]
    main: tuple[Block, ...]
    sidebar_fraction: float = 0.32
    gap: float = 18.0
    sidebar_fill: RGB | None = None


Block = Text | Row | Bullets | Rule | Spacer | ProficiencyBar | Stack | Columns


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LookDocument:
    """A complete page description: geometry, defaults and the page tree."""

    look_id: str
    geometry: PageGeometry
    margins: Margins
    font_family: str
    font_size: float
    line_height: float
    header: tuple[Block, ...]
    body: tuple[Block, ...]
    footer: tuple[Block, ...] = ()
    title: str = ""

    @property
    def content_width(self) -> float:
        return self.geometry.width - self.margins.left - self.margins.right

    def blocks(self) -> Iterator[Block]:
        yield from self.header
        yield from self.body
        yield from self.footer

    def iter_text(self) -> Iterator[str]:
        """Yield every piece of text in reading order (sidebar before main)."""
        for block in self.blocks():
            yield from _text_of(block)

    def section_names(self) -> list[str]:
        return list(_stack_names(self.body))


def _text_of(block: Block) -> Iterator[str]:
    match block:
        case Text(content=content):
            yield content
        case Row(left=left, right=right):
            yield left
            if right:
                yield right
        case Bullets(items=items):
            yield from items
        case ProficiencyBar(label=label):
            yield label
        case Stack(children=children):
            for child in children:
                yield from _text_of(child)
        case Columns(sidebar=sidebar, main=main):
            for child in (*sidebar, *main):
                yield from _text_of(child)
        case Rule() | Spacer():
            return


def _stack_names(blocks: tuple[Block, ...]) -> Iterator[str]:
    for block in blocks:
        if isinstance(block, Stack) and block.name:
            yield block.name
        elif isinstance(block, Columns):
            yield from _stack_names(block.sidebar)
            yield from _stack_names(block.main)
