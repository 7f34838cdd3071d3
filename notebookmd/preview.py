"""Markdown preview rendering into a tree of display elements."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional, Union

import mistune

_PLUGINS = ["table", "footnotes", "strikethrough", "task_lists"]


class ViewMode(enum.Enum):
    """Which panes of the editor are visible."""

    EDIT = "edit"
    PREVIEW = "preview"
    SPLIT = "split"

    def toggle_preview(self) -> "ViewMode":
        """Switch between editing and previewing; split view returns to editing."""
        if self is ViewMode.EDIT:
            return ViewMode.PREVIEW
        return ViewMode.EDIT

    def toggle_split(self) -> "ViewMode":
        """Enter split view, or leave it for editing."""
        if self is ViewMode.SPLIT:
            return ViewMode.EDIT
        return ViewMode.SPLIT

    def shows_preview(self) -> bool:
        return self in (ViewMode.PREVIEW, ViewMode.SPLIT)

    def shows_editor(self) -> bool:
        return self in (ViewMode.EDIT, ViewMode.SPLIT)


@dataclass
class StyledText:
    """A run of text with inline formatting."""

    text: str
    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    code: bool = False
    link: Optional[str] = None

    @classmethod
    def plain(cls, text: str) -> "StyledText":
        return cls(text)

    def _style_key(self) -> tuple:
        return (self.bold, self.italic, self.strikethrough, self.code, self.link)


class TableAlignment(enum.Enum):
    """Alignment of a table column."""

    NONE = "none"
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass
class ListItem:
    content: list["PreviewElement"] = field(default_factory=list)


@dataclass
class TaskItem:
    checked: bool
    content: list["PreviewElement"] = field(default_factory=list)


@dataclass
class Paragraph:
    content: list[StyledText] = field(default_factory=list)


@dataclass
class Heading:
    level: int
    content: list[StyledText] = field(default_factory=list)


@dataclass
class CodeBlock:
    language: Optional[str]
    code: str


@dataclass
class InlineCode:
    code: str


@dataclass
class Blockquote:
    children: list["PreviewElement"] = field(default_factory=list)


@dataclass
class UnorderedList:
    items: list[ListItem] = field(default_factory=list)


@dataclass
class OrderedList:
    start: int
    items: list[ListItem] = field(default_factory=list)


@dataclass
class TaskList:
    items: list[TaskItem] = field(default_factory=list)


@dataclass
class Table:
    headers: list[list[StyledText]] = field(default_factory=list)
    rows: list[list[list[StyledText]]] = field(default_factory=list)
    alignments: list[TableAlignment] = field(default_factory=list)


@dataclass
class HorizontalRule:
    pass


@dataclass
class Image:
    alt: str
    url: str
    title: Optional[str] = None


@dataclass
class Link:
    text: list[StyledText]
    url: str
    title: Optional[str] = None


@dataclass
class Html:
    html: str


@dataclass
class FootnoteDefinition:
    label: str
    content: list["PreviewElement"] = field(default_factory=list)


@dataclass
class SoftBreak:
    pass


@dataclass
class HardBreak:
    pass


PreviewElement = Union[
    Paragraph,
    Heading,
    CodeBlock,
    InlineCode,
    Blockquote,
    UnorderedList,
    OrderedList,
    TaskList,
    Table,
    HorizontalRule,
    Image,
    Link,
    Html,
    FootnoteDefinition,
    SoftBreak,
    HardBreak,
]

_ALIGNMENTS = {
    "left": TableAlignment.LEFT,
    "center": TableAlignment.CENTER,
    "right": TableAlignment.RIGHT,
}

_OPENING_CONTEXT = frozenset("([{\u2013\u2014")


@dataclass(frozen=True)
class _Style:
    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    link: Optional[str] = None


class _InlineCollector:
    """Flattens inline tokens into styled runs, gathering images on the side."""

    def __init__(self, images_as_text: bool = False) -> None:
        self.segments: list[StyledText] = []
        self.images: list[Image] = []
        self._images_as_text = images_as_text
        self._last_char = ""

    def _append(self, run: StyledText) -> None:
        if not run.text:
            return
        if self.segments and self.segments[-1]._style_key() == run._style_key():
            self.segments[-1].text += run.text
        else:
            self.segments.append(run)
        self._last_char = run.text[-1]

    def _add_text(self, text: str, style: _Style) -> None:
        self._append(
            StyledText(
                _smarten(text, self._last_char),
                bold=style.bold,
                italic=style.italic,
                strikethrough=style.strikethrough,
                link=style.link,
            )
        )

    def collect(self, tokens: Iterable[dict[str, Any]], style: _Style = _Style()) -> None:
        for tok in tokens:
            kind = tok.get("type")
            children = tok.get("children") or []
            attrs = tok.get("attrs") or {}
            if kind == "text":
                self._add_text(tok.get("raw", ""), style)
            elif kind == "emphasis":
                self.collect(children, _replace(style, italic=True))
            elif kind == "strong":
                self.collect(children, _replace(style, bold=True))
            elif kind == "strikethrough":
                self.collect(children, _replace(style, strikethrough=True))
            elif kind == "codespan":
                self._append(
                    StyledText(tok.get("raw", ""), bold=style.bold, italic=style.italic, code=True)
                )
            elif kind == "link":
                self.collect(children, _replace(style, link=attrs.get("url", "")))
            elif kind == "image":
                alt = _plain_text(children)
                if self._images_as_text:
                    self._add_text(alt, style)
                else:
                    self.images.append(
                        Image(alt=alt, url=attrs.get("url", ""), title=attrs.get("title") or None)
                    )
            elif kind == "softbreak":
                self._add_text(" ", style)
            elif kind == "linebreak":
                continue
            elif kind == "footnote_ref":
                self._add_text(f"[^{tok.get('raw', '')}]", style)
            elif children:
                self.collect(children, style)
            elif "raw" in tok:
                self._add_text(tok["raw"], style)


def _replace(style: _Style, **changes: Any) -> _Style:
    values = {
        "bold": style.bold,
        "italic": style.italic,
        "strikethrough": style.strikethrough,
        "link": style.link,
    }
    values.update(changes)
    return _Style(**values)


def _plain_text(tokens: Iterable[dict[str, Any]]) -> str:
    parts: list[str] = []
    for tok in tokens:
        children = tok.get("children")
        if children:
            parts.append(_plain_text(children))
        elif tok.get("type") == "softbreak":
            parts.append(" ")
        elif "raw" in tok:
            parts.append(tok["raw"])
    return "".join(parts)


def _smarten(text: str, before: str = "") -> str:
    """Apply typographic dashes, ellipses and curly quotes."""
    text = text.replace("---", "\u2014").replace("--", "\u2013").replace("...", "\u2026")
    out: list[str] = []
    prev = before
    for ch in text:
        if ch in "'\"":
            opening = prev == "" or prev.isspace() or prev in _OPENING_CONTEXT
            if ch == "'":
                ch = "\u2018" if opening else "\u2019"
            else:
                ch = "\u201c" if opening else "\u201d"
        out.append(ch)
        prev = ch
    return "".join(out)


class PreviewRenderer:
    """Parses Markdown into preview elements."""

    def __init__(self, base_path: Union[str, Path, None] = None) -> None:
        self.base_path = Path(base_path) if base_path is not None else None
        self._markdown = mistune.create_markdown(renderer="ast", plugins=_PLUGINS)

    def render(self, markdown: str) -> list[PreviewElement]:
        """Parse Markdown text into a list of preview elements."""
        tokens = self._markdown(markdown)
        return self._blocks(tokens)

    def resolve_url(self, url: str) -> str:
        """Resolve a relative URL against the base path when the target exists."""
        if url.startswith(("http://", "https://", "data:")):
            return url
        if self.base_path is not None:
            path = self.base_path / url
            if path.exists():
                return f"file://{path}"
        return url

    def _blocks(self, tokens: Iterable[dict[str, Any]]) -> list[PreviewElement]:
        elements: list[PreviewElement] = []
        for tok in tokens:
            elements.extend(self._block(tok))
        return elements

    def _block(self, tok: dict[str, Any]) -> list[PreviewElement]:
        kind = tok.get("type")
        children = tok.get("children") or []
        attrs = tok.get("attrs") or {}

        if kind in ("paragraph", "block_text"):
            collector = _InlineCollector()
            collector.collect(children)
            result: list[PreviewElement] = []
            if collector.segments or not collector.images:
                result.append(Paragraph(collector.segments))
            result.extend(collector.images)
            return result
        if kind == "heading":
            collector = _InlineCollector()
            collector.collect(children)
            return [Heading(int(attrs.get("level", 1)), collector.segments), *collector.images]
        if kind == "block_code":
            info = (attrs.get("info") or "").strip()
            fenced = tok.get("style") == "fenced"
            return [CodeBlock(info if fenced and info else None, tok.get("raw", ""))]
        if kind == "block_quote":
            return [Blockquote(self._blocks(children))]
        if kind == "list":
            items = [ListItem(self._blocks(item.get("children") or [])) for item in children]
            if attrs.get("ordered"):
                return [OrderedList(int(attrs.get("start", 1)), items)]
            return [UnorderedList(items)]
        if kind == "thematic_break":
            return [HorizontalRule()]
        if kind == "block_html":
            return [Html(tok.get("raw", ""))]
        if kind == "table":
            return [self._table(children)]
        if kind == "footnotes":
            return [
                FootnoteDefinition(
                    label=str((item.get("attrs") or {}).get("key", "")),
                    content=self._blocks(item.get("children") or []),
                )
                for item in children
            ]
        if kind == "blank_line":
            return []
        return self._blocks(children)

    @staticmethod
    def _cell(tok: dict[str, Any]) -> list[StyledText]:
        collector = _InlineCollector(images_as_text=True)
        collector.collect(tok.get("children") or [])
        return collector.segments

    def _table(self, sections: list[dict[str, Any]]) -> Table:
        table = Table()
        for section in sections:
            kind = section.get("type")
            if kind == "table_head":
                cells = section.get("children") or []
                table.headers = [self._cell(cell) for cell in cells]
                table.alignments = [
                    _ALIGNMENTS.get((cell.get("attrs") or {}).get("align") or "", TableAlignment.NONE)
                    for cell in cells
                ]
            elif kind == "table_body":
                for row in section.get("children") or []:
                    table.rows.append([self._cell(cell) for cell in row.get("children") or []])
        return table