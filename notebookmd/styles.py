"""Token types, colours and colour schemes for Markdown syntax highlighting."""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass, field
from typing import ClassVar


@dataclass(frozen=True)
class Color:
    """An RGBA colour with float components in the range 0.0 to 1.0."""

    r: float
    g: float
    b: float
    a: float = 1.0

    BLACK: ClassVar["Color"]
    WHITE: ClassVar["Color"]

    @classmethod
    def from_rgb(cls, r: float, g: float, b: float) -> "Color":
        """Create an opaque colour."""
        return cls(r, g, b, 1.0)

    @classmethod
    def from_rgba(cls, r: float, g: float, b: float, a: float) -> "Color":
        """Create a colour with an explicit alpha."""
        return cls(r, g, b, a)


Color.BLACK = Color(0.0, 0.0, 0.0, 1.0)
Color.WHITE = Color(1.0, 1.0, 1.0, 1.0)


class TokenType(enum.Enum):
    """Kinds of Markdown tokens recognised by the tokenizer."""

    # Standard Markdown
    HEADING1 = enum.auto()
    HEADING2 = enum.auto()
    HEADING3 = enum.auto()
    HEADING4 = enum.auto()
    HEADING5 = enum.auto()
    HEADING6 = enum.auto()
    BOLD = enum.auto()
    ITALIC = enum.auto()
    BOLD_ITALIC = enum.auto()
    INLINE_CODE = enum.auto()
    CODE_BLOCK_DELIMITER = enum.auto()
    CODE_BLOCK_CONTENT = enum.auto()
    CODE_BLOCK_LANGUAGE = enum.auto()
    BLOCKQUOTE = enum.auto()
    UNORDERED_LIST_MARKER = enum.auto()
    ORDERED_LIST_MARKER = enum.auto()
    LINK_TEXT = enum.auto()
    LINK_URL = enum.auto()
    IMAGE_ALT = enum.auto()
    IMAGE_URL = enum.auto()
    HORIZONTAL_RULE = enum.auto()

    # GitHub Flavored Markdown
    STRIKETHROUGH = enum.auto()
    TASK_LIST_UNCHECKED = enum.auto()
    TASK_LIST_CHECKED = enum.auto()
    TABLE_DELIMITER = enum.auto()
    TABLE_CELL = enum.auto()
    AUTOLINK = enum.auto()
    FOOTNOTE = enum.auto()
    FOOTNOTE_REFERENCE = enum.auto()

    # Special
    FRONTMATTER = enum.auto()
    PLAIN_TEXT = enum.auto()
    ESCAPE = enum.auto()


_HEADINGS = (
    (TokenType.HEADING1, True),
    (TokenType.HEADING2, True),
    (TokenType.HEADING3, True),
    (TokenType.HEADING4, False),
    (TokenType.HEADING5, False),
    (TokenType.HEADING6, False),
)


@dataclass
class TokenStyle:
    """How a token is drawn."""

    foreground: Color = Color.BLACK
    background: Color | None = None
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False


@dataclass
class SyntaxColorScheme:
    """A named set of styles keyed by token type."""

    name: str
    is_dark: bool
    styles: dict[TokenType, TokenStyle] = field(default_factory=dict)

    @classmethod
    def light(cls) -> "SyntaxColorScheme":
        """The default light colour scheme."""
        rgb = Color.from_rgb
        styles: dict[TokenType, TokenStyle] = {}

        heading_color = rgb(0.0, 0.0, 0.55)
        for token, boost in _HEADINGS:
            styles[token] = TokenStyle(foreground=heading_color, bold=boost)

        styles[TokenType.ITALIC] = TokenStyle(foreground=rgb(0.3, 0.3, 0.3), italic=True)
        styles[TokenType.BOLD] = TokenStyle(foreground=rgb(0.2, 0.2, 0.2), bold=True)
        styles[TokenType.BOLD_ITALIC] = TokenStyle(
            foreground=rgb(0.2, 0.2, 0.2), bold=True, italic=True
        )

        code_bg = Color.from_rgba(0.9, 0.9, 0.9, 1.0)
        styles[TokenType.INLINE_CODE] = TokenStyle(
            foreground=rgb(0.8, 0.2, 0.2), background=code_bg
        )
        styles[TokenType.CODE_BLOCK_DELIMITER] = TokenStyle(foreground=rgb(0.5, 0.5, 0.5))
        styles[TokenType.CODE_BLOCK_LANGUAGE] = TokenStyle(foreground=rgb(0.6, 0.0, 0.6))
        styles[TokenType.CODE_BLOCK_CONTENT] = TokenStyle(
            foreground=rgb(0.3, 0.3, 0.3), background=code_bg
        )

        styles[TokenType.LINK_TEXT] = TokenStyle(foreground=rgb(0.0, 0.4, 0.8), underline=True)
        styles[TokenType.LINK_URL] = TokenStyle(foreground=rgb(0.5, 0.5, 0.5))
        styles[TokenType.IMAGE_ALT] = TokenStyle(foreground=rgb(0.0, 0.5, 0.0))
        styles[TokenType.IMAGE_URL] = TokenStyle(foreground=rgb(0.5, 0.5, 0.5))

        accent = rgb(0.8, 0.4, 0.0)
        styles[TokenType.UNORDERED_LIST_MARKER] = TokenStyle(foreground=accent, bold=True)
        styles[TokenType.ORDERED_LIST_MARKER] = TokenStyle(foreground=accent, bold=True)

        styles[TokenType.BLOCKQUOTE] = TokenStyle(foreground=rgb(0.4, 0.4, 0.4), italic=True)
        styles[TokenType.HORIZONTAL_RULE] = TokenStyle(foreground=rgb(0.6, 0.6, 0.6))
        styles[TokenType.STRIKETHROUGH] = TokenStyle(
            foreground=rgb(0.5, 0.5, 0.5), strikethrough=True
        )
        styles[TokenType.TASK_LIST_UNCHECKED] = TokenStyle(foreground=rgb(0.6, 0.6, 0.6))
        styles[TokenType.TASK_LIST_CHECKED] = TokenStyle(foreground=rgb(0.0, 0.6, 0.0))
        styles[TokenType.TABLE_DELIMITER] = TokenStyle(foreground=rgb(0.5, 0.5, 0.5))
        styles[TokenType.AUTOLINK] = TokenStyle(foreground=rgb(0.0, 0.4, 0.8), underline=True)
        styles[TokenType.FOOTNOTE] = TokenStyle(foreground=rgb(0.6, 0.0, 0.6))
        styles[TokenType.FOOTNOTE_REFERENCE] = TokenStyle(foreground=rgb(0.6, 0.0, 0.6))
        styles[TokenType.FRONTMATTER] = TokenStyle(foreground=rgb(0.6, 0.0, 0.6))
        styles[TokenType.PLAIN_TEXT] = TokenStyle()
        styles[TokenType.ESCAPE] = TokenStyle(foreground=rgb(0.6, 0.3, 0.0))

        return cls(name="Light", is_dark=False, styles=styles)

    @classmethod
    def dark(cls) -> "SyntaxColorScheme":
        """The default dark colour scheme."""
        rgb = Color.from_rgb
        styles: dict[TokenType, TokenStyle] = {}

        heading_color = rgb(0.4, 0.7, 1.0)
        for token, boost in _HEADINGS:
            styles[token] = TokenStyle(foreground=heading_color, bold=boost)

        styles[TokenType.ITALIC] = TokenStyle(foreground=rgb(0.8, 0.8, 0.8), italic=True)
        styles[TokenType.BOLD] = TokenStyle(foreground=rgb(0.95, 0.95, 0.95), bold=True)
        styles[TokenType.BOLD_ITALIC] = TokenStyle(
            foreground=rgb(0.95, 0.95, 0.95), bold=True, italic=True
        )

        code_bg = Color.from_rgba(0.2, 0.2, 0.2, 1.0)
        styles[TokenType.INLINE_CODE] = TokenStyle(
            foreground=rgb(1.0, 0.5, 0.5), background=code_bg
        )
        styles[TokenType.CODE_BLOCK_DELIMITER] = TokenStyle(foreground=rgb(0.6, 0.6, 0.6))
        styles[TokenType.CODE_BLOCK_LANGUAGE] = TokenStyle(foreground=rgb(0.8, 0.4, 0.8))
        styles[TokenType.CODE_BLOCK_CONTENT] = TokenStyle(
            foreground=rgb(0.8, 0.8, 0.8), background=code_bg
        )

        styles[TokenType.LINK_TEXT] = TokenStyle(foreground=rgb(0.4, 0.8, 1.0), underline=True)
        styles[TokenType.LINK_URL] = TokenStyle(foreground=rgb(0.5, 0.5, 0.5))
        styles[TokenType.IMAGE_ALT] = TokenStyle(foreground=rgb(0.5, 0.9, 0.5))
        styles[TokenType.IMAGE_URL] = TokenStyle(foreground=rgb(0.5, 0.5, 0.5))

        accent = rgb(1.0, 0.6, 0.2)
        styles[TokenType.UNORDERED_LIST_MARKER] = TokenStyle(foreground=accent, bold=True)
        styles[TokenType.ORDERED_LIST_MARKER] = TokenStyle(foreground=accent, bold=True)

        styles[TokenType.BLOCKQUOTE] = TokenStyle(foreground=rgb(0.6, 0.6, 0.6), italic=True)
        styles[TokenType.HORIZONTAL_RULE] = TokenStyle(foreground=rgb(0.5, 0.5, 0.5))
        styles[TokenType.STRIKETHROUGH] = TokenStyle(
            foreground=rgb(0.6, 0.6, 0.6), strikethrough=True
        )
        styles[TokenType.TASK_LIST_UNCHECKED] = TokenStyle(foreground=rgb(0.5, 0.5, 0.5))
        styles[TokenType.TASK_LIST_CHECKED] = TokenStyle(foreground=rgb(0.4, 0.9, 0.4))
        styles[TokenType.TABLE_DELIMITER] = TokenStyle(foreground=rgb(0.5, 0.5, 0.5))
        styles[TokenType.AUTOLINK] = TokenStyle(foreground=rgb(0.4, 0.8, 1.0), underline=True)
        styles[TokenType.FOOTNOTE] = TokenStyle(foreground=rgb(0.8, 0.4, 0.8))
        styles[TokenType.FOOTNOTE_REFERENCE] = TokenStyle(foreground=rgb(0.8, 0.4, 0.8))
        styles[TokenType.FRONTMATTER] = TokenStyle(foreground=rgb(0.8, 0.4, 0.8))
        styles[TokenType.PLAIN_TEXT] = TokenStyle(foreground=rgb(0.9, 0.9, 0.9))
        styles[TokenType.ESCAPE] = TokenStyle(foreground=rgb(0.9, 0.6, 0.3))

        return cls(name="Dark", is_dark=True, styles=styles)

    def get_style(self, token_type: TokenType) -> TokenStyle:
        """Return a copy of the style for a token type, or the default style."""
        style = self.styles.get(token_type)
        if style is None:
            return TokenStyle()
        return dataclasses.replace(style)