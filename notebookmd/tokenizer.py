"""Line-based Markdown tokenizer for syntax highlighting."""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass, field
from typing import Optional, Sequence

from notebookmd.styles import TokenType

_HEADING_TYPES = {
    1: TokenType.HEADING1,
    2: TokenType.HEADING2,
    3: TokenType.HEADING3,
    4: TokenType.HEADING4,
    5: TokenType.HEADING5,
}

_ASCII_DIGITS = frozenset("0123456789")
_AUTOLINK_STOP = frozenset("<>\"'")
_AUTOLINK_TRAILING = frozenset(".,:;!?)")


@dataclass
class Token:
    """A token covering ``[start, end)`` of a line, in character offsets."""

    token_type: TokenType
    start: int
    end: int
    nested_style: Optional["Token"] = None

    def with_nested(self, nested: "Token") -> "Token":
        """Return a copy of this token carrying a nested style."""
        return dataclasses.replace(self, nested_style=nested)

    @property
    def length(self) -> int:
        """Number of characters the token covers."""
        return self.end - self.start

    def is_empty(self) -> bool:
        """Whether the token covers no characters."""
        return self.length == 0


class LineStateKind(enum.Enum):
    """The multi-line construct a line starts or ends in."""

    NORMAL = enum.auto()
    IN_CODE_BLOCK = enum.auto()
    IN_FRONTMATTER = enum.auto()


@dataclass(frozen=True)
class LineState:
    """Tokenizer state carried from one line to the next."""

    kind: LineStateKind = LineStateKind.NORMAL
    fence_char: str = ""
    fence_count: int = 0

    @classmethod
    def normal(cls) -> "LineState":
        return cls(LineStateKind.NORMAL)

    @classmethod
    def in_code_block(cls, fence_char: str, fence_count: int) -> "LineState":
        return cls(LineStateKind.IN_CODE_BLOCK, fence_char, fence_count)

    @classmethod
    def in_frontmatter(cls) -> "LineState":
        return cls(LineStateKind.IN_FRONTMATTER)


@dataclass
class LineTokens:
    """Tokens of one line and the state at its end."""

    tokens: list[Token]
    end_state: LineState
    content_hash: int = field(default=0, repr=False, compare=False)


@dataclass(frozen=True)
class _CodeFence:
    char: str
    count: int
    language: str


def _parse_code_fence(line: str) -> Optional[_CodeFence]:
    if len(line) < 3:
        return None
    fence_char = line[0]
    if fence_char not in "`~":
        return None
    count = len(line) - len(line.lstrip(fence_char))
    if count < 3:
        return None
    return _CodeFence(fence_char, count, line[count:].strip())


def _parse_heading(line: str) -> Optional[tuple[int, int]]:
    if not line.startswith("#"):
        return None
    level = len(line) - len(line.lstrip("#"))
    if level > 6:
        return None
    if level < len(line) and line[level] != " ":
        return None
    content_start = level + 1 if level < len(line) else level
    return level, content_start


def _is_horizontal_rule(line: str) -> bool:
    trimmed = line.strip()
    if len(trimmed) < 3:
        return False
    chars = [c for c in trimmed if not c.isspace()]
    if len(chars) < 3:
        return False
    first = chars[0]
    if first not in "-*_":
        return False
    return all(c == first for c in chars)


def _parse_unordered_list(line: str) -> Optional[tuple[int, bool, bool]]:
    """Return ``(marker_end, is_task, is_checked)`` for a bullet item."""
    if not line or line[0] not in "-*+":
        return None
    if len(line) < 2 or line[1] != " ":
        return None
    if len(line) >= 5 and line[2] == "[" and line[4] == "]":
        marker_end = 6 if len(line) > 5 and line[5] == " " else 5
        if line[3] == " ":
            return marker_end, True, False
        if line[3] in "xX":
            return marker_end, True, True
    return 2, False, False


def _parse_ordered_list(line: str) -> Optional[int]:
    i = 0
    while i < len(line) and line[i] in _ASCII_DIGITS:
        i += 1
    if i == 0 or i >= len(line):
        return None
    if line[i] in ".)" and i + 1 < len(line) and line[i + 1] == " ":
        return i + 2
    return None


def _is_table_row(line: str) -> bool:
    trimmed = line.strip()
    return trimmed.startswith("|") or trimmed.endswith("|") or " | " in trimmed


def _find_inline_code(text: str, start: int) -> Optional[int]:
    pos = start
    while pos < len(text) and text[pos] == "`":
        pos += 1
    backticks = pos - start
    count = 0
    while pos < len(text):
        if text[pos] == "`":
            count += 1
            if count == backticks:
                return pos + 1
        else:
            count = 0
        pos += 1
    return None


def _find_closing(text: str, start: int, marker: str) -> Optional[int]:
    idx = text.find(marker, start)
    return idx + len(marker) if idx >= 0 else None


def _skip_balanced(text: str, pos: int, open_ch: str, close_ch: str) -> Optional[int]:
    """Scan past a balanced group whose opener sits just before ``pos``."""
    depth = 1
    while pos < len(text) and depth > 0:
        ch = text[pos]
        if ch == open_ch:
            depth += 1
        elif ch == close_ch:
            depth -= 1
        elif ch == "\\":
            pos += 1
        pos += 1
    return pos if depth == 0 else None


def _find_link(text: str, start: int) -> Optional[tuple[int, int]]:
    """Return ``(text_end, url_end)`` for ``[text](url)`` starting at ``start``."""
    if text[start] != "[":
        return None
    text_end = _skip_balanced(text, start + 1, "[", "]")
    if text_end is None or text_end >= len(text) or text[text_end] != "(":
        return None
    url_end = _skip_balanced(text, text_end + 1, "(", ")")
    if url_end is None:
        return None
    return text_end, url_end


def _find_footnote_ref(text: str, start: int) -> Optional[int]:
    if start + 2 >= len(text) or text[start] != "[" or text[start + 1] != "^":
        return None
    for pos in range(start + 2, len(text)):
        ch = text[pos]
        if ch == "]":
            return pos + 1
        if not ch.isalnum() and ch not in "-_":
            return None
    return None


def _is_autolink_start(text: str, pos: int) -> bool:
    return text.startswith("http://", pos) or text.startswith("https://", pos)


def _find_autolink_end(text: str, start: int) -> Optional[int]:
    pos = start
    while pos < len(text):
        ch = text[pos]
        if ch.isspace() or ch in _AUTOLINK_STOP:
            break
        pos += 1
    while pos > start and text[pos - 1] in _AUTOLINK_TRAILING:
        pos -= 1
    return pos if pos > start + 7 else None


def _tokenize_inline(text: str, offset: int) -> list[Token]:
    tokens: list[Token] = []

    def add(token_type: TokenType, start: int, end: int) -> None:
        tokens.append(Token(token_type, offset + start, offset + end))

    delimited = (
        ("***", TokenType.BOLD_ITALIC),
        ("**", TokenType.BOLD),
        ("__", TokenType.BOLD),
        ("~~", TokenType.STRIKETHROUGH),
        ("*", TokenType.ITALIC),
        ("_", TokenType.ITALIC),
    )

    pos = 0
    while pos < len(text):
        ch = text[pos]

        if ch == "\\" and pos + 1 < len(text):
            add(TokenType.ESCAPE, pos, pos + 2)
            pos += 2
            continue

        if ch == "`":
            end = _find_inline_code(text, pos)
            if end is not None:
                add(TokenType.INLINE_CODE, pos, end)
                pos = end
                continue

        matched = False
        for marker, token_type in delimited:
            if text.startswith(marker, pos):
                end = _find_closing(text, pos + len(marker), marker)
                if end is not None:
                    add(token_type, pos, end)
                    pos = end
                    matched = True
                    break
        if matched:
            continue

        if ch == "!" and text.startswith("[", pos + 1):
            link = _find_link(text, pos + 1)
            if link is not None:
                alt_end, url_end = link
                add(TokenType.IMAGE_ALT, pos, alt_end)
                add(TokenType.IMAGE_URL, alt_end, url_end)
                pos = url_end
                continue

        if ch == "[":
            link = _find_link(text, pos)
            if link is not None:
                text_end, url_end = link
                add(TokenType.LINK_TEXT, pos, text_end)
                add(TokenType.LINK_URL, text_end, url_end)
                pos = url_end
                continue
            if text.startswith("^", pos + 1):
                end = _find_footnote_ref(text, pos)
                if end is not None:
                    add(TokenType.FOOTNOTE_REFERENCE, pos, end)
                    pos = end
                    continue

        if _is_autolink_start(text, pos):
            end = _find_autolink_end(text, pos)
            if end is not None:
                add(TokenType.AUTOLINK, pos, end)
                pos = end
                continue

        pos += 1

    return tokens


def _tokenize(line: str, state: LineState) -> tuple[list[Token], LineState]:
    trimmed = line.lstrip()
    leading = len(line) - len(trimmed)
    whole = len(line)

    if state.kind is LineStateKind.IN_CODE_BLOCK:
        fence = state.fence_char * state.fence_count
        if trimmed.startswith(fence) and trimmed.strip() == fence.strip():
            return [Token(TokenType.CODE_BLOCK_DELIMITER, 0, whole)], LineState.normal()
        return [Token(TokenType.CODE_BLOCK_CONTENT, 0, whole)], state

    if state.kind is LineStateKind.IN_FRONTMATTER:
        end_state = LineState.normal() if trimmed == "---" else state
        return [Token(TokenType.FRONTMATTER, 0, whole)], end_state

    if line == "---":
        return [Token(TokenType.FRONTMATTER, 0, whole)], LineState.in_frontmatter()

    fence = _parse_code_fence(trimmed)
    if fence is not None:
        tokens = [Token(TokenType.CODE_BLOCK_DELIMITER, 0, leading + 3)]
        if fence.language:
            lang_start = line.find(fence.language)
            if lang_start < 0:
                lang_start = leading + 3
            tokens.append(
                Token(
                    TokenType.CODE_BLOCK_LANGUAGE,
                    lang_start,
                    lang_start + len(fence.language),
                )
            )
        return tokens, LineState.in_code_block(fence.char, fence.count)

    heading = _parse_heading(trimmed)
    if heading is not None:
        level, content_start = heading
        token_type = _HEADING_TYPES.get(level, TokenType.HEADING6)
        tokens = [Token(token_type, 0, whole)]
        tokens.extend(_tokenize_inline(trimmed[content_start:], leading + content_start))
        return tokens, LineState.normal()

    if _is_horizontal_rule(trimmed):
        return [Token(TokenType.HORIZONTAL_RULE, 0, whole)], LineState.normal()

    if trimmed.startswith(">"):
        tokens = [Token(TokenType.BLOCKQUOTE, leading, leading + 1)]
        content_start = 2 if len(trimmed) > 1 and trimmed[1] == " " else 1
        tokens.extend(_tokenize_inline(trimmed[content_start:], leading + content_start))
        return tokens, LineState.normal()

    bullet = _parse_unordered_list(trimmed)
    if bullet is not None:
        marker_end, is_task, is_checked = bullet
        if is_task:
            token_type = (
                TokenType.TASK_LIST_CHECKED if is_checked else TokenType.TASK_LIST_UNCHECKED
            )
        else:
            token_type = TokenType.UNORDERED_LIST_MARKER
        tokens = [Token(token_type, leading, leading + marker_end)]
        tokens.extend(_tokenize_inline(trimmed[marker_end:], leading + marker_end))
        return tokens, LineState.normal()

    marker_end = _parse_ordered_list(trimmed)
    if marker_end is not None:
        tokens = [Token(TokenType.ORDERED_LIST_MARKER, leading, leading + marker_end)]
        tokens.extend(_tokenize_inline(trimmed[marker_end:], leading + marker_end))
        return tokens, LineState.normal()

    if "|" in trimmed and _is_table_row(trimmed):
        return [Token(TokenType.TABLE_DELIMITER, 0, whole)], LineState.normal()

    inline = _tokenize_inline(line, 0)
    if not inline and line:
        return [Token(TokenType.PLAIN_TEXT, 0, whole)], LineState.normal()
    return inline, LineState.normal()


class MarkdownTokenizer:
    """Tokenizes Markdown line by line, caching results per line number."""

    def __init__(self) -> None:
        self._line_cache: dict[int, LineTokens] = {}

    def clear_cache(self) -> None:
        """Forget every cached line."""
        self._line_cache.clear()

    def invalidate_from_line(self, line_num: int) -> None:
        """Forget the cached tokens of ``line_num`` and every later line."""
        self._line_cache = {k: v for k, v in self._line_cache.items() if k < line_num}

    def tokenize_line(self, line_num: int, content: str, start_state: LineState) -> LineTokens:
        """Tokenize one line, reusing the cached result when its content is unchanged."""
        content_hash = hash(content)
        cached = self._line_cache.get(line_num)
        if cached is not None and cached.content_hash == content_hash:
            return cached
        tokens, end_state = _tokenize(content, start_state)
        line_tokens = LineTokens(tokens, end_state, content_hash)
        self._line_cache[line_num] = line_tokens
        return line_tokens

    def tokenize_document(self, lines: Sequence[str]) -> list[LineTokens]:
        """Tokenize every line, carrying state from each line to the next."""
        result: list[LineTokens] = []
        state = LineState.normal()
        for line_num, line in enumerate(lines):
            line_tokens = self.tokenize_line(line_num, line, state)
            state = line_tokens.end_state
            result.append(
                LineTokens(list(line_tokens.tokens), line_tokens.end_state, line_tokens.content_hash)
            )
        return result