import pytest

from notebookmd.styles import Color, SyntaxColorScheme, TokenStyle, TokenType


def test_from_rgb_is_opaque():
    c = Color.from_rgb(0.2, 0.4, 0.6)
    assert (c.r, c.g, c.b, c.a) == (0.2, 0.4, 0.6, 1.0)


def test_from_rgba_keeps_alpha():
    c = Color.from_rgba(0.1, 0.2, 0.3, 0.5)
    assert c.a == 0.5
    assert c == Color(0.1, 0.2, 0.3, 0.5)


def test_black_matches_from_rgb_zero():
    assert Color.from_rgb(0.0, 0.0, 0.0) == Color.BLACK


def test_default_token_style():
    style = TokenStyle()
    assert style.foreground == Color.BLACK
    assert style.background is None
    assert not (style.bold or style.italic or style.underline or style.strikethrough)


@pytest.mark.parametrize(
    "factory, name, dark",
    [(SyntaxColorScheme.light, "Light", False), (SyntaxColorScheme.dark, "Dark", True)],
)
def test_scheme_identity(factory, name, dark):
    scheme = factory()
    assert scheme.name == name
    assert scheme.is_dark is dark


@pytest.mark.parametrize("factory", [SyntaxColorScheme.light, SyntaxColorScheme.dark])
def test_heading_boldness(factory):
    scheme = factory()
    bold = [scheme.get_style(t).bold for t in (
        TokenType.HEADING1, TokenType.HEADING2, TokenType.HEADING3,
        TokenType.HEADING4, TokenType.HEADING5, TokenType.HEADING6,
    )]
    assert bold == [True, True, True, False, False, False]


def test_light_heading_color():
    scheme = SyntaxColorScheme.light()
    assert scheme.get_style(TokenType.HEADING1).foreground == Color.from_rgb(0.0, 0.0, 0.55)


def test_dark_heading_color():
    scheme = SyntaxColorScheme.dark()
    assert scheme.get_style(TokenType.HEADING2).foreground == Color.from_rgb(0.4, 0.7, 1.0)


@pytest.mark.parametrize("factory", [SyntaxColorScheme.light, SyntaxColorScheme.dark])
def test_emphasis_flags(factory):
    scheme = factory()
    assert scheme.get_style(TokenType.ITALIC).italic
    assert scheme.get_style(TokenType.BOLD).bold
    bi = scheme.get_style(TokenType.BOLD_ITALIC)
    assert bi.bold and bi.italic
    assert scheme.get_style(TokenType.STRIKETHROUGH).strikethrough
    assert scheme.get_style(TokenType.LINK_TEXT).underline
    assert scheme.get_style(TokenType.AUTOLINK).underline


@pytest.mark.parametrize("factory", [SyntaxColorScheme.light, SyntaxColorScheme.dark])
def test_code_shares_background(factory):
    scheme = factory()
    inline = scheme.get_style(TokenType.INLINE_CODE)
    block = scheme.get_style(TokenType.CODE_BLOCK_CONTENT)
    assert inline.background == block.background
    assert inline.background is not None
    assert scheme.get_style(TokenType.CODE_BLOCK_DELIMITER).background is None


def test_light_plain_text_is_default():
    assert SyntaxColorScheme.light().get_style(TokenType.PLAIN_TEXT) == TokenStyle()


def test_dark_plain_text_color():
    style = SyntaxColorScheme.dark().get_style(TokenType.PLAIN_TEXT)
    assert style.foreground == Color.from_rgb(0.9, 0.9, 0.9)


@pytest.mark.parametrize("factory", [SyntaxColorScheme.light, SyntaxColorScheme.dark])
def test_missing_token_gives_default(factory):
    scheme = factory()
    assert TokenType.TABLE_CELL not in scheme.styles
    assert scheme.get_style(TokenType.TABLE_CELL) == TokenStyle()


@pytest.mark.parametrize("factory", [SyntaxColorScheme.light, SyntaxColorScheme.dark])
def test_only_table_cell_unstyled(factory):
    scheme = factory()
    missing = set(TokenType) - set(scheme.styles)
    assert missing == {TokenType.TABLE_CELL}


def test_get_style_returns_copy():
    scheme = SyntaxColorScheme.light()
    style = scheme.get_style(TokenType.BOLD)
    style.bold = False
    assert scheme.get_style(TokenType.BOLD).bold is True


def test_list_markers_share_accent():
    scheme = SyntaxColorScheme.dark()
    ul = scheme.get_style(TokenType.UNORDERED_LIST_MARKER)
    ol = scheme.get_style(TokenType.ORDERED_LIST_MARKER)
    assert ul == ol
    assert ul.foreground == Color.from_rgb(1.0, 0.6, 0.2)