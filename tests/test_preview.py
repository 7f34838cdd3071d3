from pathlib import Path

from notebookmd.preview import (
    Blockquote,
    CodeBlock,
    FootnoteDefinition,
    Heading,
    HorizontalRule,
    Html,
    Image,
    OrderedList,
    Paragraph,
    PreviewRenderer,
    StyledText,
    Table,
    TableAlignment,
    UnorderedList,
    ViewMode,
)


def text_of(runs):
    return "".join(run.text for run in runs)


def test_preview_render():
    elements = PreviewRenderer().render("# Hello\n\nThis is **bold** text.")
    assert elements
    assert isinstance(elements[0], Heading)
    assert elements[0].level == 1
    assert text_of(elements[0].content) == "Hello"


def test_bold_run_is_separate():
    elements = PreviewRenderer().render("This is **bold** text.")
    para = elements[0]
    assert isinstance(para, Paragraph)
    assert text_of(para.content) == "This is bold text."
    bold = [run.text for run in para.content if run.bold]
    assert bold == ["bold"]


def test_fenced_code_block_language():
    elements = PreviewRenderer().render("```rust\nlet x = 1;\n```\n")
    assert elements == [CodeBlock(language="rust", code="let x = 1;\n")]


def test_indented_code_block_has_no_language():
    elements = PreviewRenderer().render("    code here\n")
    assert isinstance(elements[0], CodeBlock)
    assert elements[0].language is None
    assert elements[0].code.startswith("code here")


def test_ordered_list_start():
    elements = PreviewRenderer().render("3. a\n4. b\n")
    lst = elements[0]
    assert isinstance(lst, OrderedList)
    assert lst.start == 3
    assert [text_of(item.content[0].content) for item in lst.items] == ["a", "b"]


def test_unordered_list_items():
    elements = PreviewRenderer().render("- one\n- two\n")
    lst = elements[0]
    assert isinstance(lst, UnorderedList)
    assert [text_of(item.content[0].content) for item in lst.items] == ["one", "two"]


def test_task_list_items_become_list_items():
    elements = PreviewRenderer().render("- [x] done\n- [ ] todo\n")
    lst = elements[0]
    assert isinstance(lst, UnorderedList)
    assert [text_of(item.content[0].content) for item in lst.items] == ["done", "todo"]


def test_table():
    md = "| a | b |\n|:--|--:|\n| 1 | 2 |\n"
    table = PreviewRenderer().render(md)[0]
    assert isinstance(table, Table)
    assert [text_of(cell) for cell in table.headers] == ["a", "b"]
    assert [[text_of(cell) for cell in row] for row in table.rows] == [["1", "2"]]
    assert table.alignments == [TableAlignment.LEFT, TableAlignment.RIGHT]


def test_blockquote():
    elements = PreviewRenderer().render("> quote\n")
    quote = elements[0]
    assert isinstance(quote, Blockquote)
    assert text_of(quote.children[0].content) == "quote"


def test_horizontal_rule():
    elements = PreviewRenderer().render("before\n\n***\n\nafter\n")
    assert any(isinstance(e, HorizontalRule) for e in elements)
    assert len(elements) == 3


def test_link_sets_url_on_text():
    para = PreviewRenderer().render("[site](http://example.com)")[0]
    assert para.content == [StyledText("site", link="http://example.com")]


def test_inline_code_keeps_bold():
    para = PreviewRenderer().render("**`c`**")[0]
    assert para.content == [StyledText("c", bold=True, code=True)]


def test_strikethrough():
    para = PreviewRenderer().render("~~gone~~")[0]
    assert para.content == [StyledText("gone", strikethrough=True)]


def test_image_element():
    elements = PreviewRenderer().render('![alt text](pic.png "T")')
    assert elements == [Image(alt="alt text", url="pic.png", title="T")]


def test_block_html():
    elements = PreviewRenderer().render("<div>hi</div>\n")
    assert isinstance(elements[0], Html)
    assert elements[0].html.startswith("<div>hi</div>")


def test_footnotes():
    elements = PreviewRenderer().render("Text[^1]\n\n[^1]: Note.\n")
    assert text_of(elements[0].content) == "Text[^1]"
    note = elements[-1]
    assert isinstance(note, FootnoteDefinition)
    assert note.label == "1"
    assert text_of(note.content[0].content) == "Note."


def test_soft_break_becomes_space():
    para = PreviewRenderer().render("a\nb")[0]
    assert text_of(para.content) == "a b"


def test_smart_punctuation():
    para = PreviewRenderer().render('He said "hi" -- ok... don\'t')[0]
    assert text_of(para.content) == "He said \u201chi\u201d \u2013 ok\u2026 don\u2019t"


def test_resolve_url_absolute_unchanged():
    renderer = PreviewRenderer(base_path="/nowhere")
    assert renderer.resolve_url("https://example.com/a.png") == "https://example.com/a.png"
    assert renderer.resolve_url("data:image/png;base64,AA") == "data:image/png;base64,AA"


def test_resolve_url_existing_file(tmp_path: Path):
    (tmp_path / "pic.png").write_bytes(b"x")
    renderer = PreviewRenderer(base_path=tmp_path)
    assert renderer.resolve_url("pic.png") == f"file://{tmp_path / 'pic.png'}"
    assert renderer.resolve_url("missing.png") == "missing.png"


def test_resolve_url_without_base():
    assert PreviewRenderer().resolve_url("pic.png") == "pic.png"


def test_view_mode_toggles():
    assert ViewMode.EDIT.toggle_preview() is ViewMode.PREVIEW
    assert ViewMode.PREVIEW.toggle_preview() is ViewMode.EDIT
    assert ViewMode.SPLIT.toggle_preview() is ViewMode.EDIT
    assert ViewMode.SPLIT.toggle_split() is ViewMode.EDIT
    assert ViewMode.EDIT.toggle_split() is ViewMode.SPLIT
    assert ViewMode.PREVIEW.toggle_split() is ViewMode.SPLIT


def test_view_mode_visibility():
    assert ViewMode.SPLIT.shows_preview() and ViewMode.SPLIT.shows_editor()
    assert ViewMode.EDIT.shows_editor() and not ViewMode.EDIT.shows_preview()
    assert ViewMode.PREVIEW.shows_preview() and not ViewMode.PREVIEW.shows_editor()


def test_styled_text_plain():
    run = StyledText.plain("x")
    assert (run.text, run.bold, run.italic, run.strikethrough, run.code, run.link) == (
        "x",
        False,
        False,
        False,
        False,
        None,
    )