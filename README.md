# notebookmd

This package supplies the Markdown pieces of a small notebook-style editor. It has three modules.

- **`notebookmd.tokenizer`** splits Markdown into tokens one line at a time so that the text can be highlighted. `MarkdownTokenizer` recognises the following:
  - headings
  - bold, italic and bold-italic text
  - strikethrough
  - inline code
  - fenced code blocks, including the language tag
  - blockquotes
  - bullet lists, numbered lists and task lists
  - horizontal rules
  - table rows
  - links, images, footnote references and bare `http(s)://` links
  - escapes
  - `---` frontmatter

  Token offsets count characters within the line. The tokenizer passes a `LineState` from each line to the next, so it keeps track of code blocks and frontmatter across lines. It caches results by line number.
- **`notebookmd.styles`** defines `TokenType`, `Color`, `TokenStyle` and `SyntaxColorScheme`. `SyntaxColorScheme` comes in a `light()` and a `dark()` variant. `get_style(token_type)` returns a copy of the style for a token type. If the scheme has no entry for that type, it returns the default style.
- **`notebookmd.preview`** defines `PreviewRenderer`. It parses Markdown with mistune, using the table, footnote, strikethrough and task-list plugins. The result is a list of preview elements such as `Paragraph`, `Heading`, `CodeBlock`, `Blockquote`, `UnorderedList`, `OrderedList`, `Table`, `HorizontalRule`, `Image`, `Html` and `FootnoteDefinition`.
  - Inline text arrives as `StyledText` runs. Each run carries bold, italic, strikethrough, code and link attributes.
  - Typographic quotes, dashes and ellipses are applied to the text.
  - `ViewMode` describes which panes are visible: edit, preview or split. It also has methods for switching between the modes.

## Installation

```
pip install notebookmd
```

## Usage

```python
from notebookmd.tokenizer import MarkdownTokenizer, LineState
from notebookmd.styles import SyntaxColorScheme, TokenType
from notebookmd.preview import PreviewRenderer, Heading, ViewMode

tokenizer = MarkdownTokenizer()
lines = ["# Title", "Some **bold** text", "```python", "x = 1", "```"]
for line_tokens in tokenizer.tokenize_document(lines):
    print([t.token_type for t in line_tokens.tokens], line_tokens.end_state.kind)

# After editing line 3, drop the cached tokens from that line onward.
tokenizer.invalidate_from_line(3)

single = tokenizer.tokenize_line(0, "- [x] done", LineState.normal())
assert single.tokens[0].token_type is TokenType.TASK_LIST_CHECKED

scheme = SyntaxColorScheme.dark()
style = scheme.get_style(TokenType.HEADING1)
print(style.foreground, style.bold)

renderer = PreviewRenderer(base_path="docs")
elements = renderer.render("# Hello\n\nThis is *markdown*.")
assert isinstance(elements[0], Heading) and elements[0].level == 1
print(renderer.resolve_url("images/logo.png"))

mode = ViewMode.EDIT.toggle_split()
print(mode, mode.shows_preview(), mode.shows_editor())
```

`tokenize_line` returns the cached result for a line number whenever the content of that line has not changed. If the state of an earlier line changes, call `invalidate_from_line` or `clear_cache` so that the later lines are tokenized again.

`resolve_url` leaves `http://`, `https://` and `data:` URLs as they are. A relative URL becomes a `file://` URL when it points to an existing file under the base path. Any other URL is returned unchanged.

## What this package does not do

This package contains no editor window and no command-line program. It does not export HTML pages or write files. It does not read files from disk, detect their encodings or save them. It only tokenizes Markdown, provides colour schemes and builds preview element trees in memory.

## Running the tests

```
pip install -e ".[test]"
pytest
```