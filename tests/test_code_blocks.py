from bs4 import BeautifulSoup
import pytest

from linesmith import UnknownLanguageError, highlight_html, highlight_tree


def _lines(html: str) -> list:
    return BeautifulSoup(html, "html.parser").find_all("span", class_="code-line")


def test_empty_code_block() -> None:
    result = highlight_html('<pre><code class="language-py"></code></pre>')

    assert result == '<pre><code class="language-py code-highlight"></code></pre>'


def test_code_block_without_language() -> None:
    result = highlight_html("<pre><code>x = 6</code></pre>")

    assert result == '<pre><code class="code-highlight"><span class="code-line">x = 6</span></code></pre>'


def test_inline_code_is_left_alone() -> None:
    html = '<p>Use <code class="language-py">x = 6</code> here.</p>'

    assert highlight_html(html) == html


def test_pre_without_code_is_left_alone() -> None:
    html = "<pre>x = 6</pre>"

    assert highlight_html(html) == html


def test_highlighted_tokens_are_wrapped_per_line() -> None:
    result = highlight_html('<pre><code class="language-py">x = 6\ny = 7</code></pre>')
    lines = _lines(result)

    assert [line.get_text() for line in lines] == ["x = 6\n", "y = 7"]
    operator = lines[0].find("span", class_="operator")
    assert operator["class"] == ["token", "operator"]
    assert operator.get_text() == "="


def test_empty_lines_are_kept() -> None:
    result = highlight_html("<pre><code>x\n\ny\n</code></pre>")

    assert [line.get_text() for line in _lines(result)] == ["x\n", "\n", "y\n", ""]


def test_multiline_token_is_reopened_on_each_line() -> None:
    source = "/**\n * Doc\n */\nconst a = 1;"
    result = highlight_html(f'<pre><code class="language-js">{source}</code></pre>')
    lines = _lines(result)

    assert len(lines) == 4
    comments = [line.find("span") for line in lines[:3]]
    assert all("comment" in comment["class"] for comment in comments)
    assert [comment.get_text() for comment in comments] == ["/**\n", " * Doc\n", " */"]
    assert "".join(line.get_text() for line in lines) == source


def test_meta_highlights_lines_and_numbers_them() -> None:
    html = (
        '<pre><code class="language-py" data-meta="{1,3} showLineNumbers">'
        "a = 1\nb = 2\nc = 3</code></pre>"
    )
    lines = _lines(highlight_html(html))

    assert [line["class"] for line in lines] == [
        ["code-line", "highlight-line"],
        ["code-line"],
        ["code-line", "highlight-line"],
    ]
    assert [line["line"] for line in lines] == ["1", "2", "3"]


def test_meta_attribute_is_removed() -> None:
    result = highlight_html('<pre><code data-meta="{1}">x</code></pre>')

    assert "data-meta" not in result
    assert result == (
        '<pre><code class="code-highlight"><span class="code-line highlight-line">x</span></code></pre>'
    )


def test_line_numbers_can_start_elsewhere() -> None:
    html = '<pre><code data-meta="showLineNumbers=10">a\nb</code></pre>'

    assert [line["line"] for line in _lines(highlight_html(html))] == ["10", "11"]


def test_line_numbers_without_meta_keyword() -> None:
    lines = _lines(highlight_html("<pre><code>a\nb</code></pre>"))

    assert all(not line.has_attr("line") for line in lines)


def test_global_line_numbers_option() -> None:
    lines = _lines(highlight_html("<pre><code>a\nb</code></pre>", showLineNumbers=True))

    assert [line["line"] for line in lines] == ["1", "2"]


def test_unknown_language_raises() -> None:
    with pytest.raises(UnknownLanguageError, match="Unknown language: thisisnotalanguage"):
        highlight_html('<pre><code class="language-thisisnotalanguage">x = 6</code></pre>')


def test_unknown_language_can_be_ignored() -> None:
    result = highlight_html(
        '<pre><code class="language-thisisnotalanguage">x = 6</code></pre>',
        {"ignoreMissing": True},
    )

    assert result == (
        '<pre><code class="language-thisisnotalanguage code-highlight">'
        '<span class="code-line">x = 6</span></code></pre>'
    )


def test_every_block_of_a_document_is_processed() -> None:
    soup = BeautifulSoup(
        '<h1>Title</h1><pre><code class="language-py">a</code></pre>'
        '<div><pre><code>b\nc</code></pre></div>',
        "html.parser",
    )

    state = highlight_tree(soup)

    assert state.highlighted_blocks == 2
    assert [report.lines for report in state.reports] == [1, 2]
    assert len(soup.find_all("code", class_="code-highlight")) == 2


def test_escaped_characters_survive() -> None:
    result = highlight_html("<pre><code>if a &lt; b &amp;&amp; c:</code></pre>")

    assert "if a &lt; b &amp;&amp; c:" in result


def test_indentation_survives_tokenising() -> None:
    source = "def f():\n    return 1"
    lines = _lines(highlight_html(f'<pre><code class="language-py">{source}</code></pre>'))

    assert [line.get_text() for line in lines] == ["def f():\n", "    return 1"]


def test_blank_lines_survive_tokenising() -> None:
    result = highlight_html('<pre><code class="language-py">x\n\ny\n</code></pre>')
    lines = _lines(result)

    assert len(lines) == 4
    assert lines[1].get_text() == "\n"


@pytest.mark.parametrize(
    "language",
    ["py", "js", "c", "ruby", "bash", "rust", "sql", "abap", "actionscript", "lua"],
)
def test_text_is_reconstructed_exactly(language: str) -> None:
    source = 'x = 1\n\tfoo("a")  # c\n\n  end\n'
    result = highlight_html(f'<pre><code class="language-{language}">{source}</code></pre>')

    code = BeautifulSoup(result, "html.parser").code
    assert code.get_text() == source
    assert len(_lines(result)) == source.count("\n") + 1


def test_inline_code_keeps_its_meta_attribute() -> None:
    html = '<p><code data-meta="{1}">x</code></p>'

    assert highlight_html(html) == html
