"""Tests for the HTML presentation step."""

from inkwell.adapters.html_renderer import HtmlRenderer
from inkwell.adapters.markdown_parser import render


def test_heading_with_anchor():
    html = HtmlRenderer().render_html(render("## Sub Heading"))
    assert html == '<h2 id="sub-heading">Sub Heading</h2>'


def test_heading_without_anchor():
    html = HtmlRenderer(anchor_ids=False).render_html(render("# Title"))
    assert html == "<h1>Title</h1>"


def test_heading_anchor_matches_toc_id():
    html = HtmlRenderer().render_html(render("# **Bold** Move"))
    assert '<h1 id="bold-move">' in html


def test_unique_heading_anchors():
    html = HtmlRenderer(unique_ids=True).render_html(render("# A\n# A"))
    assert html.split("\n") == ['<h1 id="a">A</h1>', '<h1 id="a-2">A</h1>']


def test_list_items_grouped():
    html = HtmlRenderer().render_html(render("- a\n- b\n1. c\ntext"))
    assert html.split("\n") == [
        "<ul>",
        "<li>a</li>",
        "<li>b</li>",
        "</ul>",
        "<ol>",
        "<li>c</li>",
        "</ol>",
        "<p>text</p>",
    ]


def test_list_closed_at_end():
    html = HtmlRenderer().render_html(render("* last"))
    assert html == "<ul>\n<li>last</li>\n</ul>"


def test_code_block():
    html = HtmlRenderer().render_html(render("```js\nif (a < b) {}\n```"))
    assert html == (
        '<figure class="code-block"><figcaption>js</figcaption>'
        '<pre><code class="language-js">if (a &lt; b) {}</code></pre></figure>'
    )


def test_code_block_without_language():
    html = HtmlRenderer().render_html(render("```\nx\ny\n```"))
    assert "<figcaption>code</figcaption>" in html
    assert "<pre><code>x\ny</code></pre>" in html


def test_paragraph_emphasis_and_escaping():
    html = HtmlRenderer().render_html(render("**<b>** & more"))
    assert html == "<p><strong>&lt;b&gt;</strong> &amp; more</p>"


def test_spacer():
    html = HtmlRenderer().render_html(render("a\n\nb"))
    assert html.split("\n") == ["<p>a</p>", '<div class="spacer"></div>', "<p>b</p>"]


def test_empty_blocks():
    assert HtmlRenderer().render_html([]) == ""


def test_heading_anchor_non_ascii():
    assert HtmlRenderer().render_html(render("# Café")) == '<h1 id="caf">Café</h1>'
    folded = HtmlRenderer(fold_unicode=True).render_html(render("# Café"))
    assert folded == '<h1 id="cafe">Café</h1>'
