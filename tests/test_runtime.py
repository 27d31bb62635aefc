"""Tests for runtime wiring."""

from inkwell.config import InkwellConfig
from inkwell.core.model import CodeBlock
from inkwell.runtime import build_runtime


def test_policies_follow_config():
    config = InkwellConfig()
    config.render.flush_unclosed_fence = True
    config.toc.unique_ids = True
    config.toc.fold_unicode = True
    config.html.anchor_ids = False

    rt = build_runtime(config=config)

    assert rt.parser.parse("```\nx") == [CodeBlock(language="", lines=("x",))]
    assert [h.id for h in rt.extractor.extract("# A\n# A")] == ["a", "a-2"]
    assert rt.extractor.extract("# Café")[0].id == "cafe"
    assert rt.renderer.render_html(rt.parser.parse("# A")) == "<h1>A</h1>"
    assert rt.renderer.fold_unicode is True


def test_preview_without_metadata(runtime):
    preview = runtime.preview("# Hello\n\nShort post.")
    assert preview["meta"] == {}
    assert preview["excerpt"] == "# Hello\n\nShort post."
    assert preview["headings"] == [{"id": "hello", "text": "Hello", "level": 1}]
    assert preview["html"].startswith('<h1 id="hello">Hello</h1>')


def test_preview_custom_summary_settings():
    config = InkwellConfig()
    config.preview.excerpt_length = 5
    config.preview.words_per_minute = 1

    preview = build_runtime(config=config).preview("one two three")

    assert preview["excerpt"] == "one t..."
    assert preview["reading_time"] == "3 min read"
