"""HTML presentation step for parsed block nodes."""

from html import escape
from typing import Sequence

from ..core.model import (
    Block,
    CodeBlock,
    Emphasized,
    Heading,
    InlineSpan,
    ListItem,
    Paragraph,
    Spacer,
)
from ..core.ports import Renderer
from ..core.utils import SlugRegistry, slugify


def _render_spans(spans: Sequence[InlineSpan]) -> str:
    parts = []
    for span in spans:
        if isinstance(span, Emphasized):
            parts.append(f"<strong>{escape(span.text)}</strong>")
        else:
            parts.append(escape(span.text))
    return "".join(parts)


def _render_code(block: CodeBlock) -> str:
    language = block.language.strip()
    code_attr = f' class="language-{escape(language)}"' if language else ""
    body = escape("\n".join(block.lines))
    return (
        '<figure class="code-block">'
        f"<figcaption>{escape(language or 'code')}</figcaption>"
        f"<pre><code{code_attr}>{body}</code></pre>"
        "</figure>"
    )


class HtmlRenderer(Renderer):
    """
    Map block nodes to HTML fragments, one per line.

    Consecutive list items of the same kind share one `<ul>`/`<ol>`.
    Heading ids are slugs of the heading text so TOC anchors resolve;
    with `unique_ids` repeated slugs get the same suffixes the TOC uses.
    `fold_unicode` must match the TOC setting for the same reason.
    """

    def __init__(
        self,
        anchor_ids: bool = True,
        unique_ids: bool = False,
        fold_unicode: bool = False,
    ):
        self.anchor_ids = anchor_ids
        self.unique_ids = unique_ids
        self.fold_unicode = fold_unicode

    def render_html(self, blocks: Sequence[Block]) -> str:
        out: list[str] = []
        open_list: str | None = None
        registry = SlugRegistry() if self.unique_ids else None

        for block in blocks:
            list_tag = None
            if isinstance(block, ListItem):
                list_tag = "ol" if block.ordered else "ul"

            if open_list and open_list != list_tag:
                out.append(f"</{open_list}>")
                open_list = None
            if list_tag and open_list is None:
                out.append(f"<{list_tag}>")
                open_list = list_tag

            if isinstance(block, Heading):
                out.append(self._render_heading(block, registry))
            elif isinstance(block, ListItem):
                out.append(f"<li>{escape(block.text)}</li>")
            elif isinstance(block, CodeBlock):
                out.append(_render_code(block))
            elif isinstance(block, Spacer):
                out.append('<div class="spacer"></div>')
            elif isinstance(block, Paragraph):
                out.append(f"<p>{_render_spans(block.spans)}</p>")

        if open_list:
            out.append(f"</{open_list}>")

        return "\n".join(out)

    def _render_heading(self, block: Heading, registry: SlugRegistry | None) -> str:
        tag = f"h{block.level}"
        text = escape(block.text)
        if not self.anchor_ids:
            return f"<{tag}>{text}</{tag}>"

        slug = slugify(block.text, fold_unicode=self.fold_unicode)
        if not slug:
            return f"<{tag}>{text}</{tag}>"
        if registry is not None:
            slug = registry.claim(slug)
        return f'<{tag} id="{slug}">{text}</{tag}>'
