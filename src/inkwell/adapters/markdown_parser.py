import re

import structlog

from ..core.fence import FenceTracker, is_fence_delimiter
from ..core.model import (
    Block,
    Emphasized,
    Heading,
    InlineSpan,
    ListItem,
    Paragraph,
    Plain,
    Spacer,
)
from ..core.ports import BlockParser

log = structlog.get_logger()

HEADING_PREFIXES = (("# ", 1), ("## ", 2), ("### ", 3))
BULLET_PREFIXES = ("- ", "* ")
ORDERED_RE = re.compile(r"^[0-9]+\. ")
EMPHASIS_DELIMITER = "**"


def split_emphasis(line: str) -> tuple[InlineSpan, ...]:
    """
    Split a paragraph line on `**` into alternating plain/emphasized spans.

    Pieces at odd positions are emphasized whether or not a closing
    delimiter exists. Empty pieces are dropped but keep their position.
    """
    spans: list[InlineSpan] = []
    for i, part in enumerate(line.split(EMPHASIS_DELIMITER)):
        if not part:
            continue
        spans.append(Emphasized(part) if i % 2 == 1 else Plain(part))
    return tuple(spans)


def _classify(line: str) -> Block:
    # Prefixes are tested on the raw line; only the blank check trims.
    for prefix, level in HEADING_PREFIXES:
        if line.startswith(prefix):
            return Heading(level=level, text=line[len(prefix):])

    if line.startswith(BULLET_PREFIXES):
        return ListItem(ordered=False, text=line[2:])

    ordered = ORDERED_RE.match(line)
    if ordered:
        return ListItem(ordered=True, text=line[ordered.end():])

    if line.strip() == "":
        return Spacer()

    return Paragraph(spans=split_emphasis(line))


class MarkdownParser(BlockParser):
    """
    Single forward pass over lines producing block nodes in line order.

    With `flush_unclosed_fence` a fence still open at end of input is emitted
    as a best-effort CodeBlock; by default its content is dropped.
    """

    def __init__(self, flush_unclosed_fence: bool = False):
        self.flush_unclosed_fence = flush_unclosed_fence

    def parse(self, text: str) -> list[Block]:
        blocks: list[Block] = []
        fence = FenceTracker()

        for line in text.split("\n"):
            if is_fence_delimiter(line):
                code = fence.toggle(line)
                if code is not None:
                    blocks.append(code)
                continue

            if fence.inside:
                fence.append(line)
                continue

            blocks.append(_classify(line))

        pending = fence.pending()
        if pending is not None:
            if self.flush_unclosed_fence:
                log.debug("unclosed_fence_flushed", language=pending.language, lines=len(pending.lines))
                blocks.append(pending)
            else:
                log.debug("unclosed_fence_dropped", language=pending.language, lines=len(pending.lines))

        return blocks


def render(text: str) -> list[Block]:
    """Parse Markdown into block nodes with the default policy."""
    return MarkdownParser().parse(text)
