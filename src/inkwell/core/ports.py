from typing import Any, Protocol, Sequence

from .model import Block, TocEntry


class BlockParser(Protocol):
    """
    Turn raw Markdown into an ordered sequence of block nodes.
    Total: never raises, malformed input degrades to paragraphs.
    """

    def parse(self, text: str) -> list[Block]:
        pass


class TocExtractor(Protocol):
    """
    Turn raw Markdown into heading records, skipping the metadata block
    and fenced code.
    """

    def extract(self, text: str) -> list[TocEntry]:
        pass


class FrontmatterCodec(Protocol):
    """
    Split an optional leading metadata block from the body without
    enforcing any schema.
    """

    def decode(self, text: str) -> tuple[dict[str, Any], str]:
        pass


class Renderer(Protocol):
    def render_html(self, blocks: Sequence[Block]) -> str:
        pass
