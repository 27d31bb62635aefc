"""Runtime wiring helper for the CLI, API and watcher."""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

from .adapters.heading_extractor import HeadingExtractor
from .adapters.html_renderer import HtmlRenderer
from .adapters.markdown_parser import MarkdownParser
from .adapters.yaml_codec import YamlFrontmatter
from .config import InkwellConfig, load_config
from .core.model import to_dict
from .core.summary import excerpt, reading_time


def setup_logging(config: InkwellConfig) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[config.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if config.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # stdout carries command output
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


@dataclass
class Runtime:
    """Container for all wired components."""
    config: InkwellConfig
    parser: MarkdownParser
    extractor: HeadingExtractor
    renderer: HtmlRenderer
    frontmatter: YamlFrontmatter

    def preview(self, text: str) -> dict[str, Any]:
        """
        Everything the reading view needs for one post.

        Headings come from the full text; blocks and HTML from the body with
        the metadata block removed.
        """
        meta, body = self.frontmatter.decode(text)
        blocks = self.parser.parse(body)
        return {
            "meta": meta,
            "reading_time": reading_time(body, self.config.preview.words_per_minute),
            "excerpt": excerpt(body.strip(), self.config.preview.excerpt_length),
            "headings": [to_dict(h) for h in self.extractor.extract(text)],
            "blocks": [to_dict(b) for b in blocks],
            "html": self.renderer.render_html(blocks),
        }


def build_runtime(
    config_path: Path | None = None,
    config: InkwellConfig | None = None,
) -> Runtime:
    """Build and wire all components from configuration."""
    if config is None:
        config = load_config(config_path=config_path)

    return Runtime(
        config=config,
        parser=MarkdownParser(flush_unclosed_fence=config.render.flush_unclosed_fence),
        extractor=HeadingExtractor(
            unique_ids=config.toc.unique_ids,
            fold_unicode=config.toc.fold_unicode,
        ),
        renderer=HtmlRenderer(
            anchor_ids=config.html.anchor_ids,
            unique_ids=config.toc.unique_ids,
            fold_unicode=config.toc.fold_unicode,
        ),
        frontmatter=YamlFrontmatter(),
    )
