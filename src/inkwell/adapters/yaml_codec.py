import io
from typing import Any

import structlog
import yaml

from ..core.fence import metadata_end
from ..core.ports import FrontmatterCodec

log = structlog.get_logger()


class YamlFrontmatter(FrontmatterCodec):
    """
    Decode the leading `---` metadata block of a post.

    Uses the same block rule as the TOC builder, so whatever it skips is
    exactly what gets decoded here.
    """

    def decode(self, text: str) -> tuple[dict[str, Any], str]:
        lines = text.split("\n")
        end = metadata_end(lines)
        if end == 0:
            return {}, text

        body = "\n".join(lines[end:])
        raw = "\n".join(lines[1 : end - 1])
        try:
            meta = yaml.safe_load(io.StringIO(raw)) or {}
        except yaml.YAMLError as e:
            log.warning("frontmatter_invalid", error=str(e))
            return {}, body

        if not isinstance(meta, dict):
            log.warning("frontmatter_not_mapping", type=type(meta).__name__)
            return {}, body
        return meta, body
