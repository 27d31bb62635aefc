import re

from ..core.fence import FenceTracker, is_fence_delimiter, metadata_end
from ..core.model import TocEntry
from ..core.ports import TocExtractor
from ..core.utils import SlugRegistry, slugify

HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$")
MARKUP_RE = re.compile(r"[#*`]")


class HeadingExtractor(TocExtractor):
    """
    Build the table of contents for a post.

    Ids are plain slugs, so two headings with the same wording share an id.
    `unique_ids` switches on suffixing (`intro`, `intro-2`, ...), which
    changes anchor ids and is therefore opt-in. So is `fold_unicode`,
    which folds accents instead of dropping non-ASCII letters.
    """

    def __init__(self, unique_ids: bool = False, fold_unicode: bool = False):
        self.unique_ids = unique_ids
        self.fold_unicode = fold_unicode

    def extract(self, text: str) -> list[TocEntry]:
        if not text:
            return []

        lines = text.split("\n")
        toc: list[TocEntry] = []
        fence = FenceTracker()
        registry = SlugRegistry() if self.unique_ids else None

        for line in lines[metadata_end(lines):]:
            if not line:
                continue

            # Delimiters and everything between them never count as headings
            if is_fence_delimiter(line):
                fence.toggle(line)
                continue
            if fence.inside:
                continue

            m = HEADING_RE.match(line.strip())
            if not m:
                continue

            heading_text = MARKUP_RE.sub("", m.group(2).strip()).strip()
            if not heading_text:
                continue

            slug = slugify(heading_text, fold_unicode=self.fold_unicode)
            if registry is not None:
                slug = registry.claim(slug)

            toc.append(TocEntry(id=slug, text=heading_text, level=len(m.group(1))))

        return toc


def extract_headings(text: str) -> list[TocEntry]:
    """Table of contents with the default policy (duplicate ids kept)."""
    return HeadingExtractor().extract(text)
