"""Fenced code block state machine shared by the block renderer and the TOC builder."""

from dataclasses import dataclass, field
from enum import Enum

from .model import CodeBlock

FENCE_MARKER = "```"
METADATA_DELIMITER = "---"


class FenceState(Enum):
    NORMAL = "normal"
    IN_FENCE = "in_fence"


def is_fence_delimiter(line: str) -> bool:
    return line.strip().startswith(FENCE_MARKER)


@dataclass
class FenceTracker:
    """
    Two-state machine driven by fence delimiter lines.

    While IN_FENCE, the tracker accumulates the language tag of the opening
    line and every raw line until the closing delimiter.
    """
    state: FenceState = FenceState.NORMAL
    language: str = ""
    lines: list[str] = field(default_factory=list)

    @property
    def inside(self) -> bool:
        return self.state is FenceState.IN_FENCE

    def toggle(self, line: str) -> CodeBlock | None:
        """
        Flip state on a delimiter line.

        Returns the finished CodeBlock on the closing transition, None when
        opening.
        """
        if self.state is FenceState.NORMAL:
            self.state = FenceState.IN_FENCE
            self.language = line.strip()[len(FENCE_MARKER):]
            self.lines = []
            return None

        block = CodeBlock(language=self.language, lines=tuple(self.lines))
        self.reset()
        return block

    def append(self, line: str) -> None:
        self.lines.append(line)

    def pending(self) -> CodeBlock | None:
        """Content of a fence that is still open, if any."""
        if not self.inside:
            return None
        return CodeBlock(language=self.language, lines=tuple(self.lines))

    def reset(self) -> None:
        self.state = FenceState.NORMAL
        self.language = ""
        self.lines = []


def metadata_end(lines: list[str]) -> int:
    """
    Index of the first line after a leading metadata block.

    The block opens only on line 0 and needs a closing delimiter; without one
    scanning starts at 0.
    """
    if not lines or lines[0].strip() != METADATA_DELIMITER:
        return 0
    for i in range(1, len(lines)):
        if lines[i].strip() == METADATA_DELIMITER:
            return i + 1
    return 0
