"""Core data models shared across cuefix components."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class DecodedText:
    """Decoded file content tagged with the encoding that produced it."""

    text: str
    encoding: str


@dataclass
class RewriteOutcome:
    """Result of processing one target file."""

    path: Path
    encoding: str
    companion: Optional[str]
    replacements: int
    changed: bool
    written: bool


@dataclass
class FileFailure:
    """A target file that could not be processed."""

    path: Path
    error: str


@dataclass
class RunSummary:
    """Aggregate of a single walk over a library root."""

    root: Path
    outcomes: List[RewriteOutcome] = field(default_factory=list)
    failures: List[FileFailure] = field(default_factory=list)

    @property
    def rewritten(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.written)

    @property
    def failed(self) -> int:
        return len(self.failures)
