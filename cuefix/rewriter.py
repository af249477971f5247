"""Rewrites audio references inside CUE sheets to match companion files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Optional, Sequence, Set

from .config import DEFAULT_COMPANIONS, DEFAULT_SOURCE_SUFFIX
from .decoding import decode_with_fallback
from .logging import get_logger
from .models import RewriteOutcome


def sibling_extensions(directory: Path) -> Set[str]:
    """Return the extensions (without dot) of every entry directly inside ``directory``."""
    with os.scandir(directory) as entries:
        return {
            suffix[1:]
            for suffix in (Path(entry.name).suffix for entry in entries)
            if suffix
        }


def select_companion(present: Set[str], priority: Sequence[str]) -> Optional[str]:
    """Return the first extension of ``priority`` found in ``present``."""
    for extension in priority:
        if extension in present:
            return extension
    return None


class CueRewriter:
    """Replaces ``.wav`` references with the companion audio extension found on disk."""

    def __init__(
        self,
        *,
        source_suffix: str = DEFAULT_SOURCE_SUFFIX,
        companions: Iterable[str] = DEFAULT_COMPANIONS,
    ) -> None:
        self.source_suffix = source_suffix
        self.companions = tuple(companions)
        self.logger = get_logger("rewriter")

    def rewrite(self, path: Path, *, dry_run: bool = False) -> RewriteOutcome:
        """Process one target file.

        The file is written back as UTF-8 only when its text changed. Read,
        listing and write errors propagate as ``OSError``.
        """
        raw = path.read_bytes()
        decoded = decode_with_fallback(raw)
        self.logger.info("File %s was decoded using %s", path, decoded.encoding)

        present = sibling_extensions(path.parent)
        self.logger.debug("Sibling extensions next to %s: %s", path, ", ".join(sorted(present)) or "(none)")

        companion = select_companion(present, self.companions)
        if companion is None:
            self.logger.info(
                "No %s file next to %s; leaving it unchanged",
                " or ".join(f".{ext}" for ext in self.companions),
                path,
            )
            return RewriteOutcome(
                path=path,
                encoding=decoded.encoding,
                companion=None,
                replacements=0,
                changed=False,
                written=False,
            )

        replacement = f".{companion}"
        occurrences = decoded.text.count(self.source_suffix)
        new_text = decoded.text.replace(self.source_suffix, replacement)
        changed = new_text != decoded.text

        if not changed:
            self.logger.info("No '%s' references to replace in file: %s", self.source_suffix, path)
            return RewriteOutcome(
                path=path,
                encoding=decoded.encoding,
                companion=companion,
                replacements=0,
                changed=False,
                written=False,
            )

        if dry_run:
            self.logger.info(
                "Would replace '%s' with '%s' (%d occurrence(s)) in file: %s",
                self.source_suffix,
                replacement,
                occurrences,
                path,
            )
            return RewriteOutcome(
                path=path,
                encoding=decoded.encoding,
                companion=companion,
                replacements=occurrences,
                changed=True,
                written=False,
            )

        path.write_bytes(new_text.encode("utf-8"))
        self.logger.info(
            "Replaced '%s' with '%s' (%d occurrence(s)) in file: %s",
            self.source_suffix,
            replacement,
            occurrences,
            path,
        )
        return RewriteOutcome(
            path=path,
            encoding=decoded.encoding,
            companion=companion,
            replacements=occurrences,
            changed=True,
            written=True,
        )


__all__ = ["CueRewriter", "select_companion", "sibling_extensions"]
