"""Pipeline orchestration for a cuefix run."""

from __future__ import annotations

from pathlib import Path

from .config import CueFixConfig, load_config
from .logging import get_logger
from .models import FileFailure, RunSummary
from .rewriter import CueRewriter
from .tree_walker import TreeWalker


class Orchestrator:
    """Walks a library root and rewrites every CUE sheet found in it."""

    def __init__(
        self,
        walker: TreeWalker | None = None,
        rewriter: CueRewriter | None = None,
    ) -> None:
        self._walker_override = walker
        self._rewriter_override = rewriter
        self.logger = get_logger("orchestrator")

    def run(
        self,
        path: str | Path = ".",
        *,
        config: CueFixConfig | None = None,
        dry_run: bool = False,
    ) -> RunSummary:
        """Process every target file under ``path``.

        Per-file ``OSError`` is logged and recorded; errors listing a
        directory propagate to the caller.
        """
        root = Path(path).expanduser().resolve()
        if not root.exists():
            raise FileNotFoundError(f"Library path not found: {path}")
        if not root.is_dir():
            raise NotADirectoryError(f"Library path is not a directory: {path}")

        config = config or load_config(root)
        walker = self._walker_override or TreeWalker(config.target_extension)
        rewriter = self._rewriter_override or CueRewriter(
            source_suffix=config.source_suffix,
            companions=config.companions,
        )

        self.logger.info("Searching for .%s files in: %s", walker.extension, root)
        summary = RunSummary(root=root)
        for target in walker.walk(root):
            try:
                outcome = rewriter.rewrite(target, dry_run=dry_run)
            except OSError as exc:
                self.logger.error("Failed to process file %s: %s", target, exc)
                summary.failures.append(FileFailure(path=target, error=str(exc)))
                continue
            summary.outcomes.append(outcome)

        self.logger.info(
            "Processed %d file(s): %d rewritten, %d failed%s",
            len(summary.outcomes) + summary.failed,
            summary.rewritten,
            summary.failed,
            " (dry-run)" if dry_run else "",
        )
        return summary


__all__ = ["Orchestrator"]
