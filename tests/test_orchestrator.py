"""Tests for cuefix.orchestrator."""

from __future__ import annotations

from pathlib import Path

import pytest

from cuefix import tree_walker
from cuefix.config import CueFixConfig
from cuefix.models import RewriteOutcome
from cuefix.orchestrator import Orchestrator
from cuefix.rewriter import CueRewriter
from cuefix.tree_walker import TreeWalker


class RecordingRewriter:
    """Test double that records which paths reach the rewriter."""

    def __init__(self, failing: set[str] | None = None) -> None:
        self.calls: list[Path] = []
        self._failing = failing or set()

    def rewrite(self, path: Path, *, dry_run: bool = False) -> RewriteOutcome:
        self.calls.append(path)
        if path.name in self._failing:
            raise PermissionError(f"Permission denied: '{path}'")
        return RewriteOutcome(
            path=path,
            encoding="UTF-8",
            companion=None,
            replacements=0,
            changed=False,
            written=False,
        )


def test_only_target_files_reach_rewriter(library_builder) -> None:
    library_builder.write(
        {
            "A/disc.cue": 'FILE "disc.wav" WAVE\n',
            "A/disc.log": "EAC log\n",
            "A/disc.CUE": "upper case\n",
            "B/cover.jpg": b"\xff\xd8",
        }
    )
    rewriter = RecordingRewriter()

    Orchestrator(rewriter=rewriter).run(library_builder.path())

    assert [path.name for path in rewriter.calls] == ["disc.cue"]


def test_failure_on_one_file_does_not_abort_walk(library_builder, console) -> None:
    capture = console()
    library_builder.write({"A/bad.cue": "x\n", "B/good.cue": "y\n", "C/also.cue": "z\n"})
    rewriter = RecordingRewriter(failing={"bad.cue"})

    summary = Orchestrator(rewriter=rewriter).run(library_builder.path())

    assert sorted(path.name for path in rewriter.calls) == ["also.cue", "bad.cue", "good.cue"]
    assert summary.failed == 1
    assert summary.failures[0].path.name == "bad.cue"
    assert len(summary.outcomes) == 2

    captured = capture.readouterr()
    bad = library_builder.path("A/bad.cue").resolve()
    assert f"Failed to process file {bad}: Permission denied" in captured.err
    assert "Failed to process file" not in captured.out


def test_directory_listing_failure_is_fatal(library_builder, monkeypatch) -> None:
    library_builder.write({"A/disc.cue": "x\n"})

    def _fail(directory: Path):
        raise PermissionError(f"Permission denied: '{directory}'")

    monkeypatch.setattr(tree_walker, "_list_directory", _fail)

    with pytest.raises(PermissionError):
        Orchestrator().run(library_builder.path())


def test_missing_root_raises(tmp_path: Path) -> None:
    missing = tmp_path / "missing"

    with pytest.raises(FileNotFoundError) as excinfo:
        Orchestrator().run(missing)

    assert str(missing) in str(excinfo.value)


def test_root_must_be_directory(tmp_path: Path) -> None:
    target = tmp_path / "album.cue"
    target.write_text("x\n", encoding="utf-8")

    with pytest.raises(NotADirectoryError):
        Orchestrator().run(target)


def test_end_to_end_flac_replacement(library_builder, console) -> None:
    capture = console()
    library_builder.write({"Artist/Album/track.cue": 'FILE "album.wav" WAVE'})
    library_builder.touch("Artist/Album/album.flac")

    summary = library_builder.run()

    assert library_builder.read_bytes("Artist/Album/track.cue") == b'FILE "album.flac" WAVE'
    assert summary.rewritten == 1
    out = capture.readouterr().out
    assert "Searching for .cue files in:" in out
    assert "Replaced '.wav' with '.flac'" in out
    assert "Processed 1 file(s): 1 rewritten, 0 failed" in out


def test_end_to_end_windows_1252_without_companion(library_builder, console) -> None:
    capture = console()
    original = b'REM COMMENT "It\x92s live"\nFILE "album.wav" WAVE\n'
    library_builder.write({"Live/track.cue": original})

    summary = library_builder.run()

    assert library_builder.read_bytes("Live/track.cue") == original
    assert summary.rewritten == 0
    assert summary.outcomes[0].encoding == "Windows-1252"
    assert "was decoded using Windows-1252" in capture.readouterr().out


def test_each_directory_uses_its_own_siblings(library_builder) -> None:
    library_builder.write(
        {
            "one/a.cue": 'FILE "a.wav" WAVE\n',
            "two/b.cue": 'FILE "b.wav" WAVE\n',
            "three/c.cue": 'FILE "c.wav" WAVE\n',
        }
    )
    library_builder.touch("one/a.flac", "two/b.ape")

    library_builder.run()

    assert library_builder.read_bytes("one/a.cue") == b'FILE "a.flac" WAVE\n'
    assert library_builder.read_bytes("two/b.cue") == b'FILE "b.ape" WAVE\n'
    assert library_builder.read_bytes("three/c.cue") == b'FILE "c.wav" WAVE\n'


def test_second_run_performs_no_writes(library_builder) -> None:
    library_builder.write({"disc.cue": 'FILE "disc.wav" WAVE\n'})
    library_builder.touch("disc.ape")

    first = library_builder.run()
    second = library_builder.run()

    assert first.rewritten == 1
    assert second.rewritten == 0
    assert library_builder.read_bytes("disc.cue") == b'FILE "disc.ape" WAVE\n'


def test_dry_run_leaves_library_untouched(library_builder) -> None:
    library_builder.write({"disc.cue": 'FILE "disc.wav" WAVE\n'})
    library_builder.touch("disc.flac")

    summary = library_builder.run(dry_run=True)

    assert library_builder.read_bytes("disc.cue") == b'FILE "disc.wav" WAVE\n'
    assert summary.outcomes[0].changed is True
    assert summary.rewritten == 0


def test_config_file_overrides_defaults(library_builder) -> None:
    library_builder.write(
        {
            ".cuefix.yml": "target_extension: toc\ncompanions: [wv]\n",
            "disc.toc": 'FILE "disc.wav" 0\n',
            "disc.cue": 'FILE "disc.wav" WAVE\n',
        }
    )
    library_builder.touch("disc.wv", "disc.flac")

    library_builder.run()

    assert library_builder.read_bytes("disc.toc") == b'FILE "disc.wv" 0\n'
    assert library_builder.read_bytes("disc.cue") == b'FILE "disc.wav" WAVE\n'


def test_explicit_collaborators_take_precedence(library_builder) -> None:
    library_builder.write({"disc.txt": 'FILE "disc.wav" WAVE\n'})
    library_builder.touch("disc.ape")
    config = CueFixConfig(root=library_builder.path())

    Orchestrator(walker=TreeWalker("txt"), rewriter=CueRewriter(companions=("ape",))).run(
        library_builder.path(), config=config
    )

    assert library_builder.read_bytes("disc.txt") == b'FILE "disc.ape" WAVE\n'
