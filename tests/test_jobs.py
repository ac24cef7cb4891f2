from pathlib import Path

import pytest

from deckdiff.analysis.diff import diff_decks, summarize_diff
from deckdiff.jobs.diff_decks import format_diff, main


@pytest.fixture
def deck_files(tmp_path: Path) -> tuple[Path, Path]:
    left = tmp_path / "left.txt"
    right = tmp_path / "right.txt"
    left.write_text("4 Lightning Bolt\n4 Goblin Guide\n\nSideboard\n2 Abrade\n", encoding="utf-8")
    right.write_text("3 Lightning Bolt\n4 Goblin Guide\n3 Monastery Swiftspear\n", encoding="utf-8")
    return left, right


class TestFormatDiff:
    def test_lines(self) -> None:
        rows = diff_decks({"Lightning Bolt": 4, "Shock": 2}, {"Lightning Bolt": 3, "Abrade": 1})

        text = format_diff(rows, summarize_diff(rows))

        lines = text.splitlines()
        assert lines[0] == "equal: 0  only left: 1  only right: 1  different: 1"
        assert "> Abrade  - -> 1" in lines
        assert "~ Lightning Bolt  4 -> 3 (-1)" in lines
        assert "< Shock  2 -> -" in lines


class TestMain:
    def test_prints_diff(self, deck_files: tuple[Path, Path], capsys) -> None:
        left, right = deck_files

        assert main([str(left), str(right)]) == 0

        out = capsys.readouterr().out
        assert "~ Lightning Bolt  4 -> 3 (-1)" in out
        assert "Abrade" not in out

    def test_prints_merge(self, deck_files: tuple[Path, Path], capsys) -> None:
        left, right = deck_files

        assert main([str(left), str(right), "--merge"]) == 0

        out = capsys.readouterr().out
        assert out == "4 Goblin Guide\n7 Lightning Bolt\n3 Monastery Swiftspear\n"

    def test_missing_file(self, tmp_path: Path, capsys) -> None:
        assert main([str(tmp_path / "nope.txt"), str(tmp_path / "nope2.txt")]) == 1
        assert "not found" in capsys.readouterr().out
