"""Tests for puzzle files, the run loop and the command line."""

import pytest

import letterboxed
from letterboxed import InvalidConfiguration, PuzzleConfig, WordArchive, load_configs, parse_box
from letterboxed.solver import solver
from letterboxed.solver.config import SolverConfig

WORDS = ["ADGJBEH", "HCKFLI", "ADG", "IDA"]


class TestParseBox:
    """Test splitting a box into sides."""

    @pytest.mark.parametrize(
        "text",
        ["RSH-WKB-DEL-YIA", "rsh wkb del yia", "RSH,WKB,DEL,YIA", "  rsh - wkb ,del\tyia  "],
    )
    def test_separators(self, text):
        """Dashes, commas and whitespace all separate sides."""
        assert [s.upper() for s in parse_box(text)] == ["RSH", "WKB", "DEL", "YIA"]

    def test_config_validates_box(self):
        """A config with a malformed box cannot be built."""
        with pytest.raises(InvalidConfiguration):
            PuzzleConfig(puzzle_id="bad", sides=parse_box("RSH-WKB-DEL"))

    def test_config_str(self):
        """Configs render as their id and the uppercase box."""
        config = PuzzleConfig(puzzle_id="daily", sides=parse_box("rsh-wkb-del-yia"))
        assert config.side_letters.sides == ("RSH", "WKB", "DEL", "YIA")
        assert str(config) == "daily: RSH-WKB-DEL-YIA"


class TestLoadConfigs:
    """Test reading puzzle files."""

    def test_load(self, tmp_path):
        """Comments and blank lines are skipped; puzzles are numbered per file."""
        path = tmp_path / "daily.txt"
        path.write_text(
            "# Puzzles for the week\nRSH-WKB-DEL-YIA\n\nabc def ghi jkl\n", encoding="utf-8"
        )
        configs = load_configs(path)
        assert [c.puzzle_id for c in configs] == ["daily-1", "daily-2"]
        assert str(configs[1].side_letters) == "ABC-DEF-GHI-JKL"

    def test_bad_line(self, tmp_path):
        """A malformed box is reported with its line number."""
        path = tmp_path / "daily.txt"
        path.write_text("RSH-WKB-DEL-YIA\n# next one is broken\nABC-DEF-GHI\n", encoding="utf-8")
        with pytest.raises(InvalidConfiguration, match="daily.txt, line 3"):
            load_configs(path)


class TestRun:
    """Test solving a puzzle with a log file."""

    def test_solution_is_logged(self, tmp_path, capsys):
        """The log file records the box and the solution."""
        config = SolverConfig(log_dir=str(tmp_path / "logs"))
        puzzle = PuzzleConfig(puzzle_id="demo", sides=("ABC", "DEF", "GHI", "JKL"))
        solutions = solver.run(puzzle, WordArchive(WORDS), config=config)

        assert [str(s) for s in solutions] == ["ADGJBEH-HCKFLI"]
        log = (tmp_path / "logs" / "demo.log").read_text(encoding="utf-8")
        assert "Box: ABC-DEF-GHI-JKL" in log
        assert "Solution found!" in log
        assert "ADGJBEH-HCKFLI" in log
        assert "Solution: ADGJBEH-HCKFLI (2 words, 13 letters)" in capsys.readouterr().out

    def test_no_solution_is_logged(self, tmp_path, capsys):
        """A puzzle without a solution returns nothing and logs the reason."""
        config = SolverConfig(log_dir=str(tmp_path / "logs"))
        puzzle = PuzzleConfig(puzzle_id="demo", sides=("ABC", "DEF", "GHI", "JKL"))
        assert solver.run(puzzle, WordArchive(["ADG"]), config=config) == []

        log = (tmp_path / "logs" / "demo.log").read_text(encoding="utf-8")
        assert "No solution found." in log
        assert "No solution found:" in capsys.readouterr().out


class TestMain:
    """Test the command line entry point."""

    def test_box_argument(self, tmp_path, monkeypatch, capsys):
        """A box given on the command line is solved with the given word list."""
        words = tmp_path / "words.txt"
        words.write_text("\n".join(WORDS), encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(letterboxed, "argv", ["letterboxed", "ABC-DEF-GHI-JKL", str(words)])

        letterboxed.main()

        assert "Solution: ADGJBEH-HCKFLI" in capsys.readouterr().out
        assert (tmp_path / "logs" / "box.log").exists()

    def test_usage(self, monkeypatch, capsys):
        """Missing arguments print usage and exit."""
        monkeypatch.setattr(letterboxed, "argv", ["letterboxed"])
        with pytest.raises(SystemExit):
            letterboxed.main()
        assert "Usage" in capsys.readouterr().out

    def test_invalid_box(self, tmp_path, monkeypatch, capsys):
        """An argument that is neither a file nor a valid box is rejected."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(letterboxed, "argv", ["letterboxed", "ABC-DEF"])
        with pytest.raises(SystemExit):
            letterboxed.main()
        assert "Invalid box" in capsys.readouterr().out
