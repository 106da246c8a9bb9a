"""Loader for puzzle files."""

import re
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

from letterboxed.errors import InvalidConfiguration
from letterboxed.side_letters import SideLetters

SEPARATORS = re.compile(r"[\s,\-]+")
"""Separators allowed between the sides of a box."""


@dataclass
class PuzzleConfig:
    """A puzzle configuration."""

    puzzle_id: str
    """A name for the puzzle, used for its log file."""

    sides: tuple[str, ...]
    """The four sides of the box, as given."""

    side_letters: SideLetters = field(init=False, repr=False)
    """The validated box."""

    def __post_init__(self) -> None:
        """Validate the box."""
        self.side_letters = SideLetters(self.sides)

    def __str__(self) -> str:
        """Return a string representation of the Config."""
        return f"{self.puzzle_id}: {self.side_letters}"


def parse_box(text: str) -> tuple[str, ...]:
    """Split a box such as "RSH-WKB-DEL-YIA" (or "rsh wkb del yia") into its sides."""
    return tuple(part for part in SEPARATORS.split(text.strip()) if part)


def load_configs(configs_path: PathLike | str) -> list[PuzzleConfig]:
    """Load puzzles from a file with one box per line.

    Blank lines and lines starting with '#' are skipped.  Puzzles are named after the file
    stem and their position in the file, e.g. `daily-2` for the second box in `daily.txt`.

    Args:
        configs_path (PathLike | str): Path to the puzzle file.

    Raises:
        InvalidConfiguration: If a line does not describe a valid box.
    """
    configs = []

    path = Path(configs_path).resolve()
    print(f"Loading puzzles from {path}")

    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            try:
                config = PuzzleConfig(
                    puzzle_id=f"{path.stem}-{len(configs) + 1}",
                    sides=parse_box(line),
                )
            except InvalidConfiguration as e:
                raise InvalidConfiguration(f"{path.name}, line {line_no}: {e}") from e
            configs.append(config)

    return configs
