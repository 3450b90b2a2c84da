"""
Student roster index.

The roster is a headerless CSV file mapping each student's display name
(column 0) to their GitHub username (column 1). It is loaded once and
queried in both directions.
"""

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from classroom_grader.exceptions import RosterFormatError, RosterLoadError

logger = logging.getLogger(__name__)


@dataclass
class RosterIndex:
    """Bidirectional lookup between display names and usernames."""

    name_to_username: dict[str, str] = field(default_factory=dict)
    username_to_name: dict[str, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.name_to_username)

    def add(self, name: str, username: str) -> None:
        """Add an entry. Later entries overwrite earlier ones."""
        self.name_to_username[name] = username
        self.username_to_name[username] = name

    def username_for(self, name: str) -> Optional[str]:
        """Get the username for a display name, or None."""
        return self.name_to_username.get(name)

    def name_for(self, username: str) -> Optional[str]:
        """Get the display name for a username, or None."""
        return self.username_to_name.get(username)

    @classmethod
    def from_rows(cls, rows: list[tuple[str, str]]) -> "RosterIndex":
        """Build an index from (name, username) pairs."""
        index = cls()
        for name, username in rows:
            index.add(name, username)
        return index

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "RosterIndex":
        """
        Load a roster from a CSV file.

        Args:
            path: Path to the roster CSV

        Returns:
            Populated RosterIndex

        Raises:
            RosterLoadError: If the file cannot be opened or is not valid CSV
            RosterFormatError: If a row has fewer than two fields
        """
        path = Path(path).expanduser()
        index = cls()

        try:
            with path.open(newline="", encoding="utf-8-sig") as f:
                reader = csv.reader(f)
                for row in reader:
                    if not row:
                        continue
                    if len(row) < 2:
                        raise RosterFormatError(
                            f"Roster row {reader.line_num} in {path} needs a name "
                            f"and a username, got {len(row)} field(s)",
                            path=str(path),
                            line_number=reader.line_num,
                        )
                    index.add(row[0], row[1])
        except OSError as e:
            raise RosterLoadError(
                f"Could not load file from given path: {path}",
                path=str(path),
            ) from e
        except (csv.Error, UnicodeDecodeError) as e:
            raise RosterLoadError(
                f"Roster file {path} is not valid CSV: {e}",
                path=str(path),
            ) from e

        logger.debug(f"Loaded {len(index)} roster entries from {path}")
        return index


def load_roster(path: Union[str, Path]) -> RosterIndex:
    """Load a roster file into a RosterIndex."""
    return RosterIndex.from_file(path)
