"""
High score persistence.

The only state that outlives a game session is a single integer: the best
score reached so far. It is stored as a small JSON document in the platform
data directory so several games can keep their own value side by side.

Usage:
    from aces.storage import HighScoreStore

    store = HighScoreStore('dogfight')
    best = store.load()
    store.save(best + 10)
"""

import json
from pathlib import Path
from typing import Optional, Union

from aces.logging import get_data_dir, get_logger

log = get_logger('storage')


class HighScoreStore:
    """Reads and writes one game's high score.

    Read and write failures never propagate: a missing or corrupt file reads
    as 0, and a failed write is logged and otherwise ignored so gameplay
    continues.

    Args:
        game: Game slug, used as the file name
        directory: Override storage directory (default: platform data dir)
    """

    def __init__(self, game: str, directory: Optional[Union[str, Path]] = None):
        self.game = game
        self._directory = Path(directory) if directory else None

    @property
    def path(self) -> Path:
        """Location of the high score file."""
        directory = self._directory or get_data_dir()
        return directory / f"{self.game}_highscore.json"

    def load(self) -> int:
        """Return the stored high score, or 0 if none can be read."""
        path = self.path
        if not path.exists():
            return 0

        try:
            with open(path, 'r') as f:
                data = json.load(f)
            return max(0, int(data.get('high_score', 0)))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            log.warning("Could not read high score from %s: %s", path, e)
            return 0

    def save(self, score: int) -> bool:
        """Persist a new high score.

        Returns:
            True if the value was written
        """
        path = self.path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w') as f:
                json.dump({'game': self.game, 'high_score': int(score)}, f, indent=2)
        except OSError as e:
            log.warning("Could not write high score to %s: %s", path, e)
            return False

        log.debug("Saved high score %d for %s", score, self.game)
        return True


class MemoryHighScoreStore(HighScoreStore):
    """In-memory store for tests and headless runs."""

    def __init__(self, game: str = 'memory', initial: int = 0):
        super().__init__(game)
        self.value = initial
        self.writes = 0

    def load(self) -> int:
        return self.value

    def save(self, score: int) -> bool:
        self.value = int(score)
        self.writes += 1
        return True
