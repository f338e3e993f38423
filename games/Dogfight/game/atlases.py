"""
Sprite atlas loading.

Atlases are static YAML files describing the sheet grid and the named
clips. They are validated into SpriteAtlas models; malformed data raises
pydantic.ValidationError when loaded.
"""

from functools import lru_cache
from pathlib import Path
from typing import Dict, Union

import yaml

from models.dogfight import SpriteAtlas, Team
from aces.logging import get_logger
from games.Dogfight import config
from games.Dogfight.game.teams import TEAM_PROFILES

log = get_logger('dogfight.atlases')


def load_atlas(path: Union[str, Path]) -> SpriteAtlas:
    """Load and validate one atlas file.

    Raises:
        FileNotFoundError: If the file does not exist
        pydantic.ValidationError: If the data is not a valid atlas
    """
    path = Path(path)
    with open(path, 'r') as f:
        data = yaml.safe_load(f)
    atlas = SpriteAtlas.model_validate(data)
    log.debug("Loaded atlas %s (%d animations)", path.name, len(atlas.animations))
    return atlas


@lru_cache(maxsize=None)
def load_named_atlas(name: str) -> SpriteAtlas:
    """Load a bundled atlas by name (e.g. 'sopwith')."""
    return load_atlas(config.ATLAS_DIR / f"{name}.yaml")


def load_team_atlases() -> Dict[Team, SpriteAtlas]:
    """Atlas for each team, as named by its profile."""
    return {team: load_named_atlas(profile.atlas_name) for team, profile in TEAM_PROFILES.items()}
