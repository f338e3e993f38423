"""
Sprite sheet image loading.

Images are optional: a sheet that is missing or unreadable is reported
once and left out, and the renderer draws each plane's fallback shape in
its place.
"""

from pathlib import Path
from typing import Dict, Iterable, Optional, Union

import pygame

from aces.logging import get_logger
from games.Dogfight import config
from games.Dogfight.game.teams import TEAM_PROFILES

log = get_logger('dogfight.sprites')


def load_sprite_sheet(path: Union[str, Path]) -> Optional[pygame.Surface]:
    """Load one sheet, or return None (with a warning) if it can't be read."""
    path = Path(path)
    if not path.exists():
        log.warning("Sprite sheet not found: %s (using fallback shapes)", path)
        return None
    try:
        image = pygame.image.load(str(path))
    except pygame.error as e:
        log.warning("Could not load sprite sheet %s: %s (using fallback shapes)", path, e)
        return None

    if pygame.display.get_surface() is not None:
        image = image.convert_alpha()
    return image


def load_sprite_sheets(
    names: Optional[Iterable[str]] = None,
    directory: Union[str, Path, None] = None,
) -> Dict[str, pygame.Surface]:
    """Load `<directory>/<name>.png` for each sheet name.

    Args:
        names: Sheet names (default: every team's atlas)
        directory: Image directory (default: IMAGE_DIR)

    Returns:
        Loaded sheets by name; missing ones are omitted
    """
    if names is None:
        names = [profile.atlas_name for profile in TEAM_PROFILES.values()]
    directory = Path(directory) if directory else config.IMAGE_DIR

    sheets = {}
    for name in names:
        image = load_sprite_sheet(directory / f"{name}.png")
        if image is not None:
            sheets[name] = image
    return sheets
