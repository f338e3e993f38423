"""Dogfight - Game Info

Arcade biplane combat against waves of enemy fighters.
Defines the game's metadata, its command-line arguments and the factory
used by the entry point.
"""

NAME = "Dogfight"
DESCRIPTION = "Fly, shoot and dodge through ever larger waves of enemy biplanes."
VERSION = "1.0.0"
AUTHOR = "Aces Team"

ARGUMENTS = [
    # Difficulty preset
    {
        'name': '--difficulty',
        'type': str,
        'default': 'normal',
        'choices': ['easy', 'normal', 'hard'],
        'help': 'Difficulty preset: easy, normal, hard'
    },

    # Display
    {
        'name': '--width',
        'type': int,
        'default': None,
        'help': 'Window width in pixels (default: SCREEN_WIDTH)'
    },
    {
        'name': '--height',
        'type': int,
        'default': None,
        'help': 'Window height in pixels (default: SCREEN_HEIGHT)'
    },
    {
        'name': '--fullscreen',
        'action': 'store_true',
        'default': False,
        'help': 'Run fullscreen'
    },
    {
        'name': '--show-fps',
        'action': 'store_true',
        'default': False,
        'help': 'Show the FPS counter from the start (toggle with F)'
    },

    # Determinism and side effects
    {
        'name': '--seed',
        'type': int,
        'default': None,
        'help': 'Random seed for a reproducible game'
    },
    {
        'name': '--no-audio',
        'action': 'store_true',
        'default': False,
        'help': 'Disable sound effects'
    },
    {
        'name': '--no-save',
        'action': 'store_true',
        'default': False,
        'help': 'Do not read or write the high score file'
    },
    {
        'name': '--log-level',
        'type': str,
        'default': None,
        'help': 'Log level: TRACE, DEBUG, INFO, WARNING, ERROR'
    },
]


def get_game_mode(**kwargs):
    """Factory function to create game instance."""
    from aces.storage import HighScoreStore
    from games.Dogfight import config
    from games.Dogfight.game.audio import SoundBoard
    from games.Dogfight.game_mode import DogfightMode

    if kwargs.get('width') is None:
        kwargs['width'] = config.SCREEN_WIDTH
    if kwargs.get('height') is None:
        kwargs['height'] = config.SCREEN_HEIGHT

    if not kwargs.pop('no_save', False):
        kwargs.setdefault('high_score_store', HighScoreStore(config.HIGH_SCORE_GAME))
    if not kwargs.pop('no_audio', False):
        kwargs.setdefault('sounds', SoundBoard())

    return DogfightMode(**kwargs)
