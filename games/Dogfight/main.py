#!/usr/bin/env python3
"""Dogfight - Standalone entry point.

Arcade biplane combat. W/A/S/D or arrows to fly, SPACE to fire, P to
pause, F for the FPS counter, R to restart after a game over, Esc to quit.
"""

import argparse
import sys
import time
from typing import List, Optional

import pygame

from aces.logging import close_all_sinks, configure_logging, create_sink_for_module, get_logger, register_sink
from models.dogfight import InputAction
from games.Dogfight import config, game_info
from games.Dogfight.game.pygame_renderer import PygameRenderer
from games.Dogfight.game.sprites import load_sprite_sheets
from games.Dogfight.input.input_manager import InputManager
from games.Dogfight.input.sources.keyboard import KeyboardInputSource

log = get_logger('dogfight.main')


def build_parser() -> argparse.ArgumentParser:
    """Command-line parser built from game_info.ARGUMENTS."""
    parser = argparse.ArgumentParser(prog='dogfight', description=game_info.DESCRIPTION)
    for arg in game_info.ARGUMENTS:
        kwargs = dict(arg)
        name = kwargs.pop('name')
        parser.add_argument(name, **kwargs)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    options = vars(args)

    log_level = options.pop('log_level')
    if log_level:
        configure_logging(level=log_level)
    fullscreen = options.pop('fullscreen')

    register_sink('session', create_sink_for_module('session'))

    pygame.init()
    game = game_info.get_game_mode(**options)
    ctx = game.context
    flags = pygame.FULLSCREEN if fullscreen else 0
    screen = pygame.display.set_mode((ctx.width, ctx.height), flags)
    pygame.display.set_caption(game_info.NAME)

    renderer = PygameRenderer(screen, load_sprite_sheets())
    input_manager = InputManager(KeyboardInputSource())
    clock = pygame.time.Clock()

    running = True
    try:
        while running:
            dt = clock.tick(config.FPS) / 1000.0
            input_manager.update(dt)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False

            events = input_manager.get_events()
            if any(e.action == InputAction.QUIT for e in events):
                running = False
            game.handle_input(events)

            commands = game.frame(time.monotonic(), input_manager.controls)
            renderer.draw(commands)
            pygame.display.flip()
    finally:
        close_all_sinks()
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
