"""
pygame backend for draw commands.

PygameRenderer executes the ordered draw list produced by the game mode
onto a pygame Surface. Translucent primitives are drawn through a
temporary per-pixel-alpha surface; gradients and scaled sprite frames are
cached because they repeat every frame.
"""

from typing import Dict, Iterable, Optional, Tuple

import numpy as np
import pygame

from aces.logging import get_logger
from games.Dogfight.config import Colors
from games.Dogfight.game.draw_commands import (
    DrawCommand,
    FillCircle,
    FillEllipse,
    FillRect,
    Overlay,
    SpriteFrame,
    StrokeCircle,
    StrokeRect,
    Text,
    VerticalGradient,
)

log = get_logger('dogfight.renderer')

TEXT_SHADOW_OFFSET = 2


def gradient_surface(width: int, height: int, top: Tuple[int, int, int],
                     bottom: Tuple[int, int, int]) -> pygame.Surface:
    """Build a width x height surface shading linearly from top to bottom."""
    rows = np.linspace(np.array(top, dtype=float), np.array(bottom, dtype=float), height)
    pixels = np.broadcast_to(rows[np.newaxis, :, :], (width, height, 3)).astype(np.uint8)
    return pygame.surfarray.make_surface(pixels)


class PygameRenderer:
    """Draws command lists onto a surface.

    Args:
        surface: Target surface (usually the display)
        sheets: Loaded sprite sheets by name; missing sheets fall back

    Examples:
        >>> surface = pygame.Surface((320, 200))
        >>> renderer = PygameRenderer(surface)
        >>> renderer.draw([FillRect(x=0, y=0, width=10, height=10, color=(255, 0, 0))])
    """

    def __init__(self, surface: pygame.Surface, sheets: Optional[Dict[str, pygame.Surface]] = None):
        self.surface = surface
        self.sheets = dict(sheets or {})
        self._fonts: Dict[int, pygame.font.Font] = {}
        self._gradients: Dict[tuple, pygame.Surface] = {}
        self._frames: Dict[tuple, pygame.Surface] = {}
        self._handlers = {
            FillRect: self._fill_rect,
            StrokeRect: self._stroke_rect,
            FillCircle: self._fill_circle,
            StrokeCircle: self._stroke_circle,
            FillEllipse: self._fill_ellipse,
            VerticalGradient: self._gradient,
            SpriteFrame: self._sprite,
            Text: self._text,
            Overlay: self._overlay,
        }
        if not pygame.font.get_init():
            pygame.font.init()

    def draw(self, commands: Iterable[DrawCommand]) -> None:
        """Execute commands in order."""
        for command in commands:
            handler = self._handlers.get(type(command))
            if handler is None:
                raise TypeError(f"Unsupported draw command: {type(command).__name__}")
            handler(command)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _font(self, size: int) -> pygame.font.Font:
        font = self._fonts.get(size)
        if font is None:
            font = pygame.font.Font(None, size)
            self._fonts[size] = font
        return font

    def _blit_translucent(self, rect: pygame.Rect, alpha: float, draw_fn) -> None:
        """Run draw_fn(layer, local_rect) on a temporary layer and blend it in."""
        if rect.width <= 0 or rect.height <= 0 or alpha <= 0:
            return
        layer = pygame.Surface(rect.size, pygame.SRCALPHA)
        draw_fn(layer, pygame.Rect(0, 0, rect.width, rect.height), int(round(alpha * 255)))
        self.surface.blit(layer, rect.topleft)

    # =========================================================================
    # Primitives
    # =========================================================================

    def _fill_rect(self, cmd: FillRect) -> None:
        rect = pygame.Rect(round(cmd.x), round(cmd.y), round(cmd.width), round(cmd.height))
        if cmd.alpha >= 1.0:
            pygame.draw.rect(self.surface, cmd.color, rect)
            return
        self._blit_translucent(rect, cmd.alpha,
                               lambda layer, r, a: layer.fill((*cmd.color, a)))

    def _stroke_rect(self, cmd: StrokeRect) -> None:
        rect = pygame.Rect(round(cmd.x), round(cmd.y), round(cmd.width), round(cmd.height))
        if cmd.alpha >= 1.0:
            pygame.draw.rect(self.surface, cmd.color, rect, cmd.line_width)
            return
        self._blit_translucent(rect, cmd.alpha,
                               lambda layer, r, a: pygame.draw.rect(layer, (*cmd.color, a), r, cmd.line_width))

    def _circle_rect(self, x: float, y: float, radius: float) -> pygame.Rect:
        r = int(round(radius))
        return pygame.Rect(round(x) - r, round(y) - r, 2 * r + 1, 2 * r + 1)

    def _fill_circle(self, cmd: FillCircle) -> None:
        radius = max(1, int(round(cmd.radius)))
        if cmd.alpha >= 1.0:
            pygame.draw.circle(self.surface, cmd.color, (round(cmd.x), round(cmd.y)), radius)
            return
        self._blit_translucent(self._circle_rect(cmd.x, cmd.y, radius), cmd.alpha,
                               lambda layer, r, a: pygame.draw.circle(layer, (*cmd.color, a), r.center, radius))

    def _stroke_circle(self, cmd: StrokeCircle) -> None:
        radius = max(1, int(round(cmd.radius)))
        if cmd.alpha >= 1.0:
            pygame.draw.circle(self.surface, cmd.color, (round(cmd.x), round(cmd.y)), radius, cmd.line_width)
            return
        self._blit_translucent(
            self._circle_rect(cmd.x, cmd.y, radius), cmd.alpha,
            lambda layer, r, a: pygame.draw.circle(layer, (*cmd.color, a), r.center, radius, cmd.line_width),
        )

    def _fill_ellipse(self, cmd: FillEllipse) -> None:
        rect = pygame.Rect(round(cmd.x - cmd.radius_x), round(cmd.y - cmd.radius_y),
                           round(cmd.radius_x * 2), round(cmd.radius_y * 2))
        if cmd.alpha >= 1.0:
            pygame.draw.ellipse(self.surface, cmd.color, rect)
            return
        self._blit_translucent(rect, cmd.alpha,
                               lambda layer, r, a: pygame.draw.ellipse(layer, (*cmd.color, a), r))

    def _gradient(self, cmd: VerticalGradient) -> None:
        width, height = int(round(cmd.width)), int(round(cmd.height))
        if width <= 0 or height <= 0:
            return
        key = (width, height, cmd.top_color, cmd.bottom_color)
        surface = self._gradients.get(key)
        if surface is None:
            surface = gradient_surface(width, height, cmd.top_color, cmd.bottom_color)
            self._gradients[key] = surface
        self.surface.blit(surface, (round(cmd.x), round(cmd.y)))

    def _overlay(self, cmd: Overlay) -> None:
        layer = pygame.Surface(self.surface.get_size(), pygame.SRCALPHA)
        layer.fill((*cmd.color, int(round(cmd.alpha * 255))))
        self.surface.blit(layer, (0, 0))

    # =========================================================================
    # Sprites and text
    # =========================================================================

    def _sprite(self, cmd: SpriteFrame) -> None:
        frame = self._sprite_frame(cmd)
        if frame is None:
            if cmd.fallback is not None:
                self._fill_rect(cmd.fallback)
            return
        self.surface.blit(frame, (round(cmd.dest[0]), round(cmd.dest[1])))

    def _sprite_frame(self, cmd: SpriteFrame) -> Optional[pygame.Surface]:
        """Cropped, scaled and mirrored frame, or None if it can't be drawn."""
        sheet = self.sheets.get(cmd.sheet)
        if sheet is None:
            return None

        size = (int(round(cmd.dest[2])), int(round(cmd.dest[3])))
        key = (cmd.sheet, cmd.source, size, cmd.flip_x)
        frame = self._frames.get(key)
        if frame is not None:
            return frame

        source = pygame.Rect(*(int(round(v)) for v in cmd.source)).clip(sheet.get_rect())
        if source.width <= 0 or source.height <= 0 or size[0] <= 0 or size[1] <= 0:
            log.debug("Sprite source %s outside sheet %s", cmd.source, cmd.sheet)
            return None

        region = sheet.subsurface(source)
        if sheet.get_bitsize() in (24, 32):
            frame = pygame.transform.smoothscale(region, size)
        else:
            frame = pygame.transform.scale(region, size)
        if cmd.flip_x:
            frame = pygame.transform.flip(frame, True, False)
        self._frames[key] = frame
        return frame

    def _text(self, cmd: Text) -> None:
        font = self._font(cmd.size)
        rendered = font.render(cmd.text, True, cmd.color)
        rect = rendered.get_rect()
        if cmd.align == 'center':
            rect.midtop = (round(cmd.x), round(cmd.y))
        elif cmd.align == 'right':
            rect.topright = (round(cmd.x), round(cmd.y))
        else:
            rect.topleft = (round(cmd.x), round(cmd.y))

        if cmd.shadow:
            shadow = font.render(cmd.text, True, Colors.TEXT_SHADOW)
            self.surface.blit(shadow, rect.move(TEXT_SHADOW_OFFSET, TEXT_SHADOW_OFFSET))
        self.surface.blit(rendered, rect)
