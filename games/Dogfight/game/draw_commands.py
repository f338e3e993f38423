"""
Draw commands emitted by the render step.

The simulation never touches pixels. Each frame it produces an ordered
list of these immutable models, and a backend (see pygame_renderer)
executes them in order. Colours are RGB tuples; `alpha` is an opacity in
[0, 1] applied on top.
"""

from typing import Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

RGB = Tuple[int, int, int]


class _Command(BaseModel):
    model_config = ConfigDict(frozen=True)


class FillRect(_Command):
    """Filled axis-aligned rectangle (top-left anchored)."""
    kind: Literal['fill_rect'] = 'fill_rect'
    x: float
    y: float
    width: float
    height: float
    color: RGB
    alpha: float = Field(default=1.0, ge=0.0, le=1.0)


class StrokeRect(_Command):
    """Rectangle outline."""
    kind: Literal['stroke_rect'] = 'stroke_rect'
    x: float
    y: float
    width: float
    height: float
    color: RGB
    line_width: int = 1
    alpha: float = Field(default=1.0, ge=0.0, le=1.0)


class FillCircle(_Command):
    """Filled circle (centre anchored)."""
    kind: Literal['fill_circle'] = 'fill_circle'
    x: float
    y: float
    radius: float
    color: RGB
    alpha: float = Field(default=1.0, ge=0.0, le=1.0)


class StrokeCircle(_Command):
    """Circle outline."""
    kind: Literal['stroke_circle'] = 'stroke_circle'
    x: float
    y: float
    radius: float
    color: RGB
    line_width: int = 1
    alpha: float = Field(default=1.0, ge=0.0, le=1.0)


class FillEllipse(_Command):
    """Filled ellipse (centre anchored, radii along each axis)."""
    kind: Literal['fill_ellipse'] = 'fill_ellipse'
    x: float
    y: float
    radius_x: float
    radius_y: float
    color: RGB
    alpha: float = Field(default=1.0, ge=0.0, le=1.0)


class VerticalGradient(_Command):
    """Rectangle filled with a top-to-bottom linear gradient."""
    kind: Literal['vertical_gradient'] = 'vertical_gradient'
    x: float
    y: float
    width: float
    height: float
    top_color: RGB
    bottom_color: RGB


class SpriteFrame(_Command):
    """One frame of a sprite sheet scaled into a destination box.

    Attributes:
        sheet: Sprite sheet name (the atlas name)
        source: (x, y, w, h) region on the sheet
        dest: (x, y, w, h) box on screen
        flip_x: Mirror horizontally
        fallback: Drawn instead when the sheet is not loaded
    """
    kind: Literal['sprite_frame'] = 'sprite_frame'
    sheet: str
    source: Tuple[float, float, float, float]
    dest: Tuple[float, float, float, float]
    flip_x: bool = False
    fallback: Optional[FillRect] = None


class Text(_Command):
    """Single line of text. `x` is interpreted according to `align`."""
    kind: Literal['text'] = 'text'
    text: str
    x: float
    y: float
    size: int
    color: RGB
    align: Literal['left', 'center', 'right'] = 'left'
    shadow: bool = False


class Overlay(_Command):
    """Translucent full-screen tint."""
    kind: Literal['overlay'] = 'overlay'
    color: RGB
    alpha: float = Field(default=0.5, ge=0.0, le=1.0)


DrawCommand = Union[
    FillRect, StrokeRect, FillCircle, StrokeCircle, FillEllipse,
    VerticalGradient, SpriteFrame, Text, Overlay,
]
