"""
Geometry and color value types.

Everything here is a frozen pydantic model: positions and colors are
passed around freely and must never be mutated in place.
"""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, computed_field, field_validator


class Point2D(BaseModel):
    """A position in screen pixels (y grows downward).

    Examples:
        >>> Point2D(x=120.0, y=48.5)
        Point2D(x=120.0, y=48.5)
    """
    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class Color(BaseModel):
    """8-bit RGBA color.

    Examples:
        >>> Color.from_hex('#87CEEB').as_rgb_tuple
        (135, 206, 235)
    """
    model_config = ConfigDict(frozen=True)

    r: int
    g: int
    b: int
    a: int = 255

    @field_validator('r', 'g', 'b', 'a')
    @classmethod
    def in_byte_range(cls, v: int) -> int:
        if v < 0 or v > 255:
            raise ValueError(f'color channel out of range 0..255: {v}')
        return v

    @classmethod
    def from_hex(cls, value: str, a: int = 255) -> 'Color':
        """Parse '#RRGGBB' (the leading '#' is optional).

        Raises:
            ValueError: If the string is not six hex digits
        """
        digits = value.lstrip('#')
        if len(digits) != 6:
            raise ValueError(f"Expected #RRGGBB, got {value!r}")
        r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
        return cls(r=r, g=g, b=b, a=a)

    @computed_field
    @property
    def as_rgb_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)


class Rectangle(BaseModel):
    """Axis-aligned box anchored at its top-left corner.

    Overlap and containment are strict. Boxes that merely touch along an
    edge do not collide, and a point on the border is outside.

    Examples:
        >>> wing = Rectangle(x=0.0, y=0.0, width=10.0, height=10.0)
        >>> wing.overlaps(Rectangle(x=10.0, y=0.0, width=10.0, height=10.0))
        False
    """
    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    width: float
    height: float

    @field_validator('width', 'height')
    @classmethod
    def positive_size(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f'width and height must be > 0, got {v}')
        return v

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains_point(self, point: Point2D) -> bool:
        return self.x < point.x < self.right and self.y < point.y < self.bottom

    def overlaps(self, other: 'Rectangle') -> bool:
        return (self.x < other.right and other.x < self.right
                and self.y < other.bottom and other.y < self.bottom)
