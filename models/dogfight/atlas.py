"""
Pydantic v2 models for sprite atlas YAML configuration.

An atlas describes a sprite sheet laid out as a grid of equally sized
frames, plus named animations that each play a list of frames from one row.
"""

from typing import Dict, List

from pydantic import BaseModel, Field, model_validator


class AnimationClip(BaseModel):
    """
    One named animation in a sprite sheet.

    Attributes:
        row: Sheet row holding the frames
        frames: Column indices played in order
        fps: Playback rate in frames per second
        loop: Whether playback wraps around; a non-looping clip holds its
              last frame and reports completion
    """
    model_config = {"frozen": True}

    row: int = Field(ge=0)
    frames: List[int] = Field(min_length=1)
    fps: float = Field(gt=0.0)
    loop: bool = True

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    def frame_delay(self, refresh_rate: float) -> int:
        """Refresh ticks each frame stays on screen."""
        return round(refresh_rate / self.fps)


class SpriteAtlas(BaseModel):
    """
    Layout of a sprite sheet and its animations.

    Examples:
        >>> atlas = SpriteAtlas(
        ...     frame_width=384, frame_height=341, columns=4, rows=3,
        ...     animations={'fly': AnimationClip(row=0, frames=[0, 1, 2, 3], fps=8)},
        ... )
        >>> atlas.clip('fly').frame_count
        4
    """
    model_config = {"frozen": True}

    frame_width: int = Field(gt=0)
    frame_height: int = Field(gt=0)
    columns: int = Field(gt=0)
    rows: int = Field(gt=0)
    animations: Dict[str, AnimationClip] = Field(min_length=1)

    @model_validator(mode='after')
    def validate_clips_fit_sheet(self) -> 'SpriteAtlas':
        """Every clip must reference frames inside the grid."""
        for name, clip in self.animations.items():
            if clip.row >= self.rows:
                raise ValueError(f"Animation '{name}' uses row {clip.row} but sheet has {self.rows} rows")
            for frame in clip.frames:
                if not 0 <= frame < self.columns:
                    raise ValueError(
                        f"Animation '{name}' uses column {frame} but sheet has {self.columns} columns"
                    )
        return self

    def clip(self, name: str) -> AnimationClip:
        """Look up an animation by name.

        Raises:
            KeyError: If the atlas has no such animation
        """
        try:
            return self.animations[name]
        except KeyError:
            raise KeyError(f"Atlas has no animation '{name}' (known: {sorted(self.animations)})") from None

    def source_rect(self, name: str, frame_index: int) -> tuple:
        """Pixel rect (x, y, w, h) of one frame of an animation on the sheet."""
        clip = self.clip(name)
        column = clip.frames[frame_index]
        return (column * self.frame_width, clip.row * self.frame_height,
                self.frame_width, self.frame_height)
