"""
Sprite-sheet animation playback.

An AnimationPlayer steps through the frames of one atlas clip at a time,
counting refresh ticks. Switching clips (`play`) always restarts at frame
0; asking for a clip the atlas does not define raises KeyError at once.
"""

from models.dogfight import AnimationClip, SpriteAtlas


class AnimationPlayer:
    """Frame counter for one entity.

    Args:
        atlas: Atlas whose clips are played
        clip_name: Initial clip

    Raises:
        KeyError: If the atlas has no clip with that name
    """

    def __init__(self, atlas: SpriteAtlas, clip_name: str):
        self.atlas = atlas
        self.clip_name = clip_name
        self.clip: AnimationClip = atlas.clip(clip_name)
        self.frame_index = 0
        self.frame_timer = 0
        self.finished = False

    def play(self, clip_name: str) -> None:
        """Switch to a clip and rewind it."""
        self.clip = self.atlas.clip(clip_name)
        self.clip_name = clip_name
        self.frame_index = 0
        self.frame_timer = 0
        self.finished = False

    def tick(self, refresh_rate: float) -> bool:
        """Advance one refresh tick.

        Returns:
            True on the tick a non-looping clip completes. The player then
            holds the clip's last frame.
        """
        if self.finished:
            return False

        self.frame_timer += 1
        if self.frame_timer <= self.clip.frame_delay(refresh_rate):
            return False

        self.frame_timer = 0
        next_index = (self.frame_index + 1) % self.clip.frame_count
        if next_index == 0 and not self.clip.loop:
            self.finished = True
            return True

        self.frame_index = next_index
        return False

    @property
    def source_rect(self) -> tuple:
        """Sheet region (x, y, w, h) of the current frame."""
        return self.atlas.source_rect(self.clip_name, self.frame_index)
