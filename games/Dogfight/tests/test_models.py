"""
Tests for the Dogfight pydantic models and enums.

Tests cover:
- Rectangle strict overlap and containment
- Color parsing
- SpriteAtlas validation and lookup
- ScoreData / GameOverResult computed fields
- Internal state mapping to GameState
"""

import pytest
from pydantic import ValidationError

from models import Color, Point2D, Rectangle
from models.dogfight import (
    AnimationClip,
    ControlState,
    DogfightInternalState,
    GameOverReason,
    GameOverResult,
    GameState,
    PlaneAnimation,
    ScoreData,
    SpriteAtlas,
)


def _atlas(**overrides):
    data = dict(
        frame_width=384,
        frame_height=341,
        columns=4,
        rows=3,
        animations={
            'fly': AnimationClip(row=0, frames=[0, 1, 2, 3], fps=8),
            'explode': AnimationClip(row=2, frames=[0, 1, 2, 3], fps=10, loop=False),
        },
    )
    data.update(overrides)
    return SpriteAtlas(**data)


# ============================================================================
# Primitives
# ============================================================================


class TestRectangle:
    """Test strict AABB checks."""

    def test_overlapping_rectangles(self):
        """Test rectangles sharing area overlap."""
        a = Rectangle(x=0, y=0, width=10, height=10)
        b = Rectangle(x=5, y=5, width=10, height=10)
        assert a.overlaps(b)
        assert b.overlaps(a)

    def test_touching_edges_do_not_overlap(self):
        """Test rectangles that only share an edge do not overlap."""
        a = Rectangle(x=0, y=0, width=10, height=10)
        b = Rectangle(x=10, y=0, width=10, height=10)
        assert not a.overlaps(b)

    def test_point_on_edge_is_outside(self):
        """Test a point exactly on an edge is not contained."""
        rect = Rectangle(x=100, y=100, width=140, height=112)
        assert not rect.contains_point(Point2D(x=100, y=150))
        assert not rect.contains_point(Point2D(x=150, y=212))
        assert rect.contains_point(Point2D(x=100.5, y=150))

    def test_non_positive_dimensions_rejected(self):
        """Test zero-size rectangles raise ValidationError."""
        with pytest.raises(ValidationError):
            Rectangle(x=0, y=0, width=0, height=10)


class TestColor:
    """Test Color parsing."""

    def test_from_hex(self):
        """Test #RRGGBB parsing."""
        assert Color.from_hex('#FF4500').as_rgb_tuple == (255, 69, 0)

    def test_bad_hex_rejected(self):
        """Test malformed hex raises ValueError."""
        with pytest.raises(ValueError):
            Color.from_hex('#FFF')

    def test_component_range(self):
        """Test out-of-range components raise ValidationError."""
        with pytest.raises(ValidationError):
            Color(r=256, g=0, b=0)


# ============================================================================
# Atlas
# ============================================================================


class TestSpriteAtlas:
    """Test atlas validation and lookups."""

    def test_clip_lookup(self):
        """Test clips are found by name."""
        atlas = _atlas()
        assert atlas.clip('fly').frame_count == 4

    def test_missing_clip_raises_key_error(self):
        """Test unknown clip names fail fast."""
        with pytest.raises(KeyError):
            _atlas().clip('barrel_roll')

    def test_clip_row_outside_sheet_rejected(self):
        """Test a clip on a row the sheet doesn't have is invalid."""
        with pytest.raises(ValidationError):
            _atlas(rows=2)

    def test_clip_column_outside_sheet_rejected(self):
        """Test a clip using a column past the sheet width is invalid."""
        with pytest.raises(ValidationError):
            _atlas(columns=3)

    def test_source_rect(self):
        """Test frame regions are computed from row and column."""
        atlas = _atlas()
        assert atlas.source_rect('explode', 2) == (768, 682, 384, 341)

    def test_frame_delay(self):
        """Test frame delay is rounded refresh ticks per frame."""
        assert AnimationClip(row=0, frames=[0], fps=10).frame_delay(60) == 6
        assert AnimationClip(row=0, frames=[0], fps=12).frame_delay(60) == 5

    def test_atlas_is_frozen(self):
        """Test atlases are immutable."""
        atlas = _atlas()
        with pytest.raises(ValidationError):
            atlas.columns = 8


# ============================================================================
# Snapshots and enums
# ============================================================================


class TestSnapshots:
    """Test the small snapshot models."""

    def test_control_state_defaults(self):
        """Test nothing is held by default and snapshots are frozen."""
        state = ControlState()
        assert not (state.up or state.down or state.left or state.right or state.fire)
        with pytest.raises(ValidationError):
            state.up = True

    def test_wave_label(self):
        """Test the HUD wave label."""
        data = ScoreData(wave=2, enemies_defeated=1, enemies_in_wave=5)
        assert data.wave_label == "Wave 2 | Enemies: 1/5"

    def test_negative_scores_rejected(self):
        """Test scores cannot be negative."""
        with pytest.raises(ValidationError):
            ScoreData(ally_score=-1)

    def test_game_over_headlines(self):
        """Test each reason has its own headline."""
        shot = GameOverResult(reason=GameOverReason.SHOT_DOWN, final_score=30)
        crash = GameOverResult(reason=GameOverReason.COLLISION, final_score=0)
        assert shot.headline != crash.headline


class TestEnums:
    """Test enum helpers."""

    def test_clip_names(self):
        """Test animation states map to atlas clip names."""
        assert PlaneAnimation.FLYING.clip_name == 'fly'
        assert PlaneAnimation.SHOOTING.clip_name == 'shoot'
        assert PlaneAnimation.EXPLODING.clip_name == 'explode'

    @pytest.mark.parametrize('internal,expected', [
        (DogfightInternalState.IDLE, GameState.PLAYING),
        (DogfightInternalState.RUNNING, GameState.PLAYING),
        (DogfightInternalState.PAUSED, GameState.PAUSED),
        (DogfightInternalState.GAME_OVER, GameState.GAME_OVER),
    ])
    def test_state_mapping(self, internal, expected):
        """Test internal states map to platform states."""
        assert internal.to_game_state() == expected
