"""
Tests for the InputEvent model.
"""

import pytest
from pydantic import ValidationError

from models.dogfight import InputAction
from games.Dogfight.input.input_event import InputEvent


def test_event_fields():
    event = InputEvent(action=InputAction.RESTART, timestamp=1.5, key=114)
    assert event.action == InputAction.RESTART
    assert event.key == 114
    assert str(event) == "InputEvent(action=restart, t=1.500)"


def test_negative_timestamp_rejected():
    with pytest.raises(ValidationError):
        InputEvent(action=InputAction.FIRE, timestamp=-0.1)


def test_event_is_immutable():
    event = InputEvent(action=InputAction.FIRE, timestamp=0.0)
    with pytest.raises(ValidationError):
        event.timestamp = 2.0
