"""
Procedural sound effects.

Sounds are synthesised with numpy at start-up and played through the
pygame mixer: a short noisy crack for gunfire, a decaying rumble for
explosions and a rising chime when a wave is cleared. If the mixer can't
be initialised, audio is switched off and the game runs silently.
"""

from typing import Dict, Optional

import numpy as np
import pygame

from models.dogfight import Team
from aces.logging import get_logger
from games.Dogfight import config

log = get_logger('dogfight.audio')

SAMPLE_RATE = 22050


def _envelope(num_samples: int, attack: float = 0.05, decay_power: float = 2.0) -> np.ndarray:
    """Fast attack, polynomial decay."""
    envelope = np.power(np.linspace(1.0, 0.0, num_samples), decay_power)
    attack_samples = max(1, int(num_samples * attack))
    envelope[:attack_samples] *= np.linspace(0.0, 1.0, attack_samples)
    return envelope


def _to_sound(wave: np.ndarray, volume: float) -> pygame.mixer.Sound:
    samples = (np.clip(wave, -1.0, 1.0) * 32767 * volume).astype(np.int16)
    return pygame.sndarray.make_sound(np.ascontiguousarray(np.column_stack((samples, samples))))


def gunfire_wave(rng: np.random.Generator, duration: float = 0.08) -> np.ndarray:
    num_samples = int(SAMPLE_RATE * duration)
    noise = rng.uniform(-1.0, 1.0, num_samples)
    t = np.arange(num_samples) / SAMPLE_RATE
    thump = np.sin(2.0 * np.pi * 140.0 * t)
    return (0.7 * noise + 0.3 * thump) * _envelope(num_samples, attack=0.02, decay_power=3.0)


def explosion_wave(rng: np.random.Generator, duration: float = 0.6) -> np.ndarray:
    num_samples = int(SAMPLE_RATE * duration)
    noise = rng.uniform(-1.0, 1.0, num_samples)
    # Crude low-pass: running mean over ~2ms windows
    kernel = np.ones(48) / 48
    rumble = np.convolve(noise, kernel, mode='same') * 4.0
    return rumble * _envelope(num_samples, attack=0.01, decay_power=1.5)


def chime_wave(duration: float = 0.45) -> np.ndarray:
    num_samples = int(SAMPLE_RATE * duration)
    notes = [523.25, 659.25, 783.99]  # C5, E5, G5
    wave = np.zeros(num_samples)
    per_note = num_samples // len(notes)
    for i, freq in enumerate(notes):
        t = np.arange(per_note) / SAMPLE_RATE
        wave[i * per_note:(i + 1) * per_note] = np.sin(2.0 * np.pi * freq * t) * _envelope(per_note, 0.1, 1.0)
    return wave


class SoundBoard:
    """Plays the game's sound effects.

    Args:
        enabled: Try to initialise audio at all
        volume: Master volume in [0, 1]

    Examples:
        >>> sounds = SoundBoard(enabled=False)
        >>> sounds.play_shot(Team.ALLY)  # Silently ignored
    """

    def __init__(self, enabled: bool = True, volume: float = 0.4):
        self.enabled = enabled and config.AUDIO_ENABLED
        self.volume = volume
        self.sounds: Dict[str, Optional[pygame.mixer.Sound]] = {}
        if self.enabled:
            self._init_audio()

    def _init_audio(self) -> None:
        try:
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=2, buffer=512)
            rng = np.random.default_rng()
            self.sounds['shot'] = _to_sound(gunfire_wave(rng), self.volume * 0.5)
            self.sounds['explosion'] = _to_sound(explosion_wave(rng), self.volume)
            self.sounds['wave'] = _to_sound(chime_wave(), self.volume * 0.6)
        except pygame.error as e:
            log.warning("Audio initialization failed, continuing without sound: %s", e)
            self.enabled = False
            self.sounds = {}

    def _play(self, name: str) -> None:
        if not self.enabled:
            return
        sound = self.sounds.get(name)
        if sound is not None:
            sound.play()

    def play_shot(self, team: Team) -> None:
        # Enemy gunfire is frequent; only the player's own guns are audible
        if team == Team.ALLY:
            self._play('shot')

    def play_explosion(self, team: Team) -> None:
        self._play('explosion')

    def play_wave_cleared(self, wave: int) -> None:
        self._play('wave')
