from __future__ import annotations

from dama.audio import SAMPLE_RATE, TONES, SilentAudioService, synthesize_tone
from dama.game.factory import create_game
from dama.geometry import Coord


def test_silent_service_records_notifications():
    audio = SilentAudioService()

    audio.play_move()
    audio.play_capture()
    audio.play_illegal()
    audio.play_promotion()

    assert audio.played == ["move", "capture", "illegal", "promotion"]


def test_mute_controls():
    audio = SilentAudioService()

    assert audio.toggle_mute() is True
    assert audio.is_muted()
    audio.play_move()
    assert audio.played == []

    audio.set_muted(False)
    assert not audio.is_muted()


def test_tone_length_and_channels():
    mono = synthesize_tone(220, 0.1, 0.1)
    stereo = synthesize_tone(220, 0.1, 0.1, channels=2)

    assert len(mono) == int(SAMPLE_RATE * 0.1) * 2
    assert len(stereo) == len(mono) * 2


def test_every_tone_is_defined():
    assert set(TONES) == {"move", "capture", "illegal", "promotion"}


def test_game_does_not_play_sounds_itself():
    audio = SilentAudioService()
    game = create_game(audio_service=audio)

    assert game.move_piece(Coord(5, 0), Coord(4, 1))
    assert game.audio is audio
    assert audio.played == []
