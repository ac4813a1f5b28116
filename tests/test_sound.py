import os
from unittest import mock

import pygame
import pytest

from classdash.sound import (
    MUSIC_FILES,
    SOUND_FILES,
    MusicTrack,
    SoundEffect,
    SoundError,
    SoundManager,
    get_instance,
)


def _fake_sound(path):
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    return mock.MagicMock()


@pytest.fixture
def loaded_manager(tmp_path):
    (tmp_path / SOUND_FILES[SoundEffect.JUMP]).write_bytes(b"")
    (tmp_path / MUSIC_FILES[MusicTrack.LEVEL_1]).write_bytes(b"")
    manager = SoundManager(tmp_path)
    with mock.patch("pygame.mixer.init"), mock.patch(
        "pygame.mixer.set_num_channels"
    ), mock.patch("pygame.mixer.Sound", side_effect=_fake_sound):
        manager.initialize()
    return manager


def test_new_manager_state():
    manager = SoundManager()
    assert manager.current_music == MusicTrack.TITLE_THEME
    assert not manager.music_playing
    assert manager.sound_effects == {}


def test_every_effect_and_track_is_loaded_when_present(tmp_path):
    for name in list(SOUND_FILES.values()) + list(MUSIC_FILES.values()):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"")
    manager = SoundManager(tmp_path)
    with mock.patch("pygame.mixer.init"), mock.patch(
        "pygame.mixer.set_num_channels"
    ), mock.patch("pygame.mixer.Sound", side_effect=_fake_sound):
        manager.initialize()
    assert set(manager.sound_effects) == set(SoundEffect)
    assert set(manager.music_tracks) == set(MusicTrack)


def test_play_unloaded_music_marks_playing_only():
    manager = SoundManager()
    manager.play_music(MusicTrack.LEVEL_2)
    assert manager.music_playing
    assert manager.current_music == MusicTrack.TITLE_THEME


def test_stop_music_clears_playing():
    manager = SoundManager()
    manager.play_music(MusicTrack.TITLE_THEME)
    manager.stop_music()
    assert not manager.music_playing


def test_initialize_failure_raises():
    manager = SoundManager()
    with mock.patch("pygame.mixer.init", side_effect=pygame.error("no audio")):
        with pytest.raises(SoundError):
            manager.initialize()
    assert not manager.initialized


def test_initialize_loads_available_files(loaded_manager, tmp_path):
    assert loaded_manager.initialized
    assert set(loaded_manager.sound_effects) == {SoundEffect.JUMP}
    assert loaded_manager.music_tracks == {
        MusicTrack.LEVEL_1: str(tmp_path / MUSIC_FILES[MusicTrack.LEVEL_1])
    }


def test_play_sound_loops(loaded_manager):
    loaded_manager.play_sound(SoundEffect.JUMP, True)
    loaded_manager.sound_effects[SoundEffect.JUMP].play.assert_called_once_with(
        loops=-1
    )


def test_play_music_starts_loaded_track(loaded_manager, tmp_path):
    with mock.patch("pygame.mixer.music") as music:
        loaded_manager.play_music(MusicTrack.LEVEL_1, True)
        music.load.assert_called_once_with(
            str(tmp_path / MUSIC_FILES[MusicTrack.LEVEL_1])
        )
        music.play.assert_called_once_with(loops=-1)
    assert loaded_manager.current_music == MusicTrack.LEVEL_1
    assert loaded_manager.music_playing


def test_play_music_skips_track_already_playing(loaded_manager):
    with mock.patch("pygame.mixer.music") as music:
        loaded_manager.play_music(MusicTrack.LEVEL_1)
        loaded_manager.play_music(MusicTrack.LEVEL_1)
        assert music.play.call_count == 1
        assert music.load.call_count == 1
    assert loaded_manager.current_music == MusicTrack.LEVEL_1
    assert loaded_manager.music_playing is True


def test_cleanup_forgets_everything(loaded_manager):
    with mock.patch("pygame.mixer.quit") as quit_mixer:
        loaded_manager.cleanup()
        quit_mixer.assert_called_once_with()
    assert loaded_manager.sound_effects == {}
    assert loaded_manager.music_tracks == {}
    assert not loaded_manager.initialized


def test_get_instance_is_shared():
    instance = get_instance()
    instance.stop_music()
    assert get_instance().music_playing is False
    instance.play_music(MusicTrack.LEVEL_2)
    assert get_instance().music_playing is True
    instance.stop_music()
    assert get_instance().music_playing is False