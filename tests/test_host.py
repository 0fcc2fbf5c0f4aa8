from __future__ import annotations

import pytest
from pydantic import BaseModel

from persisted_settings.errors import WriteFailed
from persisted_settings.host import SettingsHost


class Settings(BaseModel):
    master_volume: float = 0.0
    custom_cursor: bool = False


class PlayerProfile(BaseModel):
    highscore: float = 0.0
    deaths: int = 0


def test_add_settings_publishes_default_and_path(config_home):
    host = SettingsHost()

    initial = host.add_settings(Settings, "My awesome game studio", "The name of the game")

    assert initial == Settings()
    assert host.get(Settings) is initial
    assert host.path_for(Settings).file == (
        config_home / "thenameofthegame" / "The name of the game.toml"
    )


def test_update_only_writes_after_persist(config_home):
    host = SettingsHost()
    host.add_settings(Settings, "Studio", "Game")
    path = host.path_for(Settings)

    host.get(Settings).master_volume = 0.4
    assert host.update() == {}
    assert not path.file.exists()

    host.persist(Settings)
    assert host.update() == {}
    assert path.file.exists()

    restarted = SettingsHost()
    assert restarted.add_settings(Settings, "Studio", "Game").master_volume == 0.4


def test_replace_then_persist_all(config_home):
    host = SettingsHost()
    host.add_settings(Settings, "Studio", "Game Settings")
    host.add_settings(PlayerProfile, "Studio", "Game Profile", format="yaml")

    host.replace(PlayerProfile, PlayerProfile(highscore=1.0, deaths=2))
    host.persist_all()
    host.update()

    restarted = SettingsHost()
    restarted.add_settings(Settings, "Studio", "Game Settings")
    profile = restarted.add_settings(PlayerProfile, "Studio", "Game Profile", format="yaml")
    assert profile == PlayerProfile(highscore=1.0, deaths=2)
    assert restarted.path_for(Settings).file.exists()


def test_update_returns_failures(monkeypatch, config_home):
    host = SettingsHost()
    host.add_settings(Settings, "Studio", "Game")

    def failing_replace(src, dst):
        raise OSError("read-only file system")

    monkeypatch.setattr("persisted_settings.settings_store.os.replace", failing_replace)
    host.persist(Settings)
    failures = host.update()

    assert isinstance(failures[Settings], WriteFailed)
    assert host.get(Settings) == Settings()


def test_unknown_types_raise_key_error(config_home):
    host = SettingsHost()

    with pytest.raises(KeyError):
        host.get(Settings)
    with pytest.raises(KeyError):
        host.persist(Settings)
    with pytest.raises(KeyError):
        host.replace(Settings, Settings())


def test_replace_checks_type(config_home):
    host = SettingsHost()
    host.add_settings(Settings, "Studio", "Game")

    with pytest.raises(TypeError):
        host.replace(Settings, PlayerProfile())
