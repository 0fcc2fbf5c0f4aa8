from __future__ import annotations

from types import SimpleNamespace

import pytest


@pytest.fixture()
def config_home(monkeypatch, tmp_path):
    """Point path resolution at a Linux-style configuration root under ``tmp_path``."""
    root = tmp_path / "config-home"

    def user_config_dir(**_kwargs):
        return str(root)

    monkeypatch.setattr("persisted_settings.utils.paths.sys", SimpleNamespace(platform="linux"))
    monkeypatch.setattr("persisted_settings.utils.paths.user_config_dir", user_config_dir)
    return root
