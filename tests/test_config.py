"""Tests for SettingsIdentity validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from persisted_settings.config import SettingsFormat, SettingsIdentity


def test_identity_defaults_to_com_and_toml():
    identity = SettingsIdentity(company="Studio", project="Game")

    assert identity.domain == "com"
    assert identity.format is SettingsFormat.TOML
    assert identity.filename == "Game.toml"


def test_identity_strips_whitespace():
    identity = SettingsIdentity(domain=" org ", company=" Studio ", project=" My Game ")

    assert identity.domain == "org"
    assert identity.company == "Studio"
    assert identity.project == "My Game"


@pytest.mark.parametrize("field", ["domain", "company", "project"])
def test_identity_rejects_blank_components(field):
    values = {"domain": "com", "company": "Studio", "project": "Game"}
    values[field] = "   "

    with pytest.raises(ValidationError):
        SettingsIdentity(**values)


def test_identity_accepts_format_string():
    identity = SettingsIdentity(company="Studio", project="Game", format="yaml")

    assert identity.format is SettingsFormat.YAML
    assert identity.filename == "Game.yaml"


def test_identity_is_hashable_and_frozen():
    identity = SettingsIdentity(company="Studio", project="Game")

    assert hash(identity) == hash(SettingsIdentity(company="Studio", project="Game"))
    with pytest.raises(ValidationError):
        identity.project = "Other"


def test_as_dict_uses_plain_values():
    identity = SettingsIdentity(company="Studio", project="Game", format=SettingsFormat.JSON)

    assert identity.as_dict() == {
        "domain": "com",
        "company": "Studio",
        "project": "Game",
        "format": "json",
    }
