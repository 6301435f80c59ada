from __future__ import annotations

import json

import pytest

from w3c_validators import (
    ConfigError,
    FeedValidator,
    MarkupValidator,
    UnknownValidatorError,
    create_validator,
    get_validator_class,
    load_settings,
    validate_validator_kinds,
)
from w3c_validators.config import CONFIG_PATH_ENV_VAR, ValidatorConfig


def _write(tmp_path, data) -> str:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_bundled_settings(monkeypatch):
    monkeypatch.delenv(CONFIG_PATH_ENV_VAR, raising=False)
    settings = load_settings()

    assert [v.id for v in settings.get_enabled_validators()] == ["markup", "feed"]
    validate_validator_kinds(settings)


def test_env_var_overrides_default(monkeypatch, tmp_path):
    path = _write(
        tmp_path,
        {"validators": [{"id": "local", "url": "http://localhost:8888/check", "kind": "markup"}]},
    )
    monkeypatch.setenv(CONFIG_PATH_ENV_VAR, path)

    settings = load_settings()

    local = settings.get_validator_by_id("local")
    assert local == ValidatorConfig(
        id="local",
        url="http://localhost:8888/check",
        kind="markup",
        enabled=True,
        description="",
    )
    assert settings.get_validator_by_id("markup") is None


def test_kind_defaults_to_id(tmp_path):
    settings = load_settings(
        _write(tmp_path, {"validators": [{"id": "feed", "url": "https://example.org/feed"}]})
    )
    assert settings.validators[0].kind == "feed"


def test_disabled_validators_are_filtered(tmp_path):
    settings = load_settings(
        _write(
            tmp_path,
            {
                "validators": [
                    {"id": "markup", "url": "https://a.example/check"},
                    {"id": "feed", "url": "https://b.example/check", "enabled": False},
                ]
            },
        )
    )
    assert [v.id for v in settings.get_enabled_validators()] == ["markup"]


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_settings(tmp_path / "absent.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid JSON"):
        load_settings(path)


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"validators": []},
        {"validators": [{"id": "markup"}]},
        {"validators": [{"id": "", "url": "https://x"}]},
        {"validators": [{"id": "markup", "url": "https://x", "kind": ""}]},
        {"validators": [{"id": "markup", "url": "ftp://example.org"}]},
        {"validators": [{"id": "markup", "url": "https://x", "enabled": "yes"}]},
    ],
)
def test_schema_violations(tmp_path, data):
    with pytest.raises(ConfigError, match="settings schema"):
        load_settings(_write(tmp_path, data))


def test_duplicate_ids(tmp_path):
    entry = {"id": "markup", "url": "https://validator.w3.org/check"}
    with pytest.raises(ConfigError, match="more than once: markup"):
        load_settings(_write(tmp_path, {"validators": [entry, entry]}))


def test_unknown_kind(tmp_path):
    settings = load_settings(
        _write(tmp_path, {"validators": [{"id": "css", "url": "https://jigsaw.w3.org/css"}]})
    )
    with pytest.raises(ConfigError, match="No client for validator kind"):
        validate_validator_kinds(settings)


def test_create_validator_from_config():
    config = ValidatorConfig(
        id="local", url="http://localhost:8888/check", kind="markup", enabled=True, description=""
    )
    validator = create_validator(config, {"charset": "utf-8"})

    assert isinstance(validator, MarkupValidator)
    assert validator.validator_uri == "http://localhost:8888/check"
    assert validator.options == {"charset": "utf-8"}


def test_registry_lookup():
    assert get_validator_class("feed") is FeedValidator
    with pytest.raises(UnknownValidatorError, match="Known kinds: feed, markup"):
        get_validator_class("css")


def test_entry_defaults_filled_from_schema_checked_document(tmp_path):
    settings = load_settings(
        _write(tmp_path, {"validators": [{"id": "markup", "url": "https://a.example/check"}]})
    )
    assert settings.validators == [
        ValidatorConfig(id="markup", url="https://a.example/check", kind="markup")
    ]
