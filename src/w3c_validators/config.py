"""Endpoint settings for the validator clients.

Settings are a JSON document listing validator endpoints. The bundled
``settings.json`` points at the public W3C services; a different file can be
selected with ``W3C_VALIDATORS_CONFIG``. Every document is checked against
``settings.schema.json`` before any entry is read.
"""

from __future__ import annotations

import json
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from .registry import get_known_kinds

DEFAULT_CONFIG_PATH = Path(__file__).resolve().with_name("settings.json")
SCHEMA_PATH = Path(__file__).resolve().with_name("settings.schema.json")
CONFIG_PATH_ENV_VAR = "W3C_VALIDATORS_CONFIG"


class ConfigError(RuntimeError):
    """Raised when endpoint settings are missing, unreadable or malformed."""


@dataclass(slots=True, frozen=True)
class ValidatorConfig:
    """One configured validator endpoint."""

    id: str
    url: str
    kind: str
    enabled: bool = True
    description: str = ""

    @classmethod
    def from_entry(cls, entry: Mapping[str, Any]) -> ValidatorConfig:
        """Build from a schema-checked entry; ``kind`` falls back to ``id``."""
        return cls(
            id=entry["id"],
            url=entry["url"],
            kind=entry.get("kind", entry["id"]),
            enabled=entry.get("enabled", True),
            description=entry.get("description", ""),
        )


@dataclass(slots=True, frozen=True)
class Settings:
    validators: list[ValidatorConfig]

    def get_enabled_validators(self) -> list[ValidatorConfig]:
        return [config for config in self.validators if config.enabled]

    def get_validator_by_id(self, validator_id: str) -> ValidatorConfig | None:
        return next((c for c in self.validators if c.id == validator_id), None)


def _settings_path(path: Path | str | None) -> Path:
    if path is not None:
        return Path(path)
    return Path(os.environ.get(CONFIG_PATH_ENV_VAR) or DEFAULT_CONFIG_PATH)


def _describe(errors: Iterable) -> str:
    return "\n".join(
        f"- {'/'.join(str(p) for p in error.path) or '<root>'}: {error.message}"
        for error in errors
    )


def _read_document(path: Path) -> Any:
    if not path.exists():
        raise ConfigError(f"Settings file not found: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read settings file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in settings file {path}: {exc}") from exc


def load_settings(path: Path | str | None = None) -> Settings:
    """Load endpoint settings.

    The file is ``path`` when given, else ``$W3C_VALIDATORS_CONFIG``, else the
    bundled defaults.

    Raises:
        ConfigError: If the file is missing or unreadable, is not valid JSON,
            fails the schema, or lists the same validator id twice.
    """
    settings_path = _settings_path(path)
    document = _read_document(settings_path)

    schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
    errors = sorted(
        Draft202012Validator(schema).iter_errors(document),
        key=lambda e: [str(p) for p in e.path],
    )
    if errors:
        raise ConfigError(
            f"{settings_path} does not match the settings schema:\n{_describe(errors)}"
        )

    configs = [ValidatorConfig.from_entry(entry) for entry in document["validators"]]
    ids = [config.id for config in configs]
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        raise ConfigError(f"Validator ids listed more than once: {', '.join(duplicates)}")

    return Settings(validators=configs)


def validate_validator_kinds(settings: Settings) -> None:
    """Raise ConfigError if an enabled endpoint names a kind with no client class."""
    known = get_known_kinds()
    unknown = sorted({c.kind for c in settings.get_enabled_validators()} - set(known))
    if unknown:
        raise ConfigError(
            f"No client for validator kind(s) {', '.join(unknown)}; "
            f"available: {', '.join(known)}"
        )
