"""Config loading and CLI overrides."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from gram.contracts.config import GramConfig
from gram.contracts.exceptions import ConfigError


def load_config(path: str | Path) -> GramConfig:
    config_path = Path(path).expanduser().resolve()

    try:
        raw_payload: Any = json.loads(config_path.read_text(encoding="utf-8"))
        return GramConfig.model_validate(raw_payload)
    except OSError as exc:
        raise ConfigError(f"failed reading config file: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in config file: {config_path}") from exc
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc


def build_config(base: GramConfig | None = None, **overrides: Any) -> GramConfig:
    """Apply non-``None`` overrides on top of *base* (or the defaults) and revalidate.

    Switching ``auth`` away from ``token`` drops an inherited token so the
    result stays valid.
    """
    explicit = {key: value for key, value in overrides.items() if value is not None}
    payload = (base or GramConfig()).model_dump()
    payload.update(explicit)
    if payload["auth"] != "token" and "token" not in explicit:
        payload["token"] = None
    try:
        return GramConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc
