"""Connection settings for the Lotus RPC client."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from .client import ClientConfig
from .errors import ConfigurationError
from .transport import DEFAULT_TIMEOUT_SECONDS

DEFAULT_CONFIG_DIR = Path(os.environ.get("LOTUS_RPC_HOME", Path.home() / ".lotus-rpc"))
CONFIG_FILENAME = "config.toml"

ENV_API_ADDRESS = "LOTUS_API_ADDRESS"
ENV_TOKEN = "LOTUS_API_TOKEN"
ENV_TIMEOUT = "LOTUS_TIMEOUT"


class LotusSettings(BaseModel):
    """Settings used to build a :class:`~lotus_rpc.client.LotusRPCClient`."""

    api_address: str = ""
    token: str | None = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def client_config(self) -> ClientConfig:
        return ClientConfig(api_address=self.api_address, token=self.token or None)


def load_settings(
    config_path: Path | None = None,
    *,
    api_address: str | None = None,
    token: str | None = None,
) -> LotusSettings:
    """Merge the config file, environment and explicit overrides (last wins)."""

    path = config_path or DEFAULT_CONFIG_DIR / CONFIG_FILENAME
    data: dict[str, Any] = _read_config_dict(path)

    env_values = {
        "api_address": os.environ.get(ENV_API_ADDRESS),
        "token": os.environ.get(ENV_TOKEN),
        "timeout_seconds": os.environ.get(ENV_TIMEOUT),
    }
    data.update({key: value for key, value in env_values.items() if value})

    if api_address:
        data["api_address"] = api_address
    if token:
        data["token"] = token

    try:
        return LotusSettings(**data)
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc


def _read_config_dict(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        return tomllib.loads(path.read_text())
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigurationError(f"Failed to load config from {path}: {exc}") from exc


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG_DIR",
    "LotusSettings",
    "load_settings",
]
