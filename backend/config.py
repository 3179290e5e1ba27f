"""
Run configuration: built once in main and passed to whoever needs it.

Precedence, highest first: CLI flag, environment variable, YAML config file,
built-in default.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

import yaml

DEFAULT_HOST_FILE = "/etc/hosts"
DEFAULT_LOG_LEVEL = "INFO"

ENV_HOST_FILE = "K8S_INGRESS_HOSTS_FILE"
ENV_WRITE = "K8S_INGRESS_HOSTS_WRITE"
ENV_KUBECONFIG = "KUBECONFIG"
ENV_CONTEXT = "K8S_INGRESS_HOSTS_CONTEXT"
ENV_LOG_LEVEL = "K8S_INGRESS_HOSTS_LOG_LEVEL"

_CONFIG_KEYS = {"host_file", "write", "kubeconfig", "context", "log_level"}


class ConfigError(ValueError):
    """Configuration file or value is unusable."""


@dataclass(frozen=True)
class RunConfig:
    host_file: str = DEFAULT_HOST_FILE
    write: bool = False                  # False → print the block to stdout
    kubeconfig: Optional[str] = None     # None → client default, then in-cluster
    context: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level.upper(), logging.INFO)


def _parse_bool(value, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        v = value.strip().lower()
        if v in ("1", "true", "yes", "on"):
            return True
        if v in ("0", "false", "no", "off", ""):
            return False
    raise ConfigError(f"{key}: expected a boolean, got {value!r}")


def load_config_file(path: str | Path) -> dict:
    """Read the optional YAML config file. Unknown keys are rejected."""
    path = Path(path)
    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: top level must be a mapping")

    unknown = set(raw) - _CONFIG_KEYS
    if unknown:
        raise ConfigError(f"{path}: unknown keys {', '.join(sorted(unknown))}")
    return raw


def _from_env(env: Mapping[str, str]) -> dict:
    values: dict = {}
    if env.get(ENV_HOST_FILE):
        values["host_file"] = env[ENV_HOST_FILE]
    if env.get(ENV_WRITE):
        values["write"] = env[ENV_WRITE]
    if env.get(ENV_KUBECONFIG):
        values["kubeconfig"] = env[ENV_KUBECONFIG]
    if env.get(ENV_CONTEXT):
        values["context"] = env[ENV_CONTEXT]
    if env.get(ENV_LOG_LEVEL):
        values["log_level"] = env[ENV_LOG_LEVEL]
    return values


def build_config(
    cli: Mapping[str, object] | None = None,
    env: Mapping[str, str] | None = None,
    config_file: str | Path | None = None,
) -> RunConfig:
    """
    Merge the configuration layers into one RunConfig.

    cli holds only the flags the user actually passed (None values are ignored).
    """
    values: dict = {}
    if config_file:
        values.update(load_config_file(config_file))
    values.update(_from_env(os.environ if env is None else env))
    values.update({k: v for k, v in (cli or {}).items() if v is not None})

    write = _parse_bool(values.get("write", False), "write")

    host_file = values.get("host_file") or DEFAULT_HOST_FILE
    if not isinstance(host_file, str):
        raise ConfigError(f"host_file: expected a path, got {host_file!r}")

    log_level = str(values.get("log_level") or DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"log_level: unknown level {log_level!r}")

    return RunConfig(
        host_file=host_file,
        write=write,
        kubeconfig=values.get("kubeconfig") or None,
        context=values.get("context") or None,
        log_level=log_level,
    )
