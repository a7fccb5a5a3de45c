"""Configuration management for jsonwebdb.

Handles TOML config files, environment variables, named profiles,
and configuration precedence resolution.

Precedence order (highest to lowest):
1. CLI flags (--url, --user, etc.)
2. Environment variables (JSONWEBDB_URL, JSONWEBDB_USER, ...)
3. Named profile (--profile or JSONWEBDB_PROFILE env var)
4. Config file defaults
5. Built-in defaults
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel, field_validator

from jsonwebdb.core.exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "jsonwebdb" / "config.toml"

_ENV_VARS: dict[str, str] = {
    "JSONWEBDB_URL": "url",
    "JSONWEBDB_USER": "username",
    "JSONWEBDB_PASSWORD": "password",  # pragma: allowlist secret
    "JSONWEBDB_SESSION": "session_id",
    "JSONWEBDB_TIMEOUT": "timeout",
}

_PROFILE_DEFAULTS: dict[str, Any] = {
    "url": "http://localhost:9002/",
    "username": None,
    "password": None,
    "session_id": None,
    "timeout": 30.0,
    "verify_ssl": True,
}


def validate_url(url: str) -> str:
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        msg = f"Invalid URL: '{url}'. Expected http:// or https://"
        raise ValueError(msg)
    return url


class Profile(BaseModel):
    url: str = "http://localhost:9002/"
    username: str | None = None
    password: str | None = None
    session_id: str | None = None
    timeout: float = 30.0
    verify_ssl: bool = True

    @field_validator("url")
    @classmethod
    def check_url(cls, v: str) -> str:
        return validate_url(v)

    @field_validator("timeout")
    @classmethod
    def check_timeout(cls, v: float) -> float:
        if v <= 0:
            msg = f"Invalid timeout: {v}. Must be positive"
            raise ValueError(msg)
        return v


class AppConfig(BaseModel):
    default_timeout: float = 30.0
    default_format: str = "table"
    default_profile: str | None = None
    language: str = "en"
    sentry_dsn: str | None = None
    profiles: dict[str, Profile] = {}


class ResolvedConfig(BaseModel):
    url: str = "http://localhost:9002/"
    username: str | None = None
    password: str | None = None
    session_id: str | None = None
    timeout: float = 30.0
    verify_ssl: bool = True
    default_format: str = "table"
    language: str = "en"
    sentry_dsn: str | None = None
    active_profile: str | None = None
    sources: dict[str, str] = {}


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load configuration from TOML file.

    Returns default AppConfig if file doesn't exist.
    Raises ConfigError on malformed TOML or invalid config.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not config_path.exists():
        return AppConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Malformed TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return AppConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid configuration in {config_path}: {e}"
        raise ConfigError(msg) from e


def resolve_config(
    config: AppConfig,
    profile_name: str | None = None,
    **cli_overrides: Any,
) -> ResolvedConfig:
    """Resolve configuration using precedence chain.

    CLI > env > profile > config defaults > built-in defaults.
    """
    sources: dict[str, str] = {}
    resolved: dict[str, Any] = {}

    # Layer 1: Built-in defaults
    resolved.update(_PROFILE_DEFAULTS)
    resolved["default_format"] = "table"
    for key in resolved:
        sources[key] = "default"

    # Layer 2: Config file global defaults
    if config.default_timeout != 30.0:
        resolved["timeout"] = config.default_timeout
        sources["timeout"] = "config"
    if config.default_format != "table":
        resolved["default_format"] = config.default_format
        sources["default_format"] = "config"

    # Layer 3: Named profile
    effective_profile = profile_name
    if not effective_profile:
        effective_profile = os.environ.get("JSONWEBDB_PROFILE")
    if not effective_profile:
        effective_profile = config.default_profile

    if effective_profile:
        if effective_profile not in config.profiles:
            available = (
                ", ".join(sorted(config.profiles.keys())) if config.profiles else "none"
            )
            msg = f"Unknown profile: '{effective_profile}'. Available profiles: {available}"
            raise ConfigError(msg)
        profile = config.profiles[effective_profile]
        for key in profile.model_fields_set:
            if key in resolved:
                resolved[key] = getattr(profile, key)
                sources[key] = f"profile: {effective_profile}"

    # Layer 4: Environment variables
    for env_var, field_name in _ENV_VARS.items():
        value = os.environ.get(env_var)
        if value is not None:
            if field_name == "timeout":
                try:
                    resolved[field_name] = float(value)
                except ValueError:
                    msg = f"Invalid {env_var} value: '{value}'. Must be a number"
                    raise ConfigError(msg) from None
            else:
                resolved[field_name] = value
            sources[field_name] = f"env: {env_var}"

    # Layer 5: CLI flags (highest priority)
    cli_to_field = {
        "url": "url",
        "user": "username",
        "password": "password",  # pragma: allowlist secret
        "session": "session_id",
        "timeout": "timeout",
    }
    for cli_name, field_name in cli_to_field.items():
        value = cli_overrides.get(cli_name)
        if value is not None:
            resolved[field_name] = value
            sources[field_name] = f"cli: --{cli_name}"

    try:
        validate_url(resolved["url"])
    except ValueError as e:
        raise ConfigError(str(e)) from None

    resolved["language"] = config.language
    resolved["sentry_dsn"] = config.sentry_dsn
    resolved["active_profile"] = effective_profile
    resolved["sources"] = sources
    return ResolvedConfig(**resolved)
