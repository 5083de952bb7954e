"""Configuration manager: read/write TOML config, resolve profiles."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from m2_lifecycle.client.errors import ConfigurationError
from m2_lifecycle.config.constants import (
    CONFIG_FILE,
    DEFAULT_TIMEOUT,
    ENV_API_TOKEN,
    ENV_CONTROL_PLANE_URL,
    ENV_PROFILE,
)
from m2_lifecycle.config.models import AppConfig, ControlPlaneProfile, LifecycleSettings


class ConfigManager:
    """Manages configuration on disk and resolves control-plane profiles."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path = config_path or CONFIG_FILE
        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        if self._config is None:
            self._config = self._load()
        return self._config

    def _load(self) -> AppConfig:
        if not self.config_path.exists():
            return AppConfig()
        try:
            data = tomllib.loads(self.config_path.read_bytes().decode())
        except tomllib.TOMLDecodeError as exc:
            raise ConfigurationError(f"Invalid config file {self.config_path}: {exc}") from exc
        profiles: dict[str, ControlPlaneProfile] = {}
        for name, prof_data in data.get("profiles", {}).items():
            profiles[name] = ControlPlaneProfile(name=name, **prof_data)
        return AppConfig(
            default_profile=data.get("default_profile"),
            log_level=data.get("log_level", "INFO"),
            log_format=data.get("log_format", "json"),
            profiles=profiles,
            lifecycle=LifecycleSettings(**data.get("lifecycle", {})),
        )

    def save(self) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        # Owner-only: profiles hold API tokens
        os.chmod(self.config_path.parent, 0o700)
        data: dict[str, Any] = {}
        if self.config.default_profile:
            data["default_profile"] = self.config.default_profile
        if self.config.log_level != "INFO":
            data["log_level"] = self.config.log_level
        if self.config.log_format != "json":
            data["log_format"] = self.config.log_format
        lifecycle = self.config.lifecycle.model_dump(exclude_defaults=True)
        if lifecycle:
            data["lifecycle"] = lifecycle
        if self.config.profiles:
            data["profiles"] = {}
            for name, profile in self.config.profiles.items():
                # Defaults are dropped to keep the file minimal
                data["profiles"][name] = profile.model_dump(
                    exclude={"name"}, exclude_none=True, exclude_defaults=True,
                )
        # Atomic write: write to temp file, then rename
        temp = self.config_path.with_suffix(".tmp")
        fd = os.open(str(temp), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        try:
            os.write(fd, tomli_w.dumps(data).encode())
        finally:
            os.close(fd)
        temp.rename(self.config_path)

    def set_lifecycle(self, settings: LifecycleSettings) -> None:
        self.config.lifecycle = settings
        self.save()

    def get_profile(self, name: str | None = None) -> ControlPlaneProfile | None:
        if name:
            return self.config.profiles.get(name)
        default = self.config.default_profile
        if default:
            return self.config.profiles.get(default)
        return None

    def resolve_profile(
        self,
        profile_name: str | None = None,
        url: str | None = None,
        token: str | None = None,
    ) -> ControlPlaneProfile:
        """Resolve the control-plane connection.

        Precedence: explicit arguments > env vars > config profile.
        """
        env_profile = os.environ.get(ENV_PROFILE)
        profile = self.get_profile(profile_name or env_profile)

        env_url = os.environ.get(ENV_CONTROL_PLANE_URL)
        env_token = os.environ.get(ENV_API_TOKEN)

        resolved_url = url or env_url or (profile.url if profile else None)
        resolved_token = token or env_token or (profile.token if profile else None)

        if not resolved_url:
            raise ConfigurationError(
                "No control plane URL configured. Add a profile or set "
                f"{ENV_CONTROL_PLANE_URL}."
            )

        return ControlPlaneProfile(
            name=profile.name if profile else "env",
            url=resolved_url.rstrip("/"),
            token=resolved_token,
            verify_ssl=profile.verify_ssl if profile else True,
            timeout=profile.timeout if profile else DEFAULT_TIMEOUT,
        )
