from __future__ import annotations

"""
Configuration plumbing for Torrent Ranker.

Flips tables if anything looks shady, profiles especially.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from .profile import DEFAULT_PROFILES, Profile, ProfileError, load_profiles

DEFAULT_TORRENTIO_HOST = "https://torrentio.strem.fun"
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; TorrentRanker/1.0)"
DEFAULT_REQUEST_TIMEOUT = 12.0
DEFAULT_SLEEP_BETWEEN_REQUESTS = 0.6


class ConfigError(Exception):
    """Raised when configuration loading faceplants harder than you after reading this."""


@dataclass
class DebridConfig:
    """Debrid credentials: either an API key, or a username and password."""

    provider: str
    api_key: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DebridConfig":
        """
        Build an instance from raw configuration data.

        Parameters
        ----------
        data : dict[str, Any]
            Chunk of config JSON scoped to Debrid.

        Returns
        -------
        DebridConfig
            Credentials ready to be baked into Torrentio URLs.

        Raises
        ------
        ConfigError
            If the provider is missing, or there's neither an API key nor a
            username/password pair. Forgetting your car key inside the car, again.
        """

        try:
            provider = data["provider"]
        except KeyError as exc:
            raise ConfigError(f"Missing Debrid setting: {exc.args[0]}") from exc

        api_key = data.get("api_key")
        username = data.get("username")
        password = data.get("password")
        if not api_key and not (username and password):
            raise ConfigError("Debrid settings need either api_key or username and password")

        return cls(provider=provider, api_key=api_key, username=username, password=password)

    def path_part(self) -> str:
        """Render the credentials the way Torrentio expects them in a URL path."""

        if self.api_key:
            return f"{self.provider}={self.api_key}"
        return f"{self.provider}={self.username}@{self.password}"


@dataclass
class TorrentioConfig:
    """Settings for Torrentio, a.k.a. the talent scout."""

    debrid: DebridConfig
    host: str = DEFAULT_TORRENTIO_HOST
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    sleep_between_requests: float = DEFAULT_SLEEP_BETWEEN_REQUESTS

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TorrentioConfig":
        """
        Build an instance from raw configuration data.

        Parameters
        ----------
        data : dict[str, Any]
            Chunk of config JSON scoped to Torrentio.

        Returns
        -------
        TorrentioConfig
            Fully hydrated config object ready for that first HTTP handshake.

        Raises
        ------
        ConfigError
            If the Debrid section is missing.
        """

        try:
            debrid_data = data["debrid"]
        except KeyError as exc:
            raise ConfigError(f"Missing Torrentio setting: {exc.args[0]}") from exc

        return cls(
            debrid=DebridConfig.from_dict(debrid_data),
            host=str(data.get("host", DEFAULT_TORRENTIO_HOST)).rstrip("/"),
            user_agent=data.get("user_agent", DEFAULT_USER_AGENT),
            request_timeout=float(data.get("request_timeout", DEFAULT_REQUEST_TIMEOUT)),
            sleep_between_requests=float(data.get("sleep_between_requests", DEFAULT_SLEEP_BETWEEN_REQUESTS)),
        )


@dataclass
class LoggingConfig:
    """Lightweight logging configuration for when INFO just isn't loud enough."""

    level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "LoggingConfig":
        """
        Create a logging config from a dict.

        Parameters
        ----------
        data : dict[str, Any] | None
            Optional logging section. ``None`` means we stick with INFO like responsible adults.
        """

        if data is None:
            return cls()
        return cls(level=str(data.get("level", "INFO")).upper())


@dataclass
class AppConfig:
    """Aggregate configuration with Torrentio, profiles, and logging in one friendly bundle."""

    torrentio: TorrentioConfig
    profiles: List[Profile] = field(default_factory=list)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AppConfig":
        """
        Stitch together the full configuration set from JSON.

        Parameters
        ----------
        data : dict[str, Any]
            Entire configuration payload.

        Returns
        -------
        AppConfig
            Everything the app needs to know, tied up in a dataclass bow.

        Raises
        ------
        ConfigError
            If the Torrentio section is missing or any profile fails validation.
        """

        try:
            torrentio_data = data["torrentio"]
        except KeyError as exc:
            raise ConfigError(f"Missing top-level section: {exc.args[0]}") from exc

        if "profiles" in data:
            raw_profiles = data["profiles"]
        else:
            logging.warning("No profiles configured, falling back to the example profiles")
            raw_profiles = DEFAULT_PROFILES

        try:
            profiles = load_profiles(raw_profiles)
        except ProfileError as exc:
            raise ConfigError(f"Invalid profile configuration: {exc}") from exc

        return cls(
            torrentio=TorrentioConfig.from_dict(torrentio_data),
            profiles=profiles,
            logging=LoggingConfig.from_dict(data.get("logging")),
        )


class ConfigLoader:
    """Loads application configuration from JSON files and delivers it."""

    def __init__(self, path: str | Path):
        """
        Parameters
        ----------
        path : str | Path
            File system path where the config JSON resides, probably fell down the couch.
        """

        self.path = Path(path)

    def load(self) -> AppConfig:
        """
        Read and validate the configuration file.

        Returns
        -------
        AppConfig
            The fully parsed configuration bundle.

        Raises
        ------
        ConfigError
            When the file is missing or invalid.
        """

        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise ConfigError(f"Configuration file not found: {self.path}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON configuration: {exc.msg}") from exc

        if not isinstance(payload, dict):
            raise ConfigError("Invalid JSON configuration: expected an object at the top level")
        return AppConfig.from_dict(payload)

    @staticmethod
    def apply_overrides(config: AppConfig, overrides: dict[str, Any]) -> AppConfig:
        """
        Update the in-memory configuration with CLI overrides.

        Parameters
        ----------
        config : AppConfig
            The baseline configuration, straight from the JSON file.
        overrides : dict[str, Any]
            CLI overrides. ``profile_names`` narrows the profile list.

        Returns
        -------
        AppConfig
            The same object, adjusted in place just for this whim.

        Raises
        ------
        ConfigError
            If a requested profile name isn't configured.
        """

        tor = config.torrentio

        if overrides.get("host"):
            tor.host = str(overrides["host"]).rstrip("/")
        if overrides.get("request_timeout") is not None:
            tor.request_timeout = float(overrides["request_timeout"])

        names = overrides.get("profile_names")
        if names:
            known = {profile.name for profile in config.profiles}
            missing = [name for name in names if name not in known]
            if missing:
                raise ConfigError(f"Unknown profile(s): {', '.join(missing)}")
            config.profiles = [profile for profile in config.profiles if profile.name in names]

        return config
