# config.py
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Iterable, Mapping, Optional


DEFAULT_SERVICES = ("nginx", "apache2", "ssh", "haproxy", "named")
DEFAULT_SCRIPT_VERSION = "v1.1"
FALLBACK_SCRIPT_VERSION = "v0.0.1"
DEFAULT_REBOOT_SENTINEL = "/var/run/reboot-required"
DEFAULT_REBOOT_MESSAGE = "System rebooting to complete updates. Save your work!"
LOG_SINKS = ("journal", "stdout")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class ConfigError(ValueError):
    """Raised when an environment value cannot be parsed."""


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean (true/false), got {raw!r}")


def _parse_delay(name: str, raw: str) -> int:
    try:
        value = int(raw.strip())
    except ValueError:
        raise ConfigError(f"{name} must be an integer number of minutes, got {raw!r}") from None
    if value < 1:
        raise ConfigError(f"{name} must be at least 1 minute, got {value}")
    return value


def normalize_services(names: Iterable[str]) -> tuple[str, ...]:
    """Strip blanks and duplicates, keeping first-seen order."""
    seen: dict[str, None] = {}
    for name in names:
        name = name.strip()
        if name and name not in seen:
            seen[name] = None
    return tuple(seen)


@dataclass(frozen=True)
class UpdateConfig:
    """
    Everything a run needs to know up front.

    Build it with `UpdateConfig.from_env()` and override single fields with
    `with_overrides()` (the CLI does this for its flags).
    """
    auto_reboot: bool = True
    script_version: str = DEFAULT_SCRIPT_VERSION
    service_list: tuple[str, ...] = DEFAULT_SERVICES
    reboot_sentinel: str = DEFAULT_REBOOT_SENTINEL
    reboot_delay_minutes: int = 1
    reboot_message: str = DEFAULT_REBOOT_MESSAGE
    log_sink: str = "journal"
    tag: str = "auto-update"
    package_manager: str = "apt"

    def __post_init__(self) -> None:
        if self.log_sink not in LOG_SINKS:
            raise ConfigError(f"log_sink must be one of {', '.join(LOG_SINKS)}, got {self.log_sink!r}")
        if not self.script_version:
            object.__setattr__(self, "script_version", FALLBACK_SCRIPT_VERSION)
        object.__setattr__(self, "service_list", normalize_services(self.service_list))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> UpdateConfig:
        env = os.environ if environ is None else environ
        kwargs = {}

        if "AUTO_UPDATE_AUTO_REBOOT" in env:
            kwargs["auto_reboot"] = _parse_bool("AUTO_UPDATE_AUTO_REBOOT", env["AUTO_UPDATE_AUTO_REBOOT"])
        if "AUTO_UPDATE_SCRIPT_VERSION" in env:
            kwargs["script_version"] = env["AUTO_UPDATE_SCRIPT_VERSION"].strip()
        if "AUTO_UPDATE_SERVICES" in env:
            kwargs["service_list"] = tuple(env["AUTO_UPDATE_SERVICES"].split(","))
        if "AUTO_UPDATE_REBOOT_SENTINEL" in env:
            kwargs["reboot_sentinel"] = env["AUTO_UPDATE_REBOOT_SENTINEL"]
        if "AUTO_UPDATE_REBOOT_DELAY" in env:
            kwargs["reboot_delay_minutes"] = _parse_delay("AUTO_UPDATE_REBOOT_DELAY", env["AUTO_UPDATE_REBOOT_DELAY"])
        if "AUTO_UPDATE_REBOOT_MESSAGE" in env:
            kwargs["reboot_message"] = env["AUTO_UPDATE_REBOOT_MESSAGE"]
        if "AUTO_UPDATE_LOG_SINK" in env:
            kwargs["log_sink"] = env["AUTO_UPDATE_LOG_SINK"].strip().lower()
        if "AUTO_UPDATE_PACKAGE_MANAGER" in env:
            kwargs["package_manager"] = env["AUTO_UPDATE_PACKAGE_MANAGER"].strip()

        return cls(**kwargs)

    def with_overrides(self, **changes) -> UpdateConfig:
        """Return a copy with the non-None values in `changes` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
