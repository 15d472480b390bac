"""Shared pytest fixtures for auto-update tests."""

import json

import pytest

from autoupdate.commands import SystemCommands
from autoupdate.config import UpdateConfig
from autoupdate.events import EventLogger
from autoupdate.model import Command, CommandResult
from autoupdate.ui.console import Console, set_console

FIXED_TIME = "2026-10-18T09:00:00+02:00"


class FakeCommands(SystemCommands):
    """SystemCommands that records calls instead of touching the host."""

    def __init__(
        self,
        *,
        fail: tuple[str, ...] = (),
        reboot: bool = False,
        registered: tuple[str, ...] = (),
        active: tuple[str, ...] = (),
        restart_fails: tuple[str, ...] = (),
        reboot_schedule_ok: bool = True,
    ) -> None:
        super().__init__()
        self.fail = fail
        self.reboot = reboot
        self.registered = registered
        self.active = active
        self.restart_fails = restart_fails
        self.reboot_schedule_ok = reboot_schedule_ok

        self.ran: list[Command] = []
        self.restarted: list[str] = []
        self.scheduled: list[tuple[int, str]] = []

    def run(self, command: Command) -> CommandResult:
        self.ran.append(command)
        if any(word in command.argv for word in self.fail):
            return CommandResult.failure("E: simulated failure", exit_code=100)
        return CommandResult.success()

    def reboot_required(self, sentinel) -> bool:
        return self.reboot

    def schedule_reboot(self, delay_minutes: int, message: str) -> CommandResult:
        self.scheduled.append((delay_minutes, message))
        if self.reboot_schedule_ok:
            return CommandResult.success()
        return CommandResult.failure("Failed to schedule shutdown", exit_code=1)

    def service_registered(self, name: str) -> bool:
        return name in self.registered

    def service_active(self, name: str) -> bool:
        return name in self.active

    def restart_service(self, name: str) -> CommandResult:
        self.restarted.append(name)
        if name in self.restart_fails:
            return CommandResult.failure(f"Job for {name}.service failed", exit_code=1)
        return CommandResult.success()


@pytest.fixture(autouse=True)
def quiet_console() -> None:
    """Fresh non-debug console per test."""
    set_console(Console(debug=False))


@pytest.fixture
def lines() -> list[str]:
    """Raw JSON lines written to the sink."""
    return []


@pytest.fixture
def logger(lines: list[str]) -> EventLogger:
    return EventLogger(
        lines.append,
        script_version="v1.1",
        hostname="web-01",
        clock=lambda: FIXED_TIME,
    )


@pytest.fixture
def events(lines: list[str]):
    """Decoded view of the sink lines, as (action, result) pairs."""

    def _events() -> list[tuple[str, str]]:
        return [(e["action"], e["result"]) for e in map(json.loads, lines)]

    return _events


@pytest.fixture
def config(tmp_path) -> UpdateConfig:
    return UpdateConfig(reboot_sentinel=str(tmp_path / "reboot-required"))


@pytest.fixture
def fake_commands():
    """Factory for FakeCommands: `fake_commands(reboot=True, fail=("update",))`."""
    return FakeCommands
