# commands.py
# Small, focused wrapper around apt, systemctl and shutdown.
# This module centralizes every external call so the workflow never needs
# to look at a raw exit status; it only sees CommandResult values.

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import List, Optional

from .model import Command, CommandResult


TOOL_HINTS = {
    "apt": "Run on a Debian-based host with apt installed.",
    "apt-get": "Run on a Debian-based host with apt installed.",
    "systemctl": "Run on a host managed by systemd.",
    "shutdown": "Install systemd-sysv (provides shutdown) or fix PATH.",
    "systemd-cat": "Install systemd or use --log-sink stdout.",
}

# Output tails kept on failure so the console can show what went wrong.
_TAIL = 4000


def hint_for(argv: List[str] | tuple[str, ...]) -> Optional[str]:
    """Return an install hint for the program in `argv`, if we know one."""
    if not argv:
        return None
    return TOOL_HINTS.get(Path(argv[0]).name)


class SystemCommands:
    """
    The process contract this tool consumes.

    Every method blocks until the underlying process exits. No timeouts are
    applied: a hung package manager hangs the run.
    """

    def __init__(self, package_manager: str = "apt", systemctl: str = "systemctl", shutdown: str = "shutdown"):
        self.package_manager = package_manager
        self.systemctl = systemctl
        self.shutdown = shutdown

    # ------------------------------------------------------------------
    # Low-level entry point
    # ------------------------------------------------------------------

    def run(self, command: Command) -> CommandResult:
        """
        Execute a Command and convert its exit status into a CommandResult.

        A missing executable is reported as a failure instead of raising, so
        callers only ever branch on `result.ok`.
        """
        env = os.environ.copy()
        env.update(command.env)

        try:
            proc = subprocess.run(
                list(command.argv),
                env=env,
                text=True,
                capture_output=True,
            )
        except FileNotFoundError:
            return CommandResult.failure(f"command not found: {command.argv[0]}", exit_code=127)
        except OSError as e:
            return CommandResult.failure(f"could not start {command.argv[0]}: {e}")

        if proc.returncode != 0:
            detail = (proc.stderr or proc.stdout or "").strip()[-_TAIL:]
            return CommandResult.failure(detail, exit_code=proc.returncode)
        return CommandResult.success((proc.stdout or "").strip())

    def _systemctl(self, *args: str) -> Command:
        return Command(name=f"systemctl {args[0]}", argv=(self.systemctl, *args))

    # ------------------------------------------------------------------
    # Package manager
    # ------------------------------------------------------------------

    def refresh_index(self) -> Command:
        return Command(name="refresh package index", argv=(self.package_manager, "update", "-y"))

    def upgrade(self) -> Command:
        """
        Non-interactive upgrade that keeps locally modified config files.

        --force-confdef takes the package default only where the admin never
        touched the file; --force-confold keeps the local copy otherwise.
        """
        return Command(
            name="upgrade packages",
            argv=(
                self.package_manager,
                "-o", "Dpkg::Options::=--force-confdef",
                "-o", "Dpkg::Options::=--force-confold",
                "upgrade", "-y",
            ),
            env=(("DEBIAN_FRONTEND", "noninteractive"),),
        )

    def autoremove(self) -> Command:
        return Command(name="remove obsolete packages", argv=(self.package_manager, "autoremove", "-y"))

    def autoclean(self) -> Command:
        return Command(name="clean package cache", argv=(self.package_manager, "autoclean", "-y"))

    # ------------------------------------------------------------------
    # Reboot state
    # ------------------------------------------------------------------

    def reboot_required(self, sentinel: str | Path) -> bool:
        """The package manager drops this file when an update needs a reboot."""
        return Path(sentinel).exists()

    def schedule_reboot(self, delay_minutes: int, message: str) -> CommandResult:
        """Ask the system to reboot in `delay_minutes`. Returns without waiting."""
        return self.run(
            Command(name="schedule reboot", argv=(self.shutdown, "-r", f"+{delay_minutes}", message))
        )

    # ------------------------------------------------------------------
    # Services
    # ------------------------------------------------------------------

    def load_state(self, name: str) -> str:
        """
        systemd's LoadState for `<name>.service`: loaded, not-found, masked, ...

        `systemctl show` reads unit files from disk, so a disabled and stopped
        service still reports `loaded`. Empty string when systemctl fails.
        """
        result = self.run(self._systemctl("show", "-p", "LoadState", "--value", f"{name}.service"))
        if not result.ok:
            return ""
        return result.detail.strip()

    def service_registered(self, name: str) -> bool:
        return self.load_state(name) not in ("", "not-found")

    def service_active(self, name: str) -> bool:
        return self.run(self._systemctl("is-active", "--quiet", name)).ok

    def restart_service(self, name: str) -> CommandResult:
        return self.run(self._systemctl("restart", name))
