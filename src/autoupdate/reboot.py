# reboot.py
from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable

from .commands import SystemCommands, hint_for
from .config import UpdateConfig
from .events import EventLogger
from .ui.console import get_console


class RebootAction(str, Enum):
    NOT_REQUIRED = "not-required"
    AUTO_REBOOT = "auto-reboot"
    MANUAL_RESTART = "manual-restart"


class ServiceRestartSweep:
    """
    Restart every active service in the list, in order.

    Outcomes per service: missing, skipped, success, failure. None of them
    stops the sweep.
    """

    def __init__(self, commands: SystemCommands, logger: EventLogger):
        self.commands = commands
        self.logger = logger

    def restart_one(self, name: str) -> str:
        if not self.commands.service_registered(name):
            result, message = "missing", f"{name} not installed"
        elif not self.commands.service_active(name):
            result, message = "skipped", f"{name} is not active"
        else:
            outcome = self.commands.restart_service(name)
            if outcome.ok:
                result, message = "success", f"Restarted {name}"
            else:
                result, message = "failure", f"Failed to restart {name}"
                get_console().print_failure(
                    f"restart {name}",
                    outcome.detail,
                    exit_code=outcome.exit_code,
                )

        self.logger.emit(action="service-restart", result=result, message=message, service=name)
        return result

    def run(self, service_list: Iterable[str]) -> Dict[str, str]:
        results: Dict[str, str] = {}
        for name in service_list:
            results[name] = self.restart_one(name)
        get_console().print_results(results)
        return results


class RebootPolicy:
    """Reboot later, restart services, or do nothing."""

    def __init__(self, config: UpdateConfig, commands: SystemCommands, logger: EventLogger):
        self.config = config
        self.commands = commands
        self.logger = logger

    @staticmethod
    def choose(reboot_required: bool, auto_reboot: bool) -> RebootAction:
        if not reboot_required:
            return RebootAction.NOT_REQUIRED
        if auto_reboot:
            return RebootAction.AUTO_REBOOT
        return RebootAction.MANUAL_RESTART

    def decide(self, reboot_required: bool, auto_reboot: bool) -> RebootAction:
        action = self.choose(reboot_required, auto_reboot)

        if action is RebootAction.AUTO_REBOOT:
            self._schedule_reboot()
        elif action is RebootAction.MANUAL_RESTART:
            self.logger.emit(
                action="reboot",
                result="skipped",
                message="Reboot required but skipped - restarting services",
            )
            ServiceRestartSweep(self.commands, self.logger).run(self.config.service_list)

        return action

    def _schedule_reboot(self) -> None:
        delay = self.config.reboot_delay_minutes
        unit = "minute" if delay == 1 else "minutes"
        self.logger.emit(action="reboot", result="scheduled", message=f"System will reboot in {delay} {unit}")

        outcome = self.commands.schedule_reboot(delay, self.config.reboot_message)
        console = get_console()
        if outcome.ok:
            console.print_info(f"Reboot scheduled in {delay} {unit}")
        else:
            # the reboot is fire-and-forget; the run still ends normally
            console.print_failure(
                "schedule reboot",
                outcome.detail,
                exit_code=outcome.exit_code,
                hint=hint_for([self.commands.shutdown]),
            )
