# workflow.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .commands import SystemCommands, hint_for
from .config import UpdateConfig
from .events import EventLogger, make_sink
from .model import Stage, WorkflowState
from .reboot import RebootPolicy
from .stages import maintenance_stages
from .ui.console import get_console


# ----------------------------------------------------------------------
# Errors
# ----------------------------------------------------------------------

@dataclass
class StepFailure(Exception):
    action: str
    command: str
    exit_code: Optional[int]
    detail: str = ""

    def __str__(self) -> str:
        return f"[{self.action}] command failed (exit={self.exit_code}): {self.command}"


# ----------------------------------------------------------------------
# Workflow
# ----------------------------------------------------------------------

class UpdateWorkflow:
    """
    start -> apt-update -> apt-upgrade -> cleanup -> reboot-check -> reboot policy -> end

    The three maintenance stages are fatal on failure; everything after them
    always runs through to the end event.
    """

    def __init__(self, config: UpdateConfig, commands: SystemCommands, logger: EventLogger):
        self.config = config
        self.commands = commands
        self.logger = logger
        self.state = WorkflowState(auto_reboot=config.auto_reboot)

    def _run_stage(self, stage: Stage) -> None:
        """Run the stage's commands in order, stopping at the first failure."""
        console = get_console()
        for command in stage.commands:
            console.print_step(f"{stage.action}: {command.name}")
            result = self.commands.run(command)
            if not result.ok:
                raise StepFailure(
                    action=stage.action,
                    command=str(command),
                    exit_code=result.exit_code,
                    detail=result.detail,
                )

    def run(self) -> int:
        console = get_console()
        state = self.state

        state.advance("start")
        self.logger.emit(action="start", result="ok", message="System update initiated")

        for stage in maintenance_stages(self.commands):
            state.advance(stage.action)
            try:
                self._run_stage(stage)
            except StepFailure as e:
                self.logger.emit(action=stage.action, result="failure", message=stage.failure_message)
                console.print_failure(
                    stage.action,
                    e.detail or str(e),
                    exit_code=e.exit_code,
                    hint=hint_for(e.command.split()),
                )
                return 1
            self.logger.emit(action=stage.action, result="success", message=stage.success_message)
            console.print_success(stage.action)

        state.advance("reboot-check")
        state.reboot_required = self.commands.reboot_required(self.config.reboot_sentinel)
        if state.reboot_required:
            self.logger.emit(action="reboot-check", result="required", message="System reboot required")
        else:
            self.logger.emit(action="reboot-check", result="not-required", message="No reboot required")
        console.print_info(f"Reboot required: {'yes' if state.reboot_required else 'no'}")

        state.advance("reboot")
        RebootPolicy(self.config, self.commands, self.logger).decide(state.reboot_required, state.auto_reboot)

        state.advance("end")
        self.logger.emit(action="end", result="success", message="System update completed")
        state.finish()
        return 0


def run_update(
    config: UpdateConfig,
    commands: Optional[SystemCommands] = None,
    logger: Optional[EventLogger] = None,
) -> int:
    """Run one maintenance pass and return the process exit code."""
    if config.log_sink == "stdout":
        # stdout carries the event stream; keep progress lines off it
        get_console().progress_to_stderr = True
    if commands is None:
        commands = SystemCommands(package_manager=config.package_manager)
    if logger is None:
        logger = EventLogger(
            make_sink(config.log_sink, config.tag),
            script_version=config.script_version,
            event_type=config.tag,
        )
    return UpdateWorkflow(config, commands, logger).run()
