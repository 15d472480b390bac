# stages.py
from __future__ import annotations

from typing import List

from .commands import SystemCommands
from .model import Command, Stage


# ---------------------------------------------------------------------
# Stage helper
# ---------------------------------------------------------------------

def stage(action: str, *commands: Command, success: str, failure: str) -> Stage:
    """Create a stage: `stage("cleanup", cmd_a, cmd_b, success=..., failure=...)`."""
    if not commands:
        raise ValueError(f"stage({action!r}) must have at least one command")
    return Stage(
        action=action,
        commands=tuple(commands),
        success_message=success,
        failure_message=failure,
    )


# ---------------------------------------------------------------------
# The fatal maintenance stages, in run order
# ---------------------------------------------------------------------

def maintenance_stages(commands: SystemCommands) -> List[Stage]:
    """
    Refresh, upgrade, cleanup. Any failure here ends the run with exit 1.
    """
    return [
        stage(
            "apt-update",
            commands.refresh_index(),
            success="Package list updated",
            failure="Failed to update package list",
        ),
        stage(
            "apt-upgrade",
            commands.upgrade(),
            success="Packages upgraded (kept local config)",
            failure="Failed to upgrade packages",
        ),
        stage(
            "cleanup",
            commands.autoremove(),
            commands.autoclean(),
            success="Autoremove and autoclean completed",
            failure="Cleanup failed",
        ),
    ]
