# model.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional


EVENT_TYPE = "auto-update"
DEFAULT_SERVICE = "update-script"


@dataclass(frozen=True)
class Command:
    """A single external invocation (argv + extra environment)."""
    name: str
    argv: tuple[str, ...]
    env: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        return " ".join(self.argv)


@dataclass(frozen=True)
class Stage:
    """
    A maintenance stage: one logged action backed by one or more commands.

    Every command must succeed, in order, for the stage to succeed.
    """
    action: str
    commands: tuple[Command, ...]
    success_message: str
    failure_message: str


@dataclass(frozen=True)
class CommandResult:
    """Typed outcome of an external call."""
    ok: bool
    exit_code: Optional[int] = 0
    detail: str = ""

    @classmethod
    def success(cls, detail: str = "") -> CommandResult:
        return cls(ok=True, exit_code=0, detail=detail)

    @classmethod
    def failure(cls, detail: str, exit_code: Optional[int] = None) -> CommandResult:
        return cls(ok=False, exit_code=exit_code, detail=detail)

    def __bool__(self) -> bool:
        return self.ok


@dataclass(frozen=True)
class Event:
    """One structured log record. Field order is the wire order."""
    timestamp: str
    event_type: str
    service: str
    server: str
    action: str
    result: str
    message: str
    script_version: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "timestamp": self.timestamp,
            "event_type": self.event_type,
            "service": self.service,
            "server": self.server,
            "action": self.action,
            "result": self.result,
            "message": self.message,
            "script_version": self.script_version,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))


@dataclass
class WorkflowState:
    """
    Mutable state of a single run.

    `step` is the action currently executing; `completed` keeps the
    actions that finished, in order.
    """
    auto_reboot: bool
    reboot_required: bool = False
    step: Optional[str] = None
    completed: List[str] = field(default_factory=list)

    def advance(self, action: str) -> None:
        if self.step is not None:
            self.completed.append(self.step)
        self.step = action

    def finish(self) -> None:
        if self.step is not None:
            self.completed.append(self.step)
        self.step = None
