from .config import UpdateConfig, ConfigError
from .events import EventLogger, JournalSink, StreamSink, make_sink
from .model import Command, CommandResult, Event, Stage, WorkflowState
from .reboot import RebootAction, RebootPolicy, ServiceRestartSweep
from .workflow import StepFailure, UpdateWorkflow, run_update

__all__ = [
    "UpdateConfig", "ConfigError",
    "EventLogger", "JournalSink", "StreamSink", "make_sink",
    "Command", "CommandResult", "Event", "Stage", "WorkflowState",
    "RebootAction", "RebootPolicy", "ServiceRestartSweep",
    "StepFailure", "UpdateWorkflow", "run_update",
]
