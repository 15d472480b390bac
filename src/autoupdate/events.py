# events.py
from __future__ import annotations

import socket
import subprocess
import sys
from datetime import datetime
from typing import Callable, Optional, TextIO

from .config import FALLBACK_SCRIPT_VERSION
from .model import DEFAULT_SERVICE, EVENT_TYPE, Event
from .ui.console import get_console


Sink = Callable[[str], None]


def now_iso() -> str:
    """Local time, seconds precision, explicit UTC offset (like `date --iso-8601=seconds`)."""
    return datetime.now().astimezone().isoformat(timespec="seconds")


class JournalSink:
    """Pipe each line to `systemd-cat -t <tag>` so it lands in the journal."""

    def __init__(self, tag: str = EVENT_TYPE, executable: str = "systemd-cat"):
        self.tag = tag
        self.executable = executable

    def __call__(self, line: str) -> None:
        subprocess.run(
            [self.executable, "-t", self.tag],
            input=line + "\n",
            text=True,
            check=True,
        )


class StreamSink:
    """Write each line to a text stream. Used on hosts without systemd."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def __call__(self, line: str) -> None:
        stream = self.stream or sys.stdout
        stream.write(line + "\n")
        stream.flush()


def make_sink(name: str, tag: str = EVENT_TYPE) -> Sink:
    if name == "journal":
        return JournalSink(tag)
    if name == "stdout":
        return StreamSink()
    raise ValueError(f"Unknown log sink: {name!r}")


class EventLogger:
    """
    Builds one Event per call and hands its JSON line to the sink.

    emit() never raises: the workflow must not depend on the sink working.
    """

    def __init__(
        self,
        sink: Sink,
        *,
        script_version: str = FALLBACK_SCRIPT_VERSION,
        event_type: str = EVENT_TYPE,
        hostname: Optional[str] = None,
        clock: Callable[[], str] = now_iso,
    ):
        self.sink = sink
        self.script_version = script_version or FALLBACK_SCRIPT_VERSION
        self.event_type = event_type
        self.hostname = hostname
        self.clock = clock

    def build(
        self,
        server: Optional[str] = None,
        action: str = "unspecified",
        result: str = "undefined",
        message: str = "generic event",
        service: str = DEFAULT_SERVICE,
    ) -> Event:
        return Event(
            timestamp=self.clock(),
            event_type=self.event_type,
            service=service or DEFAULT_SERVICE,
            server=server or self.hostname or socket.gethostname(),
            action=action,
            result=result,
            message=message,
            script_version=self.script_version,
        )

    def emit(
        self,
        server: Optional[str] = None,
        action: str = "unspecified",
        result: str = "undefined",
        message: str = "generic event",
        service: str = DEFAULT_SERVICE,
    ) -> None:
        try:
            event = self.build(server, action, result, message, service)
            self.sink(event.to_json())
        except Exception as e:
            get_console().print_debug(f"event for {action!r} not logged: {e}")
