"""Console output formatting utilities for auto-update."""

from __future__ import annotations

import sys
from typing import Optional


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False, progress_to_stderr: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
            progress_to_stderr: If True, progress lines go to stderr so stdout
                carries only structured events
        """
        self.debug = debug
        self.progress_to_stderr = progress_to_stderr

    def _out(self):
        return sys.stderr if self.progress_to_stderr else sys.stdout

    def print_run_started(
        self,
        server: str,
        version: str,
        auto_reboot: bool,
        services: list[str] | tuple[str, ...],
    ) -> None:
        """Print run start information."""
        print("\nUPDATE STARTED", file=self._out())
        print(f"Server: {server}", file=self._out())
        print(f"Version: {version}", file=self._out())
        print(f"Auto reboot: {'on' if auto_reboot else 'off'}", file=self._out())
        print(f"Services: {', '.join(services) or '(none)'}", file=self._out())
        print(file=self._out())

    def print_step(self, name: str) -> None:
        """Print step start message."""
        print(f"STEP: {name}", file=self._out())

    def print_success(self, name: str) -> None:
        """Print success message."""
        print(f"STATUS: {name} succeeded", file=self._out())

    def print_failure(
        self,
        name: str,
        reason: str,
        exit_code: Optional[int] = None,
        hint: Optional[str] = None,
    ) -> None:
        """
        Print failure message.

        Args:
            name: Step name
            reason: Failure reason (usually the command's stderr tail)
            exit_code: Optional exit code
            hint: Optional hint for user
        """
        print(f"STEP FAILED: {name}", file=sys.stderr)
        if exit_code is not None:
            print(f"Exit code: {exit_code}", file=sys.stderr)
        if hint:
            print(f"Hint: {hint}", file=sys.stderr)
        if self.debug:
            print(f"Error details: {reason}", file=sys.stderr)
        else:
            # Last line of the tool's output is usually the actual error
            lines = [line for line in (reason or "").splitlines() if line.strip()]
            print(f"Error: {lines[-1] if lines else 'Unknown error'}", file=sys.stderr)

    def print_results(self, results: dict[str, str]) -> None:
        """Print service restart summary."""
        if not results:
            return
        print("\n" + "=" * 40, file=self._out())
        print("SERVICES", file=self._out())
        print("=" * 40, file=self._out())
        for service, status in results.items():
            print(f"  {service}: {status.upper()}", file=self._out())

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exc()
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_finished(self, exit_code: int) -> None:
        """Print run completion message."""
        print("\nUPDATE COMPLETE" if exit_code == 0 else "\nUPDATE ABORTED", file=self._out())
        print(f"Exit code: {exit_code}", file=self._out())

    def print_info(self, message: str) -> None:
        """Print informational message."""
        print(message, file=self._out())

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
