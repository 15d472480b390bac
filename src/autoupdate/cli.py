# cli.py
from __future__ import annotations

import socket
import sys

import click

from autoupdate.config import LOG_SINKS, ConfigError, UpdateConfig
from autoupdate.ui.console import Console, set_console
from autoupdate.workflow import run_update


@click.command()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.option(
    "--auto-reboot/--no-auto-reboot",
    default=None,
    help="Reboot when required instead of restarting services [env: AUTO_UPDATE_AUTO_REBOOT]",
)
@click.option(
    "--service",
    "services",
    multiple=True,
    help="Service to restart when a reboot is skipped (repeatable, replaces the default list)",
)
@click.option(
    "--log-sink",
    type=click.Choice(LOG_SINKS),
    default=None,
    help="Where structured events go [env: AUTO_UPDATE_LOG_SINK]",
)
def cli(debug, auto_reboot, services, log_sink):
    """auto-update: unattended apt update with structured journal logging."""
    console = Console(debug=debug)
    set_console(console)

    try:
        config = UpdateConfig.from_env().with_overrides(
            auto_reboot=auto_reboot,
            service_list=tuple(services) if services else None,
            log_sink=log_sink,
        )
    except ConfigError as e:
        console.print_error(
            "Invalid configuration",
            str(e),
            suggestion="Fix the AUTO_UPDATE_* environment variables or pass the matching flag.",
        )
        sys.exit(1)

    console.progress_to_stderr = config.log_sink == "stdout"

    try:
        console.print_run_started(
            server=socket.gethostname(),
            version=config.script_version,
            auto_reboot=config.auto_reboot,
            services=config.service_list,
        )

        code = run_update(config)

        console.print_finished(code)
        sys.exit(code)

    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
