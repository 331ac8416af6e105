# clj_installer/cli.py
# -*- coding: utf-8 -*-
"""
Command-line entry point: ``clj-install``.
"""

import signal
import sys
from typing import Optional

import click

from clj_installer.config_loader import load_app_settings
from clj_installer.common.logging_config import setup_logging
from clj_installer.exceptions import BootstrapError
from clj_installer.main_installer import run_bootstrap

EXIT_INTERRUPTED = 130
EXIT_TERMINATED = 143


def _exit_on_sigterm(signum, frame):
    # Unwinds through run_bootstrap's finally so cleanup still runs.
    raise SystemExit(EXIT_TERMINATED)


@click.command(name="clj-install")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="YAML file overriding the default settings.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output.")
@click.option(
    "--log-format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Console log format.",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also write JSON logs to this file.",
)
def main(
    config_file: Optional[str],
    verbose: bool,
    log_format: str,
    log_file: Optional[str],
) -> None:
    """
    Set up a Clojure development environment: JDK, Clojure CLI, an editor
    and a shared deps.edn. Safe to run again; completed steps are skipped.
    """
    logger = setup_logging(
        verbose=verbose, log_format=log_format, log_file_path=log_file
    )
    signal.signal(signal.SIGTERM, _exit_on_sigterm)

    try:
        app_settings = load_app_settings(config_file, logger)
        run_bootstrap(app_settings, current_logger=logger)
    except BootstrapError as e:
        logger.error(str(e))
        sys.exit(e.exit_code)
    except KeyboardInterrupt:
        logger.warning("Interrupted.")
        sys.exit(EXIT_INTERRUPTED)


if __name__ == "__main__":
    main()
