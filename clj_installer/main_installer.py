# clj_installer/main_installer.py
# -*- coding: utf-8 -*-
"""
Runs the bootstrap sequence from platform detection to cleanup.
"""

import logging
from typing import List, Optional

from clj_installer.common.command_utils import (
    CommandRunner,
    get_symbols,
    log_step,
)
from clj_installer.common.file_utils import cleanup_directories
from clj_installer.common.profile_editor import ProfileEditor
from clj_installer.common.prompter import CliPrompter, Prompter
from clj_installer.common.system_utils import build_system_profile
from clj_installer.components import BootstrapContext, ComponentRegistry
from clj_installer.config_models import AppSettings, BootstrapReport

module_logger = logging.getLogger(__name__)

BOOTSTRAP_SEQUENCE: List[str] = [
    "runtime",
    "toolchain",
    "editors",
    "shared-config",
]


def run_cleanup(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> None:
    cleanup_directories(app_settings.temp_dirs, app_settings, current_logger)


def run_bootstrap(
    app_settings: AppSettings,
    prompter: Optional[Prompter] = None,
    runner: Optional[CommandRunner] = None,
    current_logger: Optional[logging.Logger] = None,
) -> BootstrapReport:
    """
    Detect the platform, then ensure each component in dependency order.

    Each step is skipped when its presence check passes, so running again
    resumes where a failed run stopped. Completed steps are never rolled
    back. Temporary directories are removed however the run ends.

    Returns:
        A report of what was installed, kept and backed up.

    Raises:
        BootstrapError: The first failure; later steps do not run.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    runner = runner or CommandRunner(app_settings, logger_to_use)
    prompter = prompter or CliPrompter(app_settings, logger_to_use)

    try:
        profile = build_system_profile(runner, app_settings, logger_to_use)
        context = BootstrapContext(
            app_settings=app_settings,
            profile=profile,
            runner=runner,
            prompter=prompter,
            profile_editor=ProfileEditor(
                profile.rc_file, app_settings, logger_to_use
            ),
        )

        for name in ComponentRegistry.resolve_dependencies(BOOTSTRAP_SEQUENCE):
            component = ComponentRegistry.get_component(name)(
                context, logger_to_use
            )
            log_step(
                f"{symbols.get('step', '➡️')} Step: {name} ({component.get_description()})",
                "info",
                logger_to_use,
                app_settings,
            )
            component.ensure()

        context.report.toolchain_dir = context.toolchain_dir
        log_step(
            f"{symbols.get('sparkles', '✨')} Setup complete! Open a new shell or run `source {profile.rc_file}`.",
            "success",
            logger_to_use,
            app_settings,
        )
        return context.report
    finally:
        run_cleanup(app_settings, logger_to_use)
