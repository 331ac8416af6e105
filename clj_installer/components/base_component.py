"""
Base component class for all bootstrap components.

This module provides the base class that every component (runtime,
toolchain, editors, shared config) inherits from, and the context object
that carries the collaborators they share.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from clj_installer.common.command_utils import (
    CommandRunner,
    get_symbols,
    log_step,
)
from clj_installer.common.profile_editor import ProfileEditor
from clj_installer.common.prompter import Prompter
from clj_installer.config_models import (
    AppSettings,
    BootstrapReport,
    SystemProfile,
)


class BootstrapContext:
    """
    Everything a component needs for one run.

    ``toolchain_dir`` starts empty and is filled in by the toolchain
    component; later components read it.
    """

    def __init__(
        self,
        app_settings: AppSettings,
        profile: SystemProfile,
        runner: CommandRunner,
        prompter: Prompter,
        profile_editor: ProfileEditor,
    ):
        self.app_settings = app_settings
        self.profile = profile
        self.runner = runner
        self.prompter = prompter
        self.profile_editor = profile_editor
        self.toolchain_dir: Optional[Path] = None
        self.report = BootstrapReport()


class BaseComponent(ABC):
    """
    Base class for all bootstrap components.

    A component is an optionally-installed dependency with a presence check
    and an install action. ``ensure`` only calls ``install`` when
    ``is_installed`` is False; components whose flow involves consent prompts
    override ``ensure``.
    """

    # Class-level metadata, set by the registry decorator
    metadata: Dict[str, Any] = {
        "dependencies": [],  # Component names that must run first
        "description": "",
    }

    def __init__(
        self,
        context: BootstrapContext,
        logger: Optional[logging.Logger] = None,
    ):
        self.context = context
        self.app_settings = context.app_settings
        self.runner = context.runner
        self.prompter = context.prompter
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.symbols = get_symbols(self.app_settings)

    @property
    def name(self) -> str:
        return str(self.metadata.get("name", self.__class__.__name__))

    @abstractmethod
    def is_installed(self) -> bool:
        """
        Check if the component is already present.

        Returns:
            True if nothing needs to be installed.
        """

    @abstractmethod
    def install(self) -> None:
        """
        Install the component.

        Raises:
            BootstrapError: On any failure; nothing is retried.
        """

    def ensure(self) -> bool:
        """
        Install the component unless it is already present.

        Returns:
            True if something was installed, False if it was already satisfied.
        """
        if self.is_installed():
            log_step(
                f"{self.symbols.get('success', '✅')} {self.name} is already installed, nothing to do.",
                "success",
                self.logger,
                self.app_settings,
            )
            self.context.report.already_present.append(self.name)
            return False
        log_step(
            f"{self.symbols.get('step', '➡️')} Installing {self.name}...",
            "info",
            self.logger,
            self.app_settings,
        )
        self.install()
        self.context.report.installed.append(self.name)
        return True

    def get_description(self) -> str:
        return str(self.metadata.get("description", ""))
