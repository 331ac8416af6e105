# clj_installer/common/prompter.py
# -*- coding: utf-8 -*-
"""
Handles interactive yes/no and free-text questions.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from clj_installer.config_models import AppSettings

from .command_utils import get_symbols, log_step

module_logger = logging.getLogger(__name__)


class Prompter(ABC):
    """Source of user answers; components never read stdin directly."""

    @abstractmethod
    def confirm(self, question: str, default: bool = False) -> bool:
        """Ask a yes/no question."""

    @abstractmethod
    def ask(self, question: str, default: Optional[str] = None) -> str:
        """Ask for free text; an empty answer yields ``default``."""


class CliPrompter(Prompter):
    """
    Reads answers from the terminal.

    End of input (EOF, e.g. stdin closed) is treated as accepting the default
    answer so a non-interactive run takes the conservative branch.
    """

    def __init__(
        self,
        app_settings: AppSettings,
        logger: Optional[logging.Logger] = None,
    ):
        self.app_settings = app_settings
        self.logger = logger or module_logger

    def _read(self, prompt: str) -> Optional[str]:
        try:
            return input(prompt)
        except EOFError:
            log_step(
                f"{get_symbols(self.app_settings).get('warning', '!')} No user input (EOF), using default for: '{prompt.strip()}'",
                "warning",
                self.logger,
                self.app_settings,
            )
            return None

    def confirm(self, question: str, default: bool = False) -> bool:
        hint = "Y/n" if default else "y/N"
        symbols = get_symbols(self.app_settings)
        answer = self._read(f"   {symbols.get('info', 'ℹ️')} {question} [{hint}]: ")
        if answer is None or not answer.strip():
            return default
        return answer.strip().lower() in ("y", "yes")

    def ask(self, question: str, default: Optional[str] = None) -> str:
        suffix = f" [{default}]" if default else ""
        symbols = get_symbols(self.app_settings)
        answer = self._read(f"   {symbols.get('info', 'ℹ️')} {question}{suffix}: ")
        if answer is None or not answer.strip():
            return default or ""
        return answer.strip()
