"""
Base class for editor integrations.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from clj_installer.common.command_utils import get_symbols
from clj_installer.components.base_component import BootstrapContext


class EditorConfigurator(ABC):
    """
    One editor variant that can be set up for Clojure development.

    All variants share the same capability set so the editor step can offer
    them uniformly.
    """

    display_name: str = ""

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

    @abstractmethod
    def is_installed(self) -> bool:
        """True if the editor itself is available on this machine."""

    @abstractmethod
    def is_configured(self) -> bool:
        """True if a Clojure setup for this editor already exists."""

    @abstractmethod
    def configure(self) -> bool:
        """
        Set the editor up.

        Returns:
            True if configured, False if the user chose to skip the variant.

        Raises:
            BootstrapError: If a step fails after the editor was found.
        """
