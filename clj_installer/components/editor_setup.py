# clj_installer/components/editor_setup.py
# -*- coding: utf-8 -*-
"""
Offers each supported editor and configures the ones the user accepts.
"""

import logging
from typing import List, Optional, Sequence, Type

from clj_installer.common.command_utils import log_step
from clj_installer.components.base_component import (
    BaseComponent,
    BootstrapContext,
)
from clj_installer.components.editors import (
    EDITOR_CONFIGURATORS,
    EditorConfigurator,
)
from clj_installer.components.registry import ComponentRegistry
from clj_installer.exceptions import NoEditorConfigured


@ComponentRegistry.register(
    name="editors",
    metadata={
        "dependencies": ["toolchain"],
        "description": "Optional VSCode / Neovim setup for Clojure",
    },
)
class EditorSetup(BaseComponent):
    """
    Runs the editor step.

    Each installed variant is offered with a yes/no prompt. The step fails
    with NoEditorConfigured only when nothing was configured in this run and
    no variant was configured before it.
    """

    def __init__(
        self,
        context: BootstrapContext,
        logger: Optional[logging.Logger] = None,
        configurators: Optional[Sequence[Type[EditorConfigurator]]] = None,
    ):
        super().__init__(context, logger)
        self.editors: List[EditorConfigurator] = [
            configurator_class(context, self.logger)
            for configurator_class in (configurators or EDITOR_CONFIGURATORS)
        ]

    def is_installed(self) -> bool:
        return any(
            editor.is_installed() and editor.is_configured()
            for editor in self.editors
        )

    def install(self) -> None:
        self.ensure()

    def ensure(self) -> bool:
        configured: List[str] = []

        for editor in self.editors:
            if not editor.is_installed():
                log_step(
                    f"{self.symbols.get('info', 'ℹ️')} {editor.display_name} is not installed",
                    "info",
                    self.logger,
                    self.app_settings,
                )
                continue
            if not self.prompter.confirm(
                f"Would you like to set up {editor.display_name} for Clojure development?"
            ):
                continue
            log_step(
                f"{self.symbols.get('step', '➡️')} Setting up {editor.display_name}...",
                "info",
                self.logger,
                self.app_settings,
            )
            if editor.configure():
                configured.append(editor.display_name)

        self.context.report.editors_configured.extend(configured)
        if configured:
            return True
        if self.is_installed():
            log_step(
                f"{self.symbols.get('info', 'ℹ️')} Keeping existing editor configuration.",
                "info",
                self.logger,
                self.app_settings,
            )
            return False
        raise NoEditorConfigured(
            "No editor was configured. Install VSCode or Neovim and accept its setup."
        )


def configure_editors(
    context: BootstrapContext, current_logger: Optional[logging.Logger] = None
) -> bool:
    """
    Returns:
        True if at least one editor was configured in this run.

    Raises:
        NoEditorConfigured: If every variant was declined or unavailable and
            none was configured before.
        InstallFailed: If an accepted editor's setup fails.
    """
    return EditorSetup(context, current_logger).ensure()
