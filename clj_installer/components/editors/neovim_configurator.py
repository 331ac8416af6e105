# clj_installer/components/editors/neovim_configurator.py
# -*- coding: utf-8 -*-
"""
Sets up Neovim for Clojure with a curated init.vim (vim-plug, Conjure).
"""

import subprocess
from pathlib import Path

from clj_installer.common.command_utils import log_step
from clj_installer.common.file_utils import backup_file
from clj_installer.common.network_utils import download_file
from clj_installer.exceptions import InstallFailed

from .base_editor import EditorConfigurator


class NeovimConfigurator(EditorConfigurator):
    """Plugin-model editor: replaces init.vim and runs a headless PlugInstall."""

    display_name = "Neovim"

    @property
    def config_path(self) -> Path:
        return Path(self.app_settings.editors.neovim.config_path).expanduser()

    def is_installed(self) -> bool:
        return self.runner.exists(self.app_settings.editors.neovim.command)

    def is_configured(self) -> bool:
        """True only for an init.vim that loads Conjure, not any Neovim config."""
        if not self.config_path.is_file():
            return False
        try:
            content = self.config_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return False
        return self.app_settings.editors.neovim.configured_marker in content

    def configure(self) -> bool:
        neovim = self.app_settings.editors.neovim
        config_path = self.config_path

        if config_path.is_file():
            if not self.prompter.confirm(
                f"Existing {config_path} found. Back it up to {config_path.name}.bak and replace it?"
            ):
                log_step(
                    f"{self.symbols.get('info', 'ℹ️')} Keeping existing {config_path}; skipping Neovim setup.",
                    "info",
                    self.logger,
                    self.app_settings,
                )
                return False
            artifact = backup_file(config_path, self.app_settings, self.logger)
            if artifact:
                self.context.report.backups.append(artifact)

        download_file(
            str(neovim.init_vim_url), config_path, self.app_settings, self.logger
        )

        try:
            self.runner.run([neovim.command] + list(neovim.plugin_install_args))
        except (subprocess.CalledProcessError, FileNotFoundError) as e:
            raise InstallFailed(
                "neovim", f"Neovim plugin installation failed: {e}", e
            ) from e

        log_step(
            f"{self.symbols.get('success', '✅')} Neovim setup complete!",
            "success",
            self.logger,
            self.app_settings,
        )
        return True
