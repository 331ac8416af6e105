# clj_installer/components/toolchain_installer.py
# -*- coding: utf-8 -*-
"""
Handles the installation of the Clojure CLI toolchain.
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import Optional

from clj_installer.common.command_utils import log_step
from clj_installer.common.file_utils import ensure_directory
from clj_installer.common.network_utils import download_file
from clj_installer.common.system_utils import prepend_to_path
from clj_installer.components.base_component import (
    BaseComponent,
    BootstrapContext,
)
from clj_installer.components.registry import ComponentRegistry
from clj_installer.config_models import DirectoryChoice
from clj_installer.exceptions import InstallFailed

PATH_BLOCK_ID = "clojure-path"


def derive_install_dir(launcher_path: str) -> Path:
    """
    Strip the ``bin/<launcher>`` suffix from a launcher's resolved path.

    ``/home/u/.clojure/bin/clj`` -> ``/home/u/.clojure``. A launcher that
    does not live in a ``bin`` directory yields its own directory.
    """
    resolved = Path(os.path.realpath(launcher_path))
    if resolved.parent.name == "bin":
        return resolved.parent.parent
    return resolved.parent


@ComponentRegistry.register(
    name="toolchain",
    metadata={
        "dependencies": ["runtime"],
        "description": "Clojure CLI installed under a user directory",
    },
)
class ToolchainInstaller(BaseComponent):
    """Installs the Clojure CLI with the vendor's linux-install.sh."""

    def locate_existing(self) -> Optional[Path]:
        launcher_path = self.runner.which(self.app_settings.toolchain.launcher)
        if launcher_path is None:
            return None
        return derive_install_dir(launcher_path)

    def is_installed(self) -> bool:
        return self.locate_existing() is not None

    def ensure(self) -> bool:
        existing = self.locate_existing()
        if existing is not None:
            log_step(
                f"{self.symbols.get('success', '✅')} Clojure is already installed in {existing}",
                "success",
                self.logger,
                self.app_settings,
            )
            self.context.toolchain_dir = existing
            self.context.report.already_present.append(self.name)
            return False
        self.install()
        self.context.report.installed.append(self.name)
        return True

    def choose_directory(self) -> DirectoryChoice:
        """Ask whether to override the default prefix, then create it."""
        default_dir = Path(self.app_settings.toolchain.default_dir).expanduser()
        log_step(
            f"{self.symbols.get('info', 'ℹ️')} Default Clojure directory: {default_dir}",
            "info",
            self.logger,
            self.app_settings,
        )
        target = default_dir
        if self.prompter.confirm("Use a different directory?", default=False):
            answer = self.prompter.ask(
                "Enter new directory path", default=str(default_dir)
            )
            # Relative answers are taken from the current directory.
            target = Path(answer).expanduser().resolve()
        return ensure_directory(target, self.app_settings, self.logger)

    def path_block(self, install_dir: Path) -> str:
        toolchain = self.app_settings.toolchain
        lines = [f'export PATH="{install_dir / "bin"}:$PATH"']
        lines += [
            f"alias {name}='{command}'"
            for name, command in toolchain.aliases.items()
        ]
        lines += [
            f"export {name}={value}"
            for name, value in toolchain.extra_exports.items()
        ]
        return "\n".join(lines)

    def install(self) -> None:
        toolchain = self.app_settings.toolchain
        choice = self.choose_directory()
        install_dir = choice.path

        script = download_file(
            str(toolchain.install_script_url),
            install_dir / toolchain.install_script_name,
            self.app_settings,
            self.logger,
        )
        script.chmod(0o755)

        log_step(
            f"{self.symbols.get('gear', '⚙️')} Running Clojure installer with prefix {install_dir}...",
            "info",
            self.logger,
            self.app_settings,
        )
        try:
            self.runner.run(
                [str(script), "--prefix", str(install_dir)],
                cwd=str(install_dir),
            )
        except (subprocess.CalledProcessError, FileNotFoundError) as e:
            raise InstallFailed(
                "toolchain", f"Clojure installer failed: {e}", e
            ) from e

        profile_editor = self.context.profile_editor
        profile_editor.append_block(PATH_BLOCK_ID, self.path_block(install_dir))

        # Make the new bin dir visible to the rest of this run.
        prepend_to_path(install_dir / "bin")
        profile_editor.check_sources(self.runner, self.context.profile.shell)

        self.context.toolchain_dir = install_dir
        log_step(
            f"{self.symbols.get('success', '✅')} Clojure installation complete!",
            "success",
            self.logger,
            self.app_settings,
        )


def ensure_toolchain_installed(
    context: BootstrapContext, current_logger: Optional[logging.Logger] = None
) -> Path:
    """
    Make sure the Clojure CLI is installed and return its install directory.

    Raises:
        DownloadFailed: If the install script cannot be fetched.
        InstallFailed: If the install script exits non-zero, or no install
            directory was recorded.
        ConfigWriteFailed: If the directory or run-commands file cannot be written.
    """
    ToolchainInstaller(context, current_logger).ensure()
    if context.toolchain_dir is None:
        raise InstallFailed(
            "toolchain", "Clojure install directory could not be determined."
        )
    return context.toolchain_dir
