# clj_installer/components/shared_config_installer.py
# -*- coding: utf-8 -*-
"""
Installs the shared deps.edn into the Clojure directory and the deps-new
shell helper into the run-commands file.
"""

import getpass
import logging
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from clj_installer.common.command_utils import log_step
from clj_installer.common.file_utils import backup_file
from clj_installer.common.network_utils import download_file
from clj_installer.components.base_component import (
    BaseComponent,
    BootstrapContext,
)
from clj_installer.components.registry import ComponentRegistry
from clj_installer.exceptions import ConfigWriteFailed, DownloadFailed

SHELL_FUNCTION_BLOCK_ID = "deps-new"


@ComponentRegistry.register(
    name="shared-config",
    metadata={
        "dependencies": ["toolchain"],
        "description": "Shared deps.edn and the deps-new shell helper",
    },
)
class SharedConfigInstaller(BaseComponent):
    """
    Keeps or replaces ``<clojure dir>/deps.edn`` and adds the shell helper.

    An existing deps.edn is only replaced with the user's consent, after a
    backup; keeping it leaves it byte-for-byte unchanged.
    """

    @property
    def destination(self) -> Path:
        if self.context.toolchain_dir is None:
            raise ConfigWriteFailed(
                self.app_settings.shared_config.file_name,
                "Clojure directory unknown; run the toolchain step first.",
            )
        return self.context.toolchain_dir / self.app_settings.shared_config.file_name

    def is_installed(self) -> bool:
        return self.destination.is_file()

    def ensure(self) -> bool:
        changed = False
        destination = self.destination
        if destination.is_file():
            if self.prompter.confirm(
                f"{destination} already exists. Replace it with the shared configuration?"
            ):
                artifact = backup_file(destination, self.app_settings, self.logger)
                if artifact:
                    self.context.report.backups.append(artifact)
                self.install()
                changed = True
            else:
                log_step(
                    f"{self.symbols.get('info', 'ℹ️')} Keeping existing {destination}",
                    "info",
                    self.logger,
                    self.app_settings,
                )
        else:
            self.install()
            changed = True

        if self.ensure_shell_function():
            changed = True
        return changed

    def install(self) -> None:
        shared = self.app_settings.shared_config
        if shared.source == "git":
            self._install_from_git()
        else:
            download_file(
                str(shared.deps_edn_url),
                self.destination,
                self.app_settings,
                self.logger,
            )
        log_step(
            f"{self.symbols.get('success', '✅')} Installed {self.destination}",
            "success",
            self.logger,
            self.app_settings,
        )

    def _install_from_git(self) -> None:
        """Clone the dot-clojure repository and copy deps.edn plus tools/."""
        shared = self.app_settings.shared_config
        clone_dir = Path(shared.clone_dir).expanduser()
        if clone_dir.exists():
            shutil.rmtree(clone_dir)
        try:
            self.runner.run(
                ["git", "clone", "--depth", "1", shared.git_repo_url, str(clone_dir)]
            )
        except (subprocess.CalledProcessError, FileNotFoundError) as e:
            raise DownloadFailed(
                shared.git_repo_url, f"git clone of {shared.git_repo_url} failed: {e}", e
            ) from e

        source = clone_dir / shared.file_name
        if not source.is_file():
            raise DownloadFailed(
                shared.git_repo_url,
                f"{shared.git_repo_url} has no {shared.file_name}",
            )
        target_dir = self.destination.parent
        try:
            shutil.copy2(source, self.destination)
            tools_dir = clone_dir / "tools"
            if tools_dir.is_dir():
                shutil.copytree(tools_dir, target_dir / "tools", dirs_exist_ok=True)
        except OSError as e:
            raise ConfigWriteFailed(target_dir, original_error=e) from e
        # The clone itself is removed by the cleanup step at exit.

    def ensure_shell_function(self) -> bool:
        """
        Append the deps-new helper unless it is already defined.

        Returns:
            True if the block was appended.
        """
        shared = self.app_settings.shared_config
        profile_editor = self.context.profile_editor
        if profile_editor.has_marker(SHELL_FUNCTION_BLOCK_ID) or profile_editor.contains(
            shared.shell_function_signature
        ):
            log_step(
                f"{self.symbols.get('info', 'ℹ️')} {shared.shell_function_signature} already defined in {profile_editor.rc_file}",
                "info",
                self.logger,
                self.app_settings,
            )
            return False

        gh_user = self.prompter.ask(
            "GitHub user name used by deps-new", default=getpass.getuser()
        )
        return profile_editor.append_block(
            SHELL_FUNCTION_BLOCK_ID,
            shared.shell_function_template.format(gh_user=shlex.quote(gh_user)),
        )


def ensure_shared_config(
    context: BootstrapContext, current_logger: Optional[logging.Logger] = None
) -> bool:
    """
    Returns:
        True if deps.edn or the shell helper was written.

    Raises:
        DownloadFailed: If the configuration cannot be fetched.
        ConfigWriteFailed: If a file cannot be written.
    """
    return SharedConfigInstaller(context, current_logger).ensure()
