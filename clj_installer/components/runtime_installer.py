# clj_installer/components/runtime_installer.py
# -*- coding: utf-8 -*-
"""
Handles the installation of the Java runtime (Adoptium Temurin JDK).
"""

import logging
import subprocess
from typing import Optional

from clj_installer.common.command_utils import log_step
from clj_installer.common.package_managers import (
    AptManager,
    DnfManager,
    get_package_manager,
)
from clj_installer.common.system_utils import get_distro_codename
from clj_installer.components.base_component import (
    BaseComponent,
    BootstrapContext,
)
from clj_installer.components.registry import ComponentRegistry
from clj_installer.exceptions import InstallFailed


@ComponentRegistry.register(
    name="runtime",
    metadata={
        "dependencies": [],
        "description": "Java runtime (Temurin JDK) from the Adoptium repository",
    },
)
class RuntimeInstaller(BaseComponent):
    """
    Installs a JDK when no ``javac`` is on PATH.

    The vendor repository is registered first (each file only if missing),
    then the pinned package is installed. Any failure becomes
    InstallFailed("runtime"); package installs are never retried.
    """

    def is_installed(self) -> bool:
        return self.runner.exists(self.app_settings.runtime.launcher)

    def install(self) -> None:
        runtime = self.app_settings.runtime
        manager = get_package_manager(
            self.context.profile.package_manager_kind,
            self.runner,
            self.app_settings,
            self.logger,
        )
        try:
            if isinstance(manager, DnfManager):
                manager.add_repository(
                    runtime.dnf_repo_path, runtime.dnf_repo_template
                )
            elif isinstance(manager, AptManager):
                self._register_apt_repository(manager)
            manager.install(runtime.package)
        except (subprocess.CalledProcessError, FileNotFoundError) as e:
            raise InstallFailed("runtime", f"JDK installation failed: {e}", e) from e

        log_step(
            f"{self.symbols.get('success', '✅')} {runtime.package} installed.",
            "success",
            self.logger,
            self.app_settings,
        )

    def _register_apt_repository(self, manager: AptManager) -> None:
        runtime = self.app_settings.runtime
        manager.install(runtime.apt_prerequisites)
        manager.add_gpg_key_from_url(
            str(runtime.apt_key_url), runtime.apt_keyring_path
        )
        codename = get_distro_codename(
            self.runner, self.app_settings, self.logger
        )
        if not codename:
            raise InstallFailed(
                "runtime",
                "Could not determine the distribution codename for the Adoptium repository.",
            )
        manager.add_repository(
            runtime.apt_list_path,
            f"deb {runtime.apt_repo_url} {codename} main",
        )
        manager.update()


def ensure_runtime_installed(
    context: BootstrapContext, current_logger: Optional[logging.Logger] = None
) -> bool:
    """
    Make sure a JDK is available.

    Returns:
        True if a JDK was installed, False if one was already present (in
        which case no command at all is issued).

    Raises:
        InstallFailed: If any installation command fails.
        DownloadFailed: If the apt signing key cannot be fetched.
    """
    return RuntimeInstaller(context, current_logger).ensure()
