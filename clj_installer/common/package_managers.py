# clj_installer/common/package_managers.py
# -*- coding: utf-8 -*-
"""
Thin managers for the system package managers the installer supports.

Both managers run every command through the injected CommandRunner with
root privileges and let ``subprocess.CalledProcessError`` propagate; callers
decide which component the failure belongs to.
"""

import logging
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Type, Union

from clj_installer.config_models import AppSettings, PackageManagerKind

from .command_utils import CommandRunner
from .network_utils import download_file


class PackageManager(ABC):
    """Common operations on a system package manager."""

    kind: PackageManagerKind

    def __init__(
        self,
        runner: CommandRunner,
        app_settings: AppSettings,
        logger: Optional[logging.Logger] = None,
    ):
        self.runner = runner
        self.app_settings = app_settings
        self.logger = logger or logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def install(self, packages: Union[List[str], str]) -> None:
        """Install one or more packages with root privileges."""

    def write_root_file(self, path: str, content: str) -> bool:
        """
        Write a root-owned file unless it already exists.

        Returns:
            True if written, False if the file was already there.
        """
        if Path(path).exists():
            self.logger.info(f"{path} already exists. Skipping.")
            return False
        self.runner.run(
            ["install", "-m", "0755", "-d", str(Path(path).parent)],
            elevated=True,
        )
        self.runner.run(
            ["tee", path], elevated=True, cmd_input=content, capture_output=True
        )
        self.runner.run(["chmod", "644", path], elevated=True)
        self.logger.info(f"Wrote {path}")
        return True


class DnfManager(PackageManager):
    """Fedora / RHEL family."""

    kind = PackageManagerKind.DNF

    def install(self, packages: Union[List[str], str]) -> None:
        if not isinstance(packages, list):
            packages = [packages]
        self.logger.info(f"Installing with dnf: {', '.join(packages)}")
        self.runner.run(["dnf", "install", "-y"] + packages, elevated=True)

    def add_repository(self, repo_file_path: str, repo_content: str) -> bool:
        return self.write_root_file(repo_file_path, repo_content)


class AptManager(PackageManager):
    """Debian / Ubuntu family, driven through apt-get."""

    kind = PackageManagerKind.APT

    def update(self) -> None:
        self.logger.info("Updating apt package lists via 'apt-get update'...")
        self.runner.run(["apt-get", "update", "-yq"], elevated=True)

    def install(self, packages: Union[List[str], str]) -> None:
        if not isinstance(packages, list):
            packages = [packages]
        self.logger.info(f"Installing with apt-get: {', '.join(packages)}")
        self.runner.run(
            ["apt-get", "install", "-yq"] + packages, elevated=True
        )

    def add_repository(self, list_file_path: str, source_line: str) -> bool:
        return self.write_root_file(list_file_path, source_line.rstrip() + "\n")

    def add_gpg_key_from_url(self, key_url: str, keyring_path: str) -> bool:
        """
        Download an ASCII-armoured key and store it dearmored at
        ``keyring_path``, unless that keyring already exists.

        Raises:
            DownloadFailed: If the key cannot be fetched.
            subprocess.CalledProcessError: If gpg fails.
        """
        if Path(keyring_path).exists():
            self.logger.info(f"Keyring {keyring_path} already exists. Skipping.")
            return False
        with tempfile.TemporaryDirectory(prefix="clj-installer-") as tmp_dir:
            armored = download_file(
                key_url,
                Path(tmp_dir) / "key.asc",
                self.app_settings,
                self.logger,
            )
            self.runner.run(
                ["gpg", "--dearmor", "--yes", "-o", keyring_path, str(armored)],
                elevated=True,
            )
        self.runner.run(["chmod", "a+r", keyring_path], elevated=True)
        self.logger.info(f"GPG key stored in {keyring_path}")
        return True


PACKAGE_MANAGERS: Dict[PackageManagerKind, Type[PackageManager]] = {
    PackageManagerKind.DNF: DnfManager,
    PackageManagerKind.APT: AptManager,
}


def get_package_manager(
    kind: PackageManagerKind,
    runner: CommandRunner,
    app_settings: AppSettings,
    logger: Optional[logging.Logger] = None,
) -> PackageManager:
    return PACKAGE_MANAGERS[kind](runner, app_settings, logger)
