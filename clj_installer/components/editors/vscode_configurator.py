# clj_installer/components/editors/vscode_configurator.py
# -*- coding: utf-8 -*-
"""
Sets up VSCode for Clojure with the Calva and Joyride extensions.
"""

import json
import subprocess
from pathlib import Path
from typing import Any, Dict, Set

from clj_installer.common.command_utils import log_step
from clj_installer.common.file_utils import backup_file, ensure_directory
from clj_installer.common.json_utils import JsonFileType, check_json_file
from clj_installer.exceptions import ConfigWriteFailed, InstallFailed

from .base_editor import EditorConfigurator

SETTINGS_FILE = "settings.json"
KEYBINDINGS_FILE = "keybindings.json"


class VSCodeConfigurator(EditorConfigurator):
    """Extension-model editor: everything goes through the ``code`` CLI."""

    display_name = "VSCode"

    @property
    def user_config_dir(self) -> Path:
        return Path(self.app_settings.editors.vscode.user_config_dir).expanduser()

    def is_installed(self) -> bool:
        return self.runner.exists(self.app_settings.editors.vscode.command)

    def installed_extensions(self) -> Set[str]:
        """
        Raises:
            InstallFailed: If ``code --list-extensions`` fails.
        """
        try:
            result = self.runner.run(
                [self.app_settings.editors.vscode.command, "--list-extensions"],
                capture_output=True,
            )
        except (subprocess.CalledProcessError, FileNotFoundError) as e:
            raise InstallFailed(
                "vscode", f"Could not list VSCode extensions: {e}", e
            ) from e
        return {
            line.strip().lower()
            for line in (result.stdout or "").splitlines()
            if line.strip()
        }

    def is_configured(self) -> bool:
        if not self.is_installed():
            return False
        wanted = {e.lower() for e in self.app_settings.editors.vscode.extensions}
        return wanted <= self.installed_extensions()

    def configure(self) -> bool:
        vscode = self.app_settings.editors.vscode
        if not self.user_config_dir.is_dir():
            raise InstallFailed(
                "vscode",
                f"VSCode config directory {self.user_config_dir} not found. Is VSCode installed correctly?",
            )

        installed = self.installed_extensions()
        for extension in vscode.extensions:
            if extension.lower() in installed:
                log_step(
                    f"{self.symbols.get('info', 'ℹ️')} {extension} extension is already installed",
                    "info",
                    self.logger,
                    self.app_settings,
                )
                continue
            try:
                self.runner.run(
                    [vscode.command, "--install-extension", extension]
                )
            except (subprocess.CalledProcessError, FileNotFoundError) as e:
                raise InstallFailed(
                    "vscode", f"Failed to install {extension} extension: {e}", e
                ) from e
            log_step(
                f"{self.symbols.get('success', '✅')} Installed {extension} extension",
                "success",
                self.logger,
                self.app_settings,
            )

        ensure_directory(vscode.joyride_scripts_dir, self.app_settings, self.logger)
        ensure_directory(vscode.calva_config_dir, self.app_settings, self.logger)
        self._ensure_json_file(KEYBINDINGS_FILE, [])
        self._merge_settings(vscode.settings)
        return True

    def _ensure_json_file(self, file_name: str, empty_value: Any) -> Path:
        path = self.user_config_dir / file_name
        state = check_json_file(path)
        if state is JsonFileType.MALFORMED_JSON:
            raise ConfigWriteFailed(
                path, f"{path} is not valid JSON; leaving it untouched."
            )
        if state is JsonFileType.MISSING:
            try:
                path.write_text(json.dumps(empty_value) + "\n", encoding="utf-8")
            except OSError as e:
                raise ConfigWriteFailed(path, original_error=e) from e
            log_step(
                f"{self.symbols.get('info', 'ℹ️')} Created {path}",
                "info",
                self.logger,
                self.app_settings,
            )
        return path

    def _merge_settings(self, wanted: Dict[str, Any]) -> None:
        """Add missing Calva settings; keys the user already set are kept."""
        path = self._ensure_json_file(SETTINGS_FILE, {})
        current = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(current, dict):
            raise ConfigWriteFailed(path, f"{path} does not hold a JSON object.")

        missing = {k: v for k, v in wanted.items() if k not in current}
        if not missing:
            return

        artifact = backup_file(path, self.app_settings, self.logger)
        if artifact:
            self.context.report.backups.append(artifact)
        current.update(missing)
        try:
            path.write_text(json.dumps(current, indent=4) + "\n", encoding="utf-8")
        except OSError as e:
            raise ConfigWriteFailed(path, original_error=e) from e
        log_step(
            f"{self.symbols.get('success', '✅')} Added {', '.join(sorted(missing))} to {path}",
            "success",
            self.logger,
            self.app_settings,
        )
