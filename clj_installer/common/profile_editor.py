# clj_installer/common/profile_editor.py
# -*- coding: utf-8 -*-
"""
Append-only editing of the user's shell run-commands file.

Every change is written as a block bounded by begin/end comment lines. The
begin marker's presence is what makes an edit idempotent: a block whose
marker is already in the file is never appended again, and existing content
is never rewritten or removed.
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional, Union

from clj_installer.config_models import AppSettings, ShellProfileEdit
from clj_installer.exceptions import ConfigWriteFailed

from .command_utils import CommandRunner, get_symbols, log_step

module_logger = logging.getLogger(__name__)


class ProfileEditor:
    """Marker-guarded appends to one run-commands file (e.g. ``~/.zshrc``)."""

    def __init__(
        self,
        rc_file: Union[str, Path],
        app_settings: AppSettings,
        logger: Optional[logging.Logger] = None,
    ):
        self.rc_file = Path(rc_file)
        self.app_settings = app_settings
        self.logger = logger or module_logger

    def marker_begin(self, block_id: str) -> str:
        return f"# >>> {self.app_settings.marker_namespace}: {block_id} >>>"

    def marker_end(self, block_id: str) -> str:
        return f"# <<< {self.app_settings.marker_namespace}: {block_id} <<<"

    def _read(self) -> str:
        if not self.rc_file.is_file():
            return ""
        try:
            return self.rc_file.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigWriteFailed(
                self.rc_file, f"Could not read {self.rc_file}: {e}", e
            ) from e

    def contains(self, text: str) -> bool:
        """True if ``text`` appears anywhere in the file."""
        return text in self._read()

    def has_marker(self, block_id: str) -> bool:
        return self.contains(self.marker_begin(block_id))

    def build_edit(self, block_id: str, payload: str) -> ShellProfileEdit:
        return ShellProfileEdit(
            block_id=block_id,
            marker_begin=self.marker_begin(block_id),
            marker_end=self.marker_end(block_id),
            payload=payload,
        )

    def append_block(self, block_id: str, payload: str) -> bool:
        """
        Append ``payload`` wrapped in markers unless the block is present.

        Returns:
            True if the block was written, False if it already existed.

        Raises:
            ConfigWriteFailed: If the file cannot be read or appended to.
        """
        symbols = get_symbols(self.app_settings)
        if self.has_marker(block_id):
            log_step(
                f"{symbols.get('info', 'ℹ️')} '{block_id}' block already present in {self.rc_file}",
                "info",
                self.logger,
                self.app_settings,
            )
            return False

        edit = self.build_edit(block_id, payload)
        try:
            self.rc_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.rc_file, "a", encoding="utf-8") as f:
                f.write(edit.render())
        except OSError as e:
            raise ConfigWriteFailed(
                self.rc_file, f"Could not append to {self.rc_file}: {e}", e
            ) from e

        log_step(
            f"{symbols.get('success', '✅')} Added '{block_id}' block to {self.rc_file}",
            "success",
            self.logger,
            self.app_settings,
        )
        return True

    def check_sources(self, runner: CommandRunner, shell: str) -> bool:
        """
        Source the file in a fresh ``shell`` to surface syntax errors.

        A child shell cannot change this process's environment, so this only
        verifies the file. Failure is reported as a warning, never raised.
        """
        symbols = get_symbols(self.app_settings)
        try:
            result = runner.run(
                [shell, "-c", f'. "{self.rc_file}"'],
                check=False,
                capture_output=True,
            )
        except (OSError, subprocess.SubprocessError) as e:
            log_step(
                f"{symbols.get('warning', '!')} Could not source {self.rc_file}: {e}",
                "warning",
                self.logger,
                self.app_settings,
            )
            return False
        if result.returncode != 0:
            log_step(
                f"{symbols.get('warning', '!')} Sourcing {self.rc_file} exited with {result.returncode}; open a new shell to pick up changes.",
                "warning",
                self.logger,
                self.app_settings,
            )
            return False
        return True
