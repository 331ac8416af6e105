# clj_installer/common/file_utils.py
# -*- coding: utf-8 -*-
"""
File system utility functions, such as backing up files and cleaning directories.
"""

import logging
import shutil
from pathlib import Path
from typing import Iterable, List, Optional, Union

from clj_installer.config_models import AppSettings, BackupArtifact, DirectoryChoice
from clj_installer.exceptions import ConfigWriteFailed

from .command_utils import get_symbols, log_step

module_logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".bak"


def backup_file(
    file_path: Union[str, Path],
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> Optional[BackupArtifact]:
    """
    Copy a user file to ``<file>.bak`` before it gets overwritten.

    An older backup at the same path is replaced. Backups are never removed
    by the installer.

    Parameters:
        file_path: The file to back up.
        app_settings: Settings used for log symbols.
        current_logger: Logger instance; defaults to the module logger.

    Returns:
        The BackupArtifact, or None when the file does not exist.

    Raises:
        ConfigWriteFailed: If the copy fails.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    original = Path(file_path)

    if not original.is_file():
        log_step(
            f"{symbols.get('info', 'ℹ️')} File {original} does not exist. No backup needed.",
            "debug",
            logger_to_use,
            app_settings,
        )
        return None

    backup_path = original.with_name(original.name + BACKUP_SUFFIX)
    try:
        shutil.copy2(original, backup_path)
    except OSError as e:
        raise ConfigWriteFailed(
            backup_path, f"Failed to back up {original} to {backup_path}: {e}", e
        ) from e

    log_step(
        f"{symbols.get('success', '✅')} Backed up {original} to {backup_path}",
        "success",
        logger_to_use,
        app_settings,
    )
    return BackupArtifact(original_path=original, backup_path=backup_path)


def ensure_directory(
    directory_path: Union[str, Path],
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> DirectoryChoice:
    """
    Create ``directory_path`` (and parents) if missing.

    Returns:
        DirectoryChoice recording whether this call created the directory.

    Raises:
        ConfigWriteFailed: If the path exists as a file or cannot be created.
    """
    logger_to_use = current_logger if current_logger else module_logger
    path = Path(directory_path).expanduser()

    if path.is_dir():
        return DirectoryChoice(path=path, created=False)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigWriteFailed(
            path, f"Could not create directory {path}: {e}", e
        ) from e
    log_step(
        f"{get_symbols(app_settings).get('success', '✅')} Created directory {path}",
        "info",
        logger_to_use,
        app_settings,
    )
    return DirectoryChoice(path=path, created=True)


def cleanup_directories(
    directory_paths: Iterable[Union[str, Path]],
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> List[Path]:
    """
    Remove each of the given directories if it exists.

    Directories that were never created are skipped silently. A removal
    failure is logged as a warning and the remaining directories are still
    processed, since cleanup also runs on the error path.

    Returns:
        The directories that were actually removed.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    removed: List[Path] = []

    for raw_path in directory_paths:
        directory_path = Path(raw_path).expanduser()
        if not directory_path.is_dir():
            log_step(
                f"Nothing to clean at {directory_path}",
                "debug",
                logger_to_use,
                app_settings,
            )
            continue
        try:
            shutil.rmtree(directory_path)
        except OSError as e:
            log_step(
                f"{symbols.get('warning', '!')} Failed to remove {directory_path}: {e}",
                "warning",
                logger_to_use,
                app_settings,
            )
            continue
        log_step(
            f"{symbols.get('success', '✅')} Removed temporary directory {directory_path}",
            "info",
            logger_to_use,
            app_settings,
        )
        removed.append(directory_path)
    return removed
