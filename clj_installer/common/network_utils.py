# clj_installer/common/network_utils.py
# -*- coding: utf-8 -*-
"""
Handles downloading installer scripts and configuration files over HTTPS.
"""

import hashlib
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional, Union

import requests

from clj_installer.config_models import AppSettings
from clj_installer.exceptions import DownloadFailed

from .command_utils import get_symbols, log_step

module_logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192
NEW_FILE_MODE = 0o644


def _discard(partial_path: Optional[Path]) -> None:
    if partial_path is not None:
        partial_path.unlink(missing_ok=True)


def download_file(
    url: str,
    destination: Union[str, Path],
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> Path:
    """
    Download ``url`` to ``destination``, replacing any existing file.

    The body is streamed into a temporary file next to ``destination`` and
    only moved into place once it is complete (and, when
    ``app_settings.checksums`` pins a SHA-256 digest for the URL, verified).
    An existing file at ``destination`` is therefore either replaced whole
    or left exactly as it was. Nothing is retried.

    Args:
        url: The HTTPS URL to fetch.
        destination: Target file path; parent directories are created.
        app_settings: Settings providing the timeout and pinned digests.
        current_logger: Optional logger instance.

    Returns:
        The path that was written.

    Raises:
        DownloadFailed: On any HTTP, connection, timeout or file error, or a
            digest mismatch. Only the temporary file is removed.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    download_path = Path(destination)
    expected_digest = app_settings.checksums.get(url)
    hasher = hashlib.sha256()
    partial_path: Optional[Path] = None

    log_step(
        f"{symbols.get('package', '📦')} Downloading {url} -> {download_path}",
        "info",
        logger_to_use,
        app_settings,
    )
    try:
        download_path.parent.mkdir(parents=True, exist_ok=True)
        with requests.get(
            url, stream=True, timeout=app_settings.download_timeout
        ) as response:
            response.raise_for_status()
            with tempfile.NamedTemporaryFile(
                dir=download_path.parent,
                prefix=f".{download_path.name}.",
                suffix=".part",
                delete=False,
            ) as f:
                partial_path = Path(f.name)
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        hasher.update(chunk)
                        f.write(chunk)
    except requests.exceptions.RequestException as e:
        _discard(partial_path)
        raise DownloadFailed(url, f"Download of {url} failed: {e}", e) from e
    except OSError as e:
        _discard(partial_path)
        raise DownloadFailed(
            url, f"Could not save {url} to {download_path}: {e}", e
        ) from e

    if expected_digest:
        actual_digest = hasher.hexdigest()
        if actual_digest.lower() != expected_digest.lower():
            _discard(partial_path)
            raise DownloadFailed(
                url,
                f"Checksum mismatch for {url}: expected {expected_digest}, got {actual_digest}",
            )
        log_step(
            f"{symbols.get('success', '✅')} Checksum verified for {download_path.name}",
            "debug",
            logger_to_use,
            app_settings,
        )

    try:
        # Temporary files are created 0600; keep the replaced file's mode.
        if download_path.is_file():
            shutil.copymode(download_path, partial_path)
        else:
            os.chmod(partial_path, NEW_FILE_MODE)
        os.replace(partial_path, download_path)
    except OSError as e:
        _discard(partial_path)
        raise DownloadFailed(
            url, f"Could not move {url} into place at {download_path}: {e}", e
        ) from e

    log_step(
        f"{symbols.get('success', '✅')} Downloaded {download_path}",
        "success",
        logger_to_use,
        app_settings,
    )
    return download_path
