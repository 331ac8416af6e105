# clj_installer/common/system_utils.py
# -*- coding: utf-8 -*-
"""
System-level utility functions for the installer.

This module detects the package manager and login shell, determines the
distribution codename and keeps this process's PATH in step with the
run-commands file.
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import List, Mapping, Optional, Tuple

from clj_installer.config_models import (
    AppSettings,
    PackageManagerKind,
    SystemProfile,
)
from clj_installer.exceptions import PlatformUnsupported

from .command_utils import CommandRunner, get_symbols, log_step

module_logger = logging.getLogger(__name__)

# Probe order matters: a Fedora box with apt installed as a side tool is
# still a dnf system.
PACKAGE_MANAGER_PROBES: List[Tuple[PackageManagerKind, str]] = [
    (PackageManagerKind.DNF, "dnf"),
    (PackageManagerKind.APT, "apt-get"),
]

DEFAULT_SHELL = "/bin/bash"


def detect_package_manager(
    runner: CommandRunner,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> PackageManagerKind:
    """
    Return the first known package manager found on PATH.

    Raises:
        PlatformUnsupported: If none of the probed executables exists.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    for kind, executable in PACKAGE_MANAGER_PROBES:
        if runner.exists(executable):
            log_step(
                f"{symbols.get('info', 'ℹ️')} Detected package manager: {kind.value}",
                "info",
                logger_to_use,
                app_settings,
            )
            return kind

    probed = ", ".join(executable for _, executable in PACKAGE_MANAGER_PROBES)
    raise PlatformUnsupported(
        f"No supported package manager found (looked for: {probed})"
    )


def resolve_rc_file(
    environ: Optional[Mapping[str, str]] = None,
) -> Tuple[str, Path]:
    """
    Work out the login shell and its run-commands file.

    ``SHELL=/usr/bin/zsh`` maps to ``$HOME/.zshrc``; an unset ``SHELL`` falls
    back to bash.

    Returns:
        (shell executable, run-commands file path)
    """
    env = os.environ if environ is None else environ
    shell = env.get("SHELL") or DEFAULT_SHELL
    home = Path(env.get("HOME") or Path.home())
    return shell, home / f".{Path(shell).name}rc"


def build_system_profile(
    runner: CommandRunner,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> SystemProfile:
    kind = detect_package_manager(runner, app_settings, current_logger)
    shell, rc_file = resolve_rc_file()
    return SystemProfile(package_manager_kind=kind, rc_file=rc_file, shell=shell)


def get_distro_codename(
    runner: CommandRunner,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> Optional[str]:
    """
    Determine the distribution codename (e.g. 'bookworm', 'noble').

    Tries ``lsb_release -cs`` first, then ``VERSION_CODENAME`` in
    /etc/os-release.

    Returns:
        The codename, or None if it cannot be determined.
    """
    logger_to_use = current_logger if current_logger else module_logger
    try:
        result = runner.run(
            ["lsb_release", "-cs"], check=True, capture_output=True
        )
        codename = result.stdout.strip()
        if codename:
            return codename
    except (subprocess.CalledProcessError, FileNotFoundError) as e:
        log_step(
            f"{get_symbols(app_settings).get('warning', '!')} lsb_release unavailable ({e}), reading /etc/os-release",
            "warning",
            logger_to_use,
            app_settings,
        )

    os_release = Path("/etc/os-release")
    if os_release.is_file():
        for line in os_release.read_text(encoding="utf-8").splitlines():
            if line.startswith("VERSION_CODENAME="):
                return line.split("=", 1)[1].strip().strip('"') or None
    return None


def prepend_to_path(
    directory: Path, environ: Optional[dict] = None
) -> bool:
    """
    Put ``directory`` at the front of PATH for this process and its children.

    Returns:
        True if PATH changed, False if the directory was already on it.
    """
    env = os.environ if environ is None else environ
    entries = [p for p in env.get("PATH", "").split(os.pathsep) if p]
    if str(directory) in entries:
        return False
    env["PATH"] = os.pathsep.join([str(directory)] + entries)
    return True
