# clj_installer/exceptions.py
# -*- coding: utf-8 -*-
"""
Errors that end a bootstrap run.

Each error carries the process exit code the CLI returns for it. They are
raised by the components and propagate to the top level untouched.
"""

from pathlib import Path
from typing import Optional, Union


class BootstrapError(Exception):
    """Base class for every error that terminates the run."""

    exit_code: int = 1

    def __init__(
        self, message: str, original_error: Optional[Exception] = None
    ):
        self.original_error = original_error
        super().__init__(message)


class PlatformUnsupported(BootstrapError):
    """No supported system package manager was found."""

    exit_code = 2


class InstallFailed(BootstrapError):
    """An install command for a component exited non-zero or could not run."""

    exit_code = 3

    def __init__(
        self,
        component: str,
        message: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.component = component
        super().__init__(
            message or f"Installation of '{component}' failed",
            original_error,
        )


class DownloadFailed(BootstrapError):
    """A file could not be fetched, or did not match its pinned digest."""

    exit_code = 4

    def __init__(
        self,
        url: str,
        message: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.url = url
        super().__init__(message or f"Download of {url} failed", original_error)


class NoEditorConfigured(BootstrapError):
    """Every editor variant was declined and none was set up before."""

    exit_code = 5


class ConfigWriteFailed(BootstrapError):
    """A user configuration file could not be written."""

    exit_code = 6

    def __init__(
        self,
        path: Union[str, Path],
        message: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.path = Path(path)
        super().__init__(message or f"Could not write {path}", original_error)


class ConfigError(BootstrapError):
    """The installer's own configuration file is unreadable."""

    exit_code = 7
