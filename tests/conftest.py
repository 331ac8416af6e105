# tests/conftest.py
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Tuple
from unittest.mock import create_autospec

import pytest

from clj_installer.common.command_utils import CommandRunner
from clj_installer.common.profile_editor import ProfileEditor
from clj_installer.common.prompter import Prompter
from clj_installer.components.base_component import BootstrapContext
from clj_installer.config_models import (
    AppSettings,
    PackageManagerKind,
    RuntimeSettings,
    SystemProfile,
)


class ScriptedPrompter(Prompter):
    """
    Answers questions from canned responses.

    Answers are looked up by a substring of the question. Unmatched questions
    get the caller's default. Every question asked is recorded.
    """

    def __init__(
        self,
        confirm: Optional[Dict[str, bool]] = None,
        ask: Optional[Dict[str, str]] = None,
    ):
        self.confirm_answers = confirm or {}
        self.ask_answers = ask or {}
        self.questions: List[Tuple[str, str]] = []

    def confirm(self, question: str, default: bool = False) -> bool:
        self.questions.append(("confirm", question))
        for fragment, answer in self.confirm_answers.items():
            if fragment in question:
                return answer
        return default

    def ask(self, question: str, default: Optional[str] = None) -> str:
        self.questions.append(("ask", question))
        for fragment, answer in self.ask_answers.items():
            if fragment in question:
                return answer
        return default or ""


@pytest.fixture
def home(tmp_path, monkeypatch) -> Path:
    """A throwaway $HOME with zsh as the login shell."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("SHELL", "/bin/zsh")
    monkeypatch.setenv("PATH", "/usr/bin:/bin")
    return home_dir


@pytest.fixture
def app_settings(tmp_path) -> AppSettings:
    """Settings whose root-owned files live under tmp_path."""
    etc = tmp_path / "etc"
    return AppSettings(
        runtime=RuntimeSettings(
            apt_keyring_path=str(etc / "apt/trusted.gpg.d/adoptium.gpg"),
            apt_list_path=str(etc / "apt/sources.list.d/adoptium.list"),
            dnf_repo_path=str(etc / "yum.repos.d/adoptium.repo"),
        )
    )


@pytest.fixture
def runner():
    """A CommandRunner that finds nothing on PATH and whose commands succeed."""
    mock_runner = create_autospec(CommandRunner, instance=True)
    mock_runner.which.return_value = None
    mock_runner.exists.return_value = False
    mock_runner.run.return_value = subprocess.CompletedProcess(
        args=[], returncode=0, stdout="", stderr=""
    )
    return mock_runner


@pytest.fixture
def prompter() -> ScriptedPrompter:
    return ScriptedPrompter()


@pytest.fixture
def scripted_prompter():
    """The ScriptedPrompter class, for tests that need canned answers."""
    return ScriptedPrompter


@pytest.fixture
def make_context(home, app_settings, runner, prompter):
    def _make(
        kind: PackageManagerKind = PackageManagerKind.APT,
        prompter_override: Optional[Prompter] = None,
    ) -> BootstrapContext:
        rc_file = home / ".zshrc"
        return BootstrapContext(
            app_settings=app_settings,
            profile=SystemProfile(
                package_manager_kind=kind, rc_file=rc_file, shell="/bin/zsh"
            ),
            runner=runner,
            prompter=prompter_override or prompter,
            profile_editor=ProfileEditor(rc_file, app_settings),
        )

    return _make


@pytest.fixture
def fake_download():
    """Builds a download_file replacement that writes ``content`` and records URLs."""

    def _factory(content: str = "downloaded\n"):
        calls: List[str] = []

        def _download(url, destination, app_settings, current_logger=None):
            calls.append(str(url))
            path = Path(destination)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
            return path

        _download.calls = calls
        return _download

    return _factory
