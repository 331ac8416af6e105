import os
import shutil
import subprocess
from pathlib import Path
from unittest.mock import create_autospec

import pytest

from clj_installer.common.prompter import Prompter
from clj_installer.exceptions import DownloadFailed, PlatformUnsupported
from clj_installer.main_installer import run_bootstrap


@pytest.fixture
def downloads(mocker, fake_download):
    download = fake_download("Plug 'Olical/conjure'\n")
    for module in (
        "clj_installer.components.toolchain_installer",
        "clj_installer.components.editors.neovim_configurator",
        "clj_installer.components.shared_config_installer",
    ):
        mocker.patch(f"{module}.download_file", side_effect=download)
    return download


@pytest.fixture
def workstation(runner):
    """A Debian box with a JDK and Neovim, where linux-install.sh really installs clj."""

    runner.exists.side_effect = lambda name: name in {"apt-get", "javac", "nvim"}
    runner.which.side_effect = lambda name: shutil.which(name, path=os.environ["PATH"])

    def fake_run(command, **kwargs):
        if len(command) == 3 and command[1] == "--prefix":
            launcher = Path(command[2]) / "bin" / "clj"
            launcher.parent.mkdir(parents=True, exist_ok=True)
            launcher.write_text("#!/bin/sh\n")
            launcher.chmod(0o755)
        return subprocess.CompletedProcess(command, 0, "", "")

    runner.run.side_effect = fake_run
    return runner


def test_second_run_changes_nothing(home, app_settings, workstation, downloads, scripted_prompter):
    prompter = scripted_prompter(
        confirm={"set up Neovim": True}, ask={"GitHub user": "octocat"}
    )

    first = run_bootstrap(app_settings, prompter=prompter, runner=workstation)
    rc_after_first = (home / ".zshrc").read_text()
    downloads_after_first = len(downloads.calls)
    second = run_bootstrap(app_settings, prompter=prompter, runner=workstation)

    assert first.installed == ["toolchain"]
    assert first.toolchain_dir == home / ".clojure"
    assert first.editors_configured == ["Neovim"]
    assert set(second.already_present) == {"runtime", "toolchain"}
    assert second.toolchain_dir == (home / ".clojure").resolve()

    rc = (home / ".zshrc").read_text()
    assert rc == rc_after_first
    assert rc.count("# >>> clj-installer: clojure-path >>>") == 1
    assert rc.count("# >>> clj-installer: deps-new >>>") == 1
    assert len(downloads.calls) == downloads_after_first


def test_unsupported_platform_touches_nothing(home, app_settings, runner):
    scratch = home / "dot-clojure"
    scratch.mkdir()

    with pytest.raises(PlatformUnsupported) as excinfo:
        run_bootstrap(app_settings, runner=runner)

    assert excinfo.value.exit_code == 2
    runner.run.assert_not_called()
    assert not (home / ".zshrc").exists()
    assert not (home / ".clojure").exists()
    assert not scratch.exists()


def test_failure_stops_later_steps_and_still_cleans_up(
    home, app_settings, workstation, mocker, scripted_prompter
):
    scratch = home / "vscode-calva-setup"
    scratch.mkdir()
    mocker.patch(
        "clj_installer.components.toolchain_installer.download_file",
        side_effect=DownloadFailed("https://example.com/linux-install.sh"),
    )
    prompter = scripted_prompter(confirm={"set up Neovim": True})

    with pytest.raises(DownloadFailed):
        run_bootstrap(app_settings, prompter=prompter, runner=workstation)

    assert prompter.questions == [("confirm", "Use a different directory?")]
    assert not scratch.exists()


def test_interrupt_still_cleans_up(home, app_settings, workstation, downloads):
    scratch_dirs = [home / "dot-clojure", home / "vscode-calva-setup"]
    for scratch in scratch_dirs:
        scratch.mkdir()
    prompter = create_autospec(Prompter, instance=True)
    prompter.confirm.side_effect = KeyboardInterrupt()

    with pytest.raises(KeyboardInterrupt):
        run_bootstrap(app_settings, prompter=prompter, runner=workstation)

    prompter.confirm.assert_called_once_with("Use a different directory?", default=False)
    assert not any(scratch.exists() for scratch in scratch_dirs)
    assert not (home / ".clojure").exists()
