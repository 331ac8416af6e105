import subprocess
from pathlib import Path

import pytest

from clj_installer.common.system_utils import (
    build_system_profile,
    detect_package_manager,
    get_distro_codename,
    prepend_to_path,
    resolve_rc_file,
)
from clj_installer.config_models import AppSettings, PackageManagerKind
from clj_installer.exceptions import PlatformUnsupported


def test_detect_prefers_dnf_over_apt(runner):
    runner.exists.side_effect = lambda name: name in ("dnf", "apt-get")

    assert detect_package_manager(runner, AppSettings()) is PackageManagerKind.DNF


def test_detect_apt(runner):
    runner.exists.side_effect = lambda name: name == "apt-get"

    assert detect_package_manager(runner, AppSettings()) is PackageManagerKind.APT


def test_detect_none_is_unsupported(runner):
    with pytest.raises(PlatformUnsupported) as excinfo:
        detect_package_manager(runner, AppSettings())

    assert excinfo.value.exit_code == 2
    runner.run.assert_not_called()


@pytest.mark.parametrize(
    "shell, rc_name",
    [("/usr/bin/zsh", ".zshrc"), ("/bin/bash", ".bashrc"), ("", ".bashrc")],
)
def test_resolve_rc_file(shell, rc_name):
    resolved_shell, rc_file = resolve_rc_file({"SHELL": shell, "HOME": "/home/u"})

    assert rc_file == Path("/home/u") / rc_name
    assert resolved_shell == (shell or "/bin/bash")


def test_build_system_profile_uses_environment(home, runner):
    runner.exists.side_effect = lambda name: name == "apt-get"

    profile = build_system_profile(runner, AppSettings())

    assert profile.package_manager_kind is PackageManagerKind.APT
    assert profile.rc_file == home / ".zshrc"
    assert profile.shell == "/bin/zsh"


def test_get_distro_codename_from_lsb_release(runner):
    runner.run.return_value = subprocess.CompletedProcess(
        args=[], returncode=0, stdout="bookworm\n", stderr=""
    )

    assert get_distro_codename(runner, AppSettings()) == "bookworm"
    runner.run.assert_called_once_with(
        ["lsb_release", "-cs"], check=True, capture_output=True
    )


def test_get_distro_codename_falls_back_to_os_release(runner, mocker):
    runner.run.side_effect = FileNotFoundError("lsb_release")
    mocker.patch(
        "clj_installer.common.system_utils.Path.is_file", return_value=True
    )
    mocker.patch(
        "clj_installer.common.system_utils.Path.read_text",
        return_value='NAME="Ubuntu"\nVERSION_CODENAME=noble\n',
    )

    assert get_distro_codename(runner, AppSettings()) == "noble"


def test_prepend_to_path_once():
    env = {"PATH": "/usr/bin:/bin"}

    assert prepend_to_path(Path("/opt/clj/bin"), env) is True
    assert prepend_to_path(Path("/opt/clj/bin"), env) is False
    assert env["PATH"] == "/opt/clj/bin:/usr/bin:/bin"
