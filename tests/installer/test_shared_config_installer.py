import subprocess

import pytest
import requests

from clj_installer.components.shared_config_installer import (
    SHELL_FUNCTION_BLOCK_ID,
    SharedConfigInstaller,
    ensure_shared_config,
)
from clj_installer.config_models import SharedConfigSettings
from clj_installer.exceptions import ConfigWriteFailed, DownloadFailed

SHARED_DEPS = "{:aliases {:repl {:extra-deps {}}}}\n"
USER_DEPS = b"{:aliases {:mine {}}}\n"


@pytest.fixture
def clojure_dir(home):
    path = home / ".clojure"
    path.mkdir()
    return path


@pytest.fixture
def patched_deps_download(mocker, fake_download):
    download = fake_download(SHARED_DEPS)
    mocker.patch(
        "clj_installer.components.shared_config_installer.download_file",
        side_effect=download,
    )
    return download


@pytest.fixture
def shared_context(make_context, clojure_dir):
    def _make(prompter_override=None):
        context = make_context(prompter_override=prompter_override)
        context.toolchain_dir = clojure_dir
        return context

    return _make


def test_absent_deps_edn_is_downloaded_without_asking(
    shared_context, clojure_dir, patched_deps_download, prompter
):
    assert ensure_shared_config(shared_context()) is True

    assert (clojure_dir / "deps.edn").read_text() == SHARED_DEPS
    assert not any(kind == "confirm" for kind, _ in prompter.questions)
    assert patched_deps_download.calls == [
        "https://raw.githubusercontent.com/ai-mindset/clj-installer/refs/heads/main/deps.edn"
    ]


def test_declining_replace_keeps_bytes(
    shared_context, clojure_dir, patched_deps_download, scripted_prompter
):
    deps = clojure_dir / "deps.edn"
    deps.write_bytes(USER_DEPS)
    prompter = scripted_prompter(confirm={"already exists": False})

    ensure_shared_config(shared_context(prompter))

    assert deps.read_bytes() == USER_DEPS
    assert not (clojure_dir / "deps.edn.bak").exists()
    assert patched_deps_download.calls == []


def test_accepting_replace_backs_up_first(
    shared_context, clojure_dir, patched_deps_download, scripted_prompter
):
    deps = clojure_dir / "deps.edn"
    deps.write_bytes(USER_DEPS)
    prompter = scripted_prompter(confirm={"already exists": True})
    context = shared_context(prompter)

    ensure_shared_config(context)

    assert (clojure_dir / "deps.edn.bak").read_bytes() == USER_DEPS
    assert deps.read_text() == SHARED_DEPS
    assert context.report.backups[0].original_path == deps


def test_shell_function_written_once(
    shared_context, home, patched_deps_download, scripted_prompter
):
    prompter = scripted_prompter(ask={"GitHub user": "octocat"})

    ensure_shared_config(shared_context(prompter))
    ensure_shared_config(shared_context(prompter))

    rc = (home / ".zshrc").read_text()
    assert rc.count(f"# >>> clj-installer: {SHELL_FUNCTION_BLOCK_ID} >>>") == 1
    assert rc.count("deps-new() {") == 1
    assert "export GH_USER=octocat\n" in rc


def test_hand_written_shell_function_is_respected(
    shared_context, home, patched_deps_download, prompter
):
    rc_file = home / ".zshrc"
    rc_file.write_text("deps-new() { echo mine; }\n")

    ensure_shared_config(shared_context())

    assert rc_file.read_text() == "deps-new() { echo mine; }\n"
    assert not any(kind == "ask" for kind, _ in prompter.questions)


def test_download_failure_propagates(shared_context, mocker):
    mocker.patch(
        "clj_installer.components.shared_config_installer.download_file",
        side_effect=DownloadFailed("https://example.com/deps.edn"),
    )

    with pytest.raises(DownloadFailed) as excinfo:
        ensure_shared_config(shared_context())
    assert excinfo.value.exit_code == 4


def test_missing_toolchain_dir_is_an_error(make_context):
    with pytest.raises(ConfigWriteFailed):
        SharedConfigInstaller(make_context()).ensure()


def test_git_source_copies_deps_and_tools(shared_context, runner, clojure_dir, home):
    def fake_clone(command, **kwargs):
        clone_dir = home / "dot-clojure"
        (clone_dir / "tools").mkdir(parents=True)
        (clone_dir / "deps.edn").write_text(SHARED_DEPS)
        (clone_dir / "tools" / "new.edn").write_text("{}\n")
        return subprocess.CompletedProcess(command, 0, "", "")

    runner.run.side_effect = fake_clone
    context = shared_context()
    context.app_settings.shared_config = SharedConfigSettings(source="git")

    ensure_shared_config(context)

    clone_command = runner.run.call_args_list[0].args[0]
    assert clone_command == [
        "git",
        "clone",
        "--depth",
        "1",
        "https://github.com/seancorfield/dot-clojure",
        str(home / "dot-clojure"),
    ]
    assert (clojure_dir / "deps.edn").read_text() == SHARED_DEPS
    assert (clojure_dir / "tools" / "new.edn").is_file()


def test_git_clone_failure_is_download_failure(shared_context, runner):
    runner.run.side_effect = subprocess.CalledProcessError(128, ["git"])
    context = shared_context()
    context.app_settings.shared_config = SharedConfigSettings(source="git")

    with pytest.raises(DownloadFailed):
        ensure_shared_config(context)


def test_failed_replace_keeps_user_deps_edn(
    shared_context, clojure_dir, scripted_prompter, mocker
):
    deps = clojure_dir / "deps.edn"
    deps.write_bytes(USER_DEPS)
    mocker.patch(
        "clj_installer.common.network_utils.requests.get",
        side_effect=requests.exceptions.ConnectionError("network unreachable"),
    )
    prompter = scripted_prompter(confirm={"already exists": True})

    with pytest.raises(DownloadFailed):
        ensure_shared_config(shared_context(prompter))

    assert deps.read_bytes() == USER_DEPS
    assert (clojure_dir / "deps.edn.bak").read_bytes() == USER_DEPS
    assert sorted(p.name for p in clojure_dir.iterdir()) == ["deps.edn", "deps.edn.bak"]


def test_github_user_is_shell_quoted(
    shared_context, home, patched_deps_download, scripted_prompter
):
    prompter = scripted_prompter(ask={"GitHub user": 'oct"o $(cat)'})

    ensure_shared_config(shared_context(prompter))

    rc = (home / ".zshrc").read_text()
    assert "export GH_USER='oct\"o $(cat)'\n" in rc
