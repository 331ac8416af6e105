# -*- coding: utf-8 -*-
import os

import pytest

from clj_installer.config_loader import _deep_merge_dicts, load_app_settings
from clj_installer.exceptions import ConfigError


@pytest.fixture(autouse=True)
def isolated_env(home, monkeypatch):
    for name in list(os.environ):
        if name.startswith("CLJ_INSTALLER_"):
            monkeypatch.delenv(name)


def test_defaults_without_config_file(tmp_path):
    settings = load_app_settings(tmp_path / "absent.yaml")

    assert settings.runtime.package == "temurin-21-jdk"
    assert settings.toolchain.default_dir == "~/.clojure"
    assert settings.shared_config.source == "url"


def test_yaml_overrides_nested_values(tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text(
        "toolchain:\n"
        "  default_dir: /opt/clojure\n"
        "editors:\n"
        "  neovim:\n"
        "    command: nvim-nightly\n"
    )

    settings = load_app_settings(config)

    assert settings.toolchain.default_dir == "/opt/clojure"
    assert settings.toolchain.launcher == "clj"
    assert settings.editors.neovim.command == "nvim-nightly"
    assert settings.editors.vscode.command == "code"


def test_environment_overrides_defaults(tmp_path, monkeypatch):
    monkeypatch.setenv("CLJ_INSTALLER_RUNTIME__PACKAGE", "temurin-17-jdk")
    monkeypatch.setenv("CLJ_INSTALLER_DOWNLOAD_TIMEOUT", "30")

    settings = load_app_settings(tmp_path / "absent.yaml")

    assert settings.runtime.package == "temurin-17-jdk"
    assert settings.download_timeout == 30


def test_yaml_wins_over_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("CLJ_INSTALLER_RUNTIME__PACKAGE", "temurin-17-jdk")
    config = tmp_path / "config.yaml"
    config.write_text("runtime:\n  package: temurin-22-jdk\n")

    assert load_app_settings(config).runtime.package == "temurin-22-jdk"


def test_default_path_is_under_home(home):
    config = home / ".config" / "clj-installer" / "config.yaml"
    config.parent.mkdir(parents=True)
    config.write_text("marker_namespace: dotfiles\n")

    assert load_app_settings().marker_namespace == "dotfiles"


@pytest.mark.parametrize(
    "content",
    ["runtime: [unterminated\n", "- just\n- a list\n", "shared_config:\n  source: svn\n"],
)
def test_bad_config_raises_config_error(tmp_path, content):
    config = tmp_path / "config.yaml"
    config.write_text(content)

    with pytest.raises(ConfigError) as excinfo:
        load_app_settings(config)
    assert excinfo.value.exit_code == 7


def test_deep_merge_keeps_unrelated_keys():
    merged = _deep_merge_dicts(
        {"a": {"b": 1, "c": 2}, "d": 3}, {"a": {"c": 20}, "e": 5}
    )
    assert merged == {"a": {"b": 1, "c": 20}, "d": 3, "e": 5}
