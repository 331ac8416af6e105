# clj_installer/config_models.py
# -*- coding: utf-8 -*-
"""
Pydantic models for installer configuration and run state.

This module defines the structured settings for the installer, including
defaults, type annotations, and descriptions. Every URL, package name and
path the bootstrap touches lives here so it can be overridden from a YAML
file or from environment variables (``CLJ_INSTALLER_`` prefix, ``__`` as the
nested delimiter).
"""

from enum import Enum
from pathlib import Path
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Default Static Values (can be overridden by config file/env) ---
LOG_PREFIX_DEFAULT: str = "[CLJ-SETUP]"

JDK_PACKAGE_DEFAULT: str = "temurin-21-jdk"
ADOPTIUM_KEY_URL_DEFAULT: str = (
    "https://packages.adoptium.net/artifactory/api/gpg/key/public"
)
ADOPTIUM_DEB_URL_DEFAULT: str = "https://packages.adoptium.net/artifactory/deb"
ADOPTIUM_RPM_REPO_TEMPLATE_DEFAULT: str = """\
[Adoptium]
name=Adoptium
baseurl=https://packages.adoptium.net/artifactory/rpm/$releasever/$basearch
enabled=1
gpgcheck=1
gpgkey=https://packages.adoptium.net/artifactory/api/gpg/key/public
"""

CLOJURE_INSTALL_SCRIPT_URL_DEFAULT: str = "https://github.com/clojure/brew-install/releases/latest/download/linux-install.sh"
INIT_VIM_URL_DEFAULT: str = "https://raw.githubusercontent.com/ai-mindset/init.vim/refs/heads/main/init.vim"
DEPS_EDN_URL_DEFAULT: str = "https://raw.githubusercontent.com/ai-mindset/clj-installer/refs/heads/main/deps.edn"
DOT_CLOJURE_REPO_DEFAULT: str = "https://github.com/seancorfield/dot-clojure"

SYMBOLS_DEFAULT: Dict[str, str] = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
    "step": "➡️",
    "gear": "⚙️",
    "package": "📦",
    "rocket": "🚀",
    "sparkles": "✨",
    "critical": "🔥",
    "debug": "🐛",
}


class PackageManagerKind(str, Enum):
    """System package managers the runtime installer knows how to drive."""

    DNF = "dnf"
    APT = "apt"


class RuntimeSettings(BaseModel):
    """Java runtime (Temurin JDK) installation settings."""

    launcher: str = Field(
        default="javac",
        description="Executable whose presence on PATH means a JDK is installed.",
    )
    package: str = Field(
        default=JDK_PACKAGE_DEFAULT,
        description="Exact package name installed through the package manager.",
    )
    apt_prerequisites: List[str] = Field(
        default_factory=lambda: ["wget", "apt-transport-https", "gpg"],
        description="Packages needed before the vendor apt repository can be registered.",
    )
    apt_key_url: Union[HttpUrl, str] = Field(default=ADOPTIUM_KEY_URL_DEFAULT)
    apt_keyring_path: str = Field(
        default="/etc/apt/trusted.gpg.d/adoptium.gpg"
    )
    apt_repo_url: Union[HttpUrl, str] = Field(default=ADOPTIUM_DEB_URL_DEFAULT)
    apt_list_path: str = Field(
        default="/etc/apt/sources.list.d/adoptium.list"
    )
    dnf_repo_path: str = Field(default="/etc/yum.repos.d/adoptium.repo")
    dnf_repo_template: str = Field(
        default=ADOPTIUM_RPM_REPO_TEMPLATE_DEFAULT,
        description="Content of the yum/dnf .repo file for the vendor repository.",
    )


class ToolchainSettings(BaseModel):
    """Clojure CLI installation settings."""

    launcher: str = Field(
        default="clj",
        description="Executable whose presence on PATH means Clojure is installed.",
    )
    default_dir: str = Field(
        default="~/.clojure",
        description="Default install prefix; '~' expands against $HOME at run time.",
    )
    install_script_url: Union[HttpUrl, str] = Field(
        default=CLOJURE_INSTALL_SCRIPT_URL_DEFAULT
    )
    install_script_name: str = Field(default="linux-install.sh")
    aliases: Dict[str, str] = Field(
        default_factory=lambda: {"clj_rebel": "clj -M:repl"},
        description="Shell aliases written next to the PATH export.",
    )
    extra_exports: Dict[str, str] = Field(
        default_factory=lambda: {"TERM": "xterm-256color"},
    )


class VSCodeSettings(BaseModel):
    """VSCode (Calva + Joyride) configuration settings."""

    command: str = Field(default="code")
    user_config_dir: str = Field(default="~/.config/Code/User")
    extensions: List[str] = Field(
        default_factory=lambda: [
            "betterthantomorrow.calva",
            "betterthantomorrow.joyride",
        ]
    )
    joyride_scripts_dir: str = Field(default="~/.config/joyride/scripts")
    calva_config_dir: str = Field(default="~/.config/calva")
    settings: Dict[str, Union[str, int, bool]] = Field(
        default_factory=lambda: {
            "calva.paredit.defaultKeyMap": "original",
            "calva.showCalvaSaysOnStart": False,
        },
        description="Entries merged into the user's settings.json.",
    )


class NeovimSettings(BaseModel):
    """Neovim (vim-plug + Conjure) configuration settings."""

    command: str = Field(default="nvim")
    config_path: str = Field(default="~/.config/nvim/init.vim")
    init_vim_url: Union[HttpUrl, str] = Field(default=INIT_VIM_URL_DEFAULT)
    plugin_install_args: List[str] = Field(
        default_factory=lambda: ["--headless", "+PlugInstall", "+qall"]
    )
    configured_marker: str = Field(
        default="Olical/conjure",
        description="Text in init.vim that marks it as a Clojure (Conjure) setup.",
    )


class EditorSettings(BaseModel):
    vscode: VSCodeSettings = Field(default_factory=VSCodeSettings)
    neovim: NeovimSettings = Field(default_factory=NeovimSettings)


class SharedConfigSettings(BaseModel):
    """Shared deps.edn and the deps-new shell helper."""

    source: Literal["url", "git"] = Field(
        default="url",
        description="Fetch deps.edn from a URL, or clone a dot-clojure repository.",
    )
    deps_edn_url: Union[HttpUrl, str] = Field(default=DEPS_EDN_URL_DEFAULT)
    git_repo_url: str = Field(default=DOT_CLOJURE_REPO_DEFAULT)
    clone_dir: str = Field(default="~/dot-clojure")
    file_name: str = Field(default="deps.edn")
    shell_function_signature: str = Field(
        default="deps-new()",
        description="Literal text whose presence means the helper already exists.",
    )
    shell_function_template: str = Field(
        default=(
            "export GH_USER={gh_user}\n"
            "deps-new() {{\n"
            '    clojure -Tnew app :name "$GH_USER/$1"\n'
            "}}"
        ),
        description="Shell block appended to the run-commands file. {gh_user} is substituted shell-quoted.",
    )


class AppSettings(BaseSettings):
    """Main installer settings."""

    model_config = SettingsConfigDict(
        env_prefix="CLJ_INSTALLER_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    log_prefix: str = Field(
        default=LOG_PREFIX_DEFAULT,
        description="Prefix for log messages from the installer.",
    )
    marker_namespace: str = Field(
        default="clj-installer",
        description="Tag used in run-commands block markers.",
    )
    download_timeout: int = Field(
        default=120, description="Seconds before an HTTP download is abandoned."
    )
    checksums: Dict[str, str] = Field(
        default_factory=dict,
        description="Optional SHA-256 digests keyed by download URL.",
    )
    temp_dirs: List[str] = Field(
        default_factory=lambda: ["~/dot-clojure", "~/vscode-calva-setup"],
        description="Temporary working directories removed when the run ends.",
    )

    runtime: RuntimeSettings = Field(default_factory=RuntimeSettings)
    toolchain: ToolchainSettings = Field(default_factory=ToolchainSettings)
    editors: EditorSettings = Field(default_factory=EditorSettings)
    shared_config: SharedConfigSettings = Field(
        default_factory=SharedConfigSettings
    )

    symbols: Dict[str, str] = Field(
        default_factory=lambda: dict(SYMBOLS_DEFAULT)
    )


class SystemProfile(BaseModel):
    """Facts about the host, detected once at the start of a run."""

    package_manager_kind: PackageManagerKind
    rc_file: Path
    shell: str


class DirectoryChoice(BaseModel):
    """User-resolved Clojure install location."""

    path: Path
    created: bool = False


class ShellProfileEdit(BaseModel):
    """A marker-delimited block destined for the run-commands file."""

    block_id: str
    marker_begin: str
    marker_end: str
    payload: str

    def render(self) -> str:
        return f"\n{self.marker_begin}\n{self.payload.rstrip()}\n{self.marker_end}\n"


class BackupArtifact(BaseModel):
    """Record of a user file copied aside before it was overwritten."""

    original_path: Path
    backup_path: Path


class BootstrapReport(BaseModel):
    """What a completed run did, for the final summary."""

    toolchain_dir: Optional[Path] = None
    installed: List[str] = Field(default_factory=list)
    already_present: List[str] = Field(default_factory=list)
    editors_configured: List[str] = Field(default_factory=list)
    backups: List[BackupArtifact] = Field(default_factory=list)
