"""
Bootstrap components.

Importing this package registers every component with the ComponentRegistry.
"""

from clj_installer.components.base_component import (
    BaseComponent,
    BootstrapContext,
)
from clj_installer.components.registry import ComponentRegistry
from clj_installer.components.runtime_installer import RuntimeInstaller
from clj_installer.components.toolchain_installer import ToolchainInstaller
from clj_installer.components.editor_setup import EditorSetup
from clj_installer.components.shared_config_installer import (
    SharedConfigInstaller,
)

__all__ = [
    "BaseComponent",
    "BootstrapContext",
    "ComponentRegistry",
    "EditorSetup",
    "RuntimeInstaller",
    "SharedConfigInstaller",
    "ToolchainInstaller",
]
