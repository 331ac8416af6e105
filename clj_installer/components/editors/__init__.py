"""
Editor integrations offered during the bootstrap.
"""

from clj_installer.components.editors.base_editor import EditorConfigurator
from clj_installer.components.editors.neovim_configurator import (
    NeovimConfigurator,
)
from clj_installer.components.editors.vscode_configurator import (
    VSCodeConfigurator,
)

# Order in which the variants are offered.
EDITOR_CONFIGURATORS = (NeovimConfigurator, VSCodeConfigurator)

__all__ = [
    "EDITOR_CONFIGURATORS",
    "EditorConfigurator",
    "NeovimConfigurator",
    "VSCodeConfigurator",
]
