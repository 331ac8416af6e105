"""
Idempotent Clojure development environment bootstrap for Linux.

Installs a JDK and the Clojure CLI, optionally configures VSCode or Neovim,
and installs a shared deps.edn.
"""

__version__ = "0.1.0"
