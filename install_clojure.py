#!/usr/bin/env python3
"""
Entry point for running the installer from a source checkout.
"""

from clj_installer.cli import main

if __name__ == "__main__":
    main()
