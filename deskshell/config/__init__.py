"""
Configuration System

Manages configuration for deskshell with a layered approach.

Configuration Priority (highest to lowest):
    1. Programmatic (passed to ShellConfig())
    2. Environment variables (DESKSHELL_* prefix)
    3. Config file (ShellConfig.from_file)
    4. Built-in defaults

Modules:
    settings: ShellConfig class
"""

from deskshell.config.settings import MIN_PATH_DEPTH, ShellConfig

__all__ = ["MIN_PATH_DEPTH", "ShellConfig"]
