"""
ShellConfig - Configuration Management

Sensible defaults with full override capability.

Example:
    >>> # Use defaults (reads from environment)
    >>> term = await SessionCoordinator.start(graph=demo_graph())

    >>> # Explicit configuration
    >>> config = ShellConfig(username="alice", shell_name="bash")
    >>> term = await SessionCoordinator.start(graph=graph, config=config)

    >>> # From config file
    >>> config = ShellConfig.from_file("./deskshell.toml")

Environment Variables:
    DESKSHELL_USERNAME - Account shown in the prompt (sandboxed mode)
    DESKSHELL_HOSTNAME - Host name shown in the prompt (sandboxed mode)
    DESKSHELL_SHELL_NAME - Name used in "command not found" messages
    DESKSHELL_ROOT_ID - Identifier of the directory graph root
    DESKSHELL_HOME_ID - Home node identifier (default: user-<username>)
    DESKSHELL_MAX_PATH_DEPTH - Ancestor walk bound for display paths
    DESKSHELL_BRIDGE_TIMEOUT - Seconds before a host round trip is abandoned
    DESKSHELL_LS_DIRECTORIES_FIRST - List directories before files
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

# Smallest ancestor walk bound accepted for display paths
MIN_PATH_DEPTH = 20

_TRUE_VALUES = ("1", "true", "yes", "on")


def _load_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


class ShellConfig:
    """Configuration for a terminal session."""

    # === Session Configuration ===

    username: str = "guest"
    """Account name used by sandboxed sessions"""

    hostname: str = "deskshell"
    """Host name shown in sandboxed prompts (bridged sessions use the host's)"""

    root_id: str = "root"
    """Identifier of the directory graph root ("/")"""

    home_id: str | None = None
    """Home node identifier; derived as user-<username> when unset"""

    # === Shell Configuration ===

    shell_name: str = "zsh"
    """Shell name used in "command not found" messages and banners"""

    max_path_depth: int = 256
    """Ancestor walk bound when rendering a node as a path"""

    ls_directories_first: bool = False
    """List directories before files (insertion order is kept within each group)"""

    rc_filename: str = ".zshrc"
    """Name of the rc file read from the home directory"""

    motd: bool = True
    """Show the system info banner when the rc file does not say otherwise"""

    history_limit: int = 500
    """Maximum number of remembered command lines"""

    # === Bridge Configuration ===

    bridge_timeout: float | None = 30.0
    """Seconds to wait for one host round trip; None waits forever"""

    # === Profile Strings ===

    about_text: str = "Full stack developer who cares about pixel-perfect interfaces and clean code."
    """Output of `about`"""

    skills_text: str = "Python • TypeScript • React • Node.js • SQL • Linux"
    """Output of `skills`"""

    projects_text: str = "Open the Explorer app to browse projects."
    """Output of `projects`"""

    contact_text: str = "Email: hello@example.com"
    """Output of `contact`"""

    def __init__(self, **kwargs: Any) -> None:
        """
        Initialize configuration.

        Args:
            **kwargs: Override any configuration option

        Raises:
            ValueError: On unknown options or a path depth below the minimum
        """
        # Load from environment first
        self._load_from_env()

        # Apply explicit overrides
        for key, value in kwargs.items():
            if hasattr(self, key) and not key.startswith("_"):
                setattr(self, key, value)
            else:
                raise ValueError(f"Unknown configuration option: {key}")

        self._validate()

    def _load_from_env(self) -> None:
        """Load configuration from environment variables."""
        import os

        if username := os.getenv("DESKSHELL_USERNAME"):
            self.username = username
        if hostname := os.getenv("DESKSHELL_HOSTNAME"):
            self.hostname = hostname
        if shell_name := os.getenv("DESKSHELL_SHELL_NAME"):
            self.shell_name = shell_name
        if root_id := os.getenv("DESKSHELL_ROOT_ID"):
            self.root_id = root_id
        if home_id := os.getenv("DESKSHELL_HOME_ID"):
            self.home_id = home_id
        if depth := os.getenv("DESKSHELL_MAX_PATH_DEPTH"):
            self.max_path_depth = int(depth)
        if timeout := os.getenv("DESKSHELL_BRIDGE_TIMEOUT"):
            self.bridge_timeout = None if timeout.lower() == "none" else float(timeout)
        if dirs_first := os.getenv("DESKSHELL_LS_DIRECTORIES_FIRST"):
            self.ls_directories_first = dirs_first.lower() in _TRUE_VALUES

    def _validate(self) -> None:
        if self.max_path_depth < MIN_PATH_DEPTH:
            raise ValueError(
                f"max_path_depth must be at least {MIN_PATH_DEPTH}, got {self.max_path_depth}"
            )
        if self.bridge_timeout is not None and self.bridge_timeout <= 0:
            raise ValueError(f"bridge_timeout must be positive, got {self.bridge_timeout}")

    @property
    def resolved_home_id(self) -> str:
        """Home node identifier, derived from the username when not configured."""
        return self.home_id or f"user-{self.username}"

    @classmethod
    def from_file(cls, path: str | Path) -> "ShellConfig":
        """
        Load configuration from TOML file.

        Nested sections are flattened; section names are not prefixed
        onto keys except for [bridge] (bridge.timeout -> bridge_timeout).

        Example TOML:
            [session]
            username = "alice"
            hostname = "studio"

            [shell]
            shell_name = "bash"
            ls_directories_first = true

            [bridge]
            timeout = 10

        Args:
            path: Path to TOML configuration file

        Returns:
            ShellConfig instance with values from file

        Raises:
            FileNotFoundError: If config file doesn't exist
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        data = _load_toml(path)

        flat_config: dict[str, Any] = {}

        section_mapping = {
            "session": "",
            "shell": "",
            "bridge": "bridge_",
            "profile": "",
        }

        for section, prefix in section_mapping.items():
            if section in data:
                for key, value in data[section].items():
                    flat_config[f"{prefix}{key}"] = value

        # Also support flat top-level keys
        for key, value in data.items():
            if key not in section_mapping and not isinstance(value, dict):
                flat_config[key] = value

        return cls(**flat_config)

    @classmethod
    def from_env(cls) -> "ShellConfig":
        """Load configuration from environment variables only."""
        return cls()

    def to_file(self, path: str | Path) -> None:
        """
        Save configuration to TOML file.

        Unset optional values (home_id, a disabled bridge timeout) are
        omitted since TOML has no null.

        Args:
            path: Path to write TOML configuration file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        sections: dict[str, dict[str, str | int | float | bool | None]] = {
            "session": {
                "username": self.username,
                "hostname": self.hostname,
                "root_id": self.root_id,
                "home_id": self.home_id,
            },
            "shell": {
                "shell_name": self.shell_name,
                "max_path_depth": self.max_path_depth,
                "ls_directories_first": self.ls_directories_first,
                "rc_filename": self.rc_filename,
                "motd": self.motd,
                "history_limit": self.history_limit,
            },
            "bridge": {
                "timeout": self.bridge_timeout,
            },
            "profile": {
                "about_text": self.about_text,
                "skills_text": self.skills_text,
                "projects_text": self.projects_text,
                "contact_text": self.contact_text,
            },
        }

        # Build TOML string manually (tomllib only reads)
        lines = ["# deskshell configuration", ""]

        for section_name, section_values in sections.items():
            lines.append(f"[{section_name}]")
            for key, value in section_values.items():
                if isinstance(value, str):
                    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
                    lines.append(f'{key} = "{escaped}"')
                elif isinstance(value, bool):
                    lines.append(f"{key} = {str(value).lower()}")
                elif isinstance(value, (int, float)):
                    lines.append(f"{key} = {value}")
            lines.append("")

        path.write_text("\n".join(lines), encoding="utf-8")

    def with_overrides(self, **kwargs: Any) -> "ShellConfig":
        """Return new config with specified overrides."""
        new_config = ShellConfig.__new__(ShellConfig)
        for key in dir(self):
            if not key.startswith("_") and not callable(getattr(self, key)) and key != "resolved_home_id":
                setattr(new_config, key, getattr(self, key))
        for key, value in kwargs.items():
            if not hasattr(new_config, key):
                raise ValueError(f"Unknown configuration option: {key}")
            setattr(new_config, key, value)
        new_config._validate()
        return new_config
