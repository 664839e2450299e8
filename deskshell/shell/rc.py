"""
Shell rc File

Parses the user's rc file (``~/.zshrc`` by default) into an RcConfig.

Recognised lines:
    alias ll="ls"                 first-token alias
    PROMPT_STYLE=minimal          powerline | minimal | classic
    MOTD=false                    system info banner on start
    # Custom startup commands     marker; later non-comment lines are
                                  startup commands

Comments and blank lines are skipped. Anything else is ignored.
"""

from __future__ import annotations

import logging
import re

from deskshell.shell.tokenizer import tokenize
from deskshell.types import RcConfig

logger = logging.getLogger(__name__)

STARTUP_MARKER = "# Custom startup commands"
PROMPT_STYLES = ("powerline", "minimal", "classic")

_ALIAS_RE = re.compile(r"""^alias\s+([^\s=]+)=(["'])(.+)\2$""")


def parse_rc(content: str) -> RcConfig:
    """Parse rc file content."""
    config = RcConfig()
    past_marker = False

    for raw in content.splitlines():
        line = raw.strip()
        if line.startswith(STARTUP_MARKER):
            past_marker = True
            continue
        if not line or line.startswith("#"):
            continue

        if match := _ALIAS_RE.match(line):
            config.aliases[match.group(1)] = match.group(3)
            continue

        key, sep, value = line.partition("=")
        if sep and key == "PROMPT_STYLE":
            style = value.strip().lower()
            if style in PROMPT_STYLES:
                config.prompt_style = style
            else:
                logger.debug(f"Ignoring unknown prompt style '{value}'")
            continue
        if sep and key == "MOTD":
            config.show_motd = value.strip().lower() == "true"
            continue

        if past_marker:
            config.startup_commands.append(line)
        else:
            logger.debug(f"Ignoring rc line: {line}")

    return config


def expand_alias(argv: list[str], aliases: dict[str, str]) -> list[str]:
    """
    Expand the first token through the alias table, once.

    ``ll -a`` with ``ll="ls"`` -> ``["ls", "-a"]``. Expansions are not
    themselves expanded again.
    """
    if not argv or argv[0] not in aliases:
        return argv
    return tokenize(aliases[argv[0]]) + argv[1:]
