"""
Virtual Command Dispatcher

Builtin commands of sandboxed sessions, run against a read-only directory
graph and the session's current directory.

Every handler has the signature ``(graph, session, args, config) ->
CommandResult`` and is registered in COMMANDS; adding a builtin is one
table entry. Handlers never mutate the session themselves: a ``cd``
reports the new directory through ``mutate_cwd`` and ``clear`` through
``clear_transcript``, and the coordinator applies both.

Errors (unknown paths, wrong node kinds, unknown commands) come back as
error results and are never raised.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import datetime

from deskshell.config.settings import ShellConfig
from deskshell.graph.base import DirectoryGraph
from deskshell.shell.path_resolver import expand_home, path_to_string, resolve, resolve_file
from deskshell.shell.rc import expand_alias
from deskshell.types import CommandResult, DirectoryGraphNode, LineKind, Session

logger = logging.getLogger(__name__)

CommandHandler = Callable[[DirectoryGraph, Session, list[str], ShellConfig], CommandResult]

EMPTY_MARKER = "(empty)"
NO_SUCH_FILE = "No such file or directory"


def _not_found(cmd: str, path: str) -> CommandResult:
    return CommandResult.error(f"{cmd}: {path}: {NO_SUCH_FILE}")


def _info(text: str) -> CommandResult:
    return CommandResult(output=text, kind=LineKind.INFO)


def _positional(args: list[str]) -> list[str]:
    """Arguments that are not flags (flags are accepted and ignored)."""
    return [arg for arg in args if not (arg.startswith("-") and len(arg) > 1)]


def format_listing(items: list[DirectoryGraphNode], directories_first: bool = False) -> str:
    """
    Render directory entries one per line.

    Directories and aliases carry a trailing "/". Stored order is kept;
    ``directories_first`` moves directories ahead of files without
    reordering within either group.
    """
    if not items:
        return EMPTY_MARKER
    if directories_first:
        items = [i for i in items if i.is_directory] + [i for i in items if not i.is_directory]
    return "\n".join(f"{item.name}/" if item.is_directory else item.name for item in items)


def system_info_lines(session: Session, config: ShellConfig) -> list[str]:
    """neofetch-style system summary shared by the banner and `neofetch`."""
    return [
        f"  █ OS      deskshell {_version()}",
        f"  █ Shell   {config.shell_name}",
        f"  █ User    {session.username}@{session.hostname}",
        f"  █ Mode    {session.mode.value}",
        f"  █ Uptime  {_uptime_minutes(session)} minutes",
    ]


def _version() -> str:
    from deskshell import __version__
    return __version__


def _uptime_minutes(session: Session) -> int:
    return int((time.time() - session.started_at) // 60)


# =============================================================================
# Command Implementations
# =============================================================================

def cmd_help(graph: DirectoryGraph, session: Session, args: list[str], config: ShellConfig) -> CommandResult:
    """List the builtin commands."""
    aliases = ", ".join(session.rc.aliases) or "none"
    lines = [
        "Available Commands:",
        "  ls [path]          List directory contents",
        "  cd [path]          Change directory",
        "  cat <file>         Display file contents",
        "  pwd                Print working directory",
        "  echo <text>        Print text",
        "  whoami             Current user info",
        "  history            Command history",
        "  date               Current date/time",
        "  uptime             Session uptime",
        "  neofetch           System information",
        "  about              About the owner",
        "  skills             Technical skills",
        "  projects           Browse projects",
        "  contact            Contact info",
        "  clear              Clear terminal",
        "",
        f"  Aliases: {aliases}",
        f"  Config:  ~/{config.rc_filename}",
    ]
    return CommandResult(output="\n".join(lines))


def cmd_ls(graph: DirectoryGraph, session: Session, args: list[str], config: ShellConfig) -> CommandResult:
    """
    List a directory.

    Usage:
        ls
        ls Documents
        ls ~/Projects
    """
    paths = _positional(args)
    target_expr = paths[0] if paths else None
    if target_expr is None:
        target = session.cwd_id
    else:
        target = resolve(graph, session.cwd_id, session.home_id, target_expr, root_id=config.root_id)

    if target is None:
        return _not_found("ls", target_expr or ".")

    items = graph.children(target)
    if not items:
        return CommandResult(output=EMPTY_MARKER, kind=LineKind.MUTED)
    return CommandResult(output=format_listing(items, config.ls_directories_first))


def cmd_cd(graph: DirectoryGraph, session: Session, args: list[str], config: ShellConfig) -> CommandResult:
    """
    Change directory.

    Usage:
        cd              (home)
        cd Documents
        cd ../..
    """
    if not args:
        return CommandResult(mutate_cwd=session.home_id)

    target = resolve(graph, session.cwd_id, session.home_id, args[0], root_id=config.root_id)
    if target is None:
        return _not_found("cd", args[0])
    return CommandResult(mutate_cwd=target)


def cmd_pwd(graph: DirectoryGraph, session: Session, args: list[str], config: ShellConfig) -> CommandResult:
    """Print the working directory with ~ spelled out."""
    path = path_to_string(
        graph,
        session.cwd_id,
        session.home_id,
        root_id=config.root_id,
        max_depth=config.max_path_depth,
    )
    return CommandResult(output=expand_home(path, session.display_name))


def cmd_cat(graph: DirectoryGraph, session: Session, args: list[str], config: ShellConfig) -> CommandResult:
    """
    Print a file.

    Usage:
        cat notes.txt
        cat ~/Documents/notes.txt
    """
    if not args:
        return CommandResult.error("cat: missing filename")

    node = resolve_file(graph, session.cwd_id, session.home_id, args[0], root_id=config.root_id)
    if node is None:
        return _not_found("cat", args[0])
    if node.is_directory:
        return CommandResult.error(f"cat: {node.name}: Is a directory")
    return CommandResult(output=node.content or node.description or EMPTY_MARKER)


def cmd_echo(graph: DirectoryGraph, session: Session, args: list[str], config: ShellConfig) -> CommandResult:
    return CommandResult(output=" ".join(args))


def cmd_whoami(graph: DirectoryGraph, session: Session, args: list[str], config: ShellConfig) -> CommandResult:
    role = "guest" if session.display_name == "Guest" else "admin"
    lines = [
        "┌─ User Info ─────────────",
        f"│ user     {session.username}",
        f"│ host     {session.hostname}",
        f"│ shell    {config.shell_name}",
        f"│ home     /Users/{session.display_name}",
        f"│ role     {role}",
        "└─────────────────────────",
    ]
    return CommandResult(output="\n".join(lines))


def cmd_date(graph: DirectoryGraph, session: Session, args: list[str], config: ShellConfig) -> CommandResult:
    return CommandResult(output=datetime.now().astimezone().strftime("%a %b %d %H:%M:%S %Z %Y"))


def cmd_uptime(graph: DirectoryGraph, session: Session, args: list[str], config: ShellConfig) -> CommandResult:
    return CommandResult(output=f"up {_uptime_minutes(session)} minutes")


def cmd_history(graph: DirectoryGraph, session: Session, args: list[str], config: ShellConfig) -> CommandResult:
    """Numbered command history, oldest first."""
    if not session.command_history:
        return CommandResult()
    lines = [f"  {i:>4} {line}" for i, line in enumerate(session.command_history, start=1)]
    return CommandResult(output="\n".join(lines))


def cmd_neofetch(graph: DirectoryGraph, session: Session, args: list[str], config: ShellConfig) -> CommandResult:
    return _info("\n".join(system_info_lines(session, config)))


def cmd_about(graph: DirectoryGraph, session: Session, args: list[str], config: ShellConfig) -> CommandResult:
    return _info(config.about_text)


def cmd_skills(graph: DirectoryGraph, session: Session, args: list[str], config: ShellConfig) -> CommandResult:
    return _info(config.skills_text)


def cmd_projects(graph: DirectoryGraph, session: Session, args: list[str], config: ShellConfig) -> CommandResult:
    return _info(config.projects_text)


def cmd_contact(graph: DirectoryGraph, session: Session, args: list[str], config: ShellConfig) -> CommandResult:
    return _info(config.contact_text)


def cmd_clear(graph: DirectoryGraph, session: Session, args: list[str], config: ShellConfig) -> CommandResult:
    return CommandResult(clear_transcript=True)


def cmd_exit(graph: DirectoryGraph, session: Session, args: list[str], config: ShellConfig) -> CommandResult:
    return CommandResult(output="Close the terminal window to end this session.", kind=LineKind.MUTED)


# =============================================================================
# Command Dispatcher
# =============================================================================

COMMANDS: dict[str, CommandHandler] = {
    "help": cmd_help,
    "ls": cmd_ls,
    "cd": cmd_cd,
    "pwd": cmd_pwd,
    "cat": cmd_cat,
    "echo": cmd_echo,
    "whoami": cmd_whoami,
    "date": cmd_date,
    "uptime": cmd_uptime,
    "history": cmd_history,
    "neofetch": cmd_neofetch,
    "about": cmd_about,
    "skills": cmd_skills,
    "projects": cmd_projects,
    "contact": cmd_contact,
    "clear": cmd_clear,
    "exit": cmd_exit,
}


def execute(
    graph: DirectoryGraph,
    session: Session,
    argv: list[str],
    config: ShellConfig | None = None,
) -> CommandResult:
    """
    Execute one tokenized command line.

    The first token goes through the session's aliases, then is matched
    case-insensitively against COMMANDS. Arguments are passed unchanged.

    Returns:
        The command's result; an empty result for an empty line
    """
    config = config or ShellConfig()
    argv = expand_alias(argv, session.rc.aliases)
    if not argv:
        return CommandResult()

    cmd_name = argv[0].lower()
    handler = COMMANDS.get(cmd_name)
    if handler is None:
        return CommandResult.error(f"{config.shell_name}: command not found: {cmd_name}")

    logger.debug(f"Dispatching '{cmd_name}' with {len(argv) - 1} args")
    return handler(graph, session, argv[1:], config)
