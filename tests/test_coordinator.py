"""Tests for the session coordinator in both modes."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from deskshell.config import ShellConfig
from deskshell.graph import demo_graph
from deskshell.shell.coordinator import SessionCoordinator
from deskshell.types import DirectoryGraphNode, ExecResult, HostIdentity, LineKind, SessionMode

HOME = "H"


def _host(response: ExecResult | None = None, **kwargs) -> AsyncMock:
    host = AsyncMock()
    host.get_identity = AsyncMock(
        return_value=HostIdentity(homedir="/home/alice", hostname="box", username="alice")
    )
    host.execute = AsyncMock(return_value=response, **kwargs)
    return host


async def _wait_until_in_flight(term: SessionCoordinator) -> None:
    for _ in range(100):
        if term.in_flight:
            return
        await asyncio.sleep(0)
    raise AssertionError("submission never started")


class TestSandboxedStart:
    """Test sandboxed session creation."""

    @pytest.mark.asyncio
    async def test_starts_at_home(self, graph, config):
        term = await SessionCoordinator.start(graph=graph, config=config)

        assert term.mode is SessionMode.SANDBOXED
        assert term.session.cwd_id == HOME
        assert term.display_path == "~"
        assert term.prompt == "guest@deskshell ~ $ "
        assert not term.in_flight

    @pytest.mark.asyncio
    async def test_banner_seeded(self, graph, config):
        term = await SessionCoordinator.start(graph=graph, config=config)

        assert term.session.transcript
        assert 'Type "help" for available commands.' in term.session.lines()
        assert term.session.command_history == []

    @pytest.mark.asyncio
    async def test_requires_graph_or_bridge(self, config):
        with pytest.raises(ValueError):
            await SessionCoordinator.start(config=config)

    @pytest.mark.asyncio
    async def test_rc_file_loaded(self, graph_factory, config):
        rc = DirectoryGraphNode(
            id="rc",
            name=".zshrc",
            parent_id=HOME,
            content='alias ll="ls"\nMOTD=false\n# Custom startup commands\necho hi\n',
        )
        term = await SessionCoordinator.start(graph=graph_factory(rc), config=config)

        assert term.session.rc.aliases == {"ll": "ls"}
        assert not term.session.rc.show_motd
        assert "deskshell • zsh" in term.session.lines()
        assert "> echo hi" in term.session.lines()

    @pytest.mark.asyncio
    async def test_rc_prompt_style(self, graph_factory, config):
        rc = DirectoryGraphNode(id="rc", name=".zshrc", parent_id=HOME, content="PROMPT_STYLE=classic\n")
        term = await SessionCoordinator.start(graph=graph_factory(rc), config=config)

        assert term.prompt == "guest@deskshell:~$ "
        await term.submit("cd docs")
        assert term.prompt == "guest@deskshell:~/docs$ "

    @pytest.mark.asyncio
    async def test_motd_setting_without_rc(self, graph, config):
        term = await SessionCoordinator.start(graph=graph, config=config.with_overrides(motd=False))
        assert not term.session.rc.show_motd


class TestSandboxedSubmit:
    """Test the submission cycle against the directory graph."""

    @pytest.mark.asyncio
    async def test_prompt_output_separator(self, graph, config):
        term = await SessionCoordinator.start(graph=graph, config=config)
        before = len(term.session.transcript)

        assert await term.submit("ls empty") is True

        new = term.session.transcript[before:]
        assert [(line.text, line.kind) for line in new] == [
            ("guest@deskshell ~ $ ls empty", LineKind.PROMPT),
            ("(empty)", LineKind.MUTED),
            ("", LineKind.OUTPUT),
        ]

    @pytest.mark.asyncio
    async def test_cd_and_pwd_scenario(self, graph, config):
        term = await SessionCoordinator.start(graph=graph, config=config)

        await term.submit("cd docs")
        assert term.session.cwd_id == "D"
        assert term.display_path == "~/docs"
        assert term.prompt == "guest@deskshell ~/docs $ "

        await term.submit("pwd")
        assert term.session.lines()[-2] == "/Users/Guest/docs"

        await term.submit("cd ..")
        assert term.session.cwd_id == HOME
        assert term.display_path == "~"

    @pytest.mark.asyncio
    async def test_failed_cd_leaves_cwd(self, graph, config):
        term = await SessionCoordinator.start(graph=graph, config=config)
        await term.submit("cd docs")
        before = len(term.session.transcript)

        await term.submit("cd nowhere")

        assert term.session.cwd_id == "D"
        new = term.session.transcript[before:]
        assert [line.kind for line in new].count(LineKind.ERROR) == 1
        assert new[1].text == "cd: nowhere: No such file or directory"

    @pytest.mark.asyncio
    async def test_rejected_while_in_flight(self, graph, config):
        """A second submission has no observable effect."""
        term = await SessionCoordinator.start(graph=graph, config=config)
        term.session.in_flight = True
        before = list(term.session.transcript)

        assert await term.submit("cd docs") is False

        assert term.session.transcript == before
        assert term.session.cwd_id == HOME
        assert term.session.command_history == []

    @pytest.mark.asyncio
    async def test_clear_truncates_transcript(self, graph, config):
        term = await SessionCoordinator.start(graph=graph, config=config)
        await term.submit("ls")

        await term.submit("clear")

        assert term.session.transcript == []
        assert not term.in_flight

    @pytest.mark.asyncio
    async def test_empty_line_appends_prompt_only(self, graph, config):
        term = await SessionCoordinator.start(graph=graph, config=config)
        before = len(term.session.transcript)

        await term.submit("   ")

        new = term.session.transcript[before:]
        assert len(new) == 1
        assert new[0].kind == LineKind.PROMPT
        assert term.session.command_history == []

    @pytest.mark.asyncio
    async def test_history_includes_current_command(self, graph, config):
        term = await SessionCoordinator.start(graph=graph, config=config)
        await term.submit("ls")
        await term.submit("pwd")
        await term.submit("history")

        assert term.session.command_history == ["ls", "pwd", "history"]
        assert term.session.lines()[-2] == "     3 history"

    @pytest.mark.asyncio
    async def test_history_limit(self, graph, config):
        term = await SessionCoordinator.start(graph=graph, config=config.with_overrides(history_limit=2))
        for line in ("echo 1", "echo 2", "echo 3"):
            await term.submit(line)

        assert term.session.command_history == ["echo 2", "echo 3"]

    @pytest.mark.asyncio
    async def test_demo_graph_session(self):
        config = ShellConfig(username="guest", home_id=None, root_id="root")
        term = await SessionCoordinator.start(graph=demo_graph(), config=config)

        await term.submit("ll")
        assert "Documents/" in term.session.lines()

        await term.submit("cd Documents")
        await term.submit("pwd")
        assert term.session.lines()[-2] == "/Users/Guest/Documents"

        await term.submit("cat notes.txt")
        assert term.session.lines()[-2] == "Remember to back up the Projects folder."


class TestCompletion:
    """Test tab completion."""

    @pytest.mark.asyncio
    async def test_completes_directory(self, graph, config):
        term = await SessionCoordinator.start(graph=graph, config=config)
        assert term.complete("cd do") == "cd docs/"

    @pytest.mark.asyncio
    async def test_case_insensitive_file(self, graph, config):
        term = await SessionCoordinator.start(graph=graph, config=config)
        assert term.complete("cat READ") == "cat readme.txt"

    @pytest.mark.asyncio
    async def test_no_match_unchanged(self, graph, config):
        term = await SessionCoordinator.start(graph=graph, config=config)
        assert term.complete("cat zz") == "cat zz"
        assert term.complete("cd ") == "cd "

    @pytest.mark.asyncio
    async def test_trashed_not_completed(self, graph, config):
        term = await SessionCoordinator.start(graph=graph, config=config)
        assert term.complete("cd ol") == "cd ol"

    @pytest.mark.asyncio
    async def test_bridged_sessions_do_not_complete(self, config):
        term = await SessionCoordinator.start(bridge=_host(), config=config)
        assert term.complete("cd pro") == "cd pro"


class TestBridgedSession:
    """Test the submission cycle against a mocked host."""

    @pytest.mark.asyncio
    async def test_start_fetches_identity(self, config):
        host = _host()
        term = await SessionCoordinator.start(bridge=host, config=config)

        host.get_identity.assert_awaited_once()
        assert term.mode is SessionMode.BRIDGED
        assert term.session.cwd_path == "/home/alice"
        assert term.prompt == "alice@box ~ $ "
        assert any("Native Shell Mode" in text for text in term.session.lines())

    @pytest.mark.asyncio
    async def test_cd_scenario(self, config):
        host = _host(ExecResult(success=True, stdout="/home/alice/projects\n"))
        term = await SessionCoordinator.start(bridge=host, config=config)

        await term.submit("cd projects")

        host.execute.assert_awaited_once_with("cd /home/alice/projects && pwd", None)
        assert term.session.cwd_path == "/home/alice/projects"
        assert term.display_path == "~/projects"
        assert term.prompt == "alice@box ~/projects $ "

    @pytest.mark.asyncio
    async def test_failed_cd_leaves_cwd_path(self, config):
        host = _host(ExecResult(success=False, exit_code=1))
        term = await SessionCoordinator.start(bridge=host, config=config)

        await term.submit("cd nope")

        assert term.session.cwd_path == "/home/alice"
        assert term.session.lines()[-2] == "cd: nope: No such file or directory"

    @pytest.mark.asyncio
    async def test_output_then_separator(self, config):
        host = _host(ExecResult(success=False, stdout="out\n", stderr="err\n", exit_code=1))
        term = await SessionCoordinator.start(bridge=host, config=config)
        before = len(term.session.transcript)

        await term.submit("make")

        new = term.session.transcript[before:]
        assert [(line.text, line.kind) for line in new] == [
            ("alice@box ~ $ make", LineKind.PROMPT),
            ("out", LineKind.OUTPUT),
            ("err", LineKind.ERROR),
            ("", LineKind.OUTPUT),
        ]

    @pytest.mark.asyncio
    async def test_transport_error_distinct(self, config):
        host = _host(ExecResult(success=False, transport_error="ipc closed"))
        term = await SessionCoordinator.start(bridge=host, config=config)

        await term.submit("ls")

        assert term.session.transcript[-2].kind == LineKind.BRIDGE_ERROR
        assert term.session.transcript[-2].text == "zsh: bridge error: ipc closed"
        assert not term.in_flight

    @pytest.mark.asyncio
    async def test_clear_not_sent(self, config):
        host = _host(ExecResult(success=True))
        term = await SessionCoordinator.start(bridge=host, config=config)

        await term.submit("clear")

        host.execute.assert_not_awaited()
        assert term.session.transcript == []

    @pytest.mark.asyncio
    async def test_rejected_while_round_trip_outstanding(self, config):
        release = asyncio.Event()

        async def slow(command, cwd):
            await release.wait()
            return ExecResult(success=True, stdout="done\n")

        host = _host(side_effect=slow)
        term = await SessionCoordinator.start(bridge=host, config=config)

        task = asyncio.create_task(term.submit("sleep 5"))
        await _wait_until_in_flight(term)
        before = len(term.session.transcript)

        assert await term.submit("pwd") is False
        assert len(term.session.transcript) == before

        release.set()
        assert await task is True
        assert term.session.lines()[-2] == "done"
        host.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_timeout_releases_session(self):
        async def hang(command, cwd):
            await asyncio.sleep(10)

        host = _host(side_effect=hang)
        config = ShellConfig(shell_name="zsh", bridge_timeout=0.05)
        term = await SessionCoordinator.start(bridge=host, config=config)

        await term.submit("cd projects")

        assert not term.in_flight
        assert term.session.running_since is None
        assert term.session.cwd_path == "/home/alice"
        assert term.session.transcript[-2].kind == LineKind.BRIDGE_ERROR
        assert term.session.transcript[-2].text == "zsh: bridge error: command timed out after 0.05s"

    @pytest.mark.asyncio
    async def test_abandon(self, config):
        async def hang(command, cwd):
            await asyncio.sleep(10)

        host = _host(side_effect=hang)
        term = await SessionCoordinator.start(bridge=host, config=config)

        task = asyncio.create_task(term.submit("tail -f log"))
        await _wait_until_in_flight(term)
        assert term.session.running_since is not None

        assert term.abandon() is True
        assert await task is True

        assert not term.in_flight
        assert term.session.transcript[-2].text == "^C"
        assert term.session.transcript[-2].kind == LineKind.MUTED

    @pytest.mark.asyncio
    async def test_abandon_when_idle(self, config):
        term = await SessionCoordinator.start(bridge=_host(), config=config)
        assert term.abandon() is False
