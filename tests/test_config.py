"""Tests for ShellConfig."""

import pytest

from deskshell.config import MIN_PATH_DEPTH, ShellConfig

ENV_VARS = (
    "DESKSHELL_USERNAME",
    "DESKSHELL_HOSTNAME",
    "DESKSHELL_SHELL_NAME",
    "DESKSHELL_ROOT_ID",
    "DESKSHELL_HOME_ID",
    "DESKSHELL_MAX_PATH_DEPTH",
    "DESKSHELL_BRIDGE_TIMEOUT",
    "DESKSHELL_LS_DIRECTORIES_FIRST",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    """Test built-in defaults."""

    def test_defaults(self):
        config = ShellConfig()
        assert config.username == "guest"
        assert config.shell_name == "zsh"
        assert config.root_id == "root"
        assert config.max_path_depth == 256
        assert config.bridge_timeout == 30.0
        assert config.ls_directories_first is False
        assert config.history_limit == 500

    def test_home_id_derived_from_username(self):
        assert ShellConfig().resolved_home_id == "user-guest"
        assert ShellConfig(username="alice").resolved_home_id == "user-alice"
        assert ShellConfig(home_id="H").resolved_home_id == "H"


class TestOverrides:
    """Test programmatic overrides and validation."""

    def test_kwargs(self):
        config = ShellConfig(shell_name="bash", ls_directories_first=True)
        assert config.shell_name == "bash"
        assert config.ls_directories_first is True

    def test_unknown_option(self):
        with pytest.raises(ValueError, match="Unknown configuration option"):
            ShellConfig(colour="blue")

    def test_depth_minimum(self):
        with pytest.raises(ValueError, match="max_path_depth"):
            ShellConfig(max_path_depth=MIN_PATH_DEPTH - 1)
        assert ShellConfig(max_path_depth=MIN_PATH_DEPTH).max_path_depth == MIN_PATH_DEPTH

    def test_timeout_validation(self):
        with pytest.raises(ValueError, match="bridge_timeout"):
            ShellConfig(bridge_timeout=0)
        assert ShellConfig(bridge_timeout=None).bridge_timeout is None

    def test_with_overrides_copies(self):
        base = ShellConfig(username="alice")
        derived = base.with_overrides(shell_name="fish")
        assert derived.username == "alice"
        assert derived.shell_name == "fish"
        assert base.shell_name == "zsh"

    def test_with_overrides_validates(self):
        with pytest.raises(ValueError):
            ShellConfig().with_overrides(max_path_depth=3)


class TestEnvironment:
    """Test DESKSHELL_* environment variables."""

    def test_env_values(self, monkeypatch):
        monkeypatch.setenv("DESKSHELL_USERNAME", "alice")
        monkeypatch.setenv("DESKSHELL_MAX_PATH_DEPTH", "64")
        monkeypatch.setenv("DESKSHELL_LS_DIRECTORIES_FIRST", "yes")
        config = ShellConfig()
        assert config.username == "alice"
        assert config.max_path_depth == 64
        assert config.ls_directories_first is True

    def test_env_disables_timeout(self, monkeypatch):
        monkeypatch.setenv("DESKSHELL_BRIDGE_TIMEOUT", "none")
        assert ShellConfig().bridge_timeout is None

    def test_kwargs_beat_env(self, monkeypatch):
        monkeypatch.setenv("DESKSHELL_SHELL_NAME", "bash")
        assert ShellConfig(shell_name="fish").shell_name == "fish"


class TestConfigFile:
    """Test TOML loading and saving."""

    def test_from_file(self, tmp_path):
        path = tmp_path / "deskshell.toml"
        path.write_text(
            '[session]\nusername = "alice"\nhostname = "studio"\n\n'
            '[shell]\nshell_name = "bash"\nls_directories_first = true\n\n'
            "[bridge]\ntimeout = 10\n\n"
            '[profile]\nabout_text = "Hi there"\n'
        )
        config = ShellConfig.from_file(path)
        assert config.username == "alice"
        assert config.hostname == "studio"
        assert config.shell_name == "bash"
        assert config.ls_directories_first is True
        assert config.bridge_timeout == 10
        assert config.about_text == "Hi there"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ShellConfig.from_file(tmp_path / "missing.toml")

    def test_unknown_key_in_file(self, tmp_path):
        path = tmp_path / "deskshell.toml"
        path.write_text("[shell]\nprompt_colour = 1\n")
        with pytest.raises(ValueError):
            ShellConfig.from_file(path)

    def test_to_file_reloads(self, tmp_path):
        original = ShellConfig(username="alice", about_text='Line "one"\nLine two', bridge_timeout=None)
        path = tmp_path / "out" / "deskshell.toml"
        original.to_file(path)

        loaded = ShellConfig.from_file(path)
        assert loaded.username == "alice"
        assert loaded.about_text == 'Line "one"\nLine two'
        assert loaded.home_id is None
        assert loaded.bridge_timeout == 30.0
