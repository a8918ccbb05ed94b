"""
Unit tests for command line option resolution.
"""
import logging

import pytest
from engine import BoardConfig, InvalidConfigError
from tui.cli import build_parser, configure_logging, main, resolve_config


def resolve(argv, terminal_size=(80, 30)) -> BoardConfig:
    args = build_parser().parse_args(argv)
    return resolve_config(args, terminal_size)


# ============================================================================
# Resolution Tests
# ============================================================================

class TestResolveConfig:
    """Test how options turn into a board configuration."""

    def test_defaults(self) -> None:
        """No options gives the default 22x12 board with 41 mines."""
        assert resolve([]) == BoardConfig(22, 12, 41)

    def test_explicit_size(self) -> None:
        """Width, height and mines are taken as given."""
        assert resolve(["-w", "30", "-H", "10", "-m", "50"]) == BoardConfig(
            30, 10, 50
        )

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("beginner", (22, 4, 11)),
            ("Intermediate", (22, 12, 41)),
            ("EXPERT", (22, 22, 100)),
        ],
    )
    def test_difficulty_presets(self, name: str, expected) -> None:
        """Difficulty names are case-insensitive presets."""
        config = resolve(["-d", name])
        assert (config.width, config.height, config.mine_count) == expected

    def test_max_dimensions(self) -> None:
        """Max flags fill the terminal minus the frame."""
        config = resolve(["--max-width", "--max-height"], (60, 20))
        assert (config.width, config.height) == (58, 15)

    def test_smart_difficulty(self) -> None:
        """Smart difficulty sizes the mine count to the board."""
        config = resolve(["-w", "30", "-H", "10", "-s", "expert"])
        assert config.mine_count == 61

    def test_too_wide_for_terminal(self) -> None:
        """Boards wider than the terminal are rejected."""
        with pytest.raises(InvalidConfigError, match="terminal width"):
            resolve(["-w", "79"], (80, 30))

    def test_too_tall_for_terminal(self) -> None:
        """Boards taller than the terminal are rejected."""
        with pytest.raises(InvalidConfigError, match="terminal height"):
            resolve(["-d", "expert"], (80, 24))

    def test_too_narrow(self) -> None:
        """The header needs a minimum width."""
        with pytest.raises(InvalidConfigError, match="smaller than 12"):
            resolve(["-w", "10"])

    def test_too_many_mines(self) -> None:
        """Mine counts must leave a safe tile."""
        with pytest.raises(InvalidConfigError, match="Too many mines"):
            resolve(["-m", "264"])


# ============================================================================
# Conflict Tests
# ============================================================================

class TestConflicts:
    """Test option combinations that are refused before any game."""

    @pytest.mark.parametrize(
        "argv",
        [
            ["-w", "30", "--max-width"],
            ["-H", "10", "--max-height"],
            ["-d", "expert", "-w", "30"],
            ["-d", "expert", "--max-height"],
            ["-s", "expert", "-m", "5"],
            ["-s", "expert", "-d", "beginner"],
            ["-d", "impossible"],
        ],
    )
    def test_conflicting_options_exit(self, argv) -> None:
        """Conflicts exit with a usage error."""
        with pytest.raises(SystemExit) as excinfo:
            main(argv)
        assert excinfo.value.code == 2

    def test_invalid_config_exits_before_game(self, capsys) -> None:
        """Invalid boards are reported as errors."""
        with pytest.raises(SystemExit) as excinfo:
            main(["-w", "5"])
        assert excinfo.value.code == 2
        assert "error: width cannot be smaller than 12" in capsys.readouterr().err


# ============================================================================
# Logging Tests
# ============================================================================

class TestConfigureLogging:
    """Test logging setup."""

    def test_no_log_file_leaves_root_untouched(self) -> None:
        """Without a log file no handler is installed."""
        root = logging.getLogger()
        before = list(root.handlers)
        configure_logging(None, "DEBUG")
        assert root.handlers == before
