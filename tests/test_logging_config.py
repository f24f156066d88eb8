"""Tests for logging setup"""
import logging
from unittest.mock import Mock

from gtr.cli.main import main
from gtr.logging_config import ColoredFormatter, default_log_file, get_logger, setup_logging


class TestGetLogger:
    """Test logger naming."""

    def test_module_names_stay_in_package_namespace(self):
        assert get_logger("gtr.core.worktree_manager").name == "gtr.core.worktree_manager"

    def test_foreign_names_are_nested_under_gtr(self):
        assert get_logger("plugin").name == "gtr.plugin"


class TestDefaultLogFile:
    """Test the debug log location."""

    def test_uses_xdg_state_home(self, temp_dir):
        path = default_log_file({"XDG_STATE_HOME": str(temp_dir / "state")})
        assert path == temp_dir / "state" / "gtr" / "gtr.log"

    def test_falls_back_to_local_state(self, isolated_home):
        assert default_log_file({}) == isolated_home / ".local" / "state" / "gtr" / "gtr.log"


class TestSetupLogging:
    """Test handler and level configuration."""

    def test_warning_format_matches_cli_prefix(self, capsys):
        setup_logging()
        get_logger("gtr.core.worktree_manager").warning("Kept branch 'feat/x'")
        get_logger("gtr.core.worktree_manager").info("hidden")

        assert capsys.readouterr().err == "gtr: warning: Kept branch 'feat/x'\n"

    def test_verbose_shows_info(self, capsys):
        setup_logging(verbose=True)
        get_logger("gtr.config").info("resolved")
        assert "gtr: info: resolved" in capsys.readouterr().err

    def test_root_logger_untouched(self):
        root = logging.getLogger()
        before = root.handlers[:]

        setup_logging(debug=False)

        assert root.handlers == before

    def test_repeated_setup_does_not_stack_handlers(self):
        setup_logging()
        setup_logging(verbose=True)
        assert len(logging.getLogger("gtr").handlers) == 1

    def test_git_logger_quiet_unless_debugging(self, temp_dir):
        setup_logging(verbose=True)
        assert logging.getLogger("git").level == logging.WARNING

        setup_logging(debug=True, log_file=temp_dir / "gtr.log")
        assert logging.getLogger("git").level == logging.DEBUG

    def test_debug_writes_log_file(self, temp_dir):
        log_file = temp_dir / "logs" / "gtr.log"

        assert setup_logging(debug=True, log_file=log_file) == log_file
        get_logger("gtr.services.git.operations").debug("git worktree list --porcelain")

        assert "git worktree list --porcelain" in log_file.read_text()

    def test_no_log_file_without_debug(self, temp_dir):
        assert setup_logging(verbose=True, log_file=temp_dir / "gtr.log") is None
        assert not (temp_dir / "gtr.log").exists()


class TestColoredFormatter:
    """Test level coloring."""

    def make_record(self):
        return logging.LogRecord("gtr.x", logging.WARNING, __file__, 1, "careful", None, None)

    def test_colors_on_terminal_without_touching_record(self):
        formatter = ColoredFormatter(fmt="%(levelname)s %(message)s", stream=Mock(isatty=lambda: True))
        record = self.make_record()

        assert formatter.format(record) == "\033[33mWARNING\033[0m careful"
        # The file handler formats the same record afterwards
        assert record.levelname == "WARNING"

    def test_plain_when_not_a_terminal(self):
        formatter = ColoredFormatter(fmt="%(levelname)s %(message)s",
                                     stream=Mock(isatty=lambda: False), lowercase_levels=True)
        assert formatter.format(self.make_record()) == "warning careful"


class TestDebugFlag:
    """Test --debug end to end."""

    def test_debug_run_writes_state_log(self, git_repo, worktree_base, isolated_home, monkeypatch):
        monkeypatch.chdir(git_repo.working_dir)
        monkeypatch.setenv("GTR_WORKTREE_DIR", str(worktree_base))

        assert main(["--debug", "list"]) == 0

        log_text = (isolated_home / ".local" / "state" / "gtr" / "gtr.log").read_text()
        assert f"config base_path: {worktree_base}" in log_text
