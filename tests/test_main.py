"""Tests for the command-line entry point."""

from unittest.mock import Mock

import pytest

from term_chrono import Mode
from term_chrono import __main__ as cli


@pytest.fixture
def fake_app(monkeypatch):
    """Replace ChronoApp and logging setup with mocks."""
    app_class = Mock()
    monkeypatch.setattr(cli, "ChronoApp", app_class)
    monkeypatch.setattr(cli, "configure_logging", Mock())
    for name in ("CLOCK_PERIOD", "RENDER_PERIOD", "POLL_INTERVAL", "LOG_LEVEL", "LOG_FILE"):
        monkeypatch.delenv(f"TERM_CHRONO_{name}", raising=False)
    return app_class


class TestRun:
    """Tests for run()."""

    def test_prompt_by_default(self, fake_app):
        """Test that no arguments means prompting for a mode."""
        assert cli.run([]) == 0

        fake_app.return_value.run.assert_called_once_with(mode=None, duration=None)

    def test_timer_with_duration(self, fake_app):
        """Test --mode and --duration are passed to the app."""
        assert cli.run(["--mode", "timer", "--duration", "00:02:00"]) == 0

        fake_app.return_value.run.assert_called_once_with(mode=Mode.TIMER, duration=120.0)

    def test_log_options(self, fake_app, tmp_path):
        """Test --log-level and --log-file reach settings and logging."""
        cli.run(["--log-level", "DEBUG", "--log-file", str(tmp_path / "x.log")])

        settings = fake_app.call_args.kwargs["settings"]
        assert settings.log_level == "DEBUG"
        assert settings.log_file == tmp_path / "x.log"
        cli.configure_logging.assert_called_once_with("DEBUG", log_file=tmp_path / "x.log")

    def test_bad_duration_is_usage_error(self, fake_app):
        """Test a malformed --duration exits with a usage error."""
        with pytest.raises(SystemExit) as excinfo:
            cli.run(["--duration", "12:3"])

        assert excinfo.value.code == 2
        fake_app.assert_not_called()

    def test_bad_log_level_is_usage_error(self, fake_app):
        """Test an unknown --log-level is reported as a usage error."""
        with pytest.raises(SystemExit) as excinfo:
            cli.run(["--log-level", "LOUD"])

        assert excinfo.value.code == 2
        cli.configure_logging.assert_not_called()
        fake_app.assert_not_called()

    def test_bad_mode_is_usage_error(self, fake_app):
        """Test an unknown --mode exits with a usage error."""
        with pytest.raises(SystemExit):
            cli.run(["--mode", "alarm"])

    def test_uncaught_error_exits_nonzero(self, fake_app, caplog):
        """Test a fatal error is logged with its traceback."""
        fake_app.return_value.run.side_effect = OSError("tty closed")

        assert cli.run([]) == 1
        assert "Uncaught exception" in caplog.text

    def test_keyboard_interrupt(self, fake_app):
        """Test Ctrl-C exits with status 130."""
        fake_app.return_value.run.side_effect = KeyboardInterrupt

        assert cli.run([]) == 130
