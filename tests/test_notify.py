"""Tests for expiry notifiers."""

import io
import sys
from unittest.mock import Mock

import pytest

from term_chrono import BellNotifier, Notifier, NotifierError, default_notifier
from term_chrono.notify import WinsoundNotifier


class TestBellNotifier:
    """Tests for the BellNotifier class."""

    def test_writes_bel(self):
        """Test the bell notifier writes ASCII BEL."""
        stream = io.StringIO()
        BellNotifier(stream).notify()

        assert stream.getvalue() == "\a"

    def test_write_failure(self):
        """Test a broken stream raises NotifierError."""
        stream = Mock()
        stream.write.side_effect = OSError("broken pipe")

        with pytest.raises(NotifierError, match="broken pipe"):
            BellNotifier(stream).notify()

    def test_closed_stream(self):
        """Test a closed stream raises NotifierError."""
        stream = io.StringIO()
        stream.close()

        with pytest.raises(NotifierError):
            BellNotifier(stream).notify()

    def test_satisfies_protocol(self):
        """Test BellNotifier is a Notifier."""
        assert isinstance(BellNotifier(), Notifier)


class TestDefaultNotifier:
    """Tests for default_notifier()."""

    def test_posix(self, monkeypatch):
        """Test POSIX platforms get the terminal bell."""
        monkeypatch.setattr(sys, "platform", "linux")
        stream = io.StringIO()
        notifier = default_notifier(stream)

        assert isinstance(notifier, BellNotifier)
        assert notifier.stream is stream

    def test_windows(self, monkeypatch):
        """Test Windows gets the winsound notifier."""
        monkeypatch.setattr(sys, "platform", "win32")

        assert isinstance(default_notifier(), WinsoundNotifier)

    @pytest.mark.skipif(sys.platform == "win32", reason="winsound is available on Windows")
    def test_winsound_unavailable(self):
        """Test a missing winsound module raises NotifierError."""
        with pytest.raises(NotifierError):
            WinsoundNotifier().notify()
