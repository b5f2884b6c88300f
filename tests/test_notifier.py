import io

import pytest

from portwatch.notifier import MultiNotifier, Notifier
from portwatch.snapshot import DiffResult


class _BrokenStream:
    def write(self, text):
        raise OSError("disk full")


def make_diff(opened=None, closed=None):
    return DiffResult(opened=opened or [], closed=closed or [])


def test_notify_no_changes():
    buf = io.StringIO()
    Notifier(buf).notify("localhost", make_diff())
    assert buf.getvalue() == ""


def test_notify_opened_ports():
    buf = io.StringIO()
    Notifier(buf).notify("myhost", make_diff([80, 443]))
    out = buf.getvalue()
    assert "myhost" in out
    assert "+ 80" in out
    assert "+ 443" in out


def test_notify_closed_ports():
    buf = io.StringIO()
    Notifier(buf).notify("myhost", make_diff(closed=[22]))
    assert "- 22" in buf.getvalue()


def test_notify_both_changes():
    buf = io.StringIO()
    Notifier(buf).notify("host", make_diff([8080], [3306]))
    out = buf.getvalue()
    assert "+ 8080" in out
    assert "- 3306" in out


def test_notify_exact_layout():
    buf = io.StringIO()
    Notifier(buf).notify("host", make_diff([8080], [3306]))
    assert buf.getvalue() == (
        "[portwatch] changes detected on host\n"
        "  opened ports (1):\n"
        "    + 8080\n"
        "  closed ports (1):\n"
        "    - 3306\n"
    )


def test_new_none_stream():
    with pytest.raises(ValueError):
        Notifier(None)


def test_multi_writes_to_all_streams():
    first, second = io.StringIO(), io.StringIO()
    MultiNotifier(first, second).notify("host", make_diff([80]))
    assert "+ 80" in first.getvalue()
    assert first.getvalue() == second.getvalue()


def test_multi_none_stream_reports_index():
    with pytest.raises(ValueError, match="index 1"):
        MultiNotifier(io.StringIO(), None)


def test_multi_raises_first_error_after_notifying_all():
    good = io.StringIO()
    with pytest.raises(OSError, match="disk full"):
        MultiNotifier(_BrokenStream(), good).notify("host", make_diff([22]))
    assert "+ 22" in good.getvalue()


def test_multi_no_changes_writes_nothing():
    buf = io.StringIO()
    MultiNotifier(buf).notify("host", make_diff())
    assert buf.getvalue() == ""