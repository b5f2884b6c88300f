import io
from datetime import datetime, timedelta

import pytest

from portwatch.metrics import Collector, MetricsSnapshot, format_duration, print_metrics


def test_record_updates_snapshot():
    c = Collector()
    before = datetime.now()
    c.record(5, timedelta(milliseconds=20))
    s = c.snapshot()
    assert s.total_scans == 1
    assert s.open_ports == 5
    assert s.last_duration == timedelta(milliseconds=20)
    assert s.last_scan_at is not None and s.last_scan_at >= before


def test_record_accepts_seconds():
    c = Collector()
    c.record(1, 0.25)
    assert c.snapshot().last_duration == timedelta(milliseconds=250)


def test_record_accumulates_scans():
    c = Collector()
    c.record(3, timedelta(milliseconds=10))
    c.record(7, timedelta(milliseconds=15))
    s = c.snapshot()
    assert s.total_scans == 2
    assert s.open_ports == 7


def test_reset_clears_metrics():
    c = Collector()
    c.record(4, timedelta(milliseconds=5))
    c.reset()
    s = c.snapshot()
    assert s.total_scans == 0
    assert s.open_ports == 0
    assert s.last_scan_at is None


def test_new_initial_state():
    assert Collector().snapshot() == MetricsSnapshot()


def test_print_contains_expected_fields():
    c = Collector()
    c.record(8, timedelta(milliseconds=42))
    buf = io.StringIO()
    print_metrics(buf, c.snapshot())
    out = buf.getvalue()
    for want in ["Total scans", "Open ports", "Last scan", "Last duration", "1", "8", "42ms"]:
        assert want in out


def test_print_layout_aligned():
    buf = io.StringIO()
    print_metrics(buf, MetricsSnapshot(total_scans=1, open_ports=8))
    lines = buf.getvalue().splitlines()
    assert lines[0] == "Metric" + " " * 13 + "Value"
    assert lines[1] == "------" + " " * 13 + "-----"
    assert lines[3] == "Open ports (last)  8"
    assert {len(line) - len(line.split()[-1]) for line in lines} == {19}


def test_print_no_scans():
    buf = io.StringIO()
    print_metrics(buf, Collector().snapshot())
    lines = buf.getvalue().splitlines()
    assert lines[4].split() == ["Last", "scan", "-"]
    assert lines[5].split() == ["Last", "duration", "0s"]


def test_print_formats_last_scan_time():
    buf = io.StringIO()
    print_metrics(buf, MetricsSnapshot(last_scan_at=datetime(2024, 3, 5, 7, 8, 9)))
    assert "2024-03-05 07:08:09" in buf.getvalue()


@pytest.mark.parametrize(
    "duration, expected",
    [
        (timedelta(0), "0s"),
        (timedelta(microseconds=1), "1µs"),
        (timedelta(milliseconds=42), "42ms"),
        (timedelta(microseconds=1500), "1.5ms"),
        (timedelta(seconds=1.5), "1.5s"),
        (timedelta(minutes=2, seconds=3), "2m3s"),
        (timedelta(hours=1), "1h0m0s"),
        (timedelta(seconds=-2), "-2s"),
    ],
)
def test_format_duration(duration, expected):
    assert format_duration(duration) == expected