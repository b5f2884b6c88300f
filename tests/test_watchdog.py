import io
import json
import logging
import socket

import pytest

from portwatch.config import default_config
from portwatch.exporter import Exporter, ScanMetrics
from portwatch.history import History
from portwatch.scanner import Scanner
from portwatch.watchdog import Watchdog, WatchdogError, from_config


def silent_logger() -> logging.Logger:
    return logging.getLogger("portwatch.test.watchdog")


@pytest.fixture
def listener():
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(5)
    yield sock
    sock.close()


def test_missing_scanner():
    with pytest.raises(WatchdogError, match="scanner is required"):
        Watchdog(None, silent_logger())


def test_missing_logger():
    with pytest.raises(WatchdogError, match="logger is required"):
        Watchdog(Scanner(0), None)


def test_run_no_hosts_succeeds():
    watchdog = Watchdog(Scanner(0), silent_logger())
    assert watchdog.run(None, None) == []


def test_run_empty_ports():
    watchdog = Watchdog(Scanner(0), silent_logger())
    assert watchdog.run(["127.0.0.1"], []) == []


def test_run_empty_host_fails():
    watchdog = Watchdog(Scanner(0.2), silent_logger())
    with pytest.raises(WatchdogError, match="scan failed"):
        watchdog.run([""], [80])


def test_run_notifies_opened_then_closed(tmp_path, listener):
    port = listener.getsockname()[1]
    seen = []
    watchdog = Watchdog(
        Scanner(0.5),
        silent_logger(),
        snapshot_path=tmp_path / "snap.json",
        notifiers=[seen.append],
    )
    results = watchdog.run(["127.0.0.1"], [port])
    assert [(r.port, r.open) for r in results] == [(port, True)]
    assert seen[0].opened == [port]
    assert seen[0].closed == []
    assert (tmp_path / "snap.json").exists()

    listener.close()
    watchdog.run(["127.0.0.1"], [port])
    assert seen[1].opened == []
    assert seen[1].closed == [port]


def test_notify_error_is_logged(tmp_path, caplog):
    def broken(diff):
        raise RuntimeError("boom")

    watchdog = Watchdog(
        Scanner(0.2),
        silent_logger(),
        snapshot_path=tmp_path / "snap.json",
        notifiers=[broken],
    )
    with caplog.at_level(logging.WARNING, logger="portwatch.test.watchdog"):
        watchdog.run(["127.0.0.1"], [])
    assert "watchdog: notify error: boom" in caplog.text
    assert (tmp_path / "snap.json").exists()


def test_metrics_and_history_recorded(tmp_path, listener):
    port = listener.getsockname()[1]
    metrics = ScanMetrics()
    history = History(tmp_path / "hist")
    watchdog = Watchdog(Scanner(0.5), silent_logger(), history=history, metrics=metrics)
    watchdog.run(["127.0.0.1"], [port])

    snap = Exporter(metrics).export(io.StringIO())
    assert snap.total_scans == 1
    assert snap.open_ports == 1
    files = list((tmp_path / "hist").iterdir())
    assert len(files) == 1
    data = json.loads(files[0].read_text())
    assert data["host"] == "127.0.0.1"
    assert [r["port"] for r in data["results"]] == [port]


def valid_config(tmp_path):
    cfg = default_config()
    cfg.hosts = ["127.0.0.1"]
    cfg.ports = [80]
    cfg.timeout_seconds = 1
    cfg.snapshot_path = str(tmp_path / "snap.json")
    cfg.history_dir = str(tmp_path / "history")
    return cfg


def test_from_config_valid(tmp_path):
    watchdog = from_config(valid_config(tmp_path), silent_logger())
    assert watchdog.snapshot_path == tmp_path / "snap.json"
    assert len(watchdog.notifiers) == 2
    assert (tmp_path / "history").is_dir()


def test_from_config_nil_config():
    with pytest.raises(WatchdogError, match="config is nil"):
        from_config(None, silent_logger())


def test_from_config_run_cycle(tmp_path, capsys):
    watchdog = from_config(valid_config(tmp_path), silent_logger())
    results = watchdog.run(["127.0.0.1"], [1, 2, 3])
    assert [r.port for r in results] == [1, 2, 3]
    assert (tmp_path / "snap.json").exists()
    assert len(list((tmp_path / "history").iterdir())) == 1
    assert "Port scan report" in capsys.readouterr().out