import json
import re

from portwatch.history import History
from portwatch.scanner import PortState


def make_results():
    return [
        PortState(port=80, open=True, host="localhost"),
        PortState(port=443, open=True, host="localhost"),
    ]


def test_new_creates_dir(tmp_path):
    directory = tmp_path / "hist"
    History(directory)
    assert directory.is_dir()


def test_record_writes_file(tmp_path):
    h = History(tmp_path)
    path = h.record("localhost", make_results())
    assert list(tmp_path.iterdir()) == [path]


def test_record_valid_json(tmp_path):
    h = History(tmp_path)
    h.record("localhost", make_results())
    (path,) = tmp_path.iterdir()
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["host"] == "localhost"
    assert len(data["results"]) == 2
    assert [r["port"] for r in data["results"]] == [80, 443]
    assert all(r["open"] for r in data["results"])


def test_record_file_name_format(tmp_path):
    h = History(tmp_path)
    path = h.record("localhost", make_results())
    assert path.parent == tmp_path
    assert path.name.startswith("localhost_")
    assert path.name.endswith("Z.json")
    assert re.fullmatch(r"localhost_\d{8}T\d{6}Z\.json", path.name)


def test_record_sanitizes_host(tmp_path):
    h = History(tmp_path)
    h.record("192.168.1.1:8080", make_results())
    entries = list(tmp_path.iterdir())
    assert len(entries) == 1
    name = entries[0].name
    assert ":" not in name and "/" not in name
    assert name.startswith("192.168.1.1_8080_")