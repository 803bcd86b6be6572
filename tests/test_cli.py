from __future__ import annotations

import sqlite3
import sys
from typing import List

import pytest

from conftest import error_payload, user_payload
from models.graph_user import GraphUser


def _run_cli_with_args(args_list: List[str]) -> None:
    """Run cli.py main() with provided argv in-process (no subprocess)."""
    argv_backup = sys.argv[:]
    try:
        sys.argv = ["cli.py"] + args_list
        # Import fresh to ensure clean parser each time
        if "cli" in sys.modules:
            del sys.modules["cli"]
        import cli  # type: ignore
        try:
            cli.main()  # type: ignore[attr-defined]
        except SystemExit as e:
            code = int(getattr(e, "code", 0) or 0)
            if code not in (0, None):
                raise
    finally:
        sys.argv = argv_backup


@pytest.fixture
def fake_graph(monkeypatch):
    """Route GraphClient.fetch_profile to canned payloads; no network."""
    import services.graph_client as gc

    payloads = {
        0: user_payload(0),
        1: user_payload(1),
        2: error_payload("blocked"),
    }
    calls: List[int] = []

    def _fetch(self, uid):
        calls.append(uid)
        return GraphUser.model_validate(payloads.get(uid, error_payload("Unsupported get request.")))

    monkeypatch.setattr(gc.GraphClient, "fetch_profile", _fetch)
    return calls


def _ids(db_path) -> List[int]:
    conn = sqlite3.connect(str(db_path))
    try:
        return [r[0] for r in conn.execute("SELECT id FROM users ORDER BY id")]
    finally:
        conn.close()


def test_cli_downloads_until_ceiling(tmp_path, fake_graph, capsys):
    db_path = tmp_path / "fbgraph.db"
    _run_cli_with_args(["--db", str(db_path), "-u", "3"])
    assert fake_graph == [0, 1, 2]
    assert _ids(db_path) == [0, 1]
    assert "Stored 2 users (failed 1)" in capsys.readouterr().out


def test_cli_resumes_from_existing_store(tmp_path, fake_graph):
    db_path = tmp_path / "fbgraph.db"
    _run_cli_with_args(["--db", str(db_path), "-u", "2"])
    _run_cli_with_args(["--db", str(db_path), "-u", "3"])
    assert fake_graph == [0, 1, 2]


def test_cli_no_resume_restarts_at_zero(tmp_path, fake_graph):
    db_path = tmp_path / "fbgraph.db"
    _run_cli_with_args(["--db", str(db_path), "-u", "2"])
    _run_cli_with_args(["--db", str(db_path), "-u", "1", "--no-resume"])
    # uid 0 is fetched again; the duplicate insert is logged, not fatal
    assert fake_graph == [0, 1, 0]
    assert _ids(db_path) == [0, 1]


def test_cli_ceiling_below_start_exits_nonzero(tmp_path, fake_graph):
    db_path = tmp_path / "fbgraph.db"
    _run_cli_with_args(["--db", str(db_path), "-u", "2"])
    with pytest.raises(SystemExit) as exc:
        _run_cli_with_args(["--db", str(db_path), "-u", "1"])
    assert exc.value.code == 1
    assert fake_graph == [0, 1]


def test_cli_corrupt_store_exits_nonzero(tmp_path, fake_graph):
    db_path = tmp_path / "fbgraph.db"
    db_path.write_bytes(b"not a database" * 512)
    with pytest.raises(SystemExit) as exc:
        _run_cli_with_args(["--db", str(db_path), "-u", "3"])
    assert exc.value.code == 1
    assert fake_graph == []


@pytest.mark.parametrize("value", ["-1", "abc", "18446744073709551616", "0x10", "+5"])
def test_cli_rejects_invalid_ceiling(tmp_path, fake_graph, value):
    with pytest.raises(SystemExit) as exc:
        _run_cli_with_args(["--db", str(tmp_path / "fbgraph.db"), "-u", value])
    assert exc.value.code == 2
