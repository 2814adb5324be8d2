"""TODO CLI の動作テスト（TestClientをHTTPセッションとして注入）"""

import json

import pytest
from fastapi.testclient import TestClient

from src.server.app import create_app, get_config, get_todo_store
from src.todo.cli import main

from test_todo_api import write_config

BASE_URL = "http://testserver"


@pytest.fixture
def session(tmp_path, monkeypatch) -> TestClient:
    write_config(tmp_path)
    monkeypatch.setenv("TODO_APP_CONFIG", str(tmp_path / "app_config.yaml"))
    get_config.cache_clear()
    get_todo_store.cache_clear()
    return TestClient(create_app())


def run_cli(session, capsys, *args):
    code = main(["--base-url", BASE_URL, *args], session=session)
    captured = capsys.readouterr()
    return code, captured.out, captured.err


def test_cli_list_empty(session, capsys):
    code, out, _ = run_cli(session, capsys, "list", "--format", "json")
    assert code == 0
    assert json.loads(out) == []

    code, out, _ = run_cli(session, capsys, "list")
    assert "登録されていません" in out


def test_cli_add_and_list(session, capsys):
    code, out, _ = run_cli(session, capsys, "add", "--text", " 会議準備 ", "--format", "json")
    assert code == 0
    added = json.loads(out)
    assert added == {"id": 1, "text": "会議準備", "completed": False}

    code, out, _ = run_cli(session, capsys, "list")
    assert code == 0
    assert "[1] [ ] 会議準備" in out


def test_cli_add_blank_text_fails(session, capsys):
    code, _, err = run_cli(session, capsys, "add", "--text", "   ")
    assert code == 1
    assert "Todo text is required" in err


def test_cli_update_and_complete(session, capsys):
    run_cli(session, capsys, "add", "--text", "買い物")

    code, out, _ = run_cli(
        session, capsys, "update", "--id", "1", "--text", "買い物（牛乳とパン）", "--format", "json"
    )
    assert code == 0
    assert json.loads(out)["text"] == "買い物（牛乳とパン）"

    code, out, _ = run_cli(session, capsys, "complete", "--id", "1", "--format", "json")
    assert code == 0
    assert json.loads(out)["completed"] is True

    code, out, _ = run_cli(session, capsys, "update", "--id", "1", "--pending", "--format", "json")
    assert json.loads(out)["completed"] is False


def test_cli_delete_and_get_missing(session, capsys):
    run_cli(session, capsys, "add", "--text", "タスクB")

    code, out, _ = run_cli(session, capsys, "delete", "--id", "1")
    assert code == 0
    assert "ID 1" in out

    code, _, err = run_cli(session, capsys, "get", "--id", "1")
    assert code == 1
    assert "見つかりません" in err


def test_cli_clear_and_stats(session, capsys):
    for text in ["A", "B", "C"]:
        run_cli(session, capsys, "add", "--text", text)
    run_cli(session, capsys, "complete", "--id", "2")

    code, out, _ = run_cli(session, capsys, "stats", "--format", "json")
    assert json.loads(out) == {"total": 3, "completed": 1, "pending": 2}

    code, out, _ = run_cli(session, capsys, "clear", "--completed-only")
    assert code == 0
    assert "残り 2 件" in out

    code, out, _ = run_cli(session, capsys, "clear")
    assert "All todos deleted" in out
    code, out, _ = run_cli(session, capsys, "stats")
    assert "合計: 0" in out


def test_cli_export(session, capsys, tmp_path):
    run_cli(session, capsys, "add", "--text", "A")
    output = tmp_path / "export.json"

    code, out, _ = run_cli(session, capsys, "export", "--output", str(output))
    assert code == 0
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["totalTodos"] == 1
    assert data["todos"][0]["text"] == "A"


def test_cli_export_default_filename(session, capsys, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    code, out, _ = run_cli(session, capsys, "export")
    assert code == 0
    exported = list(tmp_path.glob("todos-export-*.json"))
    assert len(exported) == 1
