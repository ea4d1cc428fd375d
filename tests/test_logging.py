"""Tests for the loguru setup driven by environment variables."""

import importlib
import json

import pytest

import tblanalyzer.utils.logging as logging_module


@pytest.fixture
def reload_logging(monkeypatch):
    """Re-run the logging setup under the given environment, restore it afterwards."""
    def _reload(**env):
        monkeypatch.delenv("TBLANALYZER_LOG_LEVEL", raising=False)
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        return importlib.reload(logging_module)

    yield _reload

    monkeypatch.undo()
    importlib.reload(logging_module)


def test_json_mode_and_log_file(tmp_path, capsys, reload_logging):
    log_file = tmp_path / "run.ndjson"
    module = reload_logging(TBLANALYZER_LOG_JSON="1", TBLANALYZER_LOG_FILE=str(log_file))

    module.logger.bind(task="demo").info("Writing reports")
    module.logger.debug("Listed 3 files")

    stdout_lines = capsys.readouterr().out.splitlines()
    assert len(stdout_lines) == 1
    entry = json.loads(stdout_lines[0])
    assert entry["msg"] == "Writing reports"
    assert entry["level"] == 30
    assert entry["task"] == "demo"
    assert isinstance(entry["time"], int)

    # The file sink also records DEBUG
    file_entries = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    assert [e["msg"] for e in file_entries] == ["Writing reports", "Listed 3 files"]
    assert file_entries[1]["level"] == 20


def test_json_mode_keeps_stdout_sink_during_progress(reload_logging):
    module = reload_logging(TBLANALYZER_LOG_JSON="1")

    assert module.swap_to_rich_sink(lambda message: None) is None


def test_exception_fields_in_json(capsys, reload_logging):
    module = reload_logging(TBLANALYZER_LOG_JSON="1")

    try:
        raise ValueError("bad row")
    except ValueError:
        module.logger.opt(exception=True).error("Task failed")

    entry = json.loads(capsys.readouterr().out.splitlines()[-1])
    assert entry["level"] == 50
    assert entry["err"] == {"type": "ValueError", "message": "bad row"}
