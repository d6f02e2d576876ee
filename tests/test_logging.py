import json
import logging

import pytest

from cyclasar.util.logging import configure_logging, get_logger


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    configure_logging()


def test_json_file_receives_extra_fields(tmp_path) -> None:
    log_path = tmp_path / "run.jsonl"
    configure_logging(level="INFO", json_file=str(log_path), use_color=False)

    get_logger("pipeline.runner").info("spectrum finished", extra={"mode": "spectrum", "points": 64})
    configure_logging()  # closes the file handler

    record = json.loads(log_path.read_text(encoding="utf-8").splitlines()[-1])
    assert record["logger"] == "cyclasar.pipeline.runner"
    assert record["message"] == "spectrum finished"
    assert (record["mode"], record["points"]) == ("spectrum", 64)


def test_debug_env_overrides_default_level(monkeypatch) -> None:
    monkeypatch.setenv("CYCLASAR_DEBUG", "1")
    configure_logging(default_level="WARNING")
    assert logging.getLogger("cyclasar").level == logging.DEBUG


def test_log_level_env_and_default(monkeypatch) -> None:
    monkeypatch.delenv("CYCLASAR_DEBUG", raising=False)
    monkeypatch.setenv("CYCLASAR_LOG_LEVEL", "error")
    configure_logging(default_level="WARNING")
    assert logging.getLogger("cyclasar").level == logging.ERROR

    monkeypatch.delenv("CYCLASAR_LOG_LEVEL")
    configure_logging(default_level="WARNING")
    assert logging.getLogger("cyclasar").level == logging.WARNING


def test_console_output_goes_to_stderr(capsys) -> None:
    configure_logging(level="INFO", use_color=False)
    get_logger("__main__").warning("drift detected")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "WARNING  [main] drift detected" in captured.err
