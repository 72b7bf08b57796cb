import json
import logging
import sys

import pytest

from common.logging_config import JSONFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_json_formatter_includes_core_and_extra_fields():
    formatter = JSONFormatter("workstation-setup")
    record = logging.LogRecord(
        "workstation_setup", logging.INFO, __file__, 10, "Installing %s", ("docker",), None
    )
    record.step = "DOCKER_INSTALL"

    entry = json.loads(formatter.format(record))

    assert entry["level"] == "INFO"
    assert entry["service"] == "workstation-setup"
    assert entry["logger"] == "workstation_setup"
    assert entry["message"] == "Installing docker"
    assert entry["timestamp"].endswith("+00:00")
    assert entry["extra"] == {"step": "DOCKER_INSTALL"}


def test_json_formatter_exception():
    formatter = JSONFormatter()
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())

    entry = json.loads(formatter.format(record))

    assert "RuntimeError: boom" in entry["exception"]


def test_setup_logging_console_level_from_env(monkeypatch, restore_root_logger):
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    setup_logging("workstation_setup")

    assert restore_root_logger.level == logging.WARNING
    assert len(restore_root_logger.handlers) == 1


def test_setup_logging_invalid_level_falls_back_to_info(restore_root_logger):
    setup_logging("workstation_setup", log_level="LOUD")

    assert restore_root_logger.level == logging.INFO


def test_setup_logging_writes_json_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "setup.log"

    logger = setup_logging("workstation_setup", log_level="DEBUG", enable_console=False, log_file_path=str(log_file))
    logger.info("hello")
    for handler in restore_root_logger.handlers:
        handler.flush()

    records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    assert records[-1]["message"] == "hello"
    assert records[0]["message"] == "Logging initialized"
    assert records[0]["extra"]["log_level"] == "DEBUG"


def test_setup_logging_prefixes_console_lines(capsys, restore_root_logger):
    logger = setup_logging("workstation_setup", log_level="INFO", log_prefix="[ZZZ]")
    logger.info("Installing Docker")

    out = capsys.readouterr().out.splitlines()
    assert any("[ZZZ] workstation_setup - INFO - Installing Docker" in line for line in out)


def test_setup_logging_blank_prefix_uses_plain_format(capsys, restore_root_logger):
    logger = setup_logging("workstation_setup", log_level="INFO", log_prefix="  ")
    logger.info("Installing Docker")

    out = capsys.readouterr().out
    assert " - workstation_setup - INFO - Installing Docker" in out
