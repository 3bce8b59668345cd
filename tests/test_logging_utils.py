import logging

import pytest

from iccworks.codecs.memory import MemoryTagCodec, NamedColorList
from iccworks.logging_utils import (
    LIBRARY_LOGGER,
    LOG_DIR_ENV,
    LOG_LEVEL_ENV,
    configure_logging,
    set_library_level,
)
from iccworks.profile.named_colors import extract


@pytest.fixture
def library_level():
    yield set_library_level
    set_library_level(logging.NOTSET)


def test_log_directory_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv(LOG_DIR_ENV, str(tmp_path / "env_logs"))

    log_path = configure_logging("env_dir", include_console=False)
    logging.getLogger("iccworks.profile").info("profile opened")

    assert log_path == tmp_path / "env_logs" / "env_dir.log"
    assert "profile opened" in log_path.read_text()


def test_level_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv(LOG_LEVEL_ENV, "warning")

    log_path = configure_logging("env_level", log_dir=tmp_path, include_console=False)
    logging.getLogger("host").info("quiet entry")
    logging.getLogger("host").warning("loud entry")

    text = log_path.read_text()
    assert "loud entry" in text
    assert "quiet entry" not in text


def test_unknown_level_falls_back_to_info(tmp_path):
    configure_logging(
        "bad_level", level="chatty", log_dir=tmp_path, include_console=False
    )
    assert logging.getLogger().level == logging.INFO


def test_reconfiguring_moves_output_to_new_file(tmp_path):
    first_path = configure_logging(
        "first_run", log_dir=tmp_path / "logs", include_console=False
    )
    logging.getLogger("host").info("first run entry")

    second_path = configure_logging(
        "second_run", log_dir=tmp_path / "alt_logs", include_console=False
    )
    logging.getLogger("host").info("second run entry")

    assert "second run entry" in second_path.read_text()
    assert "second run entry" not in first_path.read_text()
    open_files = [
        getattr(h, "baseFilename", None) for h in logging.getLogger().handlers
    ]
    assert str(first_path) not in open_files


def test_library_debug_without_host_debug(tmp_path, library_level):
    log_path = configure_logging(
        "library_debug", level=logging.INFO, log_dir=tmp_path, include_console=False
    )
    assert library_level("debug").name == LIBRARY_LOGGER

    extract(MemoryTagCodec(), NamedColorList([None]))
    logging.getLogger("host").debug("host debug entry")

    text = log_path.read_text()
    assert "Skipping unreadable named color 0" in text
    assert "host debug entry" not in text
