import logging
from datetime import datetime

import pytest

from mangawatch.logsetup import init_logger


@pytest.fixture
def clean_root():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)


def test_info_is_written_to_stdout(clean_root, capsys):
    init_logger()
    logging.getLogger("mangawatch.test").info("hello there")
    out = capsys.readouterr().out
    line = next(l for l in out.splitlines() if "hello there" in l)
    stamp, level, location, *_ = line.split(" ")
    assert level == "INFO"
    assert location.startswith("test_logsetup.py:")
    assert datetime.fromisoformat(stamp).tzinfo is not None


def test_debug_is_filtered(clean_root, capsys):
    init_logger()
    logging.getLogger("mangawatch.test").debug("quiet message")
    assert "quiet message" not in capsys.readouterr().out
    assert clean_root.level == logging.INFO


def test_second_init_fails(clean_root):
    init_logger()
    count = len(clean_root.handlers)
    with pytest.raises(RuntimeError, match="Failed to initialize logger"):
        init_logger()
    assert len(clean_root.handlers) == count