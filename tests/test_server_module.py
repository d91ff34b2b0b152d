import logging
import os
from logging.handlers import RotatingFileHandler

import pytest

from delver.server import _configure_logging


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in saved_handlers:
        root.addHandler(h)
    root.setLevel(saved_level)


def test_configure_logging_writes_rotating_file(tmp_path, restore_root_logging):
    log_dir = tmp_path / 'logs'
    path = _configure_logging(str(log_dir))
    assert path == os.path.join(str(log_dir), 'delver.log')
    root = logging.getLogger()
    assert any(isinstance(h, RotatingFileHandler) for h in root.handlers)
    assert len(root.handlers) == 2
    logging.getLogger('delver.test').info('hello from the test')
    for h in root.handlers:
        h.flush()
    assert 'hello from the test' in open(path, encoding='utf-8').read()


def test_configure_logging_is_idempotent(tmp_path, restore_root_logging):
    _configure_logging(str(tmp_path))
    _configure_logging(str(tmp_path))
    assert len(logging.getLogger().handlers) == 2
