import logging

import pytest

from src.todo_app.logger import setup_logger


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_writes_to_file_and_reconfigures(tmp_path):
    first = tmp_path / "logs" / "first.log"
    setup_logger("debug", str(first))
    logging.getLogger("src.todo.store").info("Todo created: %s", 1)

    assert first.exists()
    assert "src.todo.store - INFO - Todo created: 1" in first.read_text(encoding="utf-8")
    assert logging.getLogger().level == logging.DEBUG

    second = tmp_path / "second.log"
    setup_logger("WARNING", str(second))
    logging.getLogger("src.todo.store").warning("Bulk delete")

    assert "Bulk delete" in second.read_text(encoding="utf-8")
    assert "Bulk delete" not in first.read_text(encoding="utf-8")
    assert logging.getLogger().level == logging.WARNING


def test_stream_only_without_file():
    setup_logger("INFO", None)
    root = logging.getLogger()
    assert not any(isinstance(h, logging.FileHandler) for h in root.handlers)


def test_unknown_level_rejected():
    with pytest.raises(ValueError, match="Unknown log level"):
        setup_logger("LOUD", None)
