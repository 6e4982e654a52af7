"""
Test script for the logging utilities.
"""
import os
import tempfile

from othello.ai.selectors import AlphaBetaSelector
from othello.config import get_default_config
from othello.game.board import Board
from othello.logger import Logger


def test_logger_writes_search_metrics():
    config = get_default_config()
    config.logging.use_tensorboard = False

    with tempfile.TemporaryDirectory() as tmp_dir:
        logger = Logger(config, log_dir=tmp_dir)
        selector = AlphaBetaSelector(max_depth=2)
        selector.select_move(Board())
        logger.log_search(selector.last_stats, step=1)
        logger.close()

        assert os.path.exists(os.path.join(logger.run_dir, 'config.json'))
        with open(logger.log_file) as f:
            contents = f.read()

    assert "Step 1:" in contents
    assert "nodes=" in contents
    assert "depth=2" in contents


def test_logger_tensorboard_writer():
    config = get_default_config()

    with tempfile.TemporaryDirectory() as tmp_dir:
        logger = Logger(config, log_dir=tmp_dir)
        assert logger.writer is not None
        logger.log_metrics({'rating': 1500.0}, step=0, prefix='arena/')
        logger.close()
        assert logger.writer is None
        assert os.listdir(os.path.join(logger.run_dir, 'tensorboard'))


if __name__ == "__main__":
    test_logger_writes_search_metrics()
    test_logger_tensorboard_writer()
    print("Logger tests completed successfully!")
