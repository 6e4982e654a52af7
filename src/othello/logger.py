"""
Logging utilities for the Othello engine.
"""
import os
import json
import logging
from dataclasses import asdict
from datetime import datetime
from typing import Dict, Any, Optional
from torch.utils.tensorboard import SummaryWriter

from .config import Config
from .ai.search import SearchStats


class Logger:
    """Logger for search diagnostics and tournament metrics."""

    def __init__(self, config: Config, log_dir: Optional[str] = None):
        """
        Initialize the logger.

        Args:
            config: Configuration object
            log_dir: Directory to save logs (default: config.logging.log_dir)
        """
        self.config = config
        self.log_dir = log_dir or config.logging.log_dir
        self.run_name = f"{config.project_name}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
        self.run_dir = os.path.join(self.log_dir, self.run_name)

        os.makedirs(self.run_dir, exist_ok=True)

        level = logging.getLevelName(config.logging.log_level.upper())
        if not isinstance(level, int):
            level = logging.INFO

        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        self.console = logging.StreamHandler()
        self.console.setLevel(level)
        self.console.setFormatter(formatter)

        self.log_file = os.path.join(self.run_dir, 'othello.log')
        self.file_handler = logging.FileHandler(self.log_file)
        self.file_handler.setLevel(level)
        self.file_handler.setFormatter(formatter)

        # Configure root logger so module loggers propagate here
        self.logger = logging.getLogger()
        self.logger.setLevel(level)
        self.logger.addHandler(self.console)
        self.logger.addHandler(self.file_handler)

        self.writer = None
        if config.logging.use_tensorboard:
            self.writer = SummaryWriter(log_dir=os.path.join(self.run_dir, 'tensorboard'))

        self.save_config()

    def save_config(self):
        """Save the configuration to a JSON file."""
        config_path = os.path.join(self.run_dir, 'config.json')
        with open(config_path, 'w') as f:
            json.dump(asdict(self.config), f, indent=2)

    def log_metrics(self, metrics: Dict[str, Any], step: int, prefix: str = ''):
        """
        Log metrics to console and TensorBoard.

        Args:
            metrics: Dictionary of metrics to log
            step: Current step (move number, game number, ...)
            prefix: Prefix for metric names (e.g., 'search/', 'arena/')
        """
        log_str = f"Step {step}:"
        for name, value in metrics.items():
            if isinstance(value, float):
                log_str += f" {name}={value:.4f}"
            else:
                log_str += f" {name}={value}"
        self.logger.info(log_str)

        if self.writer is not None:
            for name, value in metrics.items():
                if isinstance(value, (int, float)):
                    self.writer.add_scalar(f"{prefix}{name}", value, step)

    def log_search(self, stats: SearchStats, step: int):
        """Log the diagnostics of one alpha-beta search."""
        metrics = {
            'nodes': stats.nodes,
            'elapsed': stats.elapsed,
            'depth': stats.depth_reached,
            'difficulty': stats.difficulty,
        }
        self.log_metrics(metrics, step, prefix='search/')

        if self.writer is not None:
            for record in stats.depths:
                self.writer.add_scalar(f"search/nodes_depth_{record.depth}", record.nodes, step)
                self.writer.add_scalar(f"search/time_depth_{record.depth}", record.elapsed, step)

    def close(self):
        """Close the logger and flush all pending logs."""
        if self.writer is not None:
            self.writer.flush()
            self.writer.close()
            self.writer = None

        for handler in (self.console, self.file_handler):
            self.logger.removeHandler(handler)
            handler.close()

    def __del__(self):
        """Ensure resources are properly released."""
        self.close()


def setup_logger(config: Config) -> Logger:
    """
    Set up and return a logger instance.

    Args:
        config: Configuration object

    Returns:
        Logger instance
    """
    return Logger(config)
