# Path: spec_builder/core/logger/ipo_logging.py
"""
IPO-Aware Logging for spec_builder

Every logger belongs to one layer, named by its prefix:
- input.*    extraction files, catalogue files, operator input
- process.*  match ranker, resolution workflow
- output.*   record stores, database, product export

With a log directory each layer gets its own file next to
full_activity.log; without one, logging goes to the console only.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


LAYERS = ('input', 'process', 'output')

FILE_FORMAT = '[%(asctime)s] [%(levelname)s] %(name)s - %(message)s'
CONSOLE_FORMAT = '[%(levelname)s] %(name)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class IPOFilter(logging.Filter):
    """Pass only records whose logger sits under one layer."""

    def __init__(self, layer: str):
        super().__init__()
        self.layer = layer

    def filter(self, record: logging.LogRecord) -> bool:
        return record.name == self.layer or record.name.startswith(f'{self.layer}.')


def _file_handler(path: Path, layer: Optional[str] = None) -> logging.FileHandler:
    handler = logging.FileHandler(path, encoding='utf-8')
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    if layer:
        handler.addFilter(IPOFilter(layer))
    return handler


def setup_ipo_logging(
    log_dir: Optional[Path],
    log_level: str = 'INFO',
    console_output: bool = True
) -> None:
    """
    Install the IPO handlers on the root logger, replacing existing ones.

    Files written under log_dir:
    - full_activity.log
    - input_activity.log, process_activity.log, output_activity.log

    Args:
        log_dir: Directory for log files, or None for no files
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL (any case)
        console_output: Also log to stdout at log_level

    Example:
        setup_ipo_logging(Path('/var/log/spec_builder'), 'INFO')
    """
    level = getattr(logging, log_level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        root_logger.addHandler(_file_handler(log_dir / 'full_activity.log'))
        for layer in LAYERS:
            root_logger.addHandler(_file_handler(log_dir / f'{layer}_activity.log', layer))

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        root_logger.addHandler(console_handler)


def get_input_logger(name: str) -> logging.Logger:
    """Logger for the INPUT layer (e.g., 'catalogue_loader', 'user_input')."""
    return logging.getLogger(f'input.{name}')


def get_process_logger(name: str) -> logging.Logger:
    """
    Logger for the PROCESS layer.

    Example:
        logger = get_process_logger('matcher.ranker')
        logger.info("[MATCH] 'pH': 4 scored")
    """
    return logging.getLogger(f'process.{name}')


def get_output_logger(name: str) -> logging.Logger:
    """Logger for the OUTPUT layer (e.g., 'product_store', 'audit_log')."""
    return logging.getLogger(f'output.{name}')


__all__ = [
    'LAYERS',
    'IPOFilter',
    'setup_ipo_logging',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]
