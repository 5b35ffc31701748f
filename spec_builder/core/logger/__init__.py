# Path: spec_builder/core/logger/__init__.py
"""
spec_builder Logger Package

IPO-aware logging for the specification builder.

Provides separate log streams for:
- INPUT layer (extraction files, catalogue loading, operator input)
- PROCESS layer (matching, resolution workflow)
- OUTPUT layer (record stores, audit log)
"""

from .ipo_logging import (
    setup_ipo_logging,
    get_input_logger,
    get_process_logger,
    get_output_logger,
)

__all__ = [
    'setup_ipo_logging',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]
