"""
Logging module for VFA library.

This module provides JSON-formatted logging functionality for the VFA library.
"""

from vfa_lib.logging.logger import setup_logger, get_logger, log_weights_summary, JsonFormatter

__all__ = ["setup_logger", "get_logger", "log_weights_summary", "JsonFormatter"]
