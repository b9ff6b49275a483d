"""
Logger implementation for VFA library.

This module provides JSON-formatted logging functionality for the VFA library.
Once configured, logs are written to files in a 'logs' directory.
"""

import os
import json
import logging
import datetime
from typing import Any, Optional

import numpy as np


class JsonFormatter(logging.Formatter):
    """Format log records as one JSON object per line."""

    def _serialize(self, obj: Any) -> Any:
        """Serialize objects to JSON-compatible format."""
        if isinstance(obj, np.ndarray):
            if obj.size > 100:
                shape_str = 'x'.join(str(dim) for dim in obj.shape)
                return f"ndarray({shape_str}): sample={obj.flatten()[:5].tolist()}..."
            return obj.tolist()
        elif isinstance(obj, np.bool_):
            return bool(obj)
        elif isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, (list, tuple)):
            if len(obj) > 100:
                return [self._serialize(item) for item in list(obj)[:5]] + ["..."]
            return [self._serialize(item) for item in obj]
        elif isinstance(obj, dict):
            return {str(k): self._serialize(v) for k, v in obj.items()}
        elif hasattr(obj, '__dict__'):
            # FunctionWeight, StateFeature and other plain objects
            return {
                "__type": obj.__class__.__name__,
                **{k: self._serialize(v) for k, v in obj.__dict__.items()
                   if not k.startswith('_')}
            }
        return obj

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON."""
        log_data = {
            'timestamp': datetime.datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if isinstance(record.msg, dict):
            log_data['data'] = self._serialize(record.msg)
        else:
            log_data['message'] = record.getMessage()
            if hasattr(record, 'data'):
                log_data['data'] = self._serialize(record.data)

        return json.dumps(log_data)


LOGGER_NAME = "vfa_lib"

# Logger configured by setup_logger
_logger = None


def setup_logger(
    debug: bool = False,
    log_level: str = "info",
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up the package logger with the specified configuration.

    Only the first call configures the logger; later calls return it as is.

    Args:
        debug: Whether to enable logging below WARNING
        log_level: The log level (debug, info, warning, error)
        log_file: Optional log file path, relative to the 'logs' directory
            unless absolute

    Returns:
        Configured logger instance
    """
    global _logger

    if _logger is not None:
        return _logger

    logger = logging.getLogger(LOGGER_NAME)

    level_map = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR
    }

    if debug:
        logger.setLevel(level_map.get(log_level.lower(), logging.INFO))
    else:
        logger.setLevel(logging.WARNING)

    if log_file is None or not os.path.isabs(log_file):
        logs_dir = os.path.join(os.getcwd(), "logs")
        os.makedirs(logs_dir, exist_ok=True)
        if log_file is None:
            timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = f"vfa_lib_{timestamp}.json"
        log_file = os.path.join(logs_dir, log_file)

    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(JsonFormatter())
    logger.addHandler(file_handler)

    _logger = logger

    if debug:
        logger.info({
            "event": "logger_initialized",
            "log_level": log_level,
            "log_file": log_file
        })

    return logger


def get_logger() -> logging.Logger:
    """
    Get the package logger.

    If setup_logger has not been called, the bare package logger is returned
    without handlers, leaving output to the application's logging setup.

    Returns:
        Logger instance
    """
    if _logger is None:
        return logging.getLogger(LOGGER_NAME)
    return _logger


def log_weights_summary(weights, name: str = "weights") -> None:
    """
    Log a summary of weight values (count, mean, min, max, etc.).

    Args:
        weights: A WeightStore, or an iterable of FunctionWeight objects or floats
        name: Name to identify these weights in the log
    """
    logger = get_logger()
    if not logger.isEnabledFor(logging.DEBUG):
        return

    if hasattr(weights, 'weights') and isinstance(weights.weights, dict):
        # WeightStore
        values = [fw.weight_value for fw in weights.weights.values()]
    else:
        values = [getattr(w, 'weight_value', w) for w in weights]

    w_array = np.asarray(values, dtype=float)
    summary = {
        "event": f"{name}_summary",
        "count": int(w_array.size)
    }
    if w_array.size:
        summary.update({
            "mean": float(np.mean(w_array)),
            "std": float(np.std(w_array)),
            "min": float(np.min(w_array)),
            "max": float(np.max(w_array)),
            "sample": w_array[:5].tolist()
        })

    logger.debug(summary)
