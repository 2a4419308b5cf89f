# 文件: logger_config.py
import logging
import os
import sys

LOG_FORMAT = '%(asctime)s - %(name)-18s - %(levelname)-8s - %(message)s'

def setup_logging(log_file: str = None, verbose: bool = False):
    """Routes all engine loggers to a file, or to stderr when no file is given."""
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handler = logging.FileHandler(log_file, mode='a')
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    if root.hasHandlers():
        root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    return handler
