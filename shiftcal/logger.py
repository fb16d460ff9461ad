#!/usr/bin/env python3
import os
import logging
from datetime import datetime

from .config import get_workflow_data_dir

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(name, testing=False, log_dir=None):
    """Setup logger that can be toggled for testing"""
    logger = logging.getLogger(name)

    # Only setup handler if testing is enabled
    if testing:
        # Use common log file for all components
        data_dir = log_dir or get_workflow_data_dir()
        os.makedirs(data_dir, exist_ok=True)
        log_file = os.path.abspath(os.path.join(data_dir, 'workflow.log'))

        # Create a handler if none exists for this log file
        if not any(isinstance(h, logging.FileHandler) and h.baseFilename == log_file
                   for h in logging.root.handlers):
            handler = logging.FileHandler(log_file)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))

            # Add handler to root logger
            logging.root.addHandler(handler)
            logging.root.setLevel(logging.DEBUG)

            # Add startup marker to log
            logging.info('=' * 50)
            logging.info(f'Logging started at {datetime.now()}')
            logging.info('=' * 50)

    return logger
