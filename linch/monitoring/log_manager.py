import sys
import logging
from pathlib import Path
from typing import Optional


class LogManager:
    """Logging setup: console on stderr, optional detailed log file

    Stdout carries results only, so every handler writes elsewhere.
    """

    VERBOSITY_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]

    def __init__(self, verbosity: int = 0, log_file: Optional[str] = None):
        self.verbosity = verbosity
        self.log_file = Path(log_file) if log_file else None

        self.setup_logging()

    @property
    def console_level(self) -> int:
        index = min(max(self.verbosity, 0), len(self.VERBOSITY_LEVELS) - 1)
        return self.VERBOSITY_LEVELS[index]

    def setup_logging(self):
        """Set up logging handlers on the root logger"""
        detailed_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
        )
        simple_formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s'
        )

        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG if self.log_file else self.console_level)

        # Clear existing handlers
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(self.console_level)
        console_handler.setFormatter(simple_formatter)
        root_logger.addHandler(console_handler)

        if self.log_file:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(self.log_file)
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(detailed_formatter)
            root_logger.addHandler(file_handler)

        # aiohttp's access and internal loggers are noisy at DEBUG
        logging.getLogger('aiohttp').setLevel(logging.WARNING)
