import logging
import os
import re
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

import yaml

# ANSI escape codes for colors
COLORS = {
    'DEBUG': '\033[36m',    # Cyan
    'INFO': '\033[32m',     # Green
    'WARNING': '\033[33m',  # Yellow
    'ERROR': '\033[31m',    # Red
    'CRITICAL': '\033[35m', # Magenta
    'RESET': '\033[0m'
}

# Colors for tags
TAG_COLORS = {
    'square': '\033[36m',   # Cyan - context [Translator.load_lang_file]
    'curly': '\033[32m',    # Green - data {en-us}
    'RESET': '\033[0m'
}

DEFAULT_LOGGER_SETTINGS = {
    'level': 'INFO',
    'console_enabled': True,
    'file_enabled': False,
    'file_path': 'logs/langbook.log',
    'max_file_size_mb': 10,
    'backup_count': 5,
}

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Formatter with color support for console"""

    def __init__(self, fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT, use_colors=True, smart_format=False):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors
        self.smart_format = smart_format

        if self.smart_format:
            self._square_pattern = re.compile(r'(\[[^\]]+\])')
            self._curly_pattern = re.compile(r'(\{[^}]+\})')
            self._square_replacer = lambda m: f'{TAG_COLORS["square"]}{m.group(1)}{TAG_COLORS["RESET"]}'
            self._curly_replacer = lambda m: f'{TAG_COLORS["curly"]}{m.group(1)}{TAG_COLORS["RESET"]}'

    def format(self, record):
        message = super().format(record)

        if not self.use_colors:
            return message

        # Tags first, then the level name
        if self.smart_format:
            if '[' in message:
                message = self._square_pattern.sub(self._square_replacer, message)
            if '{' in message:
                message = self._curly_pattern.sub(self._curly_replacer, message)

        levelname = record.levelname
        if levelname in COLORS:
            message = message.replace(levelname, f"{COLORS[levelname]}{levelname}{COLORS['RESET']}", 1)

        return message


class Logger:
    """Logger factory for the library"""

    def __init__(self, settings_path: Optional[Union[str, Path]] = None):
        # Optional settings.yaml with a `logger` section
        self.settings_path = Path(settings_path) if settings_path else None

    def _load_logging_config(self) -> dict:
        """Defaults overridden by the `logger` section of the settings file"""
        config = dict(DEFAULT_LOGGER_SETTINGS)
        if not self.settings_path or not self.settings_path.exists():
            return config
        try:
            with open(self.settings_path, 'r', encoding='utf-8') as f:
                settings = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError):
            return config

        section = settings.get('logger') if isinstance(settings, dict) else None
        if isinstance(section, dict):
            config.update({k: v for k, v in section.items() if k in DEFAULT_LOGGER_SETTINGS})
        return config

    def setup_logger(self, name: str = "langbook") -> logging.Logger:
        """Configure a named logger from settings"""
        config = self._load_logging_config()
        level = str(config.get('level', 'INFO')).upper()
        level_value = getattr(logging, level, logging.INFO)

        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)  # Always DEBUG, handlers filter
        logger.handlers.clear()

        if config.get('file_enabled'):
            file_path = config.get('file_path') or DEFAULT_LOGGER_SETTINGS['file_path']
            directory = os.path.dirname(file_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            file_handler = RotatingFileHandler(
                file_path,
                maxBytes=int(config.get('max_file_size_mb', 10)) * 1024 * 1024,
                backupCount=int(config.get('backup_count', 5)),
                encoding='utf-8'
            )
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
            file_handler.setLevel(level_value)
            logger.addHandler(file_handler)

        if config.get('console_enabled'):
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(ColoredFormatter(
                use_colors=sys.stderr.isatty(),
                smart_format=True
            ))
            console_handler.setLevel(level_value)
            logger.addHandler(console_handler)

        return logger

    def get_logger(self, name: str) -> logging.Logger:
        """Get a configured logger for a module"""
        return self.setup_logger(name)
