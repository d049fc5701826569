# smarttask/logging_filters.py
import logging

PROJECT_PREFIXES = ('smarttask', 'smarttask_app', 'smarttask_user')


class ConsoleNoiseFilter(logging.Filter):
    """
    Keep the console readable:
    - project loggers pass at the configured level
    - any third-party logger (django.*, urllib3, ...) only at WARNING+
    """

    def __init__(self, level='INFO'):
        super().__init__()
        self.level = logging.getLevelName(level) if isinstance(level, str) else level
        if not isinstance(self.level, int):
            self.level = logging.INFO

    def filter(self, record):
        if record.name.split('.', 1)[0] in PROJECT_PREFIXES:
            return record.levelno >= self.level
        return record.levelno >= logging.WARNING
