import os
import logging
import json
import threading
from logging.handlers import RotatingFileHandler
import constants


class StreamToLogger:
    """Redirects stdout/stderr to the logger."""

    def __init__(self, logger, level):
        self.logger = logger
        self.level = level

    def write(self, buf):
        for line in buf.rstrip().splitlines():
            self.logger.log(self.level, line.rstrip())

    def flush(self): pass


def setup_system(base_dir, level=logging.DEBUG):
    log_dir = os.path.abspath(os.path.join(base_dir, 'logs'))
    os.makedirs(log_dir, exist_ok=True)
    fmt = logging.Formatter('%(asctime)s | %(name)-10s | %(levelname)-8s | %(message)s')
    logger = logging.getLogger(constants.LOGGER_NAME)
    logger.setLevel(level)
    f_path = os.path.join(log_dir, 'Track_Editor.log')
    if not any(isinstance(h, RotatingFileHandler) and h.baseFilename == f_path for h in logger.handlers):
        h = RotatingFileHandler(f_path, maxBytes=10*1024*1024, backupCount=5, encoding='utf-8')
        h.setFormatter(fmt)
        logger.addHandler(h)
    return logger


class ConfigManager:

    def __init__(self, path=None):
        self.path = path
        self.data = {}
        self.lock = threading.Lock()
        self.logger = logging.getLogger(constants.LOGGER_NAME)
        self.load()

    def load(self):
        with self.lock:
            if self.path and os.path.exists(self.path):
                try:
                    with open(self.path, 'r') as f: self.data = json.load(f)
                except (OSError, ValueError) as e:
                    self.logger.error(f"[CONFIG] Unreadable config {self.path}, using defaults: {e}")
                    self.data = {}

    def save(self):
        if not self.path:
            return
        with self.lock:
            os.makedirs(os.path.dirname(os.path.abspath(self.path)), exist_ok=True)
            with open(self.path, 'w') as f: json.dump(self.data, f, indent=4)

    def get(self, k, default=None):
        if default is None:
            default = constants.CONFIG_DEFAULTS.get(k)
        return self.data.get(k, default)

    def set(self, k, v):
        self.data[k] = v
        self.save()
