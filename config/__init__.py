from .logger import logger, setup_logger
from .task_logger import LogEntry, LogLevel, RunLogger

__all__ = ["logger", "setup_logger", "LogEntry", "LogLevel", "RunLogger"]
