# task_logger.py
import asyncio
import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from config.logger import logger


class LogLevel(Enum):
    """日志级别"""

    DEBUG = "debug"
    INFO = "info"
    ERROR = "error"


@dataclass
class LogEntry:
    """一条需要推送的日志"""

    level: LogLevel
    text: str

    def format(self) -> str:
        return f"({self.level.value.upper()}) {self.text}"


class RunLogger:
    """
    单次运行的日志上下文

    每次运行新建一个实例，记录需要推送的日志以及是否出现过错误。
    debug 日志只输出到控制台，不会进入推送内容。
    """

    def __init__(self, task_name: str = "Endfield Daily Check-in"):
        self.task_name = task_name
        self.entries: List[LogEntry] = []
        self.has_errors = False
        self.start_time: Optional[float] = None

    async def __aenter__(self):
        """异步上下文管理器入口"""
        self.start_time = asyncio.get_running_loop().time()
        logger.info(f"🎯 Starting task: {self.task_name}")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """异步上下文管理器退出"""
        if exc_type:
            logger.exception(f"Task {self.task_name} aborted")

        execution_time = asyncio.get_running_loop().time() - self.start_time
        logger.info(
            f"📊 Task {self.task_name} finished - "
            f"entries: {len(self.entries)} - "
            f"errors: {'yes' if self.has_errors else 'no'} - "
            f"elapsed: {execution_time:.2f}s"
        )

    @staticmethod
    def _stringify(value: Any) -> str:
        if isinstance(value, str):
            return value
        return json.dumps(value, indent=2, ensure_ascii=False, default=str)

    def log(self, level: LogLevel, *values: Any) -> None:
        """
        输出并记录日志

        Args:
            level: 日志级别
            *values: 任意数量的值，非字符串会被序列化为 JSON，最后以空格拼接
        """
        level = LogLevel(level)
        text = " ".join(self._stringify(value) for value in values)

        if level is LogLevel.DEBUG:
            logger.debug(text)
            return

        if level is LogLevel.ERROR:
            logger.error(text)
            self.has_errors = True
        else:
            logger.info(text)

        self.entries.append(LogEntry(level=level, text=text))

    def debug(self, *values: Any) -> None:
        self.log(LogLevel.DEBUG, *values)

    def info(self, *values: Any) -> None:
        self.log(LogLevel.INFO, *values)

    def error(self, *values: Any) -> None:
        self.log(LogLevel.ERROR, *values)

    def format_entries(self) -> str:
        """按顺序格式化所有已记录的日志"""
        return "\n".join(entry.format() for entry in self.entries)
