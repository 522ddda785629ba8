import os
from pathlib import Path

# 日志配置，默认输出 debug 日志到控制台
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()
LOG_FILE = Path(os.environ["LOG_FILE"]) if os.getenv("LOG_FILE") else None
