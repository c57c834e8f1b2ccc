"""
日志配置模块

统一配置 loguru 的输出目标（控制台 + 可选的滚动日志文件）
"""

import sys
from pathlib import Path
from loguru import logger

from socialfeed.config.settings import settings

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} | {message}"


def setup_logging() -> None:
    """按配置重新安装日志 sink（可重复调用）"""
    logger.remove()
    logger.add(sys.stderr, level=settings.LOG_LEVEL, format=LOG_FORMAT)

    log_file = settings.LOG_FILE
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            rotation=settings.LOG_ROTATION,    # 日志文件达到指定大小时轮转
            retention=settings.LOG_RETENTION,  # 保留时长
            compression="zip",                 # 压缩旧日志
            format=LOG_FORMAT,
            level=settings.LOG_LEVEL,
        )
