"""
日志模块

进度日志统一写到 stderr，stdout 只留给命令的最终结果，方便脚本中重定向。
调试模式由 --debug 或 ICONFONT_UPDATER_DEBUG=1 开启。
"""

import os
import sys
from typing import Optional

from loguru import logger

DEBUG_ENV = "ICONFONT_UPDATER_DEBUG"
LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}"


def debug_enabled(debug: bool = False) -> bool:
    return debug or os.environ.get(DEBUG_ENV, "0") == "1"


def setup_logger(
    debug: bool = False,
    sink=sys.stderr,
    colorize: Optional[bool] = None,
) -> int:
    """
    设置日志记录器

    Args:
        debug: 是否输出 DEBUG 级别日志（环境变量同样可以开启）
        sink: 输出目标，默认 stderr
        colorize: 是否启用颜色，None 时由 loguru 根据终端自动判断

    Returns:
        新增 handler 的 id
    """
    debug_mode = debug_enabled(debug)

    logger.remove()
    handler_id = logger.add(
        sink=sink,
        format=LOG_FORMAT,
        level="DEBUG" if debug_mode else "INFO",
        colorize=colorize,
        backtrace=debug_mode,
        diagnose=debug_mode,
    )

    if debug_mode:
        logger.debug("DEBUG 模式已启用")
    return handler_id


__all__ = ["logger", "setup_logger", "debug_enabled", "DEBUG_ENV"]
