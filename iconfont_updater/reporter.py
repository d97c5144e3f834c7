"""
进度报告接口

更新流程本身不直接输出日志，而是通过注入的 Reporter 发送通知，
便于测试和替换输出格式。
"""

from abc import ABC, abstractmethod

from loguru import logger


class Reporter(ABC):
    """
    Reporter 基类

    所有报告器必须实现以下五个通知方法。
    """

    @abstractmethod
    def info(self, message: str) -> None:
        pass

    @abstractmethod
    def success(self, message: str) -> None:
        pass

    @abstractmethod
    def warning(self, message: str) -> None:
        pass

    @abstractmethod
    def error(self, message: str) -> None:
        pass

    @abstractmethod
    def debug(self, message: str) -> None:
        pass


class LoguruReporter(Reporter):
    """转发到 loguru 的报告器（CLI 默认）"""

    def info(self, message: str) -> None:
        logger.info(message)

    def success(self, message: str) -> None:
        logger.success(message)

    def warning(self, message: str) -> None:
        logger.warning(message)

    def error(self, message: str) -> None:
        logger.error(message)

    def debug(self, message: str) -> None:
        logger.debug(message)


class SilentReporter(Reporter):
    """丢弃所有通知"""

    def info(self, message: str) -> None:
        pass

    def success(self, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass

    def debug(self, message: str) -> None:
        pass
