"""
iconfont-updater 统一异常体系

提供分层的异常结构，支持错误代码、上下文信息和 JSON 序列化。
"""

from typing import Any, Dict, Optional


class IconfontUpdaterError(Exception):
    """iconfont-updater 基础异常类"""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self._get_default_code()
        self.context = context or {}

    def _get_default_code(self) -> str:
        """获取默认错误代码"""
        return "E000"

    def to_dict(self) -> Dict[str, Any]:
        """将异常转换为字典格式"""
        return {
            "error": True,
            "code": self.code,
            "message": self.message,
            "context": self.context,
            "type": self.__class__.__name__,
        }

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ConfigError(IconfontUpdaterError):
    """配置相关错误"""

    def _get_default_code(self) -> str:
        return "E100"


class ConfigValidationError(ConfigError):
    """配置验证错误"""

    def _get_default_code(self) -> str:
        return "E102"


class FetchError(IconfontUpdaterError):
    """下载相关错误"""

    def _get_default_code(self) -> str:
        return "E300"


class DownloadError(FetchError):
    """服务器返回了非 200、非重定向的状态码"""

    def __init__(
        self,
        message: str,
        status_code: int,
        url: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code, context)
        self.status_code = status_code
        self.url = url
        self.context["status_code"] = status_code
        self.context["url"] = url

    def _get_default_code(self) -> str:
        return "E301"


class EmptyContentError(FetchError):
    """下载的文件内容为空"""

    def _get_default_code(self) -> str:
        return "E302"


class DownloadTimeoutError(FetchError):
    """下载超时"""

    def __init__(
        self,
        message: str,
        timeout_ms: int,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code, context)
        self.timeout_ms = timeout_ms
        self.context["timeout_ms"] = timeout_ms

    def _get_default_code(self) -> str:
        return "E303"


class TransportError(FetchError):
    """连接层错误（DNS、拒绝连接、TLS 等）"""

    def _get_default_code(self) -> str:
        return "E304"


class TooManyRedirectsError(FetchError):
    """重定向次数超过上限"""

    def _get_default_code(self) -> str:
        return "E305"


class FileSystemError(IconfontUpdaterError):
    """文件读写、建目录、删除失败"""

    def __init__(
        self,
        message: str,
        path: str,
        operation: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code, context)
        self.path = path
        self.operation = operation
        self.context["path"] = path
        self.context["operation"] = operation

    def _get_default_code(self) -> str:
        return "E600"


__all__ = [
    # 基础异常
    "IconfontUpdaterError",
    # 配置异常
    "ConfigError",
    "ConfigValidationError",
    # 下载异常
    "FetchError",
    "DownloadError",
    "EmptyContentError",
    "DownloadTimeoutError",
    "TransportError",
    "TooManyRedirectsError",
    # 文件系统异常
    "FileSystemError",
]
