"""
配置模型

默认配置以常量形式给出，调用方的覆盖项在 UpdaterConfig.from_dict 中合并。
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlparse

from iconfont_updater.exceptions import ConfigValidationError

DEFAULT_CONFIG: Dict[str, Any] = {
    "source_url": None,
    "output_path": "./iconfont.css",
    "backup_dir": "./backup",
    "max_backups": 5,
    "timeout_ms": 30000,
    "max_redirects": 10,
}

# 兼容原有 JSON 配置文件中的驼峰键名
KEY_ALIASES: Dict[str, str] = {
    "url": "source_url",
    "sourceUrl": "source_url",
    "output": "output_path",
    "outputPath": "output_path",
    "backupDir": "backup_dir",
    "backupDirectory": "backup_dir",
    "maxBackups": "max_backups",
    "timeout": "timeout_ms",
    "timeoutMillis": "timeout_ms",
    "maxRedirects": "max_redirects",
}


def normalize_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    """将别名键转换为字段名，丢弃未知键和值为 None 的项"""
    normalized: Dict[str, Any] = {}
    for key, value in data.items():
        field_name = KEY_ALIASES.get(key, key)
        if field_name not in DEFAULT_CONFIG or value is None:
            continue
        normalized[field_name] = value
    return normalized


def _positive_int(name: str, value: Any, allow_zero: bool = False) -> int:
    if isinstance(value, bool) or (
        isinstance(value, float) and not value.is_integer()
    ):
        raise ConfigValidationError(f"{name} 必须为整数", context={name: value})
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigValidationError(f"{name} 必须为整数", context={name: value})
    if number < 0 or (number == 0 and not allow_zero):
        raise ConfigValidationError(
            f"{name} 必须为{'非负' if allow_zero else '正'}整数",
            context={name: value},
        )
    return number


@dataclass(frozen=True)
class UpdaterConfig:
    """更新器配置，启动时创建一次，之后不再修改"""

    source_url: str
    output_path: str = DEFAULT_CONFIG["output_path"]
    backup_dir: str = DEFAULT_CONFIG["backup_dir"]
    max_backups: int = DEFAULT_CONFIG["max_backups"]
    timeout_ms: int = DEFAULT_CONFIG["timeout_ms"]
    max_redirects: int = DEFAULT_CONFIG["max_redirects"]

    @classmethod
    def from_dict(cls, *overrides: Optional[Mapping[str, Any]]) -> "UpdaterConfig":
        """
        从字典创建配置

        多个覆盖字典按顺序浅合并到 DEFAULT_CONFIG 之上，后者优先。

        Raises:
            ConfigValidationError: 缺少 URL 或字段值非法
        """
        merged = dict(DEFAULT_CONFIG)
        for override in overrides:
            if override:
                merged.update(normalize_keys(override))

        source_url = merged["source_url"]
        if not source_url or not isinstance(source_url, str):
            raise ConfigValidationError("必须提供 url 参数")
        if urlparse(source_url).scheme not in ("http", "https"):
            raise ConfigValidationError(
                "url 必须以 http:// 或 https:// 开头",
                context={"url": source_url},
            )

        return cls(
            source_url=source_url,
            output_path=str(merged["output_path"]),
            backup_dir=str(merged["backup_dir"]),
            max_backups=_positive_int("max_backups", merged["max_backups"]),
            timeout_ms=_positive_int("timeout_ms", merged["timeout_ms"]),
            max_redirects=_positive_int(
                "max_redirects", merged["max_redirects"], allow_zero=True
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
