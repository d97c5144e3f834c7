"""
iconfont-updater 数据模型包

包含配置模型和结果模型定义。
"""

from iconfont_updater.models.config import (
    DEFAULT_CONFIG,
    KEY_ALIASES,
    UpdaterConfig,
    normalize_keys,
)
from iconfont_updater.models.result import BackupEntry, UpdateResult

__all__ = [
    # 配置模型
    "DEFAULT_CONFIG",
    "KEY_ALIASES",
    "UpdaterConfig",
    "normalize_keys",
    # 结果模型
    "BackupEntry",
    "UpdateResult",
]
