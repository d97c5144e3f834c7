"""
iconfont-updater 服务层

包含备份管理。
"""

from iconfont_updater.services.backup import (
    BACKUP_PREFIX,
    BACKUP_SUFFIX,
    BackupManager,
)

__all__ = [
    "BACKUP_PREFIX",
    "BACKUP_SUFFIX",
    "BackupManager",
]
