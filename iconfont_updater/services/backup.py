"""
备份管理

实现备份文件命名、创建、列举，以及按修改时间保留最近 N 份的轮换策略。
"""

import os
from datetime import datetime
from typing import List, Optional

import aiofiles.os

from iconfont_updater.exceptions import FileSystemError
from iconfont_updater.models import BackupEntry
from iconfont_updater.utils import backup_timestamp, ensure_dir, write_text

BACKUP_PREFIX = "iconfont-"
BACKUP_SUFFIX = ".css"


class BackupManager:
    """备份管理器"""

    def __init__(
        self,
        backup_dir: str,
        max_backups: int,
        prefix: str = BACKUP_PREFIX,
        suffix: str = BACKUP_SUFFIX,
    ):
        self.backup_dir = backup_dir
        self.max_backups = max_backups
        self.prefix = prefix
        self.suffix = suffix

    def backup_name(self, now: Optional[datetime] = None) -> str:
        """生成备份文件名，字典序近似时间顺序"""
        return f"{self.prefix}{backup_timestamp(now)}{self.suffix}"

    def is_backup(self, filename: str) -> bool:
        return filename.startswith(self.prefix) and filename.endswith(self.suffix)

    async def prepare(self) -> None:
        """确保备份目录存在"""
        await ensure_dir(self.backup_dir)

    async def create_backup(self, content: str) -> str:
        """
        将旧内容写入新的备份文件

        Returns:
            备份文件路径
        """
        backup_path = os.path.join(self.backup_dir, self.backup_name())
        await write_text(backup_path, content)
        return backup_path

    async def list_backups(self) -> List[BackupEntry]:
        """列出匹配命名规则的备份，按修改时间从新到旧排序"""
        try:
            names = await aiofiles.os.listdir(self.backup_dir)
        except FileNotFoundError:
            return []
        except OSError as e:
            raise FileSystemError(
                f"读取备份目录失败: {e}", path=self.backup_dir, operation="listdir"
            ) from e

        entries = []
        for name in names:
            if not self.is_backup(name):
                continue
            path = os.path.join(self.backup_dir, name)
            try:
                stat = await aiofiles.os.stat(path)
            except OSError as e:
                raise FileSystemError(
                    f"读取备份信息失败: {e}", path=path, operation="stat"
                ) from e
            entries.append(BackupEntry(name=name, path=path, mtime=stat.st_mtime))

        # 按实际修改时间而非文件名排序，容忍时钟回拨
        entries.sort(key=lambda entry: entry.mtime, reverse=True)
        return entries

    async def rotate(self) -> List[BackupEntry]:
        """
        删除超出保留数量的旧备份

        Returns:
            被删除的备份列表
        """
        backups = await self.list_backups()
        expired = backups[self.max_backups:]
        for backup in expired:
            try:
                await aiofiles.os.remove(backup.path)
            except OSError as e:
                raise FileSystemError(
                    f"删除旧备份失败: {e}", path=backup.path, operation="unlink"
                ) from e
        return expired
