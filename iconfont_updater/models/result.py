"""
结果模型

定义一次更新周期的输出和备份目录条目。
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class BackupEntry:
    """备份目录中的一个备份文件，每次列举时重新计算"""

    name: str
    path: str
    mtime: float


@dataclass
class UpdateResult:
    """
    一次更新周期的结果。
    """

    updated: bool
    hash: str
    backup_path: Optional[str] = None
    size: int = 0
    duration_ms: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
