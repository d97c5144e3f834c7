"""
iconfont-updater

下载远程图标 CSS，与本地缓存比较，有变化时轮换备份并替换本地文件。
"""

__version__ = "1.0.0"

from iconfont_updater.models import UpdateResult, UpdaterConfig
from iconfont_updater.updater import IconfontUpdater, run_update_cycle

__all__ = [
    "__version__",
    "IconfontUpdater",
    "UpdateResult",
    "UpdaterConfig",
    "run_update_cycle",
]
