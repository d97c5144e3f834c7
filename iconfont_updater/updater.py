"""
更新协调器

编排一次更新周期：读取现有文件、下载、比较哈希、备份轮换、写入新文件。
"""

import os
import time
from datetime import datetime
from typing import Optional, Protocol

from iconfont_updater.download import ContentVerifier, CSSFetcher
from iconfont_updater.exceptions import FileSystemError
from iconfont_updater.models import UpdateResult, UpdaterConfig
from iconfont_updater.reporter import LoguruReporter, Reporter
from iconfont_updater.services import BackupManager
from iconfont_updater.utils import ensure_dir, read_text, write_text_atomic


class Fetcher(Protocol):
    async def fetch(self, url: str) -> str: ...


class IconfontUpdater:
    """图标 CSS 更新器"""

    def __init__(
        self,
        config: UpdaterConfig,
        reporter: Optional[Reporter] = None,
        fetcher: Optional[Fetcher] = None,
    ):
        self.config = config
        self.reporter = reporter or LoguruReporter()
        self.fetcher = fetcher
        self.backup_manager = BackupManager(config.backup_dir, config.max_backups)
        self.verifier = ContentVerifier()

    async def run(self) -> UpdateResult:
        """运行一次完整的更新周期"""
        self.reporter.info(f"URL: {self.config.source_url}")
        self.reporter.info(f"输出文件: {self.config.output_path}")

        try:
            return await self._run_cycle()
        except Exception as e:
            self.reporter.error(f"更新失败: {e}")
            raise

    async def _run_cycle(self) -> UpdateResult:
        existing_content = await self._read_existing()
        existing_hash = (
            self.verifier.content_hash(existing_content)
            if existing_content is not None
            else None
        )

        self.reporter.info("开始下载最新 CSS 文件...")
        start = time.monotonic()
        content = await self._fetch()
        duration_ms = int((time.monotonic() - start) * 1000)

        new_hash = self.verifier.content_hash(content)
        self.reporter.success(
            f"下载完成 (耗时: {duration_ms}ms, 大小: {len(content)} 字符)"
        )

        if not self.verifier.is_changed(existing_hash, new_hash):
            self.reporter.info("文件内容未发生变化，无需更新")
            return UpdateResult(
                updated=False,
                hash=new_hash,
                size=len(content),
                duration_ms=duration_ms,
            )

        backup_path = await self._backup(existing_content)

        await ensure_dir(os.path.dirname(self.config.output_path))
        await write_text_atomic(self.config.output_path, content)
        self.reporter.success(f"文件已更新: {self.config.output_path}")
        self.reporter.info(f"更新时间: {datetime.now():%Y-%m-%d %H:%M:%S}")

        return UpdateResult(
            updated=True,
            hash=new_hash,
            backup_path=backup_path,
            size=len(content),
            duration_ms=duration_ms,
        )

    async def _read_existing(self) -> Optional[str]:
        """读取现有文件，任何读取失败都按“文件不存在”处理"""
        try:
            content = await read_text(self.config.output_path)
        except FileSystemError as e:
            self.reporter.warning(f"读取现有文件失败: {e}")
            return None

        if not content:
            self.reporter.info("未找到现有文件，将创建新文件")
            return None

        self.reporter.info("检测到现有文件")
        return content

    async def _fetch(self) -> str:
        if self.fetcher is not None:
            return await self.fetcher.fetch(self.config.source_url)

        async with CSSFetcher(
            timeout_ms=self.config.timeout_ms,
            max_redirects=self.config.max_redirects,
            reporter=self.reporter,
        ) as fetcher:
            return await fetcher.fetch(self.config.source_url)

    async def _backup(self, existing_content: Optional[str]) -> Optional[str]:
        """
        创建备份并轮换旧备份

        备份失败不影响更新，返回 None 表示未产生备份。
        """
        try:
            await self.backup_manager.prepare()

            backup_path = None
            if existing_content is not None:
                backup_path = await self.backup_manager.create_backup(
                    existing_content
                )

            removed = await self.backup_manager.rotate()
            for backup in removed:
                self.reporter.debug(f"已删除旧备份: {backup.name}")
        except FileSystemError as e:
            self.reporter.warning(f"创建备份失败: {e}")
            return None

        if backup_path:
            self.reporter.success(f"备份已创建: {os.path.basename(backup_path)}")
        else:
            self.reporter.info("跳过备份（首次更新）")
        return backup_path


async def run_update_cycle(
    config: UpdaterConfig,
    reporter: Optional[Reporter] = None,
    fetcher: Optional[Fetcher] = None,
) -> UpdateResult:
    """运行一次更新周期"""
    return await IconfontUpdater(config, reporter, fetcher).run()
