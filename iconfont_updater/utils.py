import os
from datetime import datetime, timezone
from typing import Optional

import aiofiles
import aiofiles.os

from iconfont_updater.exceptions import FileSystemError


async def ensure_dir(dir_path: str) -> None:
    """递归创建目录（已存在时不做任何事）"""
    if not dir_path:
        return
    try:
        await aiofiles.os.makedirs(dir_path, exist_ok=True)
    except OSError as e:
        raise FileSystemError(
            f"创建目录失败: {e}", path=dir_path, operation="mkdir"
        ) from e


async def read_text(file_path: str) -> Optional[str]:
    """
    读取文本文件

    Returns:
        文件内容，文件不存在时返回 None

    Raises:
        FileSystemError: 文件存在但无法读取
    """
    if not await aiofiles.os.path.exists(file_path):
        return None
    try:
        async with aiofiles.open(file_path, "r", encoding="utf-8", newline="") as f:
            return await f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileSystemError(
            f"读取文件失败: {e}", path=file_path, operation="read"
        ) from e


async def write_text(file_path: str, content: str) -> None:
    """写入文本文件，不做换行符转换"""
    try:
        async with aiofiles.open(file_path, "w", encoding="utf-8", newline="") as f:
            await f.write(content)
    except OSError as e:
        raise FileSystemError(
            f"写入文件失败: {e}", path=file_path, operation="write"
        ) from e


async def write_text_atomic(file_path: str, content: str) -> None:
    """
    原子写入文本文件

    先写入同目录下的临时文件，再用 os.replace 替换目标文件，
    读者只会看到旧内容或新内容。
    """
    directory, filename = os.path.split(file_path)
    tmp_path = os.path.join(directory, f".{filename}.{os.getpid()}.tmp")
    try:
        await write_text(tmp_path, content)
        await aiofiles.os.replace(tmp_path, file_path)
    except OSError as e:
        raise FileSystemError(
            f"替换文件失败: {e}", path=file_path, operation="replace"
        ) from e
    finally:
        if await aiofiles.os.path.exists(tmp_path):
            try:
                await aiofiles.os.remove(tmp_path)
            except OSError:
                pass


def backup_timestamp(now: Optional[datetime] = None) -> str:
    """
    生成可用于文件名的时间戳

    形如 2024-05-01T08-30-15-123Z：UTC ISO-8601，冒号和点替换为连字符。
    """
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    iso = now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"
    return iso.replace(":", "-").replace(".", "-")
