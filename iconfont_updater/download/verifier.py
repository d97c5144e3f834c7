"""
内容校验器

计算 CSS 文本的 MD5 摘要，仅用于变更检测。
"""

import hashlib
from typing import Optional


class ContentVerifier:
    """内容校验器"""

    @staticmethod
    def content_hash(content: str) -> str:
        """
        计算文本内容的 MD5 值

        Args:
            content: 文本内容（按 UTF-8 编码后计算）

        Returns:
            32 位十六进制摘要
        """
        return hashlib.md5(content.encode("utf-8")).hexdigest()

    @staticmethod
    def is_changed(existing_hash: Optional[str], new_hash: str) -> bool:
        """没有现有文件时视为已变化"""
        return existing_hash != new_hash


content_hash = ContentVerifier.content_hash
