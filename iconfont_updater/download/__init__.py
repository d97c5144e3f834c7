"""
iconfont-updater 下载层

包含 CSS 下载器和内容校验。
"""

from iconfont_updater.download.fetcher import (
    REDIRECT_STATUSES,
    CSSFetcher,
    HopResult,
    HopState,
)
from iconfont_updater.download.verifier import ContentVerifier, content_hash

__all__ = [
    "REDIRECT_STATUSES",
    "CSSFetcher",
    "HopResult",
    "HopState",
    "ContentVerifier",
    "content_hash",
]
