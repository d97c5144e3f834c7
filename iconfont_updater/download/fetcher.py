"""
CSS 下载器

单次逻辑下载：手动跟随重定向，每一跳单独计时，返回完整的文本内容。
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from urllib.parse import urljoin

import aiohttp

from iconfont_updater.exceptions import (
    DownloadError,
    DownloadTimeoutError,
    EmptyContentError,
    TooManyRedirectsError,
    TransportError,
)
from iconfont_updater.models.config import DEFAULT_CONFIG
from iconfont_updater.reporter import Reporter, SilentReporter

REDIRECT_STATUSES = frozenset({301, 302, 307, 308})


class HopState(Enum):
    """单跳请求的结束状态"""

    REDIRECTED = "redirected"
    COMPLETE = "complete"


@dataclass
class HopResult:
    """单跳请求结果"""

    state: HopState
    url: str
    content: Optional[str] = None


class CSSFetcher:
    """CSS 下载器"""

    def __init__(
        self,
        timeout_ms: int = DEFAULT_CONFIG["timeout_ms"],
        max_redirects: int = DEFAULT_CONFIG["max_redirects"],
        session: Optional[aiohttp.ClientSession] = None,
        reporter: Optional[Reporter] = None,
    ):
        self.timeout_ms = timeout_ms
        self.max_redirects = max_redirects
        self.reporter = reporter or SilentReporter()
        self._session = session
        self._owned_session = session is None

    @property
    def session(self) -> aiohttp.ClientSession:
        """获取或创建 aiohttp session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout_ms / 1000)
            )
        return self._session

    async def fetch(self, url: str) -> str:
        """
        下载 URL 对应的文本内容

        Args:
            url: http 或 https 地址

        Returns:
            响应正文（UTF-8 解码）

        Raises:
            DownloadError: 非 200 且非重定向的状态码
            EmptyContentError: 正文为空
            DownloadTimeoutError: 某一跳在超时时间内未完成
            TransportError: 连接层错误
            TooManyRedirectsError: 重定向次数超过 max_redirects
        """
        current_url = url
        for _ in range(self.max_redirects + 1):
            hop = await self._fetch_hop(current_url)
            if hop.state is HopState.COMPLETE:
                return hop.content
            self.reporter.info(f"检测到重定向: {hop.url}")
            current_url = hop.url

        raise TooManyRedirectsError(
            f"重定向次数超过上限 ({self.max_redirects})",
            context={"url": url, "last_url": current_url},
        )

    async def _fetch_hop(self, url: str) -> HopResult:
        """执行一跳请求，超时后取消进行中的请求"""
        self.reporter.debug(f"[请求] GET {url}")
        try:
            return await asyncio.wait_for(
                self._request(url), timeout=self.timeout_ms / 1000
            )
        except asyncio.TimeoutError:
            raise DownloadTimeoutError(
                f"下载超时 ({self.timeout_ms}ms): {url}", timeout_ms=self.timeout_ms
            )
        except (aiohttp.ClientError, OSError) as e:
            raise TransportError(
                f"网络连接失败: {e}",
                context={"url": url, "error": str(e)},
            ) from e

    async def _request(self, url: str) -> HopResult:
        async with self.session.get(url, allow_redirects=False) as response:
            if response.status in REDIRECT_STATUSES:
                location = response.headers.get("Location")
                if location:
                    try:
                        next_url = urljoin(url, location)
                    except ValueError as e:
                        raise DownloadError(
                            f"重定向地址无效: {location}",
                            status_code=response.status,
                            url=url,
                            context={"location": location, "error": str(e)},
                        ) from e
                    return HopResult(HopState.REDIRECTED, next_url)

            if response.status != 200:
                raise DownloadError(
                    f"下载失败: HTTP {response.status}",
                    status_code=response.status,
                    url=url,
                )

            content = await response.text(encoding="utf-8", errors="replace")
            if not content:
                raise EmptyContentError("下载的文件内容为空", context={"url": url})

            return HopResult(HopState.COMPLETE, url, content)

    async def close(self):
        """关闭下载器"""
        if self._owned_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        """异步上下文管理器入口"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """异步上下文管理器出口"""
        await self.close()
