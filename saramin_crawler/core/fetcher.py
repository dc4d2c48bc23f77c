"""검색 결과 페이지 요청 클라이언트 - 요청 간격 하한 + 재시도"""

import asyncio
import time
from typing import Awaitable, Callable, Dict, Optional

import httpx

from saramin_crawler.config import CrawlerConfig, settings
from saramin_crawler.exceptions import FetchError
from saramin_crawler.logging_config import (
    get_logger,
    log_http_error,
    log_http_request,
    log_http_response,
)

logger = get_logger("crawler.fetch")


class RequestThrottle:
    """
    요청 간격 제어

    직전 요청이 끝난 뒤부터 다음 요청(재시도 포함)까지 최소 delay 만큼 대기한다.
    재시도는 delay * backoff ** (attempt - 1) 로 늘어나며 하한보다 짧아지지 않는다.
    """

    def __init__(
        self,
        delay_ms: int = 1000,
        backoff: float = 2.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.min_delay = max(0.0, delay_ms / 1000)
        self.backoff = max(1.0, backoff)
        self._clock = clock
        self._sleep = sleep
        self._last_request: Optional[float] = None

    def get_delay(self, attempt: int = 1) -> float:
        """시도 회차별 대기 시간 (초)"""
        if attempt <= 1:
            return self.min_delay
        return self.min_delay * (self.backoff ** (attempt - 1))

    async def wait(self, attempt: int = 1):
        """직전 요청 완료 이후 필요한 만큼 대기 후 요청 시각 기록"""
        if self._last_request is not None:
            remaining = self.get_delay(attempt) - (self._clock() - self._last_request)
            if remaining > 0:
                await self._sleep(remaining)
        self._last_request = self._clock()

    def mark_done(self):
        """응답(또는 오류) 수신 시각 기록; 다음 대기는 이 시각부터 센다"""
        self._last_request = self._clock()

    def reset(self):
        self._last_request = None


class PageFetcher:
    """
    페이지 단위 HTTP GET 클라이언트

    한 페이지 = 1회 시도 + 최대 max_retries 회 재시도.
    모두 실패하면 FetchError를 던지고 호출자가 다음 페이지로 넘어간다.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        delay_ms: Optional[int] = None,
        max_retries: Optional[int] = None,
        backoff: Optional[float] = None,
        timeout: Optional[float] = None,
        throttle: Optional[RequestThrottle] = None,
    ):
        """
        Args:
            client: 외부 주입 httpx 클라이언트 (None이면 직접 생성/종료)
            delay_ms: 요청 간 최소 간격 (기본 settings.CRAWL_DELAY_MS)
            max_retries: 실패 시 재시도 횟수 (기본 settings.CRAWL_MAX_RETRIES)
            backoff: 재시도 대기 배수 (기본 settings.CRAWL_RETRY_BACKOFF)
            timeout: 요청 타임아웃 초 (기본 settings.CRAWL_TIMEOUT_SECONDS)
            throttle: 외부 주입 RequestThrottle
        """
        self.max_retries = settings.CRAWL_MAX_RETRIES if max_retries is None else max_retries
        self.throttle = throttle or RequestThrottle(
            delay_ms=settings.CRAWL_DELAY_MS if delay_ms is None else delay_ms,
            backoff=settings.CRAWL_RETRY_BACKOFF if backoff is None else backoff,
        )

        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=settings.CRAWL_TIMEOUT_SECONDS if timeout is None else timeout,
            headers={
                "User-Agent": CrawlerConfig.USER_AGENT,
                **CrawlerConfig.DEFAULT_HEADERS,
            },
            follow_redirects=True,
        )

    @property
    def max_attempts(self) -> int:
        return 1 + max(0, self.max_retries)

    async def fetch(
        self,
        url: str,
        params: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> str:
        """
        페이지 요청 (재시도 포함)

        Returns:
            str: 응답 본문

        Raises:
            FetchError: 모든 시도가 네트워크 오류 또는 비정상 상태로 실패
        """
        last_status: Optional[int] = None
        last_error: Optional[BaseException] = None

        for attempt in range(1, self.max_attempts + 1):
            await self.throttle.wait(attempt)
            log_http_request(logger, "GET", url, params, attempt)
            start = time.perf_counter()

            try:
                resp = await self.client.get(url, params=params, headers=headers)
            except httpx.RequestError as e:
                last_status, last_error = None, e
                log_http_error(logger, url, f"{type(e).__name__} {e}", attempt, self.max_attempts)
                continue
            finally:
                self.throttle.mark_done()

            elapsed_ms = (time.perf_counter() - start) * 1000
            log_http_response(logger, url, resp.status_code, len(resp.content), elapsed_ms)

            if resp.is_success:
                return resp.text

            last_status, last_error = resp.status_code, None
            log_http_error(logger, url, f"HTTP {resp.status_code}", attempt, self.max_attempts)

        raise FetchError(url, self.max_attempts, status_code=last_status, cause=last_error)

    async def fetch_search_page(self, keyword: str, page: int) -> str:
        """키워드 검색 결과 페이지 요청"""
        return await self.fetch(
            CrawlerConfig.get_search_url(),
            params=CrawlerConfig.search_params(keyword, page),
        )

    async def close(self):
        """직접 생성한 클라이언트만 종료"""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "PageFetcher":
        return self

    async def __aexit__(self, *exc_info):
        await self.close()
