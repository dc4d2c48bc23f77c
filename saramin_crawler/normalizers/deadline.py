"""마감일 정규화 모듈

사람인 목록의 마감일 토큰을 절대 시각(자정, 설정 시간대)으로 변환합니다.

Examples:
    - "상시채용" -> None (마감일 없음)
    - "~ 11/15(금)" -> 올해(이미 지났으면 내년) 11월 15일
    - "2024.12.31" -> 2024-12-31
    - "알 수 없음" -> None (경고 로그)
"""

import re
from datetime import date, datetime, timedelta
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from saramin_crawler.config import settings
from saramin_crawler.exceptions import DateFormatError
from saramin_crawler.logging_config import get_logger

logger = get_logger("crawler.normalize")


class DateNormalizer:
    """
    마감일 토큰 파서

    실패 시 예외 대신 None을 반환한다 (수집은 계속 진행).
    """

    # 마감일 없음 토큰
    NO_DEADLINE_TOKENS = {"상시채용", "always hiring", "채용시", "채용시 마감", "채용시마감"}

    # 상대 마감 토큰 (오늘 기준 일수)
    RELATIVE_DAY_TOKENS = {"오늘마감": 0, "내일마감": 1}

    # ~ 11/15(금), ~11/15(금) 18:00
    MONTH_DAY_PATTERN = re.compile(r"^~?\s*(\d{1,2})/(\d{1,2})(?:\s*\([^)]*\))?(?:\s+\d{1,2}:\d{2})?$")

    # 2024.12.31, 2024-12-31, 2024/12/31
    FULL_DATE_PATTERN = re.compile(r"^~?\s*(\d{4})[.\-/](\d{1,2})[.\-/](\d{1,2})\.?(?:\s*\([^)]*\))?$")

    def __init__(
        self,
        tz: Optional[str] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        """
        Args:
            tz: 시간대 이름 (None이면 settings.TIMEZONE)
            today: 오늘 날짜 공급 함수 (테스트 주입용)
        """
        self.tz = ZoneInfo(tz or settings.TIMEZONE)
        self._today = today or (lambda: datetime.now(self.tz).date())

    def normalize(self, token: Optional[str]) -> Optional[datetime]:
        """
        마감일 토큰 정규화

        Args:
            token: 원본 마감일 텍스트

        Returns:
            설정 시간대 자정의 datetime, 마감일이 없거나 인식 불가면 None
        """
        try:
            return self._parse(token)
        except DateFormatError as e:
            logger.warning(f"[DATE] {e}")
            return None

    def _parse(self, token: Optional[str]) -> Optional[datetime]:
        text = re.sub(r"\s+", " ", token or "").strip()

        # 1. 마감일 없음
        if not text or text.lower() in self.NO_DEADLINE_TOKENS:
            return None

        if text in self.RELATIVE_DAY_TOKENS:
            return self._at_midnight(self._today() + timedelta(days=self.RELATIVE_DAY_TOKENS[text]))

        # 2. 월/일 (연도 추론)
        match = self.MONTH_DAY_PATTERN.match(text)
        if match:
            month, day = int(match.group(1)), int(match.group(2))
            return self._at_midnight(self._infer_year(month, day, text))

        # 3. 연.월.일
        match = self.FULL_DATE_PATTERN.match(text)
        if match:
            year, month, day = (int(g) for g in match.groups())
            try:
                return self._at_midnight(date(year, month, day))
            except ValueError:
                raise DateFormatError(text)

        # 4. 인식 불가
        raise DateFormatError(text)

    def _infer_year(self, month: int, day: int, text: str) -> date:
        """올해 날짜로 해석하고, 이미 지났으면 내년으로 넘긴다"""
        today = self._today()
        try:
            candidate = date(today.year, month, day)
        except ValueError:
            candidate = None

        if candidate is None or candidate < today:
            try:
                return date(today.year + 1, month, day)
            except ValueError:
                raise DateFormatError(text)
        return candidate

    def _at_midnight(self, d: date) -> datetime:
        return datetime(d.year, d.month, d.day, tzinfo=self.tz)
