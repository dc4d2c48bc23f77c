"""검색 결과 목록 파서"""

import re
from typing import Iterator, List, Optional
from urllib.parse import parse_qs, urljoin, urlparse

from bs4 import BeautifulSoup, Tag

from saramin_crawler.config import CrawlerConfig
from saramin_crawler.exceptions import ParseError
from saramin_crawler.logging_config import get_logger, log_parse_result, log_parse_summary
from saramin_crawler.models import RawListing

logger = get_logger("crawler.parse")

# .job_condition 안의 span 순서
CONDITION_FIELDS = ("location", "experience", "education", "employment_type")


def canonicalize_link(href: str, base_url: str = CrawlerConfig.BASE_URL) -> str:
    """
    공고 링크를 절대/정규 URL로 변환

    rec_idx 파라미터가 있으면 추적용 파라미터를 버리고
    relay/view?rec_idx=<id> 형태로 고정한다.
    """
    absolute = urljoin(base_url + "/", href.strip())
    rec_idx = parse_qs(urlparse(absolute).query).get("rec_idx")
    if rec_idx and rec_idx[0]:
        return CrawlerConfig.get_relay_view_url(rec_idx[0])
    return absolute


def _text(el: Optional[Tag]) -> str:
    if el is None:
        return ""
    return re.sub(r"\s+", " ", el.get_text(" ", strip=True)).strip()


class ListingSequence:
    """
    한 페이지의 공고 시퀀스

    반복할 때마다 문서를 처음부터 다시 순회한다 (지연/재시작 가능).
    """

    def __init__(self, parser: "ListingParser", items: List[Tag], page: Optional[int] = None):
        self._parser = parser
        self._items = items
        self.page = page
        self.failed = 0

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[RawListing]:
        self.failed = 0
        parsed = 0
        for index, item in enumerate(self._items):
            try:
                listing = self._parser.parse_item(item)
            except ParseError as e:
                self.failed += 1
                logger.warning(f"[PARSE] 항목 {index} 건너뜀: {e}")
                continue
            except (AttributeError, TypeError, ValueError) as e:
                self.failed += 1
                logger.warning(f"[PARSE] 항목 {index} 건너뜀: {type(e).__name__} {e}")
                continue

            parsed += 1
            yield listing

        log_parse_summary(logger, len(self._items), parsed, self.failed, page=self.page)


class ListingParser:
    """사람인 검색 결과 HTML -> RawListing"""

    def __init__(self, base_url: str = CrawlerConfig.BASE_URL):
        self.base_url = base_url

    def parse(self, body: str, page: Optional[int] = None) -> ListingSequence:
        """
        페이지 본문 파싱

        Args:
            body: 검색 결과 HTML
            page: 로그용 페이지 번호

        Returns:
            ListingSequence: 항목별 파싱 실패는 건너뛰는 지연 시퀀스
        """
        soup = BeautifulSoup(body or "", "lxml")
        items = soup.select(CrawlerConfig.ITEM_SELECTOR)
        return ListingSequence(self, items, page=page)

    def parse_item(self, item: Tag) -> RawListing:
        """
        공고 항목 1건 파싱

        Raises:
            ParseError: 제목 링크가 없어 공고를 식별할 수 없을 때
        """
        title_el = item.select_one(CrawlerConfig.TITLE_SELECTOR)
        if title_el is None:
            raise ParseError("제목 요소(.job_tit a) 없음")

        href = title_el.get("href")
        if not href or not str(href).strip():
            raise ParseError("공고 링크(href) 없음")

        title = (title_el.get("title") or "").strip() or _text(title_el)

        conditions = [_text(span) for span in item.select(CrawlerConfig.CONDITION_SELECTOR)]
        condition_values = {
            field: (conditions[i] if i < len(conditions) else "")
            for i, field in enumerate(CONDITION_FIELDS)
        }

        listing = RawListing(
            company=_text(item.select_one(CrawlerConfig.COMPANY_SELECTOR)),
            title=title,
            link=canonicalize_link(str(href), self.base_url),
            deadline=_text(item.select_one(CrawlerConfig.DEADLINE_SELECTOR)),
            sector=self._extract_sector(item),
            salary=_text(item.select_one(CrawlerConfig.SALARY_SELECTOR)),
            **condition_values,
        )

        log_parse_result(logger, listing.link, listing.to_dict())
        return listing

    def _extract_sector(self, item: Tag) -> str:
        """직무 분야: 첫 번째 링크, 없으면 등록일을 제외한 텍스트"""
        sector_el = item.select_one(CrawlerConfig.SECTOR_SELECTOR)
        if sector_el is None:
            return ""

        first_link = sector_el.select_one("a")
        if first_link is not None and _text(first_link):
            return _text(first_link)

        parts = [
            _text(child) if isinstance(child, Tag) else str(child).strip()
            for child in sector_el.children
            if not (isinstance(child, Tag) and "job_day" in (child.get("class") or []))
        ]
        return re.sub(r"\s+", " ", " ".join(p for p in parts if p)).strip(" ,")
