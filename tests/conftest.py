"""
pytest fixtures for crawler tests
"""
from datetime import date
from typing import Dict

import httpx
import pytest

from saramin_crawler.core.fetcher import PageFetcher
from saramin_crawler.db.memory import InMemoryStore
from saramin_crawler.normalizers import DateNormalizer


def listing_item(
    rec_idx: str,
    company: str = "(주)테스트회사",
    title: str = "백엔드 개발자 채용 (Python/Django)",
    conditions=("서울 강남구", "경력 3년↑", "대학교(4년)↑", "정규직"),
    deadline: str = "~ 12/31(목)",
    sector: str = "백엔드/서버개발",
    salary: str = "3,000~4,000만원",
) -> str:
    """검색 결과 .item_recruit 항목 HTML"""
    spans = "".join(f"<span>{c}</span>" for c in conditions)
    sector_html = (
        f'<div class="job_sector"><a href="#">{sector}</a>, <a href="#">Python</a>'
        f' <span class="job_day">등록일 24/10/01</span></div>'
    ) if sector else ""
    salary_html = f'<div class="area_badge"><span class="badge">{salary}</span></div>' if salary else ""
    return f'''
    <div class="item_recruit" value="{rec_idx}">
        <div class="area_corp">
            <strong class="corp_name"><a href="/zf_user/company-info/view?csn=abc">{company}</a></strong>
        </div>
        <div class="area_job">
            <h2 class="job_tit">
                <a href="/zf_user/jobs/relay/view?view_type=search&amp;rec_idx={rec_idx}&amp;location=ts&amp;searchword=%EB%B0%B1%EC%97%94%EB%93%9C" title="{title}">
                    <span>{title}</span>
                </a>
            </h2>
            <div class="job_date"><span class="date">{deadline}</span></div>
            <div class="job_condition">{spans}</div>
            {sector_html}
            {salary_html}
        </div>
    </div>
    '''


def search_page(*items: str) -> str:
    """검색 결과 페이지 HTML"""
    return f'''
    <!DOCTYPE html>
    <html>
    <head><title>백엔드 채용정보 - 사람인</title></head>
    <body>
        <div id="recruit_info_list">
            <div class="content">{"".join(items)}</div>
        </div>
    </body>
    </html>
    '''


@pytest.fixture
def sample_page_html():
    """공고 3건 (정상 2 + 제목 링크 없는 1)"""
    broken = '''
    <div class="item_recruit">
        <strong class="corp_name"><a>깨진회사</a></strong>
        <h2 class="job_tit"><span>링크 없는 공고</span></h2>
    </div>
    '''
    return search_page(
        listing_item("48000001"),
        broken,
        listing_item(
            "48000002",
            company="에이비씨랩",
            title="Backend Node.js Engineer",
            conditions=("서울 전체", "신입·경력"),
            deadline="상시채용",
            sector="",
            salary="",
        ),
    )


@pytest.fixture
def memory_store():
    return InMemoryStore()


@pytest.fixture
def fixed_today():
    return date(2024, 10, 18)


@pytest.fixture
def date_normalizer(fixed_today):
    return DateNormalizer(tz="Asia/Seoul", today=lambda: fixed_today)


@pytest.fixture
def make_fetcher():
    """
    httpx.MockTransport 기반 PageFetcher 팩토리

    pages: {recruitPage: 응답 HTML 또는 상태코드(int) 또는 예외}
    """

    def factory(pages: Dict[int, object], max_retries: int = 3, calls: list = None) -> PageFetcher:
        def handler(request: httpx.Request) -> httpx.Response:
            page = int(request.url.params.get("recruitPage", "1"))
            if calls is not None:
                calls.append(page)
            result = pages.get(page, 404)
            if isinstance(result, Exception):
                raise result
            if isinstance(result, int):
                return httpx.Response(result, text="error")
            return httpx.Response(200, text=result)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        fetcher = PageFetcher(client=client, delay_ms=0, max_retries=max_retries)
        return fetcher

    return factory


@pytest.fixture
def build_item():
    """listing_item 빌더"""
    return listing_item


@pytest.fixture
def build_page():
    """search_page 빌더"""
    return search_page
