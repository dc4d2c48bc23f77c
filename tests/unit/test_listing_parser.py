"""검색 결과 목록 파서 테스트"""

import pytest

from saramin_crawler.exceptions import ParseError
from saramin_crawler.parsers import ListingParser, canonicalize_link


class TestCanonicalizeLink:

    def test_strips_tracking_params(self):
        href = "/zf_user/jobs/relay/view?view_type=search&rec_idx=48000001&location=ts&searchword=abc"
        assert canonicalize_link(href) == "https://www.saramin.co.kr/zf_user/jobs/relay/view?rec_idx=48000001"

    def test_same_posting_from_different_pages_shares_link(self):
        a = canonicalize_link("/zf_user/jobs/relay/view?rec_idx=1&searchword=x&recommend_ids=y")
        b = canonicalize_link("https://www.saramin.co.kr/zf_user/jobs/relay/view?view_type=list&rec_idx=1")
        assert a == b

    def test_without_rec_idx_keeps_absolute_url(self):
        assert canonicalize_link("/zf_user/jobs/view?id=9") == "https://www.saramin.co.kr/zf_user/jobs/view?id=9"


class TestListingParser:

    def test_parses_valid_items_and_skips_broken(self, sample_page_html):
        listings = list(ListingParser().parse(sample_page_html))
        assert len(listings) == 2
        assert [l.company for l in listings] == ["(주)테스트회사", "에이비씨랩"]

    def test_fields(self, sample_page_html):
        first = next(iter(ListingParser().parse(sample_page_html)))
        assert first.title == "백엔드 개발자 채용 (Python/Django)"
        assert first.link == "https://www.saramin.co.kr/zf_user/jobs/relay/view?rec_idx=48000001"
        assert first.location == "서울 강남구"
        assert first.experience == "경력 3년↑"
        assert first.education == "대학교(4년)↑"
        assert first.employment_type == "정규직"
        assert first.deadline == "~ 12/31(목)"
        assert first.sector == "백엔드/서버개발"
        assert first.salary == "3,000~4,000만원"

    def test_missing_conditions_are_empty(self, sample_page_html):
        second = list(ListingParser().parse(sample_page_html))[1]
        assert second.location == "서울 전체"
        assert second.experience == "신입·경력"
        assert second.education == ""
        assert second.employment_type == ""
        assert second.deadline == "상시채용"
        assert second.salary == ""

    def test_failed_count(self, sample_page_html):
        sequence = ListingParser().parse(sample_page_html)
        assert len(sequence) == 3
        list(sequence)
        assert sequence.failed == 1

    def test_sequence_is_restartable(self, sample_page_html):
        sequence = ListingParser().parse(sample_page_html)
        assert [l.link for l in sequence] == [l.link for l in sequence]

    def test_sequence_is_lazy(self, build_page, build_item):
        sequence = ListingParser().parse(build_page(build_item("1"), build_item("2")))
        iterator = iter(sequence)
        assert next(iterator).link.endswith("rec_idx=1")

    def test_empty_or_unrelated_body(self):
        assert list(ListingParser().parse("")) == []
        assert list(ListingParser().parse("<html><body><p>점검 중</p></body></html>")) == []

    def test_sector_without_links(self, build_page):
        html = build_page('''
        <div class="item_recruit">
            <h2 class="job_tit"><a href="/zf_user/jobs/relay/view?rec_idx=7">데이터 엔지니어</a></h2>
            <div class="job_sector">데이터엔지니어 <span class="job_day">등록일 24/10/01</span></div>
        </div>
        ''')
        listing = next(iter(ListingParser().parse(html)))
        assert listing.sector == "데이터엔지니어"
        assert listing.title == "데이터 엔지니어"
        assert listing.company == ""

    def test_parse_item_raises_without_href(self):
        from bs4 import BeautifulSoup

        item = BeautifulSoup(
            '<div class="item_recruit"><h2 class="job_tit"><a>제목</a></h2></div>', "lxml"
        ).select_one(".item_recruit")
        with pytest.raises(ParseError):
            ListingParser().parse_item(item)
