"""RawListing 정규화 테스트"""

from datetime import date

import pytest

from saramin_crawler.exceptions import InvalidListingError
from saramin_crawler.models import RawListing
from saramin_crawler.normalizers import SkillExtractor, normalize_listing


def raw(**overrides) -> RawListing:
    data = dict(
        company=" Acme ",
        title="Backend Node.js Engineer",
        link="https://www.saramin.co.kr/zf_user/jobs/relay/view?rec_idx=1",
        location="서울 강남구",
        deadline="2024.12.31",
        sector="백엔드/서버개발",
    )
    data.update(overrides)
    return RawListing(**data)


class TestNormalizeListing:

    def test_normalizes_deadline_and_skills(self, date_normalizer):
        listing = normalize_listing(raw(), date_normalizer, SkillExtractor())
        assert listing.company == "Acme"
        assert listing.deadline.date() == date(2024, 12, 31)
        assert listing.deadline_raw == "2024.12.31"
        assert listing.skills == frozenset({"Node.js"})

    def test_always_hiring_has_no_deadline(self, date_normalizer):
        listing = normalize_listing(raw(deadline="상시채용"), date_normalizer, SkillExtractor())
        assert listing.deadline is None

    def test_unknown_deadline_does_not_fail_listing(self, date_normalizer):
        listing = normalize_listing(raw(deadline="수시"), date_normalizer, SkillExtractor())
        assert listing.deadline is None
        assert listing.deadline_raw == "수시"

    def test_optional_fields_default_to_empty(self, date_normalizer):
        listing = normalize_listing(raw(salary=None, education=None), date_normalizer, SkillExtractor())
        assert listing.salary == ""
        assert listing.education == ""

    @pytest.mark.parametrize("field", ["link", "title", "company"])
    def test_missing_required_field(self, date_normalizer, field):
        with pytest.raises(InvalidListingError):
            normalize_listing(raw(**{field: ""}), date_normalizer, SkillExtractor())
