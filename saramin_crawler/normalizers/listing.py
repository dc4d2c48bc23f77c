"""RawListing -> NormalizedListing 변환"""

from typing import Optional

from saramin_crawler.exceptions import InvalidListingError
from saramin_crawler.models import NormalizedListing, RawListing
from .deadline import DateNormalizer
from .skills import SkillExtractor


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def normalize_listing(
    raw: RawListing,
    date_normalizer: DateNormalizer,
    skill_extractor: SkillExtractor,
) -> NormalizedListing:
    """
    공고 정규화 (마감일 파싱 + 제목 기술 추출)

    Raises:
        InvalidListingError: 링크/제목/회사명 중 하나라도 비어 있을 때
    """
    link = _clean(raw.link)
    title = _clean(raw.title)
    company = _clean(raw.company)

    missing = [name for name, value in (("link", link), ("title", title), ("company", company)) if not value]
    if missing:
        raise InvalidListingError(f"필수 필드 누락: {', '.join(missing)}")

    deadline_raw = _clean(raw.deadline)

    return NormalizedListing(
        company=company,
        title=title,
        link=link,
        location=_clean(raw.location),
        experience=_clean(raw.experience),
        education=_clean(raw.education),
        employment_type=_clean(raw.employment_type),
        deadline=date_normalizer.normalize(deadline_raw),
        deadline_raw=deadline_raw,
        sector=_clean(raw.sector),
        salary=_clean(raw.salary),
        skills=skill_extractor.extract(title),
    )
