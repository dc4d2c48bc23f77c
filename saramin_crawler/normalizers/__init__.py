"""
Normalizers 패키지

채용공고 데이터 정규화를 위한 모듈 모음

Modules:
    - deadline: 마감일 토큰 -> 절대 시각
    - skills: 제목 기반 기술 추출
    - listing: RawListing -> NormalizedListing
"""

from .deadline import DateNormalizer
from .skills import (
    SkillExtractor,
    DEFAULT_SKILL_VOCABULARY,
)
from .listing import normalize_listing


__all__ = [
    # deadline
    "DateNormalizer",
    # skills
    "SkillExtractor",
    "DEFAULT_SKILL_VOCABULARY",
    # listing
    "normalize_listing",
]
