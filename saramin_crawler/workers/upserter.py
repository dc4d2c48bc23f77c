"""채용공고 저장 (링크 기준 insert-if-absent)"""

from typing import Any, Dict, List, Optional

from saramin_crawler.db.base import JobStore
from saramin_crawler.exceptions import DuplicateKeyError, UpsertError
from saramin_crawler.logging_config import get_logger
from saramin_crawler.models import JOBS, EntityRef, NormalizedListing, UpsertOutcome, utcnow

logger = get_logger("crawler.upsert")


def build_job_fields(
    listing: NormalizedListing,
    company: EntityRef,
    category: Optional[EntityRef],
    skills: List[EntityRef],
) -> Dict[str, Any]:
    """정규화된 공고 + 참조 엔티티 -> 저장용 레코드"""
    return {
        "title": listing.title,
        "company": company.id,
        "location": listing.location,
        "experience": listing.experience,
        "education": listing.education,
        "employment_type": listing.employment_type,
        "deadline": listing.deadline,
        "sector": category.id if category else None,
        "skills": [skill.id for skill in skills],
        "salary": listing.salary,
        "link": listing.link,
    }


class IngestionUpserter:
    """
    링크 기준 멱등 저장

    이미 같은 링크가 있으면 어떤 필드도 갱신하지 않는다 (views 포함).
    """

    def __init__(self, store: JobStore):
        self.store = store

    async def upsert(self, link: str, fields: Dict[str, Any]) -> UpsertOutcome:
        """
        Returns:
            UpsertOutcome.INSERTED 또는 UpsertOutcome.ALREADY_EXISTS

        Raises:
            UpsertError: 중복 키 이외의 저장소 실패
        """
        record = {**fields, "link": link, "views": 0, "created_at": utcnow()}

        try:
            outcome = await self.store.upsert_by_key(JOBS, link, record)
        except DuplicateKeyError:
            outcome = UpsertOutcome.ALREADY_EXISTS
        except Exception as e:
            raise UpsertError(f"채용공고 저장 실패 ({link}): {e}") from e

        if outcome is UpsertOutcome.INSERTED:
            logger.info(f"[UPSERT] 신규 저장: {fields.get('title', '')} ({link})")
        else:
            logger.debug(f"[UPSERT] 이미 존재: {link}")
        return outcome
