"""수집 파이프라인 데이터 모델"""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple


# 저장소 컬렉션 이름
COMPANIES = "companies"
CATEGORIES = "categories"
SKILLS = "skills"
JOBS = "jobs"
CRAWL_LOGS = "crawl_logs"


@dataclass
class RawListing:
    """검색 결과 페이지의 공고 1건 (정규화 전, 모두 문자열)"""
    company: Optional[str] = None
    title: Optional[str] = None
    link: Optional[str] = None
    location: Optional[str] = None
    experience: Optional[str] = None
    education: Optional[str] = None
    employment_type: Optional[str] = None
    deadline: Optional[str] = None
    sector: Optional[str] = None
    salary: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class NormalizedListing:
    """마감일/기술 정규화를 마친 공고"""
    company: str
    title: str
    link: str
    location: str = ""
    experience: str = ""
    education: str = ""
    employment_type: str = ""
    deadline: Optional[datetime] = None  # None = 마감일 없음 (상시채용)
    deadline_raw: str = ""
    sector: str = ""
    salary: str = ""
    skills: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class EntityRef:
    """참조 엔티티(회사/카테고리/기술) 참조"""
    collection: str
    id: str
    name: str


class UpsertOutcome(Enum):
    """채용공고 저장 결과"""
    INSERTED = "inserted"
    ALREADY_EXISTS = "already_exists"


@dataclass
class RunReport:
    """수집 1회 실행 결과 카운터"""
    keyword: str = ""
    page_count: int = 0
    pages_attempted: int = 0
    pages_failed: int = 0
    records_seen: int = 0
    records_inserted: int = 0
    records_already_present: int = 0
    records_failed: int = 0
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    errors: List[Tuple[str, str, str]] = field(default_factory=list)

    def record_error(self, scope: str, key: str, error: BaseException):
        """(범위, 키, 메시지) 형태로 에러 기록"""
        self.errors.append((scope, key, f"{type(error).__name__}: {error}"))

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.started_at and self.finished_at:
            return (self.finished_at - self.started_at).total_seconds()
        return None

    def summary(self) -> dict:
        return {
            "pages_attempted": self.pages_attempted,
            "pages_failed": self.pages_failed,
            "records_seen": self.records_seen,
            "records_inserted": self.records_inserted,
            "records_already_present": self.records_already_present,
            "records_failed": self.records_failed,
        }

    def to_dict(self) -> dict:
        """크롤링 로그 저장용 딕셔너리"""
        return {
            "keyword": self.keyword,
            "page_count": self.page_count,
            **self.summary(),
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "duration_seconds": self.duration_seconds,
            "errors": [
                {"scope": scope, "key": key, "message": message}
                for scope, key, message in self.errors
            ],
        }


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
