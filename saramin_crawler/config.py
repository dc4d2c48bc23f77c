from pydantic_settings import BaseSettings
from typing import Dict, List, Optional


class Settings(BaseSettings):
    # GCP
    GOOGLE_CLOUD_PROJECT: str = ""
    GOOGLE_APPLICATION_CREDENTIALS: Optional[str] = None

    # 저장소 (firestore | memory)
    STORE_BACKEND: str = "firestore"

    # Crawler Settings
    CRAWL_KEYWORD: str = "백엔드"
    CRAWL_PAGES: int = 5
    CRAWL_DELAY_MS: int = 1000  # 요청 간 최소 간격 (하한선)
    CRAWL_MAX_RETRIES: int = 3
    CRAWL_RETRY_BACKOFF: float = 2.0
    CRAWL_TIMEOUT_SECONDS: float = 30.0

    # Schedule
    CRAWL_CRON: str = "0 2 * * *"  # 매일 02:00
    TIMEZONE: str = "Asia/Seoul"

    # 제목 기반 기술 추출 어휘 (비어 있으면 기본값)
    SKILL_VOCABULARY: List[str] = []

    # Environment
    ENVIRONMENT: str = "development"

    # Logging
    LOG_LEVEL: str = "INFO"  # DEBUG, INFO, WARNING, ERROR
    LOG_FILE: Optional[str] = None  # 파일 로깅 경로 (None이면 콘솔만)

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()


# ========== 크롤러 상수 (중앙화) ==========

class CrawlerConfig:
    """크롤러 관련 상수 중앙 관리"""

    # URLs
    BASE_URL = "https://www.saramin.co.kr"
    SEARCH_PATH = "/zf_user/search/recruit"
    RELAY_VIEW_PATH = "/zf_user/jobs/relay/view"

    # HTTP Headers
    USER_AGENT = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    DEFAULT_HEADERS: Dict[str, str] = {
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "ko-KR,ko;q=0.9",
    }

    # 목록 항목 셀렉터
    ITEM_SELECTOR = ".item_recruit"
    COMPANY_SELECTOR = ".corp_name a"
    TITLE_SELECTOR = ".job_tit a"
    CONDITION_SELECTOR = ".job_condition span"
    DEADLINE_SELECTOR = ".job_date .date"
    SECTOR_SELECTOR = ".job_sector"
    SALARY_SELECTOR = ".area_badge .badge"

    @classmethod
    def get_search_url(cls) -> str:
        return f"{cls.BASE_URL}{cls.SEARCH_PATH}"

    @classmethod
    def get_relay_view_url(cls, rec_idx: str) -> str:
        return f"{cls.BASE_URL}{cls.RELAY_VIEW_PATH}?rec_idx={rec_idx}"

    @classmethod
    def search_params(cls, keyword: str, page: int) -> Dict[str, str]:
        """검색 결과 페이지 쿼리 파라미터"""
        return {
            "searchType": "search",
            "searchword": keyword,
            "recruitPage": str(page),
        }
