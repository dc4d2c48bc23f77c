"""
수집 실행 오케스트레이터

페이지 루프(요청 → 파싱)를 돌고, 모은 공고를 한 건씩
정규화 → 참조 엔티티 해석 → 저장 순으로 처리한다.
페이지/레코드 단위 실패는 기록만 하고 다음 단위로 넘어간다.
"""

from enum import Enum
from typing import List, Optional, Protocol

from saramin_crawler.config import settings
from saramin_crawler.core.fetcher import PageFetcher
from saramin_crawler.db import JobStore, create_store
from saramin_crawler.exceptions import CrawlerError, FetchError
from saramin_crawler.logging_config import get_logger, log_timing
from saramin_crawler.models import RawListing, RunReport, UpsertOutcome, utcnow
from saramin_crawler.normalizers import DateNormalizer, SkillExtractor, normalize_listing
from saramin_crawler.parsers import ListingParser
from .resolver import EntityResolver
from .upserter import IngestionUpserter, build_job_fields

logger = get_logger("crawler.run")


class RunState(Enum):
    """실행 상태"""
    IDLE = "idle"
    FETCHING_PAGE = "fetching_page"
    PARSING_PAGE = "parsing_page"
    ALL_PAGES_DONE = "all_pages_done"
    NORMALIZING_RECORD = "normalizing_record"
    RESOLVING_ENTITIES = "resolving_entities"
    UPSERTING = "upserting"
    RUN_COMPLETE = "run_complete"


class RunObserver(Protocol):
    """실행 이벤트 수신자 (전역 메트릭 대신 주입)"""

    def on_state(self, state: RunState, index: Optional[int]) -> None: ...

    def on_page_done(self, page: int, listings: int) -> None: ...

    def on_page_failed(self, page: int, error: BaseException) -> None: ...

    def on_record_done(self, link: str, outcome: UpsertOutcome) -> None: ...

    def on_record_failed(self, link: str, error: BaseException) -> None: ...

    def on_run_complete(self, report: RunReport) -> None: ...


class LoggingObserver:
    """기본 관찰자: 이벤트를 로그로 남긴다"""

    def on_state(self, state: RunState, index: Optional[int]) -> None:
        logger.debug(f"[STATE] {state.value}" + (f" ({index})" if index is not None else ""))

    def on_page_done(self, page: int, listings: int) -> None:
        logger.info(f"{page}페이지 크롤링 완료: {listings}건")

    def on_page_failed(self, page: int, error: BaseException) -> None:
        logger.error(f"{page}페이지 포기: {error}")

    def on_record_done(self, link: str, outcome: UpsertOutcome) -> None:
        pass

    def on_record_failed(self, link: str, error: BaseException) -> None:
        logger.error(f"공고 처리 실패 ({link}): {type(error).__name__} {error}")

    def on_run_complete(self, report: RunReport) -> None:
        summary = ", ".join(f"{k}={v}" for k, v in report.summary().items())
        logger.info(f"[RUN] 완료 keyword={report.keyword!r} {summary}")


class CrawlOrchestrator:
    """수집 1회 실행 (fetch → parse → normalize → resolve → upsert)"""

    def __init__(
        self,
        fetcher: PageFetcher,
        store: JobStore,
        parser: Optional[ListingParser] = None,
        date_normalizer: Optional[DateNormalizer] = None,
        skill_extractor: Optional[SkillExtractor] = None,
        observer: Optional[RunObserver] = None,
    ):
        self.fetcher = fetcher
        self.parser = parser or ListingParser()
        self.date_normalizer = date_normalizer or DateNormalizer()
        self.skill_extractor = skill_extractor or SkillExtractor()
        self.resolver = EntityResolver(store)
        self.upserter = IngestionUpserter(store)
        self.observer: RunObserver = observer or LoggingObserver()
        self.state = RunState.IDLE

    def _transition(self, state: RunState, index: Optional[int] = None):
        self.state = state
        self.observer.on_state(state, index)

    async def run(self, keyword: str, page_count: int) -> RunReport:
        """
        수집 실행

        Args:
            keyword: 검색 키워드
            page_count: 수집할 페이지 수 (1..page_count)

        Returns:
            RunReport: 부분 성공도 정상 종료로 본다
        """
        report = RunReport(keyword=keyword, page_count=page_count, started_at=utcnow())
        logger.info(f"[RUN] 시작 keyword={keyword!r} pages={page_count}")

        with log_timing("목록 수집", logger):
            listings = await self._collect_pages(keyword, page_count, report)
        self._transition(RunState.ALL_PAGES_DONE)
        logger.info(f"총 {len(listings)}개의 채용 공고 수집")

        with log_timing("공고 저장", logger):
            for index, raw in enumerate(listings):
                await self._ingest(index, raw, report)

        report.finished_at = utcnow()
        self._transition(RunState.RUN_COMPLETE)
        self.observer.on_run_complete(report)
        return report

    async def _collect_pages(self, keyword: str, page_count: int, report: RunReport) -> List[RawListing]:
        """페이지를 순서대로 요청/파싱 (페이지 간 병렬 없음)"""
        listings: List[RawListing] = []

        for page in range(1, page_count + 1):
            report.pages_attempted += 1
            self._transition(RunState.FETCHING_PAGE, page)

            try:
                body = await self.fetcher.fetch_search_page(keyword, page)
            except FetchError as e:
                report.pages_failed += 1
                report.record_error("page", str(page), e)
                self.observer.on_page_failed(page, e)
                continue

            self._transition(RunState.PARSING_PAGE, page)
            try:
                page_listings = list(self.parser.parse(body, page=page))
            except Exception as e:
                report.pages_failed += 1
                report.record_error("page", str(page), e)
                self.observer.on_page_failed(page, e)
                continue

            listings.extend(page_listings)
            self.observer.on_page_done(page, len(page_listings))

        return listings

    async def _ingest(self, index: int, raw: RawListing, report: RunReport):
        """공고 1건 처리; 실패는 이 레코드로 한정"""
        report.records_seen += 1
        link = raw.link or f"#{index}"

        try:
            self._transition(RunState.NORMALIZING_RECORD, index)
            listing = normalize_listing(raw, self.date_normalizer, self.skill_extractor)

            self._transition(RunState.RESOLVING_ENTITIES, index)
            company = await self.resolver.resolve_company(listing.company, location=listing.location)
            category = await self.resolver.resolve_category(listing.sector) if listing.sector else None
            skills = await self.resolver.resolve_skills(listing.skills)

            self._transition(RunState.UPSERTING, index)
            outcome = await self.upserter.upsert(
                listing.link, build_job_fields(listing, company, category, skills)
            )
        except CrawlerError as e:
            report.records_failed += 1
            report.record_error("record", link, e)
            self.observer.on_record_failed(link, e)
            return
        except Exception as e:
            logger.exception(f"예상하지 못한 에러 ({link})")
            report.records_failed += 1
            report.record_error("record", link, e)
            self.observer.on_record_failed(link, e)
            return

        if outcome is UpsertOutcome.INSERTED:
            report.records_inserted += 1
        else:
            report.records_already_present += 1
        self.observer.on_record_done(link, outcome)


async def run_ingestion(
    keyword: Optional[str] = None,
    page_count: Optional[int] = None,
    store: Optional[JobStore] = None,
    fetcher: Optional[PageFetcher] = None,
    observer: Optional[RunObserver] = None,
) -> RunReport:
    """
    스케줄러/CLI 진입점: 설정으로 구성요소를 만들어 1회 실행

    Args:
        keyword: 검색 키워드 (기본 settings.CRAWL_KEYWORD)
        page_count: 페이지 수 (기본 settings.CRAWL_PAGES)
        store: 저장소 (기본 settings.STORE_BACKEND)
        fetcher: 페이지 요청기 (기본 settings 기반 새 클라이언트)
        observer: 실행 이벤트 수신자
    """
    keyword = keyword or settings.CRAWL_KEYWORD
    page_count = settings.CRAWL_PAGES if page_count is None else page_count
    store = store or create_store(settings.STORE_BACKEND)
    owns_fetcher = fetcher is None
    fetcher = fetcher or PageFetcher()

    try:
        orchestrator = CrawlOrchestrator(fetcher, store, observer=observer)
        report = await orchestrator.run(keyword, page_count)
    finally:
        if owns_fetcher:
            await fetcher.close()

    try:
        await store.save_run_report(report.to_dict())
    except Exception as e:
        logger.warning(f"[RUN] 크롤링 로그 저장 실패: {e}")

    return report
