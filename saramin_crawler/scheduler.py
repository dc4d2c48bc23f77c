"""주기 실행 스케줄러 (cron 표현식)"""

import asyncio
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from saramin_crawler.config import settings
from saramin_crawler.logging_config import get_logger
from saramin_crawler.workers import run_ingestion

logger = get_logger("crawler.scheduler")

JOB_ID = "ingestion"


async def scheduled_ingestion(keyword: str, page_count: int):
    """스케줄 트리거: 결과는 로그로만 남긴다"""
    try:
        await run_ingestion(keyword, page_count)
    except Exception:
        logger.exception("예약 실행 실패")


def build_scheduler(
    cron: Optional[str] = None,
    keyword: Optional[str] = None,
    page_count: Optional[int] = None,
    timezone: Optional[str] = None,
) -> AsyncIOScheduler:
    """
    수집 작업이 등록된 스케줄러 생성 (시작은 호출자가)

    느린 실행이 다음 주기와 겹칠 수 있다 (저장이 멱등이므로 안전).
    """
    tz = timezone or settings.TIMEZONE
    trigger = CronTrigger.from_crontab(cron or settings.CRAWL_CRON, timezone=tz)

    scheduler = AsyncIOScheduler(timezone=tz)
    scheduler.add_job(
        scheduled_ingestion,
        trigger,
        id=JOB_ID,
        kwargs={
            "keyword": keyword or settings.CRAWL_KEYWORD,
            "page_count": settings.CRAWL_PAGES if page_count is None else page_count,
        },
        coalesce=True,
        max_instances=2,
        replace_existing=True,
    )
    return scheduler


async def serve(
    cron: Optional[str] = None,
    keyword: Optional[str] = None,
    page_count: Optional[int] = None,
):
    """스케줄러 시작 후 종료될 때까지 대기"""
    scheduler = build_scheduler(cron, keyword, page_count)
    scheduler.start()
    logger.info(f"스케줄러 시작: cron={cron or settings.CRAWL_CRON!r} ({settings.TIMEZONE})")

    try:
        await asyncio.Event().wait()
    finally:
        scheduler.shutdown(wait=False)
