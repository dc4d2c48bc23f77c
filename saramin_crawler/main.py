"""크롤러 메인 실행 모듈"""

import argparse
import asyncio
from datetime import datetime

from saramin_crawler.config import settings
from saramin_crawler.db import create_store
from saramin_crawler.models import RunReport
from saramin_crawler.scheduler import serve
from saramin_crawler.workers import run_ingestion


async def run_once(keyword: str, pages: int, store_backend: str) -> RunReport:
    """즉시 1회 수집"""
    print("=" * 60)
    print(f"[{datetime.now()}] 수집 시작")
    print(f"키워드: {keyword} / 페이지: {pages} / 저장소: {store_backend}")
    print(f"환경: {settings.ENVIRONMENT}")
    print("=" * 60)

    report = await run_ingestion(keyword, pages, store=create_store(store_backend))
    _print_report(report)
    return report


def _print_report(report: RunReport):
    """실행 결과 출력"""
    print("\n" + "=" * 60)
    print(f"[{datetime.now()}] 작업 완료")
    if report.duration_seconds is not None:
        print(f"소요시간: {report.duration_seconds:.1f}초")
    print(f"페이지: {report.pages_attempted}개 시도, {report.pages_failed}개 실패")
    print(f"공고: {report.records_seen}건 수집")
    print(f"  - 신규: {report.records_inserted}건")
    print(f"  - 기존: {report.records_already_present}건")
    print(f"  - 실패: {report.records_failed}건")
    for scope, key, message in report.errors[:10]:
        print(f"  ! [{scope}] {key}: {message}")
    if len(report.errors) > 10:
        print(f"  ! ... 외 {len(report.errors) - 10}건")
    print("=" * 60)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="사람인 채용공고 수집기")
    parser.add_argument(
        "mode",
        nargs="?",
        choices=["run", "schedule"],
        default="run",
        help="실행 모드 (run: 즉시 1회, schedule: cron 주기 실행)"
    )
    parser.add_argument(
        "--keyword",
        default=settings.CRAWL_KEYWORD,
        help=f"검색 키워드 (기본 {settings.CRAWL_KEYWORD})"
    )
    parser.add_argument(
        "--pages",
        type=int,
        default=settings.CRAWL_PAGES,
        help=f"수집 페이지 수 (기본 {settings.CRAWL_PAGES})"
    )
    parser.add_argument(
        "--store",
        choices=["firestore", "memory"],
        default=settings.STORE_BACKEND,
        help="run 모드 저장소 (memory: 저장 없이 dry-run)"
    )
    parser.add_argument(
        "--cron",
        default=settings.CRAWL_CRON,
        help=f"schedule 모드 cron 표현식 (기본 '{settings.CRAWL_CRON}')"
    )
    return parser


async def main(argv=None):
    """CLI 진입점"""
    args = build_parser().parse_args(argv)

    if args.mode == "run":
        await run_once(args.keyword, args.pages, args.store)
    elif args.mode == "schedule":
        await serve(cron=args.cron, keyword=args.keyword, page_count=args.pages)


def cli():
    asyncio.run(main())


if __name__ == "__main__":
    cli()
