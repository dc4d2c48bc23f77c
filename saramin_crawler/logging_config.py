"""크롤러 로깅 설정 모듈"""

import logging
import sys
import time
from contextlib import contextmanager
from typing import Any, Dict, Optional

from saramin_crawler.config import settings


# 로거 이름 상수
LOGGER_NAME = "crawler"

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
    name: str = LOGGER_NAME,
    level: Optional[int] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    크롤러 로거 설정

    Args:
        name: 로거 이름
        level: 로그 레벨 (None이면 settings.LOG_LEVEL 사용)
        log_file: 파일 출력 경로 (None이면 settings.LOG_FILE 사용)

    Returns:
        설정된 로거
    """
    logger = logging.getLogger(name)

    # 이미 핸들러가 설정되어 있으면 스킵
    if logger.handlers:
        return logger

    # 로그 레벨 결정 (환경변수 우선)
    if level is None:
        level_name = getattr(settings, "LOG_LEVEL", "INFO").upper()
        level = getattr(logging, level_name, logging.INFO)
    logger.setLevel(level)

    if log_file is None:
        log_file = getattr(settings, "LOG_FILE", None)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    # 콘솔 핸들러
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # 파일 핸들러 (옵션)
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    로거 인스턴스 반환

    "crawler.*" 하위 로거는 핸들러 없이 상위 "crawler" 로거로 전파된다.
    """
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        setup_logger(LOGGER_NAME)
        return logging.getLogger(name)
    logger = logging.getLogger(name)
    if not logger.handlers:
        return setup_logger(name)
    return logger


@contextmanager
def log_timing(operation: str, logger: Optional[logging.Logger] = None):
    """
    컨텍스트 매니저로 구간 소요시간 측정

    Usage:
        with log_timing("페이지 파싱"):
            soup = BeautifulSoup(html, "lxml")
    """
    _logger = logger or get_logger()
    start_time = time.perf_counter()
    _logger.debug(f"[START] {operation}")

    try:
        yield
    finally:
        elapsed = time.perf_counter() - start_time
        _logger.debug(f"[END] {operation} ({elapsed:.2f}s)")


# ========== HTTP 로깅 ==========

def log_http_request(
    logger: logging.Logger,
    method: str,
    url: str,
    params: Optional[Dict] = None,
    attempt: int = 1,
):
    """HTTP 요청 로깅"""
    params_str = f" params={params}" if params else ""
    logger.debug(f"[HTTP] {method} {url}{params_str} (attempt {attempt})")


def log_http_response(
    logger: logging.Logger,
    url: str,
    status_code: int,
    content_length: int,
    elapsed_ms: float,
):
    """HTTP 응답 로깅"""
    level = logging.DEBUG if 200 <= status_code < 300 else logging.WARNING
    logger.log(level, f"[HTTP] <- {status_code} {url} ({content_length} bytes, {elapsed_ms:.0f}ms)")


def log_http_error(
    logger: logging.Logger,
    url: str,
    error: Any,
    attempt: int,
    max_attempts: int,
):
    """HTTP 에러 로깅"""
    logger.warning(f"[HTTP] ERROR {url}: {error} (attempt {attempt}/{max_attempts})")


# ========== 파싱 로깅 ==========

def log_parse_result(
    logger: logging.Logger,
    key: str,
    fields: Dict[str, Any],
    sample_fields: Optional[list] = None,
):
    """
    파싱 결과 샘플 로깅

    Args:
        logger: 로거
        key: 공고 식별자 (링크)
        fields: 파싱된 필드 딕셔너리
        sample_fields: 출력할 필드 목록 (None이면 기본값)
    """
    if sample_fields is None:
        sample_fields = ["title", "company", "deadline", "sector", "salary"]

    sample = {k: _truncate(fields.get(k, ""), 50) for k in sample_fields if k in fields}
    logger.debug(f"[PARSE] {_truncate(key, 80)}: {sample}")


def log_parse_summary(
    logger: logging.Logger,
    total_items: int,
    parsed_count: int,
    failed_count: int,
    page: Optional[int] = None,
):
    """페이지 파싱 요약 로깅"""
    success_rate = (parsed_count / total_items * 100) if total_items > 0 else 0
    where = f"페이지 {page}" if page is not None else "문서"
    logger.info(
        f"[PARSE] {where}: {total_items}개 중 {parsed_count}개 성공 "
        f"({success_rate:.1f}%), 실패 {failed_count}개"
    )


# ========== 유틸리티 ==========

def _truncate(text: Any, max_len: int) -> str:
    """텍스트 길이 제한"""
    text = str(text)
    if len(text) <= max_len:
        return text
    return text[:max_len - 3] + "..."
