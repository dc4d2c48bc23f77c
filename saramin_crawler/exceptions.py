"""크롤러 커스텀 예외 모듈

모든 예외는 건너뛸 수 있는 가장 작은 단위(항목, 페이지, 레코드)에서 처리된다.
"""

from typing import Optional


class CrawlerError(Exception):
    """크롤러 기본 예외"""
    pass


class FetchError(CrawlerError):
    """페이지 요청 실패 (재시도 소진)"""

    def __init__(
        self,
        url: str,
        attempts: int,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        self.url = url
        self.attempts = attempts
        self.status_code = status_code
        self.cause = cause
        reason = f"HTTP {status_code}" if status_code is not None else repr(cause)
        super().__init__(f"{url} 요청 실패 ({attempts}회 시도): {reason}")


class ParseError(CrawlerError):
    """파싱 실패 예외 (목록 항목 단위)"""
    pass


class DateFormatError(CrawlerError):
    """인식할 수 없는 마감일 토큰"""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"인식할 수 없는 날짜 형식: {token!r}")


class InvalidListingError(CrawlerError):
    """저장에 필요한 필드(링크, 제목, 회사명)가 없는 공고"""
    pass


class StoreError(CrawlerError):
    """저장소 예외"""
    pass


class DuplicateKeyError(StoreError):
    """고유 키 충돌 (동시 생성 경합에서 정상적으로 발생)"""

    def __init__(self, collection: str, key: str):
        self.collection = collection
        self.key = key
        super().__init__(f"{collection}: 중복 키 {key!r}")


class ResolutionError(CrawlerError):
    """회사/카테고리/기술 참조 엔티티 해석 실패"""
    pass


class UpsertError(CrawlerError):
    """채용공고 저장 실패"""
    pass
