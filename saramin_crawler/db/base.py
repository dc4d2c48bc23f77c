"""저장소 인터페이스

파이프라인이 요구하는 연산은 고유 키 조회와 "없으면 삽입" 두 가지뿐이다.
동시성 안전성은 모두 저장소의 고유 키 제약에 맡긴다.
"""

from typing import Any, Dict, Optional, Protocol

from saramin_crawler.models import EntityRef, UpsertOutcome


class JobStore(Protocol):
    """수집 파이프라인용 저장소 프로토콜"""

    async def find_by_name(self, collection: str, name: str) -> Optional[EntityRef]:
        """이름(고유 키)으로 엔티티 조회"""
        ...

    async def create_if_absent(
        self, collection: str, name: str, fields: Dict[str, Any]
    ) -> EntityRef:
        """
        엔티티 생성

        Raises:
            DuplicateKeyError: 같은 이름이 이미 존재 (동시 생성 경합 포함)
            StoreError: 그 밖의 저장소 실패
        """
        ...

    async def upsert_by_key(
        self, collection: str, key: str, fields: Dict[str, Any]
    ) -> UpsertOutcome:
        """키가 없을 때만 전체 레코드 삽입, 있으면 아무 필드도 바꾸지 않음"""
        ...

    async def save_run_report(self, report: Dict[str, Any]) -> None:
        """실행 결과 기록"""
        ...
