"""인메모리 저장소 (dry-run, 테스트용)

이벤트 루프 안에서 확인과 삽입 사이에 await가 없으므로
Firestore create()와 같은 "없으면 삽입" 원자성을 갖는다.
조회는 실제 저장소처럼 한 번 양보하여 동시 실행 경합이 드러나게 한다.
"""

import asyncio
import itertools
from typing import Any, Dict, List, Optional

from saramin_crawler.exceptions import DuplicateKeyError
from saramin_crawler.models import EntityRef, UpsertOutcome, utcnow


class InMemoryStore:
    """딕셔너리 기반 JobStore 구현"""

    def __init__(self):
        self.collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.run_reports: List[Dict[str, Any]] = []
        self._ids = itertools.count(1)

    def _collection(self, name: str) -> Dict[str, Dict[str, Any]]:
        return self.collections.setdefault(name, {})

    def get(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        return self._collection(collection).get(key)

    def count(self, collection: str) -> int:
        return len(self._collection(collection))

    async def find_by_name(self, collection: str, name: str) -> Optional[EntityRef]:
        record = self._collection(collection).get(name)
        await asyncio.sleep(0)
        if record is None:
            return None
        return EntityRef(collection=collection, id=record["id"], name=record["name"])

    async def create_if_absent(
        self, collection: str, name: str, fields: Dict[str, Any]
    ) -> EntityRef:
        records = self._collection(collection)
        if name in records:
            raise DuplicateKeyError(collection, name)

        record = {**fields, "id": f"{collection}-{next(self._ids)}", "name": name}
        record.setdefault("created_at", utcnow())
        records[name] = record
        return EntityRef(collection=collection, id=record["id"], name=name)

    async def upsert_by_key(
        self, collection: str, key: str, fields: Dict[str, Any]
    ) -> UpsertOutcome:
        records = self._collection(collection)
        if key in records:
            return UpsertOutcome.ALREADY_EXISTS

        records[key] = {**fields, "id": f"{collection}-{next(self._ids)}", "link": key}
        return UpsertOutcome.INSERTED

    async def save_run_report(self, report: Dict[str, Any]) -> None:
        self.run_reports.append(report)
