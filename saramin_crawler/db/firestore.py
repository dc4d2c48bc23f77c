"""Firestore 데이터베이스 모듈

고유 키(이름, 링크)의 해시를 문서 ID로 사용한다.
DocumentReference.create()는 문서가 이미 있으면 AlreadyExists로 실패하므로
"없으면 삽입"이 단일 원자 연산이 된다.
"""

import asyncio
import hashlib
from datetime import datetime
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

from google.api_core.exceptions import AlreadyExists, GoogleAPICallError
from google.cloud import firestore
from google.oauth2 import service_account

from saramin_crawler.config import settings
from saramin_crawler.exceptions import DuplicateKeyError, StoreError
from saramin_crawler.models import CRAWL_LOGS, EntityRef, UpsertOutcome, utcnow

# Firestore 클라이언트 (lazy initialization)
_db: Optional[firestore.Client] = None


def get_db() -> firestore.Client:
    """Firestore 클라이언트 반환 (싱글톤)"""
    global _db
    if _db is None:
        credentials_path = settings.GOOGLE_APPLICATION_CREDENTIALS
        project = settings.GOOGLE_CLOUD_PROJECT or None
        if credentials_path:
            credentials = service_account.Credentials.from_service_account_file(
                credentials_path
            )
            if not project:
                project = getattr(credentials, "project_id", None)
            if project:
                _db = firestore.Client(
                    project=project,
                    credentials=credentials
                )
            else:
                _db = firestore.Client(credentials=credentials)
        else:
            if project:
                _db = firestore.Client(project=project)
            else:
                _db = firestore.Client()
    return _db


def doc_id_for(key: str) -> str:
    """고유 키 -> 문서 ID ("/" 등 문서 ID 금지 문자 회피)"""
    return hashlib.sha1(key.encode("utf-8")).hexdigest()


class FirestoreStore:
    """Firestore 기반 JobStore 구현"""

    def __init__(self, client: Optional[firestore.Client] = None):
        self._client = client

    @property
    def db(self) -> firestore.Client:
        return self._client or get_db()

    def _doc(self, collection: str, key: str):
        return self.db.collection(collection).document(doc_id_for(key))

    async def find_by_name(self, collection: str, name: str) -> Optional[EntityRef]:
        doc_ref = self._doc(collection, name)
        try:
            snapshot = await asyncio.to_thread(doc_ref.get)
        except GoogleAPICallError as e:
            raise StoreError(f"{collection} 조회 실패 ({name}): {e}") from e

        if not snapshot.exists:
            return None
        data = snapshot.to_dict() or {}
        return EntityRef(collection=collection, id=snapshot.id, name=data.get("name", name))

    async def create_if_absent(
        self, collection: str, name: str, fields: Dict[str, Any]
    ) -> EntityRef:
        doc_ref = self._doc(collection, name)
        data = {**fields, "name": name}
        data.setdefault("created_at", utcnow())

        try:
            await asyncio.to_thread(doc_ref.create, data)
        except AlreadyExists as e:
            raise DuplicateKeyError(collection, name) from e
        except GoogleAPICallError as e:
            raise StoreError(f"{collection} 생성 실패 ({name}): {e}") from e

        return EntityRef(collection=collection, id=doc_ref.id, name=name)

    async def upsert_by_key(
        self, collection: str, key: str, fields: Dict[str, Any]
    ) -> UpsertOutcome:
        doc_ref = self._doc(collection, key)
        data = {**fields, "link": key}

        try:
            await asyncio.to_thread(doc_ref.create, data)
        except AlreadyExists:
            return UpsertOutcome.ALREADY_EXISTS
        except GoogleAPICallError as e:
            raise StoreError(f"{collection} 저장 실패 ({key}): {e}") from e

        return UpsertOutcome.INSERTED

    async def save_run_report(self, report: Dict[str, Any]) -> None:
        """
        크롤링 로그 저장

        TIMEZONE 기준 날짜별 문서 1개에 마지막 실행 결과와 실행 횟수를 누적한다.
        """
        today = datetime.now(ZoneInfo(settings.TIMEZONE)).strftime("%Y-%m-%d")
        doc_ref = self.db.collection(CRAWL_LOGS).document(today)
        await asyncio.to_thread(
            doc_ref.set,
            {
                "id": today,
                "last_run": report,
                "run_count": firestore.Increment(1),
                "updated_at": utcnow(),
            },
            merge=True,
        )
