"""참조 엔티티(회사/카테고리/기술) get-or-create 해석기"""

from typing import Any, Dict, Iterable, List

from saramin_crawler.db.base import JobStore
from saramin_crawler.exceptions import DuplicateKeyError, ResolutionError
from saramin_crawler.logging_config import get_logger
from saramin_crawler.models import CATEGORIES, COMPANIES, SKILLS, EntityRef

logger = get_logger("crawler.resolve")


class EntityResolver:
    """
    이름 기준 get-or-create

    조회 → 없으면 생성 → 생성이 중복 키로 실패하면(다른 실행이 먼저 생성) 재조회.
    잠금 없이 저장소 고유 키 제약만으로 중복 생성을 막는다.
    """

    def __init__(self, store: JobStore):
        self.store = store

    async def resolve_company(self, name: str, **fields: Any) -> EntityRef:
        """
        회사 해석

        Args:
            name: 회사명 (대소문자 구분 정확 일치)
            fields: 최초 생성 시에만 쓰이는 속성 (location 등)
        """
        defaults = {"website": "", "location": "", "industry": "", "description": ""}
        defaults.update({k: v for k, v in fields.items() if v is not None})
        return await self._resolve(COMPANIES, name, defaults)

    async def resolve_category(self, name: str) -> EntityRef:
        return await self._resolve(CATEGORIES, name, {"description": ""})

    async def resolve_skill(self, name: str) -> EntityRef:
        return await self._resolve(SKILLS, name, {"description": ""})

    async def resolve_skills(self, names: Iterable[str]) -> List[EntityRef]:
        """기술 목록 해석 (이름 순)"""
        return [await self.resolve_skill(name) for name in sorted(set(names))]

    async def _resolve(self, collection: str, name: str, fields: Dict[str, Any]) -> EntityRef:
        if not name or not name.strip():
            raise ResolutionError(f"{collection}: 빈 이름")

        try:
            found = await self.store.find_by_name(collection, name)
            if found is not None:
                return found

            try:
                created = await self.store.create_if_absent(collection, name, fields)
                logger.info(f"[RESOLVE] {collection} 생성: {name}")
                return created
            except DuplicateKeyError:
                logger.debug(f"[RESOLVE] {collection} 동시 생성 감지, 재조회: {name}")

            existing = await self.store.find_by_name(collection, name)
        except Exception as e:
            raise ResolutionError(f"{collection} 해석 실패 ({name}): {e}") from e

        if existing is None:
            raise ResolutionError(f"{collection}: 중복 키 이후 재조회 실패 ({name})")
        return existing
