"""채용공고 저장 테스트"""

import asyncio
from datetime import datetime

import pytest

from saramin_crawler.exceptions import DuplicateKeyError, StoreError, UpsertError
from saramin_crawler.models import JOBS, EntityRef, NormalizedListing, UpsertOutcome
from saramin_crawler.workers import IngestionUpserter, build_job_fields

LINK = "https://www.saramin.co.kr/zf_user/jobs/relay/view?rec_idx=1"


@pytest.fixture
def listing():
    return NormalizedListing(
        company="Acme",
        title="Backend Node.js Engineer",
        link=LINK,
        location="서울 강남구",
        experience="경력 3년↑",
        education="학력무관",
        employment_type="정규직",
        deadline=datetime(2024, 12, 31),
        deadline_raw="2024.12.31",
        sector="백엔드/서버개발",
        salary="면접후 결정",
        skills=frozenset({"Node.js"}),
    )


class TestBuildJobFields:

    def test_references_by_id(self, listing):
        fields = build_job_fields(
            listing,
            EntityRef("companies", "c-1", "Acme"),
            EntityRef("categories", "g-1", "백엔드/서버개발"),
            [EntityRef("skills", "s-1", "Node.js")],
        )
        assert fields["company"] == "c-1"
        assert fields["sector"] == "g-1"
        assert fields["skills"] == ["s-1"]
        assert fields["salary"] == "면접후 결정"
        assert fields["deadline"] == datetime(2024, 12, 31)

    def test_without_category(self, listing):
        fields = build_job_fields(listing, EntityRef("companies", "c-1", "Acme"), None, [])
        assert fields["sector"] is None
        assert fields["skills"] == []


class TestIngestionUpserter:

    async def test_insert_then_already_exists(self, memory_store):
        upserter = IngestionUpserter(memory_store)
        assert await upserter.upsert(LINK, {"title": "첫 제목"}) is UpsertOutcome.INSERTED
        assert await upserter.upsert(LINK, {"title": "바뀐 제목"}) is UpsertOutcome.ALREADY_EXISTS

        record = memory_store.get(JOBS, LINK)
        assert memory_store.count(JOBS) == 1
        assert record["title"] == "첫 제목"
        assert record["views"] == 0

    async def test_existing_views_untouched(self, memory_store):
        upserter = IngestionUpserter(memory_store)
        await upserter.upsert(LINK, {"title": "t"})
        memory_store.get(JOBS, LINK)["views"] = 42
        await upserter.upsert(LINK, {"title": "t"})
        assert memory_store.get(JOBS, LINK)["views"] == 42

    async def test_concurrent_upserts_insert_once(self, memory_store):
        upserter = IngestionUpserter(memory_store)
        outcomes = await asyncio.gather(*[upserter.upsert(LINK, {"title": "t"}) for _ in range(10)])
        assert outcomes.count(UpsertOutcome.INSERTED) == 1
        assert outcomes.count(UpsertOutcome.ALREADY_EXISTS) == 9
        assert memory_store.count(JOBS) == 1

    async def test_duplicate_key_from_store_is_already_exists(self, mocker):
        store = mocker.Mock()
        store.upsert_by_key = mocker.AsyncMock(side_effect=DuplicateKeyError(JOBS, LINK))
        assert await IngestionUpserter(store).upsert(LINK, {}) is UpsertOutcome.ALREADY_EXISTS

    async def test_store_failure_raises_upsert_error(self, mocker):
        store = mocker.Mock()
        store.upsert_by_key = mocker.AsyncMock(side_effect=StoreError("deadline exceeded"))
        with pytest.raises(UpsertError):
            await IngestionUpserter(store).upsert(LINK, {})
