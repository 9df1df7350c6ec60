from datetime import timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.database.connection import Base
from app.helpers.time import utcnow
from app.shared.exceptions import ConcurrentUpdate
from app.system_models.diagnosis_model.diagnosis_schemas import DiagnosisCreate
from app.system_services import diagnosis_store


def _create(language="tw", voice="yellow leaves"):
    return DiagnosisCreate(
        voice_input=voice,
        combined_result=f"Symptoms reported: {voice}. Awaiting image input for complete diagnosis.",
        language=language,
    )


class TestDiagnosisStore:
    @pytest.mark.asyncio
    async def test_create_and_get(self, db_session):
        created = await diagnosis_store.create_diagnosis(db_session, _create())

        fetched = await diagnosis_store.get_diagnosis(db_session, created.id)

        assert fetched is not None
        assert fetched.id == created.id
        assert fetched.voice_input == "yellow leaves"
        assert fetched.image_result is None
        assert fetched.localized_text is None
        assert fetched.audio_url is None
        assert fetched.version == 1

    @pytest.mark.asyncio
    async def test_get_unknown(self, db_session):
        assert await diagnosis_store.get_diagnosis(db_session, "does-not-exist") is None

    @pytest.mark.asyncio
    async def test_save_localization_overwrites(self, db_session):
        diagnosis = await diagnosis_store.create_diagnosis(db_session, _create())
        created_at = diagnosis.created_at

        await diagnosis_store.save_localization(db_session, diagnosis, "first", "data:audio/wav;base64,AA==")
        await diagnosis_store.save_localization(db_session, diagnosis, "second", "data:audio/wav;base64,AQ==")

        fetched = await diagnosis_store.get_diagnosis(db_session, diagnosis.id)
        assert fetched.localized_text == "second"
        assert fetched.audio_url == "data:audio/wav;base64,AQ=="
        assert fetched.created_at == created_at
        assert fetched.version == 3

    @pytest.mark.asyncio
    async def test_list_is_paginated_newest_first(self, db_session):
        base = utcnow()
        ids = []
        for i in range(5):
            diagnosis = await diagnosis_store.create_diagnosis(db_session, _create(voice=f"symptom {i}"))
            diagnosis.created_at = base + timedelta(minutes=i)
            ids.append(diagnosis.id)
        await db_session.commit()

        first_page, total = await diagnosis_store.list_diagnoses(db_session, page=1, limit=2)
        last_page, _ = await diagnosis_store.list_diagnoses(db_session, page=3, limit=2)

        assert total == 5
        assert [d.id for d in first_page] == [ids[4], ids[3]]
        assert [d.id for d in last_page] == [ids[0]]

    @pytest.mark.asyncio
    async def test_list_filters_by_language(self, db_session):
        await diagnosis_store.create_diagnosis(db_session, _create(language="tw"))
        await diagnosis_store.create_diagnosis(db_session, _create(language="ee"))
        await diagnosis_store.create_diagnosis(db_session, _create(language="ee"))

        items, total = await diagnosis_store.list_diagnoses(db_session, language="ee")

        assert total == 2
        assert {d.language for d in items} == {"ee"}


@pytest.mark.asyncio
async def test_stale_localization_write_is_rejected(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'race.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    try:
        async with factory() as setup:
            diagnosis_id = (await diagnosis_store.create_diagnosis(setup, _create())).id

        async with factory() as first, factory() as second:
            first_copy = await diagnosis_store.get_diagnosis(first, diagnosis_id)
            second_copy = await diagnosis_store.get_diagnosis(second, diagnosis_id)

            await diagnosis_store.save_localization(first, first_copy, "winner", "data:audio/wav;base64,AA==")

            with pytest.raises(ConcurrentUpdate) as exc_info:
                await diagnosis_store.save_localization(
                    second, second_copy, "loser", "data:audio/wav;base64,AQ=="
                )
            assert exc_info.value.extra["diagnosisId"] == diagnosis_id
            assert exc_info.value.status_code == 409

        async with factory() as check:
            stored = await diagnosis_store.get_diagnosis(check, diagnosis_id)
            assert stored.localized_text == "winner"
    finally:
        await engine.dispose()
