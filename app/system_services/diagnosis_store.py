# app/system_services/diagnosis_store.py
"""
Diagnosis Record Store - CRUD plus paginated history. No delete.
"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from app.shared.exceptions import ConcurrentUpdate
from app.system_models.diagnosis_model.diagnosis_model import Diagnosis
from app.system_models.diagnosis_model.diagnosis_schemas import DiagnosisCreate

logger = logging.getLogger(__name__)


async def create_diagnosis(db: AsyncSession, diagnosis: DiagnosisCreate) -> Diagnosis:
    """Create a new diagnosis."""
    db_diagnosis = Diagnosis(**diagnosis.model_dump())
    db.add(db_diagnosis)
    await db.commit()
    await db.refresh(db_diagnosis)
    logger.info(f"💾 Stored diagnosis {db_diagnosis.id}")
    return db_diagnosis


async def get_diagnosis(db: AsyncSession, diagnosis_id: str) -> Optional[Diagnosis]:
    """Fetch a diagnosis by id, or None."""
    result = await db.execute(select(Diagnosis).where(Diagnosis.id == diagnosis_id))
    return result.scalar_one_or_none()


async def save_localization(
    db: AsyncSession, diagnosis: Diagnosis, localized_text: str, audio_url: str
) -> Diagnosis:
    """
    Overwrite the localized text and audio of a loaded diagnosis.

    The row version must still match the one read in this session.
    """
    # rollback expires the instance, so no attribute access after it
    diagnosis_id = diagnosis.id
    diagnosis.localized_text = localized_text
    diagnosis.audio_url = audio_url
    try:
        await db.commit()
    except StaleDataError as e:
        await db.rollback()
        logger.warning(f"⚠️  Diagnosis {diagnosis_id} was localized concurrently")
        raise ConcurrentUpdate(
            "Diagnosis was updated by another localization request. Please retry.",
            diagnosisId=diagnosis_id,
        ) from e
    await db.refresh(diagnosis)
    return diagnosis


async def list_diagnoses(
    db: AsyncSession, page: int = 1, limit: int = 10, language: Optional[str] = None
) -> Tuple[List[Diagnosis], int]:
    """Newest-first page of diagnoses and the total count."""
    query = select(Diagnosis)
    count_query = select(func.count()).select_from(Diagnosis)
    if language:
        query = query.where(Diagnosis.language == language)
        count_query = count_query.where(Diagnosis.language == language)

    total = (await db.execute(count_query)).scalar_one()
    result = await db.execute(
        query.order_by(Diagnosis.created_at.desc(), Diagnosis.id)
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return list(result.scalars().all()), total
