# app/diagnosis_engine/routes.py
"""
Diagnosis Routes - compose, fetch and list diagnoses
"""
import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.connection import get_db
from app.diagnosis_engine.composer import DiagnosisComposer, diagnosis_composer
from app.diagnosis_engine.schemas import (
    ComposedDiagnosisOut,
    DiagnoseRequest,
    DiagnoseResponse,
    DiagnosisDetailResponse,
    DiagnosisHistoryResponse,
)
from app.shared.exceptions import DiagnosisServiceError, NotFound
from app.system_models.diagnosis_model.diagnosis_schemas import DiagnosisResponse
from app.system_services import diagnosis_store

router = APIRouter()
logger = logging.getLogger(__name__)


def get_composer() -> DiagnosisComposer:
    return diagnosis_composer


@router.post("", response_model=DiagnoseResponse, status_code=status.HTTP_201_CREATED)
async def create_diagnosis(
    request: DiagnoseRequest,
    db: AsyncSession = Depends(get_db),
    composer: DiagnosisComposer = Depends(get_composer),
):
    """
    Merge voice symptoms and/or image analysis into one diagnosis with
    treatment recommendations.

    **Request Body:**
    ```json
    {
        "voiceInput": "The leaves are turning yellow",
        "imageResult": "Possible nitrogen deficiency",
        "language": "tw"
    }
    ```
    """
    try:
        composed = await composer.create_diagnosis(
            db,
            voice_input=request.voice_input,
            image_result=request.image_result,
            language=request.language,
        )
    except DiagnosisServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    except Exception as e:
        logger.error(f"❌ Diagnosis creation error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to create diagnosis: {str(e)}")

    diagnosis = DiagnosisResponse.model_validate(composed.diagnosis)
    return DiagnoseResponse(
        message="Comprehensive diagnosis created successfully.",
        diagnosis=ComposedDiagnosisOut(
            **diagnosis.model_dump(),
            search_results_count=composed.search_results_count,
        ),
    )


@router.get("/history", response_model=DiagnosisHistoryResponse)
async def get_diagnosis_history(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    language: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """Newest-first, paginated list of stored diagnoses."""
    try:
        diagnoses, total = await diagnosis_store.list_diagnoses(db, page, limit, language)
    except Exception as e:
        logger.error(f"❌ Get diagnosis history error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to retrieve diagnosis history: {str(e)}")

    return DiagnosisHistoryResponse(
        message="Diagnosis history retrieved successfully.",
        diagnoses=[DiagnosisResponse.model_validate(d) for d in diagnoses],
        total=total,
        total_pages=math.ceil(total / limit),
        current_page=page,
    )


@router.get("/{diagnosis_id}", response_model=DiagnosisDetailResponse)
async def get_diagnosis(diagnosis_id: str, db: AsyncSession = Depends(get_db)):
    """Fetch one diagnosis by id."""
    diagnosis = await diagnosis_store.get_diagnosis(db, diagnosis_id)
    if diagnosis is None:
        error = NotFound("Diagnosis not found.", diagnosisId=diagnosis_id)
        raise HTTPException(status_code=error.status_code, detail=error.to_detail())

    return DiagnosisDetailResponse(
        message="Diagnosis retrieved successfully.",
        diagnosis=DiagnosisResponse.model_validate(diagnosis),
    )
