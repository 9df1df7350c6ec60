# app/system_models/diagnosis_model/diagnosis_model.py
import uuid

from sqlalchemy import Column, DateTime, Integer, String, Text
from app.database.connection import Base
from app.helpers.time import utcnow


def _new_id() -> str:
    return str(uuid.uuid4())


class Diagnosis(Base):
    __tablename__ = "diagnoses"

    id = Column(String(36), primary_key=True, default=_new_id)

    voice_input = Column(Text, nullable=True)
    image_result = Column(Text, nullable=True)
    combined_result = Column(Text, nullable=False)
    treatment_recommendations = Column(Text, nullable=True)

    # Overwritten by every localization run
    localized_text = Column(Text, nullable=True)
    audio_url = Column(Text, nullable=True)

    language = Column(String(16), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    # Row version; a stale writer fails instead of overwriting a newer localization
    version = Column(Integer, nullable=False, default=1)

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return f"<Diagnosis {self.id}: {self.language}>"
