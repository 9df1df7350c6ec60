# app/model_registry/__init__.py


# Register all models here

from app.system_models.diagnosis_model.diagnosis_model import Diagnosis
