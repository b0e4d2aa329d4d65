"""
Evaluations Infrastructure Layer
================================
"""

from src.evaluations.infrastructure.models import EvaluationModel
from src.evaluations.infrastructure.repositories import SQLAlchemyEvaluationRepository

__all__ = ["EvaluationModel", "SQLAlchemyEvaluationRepository"]
