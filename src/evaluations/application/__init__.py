"""
Evaluations Application Layer
=============================
"""

from src.evaluations.application.dto import (
    SubmitEvaluationRequest,
    EvaluationStatusResponse,
    MessageResponse,
)
from src.evaluations.application.services import (
    EvaluationService,
    IEvaluationRepository,
)

__all__ = [
    "SubmitEvaluationRequest",
    "EvaluationStatusResponse",
    "MessageResponse",
    "EvaluationService",
    "IEvaluationRepository",
]
