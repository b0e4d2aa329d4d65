"""
Evaluations Domain Layer
========================
"""

from src.evaluations.domain.entities import Evaluation, ensure_evaluable

__all__ = ["Evaluation", "ensure_evaluable"]
