from .analyzer import analyze
from .evaluator import evaluate
from .models import ConsumptionPattern, EvaluationResult, ReorderDecision
from .policy import decide_reorder, fallback_evaluation
from .safety_stock import calculate_safety_stock
from .settings import EngineSettings, resolve_settings

__all__ = [
    "analyze",
    "calculate_safety_stock",
    "evaluate",
    "decide_reorder",
    "fallback_evaluation",
    "resolve_settings",
    # Models
    "ConsumptionPattern",
    "EvaluationResult",
    "ReorderDecision",
    "EngineSettings",
]
