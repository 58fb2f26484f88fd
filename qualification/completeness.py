"""Intake form completeness scoring."""

from typing import Any, Callable, List, Tuple

from .models import QualificationFormData


def _filled(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _positive(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


class CompletenessScorer:
    """
    Scores how much of the intake form is filled in (0-30).

    +5 for each of: vehicle interest, budget (min or max), positive down
    payment, payment method, purchase timeline, decision maker.
    """

    MAX_SCORE = 30
    POINTS_PER_FIELD = 5

    CHECKS: List[Tuple[str, Callable[[QualificationFormData], bool]]] = [
        ("vehicle_interest", lambda f: _filled(f.vehicle_interest)),
        ("budget", lambda f: f.budget_min is not None or f.budget_max is not None),
        ("down_payment", lambda f: _positive(f.down_payment)),
        ("payment_method", lambda f: _filled(f.payment_method)),
        ("purchase_timeline", lambda f: _filled(f.purchase_timeline)),
        ("decision_maker", lambda f: bool(f.decision_maker)),
    ]

    def score(self, form: QualificationFormData) -> int:
        points = len(self.filled_fields(form)) * self.POINTS_PER_FIELD
        return max(0, min(self.MAX_SCORE, points))

    def filled_fields(self, form: QualificationFormData) -> List[str]:
        """Names of the scored fields that are present."""
        return [name for name, check in self.CHECKS if check(form)]
