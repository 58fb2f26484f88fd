"""
Score aggregation and hot/warm/cold classification.
"""

from typing import Dict

from .models import ScoreBreakdown, ScoreClassification


CLASSIFICATION_LABELS: Dict[ScoreClassification, str] = {
    ScoreClassification.HOT: "Quente",
    ScoreClassification.WARM: "Morno",
    ScoreClassification.COLD: "Frio",
}

CLASSIFICATION_MESSAGES: Dict[ScoreClassification, str] = {
    ScoreClassification.HOT: (
        "Lead Quente! Altamente qualificado. Atribua a um vendedor imediatamente."
    ),
    ScoreClassification.WARM: "Lead Morno. Bom potencial. Avalie antes de atribuir.",
    ScoreClassification.COLD: (
        "Lead Frio. Recomenda-se mais qualificação antes de atribuir a um vendedor."
    ),
}

# Badge color hints for the UI
CLASSIFICATION_COLORS: Dict[ScoreClassification, str] = {
    ScoreClassification.HOT: "green",
    ScoreClassification.WARM: "yellow",
    ScoreClassification.COLD: "blue",
}


class ScoreAggregator:
    """
    Combines subscores into a total and classifies it.

    Thresholds (inclusive):
    - total >= 80: hot
    - total >= 50: warm
    - otherwise: cold
    """

    HOT_THRESHOLD = 80
    WARM_THRESHOLD = 50

    def aggregate(self, engagement: int, intent: int, completeness: int) -> ScoreBreakdown:
        return ScoreBreakdown(
            engagement=engagement,
            intent=intent,
            completeness=completeness,
        )

    def classify(self, total: int) -> ScoreClassification:
        if total >= self.HOT_THRESHOLD:
            return ScoreClassification.HOT
        if total >= self.WARM_THRESHOLD:
            return ScoreClassification.WARM
        return ScoreClassification.COLD


def classification_label(classification: ScoreClassification) -> str:
    return CLASSIFICATION_LABELS[classification]


def classification_message(classification: ScoreClassification) -> str:
    return CLASSIFICATION_MESSAGES[classification]


def classification_color(classification: ScoreClassification) -> str:
    return CLASSIFICATION_COLORS[classification]
