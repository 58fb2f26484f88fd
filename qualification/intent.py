"""
Purchase intent scoring.

Looks for literal Portuguese buying phrases in what the lead wrote.
Matching is plain substring containment on the lowercased text: "hoje"
matches inside "hojemesmo" and negations are not detected.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from .models import Message

logger = logging.getLogger(__name__)


# Keyword lexicons, checked in order.
HIGH_INTENT_KEYWORDS = [
    "quero comprar", "vou comprar", "fechar negócio", "fechar negocio",
    "posso ir ver", "agendar visita", "posso visitar", "vou aí",
    "preciso logo", "urgente", "hoje", "amanhã", "amanha",
]

MEDIUM_INTENT_KEYWORDS = [
    "tenho entrada", "valor de entrada", "quanto de entrada",
    "financiamento", "parcela", "consigo financiar",
    "trocar meu carro", "tenho um pra trocar", "aceita troca",
]

# Shown to salespeople as interest hints, never scored.
LOW_INTENT_KEYWORDS = [
    "interessado", "interesse", "gostei", "bonito",
    "quanto custa", "qual valor", "preço", "preco",
]


@dataclass
class IntentResult:
    """Intent score with the phrases that produced it."""
    score: int = 0
    high_matches: List[str] = field(default_factory=list)
    medium_matches: List[str] = field(default_factory=list)
    low_matches: List[str] = field(default_factory=list)

    @property
    def matched_keywords(self) -> List[str]:
        return self.high_matches + self.medium_matches


class IntentScorer:
    """
    Scores keyword evidence of purchase intent (0-30).

    - High intent phrase: +10 each, at most 2 counted (max 20)
    - Medium intent phrase: +5 each, at most 2 counted (max 10)
    - Low intent phrase: reported as an interest hint, 0 points
    """

    MAX_SCORE = 30
    HIGH_POINTS = 10
    MEDIUM_POINTS = 5
    MAX_MATCHES_PER_TIER = 2

    def __init__(
        self,
        high_keywords: Sequence[str] = HIGH_INTENT_KEYWORDS,
        medium_keywords: Sequence[str] = MEDIUM_INTENT_KEYWORDS,
        low_keywords: Sequence[str] = LOW_INTENT_KEYWORDS,
    ):
        self.high_keywords = [k.casefold() for k in high_keywords]
        self.medium_keywords = [k.casefold() for k in medium_keywords]
        self.low_keywords = [k.casefold() for k in low_keywords]

    def score(self, messages: Iterable[Message]) -> int:
        """Calculate the intent score of a transcript."""
        return self.analyze(messages).score

    def analyze(self, messages: Iterable[Message]) -> IntentResult:
        """
        Score the transcript and report matched phrases.

        Args:
            messages: Conversation messages; only incoming ones are read

        Returns:
            IntentResult with score between 0 and 30
        """
        text = self.lead_text(messages)
        high = self._find_matches(text, self.high_keywords)
        medium = self._find_matches(text, self.medium_keywords)
        low = self._find_matches(text, self.low_keywords, limit=None)

        score = len(high) * self.HIGH_POINTS + len(medium) * self.MEDIUM_POINTS
        score = max(0, min(self.MAX_SCORE, score))

        if high or medium:
            logger.debug(f"Intent keywords matched: high={high} medium={medium}")

        return IntentResult(
            score=score, high_matches=high, medium_matches=medium, low_matches=low
        )

    @staticmethod
    def lead_text(messages: Iterable[Message]) -> str:
        """Everything the lead wrote, lowercased, as one string."""
        return " ".join(
            m.content.casefold()
            for m in messages
            if m.is_incoming and isinstance(m.content, str) and m.content
        )

    def _find_matches(
        self, text: str, keywords: List[str], limit: Optional[int] = MAX_MATCHES_PER_TIER
    ) -> List[str]:
        matches: List[str] = []
        if not text:
            return matches
        for keyword in keywords:
            if keyword in text and keyword not in matches:
                matches.append(keyword)
                if limit is not None and len(matches) >= limit:
                    break
        return matches
