"""
Qualification tiers (Q1/Q2/Q3).

A tier says how much we know about a lead, independent of how engaged
they are. Downstream code treats a lead as qualified when its tier ranks
at or above the organization's target tier.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from .models import QualificationTier, TierSnapshot


@dataclass(frozen=True)
class TierInfo:
    """Display metadata for a tier."""
    tier: QualificationTier
    label: str
    description: str
    color: str
    requirements: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tier": self.tier.value,
            "label": self.label,
            "description": self.description,
            "color": self.color,
            "requirements": list(self.requirements),
        }


QUALIFICATION_TIERS: Dict[QualificationTier, TierInfo] = {
    QualificationTier.Q1: TierInfo(
        tier=QualificationTier.Q1,
        label="Q1 - Básico",
        description="Nome + contato (telefone/email)",
        color="blue",
        requirements=("name", "contact"),
    ),
    QualificationTier.Q2: TierInfo(
        tier=QualificationTier.Q2,
        label="Q2 - Interesse",
        description="Dados básicos + veículo de interesse + origem",
        color="yellow",
        requirements=("name", "contact", "vehicle_interest", "source"),
    ),
    QualificationTier.Q3: TierInfo(
        tier=QualificationTier.Q3,
        label="Q3 - Completo",
        description="Qualificação completa com orçamento, pagamento e prazo",
        color="green",
        requirements=(
            "name", "contact", "vehicle_interest", "source",
            "budget", "payment_method", "timeline",
        ),
    ),
}

_TIER_ORDER = [QualificationTier.Q1, QualificationTier.Q2, QualificationTier.Q3]


def _text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


REQUIREMENT_CHECKS: Dict[str, Callable[[TierSnapshot], bool]] = {
    "name": lambda s: _text(s.name),
    "contact": lambda s: _text(s.phone) or _text(s.email),
    "vehicle_interest": lambda s: _text(s.vehicle_interest),
    "source": lambda s: _text(s.source),
    "budget": lambda s: bool(s.budget_min) or bool(s.budget_max),
    "payment_method": lambda s: _text(s.payment_method),
    "timeline": lambda s: _text(s.purchase_timeline),
}


def tier_rank(tier: Optional[Union[QualificationTier, str]]) -> int:
    """Q1=1, Q2=2, Q3=3; no tier ranks 0. Accepts "Q1".."Q3" as plain strings."""
    if tier is None:
        return 0
    return _TIER_ORDER.index(QualificationTier(tier)) + 1


def is_qualified(
    tier: Optional[Union[QualificationTier, str]],
    target_tier: Union[QualificationTier, str],
) -> bool:
    """Whether a lead's tier meets the target tier."""
    return tier_rank(tier) >= tier_rank(target_tier)


class TierCalculator:
    """Derives the highest tier whose requirements a snapshot meets."""

    def calculate(self, snapshot: TierSnapshot) -> Optional[QualificationTier]:
        """
        Evaluate tiers from most to least complete.

        Args:
            snapshot: Lead/customer/negotiation fields

        Returns:
            The reached tier, or None when even Q1 is not met
        """
        for tier in reversed(_TIER_ORDER):
            if not self.missing_requirements(snapshot, tier):
                return tier
        return None

    def missing_requirements(
        self, snapshot: TierSnapshot, tier: QualificationTier
    ) -> List[str]:
        """Requirements of `tier` the snapshot does not satisfy."""
        return [
            req for req in QUALIFICATION_TIERS[tier].requirements
            if not REQUIREMENT_CHECKS[req](snapshot)
        ]

    def next_tier(self, snapshot: TierSnapshot) -> Optional[QualificationTier]:
        """The tier right above the current one, None when already Q3."""
        rank = tier_rank(self.calculate(snapshot))
        if rank >= len(_TIER_ORDER):
            return None
        return _TIER_ORDER[rank]
