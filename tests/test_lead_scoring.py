"""Tests for the scoring components."""

from collections import deque
from datetime import timedelta

import pytest

from conftest import BASE_TIME, incoming, outgoing, lead_says
from qualification import (
    CompletenessScorer,
    EngagementScorer,
    IntentScorer,
    LeadQualificationEngine,
    Message,
    MessageDirection,
    QualificationFormData,
    ScoreAggregator,
    ScoreClassification,
    TierSnapshot,
)


@pytest.fixture
def engagement():
    return EngagementScorer()


@pytest.fixture
def intent():
    return IntentScorer()


@pytest.fixture
def completeness():
    return CompletenessScorer()


@pytest.fixture
def aggregator():
    return ScoreAggregator()


FULL_FORM = QualificationFormData(
    vehicle_interest="Onix LTZ 2022",
    budget_min=60000,
    budget_max=80000,
    down_payment=15000,
    payment_method="financiamento",
    purchase_timeline="imediato",
    decision_maker=True,
)


# ── Engagement Scorer ─────────────────────────────────

class TestEngagementScorer:
    def test_no_messages(self, engagement):
        assert engagement.score([]) == 0

    @pytest.mark.parametrize("count,expected", [
        (1, 5), (2, 5), (3, 15), (5, 15), (6, 25), (9, 25), (10, 35), (25, 35),
    ])
    def test_volume_thresholds(self, engagement, count, expected):
        assert engagement.score(incoming(count)) == expected

    def test_ten_messages_without_quick_reply(self, engagement):
        assert engagement.score(incoming(10)) == 35

    def test_ten_messages_with_quick_reply(self, engagement):
        messages = [outgoing(BASE_TIME - timedelta(minutes=2))] + incoming(10)
        assert engagement.score(messages) == 40

    def test_outgoing_messages_do_not_count(self, engagement):
        messages = [outgoing(BASE_TIME + timedelta(hours=i), id=f"o{i}") for i in range(12)]
        assert engagement.score(messages) == 0

    def test_reply_at_exactly_five_minutes_gets_bonus(self, engagement):
        messages = [outgoing(BASE_TIME)] + incoming(1, start=BASE_TIME + timedelta(minutes=5))
        assert engagement.score(messages) == 10

    def test_slow_reply_gets_no_bonus(self, engagement):
        messages = [outgoing(BASE_TIME)] + incoming(
            1, start=BASE_TIME + timedelta(minutes=5, seconds=1)
        )
        assert engagement.score(messages) == 5

    def test_bonus_applies_once(self, engagement):
        messages = []
        for i in range(3):
            sent = BASE_TIME + timedelta(hours=i)
            messages.append(outgoing(sent, id=f"o{i}"))
            messages.extend(incoming(1, start=sent + timedelta(minutes=1)))
        # 3 incoming -> 15, plus a single bonus
        assert engagement.score(messages) == 20

    def test_missing_timestamps_never_get_bonus(self, engagement):
        messages = [
            Message(id="o", content="oi", direction=MessageDirection.OUTGOING),
            Message(id="i", content="oi", direction=MessageDirection.INCOMING),
        ]
        assert engagement.score(messages) == 5

    def test_incoming_before_outgoing_is_not_a_reply(self, engagement):
        messages = incoming(1) + [outgoing(BASE_TIME + timedelta(minutes=1))]
        assert engagement.score(messages) == 5

    def test_unknown_direction_is_ignored(self, engagement):
        messages = [Message(id="x", content="oi", direction=None)]
        assert engagement.score(messages) == 0

    def test_monotonic_and_bounded(self, engagement):
        previous = 0
        for count in range(0, 20):
            messages = [outgoing(BASE_TIME - timedelta(minutes=1))] + incoming(count)
            value = engagement.score(messages)
            assert 0 <= value <= 40
            assert value >= previous
            previous = value

    def test_non_datetime_timestamps_never_get_bonus(self, engagement):
        messages = [
            Message(id="o", content="oi", direction=MessageDirection.OUTGOING, created_at=100),
            Message(id="i", content="oi", direction=MessageDirection.INCOMING, created_at=160),
        ]
        assert engagement.score(messages) == 5

    def test_accepts_deque(self, engagement):
        messages = deque([outgoing(BASE_TIME - timedelta(minutes=2))] + incoming(10))
        assert engagement.has_quick_reply(messages)
        assert engagement.score(messages) == 40

    def test_accepts_generator(self, engagement):
        messages = (m for m in [outgoing(BASE_TIME - timedelta(minutes=2))] + incoming(3))
        assert engagement.score(messages) == 20

    def test_plain_string_directions(self, engagement):
        messages = [
            Message(id="o", content="oi", direction="outgoing", created_at=BASE_TIME),
            Message(id="i", content="oi", direction="incoming",
                    created_at=BASE_TIME + timedelta(minutes=1)),
        ]
        assert engagement.score(messages) == 10


# ── Intent Scorer ─────────────────────────────────────

class TestIntentScorer:
    def test_high_intent_capped_at_two_matches(self, intent):
        messages = lead_says("Quero comprar um carro, é urgente, preciso hoje")
        result = intent.analyze(messages)
        assert result.score == 20
        assert len(result.high_matches) == 2
        assert result.medium_matches == []

    def test_medium_intent_capped_at_two_matches(self, intent):
        messages = lead_says("Tenho entrada e quero ver o financiamento", "aceita troca?")
        result = intent.analyze(messages)
        assert result.score == 10
        assert len(result.medium_matches) == 2

    def test_both_tiers_reach_maximum(self, intent):
        messages = lead_says("quero comprar hoje", "tenho entrada, qual a parcela?")
        assert intent.score(messages) == 30

    def test_no_keywords(self, intent):
        assert intent.score(lead_says("Bom dia, tudo bem?")) == 0

    def test_empty_transcript(self, intent):
        assert intent.score([]) == 0

    def test_low_intent_words_score_nothing(self, intent):
        assert intent.score(lead_says("Gostei, quanto custa? Estou interessado")) == 0

    def test_case_insensitive(self, intent):
        assert intent.score(lead_says("QUERO COMPRAR")) == 10

    def test_only_incoming_messages_are_read(self, intent):
        messages = [outgoing(BASE_TIME, content="Quer fechar negócio hoje? Temos financiamento")]
        assert intent.score(messages) == 0

    def test_substring_match_ignores_negation(self, intent):
        assert intent.score(lead_says("amanhã não posso")) == 10

    def test_keywords_across_messages_count_once(self, intent):
        messages = lead_says("urgente", "urgente", "urgente")
        result = intent.analyze(messages)
        assert result.high_matches == ["urgente"]
        assert result.score == 10

    def test_null_content_is_ignored(self, intent):
        messages = [Message(id="1", content=None, direction=MessageDirection.INCOMING)]
        assert intent.score(messages) == 0

    @pytest.mark.parametrize("content", [12345, b"quero comprar", ["urgente"]])
    def test_non_text_content_is_ignored(self, intent, content):
        messages = [Message(id="1", content=content, direction=MessageDirection.INCOMING)]
        assert intent.score(messages) == 0

    def test_plain_string_direction(self, intent):
        messages = [Message(id="x", content="quero comprar", direction="incoming")]
        assert intent.score(messages) == 10

    def test_low_intent_words_are_reported_as_hints(self, intent):
        result = intent.analyze(lead_says("Gostei, quanto custa? Qual valor? Estou interessado"))
        assert result.score == 0
        assert result.matched_keywords == []
        # hints are not capped
        assert result.low_matches == ["interessado", "gostei", "quanto custa", "qual valor"]


# ── Completeness Scorer ───────────────────────────────

class TestCompletenessScorer:
    def test_empty_form(self, completeness):
        assert completeness.score(QualificationFormData()) == 0

    def test_full_form(self, completeness):
        assert completeness.score(FULL_FORM) == 30

    def test_five_points_per_field(self, completeness):
        form = QualificationFormData(vehicle_interest="HB20", payment_method="a_vista")
        assert completeness.score(form) == 10
        assert completeness.filled_fields(form) == ["vehicle_interest", "payment_method"]

    def test_either_budget_bound_counts_once(self, completeness):
        assert completeness.score(QualificationFormData(budget_max=50000)) == 5
        assert completeness.score(QualificationFormData(budget_min=40000, budget_max=50000)) == 5

    def test_zero_down_payment_does_not_count(self, completeness):
        assert completeness.score(QualificationFormData(down_payment=0)) == 0

    def test_blank_text_does_not_count(self, completeness):
        form = QualificationFormData(vehicle_interest="  ", purchase_timeline="")
        assert completeness.score(form) == 0

    def test_decision_maker_false_does_not_count(self, completeness):
        assert completeness.score(QualificationFormData(decision_maker=False)) == 0


# ── Aggregator ────────────────────────────────────────

class TestScoreAggregator:
    def test_total_is_sum(self, aggregator):
        breakdown = aggregator.aggregate(engagement=25, intent=15, completeness=20)
        assert breakdown.total == 60
        assert breakdown.to_dict() == {
            "engagement": 25, "intent": 15, "completeness": 20, "total": 60,
        }

    @pytest.mark.parametrize("total,expected", [
        (100, ScoreClassification.HOT),
        (80, ScoreClassification.HOT),
        (79, ScoreClassification.WARM),
        (50, ScoreClassification.WARM),
        (49, ScoreClassification.COLD),
        (0, ScoreClassification.COLD),
    ])
    def test_classification_boundaries(self, aggregator, total, expected):
        assert aggregator.classify(total) == expected


# ── Engine ────────────────────────────────────────────

class TestLeadQualificationEngine:
    def test_empty_inputs(self):
        result = LeadQualificationEngine().evaluate([], QualificationFormData())
        assert result.breakdown.to_dict() == {
            "engagement": 0, "intent": 0, "completeness": 0, "total": 0,
        }
        assert result.classification == ScoreClassification.COLD
        assert result.tier is None

    def test_hot_lead(self):
        messages = [outgoing(BASE_TIME - timedelta(minutes=1))] + incoming(
            10, content="quero comprar, tenho entrada"
        )
        result = LeadQualificationEngine().evaluate(messages, FULL_FORM)
        # 40 engagement + 15 intent + 30 completeness
        assert result.score == 85
        assert result.classification == ScoreClassification.HOT
        assert set(result.matched_keywords) == {"quero comprar", "tenho entrada"}

    def test_score_is_stable(self):
        engine = LeadQualificationEngine()
        messages = incoming(4, content="financiamento hoje")
        assert engine.score(messages, FULL_FORM) == engine.score(messages, FULL_FORM)

    def test_tier_uses_snapshot(self):
        snapshot = TierSnapshot.from_form(
            FULL_FORM, name="Ana", phone="51999990000", source="whatsapp"
        )
        result = LeadQualificationEngine().evaluate([], FULL_FORM, snapshot)
        assert result.tier.value == "Q3"
        # score and tier are independent axes
        assert result.classification == ScoreClassification.COLD

    def test_to_dict(self):
        result = LeadQualificationEngine().evaluate(lead_says("urgente"), QualificationFormData())
        data = result.to_dict()
        assert data["score"] == 15
        assert data["classification"] == "cold"
        assert data["tier"] is None

    def test_non_text_content_scores_zero_intent(self):
        messages = [Message(id="1", content=12345, direction=MessageDirection.INCOMING)]
        result = LeadQualificationEngine().evaluate(messages, QualificationFormData())
        assert result.breakdown.intent == 0
        assert result.breakdown.engagement == 5

    def test_transcript_can_be_an_iterator(self):
        messages = iter([outgoing(BASE_TIME - timedelta(minutes=1))] + incoming(3, content="urgente"))
        result = LeadQualificationEngine().evaluate(messages, QualificationFormData())
        assert result.breakdown.engagement == 20
        assert result.breakdown.intent == 10

    def test_interest_hints_do_not_change_score(self):
        result = LeadQualificationEngine().evaluate(
            lead_says("bonito esse carro, qual o preço?"), QualificationFormData()
        )
        assert result.score == 5
        assert result.interest_hints == ["bonito", "preço"]
        assert result.to_dict()["interest_hints"] == ["bonito", "preço"]
