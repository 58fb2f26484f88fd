"""
Engagement scoring.

Measures how much a lead talks to the store and how quickly they answer.
"""

import logging
from datetime import datetime, timedelta
from itertools import pairwise
from typing import Iterable, Optional

from .models import Message

logger = logging.getLogger(__name__)


class EngagementScorer:
    """
    Scores conversational activity (0-40).

    Base score by number of incoming messages, highest threshold first:
    - 10+ messages: 35
    - 6-9 messages: 25
    - 3-5 messages: 15
    - 1-2 messages: 5

    Quick reply bonus: +5, once per transcript, when an outgoing message is
    answered by the lead within 5 minutes.
    """

    MAX_SCORE = 40

    # (min incoming messages, points), checked in order
    VOLUME_THRESHOLDS = [
        (10, 35),
        (6, 25),
        (3, 15),
        (1, 5),
    ]

    QUICK_REPLY_BONUS = 5
    QUICK_REPLY_WINDOW = timedelta(minutes=5)

    def score(self, messages: Iterable[Message]) -> int:
        """
        Calculate the engagement score of a transcript.

        Args:
            messages: Conversation messages in chronological order

        Returns:
            Score between 0 and 40
        """
        messages = list(messages)
        incoming = sum(1 for m in messages if m.is_incoming)
        score = self.volume_score(incoming)

        if self.has_quick_reply(messages):
            score += self.QUICK_REPLY_BONUS

        return max(0, min(self.MAX_SCORE, score))

    def volume_score(self, incoming_count: int) -> int:
        """Base points for a number of incoming messages."""
        for threshold, points in self.VOLUME_THRESHOLDS:
            if incoming_count >= threshold:
                return points
        return 0

    def has_quick_reply(self, messages: Iterable[Message]) -> bool:
        """True if any outgoing message was answered within the reply window."""
        for previous, current in pairwise(messages):
            if not (previous.is_outgoing and current.is_incoming):
                continue
            delay = self._reply_delay(previous, current)
            if delay is not None and timedelta(0) <= delay <= self.QUICK_REPLY_WINDOW:
                return True
        return False

    @staticmethod
    def _reply_delay(sent: Message, reply: Message) -> Optional[timedelta]:
        if not (isinstance(sent.created_at, datetime) and isinstance(reply.created_at, datetime)):
            return None
        try:
            return reply.created_at - sent.created_at
        except TypeError:
            # naive vs aware timestamps
            logger.debug(f"Skipping reply pair {sent.id} -> {reply.id}: incomparable timestamps")
            return None
