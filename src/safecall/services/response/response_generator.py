"""
Response Generator

Picks the companion's next line: classify the user's text into
the first matching conversation category, then draw a phrase
from that category's pool.

ARCHITECTURE: Classification is deterministic. The injected
random source only chooses the phrase within a category and
the timing jitter, so replays with a fixed seed are exact.
"""

import random
from dataclasses import dataclass
from typing import Optional

from safecall.config.settings import TimingSettings
from safecall.services.response.categories import (
    CATEGORIES,
    DEFAULT_CATEGORY,
    ResponseCategory,
)


@dataclass(frozen=True)
class GeneratedReply:
    """
    A reply chosen for a user message.

    Attributes:
        category: Name of the category that matched
        text: Reply text with the companion name filled in
    """

    category: str
    text: str


class ResponseGenerator:
    """
    Rule-based casual reply generator.

    Usage:
        generator = ResponseGenerator(rng=random.Random(7))
        reply = generator.generate("just got back from the gym", ai_name="Alex")
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        timing: Optional[TimingSettings] = None,
        categories: tuple[ResponseCategory, ...] = CATEGORIES,
        default_category: ResponseCategory = DEFAULT_CATEGORY,
    ) -> None:
        """
        Initialize generator.

        Args:
            rng: Random source for phrase choice and delays
            timing: Thinking and speaking timing
            categories: Priority-ordered categories
            default_category: Fallback when nothing matches
        """
        self._rng = rng or random.Random()
        self._timing = timing or TimingSettings()
        self._categories = categories
        self._default = default_category

    def classify(self, text: str) -> ResponseCategory:
        """
        Find the first category whose rule matches.

        Args:
            text: Raw user text

        Returns:
            Matching category, or the default category
        """
        normalized = text.lower()
        for category in self._categories:
            if category.matches(normalized):
                return category
        return self._default

    def generate(self, text: str, ai_name: str) -> GeneratedReply:
        """
        Build a reply for a user message.

        Args:
            text: Raw user text
            ai_name: Companion display name

        Returns:
            GeneratedReply with category and text
        """
        category = self.classify(text)
        phrase = self._rng.choice(category.phrases)
        return GeneratedReply(
            category=category.name,
            text=phrase.format(ai_name=ai_name),
        )

    def thinking_delay(self) -> float:
        """Seconds before the reply appears, uniform in [min, max)."""
        low = self._timing.thinking_delay_min_ms
        span = self._timing.thinking_delay_max_ms - low
        return (low + self._rng.random() * span) / 1000.0

    def speaking_duration(self, reply_text: str) -> float:
        """Seconds the companion 'speaks' a reply; longer replies speak longer."""
        per_char = self._timing.speaking_ms_per_char * len(reply_text)
        return max(self._timing.speaking_min_ms, per_char) / 1000.0
