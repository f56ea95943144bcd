"""
Detection Pipeline

Scans each outgoing user message for the secret code word and
for distress keywords, before any reply is scheduled.

SAFETY_CRITICAL: A code word match suppresses the ordinary reply
for that message. A distress match does not.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Optional

from safecall.domain.enums.call_enums import AlertReason


class DetectionOutcome(StrEnum):
    """Result class of a single message scan."""

    NONE = "none"
    CODE_WORD = "code_word"
    DISTRESS = "distress"


@dataclass
class DetectionResult:
    """
    Results from scanning one message.

    Attributes:
        outcome: What was found
        distress_keywords_found: Distress keywords present (DISTRESS only)
    """

    outcome: DetectionOutcome = DetectionOutcome.NONE
    distress_keywords_found: list[str] = field(default_factory=list)

    @property
    def suppresses_reply(self) -> bool:
        """Whether the ordinary assistant reply must be skipped."""
        return self.outcome == DetectionOutcome.CODE_WORD

    @property
    def alert_reason(self) -> Optional[AlertReason]:
        """Reason to alert contacts with, if any."""
        if self.outcome == DetectionOutcome.CODE_WORD:
            return AlertReason.CODE_WORD
        if self.outcome == DetectionOutcome.DISTRESS:
            return AlertReason.EMOTION_DETECTED
        return None

    def to_dict(self) -> dict:
        """Serialize to dictionary. The code word itself is never included."""
        return {
            "outcome": self.outcome.value,
            "distress_keyword_count": len(self.distress_keywords_found),
        }


class DetectionPipeline:
    """
    Code word and distress detection.

    Matching is case-insensitive substring matching, so "HELPFUL"
    matches "help". The code word check always runs first; distress
    keywords are only consulted when the code word is absent.
    """

    DISTRESS_KEYWORDS: tuple[str, ...] = (
        "scared",
        "afraid",
        "help",
        "emergency",
        "fear",
        "terrified",
        "panic",
    )

    def evaluate(self, text: str, code_word: str) -> DetectionResult:
        """
        Scan a message.

        Args:
            text: Raw user message
            code_word: Active code word

        Returns:
            DetectionResult for this message
        """
        if not text or not text.strip():
            return DetectionResult()

        text_lower = text.lower()

        if self.contains_code_word(text_lower, code_word):
            return DetectionResult(outcome=DetectionOutcome.CODE_WORD)

        distress = self._find_keywords(text_lower, self.DISTRESS_KEYWORDS)
        if distress:
            return DetectionResult(
                outcome=DetectionOutcome.DISTRESS,
                distress_keywords_found=distress,
            )

        return DetectionResult()

    @staticmethod
    def contains_code_word(text_lower: str, code_word: str) -> bool:
        """
        Check for the code word in lower-cased text.

        A blank code word never matches.
        """
        needle = (code_word or "").strip().lower()
        if not needle:
            return False
        return needle in text_lower

    def _find_keywords(
        self,
        text: str,
        keywords: tuple[str, ...],
    ) -> list[str]:
        """
        Find keywords in text.

        Args:
            text: Lowercased text to search
            keywords: Keywords to find, in priority order

        Returns:
            List of found keywords
        """
        return [keyword for keyword in keywords if keyword in text]
