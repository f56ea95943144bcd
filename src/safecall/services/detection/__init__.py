"""Detection services package."""

from safecall.services.detection.detection_pipeline import (
    DetectionOutcome,
    DetectionPipeline,
    DetectionResult,
)

__all__ = [
    "DetectionPipeline",
    "DetectionResult",
    "DetectionOutcome",
]
