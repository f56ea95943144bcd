"""Response generation package."""

from safecall.services.response.categories import (
    CATEGORIES,
    DEFAULT_CATEGORY,
    ResponseCategory,
)
from safecall.services.response.response_generator import (
    GeneratedReply,
    ResponseGenerator,
)

__all__ = [
    "ResponseGenerator",
    "GeneratedReply",
    "ResponseCategory",
    "CATEGORIES",
    "DEFAULT_CATEGORY",
]
