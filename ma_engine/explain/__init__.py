"""Score explanations and narrative generation."""

from .narrator import (
    ClaudeNarrator,
    Narrative,
    Narrator,
    TemplateNarrator,
    build_narrator,
    parse_json_response,
)
from .synthesizer import (
    ExplanationSynthesizer,
    STRONG_THRESHOLD,
    WEAK_THRESHOLD,
    headline,
    score_band,
)

__all__ = [
    "ClaudeNarrator",
    "Narrative",
    "Narrator",
    "TemplateNarrator",
    "build_narrator",
    "parse_json_response",
    "ExplanationSynthesizer",
    "STRONG_THRESHOLD",
    "WEAK_THRESHOLD",
    "headline",
    "score_band",
]
