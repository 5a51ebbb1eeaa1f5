"""Narrative generation collaborators for score explanations."""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel, Field

from ma_engine.config import Settings, settings as default_settings
from ma_engine.models import ExplanationPayload, UnifiedVar

logger = logging.getLogger(__name__)


class Narrative(BaseModel):
    """Free text produced by a narrator."""

    summary: str
    reasoning: dict[str, str] = Field(
        default_factory=dict,
        description="Dimension value -> expanded reasoning",
    )


class Narrator(ABC):
    """Produces summary text given a structured breakdown."""

    name: str = "base"

    @abstractmethod
    async def narrate(
        self,
        candidate: UnifiedVar,
        payload: ExplanationPayload,
    ) -> Optional[Narrative]:
        """
        Write narrative text for an explanation.

        Args:
            candidate: The VAR being explained
            payload: The structural explanation with breakdown filled in

        Returns:
            Narrative text, or None to keep the templated text
        """
        pass


class TemplateNarrator(Narrator):
    """Deterministic narrator that defers to the templated summary."""

    name = "template"

    async def narrate(
        self,
        candidate: UnifiedVar,
        payload: ExplanationPayload,
    ) -> Optional[Narrative]:
        return None


class ClaudeNarrator(Narrator):
    """Write explanation narratives using the Claude API."""

    name = "llm"

    NARRATIVE_PROMPT = """You are an M&A analyst evaluating a value-added reseller (VAR) as an acquisition target.
Write in short, direct sentences. Use the numbers given; do not invent new figures.

Company: {name}
HQ: {location}
Revenue: {revenue}
EBITDA margin: {margin}
Growth: {growth}
Ownership: {ownership}
Specialties: {specialties}
Top vendors: {vendors}

Composite score: {composite:.1f}/10 (rank #{rank})

Score breakdown (dimension | score | weight | contribution | notes):
{breakdown}

Return JSON in this format:
{{
    "summary": "2-3 sentence investment summary",
    "reasoning": {{"<dimension key>": "one sentence expanding on that dimension"}}
}}

Use the dimension keys exactly as given. Return only valid JSON, no other text."""

    def __init__(self, api_key: Optional[str] = None, config: Optional[Settings] = None):
        self.config = config or default_settings
        self.api_key = api_key or self.config.anthropic_api_key
        self._client = None

    @property
    def client(self):
        """Lazy-load Anthropic client."""
        if self._client is None:
            if not self.api_key:
                raise ValueError("ANTHROPIC_API_KEY not configured")
            import anthropic
            self._client = anthropic.Anthropic(api_key=self.api_key)
        return self._client

    def build_prompt(self, candidate: UnifiedVar, payload: ExplanationPayload) -> str:
        breakdown = "\n".join(
            f"{e.dimension.value} | {e.score:.1f} | {e.weight:.2f} | {e.contribution:.2f} | {e.reasoning}"
            for e in payload.breakdown
        )
        return self.NARRATIVE_PROMPT.format(
            name=candidate.name,
            location=f"{candidate.hq_city}, {candidate.hq_state}".strip(", ") or "unknown",
            revenue=_fmt(candidate.annual_revenue, "${:,.0f}M"),
            margin=_fmt(candidate.ebitda_margin, "{:.1f}%"),
            growth=_fmt(candidate.growth_rate, "{:.1f}%"),
            ownership=candidate.ownership_type or "unknown",
            specialties=", ".join(candidate.specialties) or "unknown",
            vendors=", ".join(candidate.top_vendors) or "unknown",
            composite=payload.composite_score,
            rank=payload.rank,
            breakdown=breakdown,
        )

    async def narrate(
        self,
        candidate: UnifiedVar,
        payload: ExplanationPayload,
    ) -> Optional[Narrative]:
        """Ask Claude for a narrative; None if unavailable or unparseable."""
        if not self.api_key:
            logger.warning("LLM narrative unavailable: ANTHROPIC_API_KEY not set")
            return None

        prompt = self.build_prompt(candidate, payload)

        # Use sync client in a worker thread
        data = await asyncio.to_thread(self._call_api, prompt)
        if not data or not data.get("summary"):
            return None

        reasoning = data.get("reasoning") or {}
        if not isinstance(reasoning, dict):
            reasoning = {}
        return Narrative(
            summary=str(data["summary"]).strip(),
            reasoning={str(k): str(v) for k, v in reasoning.items() if v},
        )

    def _call_api(self, prompt: str) -> Optional[dict]:
        """Call Claude API synchronously."""
        try:
            response = self.client.messages.create(
                model=self.config.llm_model,
                max_tokens=self.config.llm_max_tokens,
                messages=[
                    {"role": "user", "content": prompt}
                ],
            )

            # Extract text response
            text = response.content[0].text
            return parse_json_response(text)

        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse LLM response as JSON: {e}")
            return None
        except Exception as e:
            logger.error(f"Claude API call failed: {e}")
            return None


def parse_json_response(text: str) -> dict:
    """Parse JSON from a model response, tolerating markdown code fences."""
    if "```json" in text:
        text = text.split("```json")[1].split("```")[0]
    elif "```" in text:
        text = text.split("```")[1].split("```")[0]
    data = json.loads(text.strip())
    if not isinstance(data, dict):
        raise json.JSONDecodeError("expected a JSON object", text, 0)
    return data


def build_narrator(config: Optional[Settings] = None) -> Narrator:
    """Use Claude when an API key is configured, templates otherwise."""
    config = config or default_settings
    if config.anthropic_api_key:
        return ClaudeNarrator(config=config)
    return TemplateNarrator()


def _fmt(value: Optional[float], pattern: str) -> str:
    return pattern.format(value) if value is not None else "unknown"
