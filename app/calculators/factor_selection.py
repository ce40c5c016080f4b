"""
Choosing one emission factor among candidates.

Selectors only pick an index into the candidate list; the arithmetic is always
done by the local calculators.
"""
import json
import re
from dataclasses import dataclass
from typing import Any, Protocol, Sequence

import google.generativeai as genai
from loguru import logger

from app.config import settings
from app.core.exceptions import BadRequestError

_DESCRIPTIVE_ATTRIBUTES = (
    "activity_name",
    "name",
    "level1_category",
    "level2_category",
    "level3_category",
    "level4_category",
    "category",
    "fuel_type",
    "activity_type",
)

_TOKEN = re.compile(r"[a-z0-9]+")


@dataclass
class FactorQuery:
    text: str
    unit: str | None = None


def describe(candidate: Any) -> str:
    """Join the descriptive fields of a factor into one searchable string."""
    parts = [getattr(candidate, attr, None) for attr in _DESCRIPTIVE_ATTRIBUTES]
    parts.extend(getattr(candidate, "keywords", None) or [])
    return " ".join(str(p) for p in parts if p)


def _tokens(text: str) -> set[str]:
    return set(_TOKEN.findall(text.lower()))


def _normalize_unit(unit: str | None) -> str:
    return (unit or "").strip().lower().replace(" ", "")


class FactorSelector(Protocol):
    async def select(self, query: FactorQuery, candidates: Sequence[Any]) -> Any: ...


class KeywordFactorSelector:
    """Score candidates by shared words with the query, with a bonus for the same unit."""

    unit_bonus = 2

    def score(self, query: FactorQuery, candidate: Any) -> int:
        score = len(_tokens(query.text) & _tokens(describe(candidate)))
        if query.unit and _normalize_unit(query.unit) == _normalize_unit(getattr(candidate, "unit", None)):
            score += self.unit_bonus
        return score

    async def select(self, query: FactorQuery, candidates: Sequence[Any]) -> Any:
        if not candidates:
            raise BadRequestError("No emission factor candidates found for this activity")
        # max() keeps the first of equal scores, so candidate order breaks ties
        return max(candidates, key=lambda c: self.score(query, c))


_SELECTION_PROMPT = """You choose emission factors for a carbon accounting tool.
Pick the single candidate that best matches the activity.

Activity: {activity}
Unit: {unit}

Candidates:
{candidates}

Reply with JSON only, no markdown:
{{"index": <candidate number>}}
"""


class GeminiFactorSelector:
    """Ask Gemini for a candidate index; anything unexpected falls back to keywords."""

    def __init__(self, api_key: str, model_name: str, fallback: KeywordFactorSelector | None = None):
        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(model_name)
        self.fallback = fallback or KeywordFactorSelector()

    def build_prompt(self, query: FactorQuery, candidates: Sequence[Any]) -> str:
        lines = [
            f"{i}. {describe(c)} ({getattr(c, 'unit', '')})"
            for i, c in enumerate(candidates)
        ]
        return _SELECTION_PROMPT.format(
            activity=query.text,
            unit=query.unit or "unknown",
            candidates="\n".join(lines),
        )

    @staticmethod
    def parse_index(raw: str) -> int:
        raw = raw.strip()
        # Clean markdown code fences if present
        if raw.startswith("```"):
            raw = raw.split("\n", 1)[1] if "\n" in raw else raw[3:]
        if raw.endswith("```"):
            raw = raw[:-3]
        return int(json.loads(raw.strip())["index"])

    async def select(self, query: FactorQuery, candidates: Sequence[Any]) -> Any:
        if not candidates:
            raise BadRequestError("No emission factor candidates found for this activity")

        try:
            response = await self.model.generate_content_async(
                self.build_prompt(query, candidates),
                generation_config=genai.GenerationConfig(
                    temperature=0.1,
                    max_output_tokens=50,
                ),
            )
            index = self.parse_index(response.text)
            if not 0 <= index < len(candidates):
                raise ValueError(f"index {index} out of range")
            logger.bind(activity=query.text).info("Gemini selected factor {}", index)
            return candidates[index]
        except Exception as err:  # pylint: disable=broad-except
            logger.bind(activity=query.text).warning(
                "Gemini factor selection failed, using keyword match: {}", err
            )
            return await self.fallback.select(query, candidates)


def get_factor_selector() -> FactorSelector:
    """Gemini when an API key is configured, otherwise keyword matching."""
    if settings.GEMINI_API_KEY:
        return GeminiFactorSelector(settings.GEMINI_API_KEY, settings.GEMINI_MODEL)
    return KeywordFactorSelector()
