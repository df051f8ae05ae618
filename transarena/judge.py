"""Judge adapter -- asks a model to compare two anonymous candidate translations.

The judge only ever sees slot labels A and B.  Which provider sits in which
slot is decided and undone by the comparator; this module knows nothing
about providers.

Judge output is semi-structured in practice even when JSON mode is
requested: models wrap it in code fences, add a sentence before it, or
quote numbers.  ``parse_verdict`` absorbs those variations and raises
JudgeError(MALFORMED) for anything it cannot read.
"""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any

from transarena.config import GenerationConfig
from transarena.errors import ErrorKind, JudgeError, ProviderError
from transarena.prompts import build_judge_prompt, judge_output_schema
from transarena.providers.base import BaseProvider
from transarena.schemas import Slot, Verdict

logger = logging.getLogger(__name__)

_OPENING_FENCE = re.compile(r"^```[\w-]*\s*")
_CLOSING_FENCE = re.compile(r"\s*```\s*$")
_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)

_SLOT_LABELS = {
    "A": Slot.A,
    "TRANSLATION A": Slot.A,
    "B": Slot.B,
    "TRANSLATION B": Slot.B,
}


def strip_code_fences(raw_text: str) -> str:
    """Remove a surrounding Markdown code fence (```json ... ```), if any."""
    text = raw_text.strip()
    if text.startswith("```"):
        text = _OPENING_FENCE.sub("", text, count=1)
        text = _CLOSING_FENCE.sub("", text, count=1)
    return text.strip()


def _load_object(text: str) -> dict:
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        # Fall back to the outermost {...} block, e.g. "Here is my verdict: {...}"
        match = _JSON_OBJECT.search(text)
        if not match:
            raise JudgeError(ErrorKind.MALFORMED, f"no JSON object in judge output: {text[:100]!r}")
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise JudgeError(ErrorKind.MALFORMED, f"invalid JSON in judge output: {e}") from e
    if not isinstance(data, dict):
        raise JudgeError(ErrorKind.MALFORMED, "judge output is not a JSON object")
    return data


def _to_score(value: Any) -> float | None:
    """Coerce a 0-100 score; None if missing, non-numeric or out of range."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip().rstrip("%"))
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    score = float(value)
    if math.isnan(score) or not 0.0 <= score <= 100.0:
        return None
    return score


def _required_score(data: dict, field: str) -> float:
    score = _to_score(data.get(field))
    if score is None:
        raise JudgeError(
            ErrorKind.MALFORMED,
            f"missing or invalid {field}: {data.get(field)!r}",
        )
    return score


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_verdict(raw_text: str) -> Verdict:
    """Parse raw judge output into a Verdict.

    Handles, in order: surrounding code fences, prose around a JSON object,
    numeric strings ("85", "85%").  ``scoreA`` and ``scoreB`` are required
    and must lie in 0-100; every other field is optional.

    Raises:
        JudgeError: MALFORMED when the output cannot be read as a verdict.
    """
    text = strip_code_fences(raw_text)
    if not text:
        raise JudgeError(ErrorKind.MALFORMED, "empty judge output")

    data = _load_object(text)
    label = str(data.get("winner") or "").strip().upper()

    return Verdict(
        score_a=_required_score(data, "scoreA"),
        score_b=_required_score(data, "scoreB"),
        semantic_similarity=_to_score(data.get("semanticSimilarity")),
        winning_slot=_SLOT_LABELS.get(label, Slot.TIE),
        reasoning=_optional_text(data.get("reasoning")) or "",
        back_translation_a=_optional_text(data.get("backTranslationA")),
        back_translation_b=_optional_text(data.get("backTranslationB")),
    )


class Judge:
    """Scores two candidate translations of the same original text."""

    def __init__(
        self,
        provider: BaseProvider,
        generation: GenerationConfig | None = None,
    ):
        self.provider = provider
        self.generation = generation or GenerationConfig(max_tokens=2048)

    @property
    def model_id(self) -> str:
        return self.provider.model_id

    async def evaluate(
        self,
        original: str,
        candidate_a: str,
        candidate_b: str,
        back_translate_to: str | None = None,
    ) -> Verdict:
        """Ask the judge for a verdict on slots A and B.

        When ``back_translate_to`` is given, the judge also translates each
        candidate back into that language.

        Raises:
            JudgeError: NETWORK if the call failed, MALFORMED if the answer
                could not be parsed.
        """
        system_prompt, user_message = build_judge_prompt(
            original, candidate_a, candidate_b, back_translate_to=back_translate_to
        )
        try:
            response = await self.provider.complete_structured(
                system_prompt=system_prompt,
                user_message=user_message,
                output_schema=judge_output_schema(back_translate_to is not None),
                temperature=self.generation.temperature,
                max_tokens=self.generation.max_tokens,
                seed=self.generation.seed,
            )
        except ProviderError as e:
            raise JudgeError(e.kind, e.message) from e

        try:
            return parse_verdict(response.text)
        except JudgeError:
            logger.warning(
                "Failed to parse judge verdict from %s: got '%s'",
                self.model_id,
                response.text[:100],
            )
            raise
