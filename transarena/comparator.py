"""Bias-mitigated comparison of the Fast and Capable translators.

LLM judges tend to prefer whichever candidate they read first (or last).
For every comparison a fresh coin flip decides which provider goes into
slot A; the judge scores slots, and ``deanonymize`` maps the slot scores
back onto providers.  The winner is then recomputed from those scores,
so the judge's own "winner" label never decides the outcome.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import NamedTuple

from transarena.errors import JudgeError, ProviderError
from transarena.judge import Judge
from transarena.schemas import (
    AnonymizedPair,
    LanguageComparisonRecord,
    LanguageProfile,
    ProviderId,
    ProviderResult,
    Slot,
    Verdict,
    Winner,
)
from transarena.translation import Translator

logger = logging.getLogger(__name__)


class ProviderScores(NamedTuple):
    fast_score: float
    capable_score: float
    fast_back_translation: str | None
    capable_back_translation: str | None
    # The judge's literal winner label, mapped onto providers
    judge_label: Winner


def draw_swap(rng: random.Random) -> bool:
    """Unbiased coin flip: True puts Capable in slot A."""
    return rng.random() < 0.5


def anonymize(fast_text: str, capable_text: str, swapped: bool) -> AnonymizedPair:
    if swapped:
        return AnonymizedPair(slot_a=capable_text, slot_b=fast_text, swapped=True)
    return AnonymizedPair(slot_a=fast_text, slot_b=capable_text, swapped=False)


def deanonymize(verdict: Verdict, pair: AnonymizedPair) -> ProviderScores:
    """Map slot-level verdict fields back onto the providers that filled the slots."""
    if pair.swapped:
        label = {Slot.A: Winner.CAPABLE, Slot.B: Winner.FAST}.get(verdict.winning_slot, Winner.TIE)
        return ProviderScores(
            fast_score=verdict.score_b,
            capable_score=verdict.score_a,
            fast_back_translation=verdict.back_translation_b,
            capable_back_translation=verdict.back_translation_a,
            judge_label=label,
        )
    label = {Slot.A: Winner.FAST, Slot.B: Winner.CAPABLE}.get(verdict.winning_slot, Winner.TIE)
    return ProviderScores(
        fast_score=verdict.score_a,
        capable_score=verdict.score_b,
        fast_back_translation=verdict.back_translation_a,
        capable_back_translation=verdict.back_translation_b,
        judge_label=label,
    )


def decide_winner(fast_score: float, capable_score: float) -> Winner:
    if fast_score > capable_score:
        return Winner.FAST
    if capable_score > fast_score:
        return Winner.CAPABLE
    return Winner.TIE


class Comparator:
    """Produces one LanguageComparisonRecord per language. Never raises."""

    def __init__(
        self,
        fast: Translator,
        capable: Translator,
        judge: Judge,
        rng: random.Random | None = None,
    ):
        self.fast = fast
        self.capable = capable
        self.judge = judge
        self._rng = rng or random.Random()

    async def compare(
        self,
        text: str,
        profile: LanguageProfile,
        back_translate_to: str | None = None,
    ) -> LanguageComparisonRecord:
        try:
            return await self._compare(text, profile, back_translate_to)
        except Exception as e:
            logger.exception("Comparison for %s failed unexpectedly", profile.name)
            return LanguageComparisonRecord(
                language=profile.name, error=f"{type(e).__name__}: {e}"
            )

    async def _translate(
        self,
        provider_id: ProviderId,
        translator: Translator,
        text: str,
        profile: LanguageProfile,
    ) -> ProviderResult:
        try:
            translated = await translator.translate(text, profile)
        except ProviderError as e:
            logger.warning("%s translation into %s failed: %s", provider_id.value, profile.name, e)
            return ProviderResult(provider=provider_id, error=str(e))
        return ProviderResult(provider=provider_id, text=translated)

    async def _translate_both(
        self, text: str, profile: LanguageProfile
    ) -> tuple[ProviderResult, ProviderResult]:
        # Both providers are always attempted; an unexpected exception in one
        # becomes an error marker rather than cancelling the other.
        outcomes = await asyncio.gather(
            self._translate(ProviderId.FAST, self.fast, text, profile),
            self._translate(ProviderId.CAPABLE, self.capable, text, profile),
            return_exceptions=True,
        )
        results = []
        for provider_id, outcome in zip((ProviderId.FAST, ProviderId.CAPABLE), outcomes):
            if isinstance(outcome, ProviderResult):
                results.append(outcome)
            elif isinstance(outcome, Exception):
                results.append(ProviderResult(
                    provider=provider_id, error=f"{type(outcome).__name__}: {outcome}"
                ))
            else:
                raise outcome
        return results[0], results[1]

    async def _compare(
        self,
        text: str,
        profile: LanguageProfile,
        back_translate_to: str | None,
    ) -> LanguageComparisonRecord:
        fast_result, capable_result = await self._translate_both(text, profile)
        record = LanguageComparisonRecord(
            language=profile.name,
            fast_translation=fast_result.text,
            capable_translation=capable_result.text,
        )

        failures = [r.error for r in (fast_result, capable_result) if not r.success]
        if failures:
            return record.model_copy(update={"error": "; ".join(failures)})

        pair = anonymize(fast_result.text, capable_result.text, draw_swap(self._rng))
        try:
            verdict = await self.judge.evaluate(
                text, pair.slot_a, pair.slot_b, back_translate_to=back_translate_to
            )
        except JudgeError as e:
            logger.warning("Judging %s failed: %s", profile.name, e)
            return record.model_copy(update={"error": str(e)})

        scores = deanonymize(verdict, pair)
        winner = decide_winner(scores.fast_score, scores.capable_score)
        if scores.judge_label is not winner:
            logger.info(
                "Judge label %s disagrees with scores for %s (fast=%.1f, capable=%.1f); using %s",
                scores.judge_label.value,
                profile.name,
                scores.fast_score,
                scores.capable_score,
                winner.value,
            )

        return record.model_copy(update={
            "fast_score": scores.fast_score,
            "capable_score": scores.capable_score,
            "semantic_similarity": verdict.semantic_similarity,
            "winner": winner,
            "reasoning": verdict.reasoning,
            "fast_back_translation": scores.fast_back_translation,
            "capable_back_translation": scores.capable_back_translation,
        })
