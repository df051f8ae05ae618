"""Catalogue-wide comparison runs and scorecard computation.

``fan_out`` is the generic per-item runner: bounded concurrency, results in
input order, and a failing item turned into a result by ``on_error`` so one
bad language never takes the run down.  ``compute_scorecard`` is a pure fold
over the finished records, recomputed from scratch for every run.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Iterable, Mapping, Sequence, TypeVar

from transarena.catalogue import SUPPORTED_LANGUAGES
from transarena.comparator import Comparator, decide_winner
from transarena.errors import AggregationFault, ValidationError
from transarena.schemas import (
    LanguageComparisonRecord,
    LanguageProfile,
    ScoreCard,
    SimilarityReport,
    Winner,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_SOURCE_LANGUAGE = "English"


async def fan_out(
    items: Sequence[T],
    operation: Callable[[T], Awaitable[R]],
    on_error: Callable[[T, Exception], R],
    concurrency: int = 4,
) -> list[R]:
    """Run ``operation`` over every item and join all outcomes.

    At most ``concurrency`` operations run at once.  Results come back in
    the order of ``items``.
    """
    semaphore = asyncio.Semaphore(max(1, concurrency))

    async def run_one(item: T) -> R:
        async with semaphore:
            try:
                return await operation(item)
            except Exception as e:
                logger.error("Item %r failed: %s", item, e)
                return on_error(item, e)

    return list(await asyncio.gather(*(run_one(item) for item in items)))


def _percent(part: float, whole: int) -> float:
    return part / whole * 100 if whole else 0.0


def compute_scorecard(records: Iterable[LanguageComparisonRecord]) -> ScoreCard:
    """Fold successful records into averages, win counts and win rates.

    Error-marked records are skipped.  A Tie record counts as a win for
    neither provider.  With nothing evaluated every figure is 0 and the
    overall winner is Tie.
    """
    total_fast = 0.0
    total_capable = 0.0
    fast_wins = 0
    capable_wins = 0
    evaluated = 0

    for record in records:
        if not record.ok or record.fast_score is None or record.capable_score is None:
            continue
        total_fast += record.fast_score
        total_capable += record.capable_score
        winner = decide_winner(record.fast_score, record.capable_score)
        if winner is Winner.FAST:
            fast_wins += 1
        elif winner is Winner.CAPABLE:
            capable_wins += 1
        evaluated += 1

    average_fast = total_fast / evaluated if evaluated else 0.0
    average_capable = total_capable / evaluated if evaluated else 0.0

    return ScoreCard(
        evaluated_count=evaluated,
        fast_average_score=round(average_fast, 2),
        capable_average_score=round(average_capable, 2),
        fast_wins=fast_wins,
        capable_wins=capable_wins,
        fast_win_rate=round(_percent(fast_wins, evaluated), 2),
        capable_win_rate=round(_percent(capable_wins, evaluated), 2),
        winner=decide_winner(average_fast, average_capable),
    )


class Aggregator:
    """Runs the comparator over every catalogue language."""

    def __init__(
        self,
        comparator: Comparator,
        languages: Mapping[str, LanguageProfile] = SUPPORTED_LANGUAGES,
        concurrency: int = 4,
    ):
        self.comparator = comparator
        self.languages = languages
        self.concurrency = concurrency

    @property
    def models(self) -> dict[str, str]:
        return {
            "fast": self.comparator.fast.model_id,
            "capable": self.comparator.capable.model_id,
            "judge": self.comparator.judge.model_id,
        }

    async def run(self, text: str | None, source_language: str | None = None) -> SimilarityReport:
        """Compare both providers on ``text`` for every language.

        Raises:
            ValidationError: If ``text`` is missing or blank.
            AggregationFault: If there are no languages to evaluate.
        """
        if not text or not text.strip():
            raise ValidationError("Text is required")
        if not self.languages:
            raise AggregationFault("No languages configured for evaluation")

        profiles = list(self.languages.values())
        logger.info("Comparing providers across %d languages", len(profiles))

        records = await fan_out(
            profiles,
            lambda profile: self.comparator.compare(text, profile),
            on_error=lambda profile, e: LanguageComparisonRecord(
                language=profile.name, error=f"{type(e).__name__}: {e}"
            ),
            concurrency=self.concurrency,
        )

        score_card = compute_scorecard(records)
        failed = [r.language for r in records if not r.ok]
        if failed:
            logger.warning("%d languages could not be evaluated: %s", len(failed), ", ".join(failed))
        logger.info(
            "Evaluated %d/%d languages: fast=%.2f capable=%.2f winner=%s",
            score_card.evaluated_count,
            len(profiles),
            score_card.fast_average_score,
            score_card.capable_average_score,
            score_card.winner.value,
        )

        return SimilarityReport(
            source_language=source_language or DEFAULT_SOURCE_LANGUAGE,
            models=self.models,
            score_card=score_card,
            results={record.language: record for record in records},
        )
