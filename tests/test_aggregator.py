import asyncio
import random

import pytest

from stubs import StubProvider, content_judge, failing_reply, translation_reply
from transarena.aggregator import Aggregator, compute_scorecard, fan_out
from transarena.catalogue import SUPPORTED_LANGUAGES, get_profile
from transarena.comparator import Comparator
from transarena.errors import AggregationFault, ValidationError
from transarena.judge import Judge
from transarena.schemas import LanguageComparisonRecord, Winner
from transarena.translation import Translator


def _record(language, fast, capable, error=None):
    return LanguageComparisonRecord(
        language=language,
        fast_score=fast,
        capable_score=capable,
        error=error,
    )


def _aggregator(rng=None, capable_reply=None, scores=None, languages=SUPPORTED_LANGUAGES):
    comparator = Comparator(
        Translator(StubProvider("fast-model", reply=translation_reply("FAST"))),
        Translator(StubProvider("capable-model", reply=capable_reply or translation_reply("CAPABLE"))),
        Judge(StubProvider("judge-model", structured_reply=content_judge(
            scores or {"FAST": 70, "CAPABLE": 90}
        ))),
        rng=rng or random.Random(0),
    )
    return Aggregator(comparator, languages=languages)


class TestComputeScorecard:
    def test_nothing_evaluated(self):
        card = compute_scorecard([])
        assert card.evaluated_count == 0
        assert card.fast_average_score == 0
        assert card.capable_average_score == 0
        assert card.fast_win_rate == 0
        assert card.capable_win_rate == 0
        assert card.winner is Winner.TIE

    def test_only_errors_is_like_nothing(self):
        card = compute_scorecard([_record("French", None, None, error="HTTP 503")])
        assert card.evaluated_count == 0
        assert card.winner is Winner.TIE

    def test_averages_wins_and_rates(self):
        card = compute_scorecard([
            _record("French", 80, 90),
            _record("German", 85, 70),
            _record("Spanish", 60, 95),
        ])
        assert card.evaluated_count == 3
        assert card.fast_average_score == 75.0
        assert card.capable_average_score == 85.0
        assert card.fast_wins == 1
        assert card.capable_wins == 2
        assert card.fast_win_rate == 33.33
        assert card.capable_win_rate == 66.67
        assert card.winner is Winner.CAPABLE

    def test_tie_counts_for_no_one(self):
        card = compute_scorecard([_record("French", 80, 80), _record("German", 70, 90)])
        assert card.evaluated_count == 2
        assert card.fast_wins == 0
        assert card.capable_wins == 1
        assert card.fast_wins + card.capable_wins <= card.evaluated_count

    def test_error_records_skipped(self):
        card = compute_scorecard([
            _record("French", 80, 90),
            _record("German", 99, 1, error="judge failed"),
        ])
        assert card.evaluated_count == 1
        assert card.fast_average_score == 80.0

    def test_equal_averages_tie(self):
        card = compute_scorecard([_record("French", 90, 70), _record("German", 70, 90)])
        assert card.winner is Winner.TIE

    def test_rounding(self):
        card = compute_scorecard([
            _record("French", 70, 80),
            _record("German", 70, 80),
            _record("Spanish", 71, 81),
        ])
        assert card.fast_average_score == 70.33
        assert card.capable_average_score == 80.33


class TestFanOut:
    @pytest.mark.asyncio
    async def test_results_keep_input_order(self):
        async def slow_double(n):
            await asyncio.sleep(0.01 * (5 - n))
            return n * 2

        results = await fan_out([1, 2, 3, 4], slow_double, on_error=lambda n, e: None)
        assert results == [2, 4, 6, 8]

    @pytest.mark.asyncio
    async def test_bounded_concurrency(self):
        running = 0
        peak = 0

        async def op(n):
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(0.01)
            running -= 1
            return n

        await fan_out(list(range(10)), op, on_error=lambda n, e: None, concurrency=3)
        assert peak == 3

    @pytest.mark.asyncio
    async def test_failure_becomes_result(self):
        async def op(n):
            if n == 2:
                raise RuntimeError("bad item")
            return f"ok {n}"

        results = await fan_out([1, 2, 3], op, on_error=lambda n, e: f"error {n}: {e}")
        assert results == ["ok 1", "error 2: bad item", "ok 3"]


class TestAggregator:
    @pytest.mark.asyncio
    async def test_every_language_evaluated(self):
        report = await _aggregator().run("Save changes before closing?")
        assert list(report.results) == list(SUPPORTED_LANGUAGES)
        assert report.score_card.evaluated_count == 16
        assert report.score_card.capable_wins == 16
        assert report.score_card.capable_win_rate == 100.0
        assert report.score_card.winner is Winner.CAPABLE
        assert report.source_language == "English"
        assert report.models == {
            "fast": "fast-model",
            "capable": "capable-model",
            "judge": "judge-model",
        }

    @pytest.mark.asyncio
    async def test_one_failing_language_is_isolated(self):
        report = await _aggregator(capable_reply=failing_reply("CAPABLE", "German")).run("Hello")
        assert report.score_card.evaluated_count == 15
        german = report.results["German"]
        assert not german.ok
        assert german.fast_translation == "FAST|German|Hello"
        assert report.results["French"].ok

    @pytest.mark.asyncio
    async def test_source_language_passed_through(self):
        report = await _aggregator().run("Bonjour", source_language="French")
        assert report.source_language == "French"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", [None, "", "   \n"])
    async def test_blank_text_rejected(self, text):
        with pytest.raises(ValidationError, match="Text is required"):
            await _aggregator().run(text)

    @pytest.mark.asyncio
    async def test_no_languages_is_fault(self):
        with pytest.raises(AggregationFault):
            await _aggregator(languages={}).run("Hello")

    @pytest.mark.asyncio
    async def test_scorecard_independent_of_slot_draws(self):
        cards = []
        for seed in (1, 2, 3):
            report = await _aggregator(
                rng=random.Random(seed), scores={"FAST": 66, "CAPABLE": 77}
            ).run("Hello")
            cards.append(report.score_card)
        assert cards[0] == cards[1] == cards[2]
        assert cards[0].fast_average_score == 66.0

    @pytest.mark.asyncio
    async def test_scorecard_recomputed_per_run(self):
        aggregator = _aggregator(languages={"French": get_profile("French")})
        first = await aggregator.run("Hello")
        second = await aggregator.run("Hello")
        assert first.score_card.evaluated_count == 1
        assert second.score_card == first.score_card
