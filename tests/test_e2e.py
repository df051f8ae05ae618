# tests/test_e2e.py
from pathlib import Path

import pytest

from transarena.config import as_dry_run, load_config
from transarena.schemas import SimilarityRequest, TranslationRequest
from transarena.service import ArenaService

YAML_CONTENT = """
providers:
  fast:
    provider: mock
    model_id: "mock-fast"
  capable:
    provider: mock
    model_id: "mock-capable"
judge:
  provider: mock
  model_id: "mock-judge"
comparison:
  concurrency: 3
  random_seed: 42
"""


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "arena.yaml"
    path.write_text(YAML_CONTENT)
    return str(path)


class TestEndToEnd:
    @pytest.mark.asyncio
    async def test_similarity_index_mock(self, config_path):
        """Run the whole catalogue comparison with mock providers."""
        service = ArenaService.from_config(load_config(config_path), api_keys={})
        try:
            report = await service.similarity_index(
                SimilarityRequest(text="Save changes before closing?")
            )
        finally:
            await service.close()

        card = report.score_card
        assert card.evaluated_count == 16
        assert all(record.ok for record in report.results.values())
        assert card.fast_wins + card.capable_wins <= card.evaluated_count
        assert 0 <= card.fast_win_rate <= 100
        assert report.models == {
            "fast": "mock-fast",
            "capable": "mock-capable",
            "judge": "mock-judge",
        }

    @pytest.mark.asyncio
    async def test_seeded_runs_are_reproducible(self, config_path):
        reports = []
        for _ in range(2):
            service = ArenaService.from_config(load_config(config_path), api_keys={})
            try:
                reports.append(await service.similarity_index(SimilarityRequest(text="Open file")))
            finally:
                await service.close()
        assert reports[0] == reports[1]

    @pytest.mark.asyncio
    async def test_translate_to_check_mock(self, config_path):
        service = ArenaService.from_config(load_config(config_path), api_keys={})
        try:
            report = await service.translate_to_check(TranslationRequest(
                text="Please save your changes before closing the document.",
                target_language="Japanese",
            ))
        finally:
            await service.close()

        assert report.source_language.language == "English"
        assert report.target_native_name == "日本語"
        assert report.evaluation.back_translations["fast"]
        assert report.evaluation.back_translations["capable"]

    @pytest.mark.asyncio
    async def test_shipped_config_in_dry_run(self):
        config = as_dry_run(load_config(str(Path(__file__).parent.parent / "config" / "arena.yaml")))
        service = ArenaService.from_config(config, api_keys={})
        try:
            result = await service.detect("Bonjour tout le monde, comment allez-vous aujourd'hui?")
        finally:
            await service.close()
        assert result.language == "French"
