"""Dry-run script: exercises the full comparison pipeline with MockProvider.

Usage:
    python -m scripts.dry_run
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

# Ensure project root is on sys.path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from transarena.config import as_dry_run, load_config
from transarena.schemas import SimilarityRequest, TranslationRequest
from transarena.service import ArenaService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
)
logger = logging.getLogger("dry_run")

CONFIG_PATH = "config/arena.yaml"
SAMPLE_TEXT = "Save changes before closing?"


async def main() -> None:
    config = as_dry_run(load_config(CONFIG_PATH))
    service = ArenaService.from_config(config, api_keys={})

    try:
        # --- Stage 1: Similarity index across the whole catalogue ---
        logger.info("=" * 60)
        logger.info("STAGE 1: Similarity index (dry-run with MockProvider)")
        logger.info("=" * 60)

        report = await service.similarity_index(SimilarityRequest(text=SAMPLE_TEXT))
        card = report.score_card
        logger.info("  Evaluated: %d languages", card.evaluated_count)
        logger.info("  Fast avg: %.2f  win rate: %.2f%%", card.fast_average_score, card.fast_win_rate)
        logger.info("  Capable avg: %.2f  win rate: %.2f%%", card.capable_average_score, card.capable_win_rate)
        logger.info("  Winner: %s", card.winner.value)

        failed = [name for name, record in report.results.items() if not record.ok]
        if failed:
            logger.error("Dry run FAILED: %d languages errored: %s", len(failed), failed)
            sys.exit(1)

        # --- Stage 2: Single-language check with back-translations ---
        logger.info("=" * 60)
        logger.info("STAGE 2: Translate-to-check into French")
        logger.info("=" * 60)

        check = await service.translate_to_check(
            TranslationRequest(text=SAMPLE_TEXT, target_language="French")
        )
        logger.info("  Source: %s", check.source_language.language)
        logger.info("  Fast: %s", check.translations["fast"])
        logger.info("  Capable: %s", check.translations["capable"])
        logger.info("  Winner: %s", check.evaluation.winner.value)
    finally:
        await service.close()

    logger.info("Dry run complete")


if __name__ == "__main__":
    asyncio.run(main())
