"""Shared fixtures: stub providers wired into translators, judge and service."""

from __future__ import annotations

import random

import pytest

from stubs import StubProvider, content_judge, translation_reply
from transarena.comparator import Comparator
from transarena.judge import Judge
from transarena.language_detect import StatisticalDetector
from transarena.service import ArenaService
from transarena.translation import Translator


@pytest.fixture
def fast_provider():
    return StubProvider("fast-model", reply=translation_reply("FAST"))


@pytest.fixture
def capable_provider():
    return StubProvider("capable-model", reply=translation_reply("CAPABLE"))


@pytest.fixture
def judge_provider():
    return StubProvider(
        "judge-model", structured_reply=content_judge({"FAST": 70, "CAPABLE": 90})
    )


@pytest.fixture
def comparator(fast_provider, capable_provider, judge_provider):
    return Comparator(
        Translator(fast_provider),
        Translator(capable_provider),
        Judge(judge_provider),
        rng=random.Random(7),
    )


@pytest.fixture
def service(fast_provider, capable_provider, judge_provider):
    return ArenaService(
        Translator(fast_provider),
        Translator(capable_provider),
        Judge(judge_provider),
        StatisticalDetector(),
        rng=random.Random(7),
    )
