import pytest
from pydantic import ValidationError as PydanticValidationError

from transarena.errors import ErrorKind, JudgeError, ProviderError, UnsupportedLanguageError
from transarena.schemas import (
    LanguageComparisonRecord,
    LanguageProfile,
    ProviderId,
    ProviderResult,
    ScoreCard,
    TranslationRequest,
    Winner,
)


class TestCamelCaseBodies:
    def test_request_accepts_camel_case(self):
        request = TranslationRequest.model_validate(
            {"text": "Hi", "targetLanguage": "French", "sourceLanguage": "English"}
        )
        assert request.target_language == "French"
        assert request.source_language == "English"

    def test_request_accepts_field_names(self):
        request = TranslationRequest(text="Hi", target_language="German")
        assert request.target_language == "German"

    def test_record_dumps_camel_case(self):
        record = LanguageComparisonRecord(
            language="French",
            fast_translation="Bonjour",
            capable_translation="Salut",
            fast_score=70,
            capable_score=90,
            winner=Winner.CAPABLE,
        )
        data = record.model_dump(mode="json", by_alias=True, exclude_none=True)
        assert data == {
            "language": "French",
            "fastTranslation": "Bonjour",
            "capableTranslation": "Salut",
            "fastScore": 70.0,
            "capableScore": 90.0,
            "winner": "Capable",
        }

    def test_scorecard_aliases(self):
        card = ScoreCard(
            evaluated_count=0,
            fast_average_score=0,
            capable_average_score=0,
            fast_wins=0,
            capable_wins=0,
            fast_win_rate=0,
            capable_win_rate=0,
            winner=Winner.TIE,
        )
        data = card.model_dump(by_alias=True)
        assert "evaluatedCount" in data
        assert "capableWinRate" in data


class TestMarkers:
    def test_provider_result_success(self):
        assert ProviderResult(provider=ProviderId.FAST, text="Hallo").success
        assert not ProviderResult(provider=ProviderId.FAST, error="timeout").success

    def test_record_ok(self):
        assert LanguageComparisonRecord(language="French").ok
        assert not LanguageComparisonRecord(language="French", error="judge failed").ok


class TestLanguageProfile:
    def test_frozen(self):
        profile = LanguageProfile(name="X", native_name="X", script="Latin", conventions="")
        with pytest.raises(PydanticValidationError):
            profile.name = "Y"


class TestErrors:
    def test_unsupported_language_body(self):
        error = UnsupportedLanguageError("Klingon", "French, German")
        assert error.status_code == 400
        assert error.to_dict() == {
            "error": 'Unsupported target language: "Klingon".',
            "supported": "French, German",
        }

    def test_provider_error_str(self):
        error = ProviderError(ErrorKind.NETWORK, "HTTP 503", provider="groq")
        assert str(error) == "groq network error: HTTP 503"

    def test_judge_error_has_no_empty_kind(self):
        assert JudgeError(ErrorKind.EMPTY, "blank").kind is ErrorKind.MALFORMED
