from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import jwt

from healthmate.application.use_cases.reports.summarize_report import SummarizeReportUseCase
from healthmate.domain.reports.summary import (
    extract_insights,
    extract_key_values,
    generate_summary,
    split_sentences,
)
from healthmate.infrastructure.auth.tokens import JwtTokenService
from healthmate.tests.fakes import TEST_SECRET

REPORT = "Hemoglobin 13.5 g/dL. Glucose 90 mg/dL.  Cholesterol 180! Is it normal? Yes."


def test_summary_keeps_leading_sentences() -> None:
    assert generate_summary(REPORT) == (
        "Summary: Hemoglobin 13.5 g/dL. Glucose 90 mg/dL. Cholesterol 180!"
    )


def test_summary_of_short_text_keeps_everything() -> None:
    assert generate_summary("  All values\nnormal ") == "Summary: All values normal"


def test_summary_of_blank_text_is_empty() -> None:
    assert generate_summary("   \n ") == ""


def test_split_sentences_normalizes_whitespace() -> None:
    assert split_sentences("One.\n\nTwo?  Three") == ["One.", "Two?", "Three"]


def test_key_values_are_limited_and_normalized() -> None:
    text = "Values 1.0, 2.50, 3, 4, 5, 6 and 7"

    assert extract_key_values(text) == ["1", "2.5", "3", "4", "5"]


def test_insights_for_short_report() -> None:
    insights = [i.to_dict() for i in extract_insights(REPORT)]

    assert insights == [
        {"label": "Key Values Found", "value": "13.5, 90, 180"},
        {"label": "Report Length", "value": f"{len(REPORT)} chars", "trend": "short"},
        {"label": "Sentence Count", "value": "5"},
    ]


def test_insights_without_numbers_and_long_text() -> None:
    text = "word " * 100

    insights = {i.label: i for i in extract_insights(text)}

    assert insights["Key Values Found"].value == "n/a"
    assert insights["Report Length"].trend == "long"


class _RecordingSigner:
    def __init__(self) -> None:
        self.calls: list[tuple[dict[str, Any], int]] = []

    def sign_payload(self, payload: Mapping[str, Any], ttl_seconds: int) -> str:
        self.calls.append((dict(payload), ttl_seconds))
        return "signed"


class _BrokenSigner:
    def sign_payload(self, payload: Mapping[str, Any], ttl_seconds: int) -> str:
        raise TypeError("payload not serializable")


def test_summarize_without_token() -> None:
    signer = _RecordingSigner()

    result = SummarizeReportUseCase(signer=signer).execute(REPORT)

    assert set(result.to_dict()) == {"summary", "insights"}
    assert signer.calls == []


def test_summarize_with_token_signs_payload_for_one_hour() -> None:
    service = JwtTokenService(TEST_SECRET)

    result = SummarizeReportUseCase(signer=service).execute(
        REPORT, create_token=True, token_payload={"reportId": "r-9"}
    )

    decoded = jwt.decode(result.token, TEST_SECRET, algorithms=["HS256"])
    assert decoded["reportId"] == "r-9"
    assert decoded["exp"] - decoded["iat"] == 3600
    assert "tokenError" not in result.to_dict()


def test_summarize_token_error_when_secret_missing() -> None:
    result = SummarizeReportUseCase(signer=JwtTokenService(None)).execute(
        REPORT, create_token=True
    )

    payload = result.to_dict()
    assert payload["tokenError"] == "JWT_SECRET not configured on server"
    assert "token" not in payload
    assert payload["summary"].startswith("Summary: ")


def test_summarize_token_error_on_signing_failure() -> None:
    result = SummarizeReportUseCase(signer=_BrokenSigner()).execute(REPORT, create_token=True)

    assert result.to_dict()["tokenError"] == "Failed to create token"


def test_large_and_tiny_values_render_in_shortest_form() -> None:
    text = "id 12345678901234567890, dose 0.000001, ratio 0.0000001, huge 1000000000000000000000"

    assert extract_key_values(text) == [
        "12345678901234567000",
        "0.000001",
        "1e-7",
        "1e+21",
    ]


def test_summarize_array_payload_fails_token_only() -> None:
    result = SummarizeReportUseCase(signer=JwtTokenService(TEST_SECRET)).execute(
        REPORT, create_token=True, token_payload=[1, 2]
    )

    payload = result.to_dict()
    assert payload["tokenError"] == "Failed to create token"
    assert "token" not in payload
    assert payload["summary"].startswith("Summary: ")
