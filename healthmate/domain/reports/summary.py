# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Heuristic report summarization.

No model is involved: the summary is the leading sentences of the report and
the insights are simple counts that help a patient skim a long lab report.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import Decimal

_WHITESPACE = re.compile(r"\s+")
_SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+")
_NUMBER = re.compile(r"(\d+\.?\d*)")

SUMMARY_PREFIX = "Summary: "
DEFAULT_MAX_SENTENCES = 3
MAX_KEY_VALUES = 5
LONG_REPORT_CHARS = 400


@dataclass(slots=True, frozen=True)
class Insight:
    label: str
    value: str
    trend: str | None = None

    def to_dict(self) -> dict[str, str]:
        payload = {"label": self.label, "value": self.value}
        if self.trend is not None:
            payload["trend"] = self.trend
        return payload


def split_sentences(text: str) -> list[str]:
    normalized = _WHITESPACE.sub(" ", text)
    return [part for part in _SENTENCE_BREAK.split(normalized) if part]


def generate_summary(text: str, max_sentences: int = DEFAULT_MAX_SENTENCES) -> str:
    normalized = _WHITESPACE.sub(" ", text).strip()
    if not normalized:
        return ""

    sentences = [s.strip() for s in _SENTENCE_BREAK.split(normalized) if s.strip()]
    return SUMMARY_PREFIX + " ".join(sentences[:max_sentences])


def _format_number(raw: str) -> str:
    """Shortest round-trip digits; plain notation from 1e-6 up to 1e21,
    exponent notation such as ``1e+21`` outside that range."""
    value = float(raw)
    if math.isinf(value):
        return "Infinity"
    if value and not 1e-6 <= value < 1e21:
        mantissa, _, exponent = repr(value).partition("e")
        return f"{mantissa.removesuffix('.0')}e{int(exponent):+d}"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def extract_key_values(text: str, limit: int = MAX_KEY_VALUES) -> list[str]:
    return [_format_number(m.group(1)) for m in _NUMBER.finditer(text)][:limit]


def extract_insights(text: str) -> list[Insight]:
    numbers = extract_key_values(text)
    length = len(text)

    return [
        Insight(label="Key Values Found", value=", ".join(numbers) if numbers else "n/a"),
        Insight(
            label="Report Length",
            value=f"{length} chars",
            trend="long" if length > LONG_REPORT_CHARS else "short",
        ),
        Insight(label="Sentence Count", value=str(len(split_sentences(text)))),
    ]


__all__ = [
    "Insight",
    "extract_insights",
    "extract_key_values",
    "generate_summary",
    "split_sentences",
]
