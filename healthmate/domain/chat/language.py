# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Literal

Language = Literal["hi", "en"]

SUPPORTED_LANGUAGES: tuple[Language, ...] = ("hi", "en")

# Devanagari block
_DEVANAGARI = re.compile(r"[ऀ-ॿ]")


def detect_language(text: str) -> Language:
    return "hi" if _DEVANAGARI.search(text) else "en"


def resolve_language(requested: str | None, text: str) -> Language:
    if requested in SUPPORTED_LANGUAGES:
        return requested  # type: ignore[return-value]
    return detect_language(text)
