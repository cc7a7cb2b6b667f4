# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol


@dataclass(slots=True, frozen=True)
class ModelInfo:
    name: str
    supported_methods: Sequence[str] = field(default_factory=tuple)

    def supports_generation(self) -> bool:
        return "generateContent" in self.supported_methods


class ChatModelPort(Protocol):
    async def generate(self, model: str, prompt: str) -> str: ...

    async def list_models(self) -> Sequence[ModelInfo]: ...


class PdfTextExtractor(Protocol):
    def extract_text(self, data: bytes) -> str: ...


class DocumentFetcher(Protocol):
    def fetch(self, url: str) -> bytes: ...
