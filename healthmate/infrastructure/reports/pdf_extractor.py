# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import io

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from healthmate.application.interfaces import PdfTextExtractor
from healthmate.domain.reports.exceptions import ReportParseError
from healthmate.shared.logging import logger


def _clean_page(raw: str) -> str:
    lines = (line.strip() for line in raw.splitlines())
    return "\n".join(line for line in lines if line)


class PypdfTextExtractor(PdfTextExtractor):
    def extract_text(self, data: bytes) -> str:
        try:
            reader = PdfReader(io.BytesIO(data))
            if reader.is_encrypted and not reader.decrypt(""):
                raise ReportParseError("document is password protected")
            pages = list(reader.pages)
        except (PyPdfError, ValueError) as exc:
            raise ReportParseError(str(exc) or type(exc).__name__) from exc

        chunks: list[str] = []
        for number, page in enumerate(pages, start=1):
            try:
                text = _clean_page(page.extract_text() or "")
            except Exception as exc:
                logger.warning(f"reports.pdf: page {number} skipped ({type(exc).__name__}: {exc})")
                continue
            if text:
                chunks.append(text)

        return "\n\n".join(chunks).strip()
