# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import base64
import binascii

from healthmate.application.interfaces import DocumentFetcher, PdfTextExtractor
from healthmate.domain.reports.exceptions import ReportParseError, ReportSourceError
from healthmate.shared.logging import logger


class ExtractReportTextUseCase:
    def __init__(self, *, extractor: PdfTextExtractor, fetcher: DocumentFetcher) -> None:
        self._extractor = extractor
        self._fetcher = fetcher

    def from_bytes(self, data: bytes) -> str:
        text = self._extractor.extract_text(data)
        logger.info(f"reports.extract: ok bytes={len(data)} chars={len(text)}")
        return text

    def from_base64(self, encoded: str) -> str:
        try:
            data = base64.b64decode(encoded)
        except (binascii.Error, ValueError) as exc:
            raise ReportSourceError(message="Failed to parse base64 PDF") from exc
        return self._from_client_document(data, "Failed to parse base64 PDF")

    def from_url(self, url: str) -> str:
        data = self._fetcher.fetch(url)
        return self._from_client_document(data, "Failed to download or parse URL")

    def _from_client_document(self, data: bytes, fallback: str) -> str:
        # documents referenced in a JSON body are reported as client errors
        try:
            return self.from_bytes(data)
        except ReportParseError as exc:
            logger.warning(f"reports.extract: client document rejected: {exc}")
            raise ReportSourceError(message=exc.message or fallback) from exc
