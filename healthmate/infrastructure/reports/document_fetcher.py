# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import httpx

from healthmate.application.interfaces import DocumentFetcher
from healthmate.domain.reports.exceptions import ReportSourceError
from healthmate.shared.logging import logger


class HttpxDocumentFetcher(DocumentFetcher):
    def __init__(
        self,
        *,
        timeout: float = 30.0,
        max_bytes: int | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._max_bytes = max_bytes
        self._transport = transport

    def fetch(self, url: str) -> bytes:
        if not url.lower().startswith(("http://", "https://")):
            raise ReportSourceError(message="Only http(s) URLs can be fetched")
        try:
            with httpx.Client(
                timeout=self._timeout, follow_redirects=True, transport=self._transport
            ) as http:
                response = http.get(url)
        except httpx.HTTPError as exc:
            logger.warning(f"reports.fetch: {type(exc).__name__} for {url}")
            raise ReportSourceError(message=str(exc) or "Failed to download or parse URL") from exc

        if response.is_error:
            raise ReportSourceError(message=f"Failed to fetch URL: {response.status_code}")
        content = response.content
        if self._max_bytes is not None and len(content) > self._max_bytes:
            raise ReportSourceError(message="Referenced document is too large")
        logger.info(f"reports.fetch: ok bytes={len(content)}")
        return content
