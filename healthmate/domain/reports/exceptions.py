# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from healthmate.shared.errors.base import DomainError


class UnsupportedMediaTypeError(DomainError):
    code = "unsupported_media_type"
    status = HTTPStatus.UNSUPPORTED_MEDIA_TYPE
    message = (
        "Unsupported content-type. Use multipart/form-data with 'file' or JSON with 'base64'"
    )


class ReportSourceError(DomainError):
    """The uploaded or referenced report could not be obtained or decoded."""

    code = "report_source_invalid"
    status = HTTPStatus.BAD_REQUEST


class ReportParseError(DomainError):
    code = "report_parse_failed"
    status = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, reason: str) -> None:
        super().__init__(message=f"PDF parse failed: {reason}")
