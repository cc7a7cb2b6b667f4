# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from healthmate.application.use_cases.reports.extract_report_text import ExtractReportTextUseCase
from healthmate.application.use_cases.reports.summarize_report import SummarizeReportUseCase
from healthmate.domain.reports.exceptions import (
    ReportParseError,
    ReportSourceError,
    UnsupportedMediaTypeError,
)
from healthmate.interfaces.http.dto.reports import ParsePdfJsonDTO, SummaryRequestDTO
from healthmate.shared.errors import AppError
from healthmate.shared.errors import ValidationError as RequestValidationError
from healthmate.shared.errors.validation import raise_validation_error
from healthmate.shared.logging import logger


class ReportsController:
    def __init__(
        self,
        *,
        extract_use_case: ExtractReportTextUseCase,
        summarize_use_case: SummarizeReportUseCase,
    ) -> None:
        self._extract_use_case = extract_use_case
        self._summarize_use_case = summarize_use_case

    def parse_pdf(self) -> tuple[Response, int]:
        try:
            text = self._extract()
        except (AppError, HTTPException):
            raise
        except Exception as exc:
            logger.exception("reports.parse_pdf: unexpected failure")
            raise ReportParseError(str(exc) or type(exc).__name__) from exc
        return jsonify({"text": text}), HTTPStatus.OK

    def _extract(self) -> str:
        content_type = request.content_type or ""

        if "multipart/form-data" in content_type:
            upload = request.files.get("file")
            if upload is None:
                raise ReportSourceError(message="Missing file in form-data under key 'file'")
            return self._extract_use_case.from_bytes(upload.read())

        if "application/json" in content_type:
            body = request.get_json(silent=True)
            try:
                dto = ParsePdfJsonDTO.model_validate(body if isinstance(body, dict) else {})
            except ValidationError as exc:
                raise_validation_error(exc)
            if dto.url:
                return self._extract_use_case.from_url(dto.url)
            if dto.base64:
                return self._extract_use_case.from_base64(dto.base64)
            raise ReportSourceError(
                message="Missing 'url' or 'base64' in JSON body or invalid content-type"
            )

        raise UnsupportedMediaTypeError()

    def summarize(self) -> tuple[Response, int]:
        body = request.get_json(force=True, silent=True)
        if not isinstance(body, dict):
            raise RequestValidationError("Invalid JSON body", code="invalid_json")
        try:
            dto = SummaryRequestDTO.model_validate(body)
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._summarize_use_case.execute(
            dto.text,
            create_token=dto.create_token,
            token_payload=dto.token_payload,
        )
        logger.info(f"summary: ok chars={len(dto.text)} token={result.token is not None}")
        return jsonify(result.to_dict()), HTTPStatus.OK

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("reports", __name__, url_prefix="/api")
        bp.add_url_rule("/parse-pdf", view_func=self.parse_pdf, methods=["POST"], endpoint="parse_pdf")
        bp.add_url_rule("/summary", view_func=self.summarize, methods=["POST"], endpoint="summary")
        return bp
