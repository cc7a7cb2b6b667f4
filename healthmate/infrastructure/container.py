"""Application dependency container."""

from __future__ import annotations

from functools import cached_property

from healthmate.application.services.password_hashing import WerkzeugPasswordHasher
from healthmate.application.use_cases.chat.ask_health_question import AskHealthQuestionUseCase
from healthmate.application.use_cases.reports.extract_report_text import ExtractReportTextUseCase
from healthmate.application.use_cases.reports.summarize_report import SummarizeReportUseCase
from healthmate.application.use_cases.users.current_user import CurrentUserUseCase
from healthmate.application.use_cases.users.login_user import LoginUserUseCase
from healthmate.application.use_cases.users.register_user import RegisterUserUseCase
from healthmate.infrastructure.auth.session_cookie import SessionCookieManager
from healthmate.infrastructure.auth.tokens import JwtTokenService
from healthmate.infrastructure.chat.gemini import GeminiChatAdapter
from healthmate.infrastructure.db import MongoDatabase
from healthmate.infrastructure.reports.document_fetcher import HttpxDocumentFetcher
from healthmate.infrastructure.reports.pdf_extractor import PypdfTextExtractor
from healthmate.infrastructure.repositories.users.mongo_user_repository import (
    MongoUserRepository,
)
from healthmate.interfaces.http.controllers.auth_controller import AuthController
from healthmate.interfaces.http.controllers.chatbot_controller import ChatbotController
from healthmate.interfaces.http.controllers.misc_controller import MiscController
from healthmate.interfaces.http.controllers.reports_controller import ReportsController
from healthmate.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @cached_property
    def database(self) -> MongoDatabase:
        return MongoDatabase.from_config(self.config.database)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def user_repository(self) -> MongoUserRepository:
        return MongoUserRepository(self.database)

    @cached_property
    def token_service(self) -> JwtTokenService:
        return JwtTokenService.from_config(self.config.auth)

    @cached_property
    def session_cookies(self) -> SessionCookieManager:
        return SessionCookieManager(
            name=self.config.auth.cookie_name,
            max_age=self.config.auth.token_ttl_seconds,
            secure=self.config.is_production(),
        )

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def current_user_use_case(self) -> CurrentUserUseCase:
        return CurrentUserUseCase(users=self.user_repository, tokens=self.token_service)

    @cached_property
    def pdf_extractor(self) -> PypdfTextExtractor:
        return PypdfTextExtractor()

    @cached_property
    def document_fetcher(self) -> HttpxDocumentFetcher:
        return HttpxDocumentFetcher(
            timeout=self.config.upload.fetch_timeout,
            max_bytes=self.config.upload.max_upload_mb * 1024 * 1024,
        )

    @cached_property
    def extract_report_text_use_case(self) -> ExtractReportTextUseCase:
        return ExtractReportTextUseCase(
            extractor=self.pdf_extractor, fetcher=self.document_fetcher
        )

    @cached_property
    def summarize_report_use_case(self) -> SummarizeReportUseCase:
        return SummarizeReportUseCase(signer=self.token_service)

    @cached_property
    def chat_model(self) -> GeminiChatAdapter:
        return GeminiChatAdapter.from_config(self.config.chat)

    @cached_property
    def ask_health_question_use_case(self) -> AskHealthQuestionUseCase:
        return AskHealthQuestionUseCase(
            models=self.chat_model, preferred_model=self.config.chat.model
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            current_user_use_case=self.current_user_use_case,
            cookies=self.session_cookies,
            min_password_length=self.config.auth.min_password_length,
        )

    @cached_property
    def reports_controller(self) -> ReportsController:
        return ReportsController(
            extract_use_case=self.extract_report_text_use_case,
            summarize_use_case=self.summarize_report_use_case,
        )

    @cached_property
    def chatbot_controller(self) -> ChatbotController:
        return ChatbotController(
            ask_use_case=self.ask_health_question_use_case,
            configured=self.chat_model.configured,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(database=self.database)
