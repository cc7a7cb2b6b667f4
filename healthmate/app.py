# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import atexit
import importlib
from typing import Any, Protocol, cast

from flask import Flask

from healthmate.infrastructure.container import Container
from healthmate.shared.config import AppConfig, load_config
from healthmate.shared.logging import logger, setup_logging
from healthmate.shared.middleware.error_handler import configure_error_handling
from healthmate.shared.middleware.request_logger import configure_request_logging


class _CORSCallable(Protocol):
    def __call__(self, app: Flask, **kwargs: Any) -> Any: ...


_flask_cors = importlib.import_module("flask_cors")
CORS = cast(_CORSCallable, _flask_cors.CORS)


def create_app(config: AppConfig | None = None, container: Container | None = None) -> Flask:
    config = config or load_config()
    container = container or Container(config)
    setup_logging(debug_mode=config.debug_logging)

    app = Flask(__name__)
    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    app.config.update(MAX_CONTENT_LENGTH=config.upload.max_upload_mb * 1024 * 1024)

    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": config.security.allowed_origins}}
    }
    if any(o != "*" for o in config.security.allowed_origins):
        cors_kwargs["supports_credentials"] = True
    CORS(app, **cors_kwargs)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.reports_controller.as_blueprint())
    app.register_blueprint(container.chatbot_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")
        resp.headers.setdefault("Cross-Origin-Opener-Policy", "same-origin")
        resp.headers.setdefault(
            "Permissions-Policy",
            "geolocation=(), microphone=(), camera=(), payment=(), usb=(), magnetometer=(), gyroscope=()",
        )

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    missing = config.missing_settings()
    if missing:
        logger.warning(f"config: missing settings {', '.join(missing)}; affected requests will fail")
    if not config.chat.api_key:
        logger.warning("config: GEMINI_API_KEY not set; chatbot requests will fail")

    atexit.register(container.database.close)

    logger.info("Flask app initialized")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
