# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import TOKEN_TTL_SECONDS, AppConfig, load_config

__all__ = ["AppConfig", "TOKEN_TTL_SECONDS", "load_config"]
