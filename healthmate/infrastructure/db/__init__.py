# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .client import MongoDatabase

__all__ = ["MongoDatabase"]
