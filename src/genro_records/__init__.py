# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""genro-records: Async record operations on MySQL tables."""

from .records_base import RecordsBase, RecordsConfig, config_from_env
from .sql import SqlDb

__version__ = "0.1.0"

__all__ = ["RecordsBase", "RecordsConfig", "SqlDb", "config_from_env"]
