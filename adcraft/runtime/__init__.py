# Copyright (c) 2026 AdCraft
# SPDX-License-Identifier: MIT

"""
Runtime for AdCraft.

The generation session (validation, rollback, stale-request handling,
gated composition) and report serializers.
"""

from adcraft.runtime.serializers import ReportFormat, to_report
from adcraft.runtime.session import PosterSession

__all__ = [
    "PosterSession",
    "ReportFormat",
    "to_report",
]
