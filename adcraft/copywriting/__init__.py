# Copyright (c) 2026 AdCraft
# SPDX-License-Identifier: MIT

"""
Marketing copy for AdCraft posters.

Keyword-matched brand voices and template phrases. Output is random
unless a seeded ``numpy.random.Generator`` is supplied.
"""

from adcraft.copywriting.voice import (
    BRAND_VOICES,
    DEFAULT_VOICE,
    craft_call_to_action,
    craft_tagline,
    describe_feature_highlight,
    generate_agent_insights,
    pick_voice,
)

__all__ = [
    "BRAND_VOICES",
    "DEFAULT_VOICE",
    "pick_voice",
    "craft_tagline",
    "craft_call_to_action",
    "describe_feature_highlight",
    "generate_agent_insights",
]
