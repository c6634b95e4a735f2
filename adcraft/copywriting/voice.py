# Copyright (c) 2026 AdCraft
# SPDX-License-Identifier: MIT

"""
Brand voice selection and template copy.

A voice is picked by the first keyword set that matches the text, in
declaration order, with a universal default. Phrases are drawn from the
voice with a NumPy Generator so callers can pin output with a seed.
"""

from __future__ import annotations

from typing import Optional, Sequence, TypeVar

import numpy as np

from adcraft.schema import AgentInsight, Voice

T = TypeVar("T")


# =============================================================================
# Voices
# =============================================================================

BRAND_VOICES: tuple[Voice, ...] = (
    Voice(
        id="bold",
        keywords=r"performance|power|bold|sport|speed|pro|max",
        adjectives=("Bold", "Unstoppable", "Fearless", "Uncompromising"),
        vibes=(
            "Built for those who refuse limits",
            "Engineered to outperform expectations",
            "Made for moments that demand more",
        ),
        ctas=(
            "Claim yours today",
            "Level up your performance",
            "Join the power movement",
        ),
    ),
    Voice(
        id="eco",
        keywords=r"eco|green|sustainable|organic|earth|planet|nature|clean",
        adjectives=("Natural", "Pure", "Eco-Luxe", "Conscious"),
        vibes=(
            "Where sustainability meets style",
            "Designed to respect the planet",
            "A cleaner choice for modern living",
        ),
        ctas=(
            "Choose the greener upgrade",
            "Make the conscious switch",
            "Feel-good design, delivered",
        ),
    ),
    Voice(
        id="luxury",
        keywords=r"lux|luxury|artisan|premium|signature|limited",
        adjectives=("Signature", "Artisanal", "Refined", "Curated"),
        vibes=(
            "Crafted for uncompromised taste",
            "Because ordinary is never enough",
            "An elevated experience in every detail",
        ),
        ctas=(
            "Reserve your limited drop",
            "Indulge in the experience",
            "Step into the signature collection",
        ),
    ),
    Voice(
        id="wellness",
        keywords=r"wellness|calm|relax|balance|fresh|glow|self-care|mindful",
        adjectives=("Radiant", "Restorative", "Mindful", "Balanced"),
        vibes=(
            "Your daily ritual for feeling amazing",
            "Wellness that fits real life",
            "Designed to restore your natural rhythm",
        ),
        ctas=(
            "Refresh your routine",
            "Start your glow-up",
            "Make self-care non-negotiable",
        ),
    ),
)

DEFAULT_VOICE = Voice(
    id="universal",
    adjectives=("Smart", "Next-Level", "Game-Changing", "Inspired"),
    vibes=(
        "Designed for the modern creator",
        "Innovation you can feel instantly",
        "Built to elevate your every day",
    ),
    ctas=(
        "Unlock the full experience",
        "Make it yours today",
        "Create your highlight moment",
    ),
)

DESCRIPTOR_FRAGMENTS: tuple[str, ...] = (
    "crafted with intention",
    "designed for real-life impact",
    "built to stand out effortlessly",
    "powered by intuitive design",
    "engineered for human moments",
    "optimized for instant wow-factor",
)

BENEFIT_FRAGMENTS: tuple[str, ...] = (
    "Amplifies your brand presence in seconds",
    "Transforms simple ideas into standout visuals",
    "Turns honest moments into hero stories",
    "Helps your product spark immediate emotion",
    "Designed for social-ready storytelling",
    "Perfect for launch moments and quick campaigns",
)

OUTPUT_HOOKS: tuple[str, ...] = (
    "Optimized layout hierarchy keeps the spotlight on your hero image.",
    "Smart color pairing builds instant visual cohesion.",
    "Subtle depth layers generate premium perceived value.",
    "Asymmetric grid draws the eye to the CTA without stealing focus.",
    "Typography pairings tuned for high-contrast readability.",
)


# =============================================================================
# Selection
# =============================================================================


def pick_voice(text: str, voices: Sequence[Voice] = BRAND_VOICES) -> Voice:
    """Return the first voice whose keywords occur in ``text``."""
    for voice in voices:
        if voice.matches(text):
            return voice
    return DEFAULT_VOICE


def choose(items: Sequence[T], rng: Optional[np.random.Generator] = None) -> T:
    """Pick one item uniformly. Pass a seeded Generator for repeatable output."""
    if not items:
        raise ValueError("Cannot choose from an empty sequence")
    rng = rng if rng is not None else np.random.default_rng()
    return items[int(rng.integers(len(items)))]


# =============================================================================
# Copy
# =============================================================================


def craft_tagline(
    product_name: str,
    description: str,
    rng: Optional[np.random.Generator] = None,
) -> str:
    """
    Two-sentence tagline: ``"<Adjective> <product>. <Vibe>."``

    The voice is matched on the product name and description together.
    """
    voice = pick_voice(f"{product_name} {description}")
    adjective = choose(voice.adjectives, rng)
    vibe = choose(voice.vibes, rng)
    return f"{adjective} {product_name}. {vibe}."


def craft_call_to_action(
    description: str,
    rng: Optional[np.random.Generator] = None,
) -> str:
    """Call to action from the voice matched on the description alone."""
    return choose(pick_voice(description).ctas, rng)


def describe_feature_highlight(rng: Optional[np.random.Generator] = None) -> str:
    """Short caption for the feature line under the tagline."""
    return choose(DESCRIPTOR_FRAGMENTS, rng)


def generate_agent_insights(
    *,
    product_name: str,
    description: str,
    palette: Sequence[str],
    tagline: str,
    cta: str,
    rng: Optional[np.random.Generator] = None,
) -> tuple[AgentInsight, ...]:
    """
    Five rationale entries explaining the generated poster.

    ``palette`` is the raw extracted palette; only its first three colors
    are quoted.
    """
    voice = pick_voice(description)
    if palette:
        palette_description = ", ".join(c.upper() for c in list(palette)[:3])
    else:
        palette_description = "dynamic neutrals"

    return (
        AgentInsight(
            title="Brand Voice Detected",
            detail=f"Aligned with a {voice.id} tone to keep {product_name} feeling authentic.",
        ),
        AgentInsight(
            title="Palette Strategy",
            detail=(
                f"Dominant colors locked: {palette_description}. "
                "Contrast curve tuned for scroll-stopping impact."
            ),
        ),
        AgentInsight(
            title="Copywriting Pass",
            detail=f"Tagline generated as “{tagline}” with CTA “{cta}”.",
        ),
        AgentInsight(title="Layout Rationale", detail=choose(OUTPUT_HOOKS, rng)),
        AgentInsight(title="Launch Checklist", detail=choose(BENEFIT_FRAGMENTS, rng)),
    )
