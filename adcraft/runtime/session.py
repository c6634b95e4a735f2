# Copyright (c) 2026 AdCraft
# SPDX-License-Identifier: MIT

"""
Generation session.

PosterSession holds the state of one poster workspace (uploaded image,
extracted palette, copy, rendered poster) and is the boundary where
pipeline errors are caught, turned into a status message, and rolled
back.

Ordering:
    upload → generate (validate → decode → extract → copy) → compose

``compose()`` is gated: it renders only once an image is decoded, a
palette is extracted, and tagline and CTA are non-empty. Otherwise it
is a no-op. Copy edits re-compose without re-running extraction.

Decode, extraction and rendering form one error boundary. Any failure
sets the status line and rolls generation state back; failures that are
not AdCraftErrors are re-raised as a retryable DecodeFailureError.
Session fields are only committed once the poster has rendered.

Every generation request takes a token. A request whose token is no
longer current when its decode/extract finishes is discarded, so a slow
``agenerate`` can never overwrite a newer request's result.
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

import numpy as np

from adcraft.copywriting.voice import (
    craft_call_to_action,
    craft_tagline,
    describe_feature_highlight,
    generate_agent_insights,
    pick_voice,
)
from adcraft.errors import (
    AdCraftError,
    DecodeFailureError,
    InvalidInputError,
    UnsupportedMediaError,
)
from adcraft.measure.loader import check_media, load_image
from adcraft.measure.palette import extract_palette, resolve_palette
from adcraft.render.compositor import DEFAULT_CONFIG, PosterConfig, render_poster
from adcraft.render.export import save_poster
from adcraft.render.surface import RenderSurface
from adcraft.schema import (
    PALETTE_SIZE,
    AgentInsight,
    GenerationResult,
    Palette,
    PosterSpec,
    RenderedPoster,
    SourceImage,
)

logger = logging.getLogger(__name__)


IDLE_MESSAGE = "Agent idle. Feed it product context and trigger generation to craft a poster."
RUNNING_MESSAGE = "Running autonomous design pipeline…"
DONE_MESSAGE = "Poster rendered. Download and ship your campaign."
NO_IMAGE_MESSAGE = "Upload a hero product image to anchor the composition."

Extractor = Callable[[SourceImage, int], Sequence[str]]


class PosterSession:
    """
    Stateful poster workspace.

    Args:
        config: Layout configuration.
        seed: Seed for copy selection. None draws fresh entropy.
        extractor: Palette extractor; defaults to ``extract_palette``.
        surface: Caller-owned render surface; one is created if omitted.

    Example:
        >>> session = PosterSession(seed=7)
        >>> session.upload(Path("lamp.png").read_bytes())
        >>> result = session.generate("Lumen Arc Smart Lamp", "Eco lamp, clean light")
        >>> session.poster.size
        (1080, 1350)
    """

    def __init__(
        self,
        *,
        config: PosterConfig = DEFAULT_CONFIG,
        seed: Optional[int] = None,
        extractor: Optional[Extractor] = None,
        surface: Optional[RenderSurface] = None,
    ) -> None:
        self.config = config
        self._rng = np.random.default_rng(seed)
        self._extractor = extractor
        self.surface = surface or RenderSurface(config.width, config.height)

        self.product_name = ""
        self.description = ""
        self.source: Optional[SourceImage] = None
        self.extracted: tuple[str, ...] = ()
        self.tagline = ""
        self.cta = ""
        self.feature_highlight = describe_feature_highlight(self._rng)
        self.insights: tuple[AgentInsight, ...] = ()
        self.result: Optional[GenerationResult] = None
        self.poster: Optional[RenderedPoster] = None
        self.status = IDLE_MESSAGE

        self._upload: Optional[bytes] = None
        self._upload_media: Optional[str] = None
        self._upload_digest: Optional[str] = None
        self._generation = 0

    # -- derived state ---------------------------------------------------------

    @property
    def palette(self) -> Palette:
        """Extracted colors padded with the layout fallback."""
        return resolve_palette(self.extracted, self.config.fallback_palette)

    @property
    def has_upload(self) -> bool:
        return self._upload is not None

    @property
    def generation(self) -> int:
        """Token of the most recent request."""
        return self._generation

    def is_current(self, token: int) -> bool:
        return token == self._generation

    # -- upload ----------------------------------------------------------------

    def upload(
        self,
        data: bytes,
        *,
        media_type: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> None:
        """
        Accept a new product image.

        Clears palette, poster and insights and draws a new feature
        caption. Supersedes any in-flight generation.

        Raises:
            UnsupportedMediaError: Not an image. Session state is untouched
                apart from the status message.
        """
        try:
            effective = check_media(data, media_type=media_type, filename=filename)
        except UnsupportedMediaError as e:
            self.status = e.message
            raise

        self._upload = bytes(data)
        self._upload_media = effective
        self._upload_digest = "sha256:" + hashlib.sha256(self._upload).hexdigest()[:16]
        self._generation += 1

        self.source = None
        self.extracted = ()
        self.poster = None
        self.insights = ()
        self.result = None
        self.feature_highlight = describe_feature_highlight(self._rng)
        self.status = IDLE_MESSAGE
        logger.debug("Accepted %s upload (%d bytes)", effective, len(self._upload))

    def upload_file(self, path: Union[str, Path]) -> None:
        """Upload an image from disk."""
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            self.status = DecodeFailureError.message
            raise DecodeFailureError(f"Unable to read {path}: {e}") from e
        self.upload(data, filename=path.name)

    # -- generation --------------------------------------------------------------

    def generate(self, product_name: str, description: str) -> GenerationResult:
        """
        Run the full pipeline synchronously and render.

        Decode, extraction and rendering share one error boundary: any
        failure sets the status line, rolls generation state back and is
        re-raised as an AdCraftError.

        Raises:
            InvalidInputError: Missing name, description or image. Nothing
                is extracted.
            DecodeFailureError: Image unreadable, or extraction or
                rendering failed. Generation state is rolled back.
        """
        name, desc = self._validate(product_name, description)
        token = self._begin()
        data, media, digest = self._upload, self._upload_media, self._upload_digest

        try:
            source = self._decode(data, media, digest)
            extracted = self._run_extractor(source)
            return self._apply(token, name, desc, source, extracted)
        except Exception as e:
            error = _pipeline_error(e)
            self._rollback(error)
            if error is e:
                raise
            raise error from e

    async def agenerate(
        self,
        product_name: str,
        description: str,
    ) -> Optional[GenerationResult]:
        """
        Like ``generate`` but decode and extraction run in a worker thread.

        Returns:
            The result, or None if a newer upload or request superseded
            this one before it finished.
        """
        name, desc = self._validate(product_name, description)
        token = self._begin()
        data, media, digest = self._upload, self._upload_media, self._upload_digest

        try:
            source = await asyncio.to_thread(self._decode, data, media, digest)
            extracted = await asyncio.to_thread(self._run_extractor, source)
            if not self.is_current(token):
                logger.info(
                    "Discarding stale result for request %d (current is %d)",
                    token, self._generation,
                )
                return None
            return self._apply(token, name, desc, source, extracted)
        except Exception as e:
            if not self.is_current(token):
                logger.debug("Dropping failure from stale request %d: %s", token, e)
                return None
            error = _pipeline_error(e)
            self._rollback(error)
            if error is e:
                raise
            raise error from e

    def _validate(self, product_name: str, description: str) -> tuple[str, str]:
        name, desc = (product_name or "").strip(), (description or "").strip()
        if not name or not desc:
            self.status = InvalidInputError.message
            raise InvalidInputError()
        if self._upload is None:
            self.status = NO_IMAGE_MESSAGE
            raise InvalidInputError(NO_IMAGE_MESSAGE)
        return name, desc

    def _begin(self) -> int:
        self._generation += 1
        self.status = RUNNING_MESSAGE
        return self._generation

    def _decode(self, data: bytes, media: Optional[str], digest: Optional[str]) -> SourceImage:
        cached = self.source
        if cached is not None and cached.digest == digest:
            return cached
        return load_image(data, media_type=media)

    def _run_extractor(self, source: SourceImage) -> tuple[str, ...]:
        extractor = self._extractor or extract_palette
        return tuple(extractor(source, PALETTE_SIZE))

    def _apply(
        self,
        token: int,
        name: str,
        desc: str,
        source: SourceImage,
        extracted: tuple[str, ...],
    ) -> GenerationResult:
        tagline = craft_tagline(name, desc, self._rng)
        cta = craft_call_to_action(desc, self._rng)
        insights = generate_agent_insights(
            product_name=name,
            description=desc,
            palette=extracted,
            tagline=tagline,
            cta=cta,
            rng=self._rng,
        )

        # Render first; session state is only committed once the poster exists
        poster = self._render(
            product_name=name,
            tagline=tagline,
            cta=cta,
            feature_highlight=self.feature_highlight,
            source=source,
            extracted=extracted,
        )

        self.product_name = name
        self.description = desc
        self.source = source
        self.extracted = extracted
        self.tagline = tagline
        self.cta = cta
        self.insights = insights
        self.poster = poster
        self.result = GenerationResult(
            product_name=name,
            description=desc,
            voice_id=pick_voice(desc).id,
            extracted=extracted,
            palette=self.palette,
            tagline=tagline,
            cta=cta,
            feature_highlight=self.feature_highlight,
            insights=insights,
        )
        logger.debug("Request %d produced palette %s", token, ", ".join(extracted))

        self.status = DONE_MESSAGE
        return self.result

    def _rollback(self, error: AdCraftError) -> None:
        logger.warning("Generation failed: %s", error.detail)
        self.source = None
        self.extracted = ()
        self.tagline = ""
        self.cta = ""
        self.insights = ()
        self.result = None
        self.poster = None
        self.status = error.message

    # -- composition -------------------------------------------------------------

    def edit(
        self,
        *,
        product_name: Optional[str] = None,
        tagline: Optional[str] = None,
        cta: Optional[str] = None,
        feature_highlight: Optional[str] = None,
    ) -> Optional[RenderedPoster]:
        """
        Change copy and re-compose. Extraction is not re-run.

        Raises:
            DecodeFailureError: Rendering failed. The edit is not applied
                and the previous poster is kept.
        """
        product_name = self.product_name if product_name is None else product_name
        tagline = self.tagline if tagline is None else tagline
        cta = self.cta if cta is None else cta
        feature_highlight = self.feature_highlight if feature_highlight is None else feature_highlight

        try:
            poster = self._render(
                product_name=product_name,
                tagline=tagline,
                cta=cta,
                feature_highlight=feature_highlight,
                source=self.source,
                extracted=self.extracted,
            )
        except Exception as e:
            error = _pipeline_error(e)
            logger.warning("Re-render failed: %s", error.detail)
            self.status = error.message
            if error is e:
                raise
            raise error from e

        self.product_name = product_name
        self.tagline = tagline
        self.cta = cta
        self.feature_highlight = feature_highlight
        if poster is not None:
            self.poster = poster
        return poster

    def compose(self) -> Optional[RenderedPoster]:
        """
        Render if every required input is present, else do nothing.

        Returns:
            The new poster, or None if rendering was skipped.
        """
        poster = self._render(
            product_name=self.product_name,
            tagline=self.tagline,
            cta=self.cta,
            feature_highlight=self.feature_highlight,
            source=self.source,
            extracted=self.extracted,
        )
        if poster is not None:
            self.poster = poster
        return poster

    def _render(
        self,
        *,
        product_name: str,
        tagline: str,
        cta: str,
        feature_highlight: str,
        source: Optional[SourceImage],
        extracted: tuple[str, ...],
    ) -> Optional[RenderedPoster]:
        if source is None or not extracted or not tagline or not cta:
            logger.debug("Compose skipped: inputs incomplete")
            return None

        spec = PosterSpec(
            product_name=product_name,
            tagline=tagline,
            cta=cta,
            feature_highlight=feature_highlight,
            image=source,
            palette=resolve_palette(extracted, self.config.fallback_palette),
        )
        return render_poster(spec, self.surface, config=self.config)

    def export(self, directory: Union[str, Path]) -> Path:
        """
        Write the current poster as ``<slug>.png``.

        Raises:
            InvalidInputError: No poster has been rendered yet.
        """
        if self.poster is None:
            self.status = "Generate a poster before exporting."
            raise InvalidInputError(self.status)
        return save_poster(self.poster.image, directory, self.poster.filename)


def _pipeline_error(error: Exception) -> AdCraftError:
    """AdCraft errors pass through; anything else becomes a retryable failure."""
    if isinstance(error, AdCraftError):
        return error
    return DecodeFailureError(f"Generation pipeline failed: {error!r}")
