# Copyright (c) 2026 AdCraft
# SPDX-License-Identifier: MIT

"""
Image input.

Validates that uploaded bytes are an image, decodes them with Pillow,
and normalizes to upright sRGB RGBA pixels.

Two checks run in order:
1. Media check: declared media type and file signature. Failure raises
   UnsupportedMediaError and nothing is decoded.
2. Decode: Pillow opens and fully loads the pixels. Failure raises
   DecodeFailureError.
"""

from __future__ import annotations

import hashlib
import io
import logging
import mimetypes
from pathlib import Path
from typing import Optional, Union

from PIL import Image, ImageOps, UnidentifiedImageError

from adcraft.errors import DecodeFailureError, UnsupportedMediaError
from adcraft.schema import SourceImage

logger = logging.getLogger(__name__)


# Leading bytes of the formats a browser upload would accept.
_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"BM", "image/bmp"),
    (b"II*\x00", "image/tiff"),
    (b"MM\x00*", "image/tiff"),
)


def sniff_media_type(data: bytes) -> Optional[str]:
    """
    Guess an image media type from leading bytes.

    Returns:
        ``image/...`` string, or None if the bytes are not a known image.
    """
    if len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    for signature, media_type in _SIGNATURES:
        if data.startswith(signature):
            return media_type
    return None


def check_media(
    data: bytes,
    *,
    media_type: Optional[str] = None,
    filename: Optional[str] = None,
) -> str:
    """
    Reject anything that is not an image.

    The declared media type (or one guessed from the file name) must be
    ``image/*`` when present, and the bytes must carry a known image
    signature.

    Returns:
        The effective media type.

    Raises:
        UnsupportedMediaError: If the input is not an image.
    """
    declared = media_type
    if declared is None and filename:
        declared, _ = mimetypes.guess_type(filename)

    if declared is not None and not declared.startswith("image/"):
        raise UnsupportedMediaError(
            f"Please upload an image file (PNG, JPG, or WebP), got {declared}."
        )

    sniffed = sniff_media_type(data)
    if sniffed is None:
        raise UnsupportedMediaError()

    return declared or sniffed


def load_image(
    source: Union[bytes, str, Path],
    *,
    media_type: Optional[str] = None,
) -> SourceImage:
    """
    Decode an image from bytes or a file path.

    Applies EXIF orientation and ICC profile conversion to sRGB if the
    image carries them, so pixels match what a browser would show.

    Raises:
        UnsupportedMediaError: If the input is not an image.
        DecodeFailureError: If the bytes cannot be decoded or read.
    """
    filename: Optional[str] = None
    if isinstance(source, (str, Path)):
        filename = str(source)
        try:
            data = Path(source).read_bytes()
        except OSError as e:
            raise DecodeFailureError(f"Unable to read {filename}: {e}") from e
    elif isinstance(source, (bytes, bytearray, memoryview)):
        data = bytes(source)
    else:
        raise TypeError(f"Expected bytes or file path, got {type(source)}")

    check_media(data, media_type=media_type, filename=filename)

    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError,
            Image.DecompressionBombError) as e:
        raise DecodeFailureError(f"Unable to load the supplied image: {e}") from e

    fmt = img.format
    img = ImageOps.exif_transpose(img)
    img = _to_srgb_rgba(img)

    digest = hashlib.sha256(data).hexdigest()[:16]
    logger.debug("Decoded %s image %dx%d (sha256:%s)", fmt, img.width, img.height, digest)

    return SourceImage(
        image=img,
        width=img.width,
        height=img.height,
        digest=f"sha256:{digest}",
        format=fmt,
    )


def _to_srgb_rgba(img: Image.Image) -> Image.Image:
    """Convert to RGBA, remapping embedded color profiles to sRGB."""
    icc = img.info.get("icc_profile")
    if icc and img.mode in ("RGB", "RGBA", "CMYK", "L", "P"):
        from PIL import ImageCms

        try:
            embedded_profile = ImageCms.ImageCmsProfile(io.BytesIO(icc))
            srgb_profile = ImageCms.createProfile("sRGB")
            alpha = img.getchannel("A") if img.mode == "RGBA" else None
            rgb = img.convert("RGB") if img.mode != "RGB" else img
            rgb = ImageCms.profileToProfile(rgb, embedded_profile, srgb_profile)
            img = rgb.convert("RGBA")
            if alpha is not None:
                img.putalpha(alpha)
            return img
        except (ImageCms.PyCMSError, OSError) as e:
            # Unreadable profile: fall back to plain conversion
            logger.debug("Ignoring embedded ICC profile: %s", e)

    if img.mode != "RGBA":
        img = img.convert("RGBA")
    return img
