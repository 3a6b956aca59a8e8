# bead_map/image_io.py
from __future__ import annotations

import io
from pathlib import Path
from typing import Dict, Optional

import numpy as np
from PIL import Image, ImageOps

from .core_types import U8RGBA, assert_u8_rgba

"""
Source image loading and grid-size resizing.

Buffers are uint8 [H,W,4] in sRGB with alpha untouched; the sampler and the
dithers apply their own alpha threshold.
"""

try:
    from PIL import ImageCms  # ICC conversion if profile present
except ImportError:  # pragma: no cover
    ImageCms = None  # type: ignore[assignment]

RESAMPLE_FILTERS: Dict[str, Image.Resampling] = {
    "nearest": Image.Resampling.NEAREST,
    "bilinear": Image.Resampling.BILINEAR,
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}


def pillow_resample_from_name(name: str) -> Image.Resampling:
    """Resampling filter for one of RESAMPLE_FILTERS' names."""
    try:
        return RESAMPLE_FILTERS[name]
    except KeyError:
        raise ValueError(
            f"unknown resample filter {name!r} (have: {', '.join(RESAMPLE_FILTERS)})"
        ) from None


def _embedded_profile_to_srgb(im: Image.Image) -> Optional[Image.Image]:
    icc_bytes = im.info.get("icc_profile")
    if not icc_bytes or ImageCms is None:
        return None
    try:
        return ImageCms.profileToProfile(
            im.convert("RGBA"),
            ImageCms.ImageCmsProfile(io.BytesIO(icc_bytes)),
            ImageCms.createProfile("sRGB"),
            renderingIntent=ImageCms.Intent.PERCEPTUAL,
            outputMode="RGBA",
        )
    except (ImageCms.PyCMSError, OSError, ValueError):
        # broken or unsupported profile: keep the pixels as stored
        return None


def image_to_rgba(im: Image.Image) -> U8RGBA:
    """Pillow image to a contiguous uint8 [H,W,4] buffer."""
    return np.ascontiguousarray(np.asarray(im.convert("RGBA"), dtype=np.uint8))


def load_image_rgba(path: Path) -> U8RGBA:
    """
    Open an image file as an sRGB RGBA buffer.

    EXIF orientation is applied and an embedded ICC profile is converted to
    sRGB when Pillow was built with LittleCMS. Pillow's
    UnidentifiedImageError / OSError propagate to the caller.
    """
    with Image.open(path) as src:
        upright = ImageOps.exif_transpose(src)
        converted = _embedded_profile_to_srgb(upright)
        return image_to_rgba(converted if converted is not None else upright)


def resize_rgba(
    rgba: np.ndarray,
    cols: int,
    rows: int,
    resample: Optional[Image.Resampling] = None,
) -> U8RGBA:
    """Buffer resized to exactly cols x rows; the same buffer if already that size."""
    assert_u8_rgba(rgba)
    if rgba.shape[0] == rows and rgba.shape[1] == cols:
        return rgba
    im = Image.fromarray(np.ascontiguousarray(rgba))
    resized = im.resize(
        (int(cols), int(rows)),
        resample=Image.Resampling.BILINEAR if resample is None else resample,
    )
    return image_to_rgba(resized)


__all__ = [
    "RESAMPLE_FILTERS",
    "pillow_resample_from_name",
    "image_to_rgba",
    "load_image_rgba",
    "resize_rgba",
]
