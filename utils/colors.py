from __future__ import annotations

from io import BytesIO
from typing import Optional

import httpx
from PIL import Image, UnidentifiedImageError


class ColorExtractionError(Exception):
    pass


DEFAULT_PRIMARY = "#0f172a"
DEFAULT_SECONDARY = "#1e40af"
DEFAULT_ACCENT = "#3b82f6"


def rgb_to_hex(rgb: tuple[int, int, int]) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def extract_palette(image_bytes: bytes, count: int = 5) -> list[str]:
    """Dominant colors of an image, most frequent first."""
    try:
        img = Image.open(BytesIO(image_bytes))
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise ColorExtractionError(f"Unreadable image: {e}") from e

    if img.mode in ("RGBA", "LA", "P"):
        # flatten transparency onto white so empty pixels do not dominate
        rgba = img.convert("RGBA")
        background = Image.new("RGBA", rgba.size, (255, 255, 255, 255))
        img = Image.alpha_composite(background, rgba)
    img = img.convert("RGB")
    img.thumbnail((200, 200))

    quantized = img.quantize(colors=count, method=Image.Quantize.MEDIANCUT)
    palette = quantized.getpalette() or []
    counts = sorted(quantized.getcolors() or [], reverse=True)

    colors: list[str] = []
    for _, index in counts:
        rgb = tuple(palette[index * 3: index * 3 + 3])
        if len(rgb) == 3:
            value = rgb_to_hex(rgb)  # type: ignore[arg-type]
            if value not in colors:
                colors.append(value)
    return colors[:count]


def extract_palette_from_url(
    url: str, count: int = 5, client: Optional[httpx.Client] = None
) -> list[str]:
    owns_client = client is None
    http = client or httpx.Client(timeout=20.0, follow_redirects=True)
    try:
        response = http.get(url)
        response.raise_for_status()
    except httpx.HTTPError as e:
        raise ColorExtractionError(f"Could not load logo: {e}") from e
    finally:
        if owns_client:
            http.close()
    return extract_palette(response.content, count=count)


def theme_from_palette(colors: list[str]) -> dict[str, str]:
    return {
        "primaryColor": colors[0] if len(colors) > 0 else DEFAULT_PRIMARY,
        "secondaryColor": colors[1] if len(colors) > 1 else DEFAULT_SECONDARY,
        "accentColor": colors[2] if len(colors) > 2 else DEFAULT_ACCENT,
    }
