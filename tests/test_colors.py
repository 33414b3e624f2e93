from io import BytesIO

import httpx
import pytest
from PIL import Image

from utils import colors


def _png(size=(40, 40), fill=(255, 0, 0), mode="RGB", stripe=None):
    img = Image.new(mode, size, fill)
    if stripe:
        for x in range(size[0] // 4):
            for y in range(size[1]):
                img.putpixel((x, y), stripe)
    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def test_rgb_to_hex():
    assert colors.rgb_to_hex((15, 23, 42)) == "#0f172a"


def test_dominant_color_comes_first():
    palette = colors.extract_palette(_png(fill=(255, 0, 0), stripe=(0, 0, 255)))
    assert palette[0] == "#ff0000"
    assert "#0000ff" in palette


def test_transparency_is_flattened_onto_white():
    palette = colors.extract_palette(_png(fill=(0, 0, 0, 0), mode="RGBA"))
    assert palette == ["#ffffff"]


def test_unreadable_image():
    with pytest.raises(colors.ColorExtractionError):
        colors.extract_palette(b"definitely not an image")


def test_oversized_image_is_rejected(monkeypatch):
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    with pytest.raises(colors.ColorExtractionError):
        colors.extract_palette(_png(size=(200, 200)))


def test_extract_palette_from_url():
    image = _png(fill=(0, 128, 0))

    def handler(request):
        assert request.url == "https://cdn.test/logo.png"
        return httpx.Response(200, content=image)

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        assert colors.extract_palette_from_url("https://cdn.test/logo.png", client=client) == ["#008000"]


def test_extract_palette_from_url_http_error():
    with httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(404))) as client:
        with pytest.raises(colors.ColorExtractionError):
            colors.extract_palette_from_url("https://cdn.test/missing.png", client=client)


def test_theme_from_palette_defaults():
    assert colors.theme_from_palette([]) == {
        "primaryColor": colors.DEFAULT_PRIMARY,
        "secondaryColor": colors.DEFAULT_SECONDARY,
        "accentColor": colors.DEFAULT_ACCENT,
    }
    assert colors.theme_from_palette(["#a", "#b", "#c", "#d"])["accentColor"] == "#c"
