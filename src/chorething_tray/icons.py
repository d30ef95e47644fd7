"""Tray icon images, drawn with Pillow."""

from __future__ import annotations

from PIL import Image, ImageDraw

NORMAL_COLOR = (76, 175, 80)
WARNING_COLOR = (229, 57, 53)


def make_icon(warning: bool, size: int = 64) -> Image.Image:
    """Draw the tray icon: a green disc with a tick, or a red one with a '!'."""
    image = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)
    pad = size // 16
    draw.ellipse((pad, pad, size - pad, size - pad), fill=WARNING_COLOR if warning else NORMAL_COLOR)

    mid = size // 2
    bar = max(size // 12, 1)
    if warning:
        draw.rectangle((mid - bar, size * 3 // 16, mid + bar, size * 10 // 16), fill="white")
        draw.ellipse((mid - bar, size * 11 // 16, mid + bar, size * 11 // 16 + 2 * bar), fill="white")
    else:
        points = [(size * 5 // 16, mid), (size * 7 // 16, size * 11 // 16), (size * 11 // 16, size * 5 // 16)]
        draw.line(points, fill="white", width=bar * 2)
    return image
