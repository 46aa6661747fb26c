from __future__ import annotations

from dataclasses import dataclass

# A4 in points (1/72 inch)
A4_WIDTH = 595
A4_HEIGHT = 842


@dataclass(frozen=True)
class PageLayout:
    page_width: float
    page_height: float
    image_width: float
    image_height: float
    offset_x: float
    offset_y: float


def compute_layout(
    width: int,
    height: int,
    *,
    max_width: float = A4_WIDTH,
    max_height: float = A4_HEIGHT,
) -> PageLayout:
    """
    Pixel size (taken as points) -> page geometry.

    Images inside the envelope get a page of exactly their own size.
    Larger ones are scaled down uniformly onto a max_width x max_height page
    and centered; the page never grows past the envelope.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"image size must be positive, got {width}x{height}")

    page_width, page_height = float(width), float(height)
    image_width, image_height = float(width), float(height)

    if width > max_width or height > max_height:
        scale = min(max_width / width, max_height / height)
        page_width, page_height = float(max_width), float(max_height)
        image_width, image_height = width * scale, height * scale

    return PageLayout(
        page_width=page_width,
        page_height=page_height,
        image_width=image_width,
        image_height=image_height,
        offset_x=(page_width - image_width) / 2,
        offset_y=(page_height - image_height) / 2,
    )
