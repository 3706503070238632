"""Alignment and distribution helpers for laid-out elements."""

from dataclasses import replace
from enum import Enum
from typing import Literal, Sequence

from slidelayout.engine.data_models import Rectangle
from slidelayout.engine.layout_strategies.base_strategy import LayoutElement


class AlignType(str, Enum):
    """Alignment types."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


def align_elements(
    elements: Sequence[LayoutElement],
    align_type: AlignType,
    reference: Rectangle | None = None,
) -> list[LayoutElement]:
    """Align elements to a common edge or center.

    Args:
        elements: Elements to align.
        align_type: Edge or center to align on.
        reference: Rectangle to align against. Defaults to the first element.

    Returns:
        Aligned copies of the elements.
    """
    if not elements:
        return []

    ref = reference or elements[0].to_rect()
    align_type = AlignType(align_type)

    aligned = []
    for element in elements:
        if align_type == AlignType.LEFT:
            aligned.append(replace(element, x=ref.x))
        elif align_type == AlignType.CENTER:
            aligned.append(replace(element, x=ref.x + (ref.width - element.width) / 2))
        elif align_type == AlignType.RIGHT:
            aligned.append(replace(element, x=ref.right - element.width))
        elif align_type == AlignType.TOP:
            aligned.append(replace(element, y=ref.y))
        elif align_type == AlignType.MIDDLE:
            aligned.append(replace(element, y=ref.y + (ref.height - element.height) / 2))
        else:
            aligned.append(replace(element, y=ref.bottom - element.height))
    return aligned


def distribute_evenly(
    elements: Sequence[LayoutElement],
    axis: Literal["x", "y"],
    region: Rectangle,
) -> list[LayoutElement]:
    """Spread elements across a region with equal gaps along one axis.

    Elements are lined up on the region's other edge (top for "x", left for "y").
    A single element is returned unchanged.
    """
    if len(elements) < 2:
        return [replace(e) for e in elements]

    if axis == "x":
        total = sum(e.width for e in elements)
        gap = (region.width - total) / (len(elements) - 1)
        current = region.x
    else:
        total = sum(e.height for e in elements)
        gap = (region.height - total) / (len(elements) - 1)
        current = region.y

    distributed = []
    for element in elements:
        if axis == "x":
            distributed.append(replace(element, x=current, y=region.y))
            current += element.width + gap
        else:
            distributed.append(replace(element, x=region.x, y=current))
            current += element.height + gap
    return distributed


def center_in_region(rect: Rectangle, region: Rectangle) -> Rectangle:
    """Center a rectangle inside a region, keeping its size."""
    return rect.model_copy(update={
        "x": region.x + (region.width - rect.width) / 2,
        "y": region.y + (region.height - rect.height) / 2,
    })


def bounding_box(rects: Sequence[Rectangle]) -> Rectangle:
    """Smallest rectangle containing all rects. Empty input gives a zero rectangle."""
    if not rects:
        return Rectangle(x=0, y=0, width=0, height=0)

    min_x = min(r.x for r in rects)
    min_y = min(r.y for r in rects)
    max_x = max(r.right for r in rects)
    max_y = max(r.bottom for r in rects)
    return Rectangle(x=min_x, y=min_y, width=max_x - min_x, height=max_y - min_y)


def overlap_area(a: Rectangle, b: Rectangle) -> float:
    """Area shared by two rectangles, 0 when they only touch or are apart."""
    x_overlap = max(0.0, min(a.right, b.right) - max(a.x, b.x))
    y_overlap = max(0.0, min(a.bottom, b.bottom) - max(a.y, b.y))
    return x_overlap * y_overlap
