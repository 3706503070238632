"""Tests for bounds validation, snapping, alignment and text fitting."""

import itertools
import random

import pytest

from slidelayout.constraints.alignment import (
    AlignType,
    align_elements,
    bounding_box,
    center_in_region,
    distribute_evenly,
    overlap_area,
)
from slidelayout.constraints.bounds import (
    clamp_bounds,
    clamp_preserving_aspect_ratio,
    fit_dimensions_with_aspect_ratio,
    is_within_bounds,
)
from slidelayout.constraints.snapping import (
    golden_ratio_spacing,
    snap_rect_to_grid,
    snap_to_grid,
    vertical_gap,
)
from slidelayout.constraints.text_fitting import (
    MAX_LINES_PER_TEXT_BOX,
    body_font_size,
    split_text_to_slides,
    title_font_size,
    unescape_text,
    validate_text_density,
    wrap_text,
)
from slidelayout.engine.data_models import CanvasSize, Rectangle
from slidelayout.engine.layout_strategies.base_strategy import LayoutElement

MARGIN = 20

# Positions and sizes covering in-range, negative, oversized and tiny values
POSITIONS = [-500.0, -5.0, 0.0, 20.0, 100.0, 350.0, 700.0, 2000.0]
SIZES = [-10.0, 0.0, 5.0, 10.0, 200.0, 365.0, 680.0, 1500.0]


@pytest.fixture
def elements() -> list[LayoutElement]:
    return [
        LayoutElement("a", x=10, y=10, width=50, height=20),
        LayoutElement("b", x=40, y=60, width=30, height=30),
    ]


# ============================================================================
# Bounds Validator Tests
# ============================================================================

class TestClampBounds:
    """Tests for clamp_bounds."""

    def test_in_bounds_rectangle_unchanged(self, canvas: CanvasSize) -> None:
        """Test a valid rectangle passes through untouched."""
        outcome = clamp_bounds(100, 100, 200, 100, canvas)
        assert outcome.rect == Rectangle(x=100, y=100, width=200, height=100)
        assert not outcome.was_clamped
        assert outcome.warnings == ()

    def test_minimum_size_floor(self, canvas: CanvasSize) -> None:
        """Test width and height are raised to the minimum size."""
        outcome = clamp_bounds(100, 100, 5, 2, canvas)
        assert outcome.width == 10
        assert outcome.height == 10
        assert outcome.was_clamped
        assert outcome.warnings == (
            "Width clamped from 5pt to 10pt (minimum)",
            "Height clamped from 2pt to 10pt (minimum)",
        )

    def test_canvas_ceiling(self, canvas: CanvasSize) -> None:
        """Test oversized rectangles shrink to the canvas minus margins."""
        outcome = clamp_bounds(20, 20, 1000, 500, canvas)
        assert outcome.width == 680
        assert outcome.height == 365
        assert "Width clamped from 1000pt to 680pt (canvas limit)" in outcome.warnings

    def test_position_uses_adjusted_size(self, canvas: CanvasSize) -> None:
        """Test position clamping runs after sizing."""
        outcome = clamp_bounds(600, 350, 200, 100, canvas)
        assert outcome.x == 500
        assert outcome.y == 285
        assert outcome.warnings == (
            "X position clamped from 600pt to 500pt",
            "Y position clamped from 350pt to 285pt",
        )

    def test_warning_order(self, canvas: CanvasSize) -> None:
        """Test warnings follow size floor, size ceiling, then position."""
        outcome = clamp_bounds(-5, -5, 5, 1000, canvas)
        assert outcome.warnings == (
            "Width clamped from 5pt to 10pt (minimum)",
            "Height clamped from 1000pt to 365pt (canvas limit)",
            "X position clamped from -5pt to 20pt",
            "Y position clamped from -5pt to 20pt",
        )

    def test_original_bounds_kept(self, canvas: CanvasSize) -> None:
        """Test the pre-clamp rectangle is retained."""
        outcome = clamp_bounds(-5, 900, 3, 3, canvas)
        assert outcome.original_bounds == Rectangle(x=-5, y=900, width=3, height=3)

    def test_idempotent(self, canvas: CanvasSize) -> None:
        """Test clamping a clamped rectangle changes nothing."""
        for x, y in itertools.product(POSITIONS, repeat=2):
            for width, height in itertools.product(SIZES, repeat=2):
                once = clamp_bounds(x, y, width, height, canvas)
                twice = clamp_bounds(once.x, once.y, once.width, once.height, canvas)
                assert twice.rect == once.rect
                assert not twice.was_clamped

    def test_containment(self, canvas: CanvasSize) -> None:
        """Test every output sits inside the canvas margins."""
        for x, y in itertools.product(POSITIONS, repeat=2):
            for width, height in itertools.product(SIZES, repeat=2):
                rect = clamp_bounds(x, y, width, height, canvas).rect
                assert rect.x >= MARGIN
                assert rect.y >= MARGIN
                assert rect.right <= canvas.width - MARGIN
                assert rect.bottom <= canvas.height - MARGIN
                assert rect.width >= 10
                assert rect.height >= 10
                assert is_within_bounds(rect, canvas)

    def test_degenerate_canvas(self) -> None:
        """Test a canvas smaller than its margins never yields negative sizes."""
        tiny = CanvasSize(width=30, height=30)
        outcome = clamp_bounds(0, 0, 100, 100, tiny, margin=20)
        assert outcome.width == 10
        assert outcome.height == 10
        assert outcome.x == 20
        assert outcome.y == 20

        again = clamp_bounds(outcome.x, outcome.y, outcome.width, outcome.height, tiny, margin=20)
        assert again.rect == outcome.rect

    def test_custom_margin(self, canvas: CanvasSize) -> None:
        """Test margin is configurable."""
        outcome = clamp_bounds(0, 0, 100, 100, canvas, margin=0)
        assert not outcome.was_clamped


class TestClampPreservingAspectRatio:
    """Tests for the image variant."""

    def test_scales_down_preserving_ratio(self, canvas: CanvasSize) -> None:
        """Test oversized images shrink without distortion."""
        outcome = clamp_preserving_aspect_ratio(0, 0, 1600, 900, canvas)
        assert outcome.height == pytest.approx(365)
        assert abs(outcome.width / outcome.height - 1600 / 900) < 1e-6
        assert outcome.was_clamped
        assert "preserving aspect ratio" in outcome.warnings[0]

    def test_scales_up_to_minimum(self, canvas: CanvasSize) -> None:
        """Test tiny images grow until both sides reach the minimum."""
        outcome = clamp_preserving_aspect_ratio(100, 100, 4, 2, canvas)
        assert outcome.width == pytest.approx(20)
        assert outcome.height == pytest.approx(10)

    def test_unchanged_when_valid(self, canvas: CanvasSize) -> None:
        """Test a valid image is not touched."""
        outcome = clamp_preserving_aspect_ratio(100, 100, 300, 200, canvas)
        assert not outcome.was_clamped

    def test_extreme_ratio_falls_back(self, canvas: CanvasSize) -> None:
        """Test a sliver that cannot meet both limits is clamped per axis."""
        outcome = clamp_preserving_aspect_ratio(0, 0, 1000, 1, canvas)
        assert outcome.width == 680
        assert outcome.height == pytest.approx(10)
        assert any("aspect ratio not preserved" in w for w in outcome.warnings)
        assert is_within_bounds(outcome.rect, canvas)

    def test_thin_image_reaches_minimum_exactly(self) -> None:
        """Test the scaled-up side lands on the floor, not just under it."""
        small = CanvasSize(width=120, height=52.29)
        outcome = clamp_preserving_aspect_ratio(5, 5, 973, 2637, small)
        assert outcome.width >= 10
        assert outcome.height >= 10
        assert any("minimum size" in w for w in outcome.warnings)

        again = clamp_preserving_aspect_ratio(
            outcome.x, outcome.y, outcome.width, outcome.height, small
        )
        assert not again.was_clamped

    def test_random_clamps_idempotent_and_contained(self) -> None:
        """Test random inputs come back inside the canvas and stay put when re-clamped."""
        rng = random.Random(20240611)
        canvases = [CanvasSize(width=720, height=405), CanvasSize(width=120, height=90)]
        for _ in range(2000):
            canvas = rng.choice(canvases)
            outcome = clamp_preserving_aspect_ratio(
                rng.uniform(-500, 1500),
                rng.uniform(-500, 1500),
                rng.uniform(0.1, 3000),
                rng.uniform(0.1, 3000),
                canvas,
            )
            assert outcome.width >= 10 and outcome.height >= 10
            assert outcome.x >= 20 and outcome.y >= 20
            assert outcome.x + outcome.width <= canvas.width - 20 + 1e-9
            assert outcome.y + outcome.height <= canvas.height - 20 + 1e-9

            again = clamp_preserving_aspect_ratio(
                outcome.x, outcome.y, outcome.width, outcome.height, canvas
            )
            assert not again.was_clamped
            assert again.rect == outcome.rect

    def test_non_positive_size(self, canvas: CanvasSize) -> None:
        """Test zero sizes behave like the independent clamp."""
        outcome = clamp_preserving_aspect_ratio(0, 0, 0, 50, canvas)
        assert outcome == clamp_bounds(0, 0, 0, 50, canvas)

    def test_fit_dimensions(self) -> None:
        """Test the scale helper."""
        assert fit_dimensions_with_aspect_ratio(100, 50, 200, 200) == (100, 50, False)
        width, height, scaled = fit_dimensions_with_aspect_ratio(400, 200, 200, 200)
        assert (width, height, scaled) == (200, 100, True)


# ============================================================================
# Snapping Tests
# ============================================================================

class TestSnapping:
    """Tests for grid snapping."""

    def test_snap_values(self) -> None:
        """Test nearest grid line, halfway rounds up."""
        assert snap_to_grid(20) == 24
        assert snap_to_grid(19.9) == 16
        assert snap_to_grid(12) == 16
        assert snap_to_grid(11.9) == 8
        assert snap_to_grid(-3) == 0
        assert snap_to_grid(0) == 0

    def test_snap_properties(self) -> None:
        """Test result is a grid multiple within half a grid unit."""
        for step in range(-400, 1600):
            value = step * 0.37
            snapped = snap_to_grid(value)
            assert snapped % 8 == 0
            assert abs(snapped - value) <= 4 + 1e-9

    def test_custom_grid(self) -> None:
        """Test a different grid size."""
        assert snap_to_grid(14, grid_size=10) == 10
        assert snap_to_grid(15, grid_size=10) == 20

    def test_snap_rect(self) -> None:
        """Test position and size are all snapped."""
        rect = snap_rect_to_grid(Rectangle(x=13, y=21, width=99, height=45))
        assert rect == Rectangle(x=16, y=24, width=96, height=48)

    def test_golden_ratio_spacing(self) -> None:
        """Test gaps scale with font size."""
        assert golden_ratio_spacing(44) == 72
        assert vertical_gap(24) == 40
        assert vertical_gap(14) == 24
        assert vertical_gap(48) > vertical_gap(14)


# ============================================================================
# Alignment Tests
# ============================================================================

class TestAlignment:
    """Tests for align_elements and distribution."""

    def test_align_left(self, elements: list[LayoutElement]) -> None:
        """Test left alignment to the first element."""
        aligned = align_elements(elements, AlignType.LEFT)
        assert [e.x for e in aligned] == [10, 10]

    def test_align_right(self, elements: list[LayoutElement]) -> None:
        """Test right alignment."""
        aligned = align_elements(elements, AlignType.RIGHT)
        assert aligned[1].right_edge == 60

    def test_align_center(self, elements: list[LayoutElement]) -> None:
        """Test horizontal centering."""
        aligned = align_elements(elements, "center")
        assert aligned[1].x == 20
        assert aligned[1].center_x == elements[0].center_x

    def test_align_middle_and_bottom(self, elements: list[LayoutElement]) -> None:
        """Test vertical alignment."""
        assert align_elements(elements, AlignType.MIDDLE)[1].y == 5
        assert align_elements(elements, AlignType.BOTTOM)[1].y == 0
        assert align_elements(elements, AlignType.TOP)[1].y == 10

    def test_align_to_reference(self, elements: list[LayoutElement]) -> None:
        """Test aligning against an explicit rectangle."""
        region = Rectangle(x=100, y=0, width=200, height=100)
        aligned = align_elements(elements, AlignType.LEFT, reference=region)
        assert all(e.x == 100 for e in aligned)

    def test_inputs_not_mutated(self, elements: list[LayoutElement]) -> None:
        """Test alignment returns copies."""
        align_elements(elements, AlignType.LEFT)
        assert elements[1].x == 40

    def test_align_empty(self) -> None:
        """Test empty input."""
        assert align_elements([], AlignType.LEFT) == []

    def test_distribute_horizontally(self) -> None:
        """Test equal gaps along x."""
        items = [LayoutElement(str(i), x=0, y=50, width=50, height=20) for i in range(3)]
        distributed = distribute_evenly(items, "x", Rectangle(x=0, y=0, width=300, height=100))
        assert [e.x for e in distributed] == [0, 125, 250]
        assert all(e.y == 0 for e in distributed)

    def test_distribute_vertically(self) -> None:
        """Test equal gaps along y."""
        items = [LayoutElement(str(i), x=0, y=0, width=50, height=20) for i in range(3)]
        distributed = distribute_evenly(items, "y", Rectangle(x=20, y=20, width=300, height=100))
        assert [e.y for e in distributed] == [20, 60, 100]

    def test_center_in_region(self) -> None:
        """Test centering keeps size."""
        rect = center_in_region(
            Rectangle(x=0, y=0, width=100, height=50),
            Rectangle(x=0, y=0, width=720, height=405),
        )
        assert (rect.x, rect.y, rect.width) == (310, 177.5, 100)

    def test_bounding_box_and_overlap(self) -> None:
        """Test bounding box and shared area."""
        a = Rectangle(x=0, y=0, width=10, height=10)
        b = Rectangle(x=5, y=5, width=10, height=10)
        c = Rectangle(x=10, y=0, width=10, height=10)
        assert bounding_box([a, b]) == Rectangle(x=0, y=0, width=15, height=15)
        assert overlap_area(a, b) == 25
        assert overlap_area(a, c) == 0
        assert not a.overlaps(c)
        assert a.overlaps(b)


# ============================================================================
# Text Fitting Tests
# ============================================================================

class TestTextFitting:
    """Tests for wrapping, splitting and density checks."""

    def test_wrap_at_words(self) -> None:
        """Test greedy wrapping keeps words together."""
        assert wrap_text("the quick brown fox", 100, 10) == ["the quick", "brown fox"]

    def test_wrap_hard_breaks_long_words(self) -> None:
        """Test words longer than a line are broken."""
        assert wrap_text("abcdefghijklmnopqrstu", 100, 10) == ["abcdefghi", "jklmnopqr", "stu"]

    def test_wrap_keeps_explicit_lines(self) -> None:
        """Test short paragraphs pass through."""
        assert wrap_text("a\n\nb", 300, 10) == ["a", "", "b"]
        assert wrap_text("", 300, 10) == []

    def test_split_text_to_slides(self) -> None:
        """Test chunks hold at most max_lines_per_slide lines."""
        chunks = split_text_to_slides("a\nb\nc\nd\ne", max_lines_per_slide=2)
        assert chunks == ["a\nb", "c\nd", "e"]

    def test_density_ok(self) -> None:
        """Test short text in a roomy box is valid."""
        report = validate_text_density("Hello", 14, 400, 100)
        assert report.valid
        assert report.warnings == []
        assert report.recommended_size.width == pytest.approx(97.2)

    def test_density_too_long(self) -> None:
        """Test long text is flagged with suggestions, not truncated."""
        report = validate_text_density("word " * 120, 14, 600, 300)
        assert not report.valid
        assert any("exceeds recommended maximum" in w for w in report.warnings)
        assert report.suggestions

    def test_density_too_many_lines(self) -> None:
        """Test line count limit."""
        text = "\n".join(["line"] * (MAX_LINES_PER_TEXT_BOX + 5))
        report = validate_text_density(text, 10, 600, 2000)
        assert any("lines" in w for w in report.warnings)

    def test_density_box_too_small(self) -> None:
        """Test the required size is reported when the box is too small."""
        report = validate_text_density("Quarterly Revenue Summary", 44, 200, 60)
        assert not report.valid
        assert report.recommended_size.height > 60

    def test_unescape(self) -> None:
        """Test literal escapes become characters."""
        assert unescape_text("Line1\\nLine2\\tTab") == "Line1\nLine2\tTab"
        assert unescape_text("") == ""

    def test_font_size_helpers(self) -> None:
        """Test title and body sizes stay within their ranges."""
        assert 24 <= title_font_size("Quarterly Revenue Summary", 680) <= 44
        assert 10 <= body_font_size("A paragraph of body text. " * 10, 600, 200) <= 14
