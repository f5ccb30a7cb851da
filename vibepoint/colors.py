"""
Mood coordinate to display color mapping.

Every visualization (entry previews, heat maps, widgets) goes through
``map_color`` so the same coordinate always renders the same color.
"""

from .models import Color, MoodCoordinate, round_half_up

# Corners of the unit square, keyed by (x, y) with x = motivation and
# y = 1 - happiness.
CORNER_COLORS: dict[str, tuple[int, int, int]] = {
    "top_left": (180, 220, 255),
    "top_right": (255, 240, 50),
    "bottom_left": (40, 35, 45),
    "bottom_right": (255, 20, 0),
}


def map_color(coord: MoodCoordinate) -> Color:
    """
    Blend the four corner colors bilinearly at ``coord``.

    Out-of-range components are clamped to [0, 1] rather than rejected; range
    validation belongs to whoever produced the coordinate.

    Args:
        coord: The mood coordinate to color

    Returns:
        The display Color, each channel rounded independently
    """
    clamped = coord.clamped()
    x, y = clamped.x, clamped.y

    w00 = (1 - x) * (1 - y)
    w10 = x * (1 - y)
    w01 = (1 - x) * y
    w11 = x * y

    channels = []
    for c00, c10, c01, c11 in zip(
        CORNER_COLORS["top_left"],
        CORNER_COLORS["top_right"],
        CORNER_COLORS["bottom_left"],
        CORNER_COLORS["bottom_right"],
    ):
        value = c00 * w00 + c10 * w10 + c01 * w01 + c11 * w11
        channels.append(min(255, max(0, round_half_up(value))))

    r, g, b = channels
    return Color(r=r, g=g, b=b)


def map_scale_color(mood_x: float, mood_y: float) -> Color:
    """Color for a coordinate on the stored 0-100 scale."""
    return map_color(MoodCoordinate.from_scale(mood_x, mood_y))
