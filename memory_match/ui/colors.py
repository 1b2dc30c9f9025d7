"""Theme colors and color utilities for the UI."""


class GameColors:
    """Light theme palette."""

    BG_TOP = "#e0f7fa"
    BG_BOTTOM = "#80deea"

    PRIMARY = "#00838f"
    PRIMARY_LIGHT = "#4fb3bf"
    PRIMARY_DARK = "#005662"

    CORAL = "#ff8a65"
    AMBER = "#ffb74d"
    MINT = "#69f0ae"

    TILE_BACK = "#00838f"
    TILE_FACE = "#ffffff"
    TILE_MATCHED = "#69f0ae"

    TEXT_PRIMARY = "#1a3a3a"
    TEXT_SECONDARY = "#4a6572"
    TEXT_LOW_TIME = "#d84315"


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    try:
        a = a.strip()
        b = b.strip()
        if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
            return a
        t = max(0.0, min(1.0, float(t)))
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
        r = int(ar + (br - ar) * t)
        g = int(ag + (bg - ag) * t)
        bl = int(ab + (bb - ab) * t)
        return f"#{r:02X}{g:02X}{bl:02X}"
    except ValueError:
        return a


def tile_colors(is_flipped: bool, is_matched: bool) -> tuple[str, str]:
    """Return (background, border) for a tile in the given state."""
    if is_matched:
        base = GameColors.TILE_MATCHED
    elif is_flipped:
        base = GameColors.TILE_FACE
    else:
        base = GameColors.TILE_BACK
    return base, blend_hex(base, "#000000", 0.2)
