"""
ASCII crystal renderer.

Six arms leave the centre at 0, 60, ..., 300 degrees. Horizontal arms step
two columns at a time so the shape looks right with tall terminal glyphs.
Side branches grow toward the two neighbouring arm directions (+/-60 deg).
"""

CENTER = "+"
TIP = "*"

# (dc, dr, glyph) per direction, counter-clockwise from east
_E = (2, 0, "-")
_NE = (1, -1, "/")
_NW = (-1, -1, "\\")
_W = (-2, 0, "-")
_SW = (-1, 1, "/")
_SE = (1, 1, "\\")

ARMS = [
    (_E, (_NE, _SE)),
    (_NE, (_E, _NW)),
    (_NW, (_NE, _W)),
    (_W, (_NW, _SW)),
    (_SW, (_W, _SE)),
    (_SE, (_SW, _E)),
]

def grid_size(arm_length: int):
    """Return (cy, cx, H, W)."""
    cx = arm_length * 2 + 6
    cy = arm_length + 3
    return cy, cx, cy * 2 + 1, cx * 2 + 1

def plot_points(arm_length: int, branches):
    """Yield (row, col, glyph) for every cell the crystal paints, in paint order."""
    cy, cx, _, _ = grid_size(arm_length)
    yield cy, cx, CENTER
    for (dc, dr, ch), side_dirs in ARMS:
        r, c = cy, cx
        for d in range(1, arm_length + 1):
            r += dr
            c += dc
            yield r, c, TIP if d == arm_length else ch
            for b in branches:
                if b["pos"] != d:
                    continue
                for bdc, bdr, bch in side_dirs:
                    br, bc = r, c
                    for step in range(1, b["len"] + 1):
                        br += bdr
                        bc += bdc
                        yield br, bc, TIP if step == b["len"] else bch

def draw_snowflake(snowflake) -> str:
    _, _, H, W = grid_size(snowflake.arm_length)
    grid = [[" "] * W for _ in range(H)]
    for r, c, ch in plot_points(snowflake.arm_length, snowflake.branches):
        if 0 <= r < H and 0 <= c < W:
            grid[r][c] = ch
    return "\n".join("".join(row) for row in grid)
