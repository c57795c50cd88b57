"""Whole-code rendering: build the module matrix and draw every dark module as a styled dot."""

from dataclasses import dataclass

import qrcode
import qrcode.constants
from PIL import Image

from qrdots.dot import DotType, NeighborQuery, QRDot, parse_dot_type
from qrdots.logging import audit, get_logger, trace
from qrdots.surface import DrawingSurface

log = get_logger("renderer")

ECC_LEVELS = {
    "L": qrcode.constants.ERROR_CORRECT_L,  # 7%
    "M": qrcode.constants.ERROR_CORRECT_M,  # 15%
    "Q": qrcode.constants.ERROR_CORRECT_Q,  # 25%
    "H": qrcode.constants.ERROR_CORRECT_H,  # 30%
}


@dataclass
class RenderOptions:
    """Rendering parameters for a whole QR code."""

    dot_type: DotType | str = DotType.SQUARE
    box_size: int = 20
    border: int = 4
    color: tuple[int, ...] = (0, 0, 0)
    bg_color: tuple[int, ...] = (255, 255, 255)
    supersample: int = 4


@trace
def get_module_matrix(
    data: str,
    version: int | None = None,
    ecc: str = "H",
    mask: int | None = None,
) -> list[list[bool]]:
    """Encode ``data`` and return the raw module matrix (True = dark), without quiet zone."""
    qr = qrcode.QRCode(
        version=version,
        error_correction=ECC_LEVELS[ecc.upper()],
        box_size=1,
        border=0,
        mask_pattern=mask,
    )
    qr.add_data(data)
    qr.make(fit=(version is None))
    return qr.modules


def make_neighbor_query(modules: list[list[bool]], row: int, col: int) -> NeighborQuery:
    """Neighbour query for the module at (row, col); off-grid offsets read as empty."""
    rows = len(modules)

    def get_neighbor(dx: int, dy: int) -> bool:
        r, c = row + dy, col + dx
        if r < 0 or c < 0 or r >= rows or c >= len(modules[r]):
            return False
        return bool(modules[r][c])

    return get_neighbor


@trace
def render_dots(modules: list[list[bool]], options: RenderOptions | None = None) -> Image.Image:
    """Render a module matrix with the configured dot style.

    Args:
        modules: Square bool matrix, True = dark module.
        options: Style, module pixel size, quiet zone, colours and supersampling.

    Returns:
        RGB PIL Image of side ``(len(modules) + 2 * border) * box_size``.
    """
    options = options or RenderOptions()
    size = len(modules)
    box = options.box_size
    total_px = (size + options.border * 2) * box

    surface = DrawingSurface(total_px, total_px, options.supersample, options.bg_color)
    surface.fill_color = options.color
    surface.stroke_color = options.color

    dot = QRDot(surface, options.dot_type)
    dark = 0
    for r in range(size):
        for c in range(len(modules[r])):
            if not modules[r][c]:
                continue
            x = (c + options.border) * box
            y = (r + options.border) * box
            dot.draw(x, y, box, make_neighbor_query(modules, r, c))
            dark += 1
    surface.fill()

    img = surface.to_image()
    dot_type = parse_dot_type(options.dot_type)
    audit("dots.rendered", logger=log,
          style=dot_type.value if dot_type else f"{options.dot_type} (square fallback)",
          grid=f"{size}x{size}", dark_modules=dark,
          image_px=f"{img.size[0]}x{img.size[1]}")
    return img


@trace
def render_qr(
    data: str,
    options: RenderOptions | None = None,
    version: int | None = None,
    ecc: str = "H",
    mask: int | None = None,
) -> Image.Image:
    """Encode ``data`` and render it with styled dots."""
    modules = get_module_matrix(data, version=version, ecc=ecc, mask=mask)
    return render_dots(modules, options)
