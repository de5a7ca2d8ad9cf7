"""Renderer adapter: turns a RenderingConfiguration into pixels and files.

The module matrix comes from ``qrcode``. Dots are painted by ``StyledPilImage``
with a module drawer and a color mask, the three finder patterns are then
repainted in the corner colors/shapes, and the logo is composited last with
Pillow. SVG export walks the same matrix and writes the markup directly.
"""

from __future__ import annotations

import base64
import binascii
import io
import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Tuple
from xml.etree import ElementTree as ET

import qrcode
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q
from qrcode.exceptions import DataOverflowError
from qrcode.image.styledpil import StyledPilImage
from qrcode.image.styles.colormasks import (
    HorizontalGradiantColorMask,
    RadialGradiantColorMask,
    SolidFillColorMask,
)
from qrcode.image.styles.moduledrawers.pil import (
    CircleModuleDrawer,
    GappedSquareModuleDrawer,
    RoundedModuleDrawer,
    SquareModuleDrawer,
    VerticalBarsDrawer,
)
from PIL import Image, ImageDraw, UnidentifiedImageError

from ..config import EXPORT_BASENAME, EXPORT_FORMATS
from ..domain.colors import GradientColor, parse_hex
from ..domain.logo import LogoOptions
from ..domain.spec import RenderingConfiguration
from ..domain.styles import CornerDotShape, CornerSquareShape, DotShape, ErrorCorrection, GradientKind
from ..errors import ExportError, RenderError


ERR_MAP = {
    ErrorCorrection.L: ERROR_CORRECT_L,
    ErrorCorrection.M: ERROR_CORRECT_M,
    ErrorCorrection.Q: ERROR_CORRECT_Q,
    ErrorCorrection.H: ERROR_CORRECT_H,
}

FINDER = 7  # modules per finder pattern side


@dataclass(frozen=True)
class Artifact:
    filename: str
    data: bytes
    mime: str


class RendererAdapter(Protocol):
    def initialize(self, config: RenderingConfiguration): ...
    def update(self, handle, config: RenderingConfiguration) -> None: ...
    def export(self, handle, fmt: str) -> Artifact: ...


@dataclass
class PreviewHandle:
    config: RenderingConfiguration
    image: Optional[Image.Image] = None
    renders: int = 0


# --------------------------- Factory: Module drawers -------------------------

def module_drawer(shape: DotShape):
    if shape is DotShape.SQUARE:
        return SquareModuleDrawer()
    if shape is DotShape.DOTS:
        return CircleModuleDrawer()
    if shape is DotShape.ROUNDED:
        return RoundedModuleDrawer(radius_ratio=0.5)
    if shape is DotShape.EXTRA_ROUNDED:
        return RoundedModuleDrawer(radius_ratio=1)
    if shape is DotShape.CLASSY:
        return GappedSquareModuleDrawer(size_ratio=0.8)
    return VerticalBarsDrawer(horizontal_shrink=0.8)


def color_mask(config: RenderingConfiguration):
    back = parse_hex(config.background.color)
    fg = config.foreground
    if isinstance(fg, GradientColor):
        start, end = (parse_hex(s.color) for s in fg.stops)
        if fg.kind is GradientKind.RADIAL:
            return RadialGradiantColorMask(back_color=back, center_color=start, edge_color=end)
        return HorizontalGradiantColorMask(back_color=back, left_color=start, right_color=end)
    return SolidFillColorMask(back_color=back, front_color=parse_hex(fg.color))


# --------------------------- Geometry ---------------------------------------

def build_matrix(config: RenderingConfiguration) -> List[List[bool]]:
    qr = qrcode.QRCode(
        version=None,
        error_correction=ERR_MAP[config.error_correction],
        box_size=1,
        border=0,
    )
    qr.add_data(config.content)
    try:
        qr.make(fit=True)
    except (DataOverflowError, ValueError) as e:
        # qrcode 8 reports overflow as ValueError from check_version
        raise RenderError(f"Content too long for level {config.error_correction.value}") from e
    return qr.modules


def finder_origins(count: int) -> List[Tuple[int, int]]:
    """(row, col) of the top-left module of each finder pattern."""
    return [(0, 0), (0, count - FINDER), (count - FINDER, 0)]


def in_finder(row: int, col: int, count: int) -> bool:
    return any(r <= row < r + FINDER and c <= col < c + FINDER for r, c in finder_origins(count))


@dataclass(frozen=True)
class Layout:
    count: int
    box: int
    left: int
    top: int

    @classmethod
    def fit(cls, config: RenderingConfiguration, count: int) -> "Layout":
        dims = config.dimensions
        inner = max(1, min(dims.width, dims.height) - 2 * dims.margin)
        box = max(1, inner // count)
        side = box * count
        return cls(count, box, (dims.width - side) // 2, (dims.height - side) // 2)

    @property
    def side(self) -> int:
        return self.box * self.count


# --------------------------- Raster ------------------------------------------

def _draw_corners(draw: ImageDraw.ImageDraw, config: RenderingConfiguration, lay: Layout, ox: int, oy: int) -> None:
    fg = parse_hex(config.corner_square.color)
    dot = parse_hex(config.corner_dot.color)
    bg = parse_hex(config.background.color)
    b = lay.box
    for r, c in finder_origins(lay.count):
        x, y = ox + c * b, oy + r * b
        outer = (x, y, x + FINDER * b - 1, y + FINDER * b - 1)
        ring = (x + b, y + b, x + 6 * b - 1, y + 6 * b - 1)
        eye = (x + 2 * b, y + 2 * b, x + 5 * b - 1, y + 5 * b - 1)
        draw.rectangle(outer, fill=bg)
        shape = config.corner_square.shape
        if shape is CornerSquareShape.DOT:
            draw.ellipse(outer, fill=fg)
            draw.ellipse(ring, fill=bg)
        elif shape is CornerSquareShape.EXTRA_ROUNDED:
            draw.rounded_rectangle(outer, radius=int(2.5 * b), fill=fg)
            draw.rounded_rectangle(ring, radius=int(1.5 * b), fill=bg)
        else:
            draw.rectangle(outer, fill=fg)
            draw.rectangle(ring, fill=bg)
        if config.corner_dot.shape is CornerDotShape.DOT:
            draw.ellipse(eye, fill=dot)
        else:
            draw.rectangle(eye, fill=dot)


def decode_data_uri(data: str) -> bytes:
    if data.startswith("data:"):
        header, _, data = data.partition(",")
        if not header.endswith(";base64"):
            raise ValueError("only base64 data URIs are supported")
    try:
        return base64.b64decode(data, validate=True)
    except binascii.Error as e:
        raise ValueError(f"bad base64 payload: {e}") from e


def load_logo(logo: LogoOptions) -> Image.Image:
    try:
        with Image.open(io.BytesIO(decode_data_uri(logo.image_data))) as img:
            return img.convert("RGBA")
    except (ValueError, UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise RenderError(f"Logo could not be decoded: {e}") from e


def _paste_logo(canvas: Image.Image, config: RenderingConfiguration, lay: Layout) -> None:
    logo = config.logo
    img = load_logo(logo)
    side = max(1, int(lay.side * logo.relative_size))
    scale = side / max(img.size)
    w, h = max(1, round(img.size[0] * scale)), max(1, round(img.size[1] * scale))
    img = img.resize((w, h), Image.LANCZOS)
    cx, cy = lay.left + lay.side // 2, lay.top + lay.side // 2
    if logo.hide_background_dots:
        m = logo.margin
        pad = (cx - w // 2 - m, cy - h // 2 - m, cx - w // 2 + w + m - 1, cy - h // 2 + h + m - 1)
        ImageDraw.Draw(canvas).rectangle(pad, fill=parse_hex(config.background.color))
    canvas.paste(img, (cx - w // 2, cy - h // 2), img)


def render_image(config: RenderingConfiguration) -> Image.Image:
    modules = build_matrix(config)
    lay = Layout.fit(config, len(modules))
    qr = qrcode.QRCode(error_correction=ERR_MAP[config.error_correction], box_size=lay.box, border=0)
    qr.add_data(config.content)
    qr.make(fit=True)
    img = qr.make_image(
        image_factory=StyledPilImage,
        module_drawer=module_drawer(config.dots.shape),
        color_mask=color_mask(config),
    ).convert("RGB")
    _draw_corners(ImageDraw.Draw(img), config, lay, 0, 0)

    dims = config.dimensions
    canvas = Image.new("RGB", (dims.width, dims.height), parse_hex(config.background.color))
    canvas.paste(img, (lay.left, lay.top))
    if config.logo is not None:
        _paste_logo(canvas, config, lay)
    return canvas


# --------------------------- Vector ------------------------------------------

def _svg_gradient(defs: ET.Element, grad: GradientColor, lay: Layout) -> str:
    cx, cy, half = lay.left + lay.side / 2, lay.top + lay.side / 2, lay.side / 2
    if grad.kind is GradientKind.RADIAL:
        el = ET.SubElement(defs, "radialGradient", id="dots-gradient", gradientUnits="userSpaceOnUse",
                           cx=f"{cx:g}", cy=f"{cy:g}", r=f"{half * math.sqrt(2):g}")
    else:
        a = math.radians(grad.rotation)
        dx, dy = math.cos(a) * half, math.sin(a) * half
        el = ET.SubElement(defs, "linearGradient", id="dots-gradient", gradientUnits="userSpaceOnUse",
                           x1=f"{cx - dx:g}", y1=f"{cy - dy:g}", x2=f"{cx + dx:g}", y2=f"{cy + dy:g}")
    for stop in grad.stops:
        ET.SubElement(el, "stop", offset=f"{stop.offset:g}", attrib={"stop-color": stop.color})
    return "url(#dots-gradient)"


def _svg_module(parent: ET.Element, shape: DotShape, x: int, y: int, b: int) -> None:
    if shape is DotShape.DOTS:
        ET.SubElement(parent, "circle", cx=f"{x + b / 2:g}", cy=f"{y + b / 2:g}", r=f"{b / 2:g}")
        return
    if shape is DotShape.CLASSY:
        g = b * 0.1
        ET.SubElement(parent, "rect", x=f"{x + g:g}", y=f"{y + g:g}", width=f"{b - 2 * g:g}", height=f"{b - 2 * g:g}")
        return
    radius = {DotShape.ROUNDED: 0.25, DotShape.EXTRA_ROUNDED: 0.5, DotShape.CLASSY_ROUNDED: 0.35}.get(shape, 0)
    attrs = dict(x=str(x), y=str(y), width=str(b), height=str(b))
    if radius:
        attrs["rx"] = f"{b * radius:g}"
    ET.SubElement(parent, "rect", attrs)


def _svg_shape(parent: ET.Element, kind: str, x: float, y: float, size: float, radius: float, fill: str) -> None:
    if kind == "dot":
        ET.SubElement(parent, "circle", cx=f"{x + size / 2:g}", cy=f"{y + size / 2:g}", r=f"{size / 2:g}", fill=fill)
        return
    attrs = dict(x=f"{x:g}", y=f"{y:g}", width=f"{size:g}", height=f"{size:g}", fill=fill)
    if radius:
        attrs["rx"] = f"{radius:g}"
    ET.SubElement(parent, "rect", attrs)


def render_svg(config: RenderingConfiguration) -> bytes:
    modules = build_matrix(config)
    lay = Layout.fit(config, len(modules))
    dims, b, bg = config.dimensions, lay.box, config.background.color
    svg = ET.Element("svg", xmlns="http://www.w3.org/2000/svg", width=str(dims.width), height=str(dims.height),
                     viewBox=f"0 0 {dims.width} {dims.height}")
    defs = ET.SubElement(svg, "defs")
    ET.SubElement(svg, "rect", x="0", y="0", width=str(dims.width), height=str(dims.height), fill=bg)

    fill = config.flat_color
    if config.gradient is not None:
        fill = _svg_gradient(defs, config.gradient, lay)
    dots = ET.SubElement(svg, "g", fill=fill)
    for r, row in enumerate(modules):
        for c, dark in enumerate(row):
            if dark and not in_finder(r, c, lay.count):
                _svg_module(dots, config.dots.shape, lay.left + c * b, lay.top + r * b, b)

    corners = ET.SubElement(svg, "g")
    square = config.corner_square.shape
    outer_kind = "dot" if square is CornerSquareShape.DOT else "rect"
    rounded = square is CornerSquareShape.EXTRA_ROUNDED
    eye_kind = "dot" if config.corner_dot.shape is CornerDotShape.DOT else "rect"
    for r, c in finder_origins(lay.count):
        x, y = lay.left + c * b, lay.top + r * b
        _svg_shape(corners, outer_kind, x, y, FINDER * b, 2.5 * b if rounded else 0, config.corner_square.color)
        _svg_shape(corners, outer_kind, x + b, y + b, 5 * b, 1.5 * b if rounded else 0, bg)
        _svg_shape(corners, eye_kind, x + 2 * b, y + 2 * b, 3 * b, 0, config.corner_dot.color)

    logo = config.logo
    if logo is not None:
        side = lay.side * logo.relative_size
        x, y = lay.left + (lay.side - side) / 2, lay.top + (lay.side - side) / 2
        if logo.hide_background_dots:
            m = logo.margin
            _svg_shape(svg, "rect", x - m, y - m, side + 2 * m, 0, bg)
        ET.SubElement(svg, "image", href=logo.image_data, x=f"{x:g}", y=f"{y:g}", width=f"{side:g}",
                      height=f"{side:g}", preserveAspectRatio="xMidYMid meet")

    if not len(defs):
        svg.remove(defs)
    return b'<?xml version="1.0" encoding="UTF-8"?>\n' + ET.tostring(svg, encoding="utf-8")


# --------------------------- Adapter ----------------------------------------

class QRCodeRenderer:
    """Keeps the live preview for a handle and exports PNG/SVG artifacts."""

    def __init__(self, basename: str = EXPORT_BASENAME,
                 on_render: Optional[Callable[[Image.Image], None]] = None) -> None:
        self.basename = basename
        self.on_render = on_render

    def initialize(self, config: RenderingConfiguration) -> PreviewHandle:
        handle = PreviewHandle(config=config)
        self.update(handle, config)
        return handle

    def update(self, handle: PreviewHandle, config: RenderingConfiguration) -> None:
        try:
            image = render_image(config)
        except ValueError as e:
            raise RenderError(f"Cannot draw configuration: {e}") from e
        # only a drawable configuration replaces the exported one
        handle.config = config
        handle.image = image
        handle.renders += 1
        if self.on_render is not None:
            self.on_render(image)

    def export(self, handle: PreviewHandle, fmt: str) -> Artifact:
        ext = fmt.lower().lstrip(".")
        if ext not in EXPORT_FORMATS:
            raise ExportError(f"Unsupported export format: {fmt!r}")
        try:
            if ext == "svg":
                data, mime = render_svg(handle.config), "image/svg+xml"
            else:
                buf = io.BytesIO()
                render_image(handle.config).save(buf, format="PNG")
                data, mime = buf.getvalue(), "image/png"
        except (RenderError, OSError, ValueError) as e:
            raise ExportError(f"Could not export {ext.upper()}: {e}") from e
        return Artifact(filename=f"{self.basename}.{ext}", data=data, mime=mime)
