"""
Node Style Mapper

Converts a single Figma node into CSS box geometry and paint styles.
Recursion over the node tree and DOM construction are left to the caller.
"""

import logging
from typing import Callable, Dict, List, Optional

from constants.figma_types import (
    FILL_SCALE_STYLES,
    GRADIENT_PAINT_TYPES,
    NODE_TEXT,
    PAINT_GRADIENT_LINEAR,
    PAINT_IMAGE,
    PAINT_SOLID,
    PAINTLESS_NODE_TYPES,
    STROKE_SCALE_STYLES,
)
from engine.config import ConverterConfig
from models.figma_types import (
    BoundingBox,
    BoxStyle,
    FigmaNode,
    NodeStyle,
    Paint,
    RecoveryStatus,
)
from utils.css_format import (
    color_to_css,
    linear_gradient_css,
    radial_gradient_css,
    rotation_css,
    to_px,
)
from utils.rotation import recover_box

logger = logging.getLogger(__name__)

BoxHandler = Callable[[FigmaNode, BoundingBox], BoundingBox]

EMPTY_BOX = BoundingBox(x=0.0, y=0.0, width=0.0, height=0.0)


# --- box handlers per node type ---
def _default_box(node: FigmaNode, box: BoundingBox) -> BoundingBox:
    return box


def _text_box(node: FigmaNode, box: BoundingBox) -> BoundingBox:
    """Text boxes are never shorter than one line."""
    line_height = node.style.lineHeightPx if node.style else None
    if line_height and box.height < line_height:
        return box.model_copy(update={"height": line_height})
    return box


_BOX_HANDLERS: Dict[str, BoxHandler] = {
    NODE_TEXT: _text_box,
}


def select_box_handler(node_type: str) -> BoxHandler:
    """Pick the box handler for a Figma node type tag."""
    return _BOX_HANDLERS.get(node_type, _default_box)


# --- paint mapping ---
def _gradient_css(paint: Paint, config: ConverterConfig) -> Optional[str]:
    if paint.type not in GRADIENT_PAINT_TYPES:
        return None

    handles = paint.gradientHandlePositions or []
    stops = paint.gradientStops or []
    precision = config.css.precision

    if paint.type == PAINT_GRADIENT_LINEAR:
        return linear_gradient_css(
            handles, stops, precision, config.geometry.degenerate_length_tolerance
        )
    return radial_gradient_css(handles, stops, precision)


def map_paint(paint: Paint, config: Optional[ConverterConfig] = None) -> Dict[str, str]:
    """
    Map a fill paint to CSS properties.

    SOLID sets backgroundColor, gradients set background. Image fills are
    left to the image loader; their scaleMode still sizes the background.
    """
    config = config or ConverterConfig.default()
    if not paint.visible:
        return {}

    style: Dict[str, str] = {}
    if paint.type == PAINT_SOLID:
        if paint.color is None:
            logger.debug("Solid paint without color skipped")
        else:
            style["backgroundColor"] = color_to_css(paint.color, paint.opacity, config.css.precision)
    elif paint.type in GRADIENT_PAINT_TYPES:
        style["background"] = _gradient_css(paint, config)
    elif paint.type == PAINT_IMAGE:
        logger.debug(f"Image paint {paint.imageRef} left to the image loader")
    else:
        logger.warning(f"Unsupported paint type '{paint.type}'")

    if paint.scaleMode:
        style.update(FILL_SCALE_STYLES.get(paint.scaleMode, {}))
    return style


def map_strokes(
    strokes: List[Paint],
    stroke_weight: Optional[float] = None,
    config: Optional[ConverterConfig] = None,
    stroke_dashes: Optional[List[float]] = None,
) -> Dict[str, str]:
    """
    Map stroke paints to outline / border-image properties.

    Solid strokes become an outline; gradient strokes become a border image.
    A dash pattern turns the outline dashed.
    """
    config = config or ConverterConfig.default()
    precision = config.css.precision
    style: Dict[str, str] = {}

    for stroke in strokes:
        if not stroke.visible:
            continue
        if stroke.color is not None:
            style["outlineColor"] = color_to_css(stroke.color, stroke.opacity, precision)

        if stroke.type == PAINT_SOLID:
            style["outlineStyle"] = "solid"
        elif stroke.type in GRADIENT_PAINT_TYPES:
            style["borderImageSource"] = _gradient_css(stroke, config)
        elif stroke.type == PAINT_IMAGE:
            style.update(STROKE_SCALE_STYLES.get(stroke.scaleMode, {}))

    if stroke_weight:
        if "outlineColor" in style:
            style["outlineWidth"] = to_px(stroke_weight, precision)
        if "borderImageSource" in style:
            style["borderImageWidth"] = to_px(stroke_weight, precision)

    if strokes and stroke_dashes:
        style["outlineStyle"] = "dashed"

    return style


class StyleMapper:
    """
    Converts single Figma nodes to NodeStyle records.

    Holds only configuration; every call works on fresh values, so one
    mapper can be shared across requests.
    """

    def __init__(self, config: Optional[ConverterConfig] = None):
        self.config = config or ConverterConfig.default()
        if not self.config.validate():
            raise ValueError(f"Invalid converter configuration: {self.config!r}")

    def map_box(self, node: FigmaNode, parent_box: Optional[BoundingBox] = None) -> BoxStyle:
        """
        Resolve the CSS box of a node.

        Rotated nodes get their unrotated size recovered and re-centered;
        position is relative to `parent_box` (absolute coordinates), or 0,0
        without one.
        """
        precision = self.config.css.precision
        style: Dict[str, str] = {
            "position": "absolute",
            "boxSizing": "border-box",
            "transformOrigin": "center center",
        }

        box = node.absoluteBoundingBox or node.absoluteRenderBounds
        if box is None:
            logger.debug(f"Node {node.id} has no bounding box")
            return BoxStyle(bounds=EMPTY_BOX, style=style)

        status = RecoveryStatus.UNROTATED
        if node.rotation:
            style["transform"] = rotation_css(node.rotation, self.config.css.rotation_unit, precision)
            if self.config.geometry.recover_rotated_boxes:
                box, status = recover_box(
                    box, node.rotation, self.config.geometry.rotation_singularity_tolerance
                )
                if status == RecoveryStatus.SINGULAR:
                    logger.info(f"Node {node.id}: rotation {node.rotation} kept rotated bounds")

        box = select_box_handler(node.type)(node, box)

        if parent_box is not None:
            left, top = box.x - parent_box.x, box.y - parent_box.y
        else:
            left, top = 0.0, 0.0

        bounds = BoundingBox(x=left, y=top, width=box.width, height=box.height)
        style.update({
            "left": to_px(bounds.x, precision),
            "top": to_px(bounds.y, precision),
            "width": to_px(bounds.width, precision),
            "height": to_px(bounds.height, precision),
        })

        return BoxStyle(
            bounds=bounds,
            absoluteBox=box,
            rotation=node.rotation,
            recoveryStatus=status,
            style=style,
        )

    def map_corner_radius(self, node: FigmaNode) -> Dict[str, str]:
        precision = self.config.css.precision
        if node.cornerRadius:
            return {"borderRadius": to_px(node.cornerRadius, precision)}
        if node.rectangleCornerRadii:
            return {"borderRadius": " ".join(to_px(r, precision) for r in node.rectangleCornerRadii)}
        return {}

    def convert_node(
        self,
        node: FigmaNode,
        parent_box: Optional[BoundingBox] = None,
        parent_clips_content: bool = False,
    ) -> NodeStyle:
        """
        Convert one node; children are not visited.

        The node's own backgroundColor is applied first so fills paint over
        it. Mask outlines keep their strokes but drop their fills.
        """
        box_style = self.map_box(node, parent_box)
        style = dict(box_style.style)

        if node.backgroundColor is not None:
            style["backgroundColor"] = color_to_css(node.backgroundColor, precision=self.config.css.precision)
        style.update(self.map_corner_radius(node))

        if node.clipsContent or parent_clips_content:
            style["overflow"] = "hidden"

        if node.type not in PAINTLESS_NODE_TYPES:
            if not node.isMaskOutline:
                # Later paints sit on top, so they win
                for fill in node.fills:
                    style.update(map_paint(fill, self.config))
            style.update(map_strokes(node.strokes, node.strokeWeight, self.config, node.strokeDashes))

        if not node.visible:
            style["display"] = "none"

        logger.debug(f"Converted node {node.id} ({node.type}) with {len(style)} style properties")

        return NodeStyle(
            id=node.id,
            name=node.name,
            type=node.type,
            visible=node.visible,
            bounds=box_style.bounds,
            recoveryStatus=box_style.recoveryStatus,
            style=style,
        )

    def __repr__(self) -> str:
        return f"StyleMapper({self.config!r})"
