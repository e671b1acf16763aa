"""
Pydantic models for Figma node data and converter API payloads.
Field names follow the Figma REST API JSON (camelCase).
"""

from pydantic import BaseModel, ConfigDict, Field, FiniteFloat
from typing import List, Optional, Dict, Literal
from enum import Enum


class RecoveryStatus(str, Enum):
    """Outcome of recovering unrotated dimensions from rotated bounds"""
    RECOVERED = "recovered"
    UNROTATED = "unrotated"
    SINGULAR = "singular"  # Angle too close to 45°; rotated bounds kept


# Figma input models
class Vector(BaseModel):
    """2D point; gradient handles use the shape's normalized [0,1] space"""
    model_config = ConfigDict(frozen=True)

    x: FiniteFloat
    y: FiniteFloat


class Color(BaseModel):
    """RGBA color with 0..1 channels"""
    model_config = ConfigDict(frozen=True)

    r: float = Field(..., ge=0.0, le=1.0)
    g: float = Field(..., ge=0.0, le=1.0)
    b: float = Field(..., ge=0.0, le=1.0)
    a: float = Field(1.0, ge=0.0, le=1.0)


class ColorStop(BaseModel):
    """Gradient color stop. Position is a fraction of the handle segment on input
    and a signed distance from the origin corner after remapping."""
    model_config = ConfigDict(frozen=True)

    color: Color
    position: FiniteFloat


class BoundingBox(BaseModel):
    """Axis-aligned box in absolute page coordinates"""
    x: FiniteFloat
    y: FiniteFloat
    width: FiniteFloat = Field(..., ge=0.0)
    height: FiniteFloat = Field(..., ge=0.0)


class Paint(BaseModel):
    """Fill or stroke paint"""
    type: str
    visible: bool = True
    opacity: Optional[float] = Field(None, ge=0.0, le=1.0)
    color: Optional[Color] = None
    gradientHandlePositions: Optional[List[Vector]] = None
    gradientStops: Optional[List[ColorStop]] = None
    imageRef: Optional[str] = None
    scaleMode: Optional[str] = None


class TypeStyle(BaseModel):
    """Subset of Figma text style used for box sizing"""
    lineHeightPx: Optional[float] = None


class FigmaNode(BaseModel):
    """Single Figma node. Children are accepted but not converted."""
    id: str
    name: Optional[str] = None
    type: str
    visible: bool = True
    rotation: FiniteFloat = 0.0  # Radians
    absoluteBoundingBox: Optional[BoundingBox] = None
    absoluteRenderBounds: Optional[BoundingBox] = None
    fills: List[Paint] = Field(default_factory=list)
    strokes: List[Paint] = Field(default_factory=list)
    strokeWeight: Optional[float] = None
    strokeDashes: Optional[List[float]] = None
    cornerRadius: Optional[float] = None
    rectangleCornerRadii: Optional[List[float]] = None
    style: Optional[TypeStyle] = None
    backgroundColor: Optional[Color] = None
    clipsContent: bool = False
    isMaskOutline: bool = False  # Mask outlines carry no fill of their own
    children: Optional[List["FigmaNode"]] = None


# Converter output models
class BoxStyle(BaseModel):
    """Resolved CSS box for a node"""
    bounds: BoundingBox  # Relative to the parent box
    absoluteBox: Optional[BoundingBox] = None  # Unrotated, absolute
    rotation: float = 0.0
    recoveryStatus: RecoveryStatus = RecoveryStatus.UNROTATED
    style: Dict[str, str] = Field(default_factory=dict)


class NodeStyle(BaseModel):
    """Render-ready description of a single node"""
    id: str
    name: Optional[str] = None
    type: str
    visible: bool = True
    bounds: BoundingBox
    recoveryStatus: RecoveryStatus = RecoveryStatus.UNROTATED
    style: Dict[str, str] = Field(default_factory=dict)


# Configuration models
class ConverterOptions(BaseModel):
    """Per-request overrides for the converter configuration"""
    precision: Optional[int] = Field(None, ge=0, le=12, description="Decimal places kept in CSS numbers")
    rotation_unit: Optional[Literal["rad", "deg"]] = Field(None, description="Unit used in rotate() transforms")
    recover_rotated_boxes: Optional[bool] = Field(None, description="Recover unrotated size of rotated nodes")
    rotation_singularity_tolerance: Optional[float] = Field(None, ge=0.0, description="Minimum |cos²-sin²| treated as invertible")


# Request / response models
class RotationRequest(BaseModel):
    """Rotated bounds to recover"""
    angle: FiniteFloat = Field(..., description="Rotation in radians")
    box: BoundingBox
    options: Optional[ConverterOptions] = None


class RotationResponse(BaseModel):
    box: BoundingBox
    originalBox: BoundingBox
    status: RecoveryStatus


class GradientRequest(BaseModel):
    """Gradient handles and stops in shape space"""
    handles: List[Vector]
    stops: List[ColorStop] = Field(default_factory=list)
    options: Optional[ConverterOptions] = None


class GradientLineInfo(BaseModel):
    start: Vector
    end: Vector
    r: float
    cos: float
    sin: float
    m: Optional[float] = None  # None for vertical lines
    originCorner: Vector


class LinearGradientResponse(BaseModel):
    line: Optional[GradientLineInfo] = None  # None when handles carry no geometry
    stops: List[ColorStop]
    angle: Optional[float] = None
    css: str


class EllipseInfo(BaseModel):
    rx: float
    ry: float
    cx: float
    cy: float


class RadialGradientResponse(BaseModel):
    ellipse: Optional[EllipseInfo] = None
    css: str


class ConvertNodeRequest(BaseModel):
    node: FigmaNode
    parentBox: Optional[BoundingBox] = None
    parentClipsContent: bool = Field(False, description="Parent node clips its children")
    options: Optional[ConverterOptions] = None
