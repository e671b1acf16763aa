"""Figma Style Converter Python Server"""

import logging
import asyncio
import os

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rich.console import Console
from rich.logging import RichHandler

from engine import ConverterConfig, StyleMapper
from models.figma_types import (
    ConvertNodeRequest,
    EllipseInfo,
    GradientLineInfo,
    GradientRequest,
    LinearGradientResponse,
    NodeStyle,
    RadialGradientResponse,
    RotationRequest,
    RotationResponse,
    Vector,
)
from utils.css_format import linear_gradient_css, radial_gradient_css
from utils.endpoint_decorators import handle_geometry_request
from utils.gradient_geometry import (
    gradient_direction_angle,
    radial_gradient_position,
    remap_stops,
    resolve_gradient_line,
)
from utils.rotation import recover_box
from utils.validation import (
    require_valid,
    validate_bounding_box,
    validate_handles,
    validate_stops,
)

API_VERSION = "1.0.0"
ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

logger = logging.getLogger("rich")

converter_config = ConverterConfig.from_env()

app = FastAPI(
    title="Figma Style Converter API",
    description="Convert Figma node geometry and paints into CSS",
    version=API_VERSION
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
async def root():
    """Health check endpoint"""
    return {
        "message": "Figma Style Converter API",
        "version": API_VERSION,
        "features": [
            "Rotated bounding box recovery",
            "Linear gradient handle re-projection (angle + signed stop offsets)",
            "Radial gradient ellipse positioning",
            "Single node box and paint conversion"
        ]
    }

@app.get("/health")
async def health_check():
    """Health check with dependency verification"""
    try:
        import numpy
        import pydantic
        import fastapi

        return {
            "status": "healthy",
            "version": API_VERSION,
            "config": converter_config.to_dict(),
            "dependencies": {
                "numpy": numpy.__version__,
                "pydantic": pydantic.VERSION,
                "fastapi": fastapi.__version__
            }
        }
    except ImportError as e:
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "error": f"Missing dependency: {str(e)}"
            }
        )

@app.post("/geometry/rotation", response_model=RotationResponse)
@handle_geometry_request
async def recover_rotation(payload: RotationRequest):
    """
    Recover the unrotated box of a rotated node.

    **Input:**
    - `angle`: rotation in radians
    - `box`: the node's axis-aligned absolute bounding box

    **Returns:**
    - `box`: unrotated box sharing the input box's center
    - `status`: `recovered`, `unrotated`, or `singular` (angle near 45°, bounds kept)
    """
    require_valid(validate_bounding_box(payload.box))
    config = converter_config.with_overrides(payload.options)

    box, status = recover_box(
        payload.box,
        payload.angle,
        config.geometry.rotation_singularity_tolerance
    )

    logger.debug(f"Recovered {payload.box.width}x{payload.box.height} -> {box.width:.3f}x{box.height:.3f} ({status.value})")
    return RotationResponse(box=box, originalBox=payload.box, status=status)

@app.post("/geometry/linear-gradient", response_model=LinearGradientResponse)
@handle_geometry_request
async def resolve_linear_gradient(payload: GradientRequest):
    """
    Re-project a Figma linear gradient into CSS terms.

    **Returns:**
    - `line`: gradient axis descriptor, or `null` with fewer than 2 handles or coincident handles
    - `stops`: stops with positions as signed distances from the origin corner
      (unchanged when `line` is null)
    - `angle`: CSS direction in degrees
    - `css`: complete `linear-gradient(...)` value
    """
    require_valid(validate_handles(payload.handles, minimum=0))
    require_valid(validate_stops(payload.stops))
    config = converter_config.with_overrides(payload.options)
    tolerance = config.geometry.degenerate_length_tolerance

    descriptor = resolve_gradient_line(payload.handles, tolerance)
    if descriptor is None:
        logger.info(f"Linear gradient with {len(payload.handles)} handles has no geometry")
        return LinearGradientResponse(
            line=None,
            stops=payload.stops,
            angle=None,
            css=linear_gradient_css(payload.handles, payload.stops, config.css.precision, tolerance)
        )

    line = GradientLineInfo(
        start=Vector(x=descriptor.start.x, y=descriptor.start.y),
        end=Vector(x=descriptor.end.x, y=descriptor.end.y),
        r=descriptor.r,
        cos=descriptor.cos,
        sin=descriptor.sin,
        m=descriptor.m,
        originCorner=Vector(x=descriptor.origin_corner.x, y=descriptor.origin_corner.y)
    )

    return LinearGradientResponse(
        line=line,
        stops=remap_stops(descriptor, payload.stops),
        angle=gradient_direction_angle(payload.handles),
        css=linear_gradient_css(payload.handles, payload.stops, config.css.precision, tolerance)
    )

@app.post("/geometry/radial-gradient", response_model=RadialGradientResponse)
@handle_geometry_request
async def resolve_radial_gradient(payload: GradientRequest):
    """
    Convert center / x-radius / y-radius handles into a CSS ellipse.

    **Returns:**
    - `ellipse`: radii and center in percent, or `null` with fewer than 3 handles
    - `css`: complete `radial-gradient(...)` value
    """
    require_valid(validate_handles(payload.handles, minimum=0))
    require_valid(validate_stops(payload.stops))
    config = converter_config.with_overrides(payload.options)

    ellipse = radial_gradient_position(payload.handles)
    return RadialGradientResponse(
        ellipse=EllipseInfo(rx=ellipse.rx, ry=ellipse.ry, cx=ellipse.cx, cy=ellipse.cy) if ellipse else None,
        css=radial_gradient_css(payload.handles, payload.stops, config.css.precision)
    )

@app.post("/convert/node", response_model=NodeStyle)
@handle_geometry_request
async def convert_node(payload: ConvertNodeRequest):
    """
    Convert a single Figma node into a render-ready style record.

    Children in the payload are ignored; callers walk the tree and pass each
    node with its parent's absolute box as `parentBox` and its clipping
    flag as `parentClipsContent`.
    """
    if payload.parentBox is not None:
        require_valid(validate_bounding_box(payload.parentBox))

    mapper = StyleMapper(converter_config.with_overrides(payload.options))
    node_style = mapper.convert_node(payload.node, payload.parentBox, payload.parentClipsContent)

    logger.info(f"Converted node {payload.node.id} ({payload.node.type})")
    return node_style

def _configure_server_logging():
    """Configure logging with Rich handler and filters for clean output"""
    console = Console(force_terminal=True)

    # Get level from env, default to INFO
    log_level = converter_config.log_level

    class ShutdownFilter(logging.Filter):
        """Filter out shutdown-related log messages"""
        def filter(self, record):
            if record.exc_info and record.exc_info[0] in (KeyboardInterrupt, asyncio.CancelledError):
                return False
            if "CancelledError" in str(record.msg) or "KeyboardInterrupt" in str(record.msg):
                return False
            return True

    rich_handler = RichHandler(
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=True
    )
    rich_handler.addFilter(ShutdownFilter())

    # Silence everything by default
    logging.basicConfig(level=logging.WARNING, format="%(message)s", handlers=[rich_handler])

    # Allow server startup logs
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("fastapi").setLevel(logging.INFO)

    # Set specific module log levels
    for module_name in ["main", "rich", "engine", "models", "utils"]:
        logging.getLogger(module_name).setLevel(log_level)

    return console

def _find_free_port(start_port: int = 8000) -> int:
    """Find an available port starting from the given port"""
    import socket

    port = start_port
    max_port = start_port + 100

    while port < max_port:
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                s.bind(('localhost', port))
                return port
        except OSError:
            port += 1

    return start_port

server_console = _configure_server_logging()

if __name__ == "__main__":
    free_port = _find_free_port(int(os.getenv("PORT", "8000")))
    server_console.print(f"[bold green]🚀 Starting server on http://localhost:{free_port}[/bold green]")

    try:
        uvicorn.run("main:app", host="0.0.0.0", port=free_port, reload=True, log_config=None)
    except KeyboardInterrupt:
        server_console.print("\n[bold yellow]🛑 Server stopped.[/bold yellow]")
