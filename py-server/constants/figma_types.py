"""
Figma Node and Paint Type Constants

Type tags as they appear in the Figma REST API file JSON.
"""

# ==============================================================================
# Paint Types
# ==============================================================================
PAINT_SOLID = "SOLID"
PAINT_GRADIENT_LINEAR = "GRADIENT_LINEAR"
PAINT_GRADIENT_RADIAL = "GRADIENT_RADIAL"
PAINT_GRADIENT_ANGULAR = "GRADIENT_ANGULAR"
PAINT_GRADIENT_DIAMOND = "GRADIENT_DIAMOND"
PAINT_IMAGE = "IMAGE"

# Angular and diamond gradients have no CSS counterpart and render as radial
RADIAL_PAINT_TYPES = {
    PAINT_GRADIENT_RADIAL, PAINT_GRADIENT_ANGULAR, PAINT_GRADIENT_DIAMOND
}

GRADIENT_PAINT_TYPES = {PAINT_GRADIENT_LINEAR} | RADIAL_PAINT_TYPES

# ==============================================================================
# Paint Scale Modes
# ==============================================================================
SCALE_FILL = "FILL"
SCALE_FIT = "FIT"
SCALE_CROP = "CROP"
SCALE_STRETCH = "STRETCH"
SCALE_TILE = "TILE"

# Scale mode -> CSS properties on a filled box
FILL_SCALE_STYLES = {
    SCALE_FILL: {"backgroundSize": "cover"},
    SCALE_FIT: {"backgroundSize": "contain"},
    SCALE_CROP: {"backgroundSize": "stretch"},
    SCALE_STRETCH: {"backgroundSize": "100% 100%"},
    SCALE_TILE: {"backgroundRepeat": "repeat"},
}

# Scale mode -> CSS properties for an image stroke (border image)
STROKE_SCALE_STYLES = {
    SCALE_FILL: {"borderImageSlice": "fill"},
    SCALE_FIT: {"borderImageRepeat": "space"},
    SCALE_STRETCH: {"borderImageRepeat": "stretch"},
    SCALE_TILE: {"borderImageRepeat": "repeat"},
}

# ==============================================================================
# Node Types
# ==============================================================================
NODE_TEXT = "TEXT"
NODE_BOOLEAN_OPERATION = "BOOLEAN_OPERATION"

# Paint mapping is skipped for these (their paints describe child geometry)
PAINTLESS_NODE_TYPES = {NODE_BOOLEAN_OPERATION}

# ==============================================================================
# Unit Square Corners (shape space)
# ==============================================================================
CORNER_TOP_LEFT = (0.0, 0.0)
CORNER_TOP_RIGHT = (1.0, 0.0)
CORNER_BOTTOM_RIGHT = (1.0, 1.0)
CORNER_BOTTOM_LEFT = (0.0, 1.0)
