"""
Shaft Schematic - Master Constants Reference

All geometry is stored in canonical millimeters. Drawing values are in
PDF points unless noted otherwise.
"""

# =============================================================================
# GEOMETRY TOLERANCES
# =============================================================================

# A segment may end this far past the overall length and still be valid
SEGMENT_END_TOLERANCE_MM = 0.25

# A thread within this distance of a shaft end counts as "at" that end
END_ADJACENCY_EPS_MM = 0.5

# Span endpoints are rounded to this grid before deduplication
SPAN_DEDUPE_EPS_MM = 1e-3

# Rail intervals touching within this distance do not overlap
RAIL_TOUCH_EPS_MM = 1e-3

# =============================================================================
# COMPONENT DEFAULTS
# =============================================================================

# Diameter of an auto body with no explicit neighbor on either side (6 in)
DEFAULT_AUTO_BODY_DIA_MM = 152.4

# Smallest axial span used when fitting a drawing (avoids divide-by-zero)
MIN_AXIAL_SPAN_MM = 1.0

# Diameter used for scaling when nothing on the shaft has a diameter
MIN_DRAWING_DIAMETER_MM = 1.0

# Smallest drawing rectangle edge, in drawing units
MIN_TARGET_EXTENT = 1.0

# =============================================================================
# UNIT CONSTANTS
# =============================================================================

MM_PER_INCH = 25.4

# PDF points per inch
POINTS_PER_INCH = 72

# PDF points per millimeter (~2.8346)
POINTS_PER_MM = POINTS_PER_INCH / MM_PER_INCH

# Inch labels snap to this fraction (1/16")
INCH_FRACTION_DENOMINATOR = 16

# Snap inch labels to a fraction when within this many inches
INCH_SNAP_TOLERANCE = 1e-4

# Decimal places for non-fractional labels
LENGTH_DECIMAL_PLACES = 3

# =============================================================================
# PAGE LAYOUT CONSTANTS (US Letter landscape)
# =============================================================================

PAGE_WIDTH_POINTS = 792
PAGE_HEIGHT_POINTS = 612

# Page margin (0.5 inch)
PAGE_MARGIN_POINTS = 36

# Bottom strip for the title block
TITLE_BLOCK_HEIGHT_POINTS = 90

# Padding between the border and the drawing
DRAWING_PADDING_POINTS = 24

# Vertical distance between stacked dimension rails
RAIL_SPACING_POINTS = 22

# Gap between the shaft silhouette and rail 0
RAIL_OFFSET_POINTS = 18

# Dimension arrowhead length and wing angle
ARROW_SIZE_POINTS = 6.0
ARROW_WING_DEG = 160.0

# Thread hatch spacing along the axis
THREAD_HATCH_SPACING_POINTS = 4.0

DIMENSION_FONT_SIZE = 8
TITLE_FONT_SIZE = 14
TITLE_BLOCK_FONT_SIZE = 9

# PyMuPDF base-14 font used for all page text
PAGE_FONT_NAME = "helv"

DEFAULT_DRAWING_TITLE = "Shaft Schematic"

# =============================================================================
# UNIT SYSTEM NAMES
# =============================================================================

class UnitSystemName:
    MILLIMETERS = "MILLIMETERS"
    INCHES = "INCHES"

# =============================================================================
# COMPONENT KINDS
# =============================================================================

class ComponentKind:
    BODY = "BODY"
    BODY_AUTO = "BODY_AUTO"
    TAPER = "TAPER"
    THREAD = "THREAD"
    LINER = "LINER"
