# Shaft component model

from .segments import (
    Body,
    Taper,
    Thread,
    Liner,
    Segment,
    Shaft,
    ShaftSchematicError,
    InvalidGeometryError,
    max_diameter,
    aft_diameter,
    fwd_diameter,
    type_priority,
    segment_diameters,
    check_length,
    check_position,
    check_segment_geometry,
    validate_shaft,
)

__all__ = [
    # Segment kinds
    "Body",
    "Taper",
    "Thread",
    "Liner",
    "Segment",
    "Shaft",
    # Errors
    "ShaftSchematicError",
    "InvalidGeometryError",
    # Kind dispatch
    "max_diameter",
    "aft_diameter",
    "fwd_diameter",
    "type_priority",
    "segment_diameters",
    # Preconditions and validation
    "check_length",
    "check_position",
    "check_segment_geometry",
    "validate_shaft",
]
