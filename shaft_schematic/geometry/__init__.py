# Geometry resolution, measurement window and layout module

from .resolver import (
    ComponentSource,
    ResolvedComponent,
    auto_body_id,
    find_gaps,
    resolve_auto_body_dia,
    resolve_components,
    shaft_components,
    resolve_shaft,
    auto_components,
    explicit_components,
    find_component,
)

from .oal_window import (
    OalWindow,
    SetPositions,
    is_aft_adjacent,
    is_fwd_adjacent,
    compute_oal_window,
    compute_shaft_window,
    compute_set_positions,
)

from .layout import (
    ShaftLayout,
    max_component_diameter,
    compute_scale,
)

from .profile import (
    component_outline,
    shaft_profile,
    profile_rings,
)

__all__ = [
    # Resolver
    "ComponentSource",
    "ResolvedComponent",
    "auto_body_id",
    "find_gaps",
    "resolve_auto_body_dia",
    "resolve_components",
    "shaft_components",
    "resolve_shaft",
    "auto_components",
    "explicit_components",
    "find_component",
    # Measurement window
    "OalWindow",
    "SetPositions",
    "is_aft_adjacent",
    "is_fwd_adjacent",
    "compute_oal_window",
    "compute_shaft_window",
    "compute_set_positions",
    # Layout
    "ShaftLayout",
    "max_component_diameter",
    "compute_scale",
    # Profile
    "component_outline",
    "shaft_profile",
    "profile_rings",
]
