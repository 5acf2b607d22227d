# nav_config.py
# All tuneable constants in one place.
# Pass a NavConfig instance to every module that needs settings.

from dataclasses import dataclass
from typing import Tuple


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

WALKING_SPEED_MPS: float = 1.4        # ~5 km/h

# Fractions along an edge tested against blockage polygons
BLOCKAGE_SAMPLES: Tuple[float, ...] = (0.0, 0.25, 0.5, 0.75, 1.0)


# ---------------------------------------------------------------------------
# Main config
# ---------------------------------------------------------------------------

@dataclass
class NavConfig:
    # Node snapping
    connected_candidates: int = 10         # nearest nodes checked for having neighbours
    reachable_candidates: int = 30         # nearest nodes checked for reaching the destination

    # Search
    iteration_factor: int = 3              # A* gives up after factor * node count iterations
    blockage_samples: Tuple[float, ...] = BLOCKAGE_SAMPLES

    # Presentation
    walking_speed_mps: float = WALKING_SPEED_MPS
    bounds_padding_deg: float = 0.0005     # ~50 m on each side
    line_epsilon_deg: float = 0.00001      # offset for single-point lines

    # Turn classification (degrees of bearing change)
    sharp_turn_deg: float = 45.0
    slight_turn_deg: float = 20.0
    turn_alert_m: float = 30.0             # upcoming turn counts as imminent inside this range
