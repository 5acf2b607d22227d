# main.py
# Demo entry point: routes across a small sample campus and prints the guidance.
# In production the rows come from the realtime sync layer instead of the
# constants below.

import logging

from campus_nav.models import Coord
from campus_nav.nav_config import NavConfig
from campus_nav.navigator import CampusNavigator
from campus_nav.presentation import find_upcoming_turn

# ------------------------------------------------------------------
# Logging setup: configure once here, all modules inherit
# ------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)

# ------------------------------------------------------------------
# Sample campus (rows shaped like the database tables)
# ------------------------------------------------------------------
NODE_ROWS = [
    {"id": "gate",      "lat": 14.8440, "lng": 120.8100},
    {"id": "plaza",     "lat": 14.8445, "lng": 120.8100},
    {"id": "library",   "lat": 14.8450, "lng": 120.8100},
    {"id": "gym",       "lat": 14.8445, "lng": 120.8106},
    {"id": "canteen",   "lat": 14.8450, "lng": 120.8106},
    {"id": "shed",      "lat": 14.8460, "lng": 120.8120},   # not wired up yet
]

EDGE_ROWS = [
    {"from_node": "gate",  "to_node": "plaza"},
    {"from_node": "plaza", "to_node": "library"},
    {"from": "plaza",      "to": "gym"},
    {"from": "gym",        "to": "canteen"},
    {"from": "library",    "to": "canteen"},
]

BLOCKAGE_ROWS = [
    {
        "id": "repaving",
        "active": True,
        "points": [
            {"lat": 14.84470, "lng": 120.80995},
            {"lat": 14.84470, "lng": 120.81005},
            {"lat": 14.84480, "lng": 120.81005},
            {"lat": 14.84480, "lng": 120.80995},
        ],
    },
]

ORIGIN      = [120.81001, 14.84398]   # [lng, lat], just outside the gate
DESTINATION = [120.81001, 14.84503]   # library entrance


def main() -> None:
    nav = CampusNavigator(NODE_ROWS, EDGE_ROWS, BLOCKAGE_ROWS, config=NavConfig())

    plan = nav.plan_route(ORIGIN, DESTINATION)
    if plan.is_fallback:
        print(f"[Main] No walking route ({plan.result.error}); showing straight line.")
        return

    print(f"\n--- Route: {plan.result.distance} m, about {plan.eta} ---")
    for step in plan.steps:
        print(f"{step.step_id}. {step.text}")

    here = Coord(14.8445, 120.81002)
    waypoint, turn = find_upcoming_turn(here, plan.result.path_nodes)
    if turn:
        print(f"\nNext waypoint: {waypoint.id}. {turn.kind.value} in {turn.distance_m} m.")

    check = nav.test_route("gate", "shed")
    print(f"\n[Editor] gate → shed: {check.error or 'ok'}")


if __name__ == "__main__":
    main()
