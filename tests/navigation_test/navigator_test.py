import pytest

from campus_nav.models import PathError, TurnKind
from campus_nav.nav_config import NavConfig
from campus_nav.navigator import CampusNavigator

NODE_ROWS = [
    {"id": "gate",    "lat": 14.8440, "lng": 120.8100},
    {"id": "plaza",   "lat": 14.8445, "lng": 120.8100},
    {"id": "library", "lat": 14.8450, "lng": 120.8100},
    {"id": "gym",     "lat": 14.8445, "lng": 120.8106},
    {"id": "canteen", "lat": 14.8450, "lng": 120.8106},
    {"id": "shed",    "lat": 14.8460, "lng": 120.8120},
]

EDGE_ROWS = [
    {"from_node": "gate",  "to_node": "plaza"},
    {"from_node": "plaza", "to_node": "library"},
    {"from": "plaza",      "to": "gym"},
    {"from": "gym",        "to": "canteen"},
    {"from": "library",    "to": "canteen"},
]

REPAVING = {
    "id": "repaving",
    "active": True,
    "points": [
        {"lat": 14.84470, "lng": 120.80995},
        {"lat": 14.84470, "lng": 120.81005},
        {"lat": 14.84480, "lng": 120.81005},
        {"lat": 14.84480, "lng": 120.80995},
    ],
}

GATE = [120.8100, 14.8440]
LIBRARY = [120.8100, 14.8450]


@pytest.fixture
def nav():
    return CampusNavigator(NODE_ROWS, EDGE_ROWS)


def test_plan_straight_route(nav):
    plan = nav.plan_route(GATE, LIBRARY)
    assert not plan.is_fallback
    assert [n.id for n in plan.result.path_nodes] == ["gate", "plaza", "library"]
    assert plan.result.distance == 111
    assert plan.eta == "1m 19s"
    assert [s.action for s in plan.steps] == ["start", "finish"]
    assert plan.feature["features"][0]["geometry"]["coordinates"][0] == GATE
    assert plan.bounds.northeast == pytest.approx((120.8105, 14.8455))


def test_plan_detours_around_active_blockage():
    nav = CampusNavigator(NODE_ROWS, EDGE_ROWS, [REPAVING])
    plan = nav.plan_route(GATE, LIBRARY)
    assert [n.id for n in plan.result.path_nodes] == ["gate", "plaza", "gym", "canteen", "library"]
    assert [s.action for s in plan.steps] == ["start", "right", "left", "left", "finish"]
    assert plan.steps[1].location.lat == pytest.approx(14.8445)


def test_update_data_replaces_snapshot(nav):
    nav.update_data(NODE_ROWS, EDGE_ROWS, [dict(REPAVING, active=False)])
    plan = nav.plan_route(GATE, LIBRARY)
    assert len(plan.result.path_nodes) == 3


def test_plan_falls_back_to_straight_line():
    nav = CampusNavigator(NODE_ROWS, [])
    plan = nav.plan_route(GATE, LIBRARY)
    assert plan.is_fallback
    assert plan.result.error_kind is PathError.INPUT_MISSING
    assert plan.feature["features"][0]["geometry"]["coordinates"] == [GATE, LIBRARY]
    assert plan.bounds is not None
    assert plan.steps == []


def test_plan_without_destination(nav):
    plan = nav.plan_route(GATE, None)
    assert not plan.result.ok
    assert plan.feature["features"] == []
    assert plan.bounds is None


def test_find_path_without_endpoints(nav):
    result = nav.find_path(GATE, LIBRARY, include_endpoints=False)
    assert result.path[0] == [120.81, 14.844]
    assert len(result.path) == 3


def test_editor_test_route(nav):
    ok = nav.test_route("gate", "canteen")
    assert ok.ok
    assert ok.path_nodes[0].id == "gate" and ok.path_nodes[-1].id == "canteen"

    isolated = nav.test_route("gate", "shed")
    assert isolated.error_kind is PathError.ISOLATED


def test_custom_walking_speed():
    nav = CampusNavigator(NODE_ROWS, EDGE_ROWS, config=NavConfig(walking_speed_mps=1.0))
    assert nav.plan_route(GATE, LIBRARY).eta == "1m 51s"


def test_turn_kinds_are_strings():
    assert TurnKind("slight-left") is TurnKind.SLIGHT_LEFT
