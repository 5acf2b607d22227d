import logging

import pytest

from campus_nav.ingest import (
    InvalidCoordinateError,
    InvalidRowError,
    NavigationDataError,
    blockage_from_row,
    blockages_from_rows,
    edge_from_row,
    ensure_edges,
    ensure_nodes,
    node_from_row,
    nodes_from_rows,
    normalize_coords,
)
from campus_nav.models import Coord, Edge, Node


def test_node_field_spellings():
    assert node_from_row({"id": "a", "lat": 1, "lng": 2}) == Node("a", 1.0, 2.0)
    assert node_from_row({"id": "a", "lat": 1, "lon": 2}) == Node("a", 1.0, 2.0)
    assert node_from_row({"id": 7, "latitude": "1.5", "longitude": "2.5"}) == Node(7, 1.5, 2.5)


@pytest.mark.parametrize("row", [
    {"lat": 1, "lng": 2},
    {"id": "a", "lat": 1},
    {"id": "a", "lat": "north", "lng": 2},
    {"id": "a", "lat": True, "lng": 2},
])
def test_bad_node_rows(row):
    with pytest.raises(InvalidRowError):
        node_from_row(row)


def test_edge_naming_conventions():
    assert edge_from_row({"from": "a", "to": "b"}) == Edge("a", "b")
    assert edge_from_row({"from_node": "a", "to_node": "b", "weight": 12}) == Edge("a", "b", 12.0)
    # from_node / to_node win when a row carries both
    assert edge_from_row({"from_node": "x", "from": "a", "to_node": "y", "to": "b"}) == Edge("x", "y")


def test_edge_falsy_weight_means_computed():
    assert edge_from_row({"from": "a", "to": "b", "weight": 0}).weight is None
    assert edge_from_row({"from": "a", "to": "b", "weight": None}).weight is None


def test_edge_missing_endpoint():
    with pytest.raises(InvalidRowError):
        edge_from_row({"from": "a"})
    with pytest.raises(InvalidRowError):
        edge_from_row({"from": "a", "to": "b", "weight": "heavy"})


def test_blockage_row():
    blockage = blockage_from_row({
        "id": 3,
        "active": True,
        "points": [{"lat": 0, "lng": 0}, {"lat": 1, "lng": 0}, {"lat": 1, "lng": 1}],
    })
    assert blockage.active
    assert blockage.points == (Coord(0, 0), Coord(1, 0), Coord(1, 1))
    assert not blockage_from_row({"id": 4}).active
    assert blockage_from_row({"id": 4}).points == ()


def test_degenerate_active_blockage_is_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="campus_nav.ingest"):
        blockages_from_rows([{"id": 1, "active": True, "points": [{"lat": 0, "lng": 0}]}])
    assert "fewer than 3 points" in caplog.text


def test_collections_accept_none():
    assert nodes_from_rows(None) == []
    assert ensure_edges(None) == []


def test_ensure_keeps_model_objects():
    edge = Edge("a", "b")
    assert ensure_edges([edge, {"from": "c", "to": "d"}]) == [edge, Edge("c", "d")]
    with pytest.raises(InvalidRowError):
        ensure_edges([("a", "b")])


def test_duplicate_node_ids_keep_last(caplog):
    stale = Node("a", 5.0, 5.0)
    fresh = Node("a", 0.0, 0.0)
    with caplog.at_level(logging.WARNING, logger="campus_nav.ingest"):
        nodes = ensure_nodes([stale, {"id": "b", "lat": 1, "lng": 1}, fresh])
    assert nodes == [fresh, Node("b", 1.0, 1.0)]
    assert nodes[0] is fresh
    assert "1 duplicate node id" in caplog.text


def test_unique_node_ids_log_nothing(caplog):
    with caplog.at_level(logging.WARNING, logger="campus_nav.ingest"):
        ensure_nodes([Node("a", 0.0, 0.0), Node("b", 1.0, 1.0)])
    assert "duplicate" not in caplog.text


def test_normalize_coords():
    assert normalize_coords(None) is None
    assert normalize_coords(Coord(1, 2)) == Coord(1, 2)
    assert normalize_coords([2, 1]) == Coord(1, 2)
    assert normalize_coords((2.0, 1.0)) == Coord(1, 2)
    assert normalize_coords({"latitude": 1, "longitude": 2}) == Coord(1, 2)
    assert normalize_coords({"lat": 1, "lng": 2}) == Coord(1, 2)


@pytest.mark.parametrize("value", ["1,2", [1], [1, "x"], {"lat": 1}, 42])
def test_normalize_coords_rejects(value):
    with pytest.raises(InvalidCoordinateError):
        normalize_coords(value)


def test_errors_share_base_class():
    assert issubclass(InvalidRowError, NavigationDataError)
    assert issubclass(InvalidCoordinateError, ValueError)
