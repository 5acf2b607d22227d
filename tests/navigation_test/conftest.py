import pytest

from campus_nav.models import Edge, Node

from graph_samples import dist


@pytest.fixture
def line_nodes():
    """A - B - C along the equator, ~55.6 m apart."""
    return [
        Node("A", 0.0, 0.0),
        Node("B", 0.0, 0.0005),
        Node("C", 0.0, 0.001),
    ]


@pytest.fixture
def line_edges(line_nodes):
    a, b, c = line_nodes
    return [Edge("A", "B", dist(a, b)), Edge("B", "C", dist(b, c))]


@pytest.fixture
def two_clusters():
    """Two triangles ~1 km apart with no edge between them."""
    nodes = [
        Node("w1", 0.0, 0.0),
        Node("w2", 0.0, 0.0005),
        Node("w3", 0.0005, 0.0),
        Node("e1", 0.0, 0.01),
        Node("e2", 0.0, 0.0105),
        Node("e3", 0.0005, 0.01),
    ]
    edges = [
        Edge("w1", "w2"), Edge("w2", "w3"), Edge("w3", "w1"),
        Edge("e1", "e2"), Edge("e2", "e3"), Edge("e3", "e1"),
    ]
    return nodes, edges
