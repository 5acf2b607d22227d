# reachability.py
# Breadth-first connectivity test on a built graph.

from collections import deque

from .models import Graph, NodeId


def can_reach(start_id: NodeId, end_id: NodeId, graph: Graph) -> bool:
    """
    True if end_id can be reached from start_id, ignoring edge costs.

    Unknown ids are never reachable. A node always reaches itself.
    """
    if start_id not in graph or end_id not in graph:
        return False
    if start_id == end_id:
        return True

    visited = {start_id}
    queue = deque([start_id])
    while queue:
        current = queue.popleft()
        if current == end_id:
            return True
        for neighbor in graph[current].neighbors:
            if neighbor.node_id not in visited:
                visited.add(neighbor.node_id)
                queue.append(neighbor.node_id)
    return False
