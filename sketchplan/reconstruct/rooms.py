"""Room detection: planar graph of the walls and leftmost-turn face tracing."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set, Tuple

from loguru import logger

from sketchplan.geometry.contract import (
    MIN_ROOM_AREA,
    MIN_ROOM_WALLS,
    TURN_EPSILON,
    VERTEX_KEY_SCALE,
    WALL_MATCH_TOLERANCE,
)
from sketchplan.geometry.primitives import bounding_box, require_non_negative, signed_area
from sketchplan.metrics.pipeline_metrics import RecognitionMetrics
from sketchplan.sketch.schema import DetectedRoom, Point, Wall


_TWO_PI = 2.0 * math.pi


@dataclass
class _Node:
    key: Tuple[int, int]
    point: Point
    neighbors: List[int] = field(default_factory=list)


@dataclass
class PlanarGraph:
    """Wall graph as a flat node arena; edges are neighbor indices."""
    nodes: List[_Node]

    def angle(self, origin: int, target: int) -> float:
        a = self.nodes[origin].point
        b = self.nodes[target].point
        return math.atan2(b.y - a.y, b.x - a.x)

    @property
    def edge_count(self) -> int:
        return sum(len(node.neighbors) for node in self.nodes) // 2


def _quantize(pt: Point) -> Tuple[int, int]:
    return (int(round(pt.x * VERTEX_KEY_SCALE)), int(round(pt.y * VERTEX_KEY_SCALE)))


def build_planar_graph(walls: Sequence[Wall]) -> PlanarGraph:
    """Deduplicate wall endpoints by rounded key and sort adjacency by polar angle."""
    node_map: Dict[Tuple[int, int], int] = {}
    nodes: List[_Node] = []

    def _node_for(pt: Point) -> int:
        key = _quantize(pt)
        idx = node_map.get(key)
        if idx is None:
            idx = len(nodes)
            nodes.append(_Node(key=key, point=pt))
            node_map[key] = idx
        return idx

    for wall in walls:
        u = _node_for(wall.start)
        v = _node_for(wall.end)
        if u == v:
            continue
        if v not in nodes[u].neighbors:
            nodes[u].neighbors.append(v)
        if u not in nodes[v].neighbors:
            nodes[v].neighbors.append(u)

    graph = PlanarGraph(nodes=nodes)
    for idx, node in enumerate(nodes):
        node.neighbors.sort(key=lambda nb, origin=idx: graph.angle(origin, nb))
    return graph


def _next_vertex(graph: PlanarGraph, prev: int, current: int) -> Optional[int]:
    """
    Sweep clockwise from the reversed incoming direction and take the first
    neighbor hit. At a dead end the predecessor is the only candidate, so the
    walk goes back the way it came.
    """
    neighbors = graph.nodes[current].neighbors
    if not neighbors:
        return None
    incoming = graph.angle(current, prev)
    best: Optional[int] = None
    best_delta = math.inf
    for nb in neighbors:
        if nb == prev and len(neighbors) > 1:
            continue
        delta = incoming - graph.angle(current, nb)
        if delta <= TURN_EPSILON:
            delta += _TWO_PI
        if delta < best_delta:
            best_delta = delta
            best = nb
    return best


def trace_face(
    graph: PlanarGraph,
    start: int,
    first: int,
    visited: Set[Tuple[int, int]],
) -> Optional[List[int]]:
    """
    Walk from directed edge ``start -> first`` until the start vertex is
    reached again. Returns the closed vertex walk (start repeated at the end)
    or ``None`` when the walk dead-ends or exceeds ``len(nodes) + 1`` steps.
    """
    cycle = [start]
    prev, current = start, first
    for _ in range(len(graph.nodes) + 1):
        cycle.append(current)
        visited.add((prev, current))
        if current == start:
            return cycle
        nxt = _next_vertex(graph, prev, current)
        if nxt is None:
            return None
        prev, current = current, nxt
    return None


def _walls_along(cycle: Sequence[int], graph: PlanarGraph, walls: Sequence[Wall], tolerance: float) -> List[str]:
    def _same(a: Point, b: Point) -> bool:
        return abs(a.x - b.x) < tolerance and abs(a.y - b.y) < tolerance

    wall_ids: List[str] = []
    for a_idx, b_idx in zip(cycle, cycle[1:]):
        pa = graph.nodes[a_idx].point
        pb = graph.nodes[b_idx].point
        for wall in walls:
            forward = _same(wall.start, pa) and _same(wall.end, pb)
            reverse = _same(wall.start, pb) and _same(wall.end, pa)
            if (forward or reverse) and wall.id not in wall_ids:
                wall_ids.append(wall.id)
    return wall_ids


@dataclass
class _Candidate:
    wall_ids: List[str]
    polygon: List[Point]
    area: float


def find_minimal_cycles(
    graph: PlanarGraph,
    walls: Sequence[Wall],
    *,
    min_room_area: float = MIN_ROOM_AREA,
    wall_match_tolerance: float = WALL_MATCH_TOLERANCE,
    drop_exterior_faces: bool = True,
    metrics: RecognitionMetrics | None = None,
) -> List[DetectedRoom]:
    """Trace every unvisited directed edge and keep the faces that qualify as rooms."""
    visited: Set[Tuple[int, int]] = set()
    candidates: List[_Candidate] = []

    for start, node in enumerate(graph.nodes):
        for first in node.neighbors:
            if (start, first) in visited:
                continue
            if metrics is not None:
                metrics.room_candidates += 1

            cycle = trace_face(graph, start, first, visited)
            if cycle is None or len(cycle) < 4:
                logger.debug("Discarded open or degenerate walk from vertex {}", start)
                if metrics is not None:
                    metrics.rooms_unclosed += 1
                continue

            polygon = [graph.nodes[idx].point for idx in cycle[:-1]]
            signed = signed_area(polygon)
            area = abs(signed)
            if area < min_room_area:
                logger.debug("Discarded face of area {:.2f} below {:.2f}", area, min_room_area)
                if metrics is not None:
                    metrics.rooms_below_min_area += 1
                continue
            if drop_exterior_faces and signed < 0.0:
                logger.debug("Discarded exterior face of area {:.2f}", area)
                if metrics is not None:
                    metrics.rooms_exterior += 1
                continue

            candidates.append(
                _Candidate(
                    wall_ids=_walls_along(cycle, graph, walls, wall_match_tolerance),
                    polygon=polygon,
                    area=area,
                )
            )

    rooms: List[DetectedRoom] = []
    seen: Set[Tuple[str, ...]] = set()
    for cand in candidates:
        key = tuple(sorted(cand.wall_ids))
        if not key or key in seen:
            if metrics is not None:
                metrics.rooms_duplicate += 1
            continue
        seen.add(key)
        bbox = bounding_box(cand.polygon)
        rooms.append(
            DetectedRoom(
                id=f"room-{len(rooms)}",
                wall_ids=cand.wall_ids,
                polygon=cand.polygon,
                bounding_box=bbox,
                area=cand.area,
                aspect_ratio=bbox.aspect_ratio,
            )
        )
    return rooms


def detect_rooms(
    walls: Sequence[Wall],
    *,
    min_room_area: float = MIN_ROOM_AREA,
    wall_match_tolerance: float = WALL_MATCH_TOLERANCE,
    drop_exterior_faces: bool = True,
    metrics: RecognitionMetrics | None = None,
) -> List[DetectedRoom]:
    """Minimal enclosed faces of the wall graph; fewer than three walls enclose nothing."""
    min_room_area = require_non_negative("min_room_area", min_room_area)
    wall_match_tolerance = require_non_negative("wall_match_tolerance", wall_match_tolerance)
    if len(walls) < MIN_ROOM_WALLS:
        return []

    graph = build_planar_graph(walls)
    logger.debug("Planar graph: {} vertices, {} edges", len(graph.nodes), graph.edge_count)
    rooms = find_minimal_cycles(
        graph,
        walls,
        min_room_area=min_room_area,
        wall_match_tolerance=wall_match_tolerance,
        drop_exterior_faces=drop_exterior_faces,
        metrics=metrics,
    )
    if metrics is not None:
        metrics.total_rooms = len(rooms)
    return rooms
