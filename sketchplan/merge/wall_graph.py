"""Connect aligned segments into walls by merging near-coincident endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

import numpy as np

from sketchplan.geometry.contract import MERGE_THRESHOLD, MIN_WALL_LENGTH, WALL_THICKNESS
from sketchplan.geometry.primitives import distance, require_non_negative, require_positive
from sketchplan.metrics.pipeline_metrics import RecognitionMetrics
from sketchplan.sketch.schema import Point, Segment, Wall


class UnionFind:
    """Disjoint sets over ``0..size-1`` backed by flat parent/rank arrays."""

    def __init__(self, size: int):
        self.parent: List[int] = list(range(size))
        self.rank: List[int] = [0] * size

    def find(self, x: int) -> int:
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        # Path compression
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]
        return root

    def union(self, a: int, b: int) -> None:
        ra = self.find(a)
        rb = self.find(b)
        if ra == rb:
            return
        if self.rank[ra] < self.rank[rb]:
            self.parent[ra] = rb
        elif self.rank[ra] > self.rank[rb]:
            self.parent[rb] = ra
        else:
            self.parent[rb] = ra
            self.rank[ra] += 1


@dataclass
class EndpointClusters:
    """Endpoint ``2*i`` is the start of segment ``i``, ``2*i+1`` its end."""
    roots: List[int]
    centroids: Dict[int, Point]

    def vertex(self, endpoint_index: int) -> Point:
        return self.centroids[self.roots[endpoint_index]]

    @property
    def vertex_count(self) -> int:
        return len(self.centroids)


def cluster_endpoints(segments: Sequence[Segment], merge_threshold: float = MERGE_THRESHOLD) -> EndpointClusters:
    """Union every endpoint pair within ``merge_threshold`` (inclusive); O(n^2)."""
    merge_threshold = require_non_negative("merge_threshold", merge_threshold)
    coords = np.array(
        [(p.x, p.y) for seg in segments for p in (seg.start, seg.end)],
        dtype=float,
    ).reshape(-1, 2)
    n = len(coords)
    uf = UnionFind(n)
    # One row at a time keeps memory linear in the endpoint count
    for i in range(n - 1):
        rest = coords[i + 1:]
        dists = np.hypot(rest[:, 0] - coords[i, 0], rest[:, 1] - coords[i, 1])
        for j in np.nonzero(dists <= merge_threshold)[0].tolist():
            uf.union(i, i + 1 + j)

    roots = [uf.find(i) for i in range(n)]
    centroids: Dict[int, Point] = {}
    for root in dict.fromkeys(roots):
        members = coords[[i for i, r in enumerate(roots) if r == root]]
        cx, cy = members.mean(axis=0)
        centroids[root] = Point(x=float(cx), y=float(cy))
    return EndpointClusters(roots=roots, centroids=centroids)


def connect_walls(
    segments: Sequence[Segment],
    merge_threshold: float = MERGE_THRESHOLD,
    min_wall_length: float = MIN_WALL_LENGTH,
    thickness: float = WALL_THICKNESS,
    metrics: RecognitionMetrics | None = None,
) -> List[Wall]:
    """
    Rebuild one wall per segment with endpoints replaced by their cluster
    centroid, dropping walls that collapse below ``min_wall_length``.
    """
    merge_threshold = require_non_negative("merge_threshold", merge_threshold)
    min_wall_length = require_non_negative("min_wall_length", min_wall_length)
    thickness = require_positive("thickness", thickness)
    if not segments:
        return []
    clusters = cluster_endpoints(segments, merge_threshold)

    walls: List[Wall] = []
    for i in range(len(segments)):
        start = clusters.vertex(2 * i)
        end = clusters.vertex(2 * i + 1)
        if distance(start, end) < min_wall_length:
            if metrics is not None:
                metrics.degenerate_walls += 1
            continue
        walls.append(Wall(id=f"wall-{len(walls)}", start=start, end=end, thickness=thickness))
    if metrics is not None:
        metrics.merged_vertices = clusters.vertex_count
        metrics.total_walls = len(walls)
    return walls
