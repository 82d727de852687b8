"""
Computes 2D Delaunay triangulation using the Bowyer-Watson algorithm.

This module provides the `Triangulation` state object, which performs the
incremental construction one point at a time, and the one-shot
`delaunay_triangulation_2d` function returning triangles as index triples.

Points are inserted in increasing x order. For each point, every triangle
whose circumcircle contains it is removed, and the resulting polygonal cavity
is re-triangulated by connecting the point to the cavity's boundary edges.
The process starts from a super-triangle enclosing all points
(`super_triangle.build_super_triangle`), whose vertices are discarded by
`Triangulation.finalize`.
"""
import logging

import torch

from .geometry_core import EPSILON, Point, Triangle, as_point_tensor
from .super_triangle import SUPER_TRIANGLE_OFFSET, build_super_triangle

log = logging.getLogger(__name__)


def is_point_in_circumcircle(point: Point, triangle: Triangle, tol: float = EPSILON) -> bool:
    """
    Checks if a point is strictly inside the circumcircle of a triangle.

    A point is "in" if its distance from the circumcenter is less than the
    circumradius minus `tol`, so points on the circle are not counted.
    Degenerate triangles (circumradius 0) contain nothing.
    """
    if triangle.circumradius <= 0:
        return False
    return point.distance_to(triangle.circumcenter) < triangle.circumradius - tol


def find_delaunay_violations(triangles, points, tol: float = EPSILON) -> list:
    """
    Finds all (triangle, point) pairs breaking the empty-circumcircle property.

    Args:
        triangles: Iterable of `Triangle`.
        points: Iterable of `Point` to test against every triangle.
        tol (float, optional): Tolerance passed to `is_point_in_circumcircle`.

    Returns:
        list: (triangle, point) tuples where `point` is not a vertex of
              `triangle` but lies strictly inside its circumcircle. Empty for a
              valid Delaunay triangulation.
    """
    points = list(points)
    violations = []
    for t in triangles:
        vertices = t.vertices()
        for p in points:
            if p not in vertices and is_point_in_circumcircle(p, t, tol):
                violations.append((t, p))
    return violations


class Triangulation:
    """
    State of an incremental Bowyer-Watson triangulation.

    On construction the super-triangle is built around the input points, its
    vertices are appended to the point list and the combined list is sorted
    by increasing x. `insert` then runs one insertion step, `finalize` drops
    every triangle touching the super-triangle, and `triangulate` does both
    for all points.

    Each instance owns its point list and triangle set; instances are
    independent of each other.

    The super-triangle is only a few `offset` units larger than the input
    bounding box. A hull triangle whose circumcircle reaches a super-triangle
    vertex is replaced by triangles using that vertex, so after `finalize` such
    triangles are missing and the result may not cover the whole convex hull.
    A larger `offset` recovers more of them. Every triangle that remains still
    has an empty circumcircle.

    Attributes:
        super_triangle (Triangle): The enclosing scaffold triangle.
        super_triangle_vertices (frozenset): The scaffold's three vertices.
    """

    def __init__(self, points, offset: float = SUPER_TRIANGLE_OFFSET):
        """
        Initializes the triangulation state.

        Args:
            points: Tensor of shape (N, 2) or a sequence of (x, y) pairs.
            offset (float, optional): Margin of the super-triangle around the
                                      input bounding box.

        Raises:
            ValueError: If the points are empty, badly shaped or not finite.
        """
        tensor = as_point_tensor(points)
        self._input_points = [Point(x, y) for x, y in tensor.tolist()]

        self.super_triangle = build_super_triangle(tensor, offset=offset)
        self.super_triangle_vertices = frozenset(self.super_triangle.vertices())

        self._points = sorted(self._input_points + list(self.super_triangle.vertices()),
                              key=lambda p: p.x)
        self._point_set = frozenset(self._points)
        self._triangles = [self.super_triangle]
        self._finalized = False
        log.debug("Initialized triangulation of %d points, super-triangle %s",
                  len(self._input_points), self.super_triangle)

    def __repr__(self):
        return (f"<Triangulation points={len(self._points)} "
                f"triangles={len(self._triangles)} finalized={self._finalized}>")

    # --- Queries ---

    def point_count(self) -> int:
        """Number of points, including the three super-triangle vertices."""
        return len(self._points)

    def point(self, index: int) -> Point:
        """Returns the point at `index` in insertion (x-sorted) order."""
        if not 0 <= index < len(self._points):
            raise IndexError(f"Point index {index} out of range [0, {len(self._points)}).")
        return self._points[index]

    @property
    def points(self) -> tuple:
        """All points in insertion order, super-triangle vertices included."""
        return tuple(self._points)

    @property
    def input_points(self) -> tuple:
        """The input points in their original order."""
        return tuple(self._input_points)

    @property
    def triangles(self) -> tuple:
        """The current triangle set."""
        return tuple(self._triangles)

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    def is_scaffold_triangle(self, triangle: Triangle) -> bool:
        """True if `triangle` uses any super-triangle vertex."""
        return triangle.uses_any_of(self.super_triangle_vertices)

    # --- Commands ---

    def insert(self, v: Point):
        """
        Performs one Bowyer-Watson step for point `v`.

        Every triangle whose circumcircle contains `v` (on the circle counts)
        is removed, and each edge of the removed triangles that belonged to
        exactly one of them is joined to `v` to form a new triangle. Edges
        shared by two removed triangles lie inside the cavity and are dropped.

        Triangles whose circumcircle lies entirely left of `v` are skipped
        without a distance test; this relies on points arriving in
        non-decreasing x order, as they do from `points`.

        `v` must be one of `points`; every triangle vertex is drawn from that
        list. Inserting a super-triangle vertex is a no-op.

        Raises:
            TypeError: If `v` is not a `Point`.
            ValueError: If `v` is not in `points`.
        """
        if not isinstance(v, Point):
            raise TypeError(f"Expected a Point, got {type(v).__name__}.")
        if v not in self._point_set:
            raise ValueError(f"{v!r} is not a point of this triangulation.")
        if v in self.super_triangle_vertices:
            log.debug("Skipping super-triangle vertex %s", v)
            return
        if self._finalized:
            log.warning("Inserting %s into a finalized triangulation", v)

        kept = []
        edge_counts = {} # Canonical edge -> number of removed triangles using it
        for t in self._triangles:
            if v.x - t.circumcenter.x > t.circumradius:
                kept.append(t)
            elif t.circumradius > 0 and v.distance_to(t.circumcenter) <= t.circumradius:
                for e in t.edges():
                    edge_counts[e] = edge_counts.get(e, 0) + 1
            else:
                kept.append(t)

        n_removed = len(self._triangles) - len(kept)
        for e, count in edge_counts.items():
            if count == 1:
                kept.append(Triangle(v, e.p1, e.p2))

        log.debug("Inserted %s: removed %d triangles, added %d",
                  v, n_removed, len(kept) - len(self._triangles) + n_removed)
        self._triangles = kept

    def finalized_triangles(self) -> list:
        """Triangles not touching the super-triangle, without modifying the state."""
        return [t for t in self._triangles if not self.is_scaffold_triangle(t)]

    def finalize(self):
        """
        Removes every triangle using a super-triangle vertex.

        Idempotent, and safe to call before all points have been inserted.
        """
        self._triangles = self.finalized_triangles()
        self._finalized = True

    def triangulate(self) -> list:
        """
        Inserts every point in x order, finalizes, and returns the triangles.

        Returns:
            list: The Delaunay triangles of the input points.
        """
        for v in self._points:
            self.insert(v)
        self.finalize()
        log.info("Triangulated %d points into %d triangles",
                 len(self._input_points), len(self._triangles))
        return list(self._triangles)

    # --- Export ---

    def triangle_indices(self, include_degenerate: bool = True) -> torch.Tensor:
        """
        Returns the current triangles as indices into the input points.

        Duplicate input points map to their first occurrence. Triangles using a
        super-triangle vertex have no input index and are left out.

        Args:
            include_degenerate (bool, optional): If False, collinear triangles
                                                 are left out as well.

        Returns:
            torch.Tensor: Long tensor of shape (M, 3), in canonical vertex order.
        """
        index_of = {}
        for i, p in enumerate(self._input_points):
            index_of.setdefault(p, i)

        rows = []
        for t in self._triangles:
            if self.is_scaffold_triangle(t):
                continue
            if not include_degenerate and t.is_degenerate():
                continue
            rows.append([index_of[v] for v in t.vertices()])

        if not rows:
            return torch.empty((0, 3), dtype=torch.long)
        return torch.tensor(rows, dtype=torch.long)


def delaunay_triangulation_2d(points: torch.Tensor, offset: float = SUPER_TRIANGLE_OFFSET) -> torch.Tensor:
    """
    Computes the 2D Delaunay triangulation of a set of points.

    Args:
        points (torch.Tensor): Tensor of shape (N, 2) representing N points in 2D.
        offset (float, optional): Margin of the super-triangle.

    Returns:
        torch.Tensor: Long tensor of shape (M, 3). Each row holds the indices
                      (0 to N-1) of the three input points forming a triangle.
                      Collinear triangles are dropped. Returns an empty (0, 3)
                      tensor if N < 3.
    """
    n_points = points.shape[0] if isinstance(points, torch.Tensor) else len(points)
    if n_points < 3:
        return torch.empty((0, 3), dtype=torch.long)

    triangulation = Triangulation(points, offset=offset)
    triangulation.triangulate()
    return triangulation.triangle_indices(include_degenerate=False)
