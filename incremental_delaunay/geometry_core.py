"""
Core geometric primitives for 2D incremental Delaunay triangulation.

This module provides the foundational pieces the triangulation is built from:
- A global EPSILON constant and the tolerance predicates built on it.
- `Point`: an immutable coordinate pair with a tolerance-aware total order.
- `Edge`: an unordered pair of points stored in canonical orientation.
- `Triangle`: three vertices in canonical order plus a cached circumcircle.
- `as_point_tensor`: normalisation of user input into a (N, 2) float64 tensor.

Canonical forms matter here: two edges (or triangles) built from the same
points in any order compare equal and hash identically, which is what the
cavity edge counting in `delaunay_2d` relies on.
"""
import math

import torch

EPSILON = 1e-6 # Global epsilon for float comparisons.


def nearly_equal(a: float, b: float, tol: float = EPSILON) -> bool:
    """Returns True if `a` and `b` differ by less than `tol`."""
    return abs(a - b) < tol


def is_horizontal(p: "Point", q: "Point", tol: float = EPSILON) -> bool:
    """Returns True if the segment p-q is horizontal within `tol`."""
    return nearly_equal(p.y, q.y, tol)


def as_point_tensor(points) -> torch.Tensor:
    """
    Converts a point collection into a validated float64 tensor of shape (N, 2).

    Args:
        points: A torch tensor or numpy array of shape (N, 2), or any sequence of
                (x, y) pairs (including `Point` instances).

    Returns:
        torch.Tensor: float64 tensor of shape (N, 2).

    Raises:
        ValueError: If the collection is empty, not shaped (N, 2), or holds
                    non-finite coordinates.
    """
    if isinstance(points, torch.Tensor):
        tensor = points.detach().to(dtype=torch.float64, device="cpu")
    else:
        pairs = [(p.x, p.y) if isinstance(p, Point) else p for p in points]
        if len(pairs) == 0:
            raise ValueError("At least one input point is required.")
        try:
            tensor = torch.as_tensor(pairs, dtype=torch.float64)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Input points must be (x, y) pairs: {exc}") from exc

    if tensor.ndim != 2 or tensor.shape[1] != 2:
        raise ValueError(f"Input points must have shape (N, 2), got {tuple(tensor.shape)}.")
    if tensor.shape[0] == 0:
        raise ValueError("At least one input point is required.")
    if not torch.all(torch.isfinite(tensor)):
        raise ValueError("Input points must have finite coordinates.")
    return tensor


class Point:
    """
    An immutable 2D point.

    Points compare equal only when both coordinates are identical. Otherwise
    they are ordered by x, falling back to y when the x values are within
    EPSILON of each other (see `compare`).
    """
    __slots__ = ("_x", "_y")

    def __init__(self, x: float, y: float):
        object.__setattr__(self, "_x", float(x))
        object.__setattr__(self, "_y", float(y))

    def __setattr__(self, name, value):
        raise AttributeError("Point is immutable.")

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    def __iter__(self):
        yield self._x
        yield self._y

    def __eq__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        return self._x == other._x and self._y == other._y

    def __hash__(self):
        return hash((self._x, self._y))

    def __lt__(self, other: "Point") -> bool:
        return self.compare(other) < 0

    def __gt__(self, other: "Point") -> bool:
        return self.compare(other) > 0

    def __repr__(self):
        return f"Point({self._x!r}, {self._y!r})"

    def __str__(self):
        return f"({self._x:.1f}, {self._y:.1f})"

    def compare(self, other: "Point") -> int:
        """
        Total order used for edge canonicalisation.

        Returns 0 if the points are identical, 1 if `self` is greater and -1
        otherwise. `self` is greater when its x is larger, or when the x values
        are within EPSILON and its y is larger.
        """
        if self == other:
            return 0
        if nearly_equal(self._x, other._x) and self._y != other._y:
            return 1 if self._y > other._y else -1
        return 1 if self._x > other._x else -1

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to `other`."""
        return math.hypot(other._x - self._x, other._y - self._y)

    def angle_to(self, other: "Point") -> float:
        """
        Bearing in degrees, in [0, 360), from this point to `other`.

        The bearing is measured from the +y axis towards +x. Only used to put
        triangle vertices in canonical order, so full precision is kept.
        """
        angle = math.degrees(math.atan2(other._x - self._x, other._y - self._y)) % 360.0
        # -tiny % 360.0 rounds to 360.0
        return 0.0 if angle >= 360.0 else angle


class Edge:
    """
    An unordered pair of points stored with the greater point first.

    `Edge(a, b) == Edge(b, a)` holds for any two points, so edges can be used
    directly as dictionary keys when counting shared edges.
    """
    __slots__ = ("p1", "p2")

    def __init__(self, p1: Point, p2: Point):
        if p2.compare(p1) > 0:
            p1, p2 = p2, p1
        self.p1 = p1
        self.p2 = p2

    def __eq__(self, other):
        if not isinstance(other, Edge):
            return NotImplemented
        return self.p1 == other.p1 and self.p2 == other.p2

    def __hash__(self):
        return hash((self.p1, self.p2))

    def __repr__(self):
        return f"Edge({self.p1!r}, {self.p2!r})"

    def __str__(self):
        return f"{self.p1} - {self.p2}"

    def center(self) -> Point:
        """Midpoint of the edge."""
        return Point(self.p1.x + (self.p2.x - self.p1.x) / 2,
                     self.p1.y + (self.p2.y - self.p1.y) / 2)

    def is_horizontal(self, tol: float = EPSILON) -> bool:
        return is_horizontal(self.p1, self.p2, tol)


class Triangle:
    """
    A triangle with canonically ordered vertices and a cached circumcircle.

    Vertices are sorted by descending bearing from the centroid, so triangles
    built from any permutation of the same three points are equal. The
    circumcenter and circumradius are computed once on construction; a
    degenerate (collinear) triangle gets the sentinel center (0, 0) and
    radius 0 and never contains any point.

    Attributes:
        p1, p2, p3 (Point): Vertices in canonical order.
        circumcenter (Point): Center of the circumscribed circle.
        circumradius (float): Radius of the circumscribed circle.
    """
    __slots__ = ("p1", "p2", "p3", "circumcenter", "circumradius")

    def __init__(self, p1: Point, p2: Point, p3: Point):
        # Summing in a fixed order keeps the centroid bit-identical for every
        # permutation of the input.
        ordered = sorted((p1, p2, p3), key=lambda p: (p.x, p.y))
        centroid = Point(sum(p.x for p in ordered) / 3, sum(p.y for p in ordered) / 3)
        ordered.sort(key=centroid.angle_to, reverse=True)
        self.p1, self.p2, self.p3 = ordered

        self.circumcenter, self.circumradius = compute_triangle_circumcircle_2d(self.p1, self.p2, self.p3)

    def __eq__(self, other):
        if not isinstance(other, Triangle):
            return NotImplemented
        return self.vertices() == other.vertices()

    def __hash__(self):
        return hash(self.vertices())

    def __repr__(self):
        return f"Triangle({self.p1!r}, {self.p2!r}, {self.p3!r})"

    def __str__(self):
        return f"[{self.p1} - {self.p2} - {self.p3}]"

    def vertices(self) -> tuple:
        return (self.p1, self.p2, self.p3)

    def edge(self, index: int) -> Edge:
        """
        Returns edge `index` of the triangle: 0 is p1-p2, 1 is p2-p3, 2 is p3-p1.

        Raises:
            IndexError: If `index` is not 0, 1 or 2.
        """
        if index == 0:
            return Edge(self.p1, self.p2)
        if index == 1:
            return Edge(self.p2, self.p3)
        if index == 2:
            return Edge(self.p3, self.p1)
        raise IndexError(f"Invalid triangle edge index: {index}")

    def edges(self) -> list:
        return [self.edge(0), self.edge(1), self.edge(2)]

    def uses_any_of(self, vertices) -> bool:
        """True if any vertex of this triangle is in `vertices` (a set or other container)."""
        return any(v in vertices for v in self.vertices())

    def is_degenerate(self) -> bool:
        """True for collinear triangles, which carry the sentinel circumcircle."""
        return self.circumradius == 0


# Imported last: circumcenter_calculations needs Point and Edge from this module.
from .circumcenter_calculations import compute_triangle_circumcircle_2d # noqa: E402
