"""
Computes circumcircles of 2D triangles from perpendicular edge bisectors.

The circumcenter is the intersection of the perpendicular bisectors of any two
of a triangle's edges. Each bisector is kept in normal form a*x + b*y = c
(with (a, b) the edge direction), so vertical and horizontal bisectors need no
slope and never produce infinities. Degenerate triangles (all vertices on one
horizontal line, or a signed area below `EPSILON` times the squared longest
side) get the sentinel
circumcircle: center (0, 0), radius 0.
"""
from .geometry_core import EPSILON, Edge, Point

# --- Circumcircle Calculation Functions ---

def perpendicular_bisector(edge: Edge) -> tuple:
    """
    Returns the perpendicular bisector of `edge` as coefficients (a, b, c).

    The bisector is the line a*x + b*y = c through the edge midpoint,
    perpendicular to the edge. For a horizontal edge the line is vertical
    (b == 0); for a vertical edge it is horizontal (a == 0).
    """
    a = edge.p2.x - edge.p1.x
    b = edge.p2.y - edge.p1.y
    mid = edge.center()
    return a, b, a * mid.x + b * mid.y


def intersect_lines(line1: tuple, line2: tuple, tol: float = EPSILON) -> Point | None:
    """
    Intersects two lines given in normal form (a, b, c).

    Returns:
        Point | None: The intersection, or `None` if the lines are parallel
                      within `tol`.
    """
    a1, b1, c1 = line1
    a2, b2, c2 = line2
    det = a1 * b2 - a2 * b1
    if abs(det) < tol:
        return None
    return Point((c1 * b2 - c2 * b1) / det, (a1 * c2 - a2 * c1) / det)


def compute_triangle_circumcircle_2d(p1: Point, p2: Point, p3: Point, tol: float = EPSILON) -> tuple:
    """
    Computes the circumcenter and circumradius of the triangle p1-p2-p3.

    Two non-horizontal edges are chosen (edge p1-p2 and p2-p3, swapping in
    p3-p1 for whichever of them is horizontal), their bisectors are
    intersected, and the radius is the distance from that center to a vertex.

    Args:
        p1 (Point): First vertex.
        p2 (Point): Second vertex.
        p3 (Point): Third vertex.
        tol (float, optional): Tolerance for the horizontal check, and relative
                               tolerance (area over squared longest side) for
                               the collinear check.

    Returns:
        Tuple[Point, float]:
            - circumcenter (Point): Center of the circumcircle, or Point(0, 0)
              for a degenerate triangle.
            - circumradius (float): Radius of the circumcircle, or 0.0 for a
              degenerate triangle.
    """
    sentinel = (Point(0, 0), 0.0)
    if abs(p1.y - p2.y) < tol and abs(p2.y - p3.y) < tol:
        return sentinel

    # Twice the signed area, measured against the squared longest side so the
    # collinearity test does not depend on the scale of the coordinates.
    area_x2 = (p2.x - p1.x) * (p3.y - p1.y) - (p2.y - p1.y) * (p3.x - p1.x)
    longest_sq = max(p1.distance_to(p2), p2.distance_to(p3), p3.distance_to(p1)) ** 2
    if abs(area_x2) <= tol * longest_sq:
        return sentinel

    e1 = Edge(p1, p2)
    e2 = Edge(p2, p3)
    if e1.is_horizontal(tol):
        e1 = Edge(p3, p1)
    elif e2.is_horizontal(tol):
        e2 = Edge(p3, p1)

    center = intersect_lines(perpendicular_bisector(e1), perpendicular_bisector(e2), tol=0.0)
    if center is None:
        return sentinel
    return center, center.distance_to(e1.p1)
