"""
Step-by-step driver for observing a triangulation as it is built.

`TriangulationStepper` pairs a `Triangulation` with a cursor into its
x-sorted point list. Each `step` inserts the next point; once every point
has been inserted, `step` finalizes instead. A front-end can call `step` in
response to user input and inspect `triangulation.triangles` in between.
"""
import logging

from .delaunay_2d import Triangulation
from .geometry_core import Triangle
from .super_triangle import SUPER_TRIANGLE_OFFSET

log = logging.getLogger(__name__)


class TriangulationStepper:
    """
    Cursor over the insertion steps of one `Triangulation`.

    Attributes:
        triangulation (Triangulation): The state being built.
        cursor (int): Number of points inserted so far.
    """

    def __init__(self, points, offset: float = SUPER_TRIANGLE_OFFSET):
        self.triangulation = Triangulation(points, offset=offset)
        self.cursor = 0

    @property
    def done(self) -> bool:
        """True once every point was inserted and the result finalized."""
        return self.cursor == self.triangulation.point_count() and self.triangulation.is_finalized

    def processed_points(self) -> tuple:
        """Points inserted so far, in insertion order."""
        return self.triangulation.points[:self.cursor]

    def pending_points(self) -> tuple:
        """Points still waiting to be inserted."""
        return self.triangulation.points[self.cursor:]

    def is_scaffold_triangle(self, triangle: Triangle) -> bool:
        return self.triangulation.is_scaffold_triangle(triangle)

    def step(self) -> bool:
        """
        Advances by one step.

        Inserts the next point, or finalizes if all points are in. Further
        calls after that only repeat the (idempotent) finalization.

        Returns:
            bool: True if a point was inserted, False if the step finalized.
        """
        if self.cursor < self.triangulation.point_count():
            v = self.triangulation.point(self.cursor)
            self.triangulation.insert(v)
            self.cursor += 1
            log.debug("Step %d: inserted %s, %d triangles",
                      self.cursor, v, len(self.triangulation.triangles))
            return True
        self.triangulation.finalize()
        return False

    def run(self) -> list:
        """Steps until finalized and returns the resulting triangles."""
        while self.step():
            pass
        return list(self.triangulation.triangles)
