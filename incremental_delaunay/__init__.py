"""
Incremental 2D Delaunay triangulation (Bowyer-Watson).
"""
from .geometry_core import EPSILON, Point, Edge, Triangle, nearly_equal, is_horizontal, as_point_tensor
from .circumcenter_calculations import compute_triangle_circumcircle_2d, perpendicular_bisector
from .super_triangle import SUPER_TRIANGLE_OFFSET, bounding_box, build_super_triangle
from .delaunay_2d import (Triangulation, delaunay_triangulation_2d,
                          is_point_in_circumcircle, find_delaunay_violations)
from .stepper import TriangulationStepper

__version__ = "0.1.0"
