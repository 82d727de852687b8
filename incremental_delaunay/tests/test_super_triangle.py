"""
Unit tests for the super-triangle scaffold in `super_triangle.py`.
"""
import unittest

import torch

from ..geometry_core import Point
from ..super_triangle import SUPER_TRIANGLE_OFFSET, bounding_box, build_super_triangle


def _orientation(a, b, c):
    return (b.x - a.x) * (c.y - a.y) - (b.y - a.y) * (c.x - a.x)


def _strictly_inside(triangle, p):
    a, b, c = triangle.vertices()
    signs = [_orientation(a, b, p), _orientation(b, c, p), _orientation(c, a, p)]
    return all(s > 0 for s in signs) or all(s < 0 for s in signs)


class TestBoundingBox(unittest.TestCase):

    def test_bounding_box(self):
        pts = [(2, 4), (4, 2), (5, 8), (8, 3)]
        self.assertEqual(bounding_box(pts), (2.0, 2.0, 8.0, 8.0))

    def test_bounding_box_tensor(self):
        pts = torch.tensor([[-1.5, 3.0], [2.0, -7.0]])
        self.assertEqual(bounding_box(pts), (-1.5, -7.0, 2.0, 3.0))


class TestSuperTriangle(unittest.TestCase):

    def test_reference_vertices(self):
        """Scaffold for the four-point example has the expected corners."""
        t = build_super_triangle([(2, 4), (4, 2), (5, 8), (8, 3)])
        expected = {Point(0, -8), Point(22.5, 10), Point(-8, 18)}
        self.assertEqual(len(expected), 3)
        for v in t.vertices():
            self.assertTrue(any(v.distance_to(e) < 1e-9 for e in expected), f"Unexpected vertex {v}")

    def test_encloses_points(self):
        torch.manual_seed(0)
        for pts in (torch.rand((50, 2)) * 100,
                    torch.rand((20, 2)) * torch.tensor([1000.0, 1.0]),
                    torch.tensor([[3.0, 3.0]]),
                    torch.tensor([[0.0, 0.0], [0.0, 10.0], [0.0, 5.0]]),
                    torch.tensor([[0.0, 0.0], [10.0, 0.0]])):
            t = build_super_triangle(pts)
            for x, y in pts.tolist():
                self.assertTrue(_strictly_inside(t, Point(x, y)), f"{(x, y)} outside super-triangle {t}")

    def test_encloses_bounding_box_corners(self):
        pts = [(-5, -5), (5, 5)]
        t = build_super_triangle(pts, offset=SUPER_TRIANGLE_OFFSET)
        for corner in (Point(-5, -5), Point(-5, 5), Point(5, -5), Point(5, 5)):
            self.assertTrue(_strictly_inside(t, corner))

    def test_non_degenerate(self):
        t = build_super_triangle([(1, 1)])
        self.assertGreater(t.circumradius, 0)

    def test_invalid_offset(self):
        with self.assertRaises(ValueError):
            build_super_triangle([(0, 0), (1, 1)], offset=0)
        with self.assertRaises(ValueError):
            build_super_triangle([(0, 0), (1, 1)], offset=-2)

if __name__ == '__main__':
    unittest.main(argv=['first-arg-is-ignored'], exit=False)
