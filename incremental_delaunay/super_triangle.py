"""
Builds the enclosing "super-triangle" used to bootstrap Bowyer-Watson insertion.

The super-triangle is a removable scaffold: it strictly encloses the bounding
box of the input points, so every input point falls inside the initial
triangulation. Its three vertices are dropped again by
`Triangulation.finalize`.
"""
import torch

from .geometry_core import Point, Triangle, as_point_tensor

SUPER_TRIANGLE_OFFSET = 2.0 # Margin added around the bounding box.


def bounding_box(points) -> tuple:
    """
    Computes the axis-aligned bounding box of a point set.

    Args:
        points: Tensor of shape (N, 2) or a sequence of (x, y) pairs.

    Returns:
        Tuple[float, float, float, float]: (min_x, min_y, max_x, max_y).
    """
    tensor = as_point_tensor(points)
    min_coords, _ = torch.min(tensor, dim=0)
    max_coords, _ = torch.max(tensor, dim=0)
    return min_coords[0].item(), min_coords[1].item(), max_coords[0].item(), max_coords[1].item()


def build_super_triangle(points, offset: float = SUPER_TRIANGLE_OFFSET) -> Triangle:
    """
    Builds a triangle strictly enclosing every point in `points`.

    The bounding box is grown by `offset`. A line through the grown box's
    (max_x, min_y) corner is drawn with a positive slope derived from the box
    diagonal; two vertices are taken on that line, one at the box's left
    extent and one at its max_y extent. The third vertex lies `5 * offset`
    beyond the (min_x, max_y) corner.

    The triangle encloses the points but stays close to them, so its vertices
    can fall inside the circumcircles of thin triangles along the convex hull.
    Those hull triangles are then lost when the scaffold is removed. Pass a
    larger `offset` (relative to the extent of the points) to keep them.

    Args:
        points: Tensor of shape (N, 2) or a sequence of (x, y) pairs.
        offset (float, optional): Margin around the bounding box, must be > 0.

    Returns:
        Triangle: The scaffold triangle.

    Raises:
        ValueError: If `offset` is not positive.
    """
    if not offset > 0:
        raise ValueError(f"Super-triangle offset must be positive, got {offset}.")

    min_x, min_y, max_x, max_y = bounding_box(points)

    left = min_x - offset
    high = max_y + offset
    right = max_x + offset
    low = min_y - offset

    # Slope of the line through (right, low). Both run and rise are at least
    # `offset` long, so the slope is finite and strictly positive.
    run = right - left - offset
    rise = high - low
    slope = run / rise
    intercept = low - slope * right

    low_left = Point(left, slope * left + intercept)
    high_right = Point((high - intercept) / slope, high)
    far = Point(min_x - offset * 5, max_y + offset * 5)
    return Triangle(low_left, high_right, far)
