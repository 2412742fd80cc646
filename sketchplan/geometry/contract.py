from __future__ import annotations

"""
Recognition Contract

Single source of truth for the thresholds, tolerances and defaults used by the
sketch recognition pipeline. All modules should import from here instead of
hardcoding.
"""

# All lengths are canvas units: percent of the canvas width/height (0-100)

# Stroke classification
OBJECT_MAX_DIM = 20.0  # largest bbox side a furniture stroke may have
CLOSED_THRESHOLD = 5.0  # start/end gap below which a stroke counts as closed
COMPACTNESS_FACTOR = 2.5  # polyline length must stay below factor * bbox perimeter
MIN_OBJECT_POINTS = 3

# Simplification
SIMPLIFY_EPSILON = 1.5

# Angles (degrees)
SNAP_THRESHOLD_DEG = 5.0
PARALLEL_THRESHOLD_DEG = 3.0
CARDINAL_ANGLES = (0.0, 90.0, 180.0, 270.0)

# Walls
MERGE_THRESHOLD = 4.0
MIN_WALL_LENGTH = 0.5
WALL_THICKNESS = 2.0

# Rooms
MIN_ROOM_AREA = 10.0  # square canvas units
MIN_ROOM_WALLS = 3
VERTEX_KEY_SCALE = 100.0  # graph vertices are keyed on coordinates rounded to 0.01
TURN_EPSILON = 0.01  # radians
WALL_MATCH_TOLERANCE = 0.1

# Rectangle decomposition
CLUSTER_THRESHOLD = 3.0
CLUSTER_ROUND_DIGITS = 1
SIMPLE_RECT_MAX_VERTICES = 4

# Leftover walls
LEFTOVER_MIN_RECT_SIDE = 1.0  # decomposed hull rectangles must exceed this on both sides
LEFTOVER_MIN_BOX_SIDE = 3.0  # single leftover wall box is widened to at least this

# Furniture
ROUND_TABLE_MAX_ASPECT = 1.4
ROUND_TABLE_MAX_DIM = 12.0
TABLE_2_MAX_DIM = 9.0
TABLE_4_MAX_DIM = 15.0
MIN_FURNITURE_SIZE = 5.0

# Space classification
CANVAS_AREA = 100.0 * 100.0
LARGE_ROOM_RATIO = 0.4
CORRIDOR_MAX_ASPECT = 3.0
CORRIDOR_MIN_ASPECT = 0.33
L_SHAPE_MIN_VERTICES = 6
RECTANGLE_MAX_VERTICES = 5
RECTANGLE_MIN_ASPECT = 0.5
RECTANGLE_MAX_ASPECT = 2.0
