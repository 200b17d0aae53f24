"""Planar pose geometry used by the pure-pursuit / PI steering controller."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence


@dataclass(frozen=True)
class Point:
    """A position in the world frame."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass(frozen=True)
class Quaternion:
    """An orientation as a unit quaternion."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0


@dataclass(frozen=True)
class Pose:
    """A position together with an orientation."""

    position: Point = field(default_factory=Point)
    orientation: Quaternion = field(default_factory=Quaternion)


def yaw_from_quaternion(q: Quaternion) -> float:
    """Return the rotation about the z axis, in radians."""
    return math.atan2(
        2.0 * (q.w * q.z + q.x * q.y),
        1.0 - 2.0 * (q.y * q.y + q.z * q.z),
    )


def _distance2(a: Pose, b: Pose) -> float:
    dx = a.position.x - b.position.x
    dy = a.position.y - b.position.y
    return dx * dx + dy * dy


def local_transform(origin: Pose, target: Pose) -> tuple[float, float]:
    """Express the target's position in the frame of the origin pose."""
    tx = -origin.position.x
    ty = -origin.position.y
    angle = -yaw_from_quaternion(origin.orientation)
    c, s = math.cos(angle), math.sin(angle)
    px, py = target.position.x, target.position.y
    x = c * px - s * py + (c * tx - s * ty)
    y = s * px + c * py + (s * tx + c * ty)
    return x, y


def closest_waypoint_index(current: Pose, poses: Sequence[Pose]) -> int:
    """Return the index of the first waypoint nearest to the current pose."""
    if not poses:
        raise ValueError("path has no waypoints")
    return min(range(len(poses)), key=lambda i: _distance2(poses[i], current))


def choose_lookahead_point(
    current: Pose,
    poses: Sequence[Pose],
    lookahead_distance: float,
    closest_index: int,
) -> Pose:
    """Return the last waypoint, from the closest one on, still inside the lookahead circle."""
    if not 0 <= closest_index < len(poses):
        raise IndexError(f"closest index {closest_index} is outside the path")
    lookahead2 = lookahead_distance**2
    index = closest_index
    while lookahead2 > _distance2(poses[index], current):
        index += 1
        if index >= len(poses):
            raise ValueError("path ends inside the lookahead distance")
    index -= 1
    if index < 0:
        raise ValueError("no waypoint lies inside the lookahead distance")
    return poses[index]


def pure_pursuit_steering(target_x: float, target_y: float, length: float) -> float:
    """Steering angle that drives an axle of the given length through the target point."""
    distance2 = target_x * target_x + target_y * target_y
    return math.atan2(2.0 * target_y * length, distance2)


def lookahead_error(heading_error: float, lateral_error: float, hypotenuse: float) -> float:
    """Lateral error projected forward along the heading error."""
    return lateral_error + hypotenuse * math.sin(-heading_error)