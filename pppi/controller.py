"""Pure-pursuit steering combined with a PI correction on the lateral error."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pppi.geometry import (
    Pose,
    choose_lookahead_point,
    closest_waypoint_index,
    local_transform,
    lookahead_error,
    pure_pursuit_steering,
    yaw_from_quaternion,
)

logger = logging.getLogger(__name__)

MAX_STEERING_DEGREES = 50.0
DEFAULT_VELOCITY = 10.0


class ParameterError(ValueError):
    """A controller parameter is missing or has the wrong type."""


_FLOAT_PARAMS = (
    ("lookahead_distance", "lookahead_distance"),
    ("axle_length", "axle_length"),
    ("Kpp", "kpp"),
    ("Kp", "kp"),
    ("Ki", "ki"),
    ("weight_current", "weight_current"),
)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class ControllerParams:
    """Tuning of the controller."""

    lookahead_distance: float
    axle_length: float
    kpp: float
    kp: float
    ki: float
    weight_current: float
    filter_length: int

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> ControllerParams:
        """Read the parameters from their configuration names."""
        values: dict[str, Any] = {}
        for key, attr in _FLOAT_PARAMS:
            if key not in mapping:
                raise ParameterError(f"missing parameter {key!r}")
            value = mapping[key]
            if not _is_number(value):
                raise ParameterError(f"parameter {key!r} must be a number")
            values[attr] = float(value)
        if "filter_length" not in mapping:
            raise ParameterError("missing parameter 'filter_length'")
        length = mapping["filter_length"]
        if not isinstance(length, int) or isinstance(length, bool):
            raise ParameterError("parameter 'filter_length' must be an integer")
        if length < 1:
            raise ParameterError("parameter 'filter_length' must be at least 1")
        params = cls(filter_length=length, **values)
        logger.info("Lookahead distance: %f", params.lookahead_distance)
        logger.info("PP_PI gains: [%f, %f, %f]", params.kpp, params.kp, params.ki)
        logger.info("Filter weight: [%f]", params.weight_current)
        logger.info("Filter length: [%d]", params.filter_length)
        return params


class LowPassFilter:
    """Weighted average of the newest sample and the mean of the samples before it."""

    def __init__(self, length: int, weight_current: float) -> None:
        if length < 1:
            raise ValueError("filter length must be at least 1")
        self.length = length
        self.weight_current = weight_current
        self.history: list[float] = []

    def update(self, steering: float) -> float:
        """Add a sample and return the filtered value.

        With no earlier sample in the window the result is NaN.
        """
        self.history.append(steering)
        if len(self.history) > self.length:
            del self.history[0]
        previous = self.history[:-1]
        if not previous:
            return math.nan
        w_prev = (1.0 - self.weight_current) / len(previous)
        return sum(previous) * w_prev + steering * self.weight_current


@dataclass(frozen=True)
class VehicleCommand:
    """Steering angle in radians and forward velocity."""

    steering_angle: float
    velocity: float


class PurePursuitPIController:
    """Follows a recorded path with pure pursuit plus PI feedback."""

    def __init__(self, params: ControllerParams, velocity: float = DEFAULT_VELOCITY) -> None:
        self.params = params
        self.velocity = velocity
        self.path: list[Pose] = []
        self.integral_error = 0.0
        self.filter = LowPassFilter(params.filter_length, params.weight_current)

    def add_path_pose(self, pose: Pose) -> None:
        """Append a pose to the path being followed."""
        self.path.append(pose)

    def raw_steering(self, pose: Pose) -> float:
        """Unfiltered steering angle for the vehicle at the given pose."""
        p = self.params
        closest_index = closest_waypoint_index(pose, self.path)
        target = choose_lookahead_point(pose, self.path, p.lookahead_distance, closest_index)
        target_x, target_y = local_transform(pose, target)
        pp_steering = pure_pursuit_steering(target_x, target_y, p.axle_length)

        closest = self.path[closest_index]
        closest_x, closest_y = local_transform(pose, closest)
        heading_error = yaw_from_quaternion(pose.orientation) - yaw_from_quaternion(
            closest.orientation
        )
        lateral_error = math.hypot(closest_x, closest_y)
        if math.sin(-heading_error) < 0:
            lateral_error = -lateral_error

        la_error = lookahead_error(
            heading_error, lateral_error, p.axle_length / 2 + p.lookahead_distance
        )
        self.integral_error += lateral_error
        return p.kpp * pp_steering + p.kp * la_error + p.ki * self.integral_error

    def control(self, pose: Pose) -> VehicleCommand:
        """Filtered, limited steering command for the vehicle at the given pose."""
        steering = self.filter.update(self.raw_steering(pose))
        degrees = math.degrees(steering)
        if degrees > MAX_STEERING_DEGREES:
            steering = math.radians(MAX_STEERING_DEGREES)
        elif degrees < -MAX_STEERING_DEGREES:
            steering = math.radians(-MAX_STEERING_DEGREES)
        logger.info("Steering angle: [%f]", steering)
        return VehicleCommand(steering_angle=steering, velocity=self.velocity)