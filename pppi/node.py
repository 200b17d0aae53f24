"""Command-line node: reads odometry messages as JSON lines and writes vehicle commands."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Mapping
from typing import Any, TextIO

from pppi.controller import ControllerParams, ParameterError, PurePursuitPIController
from pppi.geometry import Point, Pose, Quaternion, yaw_from_quaternion

logger = logging.getLogger("controller_node")

PATH_TOPIC = "/odom"
ODOM_TOPIC = "/odom_sim"
COMMAND_TOPIC = "/vehicle_cmd"
PATH_OUT_TOPIC = "/path"


def _parse_pose(data: Mapping[str, Any]) -> Pose:
    position = data.get("position", {})
    orientation = data.get("orientation", {})
    return Pose(
        Point(
            float(position.get("x", 0.0)),
            float(position.get("y", 0.0)),
            float(position.get("z", 0.0)),
        ),
        Quaternion(
            float(orientation.get("x", 0.0)),
            float(orientation.get("y", 0.0)),
            float(orientation.get("z", 0.0)),
            float(orientation.get("w", 1.0)),
        ),
    )


def _emit(out: TextIO, message: Mapping[str, Any]) -> None:
    out.write(json.dumps(message) + "\n")
    out.flush()


def _handle(controller: PurePursuitPIController, message: Mapping[str, Any], out: TextIO) -> None:
    topic = message.get("topic")
    pose = _parse_pose(message.get("pose", {}))
    if topic == PATH_TOPIC:
        controller.add_path_pose(pose)
        _emit(out, {"topic": PATH_OUT_TOPIC, "length": len(controller.path)})
    elif topic == ODOM_TOPIC:
        logger.info("Current position: [%f, %f]", pose.position.x, pose.position.y)
        logger.info("Current yaw: [%f]", yaw_from_quaternion(pose.orientation))
        command = controller.control(pose)
        _emit(
            out,
            {
                "topic": COMMAND_TOPIC,
                "angular_z": command.steering_angle,
                "linear_x": command.velocity,
            },
        )
    else:
        logger.warning("ignoring message on unknown topic %r", topic)


def main(argv: list[str] | None = None) -> int:
    """Run the controller over messages read from standard input."""
    parser = argparse.ArgumentParser(prog="controller_node", description=__doc__)
    parser.add_argument("params", help="JSON file holding the controller parameters")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, stream=sys.stderr)

    try:
        with open(args.params, encoding="utf-8") as fh:
            params = ControllerParams.from_mapping(json.load(fh))
    except (OSError, json.JSONDecodeError, ParameterError, AttributeError, TypeError) as exc:
        logger.error("Could not read parameters: %s", exc)
        return 1

    controller = PurePursuitPIController(params)
    for line in sys.stdin:
        if not line.strip():
            continue
        try:
            message = json.loads(line)
            if not isinstance(message, dict):
                raise ValueError("message is not an object")
            _handle(controller, message, sys.stdout)
        except (ValueError, IndexError, TypeError, AttributeError) as exc:
            logger.error("Skipping message: %s", exc)
    return 0


if __name__ == "__main__":
    sys.exit(main())