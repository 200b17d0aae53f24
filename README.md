# pppi

pppi is a path-tracking steering controller for car-like vehicles. It
computes the steering command as the sum of three terms:

* a **pure pursuit** term that aims at a lookahead point on the recorded path,
* a **proportional** term on the lookahead error. This error is the signed
  distance to the closest waypoint plus the heading difference projected
  `axle_length / 2 + lookahead_distance` ahead of the vehicle,
* an **integral** term on the accumulated lateral error.

The sum is passed through a weighted moving-average low-pass filter. The
result is then clamped to ±50 degrees and returned in radians.

pppi uses only the Python standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Parameters

`ControllerParams.from_mapping` reads these keys. It raises `ParameterError`,
a subclass of `ValueError`, in three cases: a key is missing, a value has the
wrong type, or `filter_length` is less than 1.

| name                 | type    | meaning                                                        |
|----------------------|---------|----------------------------------------------------------------|
| `lookahead_distance` | number  | radius of the lookahead circle                                 |
| `axle_length`        | number  | wheelbase of the vehicle                                       |
| `Kpp`                | number  | gain on the pure pursuit term                                  |
| `Kp`                 | number  | gain on the lookahead error                                    |
| `Ki`                 | number  | gain on the accumulated lateral error                          |
| `weight_current`     | number  | filter weight of the newest sample (older ones share the rest) |
| `filter_length`      | integer | number of samples the low-pass filter keeps (at least 1)       |

## Using the library

```python
from pppi.controller import ControllerParams, PurePursuitPIController
from pppi.geometry import Point, Pose, Quaternion

params = ControllerParams.from_mapping({
    "lookahead_distance": 2.0,
    "axle_length": 2.7,
    "Kpp": 1.0,
    "Kp": 0.1,
    "Ki": 0.001,
    "weight_current": 0.6,
    "filter_length": 5,
})
controller = PurePursuitPIController(params, 10.0)

heading = Quaternion(0.0, 0.0, 0.0, 1.0)
for x in range(20):
    controller.add_path_pose(Pose(Point(float(x), 0.0, 0.0), heading))

vehicle = Pose(Point(0.5, 0.3, 0.0), heading)
controller.control(vehicle)          # first command: steering_angle is NaN
command = controller.control(vehicle)
print(command.steering_angle, command.velocity)
```

`PurePursuitPIController(params, velocity=10.0)` follows the poses added
with `add_path_pose`.

* `control(pose)` returns a `VehicleCommand` with the filtered and clamped
  `steering_angle` and the configured `velocity`.
* `raw_steering(pose)` returns the unfiltered sum of the three terms.

Each call to either method adds the current lateral error to
`integral_error`.

The filter averages the newest sample with the samples before it. On the
first `control` call the window holds no earlier sample, so the steering
angle is NaN. With `filter_length` set to 1 the window never holds an
earlier sample, so every steering angle is NaN.

The path must not be empty. The search for the lookahead point starts at
the closest waypoint and walks forward. It picks the last waypoint that is
still inside the lookahead circle. A `ValueError` is raised in two cases:

* the path ends before the search leaves the circle,
* no waypoint lies inside the circle.

### Geometry helpers

`pppi.geometry` provides frozen dataclasses `Point`, `Quaternion` and
`Pose`, and these functions:

* `yaw_from_quaternion(q)` returns the yaw angle in radians.
* `local_transform(origin, target)` returns the target's `(x, y)` in the
  origin pose's frame.
* `closest_waypoint_index(current, poses)` returns the index of the nearest
  pose. If several are equally near, it returns the first.
* `choose_lookahead_point(current, poses, lookahead_distance, closest_index)`
  returns the lookahead pose.
* `pure_pursuit_steering(target_x, target_y, length)` returns the pure
  pursuit steering angle.
* `lookahead_error(heading_error, lateral_error, hypotenuse)` returns the
  lookahead error.

`pppi.controller.LowPassFilter(length, weight_current)` is the output
filter, and you can use it on its own. Its `update(steering)` method returns
the filtered value.

## Command line

```
pppi-controller params.json
```

`params.json` is a JSON object that holds the parameters listed above. If
the file cannot be read or the parameters are invalid, the command logs an
error and exits with status 1.

The command reads messages from standard input, one JSON object per line:

```
{"topic": "/odom", "pose": {"position": {"x": 1.0, "y": 0.0}, "orientation": {"z": 0.0, "w": 1.0}}}
{"topic": "/odom_sim", "pose": {"position": {"x": 0.5, "y": 0.3}}}
```

Missing coordinates default to 0, and a missing `w` defaults to 1. Each
topic is handled as follows:

* `/odom` appends the pose to the path and writes
  `{"topic": "/path", "length": <number of path poses>}`.
* `/odom_sim` treats the pose as the vehicle's current pose and writes
  `{"topic": "/vehicle_cmd", "angular_z": <steering>, "linear_x": 10.0}`.
* Other topics are ignored with a warning.

A line that is not a JSON object, or that cannot be processed, is logged
and skipped. Log messages go to standard error, and commands go to
standard output.

## What it does not do

pppi does not connect to any message bus or vehicle interface. The command
only exchanges JSON lines over standard input and output. The velocity in
its commands is fixed at 10.0.