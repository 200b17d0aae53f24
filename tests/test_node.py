import io
import json

import pytest

from pppi.node import main

PARAMS = {
    "lookahead_distance": 3.0,
    "axle_length": 2.5,
    "Kpp": 1.0,
    "Kp": 0.5,
    "Ki": 0.01,
    "weight_current": 0.5,
    "filter_length": 2,
}


def _message(topic, x, y):
    return json.dumps(
        {
            "topic": topic,
            "pose": {
                "position": {"x": x, "y": y, "z": 0.0},
                "orientation": {"x": 0.0, "y": 0.0, "z": 0.0, "w": 1.0},
            },
        }
    )


@pytest.fixture
def params_file(tmp_path):
    path = tmp_path / "params.json"
    path.write_text(json.dumps(PARAMS))
    return str(path)


def _run(monkeypatch, capsys, argv, lines):
    monkeypatch.setattr("sys.stdin", io.StringIO("\n".join(lines) + "\n"))
    code = main(argv)
    out = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    return code, out


def test_missing_params_file_fails(tmp_path, monkeypatch, capsys):
    code, out = _run(monkeypatch, capsys, [str(tmp_path / "absent.json")], [])
    assert code == 1
    assert out == []


def test_incomplete_params_fail(tmp_path, monkeypatch, capsys):
    path = tmp_path / "params.json"
    path.write_text(json.dumps({"Kp": 1.0}))
    code, _ = _run(monkeypatch, capsys, [str(path)], [])
    assert code == 1


def test_path_and_commands(params_file, monkeypatch, capsys):
    lines = [_message("/odom", float(i), 0.0) for i in range(10)]
    lines += [_message("/odom_sim", 0.0, 0.0), _message("/odom_sim", 0.0, 0.0)]
    code, out = _run(monkeypatch, capsys, [params_file], lines)
    assert code == 0
    path_msgs = [m for m in out if m["topic"] == "/path"]
    assert [m["length"] for m in path_msgs] == list(range(1, 11))
    commands = [m for m in out if m["topic"] == "/vehicle_cmd"]
    assert len(commands) == 2
    assert all(c["linear_x"] == 10.0 for c in commands)
    assert commands[1]["angular_z"] == pytest.approx(0.0, abs=1e-12)


def test_odometry_without_path_is_skipped(params_file, monkeypatch, capsys):
    lines = ["not json", _message("/odom_sim", 0.0, 0.0), _message("/odom", 0.0, 0.0)]
    code, out = _run(monkeypatch, capsys, [params_file], lines)
    assert code == 0
    assert out == [{"topic": "/path", "length": 1}]