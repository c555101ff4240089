import csv
import logging

import numpy as np
import pytest

from sparse_planner.cli import plan
from sparse_planner.config import TRACE
from sparse_planner.points import AxialSymmetricPoint, CartesianPoint
from tests.utils import GantryModel


def _write_waypoints(path, rows, header=True):
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        if header:
            writer.writerow(["x", "y", "z", "roll", "pitch", "yaw"])
        writer.writerows(rows)


@pytest.fixture
def waypoints_csv(tmp_path):
    path = tmp_path / "line.csv"
    _write_waypoints(path, [[0.1 * i, 0.0, 0.0, 0.0, 0.0, 0.0] for i in range(10)])
    return path


def test_read_waypoints_skips_header_and_comments(tmp_path):
    path = tmp_path / "w.csv"
    with open(path, "w") as f:
        f.write("x,y,z,roll,pitch,yaw\n")
        f.write("# start\n")
        f.write("0.1,0.2,0.3,0,0,90\n")
        f.write("\n")
        f.write("0.4,0.5,0.6,0,0,0\n")
    points = plan.read_waypoints(str(path))
    assert len(points) == 2
    assert all(type(p) is CartesianPoint for p in points)
    assert np.allclose(points[0].pose.t, [0.1, 0.2, 0.3])


def test_read_waypoints_axial(waypoints_csv):
    points = plan.read_waypoints(str(waypoints_csv), axial=True)
    assert all(isinstance(p, AxialSymmetricPoint) for p in points)


def test_read_waypoints_rejects_short_rows(tmp_path):
    path = tmp_path / "bad.csv"
    _write_waypoints(path, [[0.0, 0.0, 0.0]], header=False)
    with pytest.raises(ValueError, match="expected 6 values"):
        plan.read_waypoints(str(path))


def test_read_waypoints_rejects_text_after_header(tmp_path):
    path = tmp_path / "bad.csv"
    _write_waypoints(path, [[0, 0, 0, 0, 0, 0], ["a", "b", "c", "d", "e", "f"]])
    with pytest.raises(ValueError):
        plan.read_waypoints(str(path))


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["w.csv"], logging.INFO),
        (["w.csv", "-q"], logging.WARNING),
        (["w.csv", "-vv"], logging.DEBUG),
        (["w.csv", "-vvv"], TRACE),
        (["w.csv", "--log-level", "TRACE"], TRACE),
        (["w.csv", "--log-level", "ERROR"], logging.ERROR),
    ],
)
def test_resolve_log_level(argv, expected):
    assert plan.resolve_log_level(plan.parse_arguments(argv)) == expected


def test_main_writes_one_row_per_waypoint(monkeypatch, tmp_path, waypoints_csv):
    monkeypatch.setattr(plan.RoboticsToolboxModel, "from_name", staticmethod(lambda name: GantryModel()))
    out = tmp_path / "joints.csv"

    rc = plan.main([str(waypoints_csv), "-o", str(out), "--sampling", "3", "-q"])

    assert rc == 0
    with open(out, newline="") as f:
        rows = [[float(v) for v in row] for row in csv.reader(f)]
    assert len(rows) == 10
    assert np.allclose([r[0] for r in rows], [0.1 * i for i in range(10)], atol=1e-6)


def test_main_reports_missing_input(tmp_path):
    assert plan.main([str(tmp_path / "missing.csv"), "-q"]) == 2


def test_main_reports_planning_failure(monkeypatch, tmp_path):
    # Every waypoint lies outside the gantry workspace
    path = tmp_path / "far.csv"
    _write_waypoints(path, [[50.0 + i, 0.0, 0.0, 0.0, 0.0, 0.0] for i in range(6)])
    monkeypatch.setattr(plan.RoboticsToolboxModel, "from_name", staticmethod(lambda name: GantryModel()))
    assert plan.main([str(path), "--sampling", "2", "-q"]) == 1


class _BrokenGantry(GantryModel):
    def joint_solutions(self, target):
        raise ValueError("kinematics backend error")


def test_main_reports_kinematics_value_error(monkeypatch, waypoints_csv):
    monkeypatch.setattr(plan.RoboticsToolboxModel, "from_name", staticmethod(lambda name: _BrokenGantry()))
    assert plan.main([str(waypoints_csv), "--sampling", "3", "-q"]) == 1
