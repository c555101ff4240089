import numpy as np
import pytest
from spatialmath import SE3

from sparse_planner.points import (
    NIL_ID,
    AxialSymmetricPoint,
    CartesianPoint,
    JointPoint,
    JointTrajectoryPoint,
)


def test_points_get_unique_ids():
    a, b = CartesianPoint(SE3()), CartesianPoint(SE3())
    assert a.id != b.id
    assert a.id != NIL_ID


def test_nil_id_cannot_be_assigned():
    p = CartesianPoint(SE3())
    with pytest.raises(ValueError):
        p.id = NIL_ID


def test_from_xyzrpy_translation_and_rotation():
    p = CartesianPoint.from_xyzrpy([0.1, 0.2, 0.3, 0.0, 0.0, 90.0])
    assert np.allclose(p.pose.t, [0.1, 0.2, 0.3])
    assert np.allclose(p.pose.rpy(unit="deg", order="xyz"), [0.0, 0.0, 90.0], atol=1e-9)


def test_cartesian_nearest_accepts_close_candidate(gantry):
    p = CartesianPoint(SE3(0.5, 0.0, 0.0))
    q = p.nearest_joint_pose([0.45, 0.0, 0.0], gantry)
    assert np.allclose(q, [0.5, 0.0, 0.0])


def test_cartesian_nearest_rejects_distant_candidate(gantry):
    p = CartesianPoint(SE3(0.5, 0.0, 0.0))
    assert p.nearest_joint_pose([0.2, 0.0, 0.0], gantry) is None


def test_cartesian_nearest_rejects_unreachable(gantry):
    p = CartesianPoint(SE3(50.0, 0.0, 0.0))
    assert p.nearest_joint_pose([50.0, 0.0, 0.0], gantry) is None
    assert p.joint_poses(gantry) == []


def test_custom_deviation_tolerance(gantry):
    p = CartesianPoint(SE3(0.5, 0.0, 0.0), max_joint_deviation=0.5)
    assert p.nearest_joint_pose([0.2, 0.0, 0.0], gantry) is not None


def test_axial_symmetric_candidates_cover_full_turn():
    p = AxialSymmetricPoint(SE3(0.1, 0.0, 0.0), orientation_step=np.pi / 2)
    candidates = p.candidate_poses()
    assert len(candidates) == 4
    for c in candidates:
        assert np.allclose(c.t, [0.1, 0.0, 0.0])


def test_axial_symmetric_step_must_be_positive():
    with pytest.raises(ValueError):
        AxialSymmetricPoint(SE3(), orientation_step=0.0)


def test_axial_symmetric_joint_poses_per_orientation(gantry):
    p = AxialSymmetricPoint(SE3(0.1, 0.0, 0.0), orientation_step=np.pi / 2)
    # The gantry ignores orientation, so every orientation yields the same translation
    poses = p.joint_poses(gantry)
    assert len(poses) == 4
    assert all(np.allclose(q, [0.1, 0.0, 0.0]) for q in poses)


def test_joint_point_nominal_pose_and_equality(gantry):
    jp = JointPoint([0.1, 0.2, 0.3])
    assert np.allclose(jp.nominal_pose(np.zeros(3), gantry), [0.1, 0.2, 0.3])
    assert jp == JointPoint(np.array([0.1, 0.2, 0.3]))
    assert jp != JointPoint([0.1, 0.2])
    assert len(jp) == 3


def test_joint_point_copies_input():
    q = np.array([1.0, 2.0])
    jp = JointPoint(q)
    q[0] = 5.0
    assert jp.joints[0] == 1.0


def test_joint_trajectory_point(gantry):
    p = JointTrajectoryPoint([0.1, 0.2, 0.3])
    assert np.allclose(p.nearest_joint_pose([0.0, 0.0, 0.0], gantry), [0.1, 0.2, 0.3])
    assert p.nearest_joint_pose([0.0, 0.0], gantry) is None
    assert len(p.joint_poses(gantry)) == 1


def test_joint_trajectory_point_with_tolerance(gantry):
    p = JointTrajectoryPoint([0.0, 0.0, 0.0], tolerance=0.1)
    assert np.allclose(p.nearest_joint_pose([0.05, -0.5, 0.0], gantry), [0.05, -0.1, 0.0])
