"""
CLI entry point for the sparse-planner command.

Reads a CSV of Cartesian waypoints (x,y,z in metres, roll,pitch,yaw in
degrees), plans them with a roboticstoolbox DH model and writes one row of
joint values per waypoint.
"""

import argparse
import csv
import logging
import sys

import numpy as np

from sparse_planner.config import DEFAULT_SAMPLING, LOG_LEVEL_DEFAULT, MAX_REPLANNING_ATTEMPTS, TRACE
from sparse_planner.planning import SparsePlanner
from sparse_planner.points import AxialSymmetricPoint, CartesianPoint
from sparse_planner.robot import RoboticsToolboxModel
from sparse_planner.utils.errors import SparsePlanningError

logger = logging.getLogger(__name__)


def setup_logging(log_level: int) -> None:
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S',
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def parse_arguments(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Sparse Cartesian trajectory planner')
    parser.add_argument('waypoints', help='CSV file with x,y,z,roll,pitch,yaw per row')
    parser.add_argument('-o', '--output', help='Output CSV (default: stdout)')
    parser.add_argument('--robot', default='Puma560', help='roboticstoolbox DH model name')
    parser.add_argument('--sampling', type=float, default=DEFAULT_SAMPLING,
                        help='Target number of sparse points')
    parser.add_argument('--max-attempts', type=int, default=MAX_REPLANNING_ATTEMPTS,
                        help='Cap on refinement attempts')
    parser.add_argument('--axial', action='store_true',
                        help='Leave the rotation about the tool Z axis free')

    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Increase verbosity; -v=INFO, -vv=DEBUG, -vvv=TRACE')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help='Enable quiet logging (WARNING level)')
    parser.add_argument('--log-level', choices=['TRACE', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Set specific log level')
    return parser.parse_args(argv)


def resolve_log_level(args: argparse.Namespace) -> int:
    if args.log_level:
        return TRACE if args.log_level == 'TRACE' else getattr(logging, args.log_level)
    if args.verbose >= 3:
        return TRACE
    if args.verbose >= 2:
        return logging.DEBUG
    if args.verbose == 1:
        return logging.INFO
    if args.quiet:
        return logging.WARNING
    return getattr(logging, LOG_LEVEL_DEFAULT)


def read_waypoints(path: str, axial: bool = False) -> list[CartesianPoint]:
    point_type = AxialSymmetricPoint if axial else CartesianPoint
    points: list[CartesianPoint] = []
    with open(path, newline="") as f:
        for lineno, row in enumerate(csv.reader(f), start=1):
            if not row or row[0].strip().startswith("#"):
                continue
            try:
                values = [float(v) for v in row]
            except ValueError:
                # Header row
                if lineno == 1:
                    continue
                raise
            if len(values) != 6:
                raise ValueError(f"{path}:{lineno}: expected 6 values, got {len(values)}")
            points.append(point_type.from_xyzrpy(values))
    return points


def write_solution(planner: SparsePlanner, out) -> None:
    writer = csv.writer(out)
    for point in planner.dense_trajectory:
        jp = planner.solution_joint_point(point.id)
        if jp is None:
            raise SparsePlanningError(f"no joint solution for point {point.id}")
        writer.writerow([f"{v:.6f}" for v in np.asarray(jp.joints)])


def main(argv=None) -> int:
    args = parse_arguments(argv)
    setup_logging(resolve_log_level(args))

    try:
        points = read_waypoints(args.waypoints, axial=args.axial)
        model = RoboticsToolboxModel.from_name(args.robot)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load inputs: {e}")
        return 2

    planner = SparsePlanner(model, sampling=args.sampling, max_attempts=args.max_attempts)
    try:
        summary = planner.set_trajectory(points)
    except (SparsePlanningError, ValueError) as e:
        logger.error(f"Planning failed: {e}")
        return 1

    logger.info(f"Plan cost {summary.cost:.4f} after {summary.attempts} attempts")
    if args.output:
        with open(args.output, "w", newline="") as out:
            write_solution(planner, out)
    else:
        write_solution(planner, sys.stdout)
    return 0


def main_entry():
    """Entry point for the sparse-planner command."""
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
