import math

import pytest

from conftest import assert_points, make_parked_obstacle, make_trajectory

from st_boundary.maps import FixedVehicleState
from st_boundary.planning import (
    OPEN_START_TIME, BoundaryType, BuildStatus, DynamicBoundaryBuilder, FollowDecision,
    NoDecision, Obstacle, ObstacleMappingError, OvertakeDecision, YieldDecision
)

# Obstacle parked at x=30 overlaps path stations 27..35; with point extension and
# follow buffer the raw quadrilateral is s in [25, 37(.1)] over t in [0, 4].
RAW_LOWER_S = 25.0
RAW_UPPER_S = 37.0


@pytest.fixture
def builder(config, vehicle_param, vehicle_state):
    return DynamicBoundaryBuilder(config, vehicle_param, vehicle_state)


def test_overtake_raises_only_upper_vertices(builder, path_data):
    boundaries = []
    obstacle = make_parked_obstacle('obs_1', 30.0, [OvertakeDecision(3.0)])
    status = builder.map_obstacle_with_prediction_trajectory(obstacle, obstacle.decisions[0], path_data, boundaries)

    assert status == BuildStatus.OK
    assert len(boundaries) == 1
    boundary = boundaries[0]
    assert boundary.boundary_type == BoundaryType.OVERTAKE
    assert boundary.obstacle_id == 'obs_1'
    assert boundary.characteristic_length == pytest.approx(1.0)
    assert_points(boundary, [(RAW_LOWER_S, 0.0), (RAW_LOWER_S, 4.0), (40.1, 4.0), (40.0, 0.0)])


def test_overtake_with_negative_distance_uses_magnitude(builder, path_data):
    boundaries = []
    obstacle = make_parked_obstacle('obs_1', 30.0, [OvertakeDecision(-3.0)])
    builder.map_obstacle_with_prediction_trajectory(obstacle, obstacle.decisions[0], path_data, boundaries)
    assert boundaries[0].points[3].s == pytest.approx(RAW_UPPER_S + 3.0)


def test_yield_moves_lower_vertices_back(builder, path_data):
    boundaries = []
    obstacle = make_parked_obstacle('obs_1', 30.0, [YieldDecision(5.0)])
    builder.map_obstacle_with_prediction_trajectory(obstacle, obstacle.decisions[0], path_data, boundaries)

    assert boundaries[0].boundary_type == BoundaryType.YIELD
    assert_points(boundaries[0], [(20.0, 0.0), (20.0, 4.0), (37.1, 4.0), (RAW_UPPER_S, 0.0)])


def test_yield_farther_than_lower_station_uses_fallback_offset(builder, path_data):
    boundaries = []
    obstacle = make_parked_obstacle('obs_1', 30.0, [YieldDecision(30.0)])
    builder.map_obstacle_with_prediction_trajectory(obstacle, obstacle.decisions[0], path_data, boundaries)

    assert boundaries[0].points[0].s == pytest.approx(RAW_LOWER_S - 2.0)
    assert boundaries[0].points[1].s == pytest.approx(RAW_LOWER_S - 2.0)


def test_yield_never_goes_below_zero(builder, path_data):
    boundaries = []
    obstacle = make_parked_obstacle('obs_1', 3.0, [YieldDecision(5.0)])
    builder.map_obstacle_with_prediction_trajectory(obstacle, obstacle.decisions[0], path_data, boundaries)

    assert boundaries[0].points[0].s == 0.0
    assert boundaries[0].points[1].s == 0.0


def test_yield_computes_both_lower_vertices_from_first_vertex(builder, path_data):
    # Known open question: the second lower vertex is placed from the first
    # vertex's station, not its own. Kept literal until the intent is settled.
    boundaries = []
    trajectory = make_trajectory([(30.0 + 2.5 * t, 0.0, 0.0, float(t)) for t in range(5)])
    obstacle = Obstacle('obs_1', 4.0, 2.0, 2.5, [trajectory], [YieldDecision(5.0)])
    builder.map_obstacle_with_prediction_trajectory(obstacle, obstacle.decisions[0], path_data, boundaries)

    lower_start, lower_end = boundaries[0].points[0], boundaries[0].points[1]
    assert lower_start.s == pytest.approx(20.0)
    assert lower_end.s == pytest.approx(20.0)
    assert lower_end.t == pytest.approx(4.0)


def test_follow_keeps_follow_distance_and_opens_start_time(builder, path_data, vehicle_param):
    boundaries = []
    obstacle = make_parked_obstacle('obs_1', 30.0, [FollowDecision(0.0)], speed=2.0)
    builder.map_obstacle_with_prediction_trajectory(obstacle, obstacle.decisions[0], path_data, boundaries)

    boundary = boundaries[0]
    assert boundary.boundary_type == BoundaryType.FOLLOW
    # max(2.0 m/s * 2.0 s, 0) + 1.0 m front overhang
    assert_points(boundary, [(20.0, 0.0), (20.0, 4.0), (37.1, 4.0), (RAW_UPPER_S, OPEN_START_TIME)])


def test_follow_reduces_lower_vertices_by_at_least_front_overhang(builder, path_data, vehicle_param):
    for speed, distance_s in [(0.0, 0.0), (0.0, -6.0), (10.0, 1.0)]:
        boundaries = []
        obstacle = make_parked_obstacle('obs_1', 30.0, [FollowDecision(distance_s)], speed=speed)
        builder.map_obstacle_with_prediction_trajectory(obstacle, obstacle.decisions[0], path_data, boundaries)

        reduction = RAW_LOWER_S - boundaries[0].points[0].s
        assert reduction >= vehicle_param.front_edge_to_center
        assert reduction == pytest.approx(max(speed * 2.0, abs(distance_s)) + vehicle_param.front_edge_to_center)


def test_sample_times_are_relative_to_vehicle_timestamp(config, vehicle_param, path_data):
    builder = DynamicBoundaryBuilder(config, vehicle_param, FixedVehicleState(99.0))
    trajectory = make_trajectory([(30.0, 0.0, 0.0, t) for t in (0.0, 2.0)], start_timestamp=100.0)
    obstacle = Obstacle('obs_1', 4.0, 2.0, 0.0, [trajectory], [OvertakeDecision(0.0)])
    boundaries = []
    builder.map_obstacle_with_prediction_trajectory(obstacle, obstacle.decisions[0], path_data, boundaries)

    assert boundaries[0].min_t == pytest.approx(1.0)
    assert boundaries[0].max_t == pytest.approx(3.0)


def test_samples_off_the_path_are_ignored(builder, path_data):
    poses = [(30.0, 0.0, 0.0, 0.0), (30.0, 20.0, 0.0, 1.0), (30.0, 0.0, 0.0, 2.0), (30.0, 20.0, 0.0, 3.0)]
    obstacle = Obstacle('obs_1', 4.0, 2.0, 0.0, [make_trajectory(poses)], [YieldDecision(0.0)])
    boundaries = []
    status = builder.map_obstacle_with_prediction_trajectory(obstacle, obstacle.decisions[0], path_data, boundaries)

    assert status == BuildStatus.OK
    assert boundaries[0].min_t == 0.0
    assert boundaries[0].max_t == pytest.approx(2.0)


def test_envelopes_run_across_trajectories(builder, path_data):
    trajectories = [
        make_trajectory([(30.0, 0.0, 0.0, t) for t in (0.0, 1.0)]),
        make_trajectory([(30.0, 0.0, 0.0, t) for t in (2.0, 3.0)]),
    ]
    obstacle = Obstacle('obs_1', 4.0, 2.0, 0.0, trajectories, [OvertakeDecision(0.0)])
    boundaries = []
    status = builder.map_obstacle_with_prediction_trajectory(obstacle, obstacle.decisions[0], path_data, boundaries)

    assert status == BuildStatus.OK
    assert len(boundaries) == 1
    assert_points(boundaries[0], [(RAW_LOWER_S, 0.0), (RAW_LOWER_S, 3.0), (37.1, 3.0), (RAW_UPPER_S, 0.0)])


def test_reversed_sample_times_warn_and_are_skipped(builder, path_data, caplog):
    obstacle = make_parked_obstacle('obs_1', 30.0, [OvertakeDecision(0.0)], times=(4.0, 3.0, 2.0))
    boundaries = []
    status = builder.map_obstacle_with_prediction_trajectory(obstacle, obstacle.decisions[0], path_data, boundaries)

    assert "reversed" in caplog.text
    assert status == BuildStatus.SKIP
    assert boundaries == []


def test_no_trajectory_is_skipped(builder, path_data):
    obstacle = Obstacle('obs_1', 4.0, 2.0, 0.0, [], [YieldDecision(5.0)])
    boundaries = []
    status = builder.map_obstacle_with_prediction_trajectory(obstacle, obstacle.decisions[0], path_data, boundaries)
    assert status == BuildStatus.SKIP
    assert boundaries == []


def test_single_sample_has_no_area_and_is_skipped(builder, path_data):
    obstacle = make_parked_obstacle('obs_1', 30.0, [YieldDecision(5.0)], times=(0.0,))
    boundaries = []
    status = builder.map_obstacle_with_prediction_trajectory(obstacle, obstacle.decisions[0], path_data, boundaries)
    assert status == BuildStatus.SKIP
    assert boundaries == []


def test_obstacle_never_on_path_is_skipped(builder, path_data):
    poses = [(30.0, 20.0, 0.0, t) for t in (0.0, 1.0, 2.0)]
    obstacle = Obstacle('obs_1', 4.0, 2.0, 0.0, [make_trajectory(poses)], [OvertakeDecision(1.0)])
    boundaries = []
    status = builder.map_obstacle_with_prediction_trajectory(obstacle, obstacle.decisions[0], path_data, boundaries)
    assert status == BuildStatus.SKIP
    assert boundaries == []


@pytest.mark.parametrize('length, width', [(0.0, 2.0), (4.0, -1.0), (math.nan, 2.0)])
def test_invalid_dimensions_raise(builder, path_data, length, width):
    obstacle = make_parked_obstacle('bad', 30.0, [YieldDecision(5.0)], length=length, width=width)
    with pytest.raises(ObstacleMappingError) as excinfo:
        builder.map_obstacle_with_prediction_trajectory(obstacle, obstacle.decisions[0], path_data, [])
    assert excinfo.value.obstacle_id == 'bad'


def test_non_finite_pose_raises(builder, path_data):
    poses = [(30.0, 0.0, 0.0, 0.0), (math.inf, 0.0, 0.0, 1.0)]
    obstacle = Obstacle('bad', 4.0, 2.0, 0.0, [make_trajectory(poses)], [YieldDecision(5.0)])
    with pytest.raises(ObstacleMappingError):
        builder.map_obstacle_with_prediction_trajectory(obstacle, obstacle.decisions[0], path_data, [])


def test_non_obstacle_decision_is_rejected(builder, path_data):
    obstacle = make_parked_obstacle('obs_1', 30.0, [NoDecision()])
    with pytest.raises(TypeError):
        builder.map_obstacle_with_prediction_trajectory(obstacle, NoDecision(), path_data, [])


def test_non_finite_speed_is_logged_and_raises(builder, path_data, caplog):
    obstacle = make_parked_obstacle('bad', 30.0, [YieldDecision(5.0)], speed=math.nan)
    with pytest.raises(ObstacleMappingError):
        builder.map_obstacle_with_prediction_trajectory(obstacle, obstacle.decisions[0], path_data, [])
    assert "invalid speed" in caplog.text
