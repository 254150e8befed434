import pytest

from directions.models import DirectionsResult, FailureKind
from routes.build_state import BuildPhase, BuildStateException
from routes.builder import CommitStatus, RouteBuilder
from routes.models import BuildStep, Point, Route, RouteColor, RouteState
from routes.policy import BuilderPolicy, click_to_place_policy
from routes.validation import BuildValidationError, ValidationCode


START = Point(40.0, -82.0)
WAYPOINT = Point(40.5, -82.5)
END = Point(41.0, -83.0)


@pytest.fixture
def builder(mock_directions, route_collection):
    return RouteBuilder(mock_directions, route_collection, session_key="s1")


def build(builder, *points):
    builder.begin()
    for point in points:
        builder.add_point(point)
    return builder.finish()


def test_completed_build_is_persisted_in_selection_order(builder, mock_directions, route_collection):
    builder.begin()
    builder.add_point(START)
    builder.add_point(WAYPOINT)
    builder.add_point(END)
    builder.select_color("#FF0000")

    ticket = builder.finish()
    outcome = builder.commit(ticket)

    assert outcome.status == CommitStatus.SAVED
    assert outcome.message == "Route saved successfully!"
    route = outcome.route
    assert route.start == START
    assert route.end == END
    assert route.waypoints == [WAYPOINT]
    assert route.color == RouteColor.RED
    assert route.overview_path
    assert route.distance == "120 km"
    assert route.duration == "1 hour 30 mins"

    # last chosen point is the destination, earlier ones are stopovers in order
    assert mock_directions.requests == [((40.0, -82.0), (41.0, -83.0), [(40.5, -82.5)], "driving")]

    assert route_collection.all() == [route]
    assert route.is_persisted
    assert builder.phase == BuildPhase.IDLE


def test_finish_with_only_a_start_needs_more_points(builder, mock_directions):
    builder.begin()
    builder.add_point(START)

    with pytest.raises(BuildValidationError) as excinfo:
        builder.finish()

    assert excinfo.value.code == ValidationCode.NEED_MORE_POINTS
    assert "at least one more point" in excinfo.value.message
    assert mock_directions.requests == []
    # the build stays open so the user can add the missing point
    assert builder.phase == BuildPhase.AWAITING_WAYPOINT_OR_END


def test_finish_before_a_start_is_missing_start(builder):
    builder.begin()
    with pytest.raises(BuildValidationError) as excinfo:
        builder.finish()
    assert excinfo.value.code == ValidationCode.MISSING_START


def test_finish_while_idle_is_a_state_error(builder):
    with pytest.raises(BuildStateException):
        builder.finish()


def test_end_too_close_to_start_is_rejected(builder, mock_directions):
    builder.begin()
    builder.add_point(START)
    builder.add_point(Point(40.0005, -82.0))  # roughly 55 m north

    with pytest.raises(BuildValidationError) as excinfo:
        builder.finish()

    assert excinfo.value.code == ValidationCode.END_TOO_CLOSE
    assert excinfo.value.message == "End location must be at least 100 meters away from start location"
    assert mock_directions.requests == []


def test_near_identical_second_build_is_a_duplicate(builder, mock_store, route_collection):
    builder.commit(build(builder, START, END))

    with pytest.raises(BuildValidationError) as excinfo:
        build(builder, Point(40.0 + 5e-7, -82.0 - 5e-7), Point(41.0 - 5e-7, -83.0 + 5e-7))

    assert excinfo.value.code == ValidationCode.DUPLICATE_ROUTE
    assert mock_store.calls.count("create_route") == 1
    assert len(route_collection) == 1


def test_waypoints_do_not_take_part_in_duplicate_detection(builder, route_collection):
    builder.commit(build(builder, START, END))

    with pytest.raises(BuildValidationError):
        build(builder, START, WAYPOINT, END)


def test_duplicates_allowed_when_checking_is_disabled(mock_directions, route_collection):
    builder = RouteBuilder(mock_directions, route_collection, policy=BuilderPolicy(check_duplicates=False))

    builder.commit(build(builder, START, END))
    outcome = builder.commit(build(builder, START, END))

    assert outcome.status == CommitStatus.SAVED
    assert len(route_collection) == 2


def test_duplicate_saved_while_directions_were_in_flight(builder, mock_store, route_collection):
    ticket = build(builder, START, END)

    # another route with the same endpoints lands before the response
    route_collection.create(Route(start=START, end=END, overview_path=[START, END], distance="", duration=""))
    outcome = builder.commit(ticket)

    assert outcome.status == CommitStatus.DUPLICATE
    assert mock_store.calls.count("create_route") == 1
    assert builder.phase == BuildPhase.IDLE


def test_cancel_discards_tentative_points(builder):
    builder.begin()
    builder.add_point(START)
    builder.add_point(WAYPOINT)

    builder.cancel()
    assert builder.phase == BuildPhase.IDLE
    assert builder.start is None
    assert builder.points == []

    builder.begin()
    assert builder.start is None
    assert builder.points == []


def test_begin_while_building_starts_over(builder):
    builder.begin()
    builder.add_point(START)
    builder.begin()

    assert builder.phase == BuildPhase.AWAITING_START
    assert builder.start is None


def test_response_after_cancel_is_discarded(builder, route_collection):
    ticket = build(builder, START, END)
    builder.cancel()

    outcome = builder.complete(ticket, DirectionsResult([(40.0, -82.0), (41.0, -83.0)], "1 km", "1 min"))

    assert outcome.status == CommitStatus.STALE
    assert len(route_collection) == 0
    assert builder.phase == BuildPhase.IDLE


def test_response_for_previous_build_does_not_touch_new_build(builder, route_collection):
    old_ticket = build(builder, START, END)
    builder.cancel()
    builder.begin()
    builder.add_point(WAYPOINT)

    outcome = builder.complete(old_ticket, DirectionsResult([(40.0, -82.0)], "1 km", "1 min"))

    assert outcome.status == CommitStatus.STALE
    assert builder.phase == BuildPhase.AWAITING_WAYPOINT_OR_END
    assert builder.start == WAYPOINT
    assert len(route_collection) == 0


@pytest.mark.parametrize("kind, message", [
    (FailureKind.NO_ROUTE, "No route found between these locations. Please try different start and end points."),
    (FailureKind.REQUEST_DENIED, "Directions API is not enabled. Please enable it in the Google Cloud Console."),
    (FailureKind.OVER_LIMIT, "Query limit exceeded. Please try again later."),
    (FailureKind.INVALID_REQUEST, "Invalid route request. Please check your start and end locations."),
    (FailureKind.TOO_MANY_WAYPOINTS, "Too many waypoints. Please reduce the number of stops."),
])
def test_directions_failure_is_reported_and_build_reset(builder, mock_directions, mock_store, kind, message):
    mock_directions.fail_with(kind)

    outcome = builder.commit(build(builder, START, WAYPOINT, END))

    assert outcome.status == CommitStatus.DIRECTIONS_FAILED
    assert outcome.failure.kind == kind
    assert outcome.message == message
    assert "create_route" not in mock_store.calls
    assert builder.phase == BuildPhase.IDLE
    # never retried
    assert len(mock_directions.requests) == 1


def test_store_failure_leaves_no_route_behind(builder, mock_store, route_collection):
    mock_store.failing.add("create_route")

    outcome = builder.commit(build(builder, START, END))

    assert outcome.status == CommitStatus.STORE_FAILED
    assert route_collection.all() == []
    assert builder.phase == BuildPhase.IDLE


def test_click_to_place_commits_on_first_point_after_start(mock_directions, route_collection):
    builder = RouteBuilder(mock_directions, route_collection, policy=click_to_place_policy())
    builder.begin()

    assert builder.add_point(START) is None
    ticket = builder.add_point(END)

    assert ticket is not None
    assert ticket.end == END
    assert ticket.waypoints == []
    assert builder.phase == BuildPhase.COMMITTING
    assert builder.commit(ticket).saved


def test_click_to_place_with_stopovers(mock_directions, route_collection):
    builder = RouteBuilder(mock_directions, route_collection, policy=click_to_place_policy(points_after_start=2))
    builder.begin()
    builder.add_point(START)

    assert builder.add_point(WAYPOINT) is None
    ticket = builder.add_point(END)

    assert ticket.waypoints == [WAYPOINT]
    assert ticket.end == END


def test_click_to_place_rejects_close_end_without_recording_it(mock_directions, route_collection):
    builder = RouteBuilder(mock_directions, route_collection, policy=click_to_place_policy())
    builder.begin()
    builder.add_point(START)

    with pytest.raises(BuildValidationError):
        builder.add_point(Point(40.0001, -82.0))

    assert builder.points == []
    assert builder.phase == BuildPhase.AWAITING_WAYPOINT_OR_END


def test_colour_confirmation_step(mock_directions, route_collection):
    builder = RouteBuilder(mock_directions, route_collection,
                           policy=BuilderPolicy(confirm_color_before_commit=True))

    assert build(builder, START, END) is None
    assert builder.phase == BuildPhase.AWAITING_COLOR

    ticket = builder.select_color("green")
    assert ticket.color == RouteColor.GREEN
    assert builder.commit(ticket).route.color == RouteColor.GREEN


def test_default_colour_is_first_palette_entry(builder):
    outcome = builder.commit(build(builder, START, END))
    assert outcome.route.color == RouteColor.BLUE


def test_every_step_is_mirrored_to_route_state(mock_directions, route_collection, mock_store):
    builder = RouteBuilder(mock_directions, route_collection, session_key="s1", store=mock_store)

    builder.begin()
    assert mock_store.states["s1"].step == BuildStep.START

    builder.add_point(START)
    assert mock_store.states["s1"].step == BuildStep.WAYPOINT
    assert mock_store.states["s1"].start_location == START

    builder.add_point(END)
    ticket = builder.finish()
    assert mock_store.states["s1"].step == BuildStep.END

    builder.commit(ticket)
    state = mock_store.states["s1"]
    assert state.step == BuildStep.WAYPOINT
    assert state.start_location is None


def test_route_state_failure_does_not_break_the_build(mock_directions, route_collection, mock_store):
    mock_store.failing.add("put_route_state")
    builder = RouteBuilder(mock_directions, route_collection, session_key="s1", store=mock_store)

    outcome = builder.commit(build(builder, START, END))

    assert outcome.saved


def test_resume_continues_a_stored_build(mock_directions, route_collection, mock_store):
    mock_store.states["s1"] = RouteState(session_key="s1", step=BuildStep.WAYPOINT,
                                         start_location=START, color=RouteColor.PURPLE)
    builder = RouteBuilder(mock_directions, route_collection, session_key="s1", store=mock_store)

    builder.resume()

    assert builder.phase == BuildPhase.AWAITING_WAYPOINT_OR_END
    assert builder.start == START
    assert builder.color == RouteColor.PURPLE

    builder.add_point(END)
    assert builder.commit(builder.finish()).route.start == START


def test_resume_of_a_fresh_session_is_idle(mock_directions, route_collection, mock_store):
    builder = RouteBuilder(mock_directions, route_collection, session_key="new", store=mock_store)
    builder.resume()
    assert builder.phase == BuildPhase.IDLE


def test_ticket_from_before_resume_is_stale(mock_directions, route_collection, mock_store):
    builder = RouteBuilder(mock_directions, route_collection, session_key="s1", store=mock_store)
    old_ticket = build(builder, START, END)
    builder.cancel()

    builder.resume()
    new_ticket = build(builder, WAYPOINT, Point(42.0, -84.0))
    outcome = builder.complete(old_ticket, DirectionsResult([(40.0, -82.0), (41.0, -83.0)], "1 km", "1 min"))

    assert new_ticket.generation > old_ticket.generation
    assert outcome.status == CommitStatus.STALE
    assert len(route_collection) == 0
    assert builder.phase == BuildPhase.COMMITTING

    assert builder.commit(new_ticket).route.start == WAYPOINT
