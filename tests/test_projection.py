"""Tests for section extraction and the progress projection."""

from liftlog.models import (
    DayOfWeek,
    EventKind,
    Exercise,
    Microcycle,
    SetEntry,
    TrainingTree,
    Workout,
)
from liftlog.projection import (
    UNNAMED_EXERCISE,
    build_progress,
    group_sets_by_exercise,
    sections_between,
    to_workout,
)

from .factories import EventLog, complete_microcycle_log


def _workout_sections(events):
    return sections_between(events, EventKind.WORKOUT_STARTED, EventKind.WORKOUT_COMPLETED)


class TestSectionsBetween:
    def test_extracts_each_terminated_section(self):
        sections = _workout_sections(complete_microcycle_log().events)
        assert len(sections) == 2
        assert sections[0][0].name == "Upper"
        assert sections[1][0].name == "Lower"
        assert sections[0][-1].kind == EventKind.WORKOUT_COMPLETED
        assert len(sections[0]) == 5

    def test_unterminated_section_runs_to_end_of_input(self):
        log = (
            EventLog()
            .microcycle_started()
            .workout_started("Upper")
            .set_logged("Bench Press", 105, 11)
        )
        sections = _workout_sections(log.events)
        assert len(sections) == 1
        assert [e.kind for e in sections[0]] == [EventKind.WORKOUT_STARTED, EventKind.SET_LOGGED]

    def test_no_start_marker_yields_no_sections(self):
        log = EventLog().microcycle_started().set_logged("Squat", 100, 5)
        assert _workout_sections(log.events) == []

    def test_empty_input(self):
        assert _workout_sections([]) == []

    def test_events_before_first_start_are_discarded(self):
        log = (
            EventLog()
            .set_logged("Squat", 100, 5)
            .workout_completed()
            .workout_started("Lower")
            .set_logged("Squat", 110, 5)
        )
        sections = _workout_sections(log.events)
        assert len(sections) == 1
        assert sections[0][0].kind == EventKind.WORKOUT_STARTED
        assert len(sections[0]) == 2

    def test_events_between_sections_are_discarded(self):
        log = (
            EventLog()
            .workout_started("Upper")
            .workout_completed()
            .set_logged("Stray", 10, 10)
            .workout_started("Lower")
            .workout_completed()
        )
        sections = _workout_sections(log.events)
        assert [len(s) for s in sections] == [2, 2]

    def test_later_start_stays_inside_open_section(self):
        log = (
            EventLog()
            .workout_started("Upper")
            .set_logged("Bench Press", 100, 8)
            .workout_started("Lower")
            .set_logged("Squat", 140, 5)
            .workout_completed()
        )
        sections = _workout_sections(log.events)
        assert len(sections) == 1
        assert [e.kind for e in sections[0]] == [
            EventKind.WORKOUT_STARTED,
            EventKind.SET_LOGGED,
            EventKind.WORKOUT_STARTED,
            EventKind.SET_LOGGED,
            EventKind.WORKOUT_COMPLETED,
        ]

    def test_scan_resumes_after_end_marker(self):
        log = (
            EventLog()
            .workout_started("Upper")
            .workout_started("Upper again")
            .workout_completed()
            .workout_started("Lower")
        )
        sections = _workout_sections(log.events)
        assert [len(s) for s in sections] == [3, 1]
        assert sections[1][0].name == "Lower"

    def test_input_is_not_modified(self):
        events = complete_microcycle_log().events
        snapshot = list(events)
        _workout_sections(events)
        assert events == snapshot


class TestWorkoutConstruction:
    def test_groups_sets_by_exercise_in_first_seen_order(self):
        log = (
            EventLog()
            .workout_started("Test", DayOfWeek.MONDAY)
            .set_logged("Squat", 100, 5)
            .set_logged("Bench", 80, 8)
            .set_logged("Squat", 105, 4)
        )
        workout = to_workout(log.events)
        assert [ex.name for ex in workout.exercises] == ["Squat", "Bench"]
        assert workout.exercises[0].sets == [
            SetEntry(actual_weight=100, actual_reps=5),
            SetEntry(actual_weight=105, actual_reps=4),
        ]

    def test_name_and_day_come_from_start_marker(self):
        log = EventLog().workout_started("Upper", DayOfWeek.MONDAY).workout_completed()
        workout = to_workout(log.events)
        assert workout.name == "Upper"
        assert workout.day is DayOfWeek.MONDAY
        assert workout.exercises == []

    def test_set_without_exercise_groups_under_sentinel(self):
        log = EventLog().set_logged(None, 60, 12).set_logged("Curl", 20, 10).set_logged(None, 60, 10)
        exercises = group_sets_by_exercise(log.events)
        assert exercises[0] == Exercise(
            name=UNNAMED_EXERCISE,
            sets=[
                SetEntry(actual_weight=60, actual_reps=12),
                SetEntry(actual_weight=60, actual_reps=10),
            ],
        )
        assert exercises[1].name == "Curl"

    def test_missing_weight_stays_absent(self):
        log = EventLog().set_logged("Pull Up", None, 8)
        (exercise,) = group_sets_by_exercise(log.events)
        assert exercise.sets[0].actual_weight is None
        assert exercise.sets[0].actual_reps == 8
        assert exercise.sets[0].prescribed_weight is None


class TestBuildProgress:
    def test_empty_log(self):
        assert build_progress([]) == TrainingTree(microcycles=[])

    def test_active_workout_in_unterminated_microcycle(self):
        log = (
            EventLog()
            .microcycle_started()
            .workout_started("Upper", DayOfWeek.MONDAY)
            .set_logged("Bench Press", 100, 10)
        )
        assert build_progress(log.events) == TrainingTree(
            microcycles=[
                Microcycle(
                    workouts=[
                        Workout(
                            name="Upper",
                            day=DayOfWeek.MONDAY,
                            exercises=[
                                Exercise(
                                    name="Bench Press",
                                    sets=[SetEntry(actual_weight=100, actual_reps=10)],
                                )
                            ],
                        )
                    ]
                )
            ]
        )

    def test_complete_microcycle(self):
        progress = build_progress(complete_microcycle_log().events)
        assert len(progress.microcycles) == 1
        upper, lower = progress.microcycles[0].workouts
        assert upper.name == "Upper"
        assert [ex.name for ex in upper.exercises] == ["Bench Press", "Barbell Row"]
        assert all(s.actual_weight == 100 for s in upper.exercises[0].sets)
        assert lower.day is DayOfWeek.WEDNESDAY
        assert lower.exercises[0].sets == [SetEntry(actual_weight=150, actual_reps=5)]

    def test_multiple_microcycles(self):
        log = (
            EventLog()
            .microcycle_started()
            .workout_started("Week1", DayOfWeek.MONDAY)
            .set_logged("Squat", 100, 10)
            .workout_completed()
            .microcycle_completed()
            .microcycle_started()
            .workout_started("Week2", DayOfWeek.MONDAY)
            .set_logged("Squat", 105, 10)
            .workout_completed()
            .microcycle_completed()
        )
        progress = build_progress(log.events)
        assert [mc.workouts[0].name for mc in progress.microcycles] == ["Week1", "Week2"]

    def test_unterminated_microcycle_holds_workouts_started_so_far(self):
        log = (
            EventLog()
            .microcycle_started()
            .workout_started("Upper")
            .set_logged("Bench Press", 100, 8)
            .workout_completed()
            .workout_started("Lower")
            .set_logged("Squat", 140, 5)
            .workout_completed()
            .workout_started("Arms")
        )
        progress = build_progress(log.events)
        assert len(progress.microcycles) == 1
        assert [w.name for w in progress.microcycles[0].workouts] == ["Upper", "Lower", "Arms"]

    def test_restarted_microcycle_is_absorbed_into_open_one(self):
        log = (
            EventLog()
            .microcycle_started()
            .workout_started("Upper")
            .set_logged("Bench Press", 100, 8)
            .workout_completed()
            .microcycle_started()
            .workout_started("Lower")
            .set_logged("Squat", 140, 5)
            .workout_completed()
            .microcycle_completed()
        )
        progress = build_progress(log.events)
        assert len(progress.microcycles) == 1
        assert [w.name for w in progress.microcycles[0].workouts] == ["Upper", "Lower"]

    def test_restarted_workout_keeps_first_name_and_all_sets(self):
        log = (
            EventLog()
            .microcycle_started()
            .workout_started("Upper", DayOfWeek.MONDAY)
            .set_logged("Bench Press", 100, 8)
            .workout_started("Lower", DayOfWeek.WEDNESDAY)
            .set_logged("Squat", 140, 5)
            .workout_completed()
        )
        (workout,) = build_progress(log.events).microcycles[0].workouts
        assert workout.name == "Upper"
        assert workout.day is DayOfWeek.MONDAY
        assert [ex.name for ex in workout.exercises] == ["Bench Press", "Squat"]

    def test_microcycle_without_workouts(self):
        log = EventLog().microcycle_started().set_logged("Squat", 100, 5).microcycle_completed()
        assert build_progress(log.events) == TrainingTree(microcycles=[Microcycle(workouts=[])])

    def test_orphaned_events_are_dropped(self):
        log = (
            EventLog()
            .workout_started("Before")
            .set_logged("Squat", 100, 5)
            .workout_completed()
            .microcycle_started()
            .workout_started("Upper")
            .set_logged("Bench Press", 100, 8)
        )
        progress = build_progress(log.events)
        assert len(progress.microcycles) == 1
        assert [w.name for w in progress.microcycles[0].workouts] == ["Upper"]

    def test_set_before_workout_start_is_orphaned(self):
        log = (
            EventLog()
            .microcycle_started()
            .set_logged("Squat", 100, 5)
            .workout_started("Lower")
            .set_logged("Deadlift", 180, 3)
        )
        workout = build_progress(log.events).microcycles[0].workouts[0]
        assert [ex.name for ex in workout.exercises] == ["Deadlift"]

    def test_recompute_is_deterministic(self):
        events = complete_microcycle_log().events
        assert build_progress(events) == build_progress(events)
