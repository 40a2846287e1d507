from datetime import date, datetime

from coursebook.attendance.calculator import attendance_average, toggle_attendance


def test_empty_expected_days_is_zero():
    assert attendance_average([], [datetime(2024, 1, 1, 9, 0)]) == 0
    assert attendance_average(set(), set()) == 0


def test_all_expected_days_attended():
    expected = {"2024-01-01", "2024-01-02"}
    recorded = {"2024-01-01 09:00", "2024-01-02 09:30", "2024-01-03 09:00"}
    assert attendance_average(expected, recorded) == 100


def test_rounds_to_nearest_integer():
    expected = {"2024-01-01", "2024-01-02", "2024-01-03"}
    assert attendance_average(expected, {"2024-01-01 10:15"}) == 33
    assert attendance_average(expected, {"2024-01-01 10:15", "2024-01-03 08:00"}) == 67


def test_same_day_records_count_once():
    expected = [date(2024, 1, 1), date(2024, 1, 1), date(2024, 1, 2)]
    recorded = [datetime(2024, 1, 1, 9, 0), datetime(2024, 1, 1, 14, 0)]
    assert attendance_average(expected, recorded) == 50


def test_unreadable_records_are_ignored():
    assert attendance_average(["2024-01-01"], ["not a date", None, "2024-01-01T08:00:00Z"]) == 100


def test_toggle_marks_then_unmarks():
    original = [datetime(2024, 1, 1, 9, 0)]

    marked = toggle_attendance(original, "2024-01-02 09:00")
    assert marked == [datetime(2024, 1, 1, 9, 0), datetime(2024, 1, 2, 9, 0)]

    restored = toggle_attendance(marked, datetime(2024, 1, 2, 16, 45))
    assert restored == original
    assert original == [datetime(2024, 1, 1, 9, 0)]


def test_toggle_matches_by_calendar_day():
    recorded = [datetime(2024, 1, 1, 9, 0)]
    assert toggle_attendance(recorded, date(2024, 1, 1)) == []
