"""
Tests for period filtering and the daily report.
"""

from datetime import date, timedelta

import pytest

from coding_tracker.analytics import (
    daily_totals,
    filter_sessions_by_period,
    representatives_by_period,
    save_chart,
    show_report,
)


@pytest.fixture
def sample_sessions(make_session):
    """Sessions whose end hours are 10, 10, 14, 9 and 14 in retrieval order."""
    return [
        make_session(1, "2024-05-01 09:00", "2024-05-01 10:30"),  # 1h30, hour 10
        make_session(2, "2024-05-02 08:00", "2024-05-02 10:05"),  # 2h05, hour 10
        make_session(3, "2024-05-03 13:50", "2024-05-03 14:10"),  # 0h20, hour 14
        make_session(4, "2024-05-04 06:00", "2024-05-04 09:00"),  # 3h00, hour 9
        make_session(5, "2024-05-05 14:00", "2024-05-05 14:05"),  # 0h05, hour 14
    ]


class TestRepresentativesByPeriod:
    """Test first-seen-per-bucket sampling."""

    def test_hours(self, sample_sessions):
        result = representatives_by_period(sample_sessions, "hours")
        # One per distinct hour (10, 14, 9), first seen wins, ordered by duration
        assert [s.id for s in result] == [3, 1, 4]
        durations = [s.duration for s in result]
        assert durations == sorted(durations)

    def test_days(self, sample_sessions, make_session):
        sessions = sample_sessions + [make_session(6, "2024-05-06 23:00", "2024-05-07 01:00")]
        result = representatives_by_period(sessions, "days")
        assert [s.id for s in result] == [1, 6]

    def test_minutes(self, sample_sessions):
        result = representatives_by_period(sample_sessions, "minutes")
        # minute components: 30, 5, 10, 0, 5
        assert [s.id for s in result] == [3, 1, 2, 4]

    def test_equal_durations_keep_retrieval_order(self, make_session):
        sessions = [
            make_session(7, "2024-05-01 10:00", "2024-05-01 11:00"),
            make_session(8, "2024-05-01 12:00", "2024-05-01 13:00"),
        ]
        assert [s.id for s in representatives_by_period(sessions, "hours")] == [7, 8]

    def test_empty(self):
        assert representatives_by_period([], "hours") == []


class TestFilterSessionsByPeriod:
    """Test the interactive period filter."""

    def test_zero_cancels_after_read(self, scripted, recording, sample_sessions):
        repo = recording(sample_sessions)
        assert filter_sessions_by_period(repo, scripted(["0"])) is None
        assert repo.call_names() == ["get_all"]

    def test_invalid_then_hours(self, scripted, recording, sample_sessions):
        io = scripted(["", "weeks", "Hours"])
        repo = recording(sample_sessions)
        result = filter_sessions_by_period(repo, io)
        assert len(io.errors()) == 2
        assert repo.call_names() == ["get_all", "show_ordered"]
        assert [s.id for s in repo.calls[-1][1]] == [3, 1, 4]
        assert result == repo.calls[-1][1]

    def test_against_database(self, scripted, repository, sample_sessions):
        for s in sample_sessions:
            repository.create(s.start_time, s.end_time, s.duration)
        filter_sessions_by_period(repository, scripted(["hours"]))
        assert [s.id for s in repository.displayed[-1]] == [3, 1, 4]


class TestDailyReport:
    """Test per-day totals and chart output."""

    def test_daily_totals(self, make_session):
        sessions = [
            make_session(1, "2024-05-02 09:00", "2024-05-02 10:30"),
            make_session(2, "2024-05-01 09:00", "2024-05-01 10:00"),
            make_session(3, "2024-05-02 23:00", "2024-05-03 00:30"),
        ]
        totals = daily_totals(sessions)
        assert list(totals.index) == [date(2024, 5, 1), date(2024, 5, 2)]
        assert totals[date(2024, 5, 1)] == pytest.approx(1.0)
        assert totals[date(2024, 5, 2)] == pytest.approx(3.0)

    def test_daily_totals_empty(self):
        assert daily_totals([]).empty

    def test_save_chart(self, tmp_path, make_session):
        path = tmp_path / "chart.png"
        save_chart(daily_totals([make_session(1, "2024-05-01 09:00", "2024-05-01 10:00")]), str(path))
        assert path.exists() and path.stat().st_size > 0

    def test_show_report_with_chart(self, scripted, recording, make_session, tmp_path):
        io = scripted()
        repo = recording([make_session(1, "2024-05-01 09:00", "2024-05-01 11:00")])
        chart = tmp_path / "report.png"
        totals = show_report(repo, io, str(chart))
        assert totals[date(2024, 5, 1)] == pytest.approx(2.0)
        assert len(io.shown_totals) == 1
        assert chart.exists()

    def test_show_report_without_sessions(self, scripted, recording):
        io = scripted()
        show_report(recording(), io, "unused.png")
        assert io.shown_totals == []
        assert any("No sessions" in m for m in io.messages)
