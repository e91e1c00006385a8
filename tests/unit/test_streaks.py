import random
from datetime import date, timedelta

from app.analytics.streaks import compute_streaks

TODAY = date(2025, 10, 18)


def days_ago(*offsets):
    return [TODAY - timedelta(days=n) for n in offsets]


class TestStreaks:

    def test_no_logs(self):
        assert compute_streaks([], TODAY) == (0, 0)

    def test_three_days_ending_today(self):
        assert compute_streaks(days_ago(0, 1, 2), TODAY) == (3, 3)

    def test_single_old_day_is_not_current(self):
        assert compute_streaks(days_ago(2), TODAY) == (0, 1)

    def test_single_day_today_or_yesterday(self):
        assert compute_streaks(days_ago(0), TODAY) == (1, 1)
        assert compute_streaks(days_ago(1), TODAY) == (1, 1)

    def test_streak_still_active_from_yesterday(self):
        assert compute_streaks(days_ago(1, 2, 3, 4), TODAY) == (4, 4)

    def test_same_day_logs_count_once(self):
        assert compute_streaks(days_ago(0, 0, 0, 1, 1), TODAY) == (2, 2)

    def test_gap_stops_current_and_restarts_best(self):
        result = compute_streaks(days_ago(0, 1, 3, 4, 5), TODAY)
        assert result.current == 2
        assert result.best == 3

    def test_best_counts_the_final_run(self):
        assert compute_streaks(days_ago(0, 5, 6, 7, 8), TODAY) == (1, 4)

    def test_input_order_is_irrelevant(self):
        assert compute_streaks(days_ago(2, 0, 1), TODAY) == (3, 3)

    def test_across_year_boundary(self):
        dates = [date(2024, 12, 30), date(2024, 12, 31), date(2025, 1, 1), date(2025, 1, 2)]
        assert compute_streaks(dates, date(2025, 1, 2)) == (4, 4)

    def test_across_leap_day(self):
        dates = [date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]
        assert compute_streaks(dates, date(2024, 3, 2)) == (3, 3)

    def test_best_never_decreases_when_adding_days(self):
        rng = random.Random(7)
        pool = days_ago(*range(60))
        rng.shuffle(pool)

        logged = set()
        previous_best = 0
        for day in pool:
            logged.add(day)
            best = compute_streaks(logged, TODAY).best
            assert best >= previous_best
            previous_best = best
        assert previous_best == 60

    def test_five_consecutive_days(self):
        assert compute_streaks(days_ago(0, 1, 2, 3, 4), TODAY) == (5, 5)
