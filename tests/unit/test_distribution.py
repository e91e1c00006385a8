from datetime import datetime, timedelta

import pytest

from app.analytics.distribution import aggregate_time_distribution

BASE = datetime(2025, 10, 1)


def at_hours(make_log, hours):
    return [make_log(BASE + timedelta(days=i, hours=h)) for i, h in enumerate(hours)]


class TestTimeDistribution:

    def test_empty_logs_are_all_zero(self):
        result = aggregate_time_distribution([])
        assert (result.morning, result.afternoon, result.evening) == (0, 0, 0)

    def test_single_bucket_gets_everything(self, make_log):
        result = aggregate_time_distribution(at_hours(make_log, [9, 9, 10, 7, 11]))
        assert (result.morning, result.afternoon, result.evening) == (100, 0, 0)

    def test_even_split_rounds_down(self, make_log):
        result = aggregate_time_distribution(at_hours(make_log, [8, 13, 20]))
        assert (result.morning, result.afternoon, result.evening) == (33, 33, 33)

    def test_halves_round_up(self, make_log):
        # 1/8 = 12.5% and 7/8 = 87.5%
        result = aggregate_time_distribution(at_hours(make_log, [8] + [22] * 7))
        assert result.morning == 13
        assert result.evening == 88

    def test_after_midnight_counts_as_evening(self, make_log):
        result = aggregate_time_distribution(at_hours(make_log, [1, 3]))
        assert result.evening == 100

    def test_timezone_offset_shifts_buckets(self, make_log):
        # 10:00 UTC is 17:00 in UTC+7
        result = aggregate_time_distribution(at_hours(make_log, [10]), timezone_offset=420)
        assert result.afternoon == 100

    @pytest.mark.parametrize("hours", [
        [8],
        [8, 13],
        [8, 13, 20],
        [8, 8, 13, 20, 1, 15],
        [5, 6, 12, 19, 19, 19, 2],
        [4, 12, 18] * 5 + [9],
        [11] * 7 + [13] * 5 + [23] * 9,
    ])
    def test_total_stays_within_rounding_slack(self, make_log, hours):
        result = aggregate_time_distribution(at_hours(make_log, hours))
        assert abs(result.morning + result.afternoon + result.evening - 100) <= 2
