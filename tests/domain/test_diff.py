"""Tests for diff-target parsing and calendar-aware differences."""

from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from ksdate.domain.diff import (
    DiffResult,
    calculate_diff,
    compute_diff,
    parse_diff_target,
)
from ksdate.domain.errors import DateError, DiffParseError
from ksdate.domain.types import Granularity
from ksdate.domain.units import UnitHint, UnitMatcher

TOKYO = ZoneInfo("Asia/Tokyo")


def at(year: int, month: int, day: int, hour: int = 12) -> datetime:
    return datetime(year, month, day, hour, tzinfo=TOKYO)


class TestParseDiffTarget:
    @pytest.mark.parametrize(
        "token,expected_day,granularity",
        [
            ("1999", date(1999, 1, 1), Granularity.YEARS),
            ("1999-04", date(1999, 4, 1), Granularity.MONTHS),
            ("1999-04-15", date(1999, 4, 15), Granularity.DAYS),
            ("2030-12-31", date(2030, 12, 31), Granularity.DAYS),
        ],
    )
    def test_shapes(self, token: str, expected_day: date, granularity: Granularity) -> None:
        target = parse_diff_target(token, TOKYO)
        assert target.day == expected_day
        assert target.granularity is granularity

    def test_midnight_in_given_timezone(self) -> None:
        target = parse_diff_target("2024-02-29", TOKYO)
        assert target.instant == datetime(2024, 2, 29, tzinfo=TOKYO)

    @pytest.mark.parametrize(
        "token",
        [
            "not-a-date",
            "",
            "99",
            "19990",
            "1999-1",
            "1999-01-1",
            "1999/01/01",
            "1999-01-01T00:00",
            " 1999",
            "1999 ",
            "1999-13",
            "1999-00",
            "2023-02-30",
            "2025-04-31",
            "0000",
            "１９９９",  # full-width digits
        ],
    )
    def test_invalid(self, token: str) -> None:
        with pytest.raises(DiffParseError, match="invalid date format") as excinfo:
            parse_diff_target(token, TOKYO)
        assert excinfo.value.token == token

    def test_error_taxonomy(self) -> None:
        assert issubclass(DiffParseError, DateError)
        assert issubclass(DiffParseError, ValueError)


class TestComputeDiff:
    """Reference instant for this class: 2025-10-24 12:00 JST."""

    def test_years_until_target(self, reference: datetime) -> None:
        assert compute_diff(reference, "2030", "年") == "4年"

    def test_days_since_target(self, reference: datetime) -> None:
        assert compute_diff(reference, "2024-01-01", "日") == "662日"

    def test_years_since_without_hint_is_bare_number(self, reference: datetime) -> None:
        assert compute_diff(reference, "1999") == "26"

    def test_months_with_suffix(self, reference: datetime) -> None:
        assert compute_diff(reference, "1999-01", "ヶ月") == "321ヶ月"

    def test_plain_month_marker_uses_canonical_suffix(self, reference: datetime) -> None:
        assert compute_diff(reference, "1999-01", "月") == "321ヶ月"

    def test_days_with_suffix(self, reference: datetime) -> None:
        expected = (date(2025, 10, 24) - date(1999, 1, 1)).days
        assert compute_diff(reference, "1999-01-01", "日") == f"{expected}日"

    @pytest.mark.parametrize(
        "token,expected",
        [
            ("2024-01-01", "662"),  # days
            ("2025-12", "1"),  # months: 2025-10-24 -> 2025-12-01
            ("2030", "4"),  # years
        ],
    )
    def test_granularity_implied_by_shape(
        self, reference: datetime, token: str, expected: str
    ) -> None:
        assert compute_diff(reference, token) == expected

    def test_hint_overrides_shape(self, reference: datetime) -> None:
        assert compute_diff(reference, "2024-01-01", "年") == "1年"
        assert compute_diff(reference, "2024-01-01", "ヶ月") == "21ヶ月"
        assert compute_diff(reference, "2025", "日") == f"{(date(2025, 10, 24) - date(2025, 1, 1)).days}日"

    def test_full_date_layout_reads_as_years(self, reference: datetime) -> None:
        assert compute_diff(reference, "1999-01-01", "Y年m月d日") == "26年"

    def test_hint_without_marker_keeps_shape(self, reference: datetime) -> None:
        assert compute_diff(reference, "1999-01", "Y/m/d") == "321"

    def test_same_day_is_zero(self, reference: datetime) -> None:
        assert compute_diff(reference, "2025-10-24", "日") == "0日"

    def test_invalid_target_raises(self, reference: datetime) -> None:
        with pytest.raises(DiffParseError):
            compute_diff(reference, "not-a-date", "年")


class TestDirection:
    @pytest.mark.parametrize(
        "past,future,hint",
        [
            ("2020-10-24", "2030-10-24", "年"),
            ("2025-08-24", "2025-12-24", "ヶ月"),
            ("2025-10-14", "2025-11-03", "日"),
        ],
    )
    def test_symmetric(self, reference: datetime, past: str, future: str, hint: str) -> None:
        assert compute_diff(reference, past, hint) == compute_diff(reference, future, hint)

    def test_never_negative(self, reference: datetime) -> None:
        for token in ("1900", "2100", "1900-01", "2100-12", "1900-01-01", "2100-12-31"):
            assert calculate_diff(reference, token).magnitude >= 0


class TestAnniversary:
    def test_on_new_year(self) -> None:
        assert compute_diff(at(2025, 1, 1), "1999") == "26"

    def test_day_before_new_year(self) -> None:
        assert compute_diff(at(2024, 12, 31), "1999") == "25"

    @pytest.mark.parametrize("year", [2000, 2013, 2025, 2031])
    def test_year_only_equals_year_distance_after_jan_1(self, year: int) -> None:
        assert compute_diff(at(year, 6, 30), "1999") == str(year - 1999)

    def test_future_anniversary_not_reached(self) -> None:
        assert compute_diff(at(2025, 10, 24), "2030-10-25", "年") == "5年"
        assert compute_diff(at(2025, 10, 24), "2030-10-24", "年") == "5年"
        assert compute_diff(at(2025, 10, 25), "2030-10-24", "年") == "4年"


class TestCalculateDiff:
    def test_structured_result(self, reference: datetime) -> None:
        result = calculate_diff(reference, "2030", "年")
        assert result == DiffResult(magnitude=4, granularity=Granularity.YEARS, suffix="年")
        assert result.render() == "4年"

    def test_no_suffix(self, reference: datetime) -> None:
        result = calculate_diff(reference, "2024-01-01")
        assert result.suffix == ""
        assert result.granularity is Granularity.DAYS

    def test_custom_matcher(self, reference: datetime) -> None:
        class AlwaysDays(UnitMatcher):
            def match(self, format_hint: str) -> UnitHint | None:
                return UnitHint(granularity=Granularity.DAYS, suffix=" days")

        assert compute_diff(reference, "2024", matcher=AlwaysDays()) == "662 days"

    def test_uses_local_calendar_date(self) -> None:
        """Day counts use the local date of the reference, not elapsed hours."""
        late = datetime(2025, 10, 24, 23, 30, tzinfo=TOKYO)
        assert compute_diff(late, "2025-10-25", "日") == "1日"
