from __future__ import annotations

"""
Tests for the aggregation functions.
"""

from datetime import datetime, timezone

import pytest

from famcost.model.record import BazarItem, DailyRecord, OtherItem, UnitLog
from famcost.services.aggregation_service import (
    DayAmount,
    all_unit_totals,
    bazar_by_date,
    build_dashboard,
    current_period,
    day_summaries,
    monthly_totals,
    resolve_today,
    today_totals,
    unit_history,
    unit_totals,
    unmatched_unit_names,
)
from famcost.services.entry_service import set_unit_values, start_draft

UNITS = ["Car", "Ris-Sharif-1", "Auto"]


def _log(name: str, income: float = 0, cost: float = 0) -> UnitLog:
    return UnitLog(unit_id=name, unit_name=name, income=income, cost=cost)


def _record(date: str, logs=(), bazar=(), other=(), building_income: float = 0) -> DailyRecord:
    return DailyRecord(
        id=f"id-{date}",
        date=date,
        unit_logs=list(logs),
        bazar_items=[BazarItem(name=n, price=p) for n, p in bazar],
        other_items=[OtherItem(name=n, price=p) for n, p in other],
        building_income=building_income,
    )


@pytest.fixture
def february():
    return [
        _record(
            "2026-02-10",
            logs=[_log("Car", 3000, 200), _log("Ris-Sharif-1", 1500, 100)],
            bazar=[("Rice & Oil", 450)],
            building_income=1000,
        ),
        _record(
            "2026-02-03",
            logs=[_log("Car", 2500, 300), _log("Auto", 800, 0)],
            other=[("Electric bill", 600)],
        ),
        _record(
            "2026-02-21",
            logs=[_log("Auto", 900, 150)],
            bazar=[("Fish", 700), ("Vegetables", 150)],
        ),
    ]


class DescribeEmptyRecords:
    """Nothing recorded yet."""

    def it_should_report_zero_for_today(self):
        totals = today_totals([], "2026-02-10")
        assert (totals.income, totals.cost) == (0, 0)

    def it_should_report_zero_for_the_month(self):
        month = monthly_totals([], 2026, 2)
        assert (month.income, month.cost, month.balance) == (0, 0, 0)
        assert month.record_count == 0

    def it_should_report_zero_for_every_unit(self):
        assert all(
            (u.income, u.cost, u.net) == (0, 0, 0) for u in all_unit_totals([], UNITS)
        )

    def it_should_have_no_bazar_days(self):
        assert bazar_by_date([]) == []


class DescribeTodayTotals:
    def it_should_sum_unit_income_and_all_costs(self):
        records = [
            _record("2026-02-10", logs=[_log("Car", 3000, 200)], bazar=[("Rice", 450)]),
        ]
        totals = today_totals(records, "2026-02-10")
        assert totals.income == 3000
        assert totals.cost == 650
        assert totals.balance == 2350

    def it_should_include_other_items_in_cost(self):
        records = [_record("2026-02-10", logs=[_log("Car", 100, 10)], other=[("Tips", 40)])]
        assert today_totals(records, "2026-02-10").cost == 50

    def it_should_ignore_other_days(self, february):
        totals = today_totals(february, "2026-02-11")
        assert (totals.income, totals.cost) == (0, 0)


class DescribeMonthlyTotals:
    def it_should_add_building_income_once(self):
        records = [
            _record("2026-02-10", logs=[_log("Car", 3000, 0)], building_income=1000),
            _record("2026-02-11", logs=[_log("Car", 2000, 0)]),
        ]
        month = monthly_totals(records, 2026, 2)
        assert month.income == 6000
        assert month.building_income == 1000

    def it_should_break_down_income_and_cost(self, february):
        month = monthly_totals(february, 2026, 2)
        assert month.unit_income == 3000 + 1500 + 2500 + 800 + 900
        assert month.unit_cost == 200 + 100 + 300 + 150
        assert month.bazar == 450 + 700 + 150
        assert month.other == 600
        assert month.income == month.unit_income + 1000
        assert month.cost == month.unit_cost + month.bazar + month.other
        assert month.record_count == 3

    def it_should_keep_balance_equal_to_income_minus_cost(self, february):
        month = monthly_totals(february, 2026, 2)
        assert month.income - month.cost == month.balance

    def it_should_ignore_records_from_other_months(self, february):
        records = february + [
            _record("2026-03-01", logs=[_log("Car", 99999, 1)], building_income=5),
            _record("2025-02-10", logs=[_log("Car", 77777, 1)]),
        ]
        assert monthly_totals(records, 2026, 2) == monthly_totals(february, 2026, 2)


class DescribeUnitTotals:
    def it_should_sum_matching_entries(self, february):
        car = unit_totals(february, "Car")
        assert (car.income, car.cost, car.net) == (5500, 500, 5000)

    def it_should_contribute_zero_for_days_without_an_entry(self, february):
        sharif = unit_totals(february, "Ris-Sharif-1")
        assert (sharif.income, sharif.cost) == (1500, 100)

    def it_should_match_unit_names_exactly(self, february):
        assert unit_totals(february, "car").income == 0

    def it_should_restrict_to_a_period(self, february):
        records = february + [_record("2026-01-15", logs=[_log("Car", 1000, 0)])]
        assert unit_totals(records, "Car").income == 6500
        assert unit_totals(records, "Car", 2026, 2).income == 5500
        assert unit_totals(records, "Car", 2026, 1).income == 1000

    def it_should_list_units_in_configuration_order(self, february):
        names = [u.unit_name for u in all_unit_totals(february, ["Auto", "Car"])]
        assert names == ["Auto", "Car"]

    def it_should_add_up_to_monthly_unit_figures(self):
        records = [
            _record("2026-02-01", logs=[_log("Car", 3000, 200), _log("Auto", 500, 50)]),
            _record("2026-02-02", logs=[_log("Ris-Sharif-1", 1200, 75)]),
        ]
        month = monthly_totals(records, 2026, 2)
        net = sum(u.net for u in all_unit_totals(records, UNITS, 2026, 2))
        assert net == month.income - month.unit_cost


class DescribeBazarByDate:
    def it_should_total_each_day_newest_first(self, february):
        assert bazar_by_date(february) == [
            DayAmount(date="2026-02-21", total=850),
            DayAmount(date="2026-02-10", total=450),
        ]

    def it_should_sort_regardless_of_input_order(self, february):
        assert bazar_by_date(list(reversed(february))) == bazar_by_date(february)


class DescribeUnitHistory:
    def it_should_list_days_oldest_first(self, february):
        history = unit_history(february, "Car")
        assert [p.date for p in history] == ["2026-02-03", "2026-02-10"]
        assert history[1].net == 2800

    def it_should_skip_days_without_the_unit(self, february):
        assert [p.date for p in unit_history(february, "Auto")] == ["2026-02-03", "2026-02-21"]


class DescribeDaySummaries:
    def it_should_list_days_newest_first(self, february):
        assert [d.date for d in day_summaries(february)] == [
            "2026-02-21",
            "2026-02-10",
            "2026-02-03",
        ]

    def it_should_add_up_to_the_monthly_balance(self, february):
        month = monthly_totals(february, 2026, 2)
        days = day_summaries(february, 2026, 2)
        assert sum(d.balance for d in days) == month.balance

    def it_should_include_building_income_in_day_income(self, february):
        day = next(d for d in day_summaries(february) if d.date == "2026-02-10")
        assert day.income == 3000 + 1500 + 1000
        assert day.cost == 200 + 100 + 450


class DescribeUnmatchedUnitNames:
    def it_should_report_names_missing_from_configuration(self):
        records = [_record("2026-02-01", logs=[_log("Car", 1), _log("Rickshaw-Old", 5)])]
        assert unmatched_unit_names(records, UNITS) == ["Rickshaw-Old"]

    def it_should_report_nothing_when_all_names_match(self, february):
        assert unmatched_unit_names(february, UNITS) == []


class DescribeResolveToday:
    def it_should_use_the_configured_zone_not_utc(self):
        # 20:30 UTC on the 9th is already the 10th in Dhaka (UTC+6).
        now = datetime(2026, 2, 9, 20, 30, tzinfo=timezone.utc)
        assert resolve_today("Asia/Dhaka", now) == "2026-02-10"
        assert resolve_today("UTC", now) == "2026-02-09"

    def it_should_treat_naive_now_as_utc(self):
        assert resolve_today("Asia/Dhaka", datetime(2026, 2, 9, 20, 30)) == "2026-02-10"

    def it_should_give_the_current_period(self):
        now = datetime(2026, 1, 31, 19, 0, tzinfo=timezone.utc)
        assert current_period("Asia/Dhaka", now) == (2026, 2)


class DescribeDashboard:
    def it_should_combine_all_views(self, february):
        dash = build_dashboard(february, UNITS, "2026-02-10", 2026, 2)
        assert dash.today.income == 4500
        assert dash.month == monthly_totals(february, 2026, 2)
        assert [u.unit_name for u in dash.units] == UNITS
        assert dash.bazar_by_date[0].date == "2026-02-21"
        assert dash.unmatched_units == []

    def it_should_be_idempotent(self, february):
        first = build_dashboard(february, UNITS, "2026-02-10", 2026, 2)
        second = build_dashboard(february, UNITS, "2026-02-10", 2026, 2)
        assert first == second

    def it_should_not_modify_its_input(self, february):
        before = [r.model_copy(deep=True) for r in february]
        build_dashboard(february, UNITS, "2026-02-10", 2026, 2)
        assert february == before


class DescribeDraftAggregation:
    def it_should_count_zero_entries_as_zero_before_saving(self):
        """All-zero unit entries aggregate to nothing in a draft."""
        draft = start_draft([], "2026-02-10", UNITS)
        set_unit_values(draft, "Car", income=3000, cost=200)

        assert len(draft.record.unit_logs) == 3
        totals = today_totals([draft.record], "2026-02-10")
        assert (totals.income, totals.cost) == (3000, 200)
        assert unit_totals([draft.record], "Auto").net == 0
