from __future__ import annotations

"""
Tests for record document I/O.
"""

import json
import logging

import pytest

from famcost.model.record import DailyRecord, UnitLog
from famcost.model.record_io import (
    dump_records_json,
    load_records_json,
    records_from_documents,
)
from famcost.services.aggregation_service import monthly_totals


class DescribeRecordsFromDocuments:
    def it_should_skip_invalid_documents_and_log_them(self, caplog):
        docs = [
            {"id": "1", "date": "2026-02-10", "unitLogs": []},
            {"id": "2", "date": "10/02/2026"},
            "not a document",
        ]
        with caplog.at_level(logging.WARNING, logger="famcost.model.record_io"):
            records = records_from_documents(docs)

        assert [r.id for r in records] == ["1"]
        assert "Skipping invalid record document" in caplog.text
        assert "Skipping non-object record document" in caplog.text

    def it_should_read_negative_amounts_as_zero_and_keep_the_day(self, caplog):
        docs = [
            {
                "id": "1",
                "date": "2026-02-10",
                "unitLogs": [
                    {"unitId": "Car", "unitName": "Car", "income": 3000, "cost": -5},
                    {"unitId": "Auto", "unitName": "Auto", "income": "abc", "cost": 100},
                ],
                "bazarItems": [{"id": "b1", "name": "Rice", "price": 450}],
                "buildingIncome": 1000,
            }
        ]
        with caplog.at_level(logging.WARNING, logger="famcost.model.record_io"):
            records = records_from_documents(docs)

        assert len(records) == 1
        record = records[0]
        assert (record.unit_income, record.unit_cost) == (3000, 100)
        assert record.bazar_total == 450
        assert record.building_income == 1000
        assert "Read 2 invalid amount(s) as 0" in caplog.text

    def it_should_count_a_repaired_day_in_monthly_totals(self):
        text = json.dumps(
            [
                {
                    "id": "1",
                    "date": "2026-02-10",
                    "unitLogs": [{"unitId": "Car", "unitName": "Car", "income": 0, "cost": -5}],
                    "bazarItems": [{"id": "b1", "name": "Rice", "price": 450}],
                }
            ]
        )
        totals = monthly_totals(load_records_json(text), 2026, 2)
        assert totals.bazar == 450
        assert totals.cost == 450


class DescribeJsonDocuments:
    def it_should_write_newest_date_first(self):
        records = [
            DailyRecord(id="a", date="2026-01-05"),
            DailyRecord(id="b", date="2026-02-01"),
        ]
        data = json.loads(dump_records_json(records))
        assert [d["date"] for d in data] == ["2026-02-01", "2026-01-05"]

    def it_should_load_what_it_writes(self):
        records = [
            DailyRecord(
                id="a",
                date="2026-01-05",
                unit_logs=[UnitLog(unit_id="Car", unit_name="Car", income=3000, cost=200)],
                building_income=1000,
            )
        ]
        assert load_records_json(dump_records_json(records)) == records

    def it_should_treat_empty_text_as_no_records(self):
        assert load_records_json("") == []

    def it_should_reject_non_array_json(self):
        with pytest.raises(ValueError, match="JSON array"):
            load_records_json('{"date": "2026-01-05"}')
