# tests/test_analytics_pipelines.py

import asyncio
from datetime import datetime

import pytest
from bson import ObjectId
from bson.errors import InvalidId

from hospital_api.services import analytics


def _stage(pipeline, name):
    return [stage[name] for stage in pipeline if name in stage]


def test_doctor_workload_groups_by_doctor_and_joins_doctors():
    pipeline = analytics.doctor_workload_pipeline()
    assert pipeline[0] == {"$group": {"_id": "$doctorId", "totalAppointments": {"$sum": 1}}}
    lookup = _stage(pipeline, "$lookup")[0]
    assert lookup["from"] == "doctors"
    project = _stage(pipeline, "$project")[-1]
    assert set(project) == {"_id", "doctorId", "doctorName", "specialty", "totalAppointments"}


def test_patient_history_keeps_patients_without_appointments():
    patient_id = ObjectId()
    pipeline = analytics.patient_history_pipeline(str(patient_id))
    assert pipeline[0] == {"$match": {"_id": patient_id}}
    unwinds = _stage(pipeline, "$unwind")
    assert all(u["preserveNullAndEmptyArrays"] for u in unwinds)
    lookups = _stage(pipeline, "$lookup")
    assert lookups[0]["from"] == "appointments"
    assert lookups[0]["foreignField"] == "patientId"
    assert lookups[1]["localField"] == "appointments.doctorId"


def test_patient_history_rejects_malformed_id():
    with pytest.raises(InvalidId):
        analytics.patient_history_pipeline("1234")


def test_top_specialties_sorts_descending_then_limits():
    pipeline = analytics.top_specialties_pipeline()
    ops = [next(iter(stage)) for stage in pipeline]
    assert ops.index("$sort") < ops.index("$limit")
    assert _stage(pipeline, "$sort") == [{"total": -1}]
    assert _stage(pipeline, "$limit") == [3]


def test_cancellation_rate_guards_against_empty_groups():
    pipeline = analytics.cancellation_rate_pipeline()
    group = _stage(pipeline, "$group")[0]
    assert group["cancelled"] == {"$sum": {"$cond": [{"$eq": ["$status", "Cancelled"]}, 1, 0]}}
    rate = _stage(pipeline, "$project")[0]["cancellationRate"]
    assert rate["$cond"][0] == {"$eq": ["$total", 0]}
    assert rate["$cond"][1] == 0
    assert rate["$cond"][2] == {"$multiply": [{"$divide": ["$cancelled", "$total"]}, 100]}


def test_monthly_appointments_sorted_chronologically_before_labelling():
    pipeline = analytics.monthly_appointments_pipeline()
    ops = [next(iter(stage)) for stage in pipeline]
    assert ops == ["$group", "$sort", "$project"]
    assert list(pipeline[1]["$sort"].items()) == [("_id.year", 1), ("_id.month", 1)]
    label = pipeline[2]["$project"]["month"]["$concat"]
    assert label == [{"$toString": "$_id.month"}, "/", {"$toString": "$_id.year"}]


@pytest.mark.parametrize(
    "now,expected",
    [
        (datetime(2024, 9, 15, 12, 0), datetime(2024, 3, 15, 12, 0)),
        (datetime(2024, 8, 31), datetime(2024, 2, 29)),
        (datetime(2024, 3, 10), datetime(2023, 9, 10)),
    ],
)
def test_active_patients_cutoff_is_calendar_months(now, expected):
    assert analytics.active_patients_cutoff(now) == expected


def test_active_patients_threshold_is_strict():
    since = datetime(2024, 1, 1)
    pipeline = analytics.active_patients_pipeline(since)
    first_match, visits_match = _stage(pipeline, "$match")
    assert first_match == {
        "appointmentDate": {"$gte": since},
        "status": {"$ne": "Cancelled"},
    }
    assert visits_match == {"visits": {"$gt": 3}}
    assert _stage(pipeline, "$lookup")[0]["from"] == "patients"


def test_doctor_availability_unwinds_before_matching():
    pipeline = analytics.doctor_availability_pipeline("Monday")
    assert pipeline[:2] == [{"$unwind": "$availability"}, {"$match": {"availability": "Monday"}}]


class _Cursor:
    def __init__(self, rows):
        self.rows = rows

    async def to_list(self, length=None):
        return self.rows


class _Collection:
    def __init__(self, rows):
        self.rows = rows

    def aggregate(self, pipeline):
        return _Cursor(self.rows)


def test_run_pipeline_serializes_rows():
    doctor_id = ObjectId()
    rows = [{"doctorId": doctor_id, "when": datetime(2024, 3, 1), "tags": [doctor_id]}]
    result = asyncio.run(analytics.run_pipeline(_Collection(rows), []))
    assert result == [{"doctorId": str(doctor_id), "when": "2024-03-01T00:00:00", "tags": [str(doctor_id)]}]
