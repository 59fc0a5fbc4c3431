# hospital_api/services/analytics.py
"""
Aggregation pipelines behind the /analytics reports.

Each builder returns a plain list of stages so it can be inspected without a
database; `run_pipeline` executes one against a collection and returns JSON
friendly rows.
"""

from datetime import datetime
from typing import List, Optional

from bson import ObjectId
from dateutil.relativedelta import relativedelta

from hospital_api.db.mongo import APPOINTMENTS, DOCTORS, PATIENTS
from hospital_api.models.appointment import AppointmentStatus
from hospital_api.utils.responses import serialize_document

CANCELLED = AppointmentStatus.CANCELLED.value


def _lookup(collection: str, local_field: str, as_field: str, foreign_field: str = "_id") -> dict:
    return {
        "$lookup": {
            "from": collection,
            "localField": local_field,
            "foreignField": foreign_field,
            "as": as_field,
        }
    }


def doctor_workload_pipeline() -> List[dict]:
    return [
        {"$group": {"_id": "$doctorId", "totalAppointments": {"$sum": 1}}},
        _lookup(DOCTORS, "_id", "doctor"),
        {"$unwind": "$doctor"},
        {
            "$project": {
                "_id": 0,
                "doctorId": "$_id",
                "doctorName": "$doctor.name",
                "specialty": "$doctor.specialty",
                "totalAppointments": 1,
            }
        },
    ]


def patient_history_pipeline(patient_id: str) -> List[dict]:
    # ObjectId() raises InvalidId on malformed ids
    return [
        {"$match": {"_id": ObjectId(patient_id)}},
        _lookup(APPOINTMENTS, "_id", "appointments", foreign_field="patientId"),
        {"$unwind": {"path": "$appointments", "preserveNullAndEmptyArrays": True}},
        _lookup(DOCTORS, "appointments.doctorId", "doctorInfo"),
        {"$unwind": {"path": "$doctorInfo", "preserveNullAndEmptyArrays": True}},
        {
            "$project": {
                "_id": 0,
                "patientId": "$_id",
                "name": 1,
                "medicalHistory": 1,
                "appointmentDate": "$appointments.appointmentDate",
                "status": "$appointments.status",
                "doctorName": "$doctorInfo.name",
                "specialty": "$doctorInfo.specialty",
            }
        },
    ]


def top_specialties_pipeline(limit: int = 3) -> List[dict]:
    # Ties keep whatever order the store produces
    return [
        _lookup(DOCTORS, "doctorId", "doctor"),
        {"$unwind": "$doctor"},
        {"$group": {"_id": "$doctor.specialty", "total": {"$sum": 1}}},
        {"$sort": {"total": -1}},
        {"$limit": limit},
        {"$project": {"_id": 0, "specialty": "$_id", "totalAppointments": "$total"}},
    ]


def cancellation_rate_pipeline() -> List[dict]:
    return [
        {
            "$group": {
                "_id": "$doctorId",
                "total": {"$sum": 1},
                "cancelled": {
                    "$sum": {"$cond": [{"$eq": ["$status", CANCELLED]}, 1, 0]}
                },
            }
        },
        {
            "$project": {
                "cancellationRate": {
                    "$cond": [
                        {"$eq": ["$total", 0]},
                        0,
                        {"$multiply": [{"$divide": ["$cancelled", "$total"]}, 100]},
                    ]
                }
            }
        },
        _lookup(DOCTORS, "_id", "doctor"),
        {"$unwind": "$doctor"},
        {
            "$project": {
                "_id": 0,
                "doctorId": "$_id",
                "doctorName": "$doctor.name",
                "specialty": "$doctor.specialty",
                "cancellationRate": 1,
            }
        },
    ]


def monthly_appointments_pipeline() -> List[dict]:
    return [
        {
            "$group": {
                "_id": {
                    "year": {"$year": "$appointmentDate"},
                    "month": {"$month": "$appointmentDate"},
                },
                "count": {"$sum": 1},
            }
        },
        {"$sort": {"_id.year": 1, "_id.month": 1}},
        {
            "$project": {
                "_id": 0,
                "month": {
                    "$concat": [
                        {"$toString": "$_id.month"},
                        "/",
                        {"$toString": "$_id.year"},
                    ]
                },
                "count": 1,
            }
        },
    ]


def active_patients_cutoff(now: Optional[datetime] = None, months: int = 6) -> datetime:
    """Start of the activity window, `months` calendar months before `now`."""
    now = now or datetime.utcnow()
    return now - relativedelta(months=months)


def active_patients_pipeline(since: datetime, min_visits: int = 3) -> List[dict]:
    return [
        {
            "$match": {
                "appointmentDate": {"$gte": since},
                "status": {"$ne": CANCELLED},
            }
        },
        {"$group": {"_id": "$patientId", "visits": {"$sum": 1}}},
        {"$match": {"visits": {"$gt": min_visits}}},
        _lookup(PATIENTS, "_id", "patient"),
        {"$unwind": "$patient"},
        {
            "$project": {
                "_id": 0,
                "patientId": "$_id",
                "name": "$patient.name",
                "age": "$patient.age",
                "visits": 1,
            }
        },
    ]


def doctor_availability_pipeline(day: str) -> List[dict]:
    # Exact, case-sensitive match on the day name
    return [
        {"$unwind": "$availability"},
        {"$match": {"availability": day}},
        {
            "$project": {
                "_id": 0,
                "doctorId": "$_id",
                "name": 1,
                "specialty": 1,
                "availability": 1,
            }
        },
    ]


async def run_pipeline(collection, pipeline: List[dict]) -> List[dict]:
    cursor = collection.aggregate(pipeline)
    docs = await cursor.to_list(length=None)
    return [serialize_document(doc) for doc in docs]
