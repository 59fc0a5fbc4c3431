# hospital_api/routers/analytics.py

from typing import Callable, List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorDatabase

from hospital_api.core.config import settings
from hospital_api.core.logger import logger
from hospital_api.db.mongo import APPOINTMENTS, DOCTORS, PATIENTS, get_db
from hospital_api.services import analytics
from hospital_api.utils.responses import GENERIC_ERROR, NO_DATA, format_error_response

router = APIRouter(tags=["analytics"])


async def _report(collection, build_pipeline: Callable[[], List[dict]], name: str):
    # Empty results are not errors; failures are logged and never echoed back
    try:
        rows = await analytics.run_pipeline(collection, build_pipeline())
    except Exception:
        logger.exception(f"Analytics report '{name}' failed")
        return JSONResponse(status_code=500, content=format_error_response(GENERIC_ERROR))

    if not rows:
        return NO_DATA
    return rows


@router.get("/doctors-with-appointments", summary="Total appointments per doctor")
async def doctors_with_appointments(db: AsyncIOMotorDatabase = Depends(get_db)):
    return await _report(db[APPOINTMENTS], analytics.doctor_workload_pipeline, "doctors-with-appointments")


@router.get("/patient-medical-history/{patient_id}", summary="Medical history and visits of one patient")
async def patient_medical_history(patient_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    return await _report(
        db[PATIENTS],
        lambda: analytics.patient_history_pipeline(patient_id),
        "patient-medical-history",
    )


@router.get("/top-specialties", summary="Most booked specialties")
async def top_specialties(db: AsyncIOMotorDatabase = Depends(get_db)):
    return await _report(
        db[APPOINTMENTS],
        lambda: analytics.top_specialties_pipeline(settings.TOP_SPECIALTIES_LIMIT),
        "top-specialties",
    )


@router.get("/cancelled-appointments", summary="Cancellation rate per doctor")
async def cancelled_appointments(db: AsyncIOMotorDatabase = Depends(get_db)):
    return await _report(db[APPOINTMENTS], analytics.cancellation_rate_pipeline, "cancelled-appointments")


@router.get("/monthly-appointments", summary="Appointments per month")
async def monthly_appointments(db: AsyncIOMotorDatabase = Depends(get_db)):
    return await _report(db[APPOINTMENTS], analytics.monthly_appointments_pipeline, "monthly-appointments")


@router.get("/active-patients", summary="Patients with frequent recent visits")
async def active_patients(db: AsyncIOMotorDatabase = Depends(get_db)):
    def build():
        since = analytics.active_patients_cutoff(months=settings.ACTIVE_PATIENT_MONTHS)
        return analytics.active_patients_pipeline(since, settings.ACTIVE_PATIENT_MIN_VISITS)

    return await _report(db[APPOINTMENTS], build, "active-patients")


@router.get("/doctor-availability/{day}", summary="Doctors available on a given day")
async def doctor_availability(day: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    return await _report(
        db[DOCTORS],
        lambda: analytics.doctor_availability_pipeline(day),
        "doctor-availability",
    )
