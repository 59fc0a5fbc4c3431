# hospital_api/services/appointment_service.py

from bson import ObjectId

from hospital_api.core.logger import logger
from hospital_api.db.mongo import APPOINTMENTS, DOCTORS, PATIENTS
from hospital_api.models.appointment import AppointmentCreate
from hospital_api.utils.errors import NotFoundError


async def schedule_appointment(db, appointment: AppointmentCreate) -> None:
    """
    Persist a new appointment once both referenced records are known to exist.
    Raises NotFoundError for a dangling doctor or patient reference.
    """
    doctor = await db[DOCTORS].find_one({"_id": ObjectId(appointment.doctor_id)}, {"_id": 1})
    if not doctor:
        raise NotFoundError("Doctor not found")

    patient = await db[PATIENTS].find_one({"_id": ObjectId(appointment.patient_id)}, {"_id": 1})
    if not patient:
        raise NotFoundError("Patient not found")

    result = await db[APPOINTMENTS].insert_one(appointment.to_document())
    logger.info(
        f"Scheduled appointment {result.inserted_id} "
        f"(doctor={appointment.doctor_id}, patient={appointment.patient_id})"
    )
