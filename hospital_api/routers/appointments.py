# hospital_api/routers/appointments.py

from fastapi import APIRouter, Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from hospital_api.core.logger import logger
from hospital_api.db.mongo import get_db
from hospital_api.models.appointment import AppointmentCreate
from hospital_api.services.appointment_service import schedule_appointment
from hospital_api.utils.errors import ApiError, InternalServerError

router = APIRouter(tags=["appointments"])


@router.post(
    "",
    status_code=status.HTTP_200_OK,
    summary="Schedule an appointment",
)
async def create_appointment(
    appointment: AppointmentCreate,
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    try:
        await schedule_appointment(db, appointment)
    except ApiError:
        raise
    except Exception:
        logger.exception("Failed to schedule appointment")
        raise InternalServerError()

    return {"message": "Appointment scheduled successfully"}
