# hospital_api/db/mongo.py
from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from hospital_api.core.config import settings
from hospital_api.core.logger import logger

# Collection names
DOCTORS = "doctors"
PATIENTS = "patients"
APPOINTMENTS = "appointments"


def create_client(uri: str = None) -> AsyncIOMotorClient:
    return AsyncIOMotorClient(uri or settings.MONGODB_URI)


# Function to check DB connection
async def verify_mongodb_connection(client: AsyncIOMotorClient) -> bool:
    try:
        await client.server_info()
        logger.info("MongoDB connection established")
        return True
    except Exception as e:
        logger.error(f"MongoDB connection failed: {str(e)}")
        return False


async def get_db(request: Request) -> AsyncIOMotorDatabase:
    """Database handle attached to the app at startup."""
    return request.app.state.db
