# hospital_api/utils/responses.py

from datetime import datetime

from bson import ObjectId

GENERIC_ERROR = "Something went wrong"
NO_DATA = {"message": "No data found"}
ROUTE_NOT_FOUND = {"message": "Route not found"}


def format_error_response(detail, **extra):
    body = {"error": detail}
    body.update(extra)
    return body


def serialize_document(value):
    """Make a Mongo document JSON friendly (ObjectId -> str, datetime -> ISO)."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: serialize_document(v) for k, v in value.items()}
    if isinstance(value, list):
        return [serialize_document(v) for v in value]
    return value
