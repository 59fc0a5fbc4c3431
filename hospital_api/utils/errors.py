# hospital_api/utils/errors.py

from fastapi import HTTPException


class ApiError(HTTPException):
    """Errors raised on purpose by handlers; rendered as {"error": detail}."""

class NotFoundError(ApiError):
    def __init__(self, detail: str):
        super().__init__(status_code=404, detail=detail)

class InternalServerError(ApiError):
    def __init__(self, detail: str = "Something went wrong"):
        super().__init__(status_code=500, detail=detail)
