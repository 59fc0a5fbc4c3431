# hospital_api/main.py
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from hospital_api.core.config import settings
from hospital_api.core.logger import logger
from hospital_api.db.mongo import create_client, verify_mongodb_connection
from hospital_api.routers import analytics, appointments
from hospital_api.utils.errors import ApiError
from hospital_api.utils.responses import GENERIC_ERROR, ROUTE_NOT_FOUND, format_error_response

app = FastAPI(
    title=settings.SERVICE_NAME,
    version="1.0.0",
    description="Appointment scheduling and analytics over the hospital MongoDB",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Startup/shutdown
@app.on_event("startup")
async def startup():
    # A failed probe is logged only; requests fail individually until the store is back
    client = create_client()
    app.state.mongo_client = client
    app.state.db = client[settings.MONGODB_DB]
    await verify_mongodb_connection(client)

@app.on_event("shutdown")
async def shutdown_db():
    client = getattr(app.state, "mongo_client", None)
    if client is not None:
        client.close()
        logger.info("MongoDB connection closed")

# Health check
@app.get("/", tags=["root"], summary="Health check")
async def root():
    return {"status": "ok", "service": settings.SERVICE_NAME}

# Error handlers
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc, ApiError):
        return JSONResponse(status_code=exc.status_code, content=format_error_response(exc.detail))
    # Unmatched path or method
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content=ROUTE_NOT_FOUND)
    return JSONResponse(status_code=exc.status_code, content=format_error_response(exc.detail))

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content=format_error_response("Invalid request payload", details=jsonable_encoder(exc.errors())),
    )

@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content=format_error_response(GENERIC_ERROR))

# Routes
app.include_router(appointments.router, prefix="/appointments")
app.include_router(analytics.router,    prefix="/analytics")
