from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

from flight_emissions.config import settings
from flight_emissions.errors import EmissionsError, ValidationError
from flight_emissions.form.state import form_options, future_query_from_form, past_query_from_form
from flight_emissions.formatters.results import format_error, format_result
from flight_emissions.obs.logger import log_event
from flight_emissions.obs.metrics import get_metrics_snapshot
from flight_emissions.obs.middleware import ObservabilityMiddleware
from flight_emissions.service import EmissionsService, create_service

load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    app.state.service = create_service()
    if not settings.has_travel_impact_key:
        log_event("config_warning", level="WARNING",
                  detail="TRAVEL_IMPACT_API_KEY missing; future flights will fail")
    log_event("startup", env=settings.APP_ENV)

    yield

    # Shutdown
    await app.state.service.aclose()
    log_event("shutdown")


app = FastAPI(
    title="Flight Emissions",
    version="1.0.0",
    lifespan=lifespan
)
app.add_middleware(ObservabilityMiddleware)


def get_service(request: Request) -> EmissionsService:
    return request.app.state.service


@app.exception_handler(EmissionsError)
async def emissions_error_handler(request: Request, exc: EmissionsError):
    return JSONResponse({"error": format_error(exc)}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # body missing or not a JSON object
    return await emissions_error_handler(request, ValidationError("Request body must be a JSON object"))


@app.get("/")
async def root():
    return {
        "service": "Flight Emissions",
        "version": "1.0.0",
        "status": "running",
        "pipelines": ["past", "future"],
    }


@app.get("/health")
async def health():
    return {"status": "healthy", "service": "flight-emissions"}


@app.get("/metrics")
async def metrics():
    return get_metrics_snapshot()


@app.get("/options")
async def options():
    return form_options()


@app.post("/emissions/past")
async def past_emissions(
    form: Dict[str, Any] = Body(...),
    service: EmissionsService = Depends(get_service),
):
    query = past_query_from_form(form)
    result = await service.estimate_past(query)
    return {"result": result.model_dump(mode="json"), "summary": format_result(result)}


@app.post("/emissions/future")
async def future_emissions(
    form: Dict[str, Any] = Body(...),
    service: EmissionsService = Depends(get_service),
):
    query = future_query_from_form(form)
    result = await service.estimate_future(query)
    return {"result": result.model_dump(mode="json"), "summary": format_result(result)}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8001,
        reload=settings.APP_ENV == "dev",
        log_level="info"
    )
