"""Job counter webhook endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Query, Request
from fastapi.responses import PlainTextResponse

from pod_job_tracker.web.deps import AppDep
from pod_job_tracker.web.disconnect import cancel_on_disconnect
from pod_job_tracker.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["counter"])

PodNameQuery = Annotated[str | None, Query(description="Name of the pod running the job")]

COUNTER_RESPONSES: dict[int | str, dict[str, Any]] = {
    200: {"description": "New counter value", "content": {"text/plain": {"example": "1"}}},
    400: {"model": ErrorResponse, "description": "Missing or invalid pod_name"},
    404: {"model": ErrorResponse, "description": "Pod not found or excluded by the label selector"},
    500: {"model": ErrorResponse, "description": "Corrupt counter label, Kubernetes API error, or too many conflicts"},
}


@router.post(
    "/increment",
    summary="Register a job",
    description="Increment the job counter label of a pod and return the new value.",
    operation_id="incrementJobs",
    response_class=PlainTextResponse,
    responses=COUNTER_RESPONSES,
)
async def increment(request: Request, app: AppDep, pod_name: PodNameQuery = None) -> PlainTextResponse:
    update = await cancel_on_disconnect(request, app.increment_jobs(pod_name))
    return PlainTextResponse(str(update.value))


@router.post(
    "/decrement",
    summary="Unregister a job",
    description=(
        "Decrement the job counter label of a pod and return the new value. "
        "The counter does not go below zero unless negative values are allowed."
    ),
    operation_id="decrementJobs",
    response_class=PlainTextResponse,
    responses=COUNTER_RESPONSES,
)
async def decrement(request: Request, app: AppDep, pod_name: PodNameQuery = None) -> PlainTextResponse:
    update = await cancel_on_disconnect(request, app.decrement_jobs(pod_name))
    return PlainTextResponse(str(update.value))
