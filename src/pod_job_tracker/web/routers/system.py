"""Health and version endpoints."""

from fastapi import APIRouter

from pod_job_tracker.web.deps import AppDep

router = APIRouter(tags=["system"])


@router.get("/health", summary="Liveness check", operation_id="health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}


@router.get(
    "/version",
    summary="Get version information",
    description="Returns the package version, git commit hash, commit date, and build time.",
    operation_id="getVersion",
)
async def get_version(app: AppDep) -> dict[str, str]:
    return await app.get_version()
