from pod_job_tracker.web.routers.counter import router as counter_router
from pod_job_tracker.web.routers.system import router as system_router

__all__ = [
    "counter_router",
    "system_router",
]
