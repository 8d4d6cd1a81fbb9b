from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version

from pod_job_tracker import utils
from pod_job_tracker.config import Config
from pod_job_tracker.core.core import Core
from pod_job_tracker.core.modules.counter.models import CounterOperation, CounterUpdate
from pod_job_tracker.core.modules.pod.store import PodStore
from pod_job_tracker.errors import ValidationError


class App:
    """Facade for all application operations, validates request input before delegating to Core."""

    def __init__(self, config: Config, store: PodStore | None = None) -> None:
        self._core = Core(config, store)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def increment_jobs(self, pod_name: str | None) -> CounterUpdate:
        """Register a job on a pod by incrementing its counter label."""
        return await self._update_jobs(pod_name, CounterOperation.INCREMENT)

    async def decrement_jobs(self, pod_name: str | None) -> CounterUpdate:
        """Unregister a job from a pod by decrementing its counter label."""
        return await self._update_jobs(pod_name, CounterOperation.DECREMENT)

    async def get_version(self) -> dict[str, str]:
        """Get package version and build metadata."""
        config = self._core.config
        try:
            package_version = version("pod-job-tracker")
        except PackageNotFoundError:
            package_version = "unknown"
        return {
            "version": package_version,
            "git_commit_hash": config.git_commit_hash,
            "git_commit_date": config.git_commit_date,
            "build_time": config.build_time,
        }

    async def _update_jobs(self, pod_name: str | None, operation: CounterOperation) -> CounterUpdate:
        if not pod_name:
            raise ValidationError("Missing pod_name query parameter")
        if not utils.is_pod_name(pod_name):
            raise ValidationError(f"Invalid pod name: '{pod_name}'")
        return await self._core.services.counter.apply(pod_name, operation)
