import asyncio
import random

import structlog

from pod_job_tracker.core.modules.counter.models import CounterOperation, CounterUpdate
from pod_job_tracker.core.service import Service
from pod_job_tracker.errors import ConflictRetriesExhaustedError, StoreUnavailableError, WriteConflictError

logger = structlog.get_logger(__name__)


class CounterService(Service):
    """Applies counter operations to pod labels with optimistic concurrency.

    The store has no atomic increment. Each attempt reads the pod, computes the new
    value from what it read, and writes the whole pod back carrying the version
    token of the read. A write that loses against a concurrent writer is retried
    from the read with exponential backoff, so an operation is never applied to a
    stale value and never applied twice. Only write conflicts are retried.
    """

    async def apply(self, pod_name: str, operation: CounterOperation) -> CounterUpdate:
        """Apply an operation to the counter label of a pod and return the outcome.

        The whole call, retries and backoff included, has one deadline of
        request_timeout seconds. Each store call gets only the time left before it,
        and no store call starts after the deadline. Cancelling the calling task
        stops further attempts.
        """
        deadline = asyncio.get_running_loop().time() + self.core.config.request_timeout
        try:
            async with asyncio.timeout_at(deadline):
                return await self._apply_with_retry(pod_name, operation, deadline)
        except TimeoutError as e:
            logger.warning("counter_update_timeout", pod=pod_name, operation=operation)
            raise StoreUnavailableError("Timed out talking to the Kubernetes API") from e

    async def _apply_with_retry(self, pod_name: str, operation: CounterOperation, deadline: float) -> CounterUpdate:
        config = self.core.config
        delay = config.conflict_retry_delay
        last_conflict: WriteConflictError | None = None

        for attempt in range(1, config.conflict_retry_attempts + 1):
            if attempt > 1:
                await asyncio.sleep(delay * (1 + random.random() * config.conflict_retry_jitter))  # noqa: S311
                delay *= config.conflict_retry_factor
            try:
                return await self._apply_once(pod_name, operation, attempt, deadline)
            except WriteConflictError as e:
                logger.info("counter_write_conflict", pod=pod_name, operation=operation, attempt=attempt)
                last_conflict = e

        raise ConflictRetriesExhaustedError(
            f"Gave up updating pod '{pod_name}' after {config.conflict_retry_attempts} conflicting writes"
        ) from last_conflict

    async def _apply_once(
        self, pod_name: str, operation: CounterOperation, attempt: int, deadline: float
    ) -> CounterUpdate:
        """Run one read-compute-write cycle against fresh pod state."""
        config = self.core.config
        pods = self.core.services.pod

        pod = await pods.get_pod(pod_name, timeout=_time_left(deadline))
        current = pods.read_counter(pod)
        value = operation.apply(current, config.allow_negative)
        await pods.save_pod(pods.write_counter(pod, value), timeout=_time_left(deadline))

        update = CounterUpdate(
            namespace=pod.namespace,
            pod_name=pod.name,
            label=config.counter_label,
            previous_value=current,
            value=value,
            label_removed=value == 0 and config.remove_on_zero,
            attempts=attempt,
        )
        logger.info(
            "counter_updated",
            pod=pod.name,
            operation=operation,
            previous_value=current,
            value=value,
            attempts=attempt,
        )
        return update


def _time_left(deadline: float) -> float:
    """Seconds until the deadline, raising TimeoutError once it has passed."""
    remaining = deadline - asyncio.get_running_loop().time()
    if remaining <= 0:
        raise TimeoutError
    return remaining
