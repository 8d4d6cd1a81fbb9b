"""Shared pytest fixtures."""

import asyncio
from collections.abc import Callable

import pytest

from pod_job_tracker.config import Config
from pod_job_tracker.core.core import Core
from pod_job_tracker.core.modules.pod.models import Pod
from pod_job_tracker.core.modules.pod.store import PodStore
from pod_job_tracker.errors import StoreUnavailableError, WriteConflictError
from pod_job_tracker.utils import is_label_value


class InMemoryPodStore(PodStore):
    """PodStore keeping pods in a dict, with resource versions bumped on every write.

    Callables queued with `interleave` run right before the next writes, one per
    write, to simulate a concurrent writer slipping in between read and write.
    """

    def __init__(self) -> None:
        self.pods: dict[tuple[str, str], Pod] = {}
        self.find_calls = 0
        self.update_calls = 0
        self.timeouts: list[float | None] = []
        self._interleaved: list[Callable[[], None]] = []

    def add_pod(self, name: str, labels: dict[str, str] | None = None, namespace: str = "default") -> Pod:
        pod = Pod(namespace=namespace, name=name, labels=labels or {}, resource_version="1")
        self.pods[(namespace, name)] = pod
        return pod

    def labels(self, name: str, namespace: str = "default") -> dict[str, str]:
        return dict(self.pods[(namespace, name)].labels)

    def set_labels(self, name: str, labels: dict[str, str], namespace: str = "default") -> None:
        """Write labels directly, as another client would."""
        stored = self.pods[(namespace, name)]
        self.pods[(namespace, name)] = stored.model_copy(
            update={"labels": dict(labels), "resource_version": str(int(stored.resource_version) + 1)}
        )

    def interleave(self, *writers: Callable[[], None]) -> None:
        self._interleaved.extend(writers)

    async def find_one(self, namespace: str, name: str, label_selector: str, timeout: float | None = None) -> Pod | None:
        self.find_calls += 1
        self.timeouts.append(timeout)
        await asyncio.sleep(0)
        pod = self.pods.get((namespace, name))
        if pod is None or not _matches(pod.labels, label_selector):
            return None
        return pod.model_copy(deep=True)

    async def update(self, pod: Pod, timeout: float | None = None) -> Pod:
        self.update_calls += 1
        self.timeouts.append(timeout)
        await asyncio.sleep(0)
        if self._interleaved:
            self._interleaved.pop(0)()
        key = (pod.namespace, pod.name)
        stored = self.pods.get(key)
        if stored is None:
            raise StoreUnavailableError("Pod was deleted")
        if not all(is_label_value(value) for value in pod.labels.values()):
            # the API server answers 422 Unprocessable Entity
            raise StoreUnavailableError("Failed to update pod label")
        if stored.resource_version != pod.resource_version:
            raise WriteConflictError
        updated = pod.model_copy(update={"resource_version": str(int(stored.resource_version) + 1)}, deep=True)
        self.pods[key] = updated
        return updated


def _matches(labels: dict[str, str], label_selector: str) -> bool:
    """Equality-based selectors only, e.g. "app=worker,tier=batch"."""
    for requirement in filter(None, label_selector.split(",")):
        key, _, value = requirement.partition("=")
        if labels.get(key.strip()) != value.strip():
            return False
    return True


@pytest.fixture
def store():
    return InMemoryPodStore()


@pytest.fixture
def config():
    """Configuration with fast retries for tests."""
    return Config(conflict_retry_attempts=5, conflict_retry_delay=0.0, request_timeout=5.0)


@pytest.fixture
def core(config, store):
    return Core(config, store)
