from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from kubernetes.client import CoreV1Api

from pod_job_tracker.config import Config
from pod_job_tracker.core.kube import create_api_client
from pod_job_tracker.core.modules.counter.service import CounterService
from pod_job_tracker.core.modules.pod.service import PodService
from pod_job_tracker.core.modules.pod.store import KubernetesPodStore, PodStore


class Services:
    """The services sharing one pod store."""

    def __init__(self, store: PodStore) -> None:
        self.pod = PodService(store)
        self.counter = CounterService(store)


class Core:
    """Container providing config, the pod store, and all service instances."""

    def __init__(self, config: Config, store: PodStore | None = None) -> None:
        """Initialize core with config and a store, connecting to Kubernetes unless a store is given."""
        self.config = config
        if store is None:
            api = CoreV1Api(create_api_client(config.kubeconfig, config.kube_context))
            store = KubernetesPodStore(api, config.request_timeout)
        self.store = store
        self.services = Services(store)
        self.services.pod.set_core(self)
        self.services.counter.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Close the store's connections on shutdown."""
        try:
            yield
        finally:
            await self.store.close()
