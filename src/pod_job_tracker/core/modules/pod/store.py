"""Record store port and its Kubernetes adapter."""

import asyncio
import copy
import json
from abc import ABC, abstractmethod
from typing import Any

import structlog
import urllib3
from kubernetes.client import CoreV1Api
from kubernetes.client.exceptions import ApiException

from pod_job_tracker.core.modules.pod.models import Pod
from pod_job_tracker.errors import StoreUnavailableError, WriteConflictError

logger = structlog.get_logger(__name__)

HTTP_CONFLICT = 409


class PodStore(ABC):
    """Access to pods with optimistic concurrency.

    `timeout` is the time left for the call in seconds; a store must not keep
    working on the call after it runs out.
    """

    @abstractmethod
    async def find_one(self, namespace: str, name: str, label_selector: str, timeout: float | None = None) -> Pod | None:
        """Return the pod named `name` if it also matches `label_selector`, else None."""
        ...

    @abstractmethod
    async def update(self, pod: Pod, timeout: float | None = None) -> Pod:
        """Replace the stored pod, failing with WriteConflictError if its version moved on."""
        ...

    async def close(self) -> None:
        """Release connections held by the store."""


class KubernetesPodStore(PodStore):
    """PodStore backed by the Kubernetes API.

    The kubernetes client is synchronous, so every call runs in a worker thread.
    A thread cannot be cancelled, so each call carries the caller's remaining time
    as `_request_timeout` and gives up on its own. Pods are kept as raw JSON: the
    client's models drop fields they do not know, and a replace without them is
    rejected by newer API servers.
    """

    def __init__(self, api: CoreV1Api, request_timeout: float) -> None:
        self._api = api
        self._request_timeout = request_timeout

    async def find_one(self, namespace: str, name: str, label_selector: str, timeout: float | None = None) -> Pod | None:
        try:
            response = await asyncio.to_thread(
                self._api.list_namespaced_pod,
                namespace,
                field_selector=f"metadata.name={name}",
                label_selector=label_selector,
                limit=1,
                _request_timeout=self._request_timeout if timeout is None else timeout,
                _preload_content=False,
            )
            items = json.loads(response.data)["items"]
        except (ApiException, urllib3.exceptions.HTTPError) as e:
            raise StoreUnavailableError("Failed to list pods") from e

        if not items:
            return None
        return self._to_pod(items[0])

    async def update(self, pod: Pod, timeout: float | None = None) -> Pod:
        manifest: dict[str, Any] = copy.deepcopy(pod.manifest)
        # list items come without their type
        manifest.setdefault("apiVersion", "v1")
        manifest.setdefault("kind", "Pod")
        manifest["metadata"]["labels"] = dict(pod.labels)
        manifest["metadata"]["resourceVersion"] = pod.resource_version

        try:
            response = await asyncio.to_thread(
                self._api.replace_namespaced_pod,
                pod.name,
                pod.namespace,
                manifest,
                _request_timeout=self._request_timeout if timeout is None else timeout,
                _preload_content=False,
            )
            updated = json.loads(response.data)
        except ApiException as e:
            if e.status == HTTP_CONFLICT:
                logger.debug("pod_update_conflict", pod=pod.name, resource_version=pod.resource_version)
                raise WriteConflictError from e
            raise StoreUnavailableError("Failed to update pod label") from e
        except urllib3.exceptions.HTTPError as e:
            raise StoreUnavailableError("Failed to update pod label") from e

        return self._to_pod(updated)

    async def close(self) -> None:
        self._api.api_client.close()

    @staticmethod
    def _to_pod(manifest: dict[str, Any]) -> Pod:
        metadata = manifest["metadata"]
        return Pod(
            namespace=metadata["namespace"],
            name=metadata["name"],
            labels=dict(metadata.get("labels") or {}),
            resource_version=metadata["resourceVersion"],
            manifest=manifest,
        )
