from __future__ import annotations

from typing import TYPE_CHECKING

from pod_job_tracker.core.modules.pod.store import PodStore

if TYPE_CHECKING:
    from pod_job_tracker.core.core import Core


class Service:
    """Base class for services with access to the pod store and, through Core, to each other."""

    def __init__(self, store: PodStore) -> None:
        self.store = store
        self._core: Core | None = None

    @property
    def core(self) -> Core:
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        self._core = core
