import re

import structlog

from pod_job_tracker.core.modules.pod.models import Pod
from pod_job_tracker.core.service import Service
from pod_job_tracker.errors import CorruptCounterError, InvalidCounterValueError, NotFoundError
from pod_job_tracker.utils import is_label_value

logger = structlog.get_logger(__name__)

# Optional sign followed by ASCII digits
COUNTER_VALUE_RE = re.compile(r"^[+-]?[0-9]+$")


class PodService(Service):
    """Service for reading and writing the counter label of pods in the configured namespace."""

    async def get_pod(self, name: str, timeout: float | None = None) -> Pod:
        """Get a pod by name. Pods excluded by the label selector are reported as not found."""
        config = self.core.config
        pod = await self.store.find_one(config.namespace, name, config.label_selector, timeout=timeout)
        if pod is None:
            raise NotFoundError(f"Pod '{name}' not found in namespace '{config.namespace}'")
        return pod

    def read_counter(self, pod: Pod) -> int:
        """Get the counter value of a pod, 0 when the label is absent."""
        label = self.core.config.counter_label
        raw_value = pod.labels.get(label)
        if raw_value is None:
            return 0
        if not COUNTER_VALUE_RE.fullmatch(raw_value):
            logger.warning("corrupt_counter_label", pod=pod.name, label=label, value=raw_value)
            raise CorruptCounterError(f"Invalid {label} label value: {raw_value!r}")
        return int(raw_value)

    def write_counter(self, pod: Pod, value: int) -> Pod:
        """Return a copy of the pod with the counter label set to value.

        At zero the label is removed instead when remove_on_zero is enabled.
        Negative values cannot be written: Kubernetes label values must start
        with an alphanumeric character.
        """
        config = self.core.config
        labels = dict(pod.labels)
        if value == 0 and config.remove_on_zero:
            labels.pop(config.counter_label, None)
        else:
            raw_value = str(value)
            if not is_label_value(raw_value):
                raise InvalidCounterValueError(
                    f"Counter value {raw_value} cannot be stored in label {config.counter_label}: "
                    "label values must start and end with an alphanumeric character"
                )
            labels[config.counter_label] = raw_value
        return pod.model_copy(update={"labels": labels})

    async def save_pod(self, pod: Pod, timeout: float | None = None) -> Pod:
        """Conditionally write the pod back, raises WriteConflictError if it changed since it was read."""
        return await self.store.update(pod, timeout=timeout)
