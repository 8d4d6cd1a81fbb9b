from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from pod_job_tracker import utils


class Config(BaseSettings):
    """Application configuration loaded from environment variables and command-line flags.

    Fixed for the lifetime of the process.
    """

    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8080
    debug: bool = False
    namespace: str = "default"  # Namespace the tracked pods live in
    label_selector: str = ""  # Restricts which pods may be mutated, e.g. "app=worker"
    counter_label: str = "active-jobs"
    remove_on_zero: bool = True  # Delete the label at zero instead of writing "0"
    allow_negative: bool = False
    kubeconfig: str | None = None  # Explicit kubeconfig path; default loading rules apply when unset
    kube_context: str | None = None
    request_timeout: float = Field(default=15.0, gt=0)  # Seconds for all store calls of one request
    shutdown_timeout: int = Field(default=30, ge=0)  # Whole seconds to drain in-flight requests
    # Conflict backoff, defaults match the Kubernetes client's default backoff
    conflict_retry_attempts: int = Field(default=4, ge=1)
    conflict_retry_delay: float = Field(default=0.01, ge=0)
    conflict_retry_factor: float = Field(default=5.0, ge=1)
    conflict_retry_jitter: float = Field(default=0.1, ge=0)
    # Build metadata injected during Docker build via environment variables
    git_commit_hash: str = "unknown"
    git_commit_date: str = "unknown"
    build_time: str = "unknown"

    model_config = {
        "env_file": [".env"],
        "env_prefix": "POD_JOB_TRACKER_",
        "extra": "ignore",
        "frozen": True,
    }

    @field_validator("counter_label")
    @classmethod
    def validate_counter_label(cls, value: str) -> str:
        if not utils.is_label_key(value):
            raise ValueError(f"Invalid label key: '{value}'")
        return value
