"""Kubernetes API client construction."""

import structlog
from kubernetes import client, config
from kubernetes.config import ConfigException

logger = structlog.get_logger(__name__)


def create_api_client(kubeconfig: str | None = None, context: str | None = None) -> client.ApiClient:
    """Build an API client from the first configuration source that works.

    Sources, in order of precedence:
    1. The explicit `kubeconfig` path
    2. The default kubeconfig ($KUBECONFIG or ~/.kube/config)
    3. The in-cluster service account, when running in a pod

    An explicit path that cannot be loaded is an error, it never falls back.
    """
    configuration = client.Configuration()
    try:
        config.load_kube_config(config_file=kubeconfig, context=context, client_configuration=configuration)
        logger.debug("kube_config_loaded", source=kubeconfig or "default")
    except ConfigException:
        if kubeconfig is not None:
            raise
        config.load_incluster_config(client_configuration=configuration)
        logger.debug("kube_config_loaded", source="in-cluster")
    return client.ApiClient(configuration)
