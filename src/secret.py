# Copyright 2026 Canonical Ltd.
# See LICENSE file for licensing details.

"""Create or update the Prometheus secret holding the scrape config."""

import base64
import logging

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException
from urllib3.exceptions import HTTPError

from constants import KUBECONFIG_PATH, SECRET_DATA_KEY
from errors import ClientInitError, ReconcileError

logger = logging.getLogger(__name__)


def get_core_api(developer_mode: bool) -> client.CoreV1Api:
    """Return a CoreV1Api client.

    In developer mode the local kubeconfig is used, otherwise the in-cluster
    service account.
    """
    try:
        if developer_mode:
            logger.info("Loading kubeconfig from %s", KUBECONFIG_PATH)
            config.load_kube_config(config_file=str(KUBECONFIG_PATH))
        else:
            config.load_incluster_config()
    except (ConfigException, OSError) as e:
        raise ClientInitError(f"Unable to load Kubernetes configuration: {e}") from e
    return client.CoreV1Api()


def build_secret(name: str, payload: bytes) -> client.V1Secret:
    """Return a secret carrying `payload` under the scrape config key."""
    return client.V1Secret(
        metadata=client.V1ObjectMeta(name=name),
        data={SECRET_DATA_KEY: base64.b64encode(payload).decode("ascii")},
    )


def upsert_secret(api: client.CoreV1Api, namespace: str, name: str, payload: bytes) -> client.V1Secret:
    """Create the secret if it does not exist, otherwise replace it entirely.

    There is no merge with the existing data and no resourceVersion check;
    concurrent writers race and the last one wins.
    """
    secret = build_secret(name, payload)

    try:
        api.read_namespaced_secret(name=name, namespace=namespace)
    except (ApiException, HTTPError) as e:
        if not isinstance(e, ApiException) or e.status != 404:
            raise ReconcileError(f"Unable to read secret {namespace}/{name}: {e}") from e
        logger.info("Creating secret %s/%s", namespace, name)
        try:
            return api.create_namespaced_secret(namespace=namespace, body=secret)
        except (ApiException, HTTPError) as e:
            raise ReconcileError(f"Unable to create secret {namespace}/{name}: {e}") from e

    logger.info("Replacing secret %s/%s", namespace, name)
    try:
        return api.replace_namespaced_secret(name=name, namespace=namespace, body=secret)
    except (ApiException, HTTPError) as e:
        raise ReconcileError(f"Unable to replace secret {namespace}/{name}: {e}") from e
