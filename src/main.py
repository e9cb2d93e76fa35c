#!/usr/bin/env python3
# Copyright 2026 Canonical Ltd.
# See LICENSE file for licensing details.

"""Keep the Prometheus Blackbox targets in sync with Route53."""

import logging
import os
import sys
from typing import Callable, Mapping, Optional

from kubernetes import client

from constants import LOG_FORMAT
from errors import BlackboxDiscoveryError, NotificationError
from models import Settings, ZoneVisibility
from notify import send_error_notification
from route53 import ZoneEnumerator
from scrape_config import dump, load_template, merge
from secret import get_core_api, upsert_secret
from targets import derive_targets

logger = logging.getLogger(__name__)


def reconcile(
    settings: Settings,
    enumerator: Optional[ZoneEnumerator] = None,
    core_api_factory: Callable[[bool], client.CoreV1Api] = get_core_api,
) -> bool:
    """Run one discovery pass.

    Return True if the secret was written, False if there was nothing to
    register. Any stage failure propagates and nothing is published.
    """
    enumerator = enumerator or ZoneEnumerator()

    logger.info("Getting Route53 records for public hosted zone %s", settings.public_hosted_zone_id)
    public_records = enumerator.list_all(settings.public_hosted_zone_id, ZoneVisibility.PUBLIC)

    logger.info("Getting Route53 records for private hosted zone %s", settings.private_hosted_zone_id)
    private_records = enumerator.list_all(settings.private_hosted_zone_id, ZoneVisibility.PRIVATE)

    logger.info("Getting Blackbox targets")
    targets = derive_targets(
        public_records,
        private_records,
        settings.additional_targets,
        settings.excluded_targets,
    )
    if not targets:
        logger.info("No targets to register, canceling run")
        return False

    logger.info("Getting k8s client")
    api = core_api_factory(settings.developer_mode)

    template = load_template(settings.template_path)

    logger.info("Adding new targets in config")
    merged = merge(
        template,
        targets,
        settings.bind_servers,
        targets_job=settings.targets_job,
        bind_server_jobs=settings.bind_server_jobs,
    )
    payload = dump(merged).encode("utf-8")

    logger.info("Creating/updating Blackbox targets Prometheus secret")
    upsert_secret(api, settings.prometheus_namespace, settings.prometheus_secret_name, payload)
    logger.info("Successfully updated Blackbox targets")
    return True


def notify_failure(hook_url: Optional[str], error: BaseException, message: str) -> None:
    """Send a failure notification; delivery problems are only logged."""
    if not hook_url:
        logger.warning("MATTERMOST_ALERTS_HOOK is not set, skipping notification")
        return
    try:
        send_error_notification(hook_url, error, message)
    except NotificationError as e:
        logger.error("Failed to send Mattermost error notification: %s", e)


def main(environ: Optional[Mapping[str, str]] = None) -> int:
    """Validate the environment, run one pass and return the process exit code."""
    environ = os.environ if environ is None else environ
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    try:
        settings = Settings.from_environ(environ)
    except BlackboxDiscoveryError as e:
        logger.error("Environment variable validation failed: %s", e)
        notify_failure(environ.get("MATTERMOST_ALERTS_HOOK"), e, "Environment variable validation failed")
        return 1

    logging.getLogger().setLevel(settings.log_level)

    try:
        reconcile(settings)
    except BlackboxDiscoveryError as e:
        logger.error("Failed to run Blackbox target discovery: %s", e)
        notify_failure(settings.mattermost_alerts_hook, e, "The Blackbox target discovery failed")
        return 1
    except Exception as e:
        logger.exception("Unexpected error during Blackbox target discovery")
        notify_failure(settings.mattermost_alerts_hook, e, "The Blackbox target discovery failed")
        return 1

    return 0


def cli() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":  # pragma: nocover
    cli()
