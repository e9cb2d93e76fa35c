# Copyright 2026 Canonical Ltd.
# See LICENSE file for licensing details.

"""Failure notifications to a Mattermost incoming webhook."""

import logging

import requests

from constants import NOTIFICATION_TIMEOUT, NOTIFICATION_USERNAME
from errors import NotificationError

logger = logging.getLogger(__name__)


def format_message(error: BaseException, message: str) -> str:
    """Return the notification text for `error`."""
    return f"#### {message}\n```\n{error}\n```"


def send_error_notification(hook_url: str, error: BaseException, message: str) -> None:
    """Post `message` and `error` to the webhook.

    Raises:
        NotificationError: if the webhook could not be reached or rejected the post.
    """
    payload = {"username": NOTIFICATION_USERNAME, "text": format_message(error, message)}
    try:
        response = requests.post(hook_url, json=payload, timeout=NOTIFICATION_TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as e:
        raise NotificationError(f"Failed to send Mattermost notification: {e}") from e
    logger.info("Sent Mattermost error notification")
