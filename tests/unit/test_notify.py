# Copyright 2026 Canonical Ltd.
# See LICENSE file for licensing details.

from unittest.mock import patch

import pytest
import requests

from errors import NotificationError
from notify import send_error_notification

HOOK = "https://mattermost.example.com/hooks/abc"


def test_posts_message_and_error():
    with patch("notify.requests.post") as mock_post:
        send_error_notification(HOOK, RuntimeError("boom"), "The Blackbox target discovery failed")

    args, kwargs = mock_post.call_args
    assert args == (HOOK,)
    assert kwargs["json"]["username"] == "Blackbox Target Discovery"
    assert "The Blackbox target discovery failed" in kwargs["json"]["text"]
    assert "boom" in kwargs["json"]["text"]
    mock_post.return_value.raise_for_status.assert_called_once()


def test_connection_error_raises_notification_error():
    with patch("notify.requests.post", side_effect=requests.ConnectionError("refused")):
        with pytest.raises(NotificationError):
            send_error_notification(HOOK, RuntimeError("boom"), "failed")


def test_http_error_raises_notification_error():
    with patch("notify.requests.post") as mock_post:
        mock_post.return_value.raise_for_status.side_effect = requests.HTTPError("500")
        with pytest.raises(NotificationError):
            send_error_notification(HOOK, RuntimeError("boom"), "failed")
