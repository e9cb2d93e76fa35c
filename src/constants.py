# Copyright 2026 Canonical Ltd.
# See LICENSE file for licensing details.

"""Discovery constants, for better testability."""

from pathlib import Path
from typing import Final

SECRET_DATA_KEY: Final[str] = "scrape_config_secret.yaml"
DEFAULT_TEMPLATE_PATH: Final[Path] = Path("scrapeconfig.yml")
KUBECONFIG_PATH: Final[Path] = Path.home() / ".kube" / "config"

PING_PATH: Final[str] = "/api/v4/system/ping"
GRPC_PORT: Final[int] = 9090
GRPC_MARKER: Final[str] = "-grpc."
META_RECORD_PREFIX: Final[str] = "_"

NOTIFICATION_USERNAME: Final[str] = "Blackbox Target Discovery"
NOTIFICATION_TIMEOUT: Final[int] = 10
LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)s %(name)s: %(message)s"
