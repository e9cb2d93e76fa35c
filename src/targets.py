# Copyright 2026 Canonical Ltd.
# See LICENSE file for licensing details.

"""Derive blackbox probe targets from DNS records."""

import logging
from typing import AbstractSet, Iterable, List

from constants import GRPC_MARKER, GRPC_PORT, META_RECORD_PREFIX, PING_PATH
from models import RecordSet

logger = logging.getLogger(__name__)


def is_candidate(record: RecordSet, excluded_targets: AbstractSet[str]) -> bool:
    """Return True if the record is neither excluded nor a meta record (e.g. `_acme-challenge`)."""
    return record.name not in excluded_targets and not record.name.startswith(META_RECORD_PREFIX)


def derive_targets(
    public_records: Iterable[RecordSet],
    private_records: Iterable[RecordSet],
    additional_targets: Iterable[str],
    excluded_targets: AbstractSet[str],
) -> List[str]:
    """Return the ordered list of targets to probe.

    Public records become HTTP ping URLs, private gRPC records become
    `host:port` pairs, and additional targets are appended verbatim.
    Exclusion is an exact match on the record name as Route53 returns it.
    """
    targets: List[str] = []

    for record in public_records:
        if is_candidate(record, excluded_targets):
            targets.append(f"{record.name}{PING_PATH}")

    for record in private_records:
        if is_candidate(record, excluded_targets) and GRPC_MARKER in record.name:
            targets.append(f"{record.name}:{GRPC_PORT}")

    for target in additional_targets:
        logger.info("Adding additional target %s", target)
        targets.append(target)

    logger.info("Derived %d Blackbox targets", len(targets))
    return targets
