# Copyright 2026 Canonical Ltd.
# See LICENSE file for licensing details.

"""Paginated listing of Route53 hosted zone records."""

import logging
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from errors import TransportError
from models import RecordSet, ZoneVisibility

logger = logging.getLogger(__name__)

# Response field -> request field carrying the continuation cursor.
CURSOR_FIELDS: Dict[str, str] = {
    "NextRecordName": "StartRecordName",
    "NextRecordType": "StartRecordType",
    "NextRecordIdentifier": "StartRecordIdentifier",
}


class ZoneEnumerator:
    """Read every record set of a hosted zone.

    The boto3 client is created lazily so that building an enumerator never
    touches AWS credentials; tests pass a stubbed client instead.
    """

    def __init__(self, client: Optional[Any] = None):
        self._client = client

    @property
    def client(self) -> Any:
        """Return the Route53 client, creating it on first use."""
        if self._client is None:
            try:
                self._client = boto3.client("route53")
            except BotoCoreError as e:
                raise TransportError(f"Unable to create the Route53 client: {e}") from e
        return self._client

    def list_all(self, zone_id: str, visibility: ZoneVisibility) -> List[RecordSet]:
        """Return all records of `zone_id`, following truncated pages to the end.

        Raises:
            TransportError: on the first failed request; nothing is retried.
        """
        request: Dict[str, str] = {"HostedZoneId": zone_id}
        records: List[RecordSet] = []
        page = 0

        while True:
            page += 1
            try:
                response = self.client.list_resource_record_sets(**request)
            except (BotoCoreError, ClientError) as e:
                raise TransportError(
                    f"Listing records of hosted zone {zone_id} failed: {e}"
                ) from e

            batch = response.get("ResourceRecordSets", [])
            logger.debug("Hosted zone %s page %d: %d records", zone_id, page, len(batch))
            records.extend(RecordSet.from_route53(record, visibility) for record in batch)

            if not response.get("IsTruncated"):
                break

            # A fresh cursor replaces the previous one; an identifier is only set
            # for weighted/latency records.
            request = {"HostedZoneId": zone_id}
            for next_field, start_field in CURSOR_FIELDS.items():
                if response.get(next_field):
                    request[start_field] = response[next_field]

        logger.info("Hosted zone %s has %d records", zone_id, len(records))
        return records
