# Copyright 2026 Canonical Ltd.
# See LICENSE file for licensing details.

import base64
from typing import Dict, Tuple

import boto3
import pytest
from botocore.stub import Stubber
from kubernetes.client.rest import ApiException

from models import RecordSet, Settings, ZoneVisibility

TEMPLATE_YAML = """
- honor_timestamps: true
  job_name: blackbox
  metrics_path: /probe
  params:
    module:
    - http_2xx
  relabel_configs:
  - source_labels:
    - __address__
    target_label: __param_target
  - target_label: __address__
    replacement: blackbox-exporter:9115
  scheme: http
  scrape_interval: 60s
  scrape_timeout: 10s
  static_configs:
  - targets:
    - placeholder
    labels:
      module: http_2xx
- job_name: bind-a
  metrics_path: /probe
  params:
    module:
    - dns_soa
  static_configs:
  - targets: []
    labels:
      module: dns_soa
- job_name: bind-b
  metrics_path: /probe
  params:
    module:
    - dns_soa
  static_configs:
  - targets:
    - untouched
    labels:
      module: dns_soa
"""

BASE_ENVIRON = {
    "PUBLIC_HOSTED_ZONE_ID": "ZPUBLIC",
    "PRIVATE_HOSTED_ZONE_ID": "ZPRIVATE",
    "PROMETHEUS_NAMESPACE": "monitoring",
    "PROMETHEUS_SECRET_NAME": "blackbox-scrape-config",
    "MATTERMOST_ALERTS_HOOK": "https://mattermost.example.com/hooks/abc",
}


class FakeCoreV1Api:
    """In-memory stand-in for the secret calls of CoreV1Api."""

    def __init__(self):
        self.secrets: Dict[Tuple[str, str], object] = {}
        self.calls = []

    def read_namespaced_secret(self, name, namespace):
        self.calls.append(("read", namespace, name))
        if (namespace, name) not in self.secrets:
            raise ApiException(status=404, reason="Not Found")
        return self.secrets[(namespace, name)]

    def create_namespaced_secret(self, namespace, body):
        self.calls.append(("create", namespace, body.metadata.name))
        if (namespace, body.metadata.name) in self.secrets:
            raise ApiException(status=409, reason="AlreadyExists")
        self.secrets[(namespace, body.metadata.name)] = body
        return body

    def replace_namespaced_secret(self, name, namespace, body):
        self.calls.append(("replace", namespace, name))
        self.secrets[(namespace, name)] = body
        return body

    def payload(self, namespace, name, key="scrape_config_secret.yaml") -> bytes:
        return base64.b64decode(self.secrets[(namespace, name)].data[key])


@pytest.fixture
def make_record():
    def _make(name, visibility=ZoneVisibility.PUBLIC, type_="CNAME") -> RecordSet:
        return RecordSet(name=name, type=type_, visibility=visibility)

    return _make


@pytest.fixture
def template_yaml():
    return TEMPLATE_YAML


@pytest.fixture
def template_path(tmp_path):
    path = tmp_path / "scrapeconfig.yml"
    path.write_text(TEMPLATE_YAML)
    return path


@pytest.fixture
def environ(template_path):
    return {**BASE_ENVIRON, "SCRAPE_CONFIG_TEMPLATE": str(template_path)}


@pytest.fixture
def settings(environ):
    return Settings.from_environ(environ)


@pytest.fixture
def core_api():
    return FakeCoreV1Api()


@pytest.fixture
def route53_client():
    return boto3.client(
        "route53",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def stubber(route53_client):
    with Stubber(route53_client) as stub:
        yield stub
        stub.assert_no_pending_responses()
