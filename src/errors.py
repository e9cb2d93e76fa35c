# Copyright 2026 Canonical Ltd.
# See LICENSE file for licensing details.

"""Exceptions raised by the target discovery pipeline.

Every stage wraps the library error it hits into one of these and lets it
propagate; ``main`` is the only place that catches them.
"""


class BlackboxDiscoveryError(Exception):
    """Parent class for all target discovery errors."""


class ConfigValidationError(BlackboxDiscoveryError):
    """The process environment is missing or has an invalid setting."""


class TransportError(BlackboxDiscoveryError):
    """A call to the DNS provider failed."""


class ClientInitError(BlackboxDiscoveryError):
    """The Kubernetes client could not be constructed."""


class TemplateIOError(BlackboxDiscoveryError):
    """The scrape config template could not be read."""


class TemplateParseError(BlackboxDiscoveryError):
    """The scrape config template is not valid YAML or fails validation."""


class TemplateSerializeError(BlackboxDiscoveryError):
    """The merged scrape config could not be serialized."""


class MergeError(BlackboxDiscoveryError):
    """The template has no job for a required target slot."""


class ReconcileError(BlackboxDiscoveryError):
    """Reading, creating or replacing the Prometheus secret failed."""


class NotificationError(BlackboxDiscoveryError):
    """The failure notification could not be delivered."""
