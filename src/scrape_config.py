# Copyright 2026 Canonical Ltd.
# See LICENSE file for licensing details.

"""Load the scrape config template, inject targets into it and serialize it back."""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

import yaml
from pydantic import ValidationError

from errors import MergeError, TemplateIOError, TemplateParseError, TemplateSerializeError
from models import ScrapeConfiguration, ScrapeJob

logger = logging.getLogger(__name__)


def parse_template(text: str) -> ScrapeConfiguration:
    """Parse YAML text into a validated scrape configuration."""
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise TemplateParseError(f"Scrape config template is invalid YAML: {e}") from e

    if not isinstance(document, list):
        raise TemplateParseError("Scrape config template must be a list of scrape jobs")

    try:
        return ScrapeConfiguration.model_validate(document)
    except ValidationError as e:
        raise TemplateParseError(f"Scrape config template failed validation: {e}") from e


def load_template(path: Path) -> ScrapeConfiguration:
    """Read and parse the scrape config template at `path`."""
    logger.info("Reading scrape config template %s", path)
    try:
        text = Path(path).read_text()
    except OSError as e:
        raise TemplateIOError(f"Error reading scrape config template {path}: {e}") from e
    return parse_template(text)


def _job_by_name(configuration: ScrapeConfiguration, job_name: str) -> ScrapeJob:
    for job in configuration:
        if job.job_name == job_name:
            return job
    raise MergeError(f"Scrape config template has no job named {job_name!r}")


def _slot_jobs(
    configuration: ScrapeConfiguration,
    bind_servers: Sequence[str],
    targets_job: Optional[str],
    bind_server_jobs: Sequence[str],
) -> List[ScrapeJob]:
    """Return the jobs receiving the targets, then one job per bind server."""
    if bind_server_jobs and len(bind_server_jobs) != len(bind_servers):
        raise MergeError(
            f"{len(bind_servers)} bind servers but {len(bind_server_jobs)} bind server jobs"
        )

    required = 1 + len(bind_servers)
    if not bind_server_jobs and len(configuration) < required:
        raise MergeError(
            f"Scrape config template has {len(configuration)} jobs, {required} are required"
        )

    slots = [_job_by_name(configuration, targets_job) if targets_job else configuration[0]]
    for i in range(len(bind_servers)):
        if bind_server_jobs:
            slots.append(_job_by_name(configuration, bind_server_jobs[i]))
        else:
            slots.append(configuration[i + 1])

    names = [job.job_name for job in slots]
    if len({id(job) for job in slots}) != len(slots) or len(set(names)) != len(names):
        raise MergeError(f"Scrape jobs {names} overlap; each slot needs its own job")
    return slots


def merge(
    template: ScrapeConfiguration,
    targets: Sequence[str],
    bind_servers: Sequence[str],
    targets_job: Optional[str] = None,
    bind_server_jobs: Sequence[str] = (),
) -> ScrapeConfiguration:
    """Return a copy of `template` with the targets injected.

    By default the targets go into the first job and bind server `i` into job
    `i + 1`. Passing `targets_job` and/or `bind_server_jobs` binds those slots
    by job name instead. Only `static_configs[0].targets` of a slot job is
    replaced; every other field comes from the template unchanged.

    Raises:
        MergeError: if a slot job is missing, shared by two slots or has no static config.
    """
    merged = template.model_copy(deep=True)
    slots = _slot_jobs(merged, bind_servers, targets_job, bind_server_jobs)
    values = [list(targets)] + [[bind_server] for bind_server in bind_servers]

    for job, job_targets in zip(slots, values):
        if not job.static_configs:
            raise MergeError(f"Scrape job {job.job_name!r} has no static_configs to fill")
        job.static_configs[0].targets = job_targets
        logger.info("Set %d targets on scrape job %s", len(job_targets), job.job_name)

    return merged


def dump(configuration: ScrapeConfiguration) -> str:
    """Serialize the configuration to YAML, emitting only the fields the template set."""
    try:
        return yaml.safe_dump(
            configuration.model_dump(mode="json", exclude_unset=True),
            sort_keys=False,
            default_flow_style=False,
        )
    except yaml.YAMLError as e:
        raise TemplateSerializeError(f"Error serializing scrape config: {e}") from e
