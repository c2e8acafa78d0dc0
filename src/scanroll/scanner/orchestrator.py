"""Aggregation Orchestrator: scan every configured application with fault isolation."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from scanroll.connectors.base import ConnectorSet
from scanroll.exceptions import ApplicationScanError, ConfigurationError
from scanroll.model import AggregateResult, ApplicationResult, ApplicationSpec, ScanError
from scanroll.scanner.application import Clock, scan_application, utc_now
from scanroll.scanner.summary import build_aggregate

logger = logging.getLogger(__name__)


def _check_specs(specs: Sequence[ApplicationSpec]) -> None:
    """Reject misconfigured application lists before any scanning starts."""
    if not specs:
        raise ConfigurationError("No applications configured: at least one application is required")
    for spec in specs:
        if not spec.name.strip():
            raise ConfigurationError("Application names must be non-empty")
        if not spec.platforms:
            raise ConfigurationError(f"Application {spec.name!r} has no source platforms configured")
    duplicates = sorted(name for name, count in Counter(spec.name for spec in specs).items() if count > 1)
    if duplicates:
        raise ConfigurationError(f"Duplicate application names: {', '.join(duplicates)}")


def _scan_one(
    spec: ApplicationSpec,
    connectors: ConnectorSet,
    logger: logging.Logger,
    clock: Clock,
) -> tuple[ApplicationResult, ScanError | None]:
    """Scan one application, converting any failure into a placeholder plus a ``ScanError``."""
    logger.info("Scanning application %s (branch %s)", spec.name, spec.branch)
    try:
        outcome = scan_application(spec, connectors, logger=logger, clock=clock)
        if outcome.failures:
            raise ApplicationScanError(
                spec.name,
                "; ".join(failure.describe() for failure in outcome.failures),
                outcome.failures,
            )
    except ApplicationScanError as exc:
        logger.warning("Application %s failed: %s", spec.name, exc)
        error = ScanError(application_name=spec.name, error=str(exc), failures=exc.failures)
        return ApplicationResult.empty(spec.name, spec.branch, clock()), error
    except Exception as exc:
        logger.warning("Application %s failed unexpectedly: %s", spec.name, exc)
        error = ScanError(application_name=spec.name, error=str(exc) or type(exc).__name__)
        return ApplicationResult.empty(spec.name, spec.branch, clock()), error

    logger.info("Finished application %s: %d findings", spec.name, outcome.result.finding_count)
    return outcome.result, None


def run_all(
    specs: Sequence[ApplicationSpec],
    connectors: ConnectorSet,
    *,
    max_workers: int = 1,
    logger: logging.Logger = logger,
    clock: Clock = utc_now,
) -> AggregateResult:
    """Scan every application and fold the results into one ``AggregateResult``.

    Application failures never abort the run: each failed application is
    represented by an all-empty placeholder result and one ``ScanError``.
    Results keep the configured order regardless of ``max_workers``.

    Raises:
        ConfigurationError: If ``specs`` is empty, has duplicate names, or
            contains an application without platforms.
    """
    specs = tuple(specs)
    _check_specs(specs)
    if max_workers < 1:
        raise ConfigurationError(f"max_workers must be >= 1, got {max_workers}")

    if max_workers == 1 or len(specs) == 1:
        outcomes = [_scan_one(spec, connectors, logger, clock) for spec in specs]
    else:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(specs))) as executor:
            futures = [executor.submit(_scan_one, spec, connectors, logger, clock) for spec in specs]
            outcomes = [future.result() for future in futures]

    applications = [result for result, _ in outcomes]
    errors = [error for _, error in outcomes if error is not None]
    aggregate = build_aggregate(applications, errors, timestamp=clock())
    summary = aggregate.summary
    logger.info(
        "Scanned %d applications: %d succeeded, %d failed, %d findings",
        summary.total_applications,
        summary.successful_applications,
        summary.failed_applications,
        summary.total_findings,
    )
    return aggregate
