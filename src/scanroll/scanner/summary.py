"""Summary fold over completed application results."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from datetime import UTC, datetime

from scanroll.constants.platforms import FINDING_SET_KEYS, SUMMARY_TOTAL_FIELDS
from scanroll.constants.severity import FINDING_STATES, SEVERITIES
from scanroll.model import AggregateResult, ApplicationResult, ScanError, Summary


def compute_summary(applications: Iterable[ApplicationResult], errors: Iterable[ScanError]) -> Summary:
    """Fold every finding of every application into run-level totals.

    Only counters are accumulated, so the result does not depend on the
    order of ``applications``.
    """
    applications = tuple(applications)
    failed_names = {error.application_name for error in errors}

    set_totals: Counter[tuple[str, str]] = Counter()
    severities: Counter[str] = Counter()
    states: Counter[str] = Counter()
    for application in applications:
        for key in FINDING_SET_KEYS:
            findings = application.findings_for(*key)
            set_totals[key] += len(findings)
            for finding in findings:
                severities[finding.severity] += 1
                states[finding.state] += 1

    failed = sum(1 for application in applications if application.application_name in failed_names)
    return Summary(
        total_applications=len(applications),
        successful_applications=len(applications) - failed,
        failed_applications=failed,
        total_findings=sum(set_totals.values()),
        severity_summary={severity: severities[severity] for severity in SEVERITIES},
        counts_by_state={state: states[state] for state in FINDING_STATES},
        **{SUMMARY_TOTAL_FIELDS[key]: set_totals[key] for key in FINDING_SET_KEYS},
    )


def build_aggregate(
    applications: Iterable[ApplicationResult],
    errors: Iterable[ScanError],
    timestamp: datetime | None = None,
) -> AggregateResult:
    """Build an ``AggregateResult`` whose summary is derived from its contents."""
    applications = tuple(applications)
    errors = tuple(errors)
    return AggregateResult(
        applications=applications,
        errors=errors,
        summary=compute_summary(applications, errors),
        timestamp=timestamp if timestamp is not None else datetime.now(UTC),
    )
