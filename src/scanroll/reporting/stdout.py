"""Stdout reporter for aggregated run results."""

from __future__ import annotations

from scanroll.constants.branding import ASCII_LOGO_LINES, SCAN_SUMMARY_TITLE
from scanroll.constants.platforms import FINDING_SET_KEYS, SUMMARY_TOTAL_FIELDS
from scanroll.constants.reporting import ANSI_GREEN, ANSI_RED, ANSI_RESET, SEVERITY_COLORS
from scanroll.constants.severity import SEVERITIES, SEVERITY_RANK
from scanroll.model import AggregateResult
from scanroll.reporting.filters import OutputFilters, filter_findings
from scanroll.types import Severity

_SET_LABELS: dict[tuple[str, str], str] = dict(
    zip(FINDING_SET_KEYS, ("GitHub code", "GitHub deps", "Azure code", "Azure deps"), strict=True)
)


def _colorize(text: str, color: str) -> str:
    return f"{color}{text}{ANSI_RESET}"


class StdoutReporter:
    """Formats an aggregated run as human-readable stdout output."""

    def __init__(
        self,
        result: AggregateResult,
        *,
        color: bool = True,
        min_severity: Severity | None = None,
        fail_on: Severity | None = None,
        exit_code: int = 0,
    ) -> None:
        self._result = result
        self._color = color
        self._fail_on = fail_on
        self._exit_code = exit_code
        self._filters = OutputFilters(min_severity=min_severity)

    def render(self) -> str:
        """Render the full stdout report as a single string."""
        sections = [self._render_header(), self._render_applications(), self._render_errors()]
        return "\n".join(section for section in sections if section)

    def _color_severity(self, severity: Severity) -> str:
        color = SEVERITY_COLORS.get(severity, "")
        return _colorize(severity, color) if self._color and color else severity

    def _render_header(self) -> str:
        summary = self._result.summary
        sep = "  " + "─" * 38
        failed = str(summary.failed_applications)
        if self._color:
            failed = _colorize(failed, ANSI_RED if summary.failed_applications else ANSI_GREEN)

        lines = [
            "",
            f"  {ASCII_LOGO_LINES[0]}",
            f"  {ASCII_LOGO_LINES[1]}",
            f"  {SCAN_SUMMARY_TITLE}",
            sep,
            "",
            (
                f"  Apps        {summary.total_applications} total / "
                f"{summary.successful_applications} ok / {failed} failed"
            ),
            f"  Findings    {summary.total_findings}",
        ]
        for key in FINDING_SET_KEYS:
            lines.append(f"    {_SET_LABELS[key]:<12}{getattr(summary, SUMMARY_TOTAL_FIELDS[key])}")
        severity_parts = [
            f"{summary.severity_summary.get(severity, 0)} {self._color_severity(severity)}" for severity in SEVERITIES
        ]
        lines.append(f"  Severities  {' · '.join(severity_parts)}")

        verdict = self._render_verdict()
        if verdict is not None:
            lines.append(f"  Verdict     {verdict}")
        lines.append("")
        return "\n".join(lines)

    def _render_applications(self) -> str:
        applications = self._result.applications
        if not applications:
            return ""
        failed = self._result.failed_application_names
        lines = ["  Applications"]
        for application in applications:
            shown = filter_findings(application.iter_findings(), self._filters)
            status = "FAILED" if application.application_name in failed else "ok"
            counts = "  ".join(f"{_SET_LABELS[key]}={len(application.findings_for(*key))}" for key in FINDING_SET_KEYS)
            lines.append(f"    {application.application_name:<25} {status:<6} {counts}")
            for finding in shown:
                lines.append(f"      - [{self._color_severity(finding.severity)}] {finding.name} ({finding.id})")
        lines.append("")
        return "\n".join(lines)

    def _render_errors(self) -> str:
        errors = self._result.errors
        if not errors:
            return ""
        header = "  Errors" if not self._color else _colorize("  Errors", ANSI_RED)
        lines = [header]
        for error in errors:
            lines.append(f"    {error.application_name}: {error.error}")
        lines.append("")
        return "\n".join(lines)

    def _render_verdict(self) -> str | None:
        """Render the CI threshold verdict when ``fail_on`` is configured."""
        if self._fail_on is None:
            return None
        threshold = SEVERITY_RANK[self._fail_on]
        matched = sum(
            count
            for severity, count in self._result.summary.severity_summary.items()
            if SEVERITY_RANK[severity] >= threshold
        )
        clause = f"{matched} finding(s) >= {self._fail_on}" if matched else f"no findings >= {self._fail_on}"
        state = "FAIL" if self._exit_code == 1 else "PASS"
        return f"{state} ({clause})"
