"""HTML report renderer for aggregated and single-application results."""

from __future__ import annotations

from html import escape

from scanroll.constants.branding import REPORT_TITLE
from scanroll.constants.platforms import CATEGORY_LABELS, FINDING_SET_KEYS, PLATFORM_LABELS, PLATFORMS
from scanroll.constants.reporting import HTML_SEVERITY_COLORS
from scanroll.constants.severity import SEVERITIES
from scanroll.model import AggregateResult, ApplicationResult, Finding, ScanError, Summary

_BOLD_SEVERITIES = ("critical", "high")

_SEVERITY_CSS = "\n".join(
    f"      .severity-{severity} {{ color: {color};{' font-weight: bold;' if severity in _BOLD_SEVERITIES else ''} }}"
    for severity, color in HTML_SEVERITY_COLORS.items()
)

_STYLE = f"""
      body {{ font-family: Arial, sans-serif; margin: 20px; }}
      .header {{ background-color: #f5f5f5; padding: 20px; border-radius: 5px; }}
      .summary {{ display: flex; flex-wrap: wrap; gap: 20px; margin: 20px 0; }}
      .summary-card {{ border: 1px solid #ddd; border-radius: 5px; padding: 15px; flex: 1; min-width: 200px; }}
      .summary-card h3 {{ margin-top: 0; }}
      table {{ width: 100%; border-collapse: collapse; margin: 20px 0; }}
      th, td {{ border: 1px solid #ddd; padding: 8px; text-align: left; vertical-align: top; }}
      th {{ background-color: #f2f2f2; }}
      .results-table {{ margin: 30px 0; }}
      .tool-section {{ margin: 40px 0; }}
      .error-section {{ border-left: 4px solid #b30000; padding-left: 15px; margin: 30px 0; }}
      .details-row.hidden {{ display: none; }}
      .details-panel {{ display: grid; grid-template-columns: repeat(auto-fill, minmax(260px, 1fr)); gap: 8px; }}
      pre {{ background: #f7f7f7; padding: 8px; overflow-x: auto; }}
      h2 {{ color: #333; border-bottom: 2px solid #eee; padding-bottom: 10px; }}
{_SEVERITY_CSS}
"""

_TOGGLE_SCRIPT = """
    <script>
      function toggleRowDetails(button) {
        const details = button.closest("tr").nextElementSibling;
        details.classList.toggle("hidden");
        button.textContent = details.classList.contains("hidden") ? "Expand" : "Collapse";
      }
    </script>"""


def render_html_report(result: AggregateResult | ApplicationResult) -> str:
    """Render a complete HTML document for a run or a single application.

    A bare ``ApplicationResult``, or an ``AggregateResult`` holding exactly
    one application and no errors, uses the single-application layout.
    """
    if isinstance(result, ApplicationResult):
        return _render_single(result)
    if len(result.applications) == 1 and not result.errors:
        return _render_single(result.applications[0])
    return _render_multi(result)


def _document(title: str, body: str, *, script: str = "") -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>{escape(title)}</title>
    <style>{_STYLE}    </style>
  </head>
  <body>
{body}{script}
  </body>
</html>
"""


def _severity_cell(severity: str) -> str:
    return f'<td class="severity severity-{escape(severity)}">{escape(severity.upper())}</td>'


def _severity_counts(findings: tuple[Finding, ...]) -> dict[str, int]:
    counts = dict.fromkeys(SEVERITIES, 0)
    for finding in findings:
        counts[finding.severity] += 1
    return counts


def _summary_card(title: str, lines: list[str]) -> str:
    inner = "".join(f"<p>{line}</p>" for line in lines)
    return f'      <div class="summary-card"><h3>{escape(title)}</h3>{inner}</div>\n'


def _set_title(key: tuple[str, str]) -> str:
    platform, category = key
    return f"{PLATFORM_LABELS[platform]} {CATEGORY_LABELS[category]}"


def _results_table(findings: tuple[Finding, ...], title: str) -> str:
    if not findings:
        return f"<p>No {escape(title)} results found</p>"
    rows = "".join(
        "<tr>"
        f"<td>{escape(finding.id)}</td>"
        f"<td>{escape(finding.name)}</td>"
        f"{_severity_cell(finding.severity)}"
        f"<td>{escape(finding.description)}</td>"
        f"<td>{escape(finding.state)}</td>"
        f"<td>{escape(finding.tool_name)}</td>"
        "</tr>\n"
        for finding in findings
    )
    return (
        f'<div class="results-table"><h4>{escape(title)}</h4>\n'
        "<table><thead><tr><th>ID</th><th>Name</th><th>Severity</th><th>Description</th>"
        "<th>State</th><th>Tool</th></tr></thead>\n"
        f"<tbody>\n{rows}</tbody></table></div>"
    )


def _render_single(application: ApplicationResult) -> str:
    name = escape(application.application_name)
    cards = ""
    for key in FINDING_SET_KEYS:
        findings = application.findings_for(*key)
        counts = _severity_counts(findings)
        lines = [f"<strong>Total:</strong> {len(findings)}"]
        lines.extend(f"{severity.capitalize()}: {counts[severity]}" for severity in SEVERITIES)
        cards += _summary_card(_set_title(key), lines)

    sections = ""
    for platform in PLATFORMS:
        tables = "\n".join(
            _results_table(application.findings_for(*key), _set_title(key))
            for key in FINDING_SET_KEYS
            if key[0] == platform
        )
        sections += (
            f'    <div class="tool-section"><h2>{escape(PLATFORM_LABELS[platform])} Results</h2>\n'
            f"{tables}\n    </div>\n"
        )

    body = (
        '    <div class="header">\n'
        f"      <h1>{escape(REPORT_TITLE)}</h1>\n"
        f"      <p><strong>Application:</strong> {name}</p>\n"
        f"      <p><strong>Branch:</strong> {escape(application.branch_name)}</p>\n"
        f"      <p><strong>Generated:</strong> {escape(application.timestamp.isoformat())}</p>\n"
        "    </div>\n"
        f'    <div class="summary">\n{cards}    </div>\n'
        f"{sections}"
    )
    return _document(f"{REPORT_TITLE} - {application.application_name}", body)


def _overall_summary(summary: Summary) -> str:
    cards = [
        ("Total Applications", summary.total_applications),
        ("Successfully Processed", summary.successful_applications),
        ("Failed Applications", summary.failed_applications),
        ("GitHub Code Issues", summary.total_github_code_scanning_issues),
        ("GitHub Dependency Issues", summary.total_github_dependency_scanning_issues),
        ("Azure DevOps Code Issues", summary.total_azure_devops_code_scanning_issues),
        ("Azure DevOps Dependency Issues", summary.total_azure_devops_dependency_scanning_issues),
        ("Total Findings", summary.total_findings),
    ]
    overall = "".join(_summary_card(title, [f"<strong>{count}</strong>"]) for title, count in cards)
    severity = "".join(
        _summary_card(severity.capitalize(), [f'<strong class="severity-{severity}">{count}</strong>'])
        for severity, count in summary.severity_summary.items()
    )
    return (
        '    <div class="overall-summary"><h2>Overall Summary</h2>\n'
        f'    <div class="summary">\n{overall}    </div></div>\n'
        '    <div class="severity-summary"><h2>Severity Summary</h2>\n'
        f'    <div class="summary">\n{severity}    </div></div>\n'
    )


def _error_section(errors: tuple[ScanError, ...]) -> str:
    if not errors:
        return ""
    items = "".join(
        '      <div class="error-item">'
        f"<h3>Application: {escape(error.application_name)}</h3>"
        f"<p><strong>Error:</strong> {escape(error.error)}</p></div>\n"
        for error in errors
    )
    return (
        '    <div class="error-section"><h2>Application Errors</h2>\n'
        f'    <div class="error-list">\n{items}    </div></div>\n'
    )


def _detail_items(finding: Finding) -> list[tuple[str, str]]:
    items: list[tuple[str, str]] = [("ID", finding.id), ("Description", finding.description)]
    if finding.url:
        items.append(("URL", finding.url))
    if finding.rule_id:
        items.append(("Rule", f"{finding.rule_id} {finding.rule_name}".strip()))
    if finding.tool_name:
        items.append(("Tool", f"{finding.tool_name} {finding.tool_version}".strip()))
    if finding.cwes:
        items.append(("CWEs", ", ".join(finding.cwes)))
    code = finding.code
    if code is not None:
        location = code.file_path
        if code.start_line is not None:
            location += f":{code.start_line}"
            if code.end_line is not None and code.end_line != code.start_line:
                location += f"-{code.end_line}"
        items.append(("Location", location))
    dep = finding.dependency
    if dep is not None:
        package = f"{dep.ecosystem}:{dep.name}" if dep.ecosystem else dep.name
        items.append(("Package", f"{package} {dep.version}".strip()))
        if dep.fixed_version:
            items.append(("Fixed Version", dep.fixed_version))
        if dep.advisory_id or dep.cve_id:
            items.append(("Advisory", " / ".join(value for value in (dep.advisory_id, dep.cve_id) if value)))
        if dep.cvss is not None:
            items.append(("CVSS", f"{dep.cvss:g}"))
    return items


def _findings_table(applications: tuple[ApplicationResult, ...]) -> str:
    rows: list[str] = []
    for application in applications:
        for (platform, category), findings in application.finding_sets.items():
            for finding in findings:
                details = "".join(
                    f'<div class="detail-item"><strong>{escape(label)}:</strong> {escape(value)}</div>'
                    for label, value in _detail_items(finding)
                )
                if finding.code is not None and finding.code.snippet:
                    details += f'<div class="detail-item"><pre>{escape(finding.code.snippet)}</pre></div>'
                rows.append(
                    "<tr>"
                    f"<td>{escape(application.application_name)}</td>"
                    f"<td>{escape(CATEGORY_LABELS[category])}</td>"
                    f"<td>{escape(PLATFORM_LABELS[platform])}</td>"
                    f"{_severity_cell(finding.severity)}"
                    f"<td>{escape(finding.name)}</td>"
                    f"<td>{escape(finding.state)}</td>"
                    '<td><button class="expand-btn" onclick="toggleRowDetails(this)">Expand</button></td>'
                    "</tr>\n"
                    '<tr class="details-row hidden"><td colspan="7" class="details-content">'
                    f'<div class="details-panel">{details}</div></td></tr>\n'
                )
    if not rows:
        return (
            '    <div class="vulnerabilities-table-container"><h2>Security Issues Summary</h2>'
            "<p>No findings</p></div>\n"
        )
    return (
        '    <div class="vulnerabilities-table-container"><h2>Security Issues Summary</h2>\n'
        '    <table class="material-table"><thead><tr><th>Application</th><th>Type</th><th>Tool</th>'
        "<th>Severity</th><th>Name</th><th>Status</th><th>Expand</th></tr></thead>\n"
        f"    <tbody>\n{''.join(rows)}    </tbody></table></div>\n"
    )


def _render_multi(result: AggregateResult) -> str:
    names = ", ".join(application.application_name for application in result.applications)
    body = (
        '    <div class="header">\n'
        f"      <h1>{escape(REPORT_TITLE)}</h1>\n"
        f"      <p><strong>Applications:</strong> {escape(names)}</p>\n"
        f"      <p><strong>Generated:</strong> {escape(result.timestamp.isoformat())}</p>\n"
        "    </div>\n"
        f"{_overall_summary(result.summary)}"
        f"{_error_section(result.errors)}"
        f"{_findings_table(result.applications)}"
    )
    return _document(f"{REPORT_TITLE} - Multiple Applications", body, script=_TOGGLE_SCRIPT)
