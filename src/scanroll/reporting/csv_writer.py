"""CSV export writer for aggregated findings."""

from __future__ import annotations

import csv
import io
from pathlib import Path

from scanroll.constants.reporting import CSV_COLUMNS, CSV_FINDINGS_FILENAME
from scanroll.io import write_text_atomic
from scanroll.model import ApplicationResult


def write_csv_findings(out_root: Path, applications: tuple[ApplicationResult, ...]) -> Path:
    """Write findings.csv under the output root and return the path."""
    csv_path = out_root / CSV_FINDINGS_FILENAME
    write_text_atomic(
        path=csv_path,
        content=render_csv_string(applications),
        temp_prefix=".csv_tmp_",
        temp_suffix=".csv",
    )
    return csv_path


def render_csv_string(applications: tuple[ApplicationResult, ...]) -> str:
    """Render one row per finding, in application then finding-set order."""
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(CSV_COLUMNS)
    for application in applications:
        for f in application.iter_findings():
            code = f.code
            dep = f.dependency
            line = code.start_line if code is not None else None
            writer.writerow(
                (
                    application.application_name,
                    f.source_platform,
                    f.category,
                    f.id,
                    f.severity,
                    f.state,
                    f.name,
                    f.rule_id,
                    code.file_path if code is not None else (dep.manifest_path if dep is not None else ""),
                    line if line is not None else "",
                    dep.name if dep is not None else "",
                    dep.version if dep is not None else "",
                    dep.advisory_id if dep is not None else "",
                    f.url,
                )
            )
    return buf.getvalue()
