from __future__ import annotations

from ..models.config_models import ExtensionConfig
from ..models.validation import IssueKind, ValidationReport

"""Human readable rendering of a ValidationReport.

The text groups problems by folder and lists the offending files, so the
operator can fix the asset tree without re-running diagnostics.
"""

__all__ = [
    "format_issue_report",
]

_KIND_LABELS = {
    IssueKind.MISSING_MODEL: "Missing models",
    IssueKind.MULTIPLE_MODELS: "Multiple models",
    IssueKind.MISSING_IMAGE: "Missing images",
    IssueKind.MULTIPLE_IMAGES: "Multiple images",
}


def format_issue_report(report: ValidationReport, extensions: ExtensionConfig | None = None) -> str:
    """Render the per-folder issue list followed by per-kind totals.

    Example:
        >>> from plate_ingest.models.validation import FolderIssue, ValidationIssue
        >>> issue = FolderIssue("7", "/assets/7", 2, 1, ("a.step", "b.step"), ("p.png",),
        ...     (ValidationIssue(IssueKind.MULTIPLE_MODELS, "7", "Multiple model files found: a.step, b.step"),))
        >>> text = format_issue_report(ValidationReport(False, 1, 0, (issue,)))
        >>> "7: models=2 images=1" in text
        True
    """
    extensions = extensions or ExtensionConfig()
    lines = [
        f"Model folder validation failed: {report.invalid_folders} of {report.total_folders} folder(s) invalid",
        "",
    ]
    for issue in report.issues:
        lines.append(f"[x] {issue.folder_name}: models={issue.model_count} images={issue.image_count}")
        for problem in issue.problems:
            lines.append(f"    - [{problem.kind.value}] {problem.detail}")
        lines.append("")

    counts = report.counts_by_kind()
    lines.append("Summary:")
    for kind, label in _KIND_LABELS.items():
        lines.append(f"  {label}: {counts[kind]}")
    lines.append("")
    lines.append("Each plate folder must contain exactly:")
    lines.append(f"  1 model file ({', '.join(sorted(extensions.model))})")
    lines.append(f"  1 preview image ({', '.join(sorted(extensions.image))})")
    return "\n".join(lines)
