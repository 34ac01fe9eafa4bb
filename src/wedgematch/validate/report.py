"""
Report generation for matcher runs.

Writes the match result and its validation checks as JSON plus a short
human-readable summary.
"""

import os

from wedgematch.io.artifacts import ensure_dir, save_json
from wedgematch.tracer import get_tracer, trace


@trace(label="generate_report")
def generate_report(result, out_dir):
    """
    Write report files for a PipelineResult.

    Creates:
    - match_result.json: wedges, consumed ids, lines and unmatched curves
    - validation_report.json: full check results
    - validation_summary.txt: human-readable summary

    Returns:
        (result path, report path, summary path)
    """
    tracer = get_tracer()

    ensure_dir(out_dir)

    result_path = os.path.join(out_dir, "match_result.json")
    save_json(result, result_path)

    report = result.validation
    report_path = os.path.join(out_dir, "validation_report.json")
    save_json(report, report_path)

    failed = [c for c in report.checks if not c.passed]

    summary_lines = ["Wedge Match Report", "=" * 40, ""]
    summary_lines.append(f"Curves: {len(result.curve_ids)}")
    summary_lines.append(f"Lines: {len(result.line_ids)}")
    summary_lines.append(f"Wedges: {len(result.match.wedges)}")
    summary_lines.append(f"Unmatched curves: {len(result.unmatched)}")
    summary_lines.append(f"Rescan threshold: {result.match.max_dist:.4f}")
    summary_lines.append("")

    if failed:
        summary_lines.append("ISSUES:")
        summary_lines.append("-" * 40)
        for check in failed:
            summary_lines.append(f"{format_check_result(check)}")
        summary_lines.append("")

    summary_lines.append("ALL CHECKS:")
    summary_lines.append("-" * 40)
    for check in report.checks:
        summary_lines.append(format_check_result(check))

    summary_path = os.path.join(out_dir, "validation_summary.txt")
    with open(summary_path, "w", encoding="utf-8") as f:
        f.write("\n".join(summary_lines) + "\n")

    tracer.event(f"Report saved: {len(report.checks)} checks, {report.error_count} errors")

    return result_path, report_path, summary_path


def format_check_result(check):
    """Format a single check result for display."""
    status = "PASS" if check.passed else "FAIL"
    severity = check.severity.value.upper()
    return f"[{status}][{severity}] {check.rule_id}: {check.message}"
