"""
Validation rules for matcher output.

Each rule inspects a PipelineResult and reports whether the wedges keep the
guarantees callers rely on.
"""

from collections import Counter

import numpy as np

from wedgematch.models import CheckResult, Severity, ValidationReport
from wedgematch.tracer import get_tracer, trace


@trace(label="run_validation")
def run_validation(result, curve_map, tolerance=1e-9):
    """
    Run all validation checks on a pipeline result.

    Returns ValidationReport with all check results.
    """
    tracer = get_tracer()

    wedges = result.match.wedges
    checks = [
        check_wedge_shape(wedges),
        check_closed_contours(wedges, tolerance),
        check_consumed_subset(result.match.consumed, curve_map),
        check_consumed_disjoint(wedges, result.match.consumed),
        check_match_coverage(result),
    ]

    report = ValidationReport(checks=checks)
    tracer.event(f"Validation complete: {report.error_count} errors, {report.warning_count} warnings")

    return report


def check_wedge_shape(wedges):
    """Every wedge is three curves of four points."""
    malformed = [
        w.wedge_id for w in wedges
        if len(w.curves) != 3 or any(len(c) != 4 for c in w.curves)
    ]

    if malformed:
        return CheckResult(
            rule_id="wedge_shape",
            severity=Severity.ERROR,
            passed=False,
            message=f"{len(malformed)} wedges are not three 4-point curves",
            evidence={"wedges": malformed},
        )

    return CheckResult(
        rule_id="wedge_shape",
        severity=Severity.ERROR,
        passed=True,
        message="All wedges consist of three 4-point curves",
    )


def check_closed_contours(wedges, tolerance=1e-9):
    """The end of every curve coincides with the start of the next one."""
    open_wedges = []

    for wedge in wedges:
        curves = wedge.curves
        for i, curve in enumerate(curves):
            following = curves[(i + 1) % len(curves)]
            gap = np.subtract(curve[-1], following[0])
            if float(np.dot(gap, gap)) > tolerance:
                open_wedges.append(wedge.wedge_id)
                break

    if open_wedges:
        return CheckResult(
            rule_id="closed_contours",
            severity=Severity.ERROR,
            passed=False,
            message=f"{len(open_wedges)} wedges do not form a closed contour",
            evidence={"wedges": open_wedges},
        )

    return CheckResult(
        rule_id="closed_contours",
        severity=Severity.ERROR,
        passed=True,
        message="All wedges form closed contours",
    )


def check_consumed_subset(consumed, curve_map):
    """Consumed identifiers all come from the curve map."""
    unknown = [path_id for path_id in consumed if path_id not in curve_map]

    if unknown:
        return CheckResult(
            rule_id="consumed_subset",
            severity=Severity.ERROR,
            passed=False,
            message=f"{len(unknown)} consumed ids are not curves of the input",
            evidence={"ids": [str(p) for p in unknown]},
        )

    return CheckResult(
        rule_id="consumed_subset",
        severity=Severity.ERROR,
        passed=True,
        message="Consumed ids are a subset of the input curves",
        evidence={"consumed": len(consumed), "curves": len(curve_map)},
    )


def check_consumed_disjoint(wedges, consumed):
    """No path is used by two wedges and consumed matches the wedge members."""
    counts = Counter(path_id for w in wedges for path_id in w.path_ids)
    shared = [str(path_id) for path_id, n in counts.items() if n > 1]
    mismatch = set(counts) != set(consumed)

    if shared or mismatch:
        return CheckResult(
            rule_id="consumed_disjoint",
            severity=Severity.ERROR,
            passed=False,
            message="Wedges share paths or disagree with the consumed set",
            evidence={"shared": shared, "mismatch": mismatch},
        )

    return CheckResult(
        rule_id="consumed_disjoint",
        severity=Severity.ERROR,
        passed=True,
        message="Every consumed path belongs to exactly one wedge",
    )


def check_match_coverage(result):
    """Warn when there were enough curves for a wedge but none was found."""
    num_curves = len(result.curve_ids)
    num_wedges = len(result.match.wedges)

    if num_curves >= 3 and num_wedges == 0:
        return CheckResult(
            rule_id="match_coverage",
            severity=Severity.WARN,
            passed=False,
            message=f"No wedges found among {num_curves} curves; check the classifier threshold",
            evidence={"curves": num_curves, "lines": len(result.line_ids)},
        )

    return CheckResult(
        rule_id="match_coverage",
        severity=Severity.WARN,
        passed=True,
        message=f"{num_wedges} wedges cover {len(result.match.consumed)} of {num_curves} curves",
        evidence={"unmatched": len(result.unmatched)},
    )
