"""Run the notation case catalog and emit a pass/fail report."""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path

from mathlist_eval.backend import SympyBackend
from mathlist_eval.cases import CATALOG, results_payload, run_catalog, write_json
from mathlist_eval.tree import TreeBackend


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--json-out",
        default="output/case_report.json",
        help="where to write machine-readable case results",
    )
    parser.add_argument("--backend", choices=("sympy", "tree"), default="sympy")
    args = parser.parse_args()

    backend = SympyBackend() if args.backend == "sympy" else TreeBackend()
    results = run_catalog(backend=backend)
    by_outcome = Counter(case.outcome for case in CATALOG)
    failures = [result for result in results if not result.passed]

    print("Notation case catalog")
    print("---------------------")
    print(f"backend: {args.backend}")
    print(f"total cases: {len(CATALOG)}")
    print("expected outcomes:")
    for key in sorted(by_outcome):
        print(f"  - {key}: {by_outcome[key]}")
    print(f"passed: {len(results) - len(failures)}")
    print(f"failed: {len(failures)}")
    for result in failures:
        print(f"  - {result.id}: got {result.got!r}, expected {result.expected!r}")

    write_json(
        Path(args.json_out),
        {
            "backend": args.backend,
            "total_cases": len(CATALOG),
            "by_expected_outcome": dict(sorted(by_outcome.items())),
            "failed": len(failures),
            "results": results_payload(results),
        },
    )
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
