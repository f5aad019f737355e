#!/usr/bin/env python3
"""
Run the project's quality gates and write a JSON report to artifacts/.

Usage: scripts/run_quality_gates.py [gate ...]
"""

import datetime
import json
import subprocess
import sys
from dataclasses import asdict, dataclass
from pathlib import Path

ARTIFACTS_DIR = Path("artifacts")
REPORT_PATH = ARTIFACTS_DIR / "quality_gates_run.json"
PY = sys.executable


@dataclass(frozen=True)
class Gate:
    name: str
    command: tuple[str, ...]


@dataclass(frozen=True)
class GateResult:
    name: str
    passed: bool
    exit_code: int
    stdout: str
    stderr: str
    command: tuple[str, ...]


GATES = (
    Gate("lint", (PY, "-m", "ruff", "check", ".")),
    Gate("format", (PY, "-m", "ruff", "format", "--check", ".")),
    Gate("types", (PY, "-m", "mypy", "tokengraph")),
    Gate(
        "tests",
        (
            PY,
            "-m",
            "pytest",
            "-q",
            "--json-report",
            f"--json-report-file={ARTIFACTS_DIR / 'pytest-report.json'}",
        ),
    ),
    # Bundled sample dataset must ingest end to end
    Gate("sample", (PY, "-m", "tokengraph.app_shell.cli", "diagnostics")),
)


def run_gate(gate: Gate) -> GateResult:
    print(f"[{gate.name}] {' '.join(gate.command)}", end=" ... ", flush=True)
    try:
        proc = subprocess.run(gate.command, capture_output=True, text=True, check=False)
    except OSError as e:
        print("ERROR")
        return GateResult(gate.name, False, -1, "", str(e), gate.command)

    passed = proc.returncode == 0
    print("PASS" if passed else "FAIL")
    return GateResult(gate.name, passed, proc.returncode, proc.stdout, proc.stderr, gate.command)


def write_report(results: list[GateResult]) -> None:
    report = {
        "timestamp_utc": datetime.datetime.now(datetime.UTC).isoformat(),
        "overall_status": "pass" if all(r.passed for r in results) else "fail",
        "gates": {r.name: asdict(r) for r in results},
    }
    ARTIFACTS_DIR.mkdir(exist_ok=True)
    REPORT_PATH.write_text(json.dumps(report, indent=2), encoding="utf-8")
    print(f"\nReport written to: {REPORT_PATH}")


def main(selected: list[str]) -> int:
    by_name = {gate.name: gate for gate in GATES}
    unknown = sorted(set(selected) - set(by_name))
    if unknown:
        print(f"Unknown gates: {', '.join(unknown)} (available: {', '.join(by_name)})")
        return 2

    gates = [by_name[name] for name in selected] if selected else list(GATES)
    results = [run_gate(gate) for gate in gates]

    try:
        write_report(results)
    except OSError as e:
        print(f"Could not write report: {e}")
        return 2

    failed = [r for r in results if not r.passed]
    for result in failed:
        print(f"\n--- {result.name} failed (exit code {result.exit_code}) ---")
        for label, stream in (("stdout", result.stdout), ("stderr", result.stderr)):
            if stream.strip():
                print(f"{label}:\n{stream}")

    print("\nAll quality gates passed." if not failed else f"\n{len(failed)} gate(s) failed.")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
