from __future__ import annotations

import json
import sys
from pathlib import Path

from genorisk.services.pipeline.analysis_pipeline import analyze_content, parse_drug_list
from .parser import VcfValidationError


def _option(argv: list[str], name: str) -> str | None:
    if name not in argv:
        return None
    idx = argv.index(name)
    if idx + 1 >= len(argv):
        raise ValueError(f"{name} requires an argument")
    return argv[idx + 1]


def main(argv: list[str]) -> int:
    if len(argv) < 2 or "--help" in argv:
        print("Usage: python -m genorisk.services.vcf <path-to.vcf> [--drugs CODEINE,WARFARIN] [--patient-id ID]")
        return 0

    path = Path(argv[1])
    if not path.exists():
        print(f"File not found: {path}")
        return 2

    try:
        drugs = parse_drug_list(_option(argv, "--drugs"))
        patient_id = _option(argv, "--patient-id") or path.stem
    except ValueError as e:
        print(f"Error: {e}")
        return 2

    content = path.read_bytes()
    try:
        report = analyze_content(content, drugs, patient_id, filename=path.name)
    except VcfValidationError as e:
        print(f"VCF rejected: {e}")
        for err in e.errors:
            print(f"  - {err}")
        return 1

    payload = {
        "is_valid": report.is_valid,
        "parse_errors": report.parse_errors,
        "results": [r.model_dump(mode="json") for r in report.results],
    }
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
