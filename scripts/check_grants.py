#!/usr/bin/env python3
# scripts/check_grants.py
"""Pre-commit hook to validate grants JSON files before they ship."""
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rolecheck import validate_grants  # noqa: E402


def check_file(filepath: Path) -> tuple[bool, list[str]]:
    """Check a grants file for unusable roles and patterns."""
    try:
        data = json.loads(filepath.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        return False, [f"Error reading file: {e}"]

    return validate_grants(data)


def main(argv=None):
    """Main pre-commit check."""
    paths = sys.argv[1:] if argv is None else argv
    if not paths:
        print("Usage: check_grants.py <file> [file ...]")
        return 0

    all_passed = True

    for filepath in paths:
        path = Path(filepath)

        # Only check JSON grants files
        if path.suffix != ".json":
            continue

        passed, issues = check_file(path)

        if not passed:
            all_passed = False
            print(f"\n❌ GRANTS: Invalid grants table in {filepath}")
            for issue in issues:
                print(f"   {issue}")

    if not all_passed:
        print("\n" + "=" * 80)
        print("⚠️  INVALID GRANTS DETECTED")
        print("=" * 80)
        print("Every role must map to a list of non-empty glob patterns.")
        print("=" * 80)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
