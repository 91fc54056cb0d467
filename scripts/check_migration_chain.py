"""Static checks for the Alembic revision files.

Usage:
    python scripts/check_migration_chain.py

Checks:
- every revision id is unique and matches its file name prefix
- there is exactly one root (down_revision = None)
- every down_revision points at a known revision
- the chain has exactly one head and reaches every revision
"""

from __future__ import annotations

import re
import sys
from pathlib import Path


REVISION_RE = re.compile(r'^revision\s*=\s*["\']([^"\']+)["\']', re.MULTILINE)
DOWN_RE = re.compile(r'^down_revision\s*=\s*(.+)$', re.MULTILINE)


def _parse_down(raw: str) -> str | None:
    raw = raw.strip()
    if raw in {"None", ""}:
        return None
    return raw.strip("'\"")


def collect(versions_dir: Path) -> tuple[dict[str, str | None], list[str]]:
    parents: dict[str, str | None] = {}
    errors: list[str] = []
    for path in sorted(versions_dir.glob("*.py")):
        text = path.read_text(encoding="utf-8")
        rev_match = REVISION_RE.search(text)
        if not rev_match:
            errors.append(f"{path.name}: no revision id")
            continue
        rev = rev_match.group(1)
        if rev in parents:
            errors.append(f"{path.name}: duplicate revision id {rev}")
        if not path.name.startswith(rev):
            errors.append(f"{path.name}: file name does not start with revision id {rev}")
        down_match = DOWN_RE.search(text)
        parents[rev] = _parse_down(down_match.group(1)) if down_match else None
    return parents, errors


def validate(parents: dict[str, str | None]) -> list[str]:
    errors: list[str] = []
    roots = [rev for rev, down in parents.items() if down is None]
    if len(roots) != 1:
        errors.append(f"expected one root revision, found {roots}")

    for rev, down in parents.items():
        if down is not None and down not in parents:
            errors.append(f"{rev}: unknown down_revision {down}")

    children = {down for down in parents.values() if down is not None}
    heads = [rev for rev in parents if rev not in children]
    if len(heads) != 1:
        errors.append(f"expected one head revision, found {heads}")
        return errors

    seen = set()
    current = heads[0]
    while current is not None and current not in seen:
        seen.add(current)
        current = parents.get(current)
    unreachable = sorted(set(parents) - seen)
    if unreachable:
        errors.append(f"revisions not reachable from head: {unreachable}")
    return errors


def main() -> int:
    versions_dir = Path(__file__).resolve().parents[1] / "alembic" / "versions"
    parents, errors = collect(versions_dir)
    errors.extend(validate(parents))

    print("ChainFlow migration chain check")
    print(f"- revisions: {len(parents)}")
    if errors:
        for err in errors:
            print(f"[FAIL] {err}")
        return 1

    print("[PASS] single root, single head, all revisions linked")
    return 0


if __name__ == "__main__":
    sys.exit(main())
