"""Batch steps: normalize stored JSON documents and write canonical copies"""

import json
from pathlib import Path
from typing import Any

from memofiche.core.export import dump_json, to_storage
from memofiche.core.normalize import normalize_document
from memofiche.core.utils.diff import unified_diff
from memofiche.core.utils.hashing import fingerprint
from memofiche.core.variants import DEFAULT_TABLE, VariantTable


JSON_EXTENSIONS = {'.json'}


def discover_files(path: Path) -> list[Path]:
    """Return sorted .json files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in JSON_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.suffix in JSON_EXTENSIONS)


def read_documents(path: Path) -> Any:
    """Load a stored export: one document object or a list of them."""
    try:
        return json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e}") from e


def canonicalize(data: Any, table: VariantTable = DEFAULT_TABLE) -> Any:
    """Canonical stored form of one document, or of each document in a list."""
    if isinstance(data, list):
        return [to_storage(normalize_document(d, table)) for d in data]
    return to_storage(normalize_document(data, table))


def run_normalize(path: Path, table: VariantTable = DEFAULT_TABLE) -> Any:
    """Read one stored JSON file and return its canonical form."""
    try:
        return canonicalize(read_documents(path), table)
    except Exception as e:
        raise RuntimeError(f"Failed to normalize {path}: {e}") from e


def run_migrate(
    path: Path,
    output_dir: Path,
    table: VariantTable = DEFAULT_TABLE,
    write_diffs: bool = False,
    indent: int = 2,
    ) -> tuple[dict[str, int], list[tuple[str, Path]]]:
    """Normalize every stored JSON file under path into output_dir.

    Output paths mirror the source layout relative to path. A file is
    'unchanged' when its canonical form fingerprints the same as the stored
    one. With write_diffs, a .diff beside each updated output records the change.
    Returns (counts, changes) where changes lists (status, output_path).
    """
    root = path if path.is_dir() else path.parent
    counts = {"updated": 0, "unchanged": 0}
    changes = []

    out_root = output_dir.resolve()
    for src in discover_files(path):
        if out_root in src.resolve().parents:
            continue
        try:
            stored = read_documents(src)
            canonical = canonicalize(stored, table)
        except Exception as e:
            raise RuntimeError(f"Failed to migrate {src}: {e}") from e

        dest = output_dir / src.relative_to(root)
        dest.parent.mkdir(parents=True, exist_ok=True)
        new_text = dump_json(canonical, indent)
        dest.write_text(new_text + "\n", encoding='utf-8')

        status = 'unchanged' if fingerprint(stored) == fingerprint(canonical) else 'updated'
        counts[status] += 1
        changes.append((status, dest))

        if write_diffs and status == 'updated':
            old_text = json.dumps(stored, indent=indent or None, ensure_ascii=False, sort_keys=True)
            sorted_new = json.dumps(canonical, indent=indent or None, ensure_ascii=False, sort_keys=True)
            lines = unified_diff(old_text, sorted_new, f"a/{src.name}", f"b/{src.name}")
            dest.with_suffix('.diff').write_text(''.join(lines), encoding='utf-8')

    return counts, changes
