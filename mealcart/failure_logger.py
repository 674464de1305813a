"""Unparsed ingredient logging for batch shopping list runs.

Writes structured JSON reports of ingredient lines the parser could not
read, so the unit vocabulary and item tables can be extended.
"""
import json
import re
import time
from datetime import datetime
from pathlib import Path

from mealcart.ingredient_parser import FRACTION_RE, parse_ingredient

REPORTS_DIR_NAME = "unparsed"

# Informal measurement phrases (no numeric quantity to scale)
INFORMAL_MEASUREMENTS = [
    "a pinch", "a smidge", "a dash", "a sprinkle", "a handful", "a splash",
    "to taste", "as needed", "for serving", "for garnish",
    "some", "a few", "a couple",
]


def classify_unparsed(line: str) -> str:
    """Classify why an ingredient line did not parse.

    Categories: empty, negative_quantity, invalid_fraction, missing_item,
    informal, no_quantity, unknown

    Args:
        line: The raw ingredient line

    Returns:
        One of the category names above
    """
    text = (line or "").strip().lower()

    if not text:
        return "empty"
    if re.match(r'^-\s*\d', text):
        return "negative_quantity"
    if any(float(m.group(2)) == 0 for m in FRACTION_RE.finditer(text)):
        return "invalid_fraction"
    if re.fullmatch(r'[\d./\s]+', text):
        return "missing_item"
    if any(re.search(rf'\b{re.escape(phrase)}\b', text) for phrase in INFORMAL_MEASUREMENTS):
        return "informal"
    if not re.match(r'^\.?\d', text):
        return "no_quantity"

    return "unknown"


def collect_unparsed(ingredients: list[str]) -> list[dict]:
    """Return one {"line", "category"} entry per line the parser rejects."""
    return [
        {"line": line, "category": classify_unparsed(line)}
        for line in ingredients
        if parse_ingredient(line) is None
    ]


def log_unparsed(
    entries: list[dict],
    total_processed: int,
    project_root: Path = None,
) -> Path:
    """Write unparsed line data to a timestamped JSON file.

    Args:
        entries: List of dicts from collect_unparsed()
        total_processed: Total number of ingredient lines in the batch run
        project_root: Directory that holds the reports folder (defaults to
            the parent of mealcart/)

    Returns:
        Path to the created JSON report
    """
    if project_root is None:
        project_root = Path(__file__).parent.parent

    reports_dir = Path(project_root) / REPORTS_DIR_NAME
    reports_dir.mkdir(parents=True, exist_ok=True)

    now = datetime.now()
    filename = now.strftime("%Y-%m-%d-%H%M%S") + ".json"

    categories: dict[str, int] = {}
    for entry in entries:
        categories[entry["category"]] = categories.get(entry["category"], 0) + 1

    data = {
        "run_timestamp": now.isoformat(timespec="seconds"),
        "total_processed": total_processed,
        "total_unparsed": len(entries),
        "categories": categories,
        "unparsed": entries,
    }

    filepath = reports_dir / filename
    filepath.write_text(json.dumps(data, indent=2), encoding="utf-8")

    return filepath


def cleanup_old_reports(reports_dir: Path, max_age_days: int = 30) -> int:
    """Remove report files older than max_age_days.

    Args:
        reports_dir: Path to the reports directory
        max_age_days: Maximum age in days (default 30)

    Returns:
        Number of files removed
    """
    reports_dir = Path(reports_dir)

    if not reports_dir.exists():
        return 0

    cutoff_time = time.time() - (max_age_days * 24 * 60 * 60)
    removed = 0

    for report_file in reports_dir.glob("*.json"):
        if report_file.stat().st_mtime < cutoff_time:
            report_file.unlink()
            removed += 1

    return removed
