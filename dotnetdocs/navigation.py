"""Read, merge and write ``toc.yml`` navigation files."""

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

TocItem = dict[str, Any]


def load_toc(path: Path) -> list[TocItem]:
    """Load a navigation file; a missing or empty file is an empty list."""
    if not path.is_file():
        return []
    data = yaml.safe_load(path.read_text(encoding="utf-8-sig"))
    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("items") or []
    if not isinstance(data, list):
        msg = f"Navigation root must be a list: {path}"
        raise TypeError(msg)
    return [item for item in data if isinstance(item, dict)]


def write_toc(path: Path, items: list[TocItem]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        yaml.safe_dump(items, sort_keys=False, allow_unicode=True), encoding="utf-8"
    )


def rebase_toc(items: list[TocItem], prefix: str) -> list[TocItem]:
    """Prefix every relative ``href`` with ``prefix``; absolute links are kept."""
    prefix = prefix.replace("\\", "/").strip("/")
    rebased = []
    for item in items:
        item = dict(item)
        href = item.get("href")
        if isinstance(href, str) and href and "://" not in href and not href.startswith("/"):
            item["href"] = f"{prefix}/{href}" if prefix else href
        if isinstance(item.get("items"), list):
            item["items"] = rebase_toc(item["items"], prefix)
        rebased.append(item)
    return rebased


def merge_toc(items: list[TocItem], section: TocItem) -> list[TocItem]:
    """Add a section, replacing an existing one with the same name."""
    name = section.get("name")
    merged = [item for item in items if item.get("name") != name]
    merged.append(section)
    return merged


def merge_reference_navigation(
    toc_path: Path, name: str, reference_toc: Path, destination: str
) -> None:
    """Merge a referenced documentation set's navigation into ``toc_path``."""
    items = load_toc(reference_toc)
    if not items:
        logger.debug("No navigation in %s", reference_toc)
        return
    section = {"name": name, "items": rebase_toc(items, destination)}
    write_toc(toc_path, merge_toc(load_toc(toc_path), section))
    logger.info("Merged navigation of %s into %s", name, toc_path)
