"""Logic for loading and merging configuration files."""

import copy
import logging
from pathlib import Path
from typing import Any

import yaml

from dotnetdocs.deep_merge import deep_merge

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "included_members": ["Public"],
    "references": [],
    "conceptual": {
        "path": None,
        "enabled": True,
        "show_placeholders": True,
        "create_placeholders": False,
    },
    "model": {
        "create_external_type_references": True,
        "include_system_object_inheritance": True,
        "ignore_global_namespace": True,
    },
    "output": {
        "path": "docs",
        "api_reference_path": "api-reference",
        "namespace_mode": "file",
        "namespace_separator": "-",
    },
    "framework_namespaces": ["System.", "Microsoft.", "Windows."],
    "documentation_references": [],
}


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if p.exists():
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            if not isinstance(user_config, dict):
                msg = f"Configuration root must be a mapping: {p}"
                raise TypeError(msg)
            config = deep_merge(config, user_config)
        else:
            logger.warning("Config file not found, using defaults: %s", p)
    return config
