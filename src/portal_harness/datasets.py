"""Readers for data-driven test input stored as JSON or CSV."""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Optional

from .errors import ConfigurationError

LOGGER = logging.getLogger(__name__)


def read_json(path: Path) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        LOGGER.error("Failed to read JSON file %s: %s", path, exc)
        raise ConfigurationError(f"Failed to read JSON file: {path}") from exc


def read_csv(path: Path) -> list[dict[str, str]]:
    """Read a CSV file whose first row is the header."""

    try:
        with Path(path).open(newline="", encoding="utf-8") as handle:
            return [dict(row) for row in csv.DictReader(handle)]
    except (OSError, csv.Error) as exc:
        LOGGER.error("Failed to read CSV file %s: %s", path, exc)
        raise ConfigurationError(f"Failed to read CSV file: {path}") from exc


def case_data(path: Path, name: str) -> Optional[Any]:
    """Return the entry for test case ``name`` from a JSON mapping file."""

    data = read_json(path)
    if not isinstance(data, dict):
        raise ConfigurationError(f"Test data file {path} must contain a JSON object")
    return data.get(name)


def value(node: Optional[dict[str, Any]], key: str) -> Optional[str]:
    if node is None or key not in node or node[key] is None:
        return None
    return str(node[key])
