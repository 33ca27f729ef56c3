"""Load navigation options from configuration files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from attrs import fields

from pagenav.json_utils import json_loads
from pagenav.navigation import NavigationOptions

JSONDict = dict[str, Any]

# Environment variable naming the default options file.
CONFIG_ENV = "PAGENAV_CONFIG"

logger = logging.getLogger(__name__)


def load_structured_file(path: Path) -> JSONDict:
    """Read a JSON or YAML mapping from ``path``.

    Args:
        path: Location of the file. ``.json`` files are decoded as JSON,
            everything else as YAML.

    Returns:
        Parsed mapping; an empty file yields an empty mapping.

    Throws:
        ValueError: If the file does not contain a mapping.
    """

    text = path.read_text(encoding="utf-8")

    # Decode according to file extension.
    if path.suffix == ".json":
        data = json_loads(text)
    else:
        data = yaml.safe_load(text)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return data


def options_from_mapping(data: JSONDict) -> NavigationOptions:
    """Build ``NavigationOptions`` from a plain mapping.

    Keys may use dashes instead of underscores. The options may also be
    nested under a ``navigation`` key.

    Throws:
        ValueError: If the mapping contains unknown keys.
    """

    if isinstance(data.get("navigation"), dict):
        data = data["navigation"]

    known = {a.name for a in fields(NavigationOptions)}
    values = {str(k).replace("-", "_"): v for k, v in data.items()}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"Unknown navigation options: {', '.join(unknown)}")

    return NavigationOptions(**values)


def load_options(path: Path | str | None = None) -> NavigationOptions:
    """Return navigation options from ``path`` or ``$PAGENAV_CONFIG``.

    Args:
        path: Options file. When omitted the file named by the
            ``PAGENAV_CONFIG`` environment variable is used, and defaults
            are returned when neither is set.

    Returns:
        The loaded options.
    """

    if path is None:
        path = os.environ.get(CONFIG_ENV) or None
    if path is None:
        return NavigationOptions()

    logger.debug(f"Loading navigation options from {path}")
    return options_from_mapping(load_structured_file(Path(path)))
