from __future__ import annotations

"""Configuration loading and validation for the CORE quiz shell.

This module loads YAML configuration, applies defaults, and validates
that enumerations and paths are sane for the CLI.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import sys

import yaml

from ..storage.store import SUPPORTED_SUFFIXES
from ..util.out import COLORS


DEFAULT_STORE_PATH = "./quizzes.json"


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"ERROR: Config file is not valid YAML: {path}: {e}", file=sys.stderr)
        sys.exit(1)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        return _load_yaml(Path(path))
    return _load_yaml(Path(__file__).with_name("defaults.yml"))


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Unknown store formats and color names fall back to safe values with a
    printed warning.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    cfg.setdefault("store", {})
    cfg.setdefault("ui", {})

    store = cfg["store"]
    ui = cfg["ui"]

    store.setdefault("path", DEFAULT_STORE_PATH)
    store.setdefault("seed_defaults", True)

    ui.setdefault("banner", "CORE quiz")
    ui.setdefault("prompt", "quiz> ")
    ui.setdefault("color", True)
    ui.setdefault("question_color", "red")
    ui.setdefault("credits", [])

    store_path = Path(str(store["path"]))
    if store_path.suffix not in SUPPORTED_SUFFIXES:
        fallback = store_path.with_suffix(".json")
        print(f"WARNING: Unsupported store format '{store_path.suffix}', using '{fallback}'.")
        store_path = fallback
    store["path"] = str(store_path)
    store["seed_defaults"] = bool(store["seed_defaults"])

    question_color = ui.get("question_color")
    if question_color not in COLORS:
        print(f"WARNING: Unsupported question_color '{question_color}', using 'red'.")
        ui["question_color"] = "red"

    credits = ui.get("credits") or []
    if isinstance(credits, str):
        credits = [credits]
    ui["credits"] = [str(c) for c in credits]
    ui["color"] = bool(ui["color"])
    ui["banner"] = str(ui["banner"])
    ui["prompt"] = str(ui["prompt"])

    return cfg
