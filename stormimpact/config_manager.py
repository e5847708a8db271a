"""
Config Manager - read/write the pipeline settings file.
"""
from __future__ import annotations

import json
from pathlib import Path

from stormimpact.config_paths import CONFIG_DIR
from stormimpact.logging_config import setup_logger

logger = setup_logger("general.config_manager")

CONFIG_FILE = CONFIG_DIR / "pipeline_config.json"

DEFAULT_CONFIG = {
    "raw_filename": "StormData.csv.bz2",
    "unit_divisor": 1e9,
    "top_n": 10,
}


def validate_config(data: dict) -> str | None:
    """Return an error message for the first bad setting, or None."""
    unknown = sorted(set(data) - set(DEFAULT_CONFIG))
    if unknown:
        return f"Unknown setting(s): {', '.join(unknown)}"
    if "unit_divisor" in data:
        divisor = data["unit_divisor"]
        if isinstance(divisor, bool) or not isinstance(divisor, (int, float)) or not divisor > 0:
            return "unit_divisor must be a positive number"
    if "top_n" in data:
        top_n = data["top_n"]
        if isinstance(top_n, bool) or not isinstance(top_n, int) or top_n < 1:
            return "top_n must be a positive integer"
    if "raw_filename" in data:
        name = data["raw_filename"]
        if not isinstance(name, str) or not name.strip():
            return "raw_filename must be a non-empty string"
    return None


def load_config(path: Path | None = None) -> dict:
    """Return the settings file merged over DEFAULT_CONFIG.

    Stored values that fail validate_config are ignored in favour of the
    default for that key.
    """
    path = path or CONFIG_FILE
    config = DEFAULT_CONFIG.copy()
    if not path.exists():
        return config
    try:
        stored = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not read %s (%s); using defaults", path.name, exc)
        return config
    if not isinstance(stored, dict):
        logger.warning("Ignoring %s: expected a JSON object", path.name)
        return config
    for key in DEFAULT_CONFIG:
        if key not in stored:
            continue
        error = validate_config({key: stored[key]})
        if error:
            logger.warning("Ignoring %s in %s: %s", key, path.name, error)
            continue
        config[key] = stored[key]
    return config


def save_config(config: dict, path: Path | None = None) -> None:
    """Write settings back; unknown keys are dropped."""
    path = path or CONFIG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    cleaned = {k: config[k] for k in DEFAULT_CONFIG if k in config}
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(cleaned, fh, indent=2)
    logger.info("Saved pipeline config to %s", path)
