from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from rk_explorer.config.model import GlobalConfig
from rk_explorer.core.exceptions import ConfigError, TableauDefinitionError
from rk_explorer.core.tableau import TableauDefinition

logger = logging.getLogger(__name__)


def _read_json(path: Path) -> Any:
    with path.open(encoding="utf-8") as f:
        return json.load(f)


def load_tableau_definitions(tableaus_dir: Path) -> List[TableauDefinition]:
    """
    Load user-defined tableaus from tableaus/*.json.

    Files are read in sorted order. A file may hold a single definition or a
    list of them. Unreadable or malformed files are logged and skipped so one
    bad file does not take the whole app down.
    """
    if not tableaus_dir.is_dir():
        logger.info(f"No user tableau directory at: {tableaus_dir}")
        return []

    definitions: List[TableauDefinition] = []
    seen: Dict[str, Path] = {}

    for config_file in sorted(tableaus_dir.glob("*.json")):
        # Ignore macOS 'Apple Double' files (._*)
        if config_file.name.startswith("._"):
            continue

        logger.info(f"Loading tableau config: {config_file.name}")
        try:
            raw = _read_json(config_file)
            entries = raw if isinstance(raw, list) else [raw]
            parsed = [TableauDefinition.from_dict(entry) for entry in entries]
        except (OSError, ValueError, TypeError, TableauDefinitionError) as e:
            logger.error(f"Failed to load {config_file.name}: {e}")
            continue

        for definition in parsed:
            if definition.id in seen:
                logger.warning(
                    f"Duplicate tableau id '{definition.id}' in {config_file.name} ignored "
                    f"(first defined in {seen[definition.id].name})"
                )
                continue
            seen[definition.id] = config_file
            definitions.append(definition)

    return definitions


def load_global_config(root: Path | str) -> GlobalConfig:
    """
    Load configuration from a directory:

        <root>/global.json       optional UI / store settings
        <root>/tableaus/*.json   optional user-defined tableaus

    Raises:
        ConfigError: if global.json exists but is not a valid JSON object
    """
    root = Path(root)
    logger.info("Loading global config", extra={"config_root": str(root)})

    global_path = root / "global.json"
    raw_global: Dict[str, Any] = {}
    if global_path.is_file():
        try:
            raw_global = _read_json(global_path)
        except (OSError, ValueError) as e:
            raise ConfigError(f"Could not read {global_path}: {e}") from e
        if not isinstance(raw_global, dict):
            raise ConfigError(f"{global_path} must contain a JSON object")

    defaults = GlobalConfig()
    try:
        poll_interval_ms = int(raw_global.get("poll_interval_ms", defaults.poll_interval_ms))
        action_log_limit = int(raw_global.get("action_log_limit", defaults.action_log_limit))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid numeric setting in {global_path}: {e}") from e

    if poll_interval_ms <= 0 or action_log_limit <= 0:
        raise ConfigError("poll_interval_ms and action_log_limit must be positive")

    return GlobalConfig(
        ui_title=raw_global.get("ui_title", defaults.ui_title),
        subtitle=raw_global.get("subtitle", defaults.subtitle),
        panel_width=raw_global.get("panel_width", defaults.panel_width),
        default_view=raw_global.get("default_view", defaults.default_view),
        poll_interval_ms=poll_interval_ms,
        action_log_limit=action_log_limit,
        tableaus=load_tableau_definitions(root / "tableaus"),
        config_root=root,
    )
