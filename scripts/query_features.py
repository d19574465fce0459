"""Query feature support declarations from a YAML config."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import yaml

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from featuresupport.config import apply_config, load_config  # noqa: E402
from featuresupport.directory import RegistryDirectory  # noqa: E402
from featuresupport.errors import InvalidArgument  # noqa: E402
from featuresupport.utils.logging import get_logger  # noqa: E402


def _parse_filters(pairs: Sequence[str]) -> Dict[str, object]:
    criteria: Dict[str, object] = {}
    for pair in pairs:
        if "=" not in pair:
            raise InvalidArgument(f"Filter must look like feature=value, got {pair!r}.")
        key, raw = pair.split("=", 1)
        criteria[key] = yaml.safe_load(raw) if raw else True
    return criteria


def run_query(
    config_path: Optional[str],
    type_name: Optional[str],
    features: Sequence[str] = (),
    filters: Sequence[str] = (),
    operator: str = "AND",
    list_types: bool = False,
) -> List[str]:
    """Load the config into a fresh directory and answer one query."""
    cfg = load_config(config_path)
    logger = get_logger("query_features", cfg.logging.log_file, cfg.logging.level)
    directory = RegistryDirectory()
    apply_config(cfg, directory)
    logger.info("Loaded %d declarations", len(cfg.declarations))

    if list_types:
        return directory.get_registered_types()
    if not type_name:
        raise InvalidArgument("--type is required unless --list-types is given.")
    if features and filters:
        raise InvalidArgument("Use either --feature or --filter, not both.")

    registry = directory.get_instance(type_name)
    if filters:
        return registry.where(_parse_filters(filters), operator)
    if len(features) == 1:
        return registry.where(features[0], operator)
    return registry.where(list(features), operator)


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", default=None)
    parser.add_argument("--type", dest="type_name", default=None)
    parser.add_argument("--feature", action="append", default=[])
    parser.add_argument("--filter", action="append", default=[])
    parser.add_argument("--operator", default="AND")
    parser.add_argument("--list-types", action="store_true")
    args = parser.parse_args()
    try:
        result = run_query(
            args.config,
            args.type_name,
            features=args.feature,
            filters=args.filter,
            operator=args.operator,
            list_types=args.list_types,
        )
    except InvalidArgument as exc:
        parser.error(str(exc))
    for name in result:
        print(name)
