"""Configuration model for file sorter."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

from dotenv import dotenv_values

from ..core.extensions import (
    CATEGORY_ENV_VARS,
    CATEGORY_ORDER,
    DEFAULT_EXTENSIONS,
)
from ..exceptions import ConfigurationError

DEFAULT_EXCLUDED_NAMES: Tuple[str, ...] = ("Telegram Desktop",)

SOURCE_ENV_VAR = "SOURCE_DIR"
OTHER_ENV_VAR = "OTHER_DIR"
SCRIPT_ENV_VAR = "SCRIPT_NAME"
EXCLUDED_ENV_VAR = "EXCLUDED_NAMES"


@dataclass(frozen=True)
class CategoryRule:
    """A category destination and the filename suffixes that select it."""
    name: str
    destination: Path
    extensions: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SorterConfig:
    """Immutable snapshot of everything a sorting run needs."""
    source_directory: Path
    rules: Tuple[CategoryRule, ...]
    other_directory: Path
    script_name: str
    excluded_names: Tuple[str, ...] = field(default=DEFAULT_EXCLUDED_NAMES)

    def exclusion_names(self) -> Set[str]:
        """Names whose subtree is never visited or relocated.

        Covers the extra literal names plus the last path segment of every
        destination, so already sorted folders inside the source are left
        alone.
        """
        names = set(self.excluded_names)
        for rule in self.rules:
            names.add(rule.destination.name)
        names.add(self.other_directory.name)
        names.discard("")
        return names


def expand_path(path_str: str) -> Path:
    """Expand ~ in a configured path."""
    return Path(path_str).expanduser()


def build_rules(destinations: Mapping[str, Path],
                extensions: Optional[Mapping[str, List[str]]] = None) -> Tuple[CategoryRule, ...]:
    """Build category rules in declared order.

    Categories without explicit extensions use the built-in tables.
    """
    unknown = set(destinations) - set(CATEGORY_ORDER)
    if extensions:
        unknown |= set(extensions) - set(CATEGORY_ORDER)
    if unknown:
        raise ConfigurationError(
            f"Unknown categories: {', '.join(sorted(unknown))}"
        )

    missing = [name for name in CATEGORY_ORDER if name not in destinations]
    if missing:
        raise ConfigurationError(
            f"Missing destination for categories: {', '.join(missing)}"
        )

    rules = []
    for name in CATEGORY_ORDER:
        if extensions and name in extensions:
            exts = tuple(extensions[name])
            invalid = [ext for ext in exts if "." not in ext]
            if invalid:
                raise ConfigurationError(
                    f"Invalid extensions for '{name}': {', '.join(repr(ext) for ext in invalid)}"
                )
        else:
            exts = DEFAULT_EXTENSIONS[name]
        rules.append(CategoryRule(name=name, destination=destinations[name], extensions=exts))
    return tuple(rules)


def _split_names(value: str) -> Tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


def load_config_from_env(env_file: Optional[Path] = None,
                         environ: Optional[Mapping[str, str]] = None) -> SorterConfig:
    """Load configuration from a .env file and the process environment.

    Values from the environment override the .env file. When env_file is
    not given, a .env in the working directory is used if present.
    """
    values: Dict[str, str] = {}

    if env_file is not None:
        env_file = Path(env_file)
        if not env_file.is_file():
            raise ConfigurationError(f"Env file does not exist: {env_file}")
        dotenv_path = env_file
    else:
        dotenv_path = Path.cwd() / ".env"

    if dotenv_path.is_file():
        for key, value in dotenv_values(dotenv_path).items():
            if value is not None:
                values[key] = value

    values.update(os.environ if environ is None else environ)

    required = [SOURCE_ENV_VAR] + [CATEGORY_ENV_VARS[name] for name in CATEGORY_ORDER]
    required += [OTHER_ENV_VAR, SCRIPT_ENV_VAR]
    missing = [name for name in required if not values.get(name)]
    if missing:
        raise ConfigurationError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    destinations = {
        name: expand_path(values[CATEGORY_ENV_VARS[name]]) for name in CATEGORY_ORDER
    }

    excluded = DEFAULT_EXCLUDED_NAMES
    if EXCLUDED_ENV_VAR in values:
        excluded = _split_names(values[EXCLUDED_ENV_VAR])

    return SorterConfig(
        source_directory=expand_path(values[SOURCE_ENV_VAR]),
        rules=build_rules(destinations),
        other_directory=expand_path(values[OTHER_ENV_VAR]),
        script_name=values[SCRIPT_ENV_VAR],
        excluded_names=excluded,
    )


def _config_to_dict(config: SorterConfig) -> Dict[str, Any]:
    """Convert a config to its JSON form."""
    return {
        "source_directory": str(config.source_directory),
        "other_directory": str(config.other_directory),
        "script_name": config.script_name,
        "excluded_names": list(config.excluded_names),
        "categories": {
            rule.name: {
                "destination": str(rule.destination),
                "extensions": list(rule.extensions),
            }
            for rule in config.rules
        },
    }


def _string_list(value: Any, key: str) -> Tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigurationError(f"'{key}' must be a list of strings")
    return tuple(value)


def _dict_to_config(data: Dict[str, Any]) -> SorterConfig:
    """Convert a JSON document to a config, validating keys and value types."""
    missing = [key for key in ("source_directory", "other_directory", "script_name", "categories")
               if not data.get(key)]
    if missing:
        raise ConfigurationError(f"Missing required config keys: {', '.join(missing)}")

    for key in ("source_directory", "other_directory", "script_name"):
        if not isinstance(data[key], str):
            raise ConfigurationError(f"'{key}' must be a string")

    categories = data["categories"]
    if not isinstance(categories, dict):
        raise ConfigurationError("'categories' must be an object")

    destinations = {}
    extensions = {}
    for name, entry in categories.items():
        if not isinstance(entry, dict) or not entry.get("destination"):
            raise ConfigurationError(f"Category '{name}' has no destination")
        if not isinstance(entry["destination"], str):
            raise ConfigurationError(f"'{name}.destination' must be a string")
        destinations[name] = expand_path(entry["destination"])
        if "extensions" in entry:
            extensions[name] = _string_list(entry["extensions"], f"{name}.extensions")

    excluded = DEFAULT_EXCLUDED_NAMES
    if "excluded_names" in data:
        excluded = _string_list(data["excluded_names"], "excluded_names")

    return SorterConfig(
        source_directory=expand_path(data["source_directory"]),
        rules=build_rules(destinations, extensions),
        other_directory=expand_path(data["other_directory"]),
        script_name=data["script_name"],
        excluded_names=excluded,
    )


def load_config(config_path: Path) -> SorterConfig:
    """Load configuration from JSON file."""
    try:
        with open(config_path, 'r') as f:
            config_data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Config file does not exist: {config_path}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {config_path}: {e}") from e

    if not isinstance(config_data, dict):
        raise ConfigurationError(f"Config file must contain an object: {config_path}")

    return _dict_to_config(config_data)


def save_config(config: SorterConfig, config_path: Path) -> None:
    """Save configuration to JSON file."""
    config_dict = _config_to_dict(config)

    with open(config_path, 'w') as f:
        json.dump(config_dict, f, indent=2)


def create_default_config(config_path: Path) -> None:
    """Create a template configuration file."""
    base = Path("/path/to")
    default_config = SorterConfig(
        source_directory=base / "Downloads",
        rules=build_rules({name: base / name.capitalize() for name in CATEGORY_ORDER}),
        other_directory=base / "Other",
        script_name="file-sorter",
    )
    save_config(default_config, config_path)
