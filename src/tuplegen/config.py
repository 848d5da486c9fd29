"""
Generator configuration.

A run is described by one GeneratorConfig. It can be built in code, read
from a YAML file with :func:`load_config`, and adjusted by command line
flags through :func:`apply_overrides`.

Example file::

    output_dir: src/mypkg
    max_arity: 12
    formatter: black
    line_length: 120
    header:
      - Copyright (c) Example Corp.
"""

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .backends import Formatter
from .errors import ConfigError
from .logging import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_ARITY = 24

DEFAULT_HEADER = [
    "Generated by tuplegen.",
    "Regenerate this file instead of editing it.",
]


@dataclass
class GeneratorConfig:
    """Everything one generation run needs."""

    output_dir: Optional[Path] = None
    max_arity: int = DEFAULT_MAX_ARITY
    interfaces_module: str = "tuples"
    implementations_module: str = "tuples_impl"
    runtime_module: str = "tuplegen.runtime"
    formatter: Formatter = Formatter.BLACK
    line_length: Optional[int] = None
    header: List[str] = field(default_factory=lambda: list(DEFAULT_HEADER))

    def require_output_dir(self) -> Path:
        """
        The output directory.

        Raises:
            ConfigError: if neither the command line nor the configuration file set one
        """
        if self.output_dir is None:
            raise ConfigError("No output directory configured, pass OUTPUT_DIR or set output_dir")
        return Path(self.output_dir)

    @property
    def interfaces_path(self) -> Path:
        return self.require_output_dir() / f"{self.interfaces_module}.py"

    @property
    def implementations_path(self) -> Path:
        return self.require_output_dir() / f"{self.implementations_module}.py"

    def validate(self) -> None:
        """
        Check values the builder does not check itself.

        The arity bound is left to the builder, which owns those rules.

        Raises:
            ConfigError: on an unusable value
        """
        for name in ("interfaces_module", "implementations_module"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.isidentifier():
                raise ConfigError(f"{name} must be a valid module name", {name: value})
        if self.interfaces_module == self.implementations_module:
            raise ConfigError(
                "interfaces_module and implementations_module must differ",
                {"module": self.interfaces_module},
            )
        if not all(part.isidentifier() for part in str(self.runtime_module).split(".")):
            raise ConfigError("runtime_module must be a dotted module path", {"runtime_module": self.runtime_module})
        if self.line_length is not None and (
            not isinstance(self.line_length, int) or isinstance(self.line_length, bool) or self.line_length < 1
        ):
            raise ConfigError("line_length must be a positive integer or null", {"line_length": self.line_length})
        if not isinstance(self.formatter, Formatter):
            raise ConfigError("formatter must be a Formatter", {"formatter": self.formatter})


def _field_names() -> List[str]:
    return [f.name for f in fields(GeneratorConfig)]


def config_from_dict(data: Dict[str, Any]) -> GeneratorConfig:
    """
    Build a validated GeneratorConfig from plain data.

    Raises:
        ConfigError: on unknown keys or invalid values
    """
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")

    unknown = sorted(set(data) - set(_field_names()))
    if unknown:
        raise ConfigError("Unknown configuration keys", {"keys": ", ".join(unknown)})

    values = dict(data)
    if values.get("output_dir") is not None:
        values["output_dir"] = Path(values["output_dir"])
    if "formatter" in values:
        try:
            values["formatter"] = Formatter(values["formatter"])
        except ValueError as e:
            raise ConfigError("Unknown formatter", {"formatter": values["formatter"]}) from e
    if "header" in values:
        header = values["header"]
        if header is None:
            values["header"] = []
        elif isinstance(header, str):
            values["header"] = header.splitlines()
        else:
            values["header"] = [str(line) for line in header]

    config = GeneratorConfig(**values)
    config.validate()
    return config


def load_config(path) -> GeneratorConfig:
    """
    Load a GeneratorConfig from a YAML file.

    An empty file yields the defaults.

    Raises:
        ConfigError: if the file cannot be read or parsed, or is invalid
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file: {e}", {"file": path}) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}", {"file": path}) from e

    logger.info("Loaded configuration from %s", path)
    return config_from_dict(data or {})


def apply_overrides(config: GeneratorConfig, **overrides: Any) -> GeneratorConfig:
    """
    Return a copy of ``config`` with every override that is not None applied.

    Raises:
        ConfigError: on an unknown name or an invalid resulting value
    """
    unknown = sorted(set(overrides) - set(_field_names()))
    if unknown:
        raise ConfigError("Unknown configuration keys", {"keys": ", ".join(unknown)})

    changes = {name: value for name, value in overrides.items() if value is not None}
    updated = replace(config, **changes)
    updated.validate()
    return updated
