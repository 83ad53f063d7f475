"""Configuration settings for hand simulation."""

import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path

import yaml

from simulation.runner import SimulationConfig


class ConfigError(ValueError):
    """Raised for invalid configuration values."""


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"
    log_file: str | None = None

    @property
    def level_number(self) -> int:
        return getattr(logging, self.level.upper())


@dataclass
class Config:
    """Complete configuration."""

    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> None:
        iterations = self.simulation.iterations
        if not isinstance(iterations, int) or isinstance(iterations, bool) or iterations <= 0:
            raise ConfigError(f"iterations must be a positive integer, got {iterations!r}")
        seed = self.simulation.seed
        if not isinstance(seed, int) or isinstance(seed, bool) or seed < 0:
            raise ConfigError(f"seed must be a non-negative integer, got {seed!r}")
        if not isinstance(self.logging.level, str) or self.logging.level.upper() not in LOG_LEVELS:
            raise ConfigError(f"Unknown log level: {self.logging.level}")
        log_file = self.logging.log_file
        if log_file is not None and not isinstance(log_file, str):
            raise ConfigError(f"log_file must be a string, got {log_file!r}")


def _build_section(cls: type, data: dict | None, name: str):
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise ConfigError(f"Section '{name}' must be a mapping")
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ConfigError(f"Unknown keys in '{name}': {', '.join(sorted(unknown))}")
    return cls(**data)


def load_config(path: str | Path) -> Config:
    """Load configuration from YAML file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a mapping: {path}")
    unknown = set(data) - {"simulation", "logging"}
    if unknown:
        raise ConfigError(f"Unknown config sections: {', '.join(sorted(unknown))}")

    config = Config(
        simulation=_build_section(SimulationConfig, data.get("simulation"), "simulation"),
        logging=_build_section(LoggingConfig, data.get("logging"), "logging"),
    )
    config.validate()
    return config


def save_config(config: Config, path: str | Path) -> None:
    """Save configuration to YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "simulation": asdict(config.simulation),
        "logging": asdict(config.logging),
    }

    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def configure_logging(settings: LoggingConfig) -> logging.Logger:
    """Configure the root logger: stderr, plus a file when log_file is set."""
    formatter = logging.Formatter("%(asctime)s | %(message)s", datefmt="%Y-%m-%d %H:%M:%S")

    root = logging.getLogger()
    root.setLevel(settings.level_number)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode="w")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return root


# Default configuration
DEFAULT_CONFIG = Config()
