"""
Configuration module for OpsPlan.

This module provides configuration management for the OpsPlan library:
numerical tolerances for the LP engines, the default LP solver and the
logging level.

Configuration can be set via:
1. Environment variables (OPSPLAN_*)
2. Config file (./opsplan.toml or ~/.opsplan/config.toml)
3. Programmatic API

Example:
    >>> from opsplan.config import config
    >>> config.get_tolerance("feasibility")
    0.001
    >>> config.default_lp_solver = "highs"
"""

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

LP_SOLVERS = ("corner_point", "highs")

logger = logging.getLogger(__name__)


def _default_tolerances() -> dict[str, float]:
    return {
        "feasibility": 1e-3,
        "determinant": 1e-3,
        "highs_cross_check": 1e-6,
    }


def _get_default_log_level() -> str:
    return os.environ.get('OPSPLAN_LOG_LEVEL', 'INFO').upper()


def _get_default_lp_solver() -> str:
    solver = os.environ.get('OPSPLAN_LP_SOLVER', 'corner_point').lower()
    if solver not in LP_SOLVERS:
        logger.warning(
            "Ignoring OPSPLAN_LP_SOLVER='%s', expected one of %s; using corner_point",
            solver, ', '.join(LP_SOLVERS),
        )
        return 'corner_point'
    return solver


@dataclass
class OpsPlanConfig:
    """
    Configuration for the OpsPlan library.

    Attributes:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        default_lp_solver: LP solver used when none is requested
            ("corner_point" or "highs")
        dedup_decimals: Decimal places used to deduplicate LP vertices
        tolerances: Numerical tolerances for the LP engines
    """

    # Logging
    log_level: str = field(default_factory=_get_default_log_level)

    # Solver settings
    default_lp_solver: str = field(default_factory=_get_default_lp_solver)
    dedup_decimals: int = 2

    # Numerical tolerances
    tolerances: dict[str, float] = field(default_factory=_default_tolerances)

    def __post_init__(self):
        """Normalize and validate settings."""
        self.log_level = str(self.log_level).upper()
        self.default_lp_solver = str(self.default_lp_solver).lower()
        if self.default_lp_solver not in LP_SOLVERS:
            raise ValueError(
                f"Unknown LP solver '{self.default_lp_solver}', "
                f"expected one of {', '.join(LP_SOLVERS)}"
            )
        merged = _default_tolerances()
        merged.update(self.tolerances)
        self.tolerances = merged

    # =========================================================================
    # Tolerance helpers
    # =========================================================================

    def get_tolerance(self, name: str) -> float:
        """Get a tolerance value by name."""
        return self.tolerances.get(name, 1e-3)

    def set_tolerance(self, name: str, value: float) -> None:
        """Set a tolerance value."""
        if value < 0:
            raise ValueError(f"Tolerance '{name}' must be non-negative")
        self.tolerances[name] = value

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "log_level": self.log_level,
            "default_lp_solver": self.default_lp_solver,
            "dedup_decimals": self.dedup_decimals,
            "tolerances": self.tolerances.copy(),
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> 'OpsPlanConfig':
        """Create config from dictionary."""
        return cls(
            log_level=d.get("log_level", _get_default_log_level()),
            default_lp_solver=d.get("default_lp_solver", _get_default_lp_solver()),
            dedup_decimals=int(d.get("dedup_decimals", 2)),
            tolerances=dict(d.get("tolerances", {})),
        )

    def save(self, path: Optional[Path] = None) -> None:
        """
        Save configuration to a TOML file.

        Args:
            path: Path to save to (default: ./opsplan.toml)
        """
        if path is None:
            path = Path("opsplan.toml")

        lines = [
            "# OpsPlan Configuration",
            "",
            "[general]",
            f'log_level = "{self.log_level}"',
            f'default_lp_solver = "{self.default_lp_solver}"',
            f"dedup_decimals = {self.dedup_decimals}",
            "",
            "[tolerances]",
        ]
        for name, value in self.tolerances.items():
            lines.append(f"{name} = {value}")

        Path(path).write_text("\n".join(lines) + "\n")

    @classmethod
    def load(cls, path: Optional[Path] = None) -> 'OpsPlanConfig':
        """
        Load configuration from a TOML file.

        Args:
            path: Path to load from (default: ./opsplan.toml or ~/.opsplan/config.toml)

        Returns:
            Loaded configuration (or default if file not found)
        """
        if path is None:
            local_config = Path("opsplan.toml")
            user_config = Path.home() / ".opsplan" / "config.toml"

            if local_config.exists():
                path = local_config
            elif user_config.exists():
                path = user_config
            else:
                return cls()

        path = Path(path)
        if not path.exists():
            return cls()

        config_dict: dict[str, Any] = {"tolerances": {}}
        current_section = None

        for line in path.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if line.startswith("[") and line.endswith("]"):
                current_section = line[1:-1]
                continue

            if "=" in line:
                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip()

                if value.startswith('"'):
                    value = value.strip('"')
                elif value.isdigit():
                    value = int(value)
                else:
                    try:
                        value = float(value)
                    except ValueError:
                        pass

                if current_section == "tolerances":
                    config_dict["tolerances"][key] = float(value)
                else:
                    config_dict[key] = value

        return cls.from_dict(config_dict)


# Global configuration instance
config = OpsPlanConfig()


def get_tolerance(name: str) -> float:
    """Get a tolerance from the global configuration."""
    return config.get_tolerance(name)


def set_tolerance(name: str, value: float) -> None:
    """Set a tolerance on the global configuration."""
    config.set_tolerance(name, value)


def configure_logging(
    level: Optional[Union[str, int]] = None,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Attach handlers to the ``opsplan`` logger.

    The root logger is left alone, so applications embedding the library keep
    control of their own logging setup.

    Args:
        level: Logging level (default: config.log_level)
        log_file: Optional file to mirror log records into

    Returns:
        The configured ``opsplan`` logger
    """
    if level is None:
        level = config.log_level

    logger = logging.getLogger("opsplan")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
