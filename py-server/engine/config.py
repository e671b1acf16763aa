"""
Configuration system for the style converter.

Provides structured configuration using dataclasses with clear defaults,
type safety, and backward compatibility with dict-based configs.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Dict, Any, TYPE_CHECKING
import logging
import os

if TYPE_CHECKING:
    from models.figma_types import ConverterOptions

logger = logging.getLogger(__name__)

VALID_ROTATION_UNITS = ("rad", "deg")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _filter_known_keys(config: Dict[str, Any], valid_keys: set, owner: str) -> Dict[str, Any]:
    """Keep only known keys, warning about the rest."""
    filtered = {}
    for key, value in config.items():
        if key in valid_keys:
            filtered[key] = value
        else:
            logger.warning(f"Unknown {owner} key '{key}' will be ignored")
    return filtered


@dataclass
class GeometryOptions:
    """
    Tolerances and switches for the geometry core.

    `rotation_singularity_tolerance` bounds |cos² - sin²| below which a
    rotated box cannot be inverted (odd multiples of 45°).
    """
    rotation_singularity_tolerance: float = 1e-6
    degenerate_length_tolerance: float = 1e-12  # Minimum gradient handle length
    recover_rotated_boxes: bool = True

    def validate(self) -> bool:
        """
        Validate configuration options.

        Returns:
            True if configuration is valid, False otherwise
        """
        if self.rotation_singularity_tolerance < 0:
            logger.error("rotation_singularity_tolerance must be non-negative")
            return False
        if self.degenerate_length_tolerance < 0:
            logger.error("degenerate_length_tolerance must be non-negative")
            return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'rotation_singularity_tolerance': self.rotation_singularity_tolerance,
            'degenerate_length_tolerance': self.degenerate_length_tolerance,
            'recover_rotated_boxes': self.recover_rotated_boxes,
        }

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'GeometryOptions':
        """Create from dictionary, ignoring unknown keys."""
        valid_keys = {
            'rotation_singularity_tolerance',
            'degenerate_length_tolerance',
            'recover_rotated_boxes',
        }
        return cls(**_filter_known_keys(config, valid_keys, "geometry option"))


@dataclass
class CssFormatOptions:
    """Controls how numbers and rotations are written into CSS values."""
    precision: int = 4  # Decimal places kept in emitted numbers
    rotation_unit: str = "rad"  # "rad" or "deg"

    def validate(self) -> bool:
        if self.precision < 0:
            logger.error("precision must be non-negative")
            return False
        if self.rotation_unit not in VALID_ROTATION_UNITS:
            logger.error(f"rotation_unit must be one of {VALID_ROTATION_UNITS}")
            return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            'precision': self.precision,
            'rotation_unit': self.rotation_unit,
        }

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'CssFormatOptions':
        valid_keys = {'precision', 'rotation_unit'}
        return cls(**_filter_known_keys(config, valid_keys, "css option"))


@dataclass
class ConverterConfig:
    """
    Central configuration for node style conversion.

    Example:
        >>> config = ConverterConfig(css=CssFormatOptions(precision=2))
        >>> mapper = StyleMapper(config)
    """

    geometry: GeometryOptions = field(default_factory=GeometryOptions)
    css: CssFormatOptions = field(default_factory=CssFormatOptions)

    # Logging
    log_level: str = "INFO"

    def validate(self) -> bool:
        """
        Validate configuration values.

        Returns:
            True if all values are valid, False otherwise
        """
        if self.log_level.upper() not in VALID_LOG_LEVELS:
            logger.error(f"log_level must be one of {VALID_LOG_LEVELS}")
            return False
        return self.geometry.validate() and self.css.validate()

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert configuration to dictionary.

        Useful for serialization, logging, and debugging.
        """
        return {
            'geometry': self.geometry.to_dict(),
            'css': self.css.to_dict(),
            'log_level': self.log_level,
        }

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'ConverterConfig':
        """
        Create ConverterConfig from dictionary.

        Nested option groups may be given as dicts. Unknown keys are
        ignored with a warning.

        Args:
            config: Dictionary of configuration values

        Returns:
            ConverterConfig instance
        """
        filtered = _filter_known_keys(config, {'geometry', 'css', 'log_level'}, "config")
        if isinstance(filtered.get('geometry'), dict):
            filtered['geometry'] = GeometryOptions.from_dict(filtered['geometry'])
        if isinstance(filtered.get('css'), dict):
            filtered['css'] = CssFormatOptions.from_dict(filtered['css'])
        return cls(**filtered)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> 'ConverterConfig':
        """
        Build configuration from environment variables.

        Reads LOG_LEVEL, CSS_PRECISION and ROTATION_SINGULARITY_TOLERANCE;
        anything unset keeps its default.
        """
        env = os.environ if environ is None else environ
        config = cls()
        config.log_level = env.get("LOG_LEVEL", config.log_level).upper()

        precision = env.get("CSS_PRECISION")
        if precision is not None:
            try:
                config.css.precision = int(precision)
            except ValueError:
                logger.warning(f"Ignoring invalid CSS_PRECISION '{precision}'")

        tolerance = env.get("ROTATION_SINGULARITY_TOLERANCE")
        if tolerance is not None:
            try:
                config.geometry.rotation_singularity_tolerance = float(tolerance)
            except ValueError:
                logger.warning(f"Ignoring invalid ROTATION_SINGULARITY_TOLERANCE '{tolerance}'")

        return config

    @classmethod
    def default(cls) -> 'ConverterConfig':
        """Create configuration with default values."""
        return cls()

    def with_overrides(self, options: Optional['ConverterOptions']) -> 'ConverterConfig':
        """
        Return a copy with per-request API options applied.

        Fields left as None in `options` keep this config's values.
        """
        if options is None:
            return self

        css = replace(self.css)
        geometry = replace(self.geometry)
        if options.precision is not None:
            css.precision = options.precision
        if options.rotation_unit is not None:
            css.rotation_unit = options.rotation_unit
        if options.recover_rotated_boxes is not None:
            geometry.recover_rotated_boxes = options.recover_rotated_boxes
        if options.rotation_singularity_tolerance is not None:
            geometry.rotation_singularity_tolerance = options.rotation_singularity_tolerance

        return replace(self, css=css, geometry=geometry)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"ConverterConfig("
            f"precision={self.css.precision}, "
            f"rotation_unit={self.css.rotation_unit}, "
            f"recover_rotation={self.geometry.recover_rotated_boxes}, "
            f"log_level={self.log_level})"
        )
