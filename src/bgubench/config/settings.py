"""Typed harness configuration.

All settings are dataclasses with ``__post_init__`` validation so a bad value
fails before any image is loaded or any operator is timed. Sections map
one-to-one onto TOML tables::

    [filter]
    r_sigma = 0.125
    s_sigma = 16
    epsilon = 1e-4
    fixtures_dir = "../images"

    [bench]
    samples = 10
    iterations = 3

    [operators.filter]
    manual = "my_bgu.manual:bgu"
    auto_scheduled = "my_bgu.auto:bgu"
"""

import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Union

from bgubench.config.environment import apply_environment_overrides, get_env_value
from bgubench.config.loaders import deep_merge_dict, load_toml
from bgubench.effects.burst import (
    DEFAULT_BURST_HEIGHT,
    DEFAULT_BURST_WIDTH,
    DEFAULT_NUM_FRAMES,
    BurstParameters,
)
from bgubench.validation.golden import DEFAULT_EPSILON

logger = logging.getLogger(__name__)

# Looked up in the working directory when no path is given.
DEFAULT_CONFIG_FILE = "bgubench.toml"


def _require_number(name: str, value: Any, minimum: float, inclusive: bool = True) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    if value < minimum or (not inclusive and value == minimum):
        bound = ">=" if inclusive else ">"
        raise ValueError(f"{name} must be {bound} {minimum}, got {value}")


def _require_int(name: str, value: Any, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")


@dataclass
class FilterConfig:
    """Guided upsampling scenario settings.

    Attributes:
        r_sigma: Radiometric (range) parameter passed to every operator.
        s_sigma: Spatial parameter passed to every operator.
        epsilon: Absolute tolerance of the golden check.
        fixtures_dir: Directory holding the golden fixtures, relative to the
            working directory unless absolute.
        before_fixture: File name of the expected downsampled input.
        after_fixture: File name of the expected low-res effect output.
    """

    r_sigma: float = 1.0 / 8.0
    s_sigma: int = 16
    epsilon: float = DEFAULT_EPSILON
    fixtures_dir: str = "../images"
    before_fixture: str = "low_res_in.png"
    after_fixture: str = "low_res_out.png"

    def __post_init__(self):
        _require_number("filter.r_sigma", self.r_sigma, 0.0, inclusive=False)
        _require_int("filter.s_sigma", self.s_sigma, 1)
        _require_number("filter.epsilon", self.epsilon, 0.0)

    @property
    def before_fixture_path(self) -> Path:
        return Path(self.fixtures_dir) / self.before_fixture

    @property
    def after_fixture_path(self) -> Path:
        return Path(self.fixtures_dir) / self.after_fixture


@dataclass
class BurstConfig:
    """Burst camera pipeline scenario settings."""

    width: int = DEFAULT_BURST_WIDTH
    height: int = DEFAULT_BURST_HEIGHT
    num_frames: int = DEFAULT_NUM_FRAMES
    seed: int = 0
    black_point: int = 2050
    white_point: int = 15464
    white_balance_r: float = 2.29102
    white_balance_g0: float = 1.0
    white_balance_g1: float = 1.0
    white_balance_b: float = 1.26855
    compression: float = 3.8
    gain: float = 1.1

    def __post_init__(self):
        _require_int("burst.width", self.width, 1)
        _require_int("burst.height", self.height, 1)
        _require_int("burst.num_frames", self.num_frames, 1)
        _require_int("burst.seed", self.seed, 0)
        # Range checks on the camera constants live in BurstParameters.
        self.parameters()

    def parameters(self) -> BurstParameters:
        return BurstParameters(
            black_point=self.black_point,
            white_point=self.white_point,
            white_balance_r=self.white_balance_r,
            white_balance_g0=self.white_balance_g0,
            white_balance_g1=self.white_balance_g1,
            white_balance_b=self.white_balance_b,
            compression=self.compression,
            gain=self.gain,
        )


@dataclass
class BenchConfig:
    """Timing protocol shared by every variant."""

    samples: int = 1
    iterations: int = 1
    warmup: int = 0

    def __post_init__(self):
        _require_int("bench.samples", self.samples, 1)
        _require_int("bench.iterations", self.iterations, 1)
        _require_int("bench.warmup", self.warmup, 0)


@dataclass
class OperatorsConfig:
    """Import targets of the operator implementations, per scenario.

    Keys are variant ids (``manual``, ``auto_scheduled``,
    ``gradient_auto_scheduled``); values are ``"module:attribute"`` targets.
    """

    filter: dict[str, str] = field(default_factory=dict)
    burst: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        for scenario in ("filter", "burst"):
            targets = getattr(self, scenario)
            if not isinstance(targets, dict) or not all(
                isinstance(v, str) for v in targets.values()
            ):
                raise ValueError(f"operators.{scenario} must map variant ids to strings")


@dataclass
class LoggingConfig:
    """Root log level, by name or by number (``"INFO"``, ``20``)."""

    level: str = "WARNING"

    def __post_init__(self):
        level = str(self.level).strip()
        if level.isdigit():
            level = logging.getLevelName(int(level))
        self.level = level.upper()
        if not isinstance(logging.getLevelName(self.level), int):
            raise ValueError(f"logging.level must be a logging level, got {self.level!r}")


def _coerce_to_field_types(section_cls: type, values: dict[str, Any]) -> dict[str, Any]:
    """Render numbers as strings for ``str`` fields.

    Environment overrides are converted without knowing their target, so a
    directory named ``2024`` arrives as an int.
    """
    field_types = {f.name: f.type for f in fields(section_cls)}
    coerced = dict(values)
    for key, value in values.items():
        if field_types.get(key) is str and isinstance(value, (int, float)):
            if isinstance(value, bool):
                continue
            coerced[key] = str(value)
    return coerced


_SECTIONS = {
    "filter": FilterConfig,
    "burst": BurstConfig,
    "bench": BenchConfig,
    "operators": OperatorsConfig,
    "logging": LoggingConfig,
}


@dataclass
class HarnessConfig:
    """Complete harness configuration."""

    filter: FilterConfig = field(default_factory=FilterConfig)
    burst: BurstConfig = field(default_factory=BurstConfig)
    bench: BenchConfig = field(default_factory=BenchConfig)
    operators: OperatorsConfig = field(default_factory=OperatorsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HarnessConfig":
        """Build a configuration from nested dictionaries.

        Missing sections and keys take their defaults.

        Raises:
            ValueError: On unknown sections or keys, or invalid values.
        """
        unknown_sections = sorted(set(data) - set(_SECTIONS))
        if unknown_sections:
            raise ValueError(f"Unknown configuration section(s): {unknown_sections}")

        sections = {}
        for name, section_cls in _SECTIONS.items():
            values = data.get(name, {})
            if not isinstance(values, dict):
                raise ValueError(f"Configuration section [{name}] must be a table")
            allowed = {f.name for f in fields(section_cls)}
            unknown_keys = sorted(set(values) - allowed)
            if unknown_keys:
                raise ValueError(f"Unknown key(s) in [{name}]: {unknown_keys}")
            sections[name] = section_cls(**_coerce_to_field_types(section_cls, values))
        return cls(**sections)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def load_harness_config(config_path: Union[str, Path, None] = None) -> HarnessConfig:
    """Load the harness configuration.

    Layers, lowest precedence first: built-in defaults, the TOML file
    (``config_path``, else ``$BGUBENCH_CONFIG``, else ``./bgubench.toml`` when
    it exists), then ``BGUBENCH_*`` environment overrides.

    Raises:
        FileNotFoundError: If an explicitly named configuration file is missing.
        ValueError: If the resulting configuration is invalid.
    """
    if config_path is None:
        config_path = get_env_value("CONFIG")
    if config_path is None and Path(DEFAULT_CONFIG_FILE).exists():
        config_path = DEFAULT_CONFIG_FILE

    data = HarnessConfig().to_dict()
    if config_path is not None:
        logger.info("Loading configuration from %s", config_path)
        data = deep_merge_dict(data, load_toml(config_path))

    return HarnessConfig.from_dict(apply_environment_overrides(data))
