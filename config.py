# config.py

"""
Configuration Model

Turns the parsed configuration (a plain dict, as produced by json.load) into
fully-populated, immutable parameter objects. Every optional field is resolved
against its default exactly once, here, so the simulation never has to deal
with missing values on its hot path.

Data Contract:
- Inputs: a dict with the optional top-level keys documented on Config, and
  the name -> section maps 'color_pickers', 'movers' and 'emitters'.
- Outputs: frozen dataclasses (Config, ColorPickerConfig, MoverConfig,
  EmitterConfig).
- Side Effects: load_config reads a file; unknown keys are logged at DEBUG.
- Invariants: Resolved objects never contain None for a field that has a
  documented default. Vectors are always 2-tuples of floats.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import constants

logger = logging.getLogger(constants.LOGGER_NAME)

Vector = Tuple[float, float]
Interval = Tuple[float, float]


class ConfigError(ValueError):
    """Raised when a configuration source is malformed."""


def _vector(value, name: str) -> Vector:
    """Coerces a 2-element sequence into a tuple of floats."""
    try:
        x, y = value
        return (float(x), float(y))
    except (TypeError, ValueError):
        raise ConfigError(f"'{name}' must be a 2-element list of numbers, got {value!r}") from None


def _optional_vector(value, name: str) -> Optional[Vector]:
    if value is None:
        return None
    return _vector(value, name)


def _number(value, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"'{name}' must be a number, got {value!r}") from None


def _optional_seed(value, name: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"'{name}' must be a non-negative integer, got {value!r}")
    return value


def _section(data, name: str) -> dict:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Section '{name}' must be a table, got {type(data).__name__}")
    return data


def _warn_unknown(section: dict, known: set, where: str):
    for key in section:
        if key not in known:
            logger.debug(f"Ignoring unknown key '{key}' in {where}")


@dataclass(frozen=True)
class ColorPickerConfig:
    hue: float = 0.0
    saturation: float = 0.5
    lightness: float = 0.5
    alpha: float = 1.0
    range_hue: Optional[Interval] = None
    range_saturation: Optional[Interval] = None
    range_lightness: Optional[Interval] = None
    range_alpha: Optional[Interval] = None
    num_colors: int = 1

    @classmethod
    def from_dict(cls, name: str, data) -> "ColorPickerConfig":
        data = _section(data, f"color_pickers.{name}")
        _warn_unknown(data, set(cls.__dataclass_fields__), f"color_pickers.{name}")
        where = f"color_pickers.{name}"
        num_colors = data.get('num_colors', 1)
        if isinstance(num_colors, bool) or not isinstance(num_colors, int):
            raise ConfigError(f"'{where}.num_colors' must be an integer, got {num_colors!r}")
        return cls(
            hue=_number(data.get('hue', 0.0), f"{where}.hue"),
            saturation=_number(data.get('saturation', 0.5), f"{where}.saturation"),
            lightness=_number(data.get('lightness', 0.5), f"{where}.lightness"),
            alpha=_number(data.get('alpha', 1.0), f"{where}.alpha"),
            range_hue=_optional_vector(data.get('range_hue'), f"{where}.range_hue"),
            range_saturation=_optional_vector(data.get('range_saturation'), f"{where}.range_saturation"),
            range_lightness=_optional_vector(data.get('range_lightness'), f"{where}.range_lightness"),
            range_alpha=_optional_vector(data.get('range_alpha'), f"{where}.range_alpha"),
            num_colors=num_colors,
        )


@dataclass(frozen=True)
class MoverConfig:
    inner: Vector
    outer: Vector
    scale: Vector
    mover_type: str = "ellipse"
    translation: Vector = (0.0, 0.0)
    rotation_angle: float = 0.0  # Radians
    rotation_speed: float = 0.0  # Radians per unit of elapsed time

    @classmethod
    def from_dict(cls, name: str, data) -> "MoverConfig":
        where = f"movers.{name}"
        data = _section(data, where)
        _warn_unknown(data, set(cls.__dataclass_fields__), where)
        for required in ('inner', 'outer', 'scale'):
            if required not in data:
                raise ConfigError(f"'{where}' is missing required field '{required}'")
        return cls(
            inner=_vector(data['inner'], f"{where}.inner"),
            outer=_vector(data['outer'], f"{where}.outer"),
            scale=_vector(data['scale'], f"{where}.scale"),
            mover_type=str(data.get('mover_type', "ellipse")),
            translation=_vector(data.get('translation', (0.0, 0.0)), f"{where}.translation"),
            rotation_angle=_number(data.get('rotation_angle', 0.0), f"{where}.rotation_angle"),
            rotation_speed=_number(data.get('rotation_speed', 0.0), f"{where}.rotation_speed"),
        )


@dataclass(frozen=True)
class EmitterConfig:
    color_picker: str = ""
    mover: Optional[str] = None
    flight_size: int = 10
    initial_velocity: Vector = (0.0, 0.0)
    life_span: float = 512.0
    noise_field: bool = False
    noise_scale: float = constants.DEFAULT_NOISE_SCALE
    noise_strength: float = constants.DEFAULT_NOISE_STRENGTH
    origin: Vector = (0.0, 0.0)
    radius: float = 10.0
    stroke_weight: float = 2.0
    randomize_position: bool = False
    randomize_velocity: bool = True
    visualize_noise_field: bool = False

    # Keys accepted in the source besides the field names
    ALIASES = {'position': 'origin', 'velocity': 'initial_velocity'}

    @classmethod
    def from_dict(cls, name: str, data) -> "EmitterConfig":
        where = f"emitters.{name}"
        data = _section(data, where)
        _warn_unknown(data, set(cls.__dataclass_fields__) | set(cls.ALIASES), where)

        # --- Resolve aliases; the canonical key wins when both are present ---
        resolved = dict(data)
        for alias, canonical in cls.ALIASES.items():
            if alias in resolved:
                value = resolved.pop(alias)
                resolved.setdefault(canonical, value)

        flight_size = resolved.get('flight_size', 10)
        if isinstance(flight_size, bool) or not isinstance(flight_size, int) or flight_size < 0:
            raise ConfigError(f"'{where}.flight_size' must be a non-negative integer, got {flight_size!r}")

        mover = resolved.get('mover')
        return cls(
            color_picker=str(resolved.get('color_picker', "")),
            mover=str(mover) if mover is not None else None,
            flight_size=flight_size,
            initial_velocity=_vector(resolved.get('initial_velocity', (0.0, 0.0)), f"{where}.initial_velocity"),
            life_span=_number(resolved.get('life_span', 512.0), f"{where}.life_span"),
            noise_field=bool(resolved.get('noise_field', False)),
            noise_scale=_number(resolved.get('noise_scale', constants.DEFAULT_NOISE_SCALE), f"{where}.noise_scale"),
            noise_strength=_number(resolved.get('noise_strength', constants.DEFAULT_NOISE_STRENGTH), f"{where}.noise_strength"),
            origin=_vector(resolved.get('origin', (0.0, 0.0)), f"{where}.origin"),
            radius=_number(resolved.get('radius', 10.0), f"{where}.radius"),
            stroke_weight=_number(resolved.get('stroke_weight', 2.0), f"{where}.stroke_weight"),
            randomize_position=bool(resolved.get('randomize_position', False)),
            randomize_velocity=bool(resolved.get('randomize_velocity', True)),
            visualize_noise_field=bool(resolved.get('visualize_noise_field', False)),
        )


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    to_file: bool = True


@dataclass(frozen=True)
class Config:
    """
    The complete, resolved configuration for one run.

    Constructed once at startup and passed by reference to every factory that
    needs it (Simulation, Emitter, ColorPicker, Mover).
    """
    run_id: str = "default"
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    master_seed: Optional[int] = None
    seed: Optional[int] = None
    capture_prefix: str = "particle_"
    use_emitters: List[str] = field(default_factory=list)
    window_width: int = constants.DEFAULT_WINDOW_WIDTH
    window_height: int = constants.DEFAULT_WINDOW_HEIGHT
    emit_probability: float = 0.1
    time_scale: float = 1.0 / 360.0
    color_pickers: Dict[str, ColorPickerConfig] = field(default_factory=dict)
    movers: Dict[str, MoverConfig] = field(default_factory=dict)
    emitters: Dict[str, EmitterConfig] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data) -> "Config":
        data = _section(data, "<root>")
        _warn_unknown(data, set(cls.__dataclass_fields__), "<root>")

        log_section = _section(data.get('logging'), "logging")
        log_config = LoggingConfig(
            level=str(log_section.get('level', LoggingConfig.level)).upper(),
            format=str(log_section.get('format', LoggingConfig.format)),
            to_file=bool(log_section.get('to_file', True)),
        )

        color_pickers = {
            name: ColorPickerConfig.from_dict(name, section)
            for name, section in _section(data.get('color_pickers'), "color_pickers").items()
        }
        movers = {
            name: MoverConfig.from_dict(name, section)
            for name, section in _section(data.get('movers'), "movers").items()
        }
        emitters = {
            name: EmitterConfig.from_dict(name, section)
            for name, section in _section(data.get('emitters'), "emitters").items()
        }

        # --- Which emitters to run, in order ---
        use_emitters = data.get('use_emitters')
        if use_emitters is None:
            use_emitters = list(emitters)
        elif not isinstance(use_emitters, list):
            raise ConfigError(f"'use_emitters' must be a list of names, got {use_emitters!r}")
        for name in use_emitters:
            if name not in emitters:
                raise ConfigError(f"'use_emitters' references unknown emitter '{name}'")

        return cls(
            run_id=str(data.get('run_id', "default")),
            logging=log_config,
            master_seed=_optional_seed(data.get('master_seed'), "master_seed"),
            seed=_optional_seed(data.get('seed'), "seed"),
            capture_prefix=str(data.get('capture_prefix', "particle_")),
            use_emitters=[str(name) for name in use_emitters],
            window_width=int(data.get('window_width', constants.DEFAULT_WINDOW_WIDTH)),
            window_height=int(data.get('window_height', constants.DEFAULT_WINDOW_HEIGHT)),
            emit_probability=_number(data.get('emit_probability', 0.1), "emit_probability"),
            time_scale=_number(data.get('time_scale', 1.0 / 360.0), "time_scale"),
            color_pickers=color_pickers,
            movers=movers,
            emitters=emitters,
        )


# Used when no configuration file can be found.
DEFAULT_CONFIG = {
    'capture_prefix': "particle_",
    'color_pickers': {
        'mono_green': {
            'hue': 120,
            'range_saturation': [0.3, 0.7],
            'range_lightness': [0.3, 0.7],
        },
    },
    'emitters': {
        'default': {
            'position': [0, 0],
            'velocity': [0, 0],
            'life_span': 512,
            'randomize_position': False,
            'color_picker': "mono_green",
        },
    },
}


def load_config(config_path: str = 'config.json') -> Config:
    """
    Reads and resolves the configuration file.

    - Inputs: config_path (str) - Path to a JSON configuration file.
    - Outputs: Config
    - Side Effects: Logs a warning and uses DEFAULT_CONFIG if the file is missing.
    - Raises: ConfigError if the file is not valid JSON or has the wrong shape.
    """
    try:
        with open(config_path, 'r') as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.warning(f"Config file '{config_path}' not found, using built-in default configuration.")
        data = DEFAULT_CONFIG
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file '{config_path}' is not valid JSON: {e}") from e
    return Config.from_dict(data)
