# scene_config.py

"""
Scene Configuration

Tunable parameters for the scene. The defaults below give a dense, lively
scene; config.json may override any of them under its "scene" section.

Data Contract:
- build_scene_config(overrides) returns a new dict with every key present.
- validate_scene_config(config) raises ValueError on any malformed value.
  A bad configuration is a programming error, so it is rejected when the
  scene is constructed rather than handled at runtime.
"""

import json
import logging

logger = logging.getLogger("generative_scene")

SHAPE_KIND_NAMES = ("circle", "square", "triangle", "pentagon", "star", "hexagram")
POINTER_MODES = ("repel", "attract")

DEFAULT_SCENE_CONFIG = {
    # --- Population ---
    "shape_count": 80,
    "shape_size_min": 15.0,
    "shape_size_max": 45.0,
    "shape_kinds": list(SHAPE_KIND_NAMES),
    "star_points_min": 5,
    "star_points_max": 8,
    "initial_speed_min": 1.0,
    "initial_speed_max": 3.0,

    # --- Integration ---
    "max_speed": 5.0,
    "friction": 0.975,
    "max_force": 2.0,
    "spin_boost": 0.05,        # Extra rotation per tick at max speed (radians)
    "rotation_speed_max": 0.05,
    "hue_shift_max": 1.0,      # Degrees per tick

    # --- Pointer interaction ---
    "pointer_mode": "repel",
    "pointer_radius": 150.0,
    "pointer_force": 1.5,
    "pointer_core_radius": 30.0,
    "pointer_core_force": 0.5,
    "density_min": 0.6,
    "density_max": 1.4,
    "rescale_radii_on_resize": False,
    "pointer_radius_ratio": 0.2, # Of min(width, height), used when rescaling

    # --- Peer interaction ---
    "peer_radius": 50.0,
    "peer_force": 0.8,
    "peer_separation_buffer": 10.0,

    # --- Center seeking ---
    "center_pull": 0.005,

    # --- Wobble and pulse ---
    "wobble_speed_min": 0.01,
    "wobble_speed_max": 0.05,
    "wobble_amount_min": 0.1,
    "wobble_amount_max": 0.4,
    "pulse_speed_min": 0.02,
    "pulse_speed_max": 0.08,
    "pulse_amount_max": 0.15,

    # --- Shape colour ---
    "hue_speed_boost": 30.0,
    "saturation_min": 70.0,
    "saturation_max": 100.0,
    "brightness": 95.0,
    "shape_alpha": 85.0,
    "glow_ratio": 1.8,
    "glow_alpha_min": 8.0,
    "glow_alpha_max": 40.0,

    # --- Trail particles ---
    "emit_rate": 0.3,
    "particle_cap": 400,
    "particle_lifespan": 45,
    "particle_lifespan_jitter": 10,
    "particle_speed": 1.2,
    "particle_size_fraction": 0.25,
    "particle_friction": 0.95,
    "particle_jitter": 0.05,
    "particle_alpha_max": 90.0,
    "particle_hue_drift": 1.5,

    # --- Click explosion ---
    "explosion_radius": 200.0,
    "explosion_force": 15.0,
    "explosion_edge_force": 1.0,
    "click_spin_jolt": 0.2,
    "click_hue_jolt": 0.5,

    # --- Shockwaves ---
    "shockwave_max_radius": 250.0,
    "shockwave_speed_ratio": 0.06,
    "shockwave_speed_decay": 0.96,
    "shockwave_fade_step": 0.02,
    "shockwave_stroke_weight": 6.0,
    "shockwave_stroke_decay": 0.97,
    "shockwave_alpha_max": 80.0,
    "secondary_shockwave_chance": 0.5,
    "secondary_shockwave_offset": 40.0,
    "secondary_shockwave_scale": 0.6,

    # --- Connection network ---
    "connection_distance": 100.0, # 0 disables connections
    "connection_alpha_max": 60.0,
    "connection_distance_ratio": 0.1, # Of min(width, height), used when rescaling

    # --- Diagnostics ---
    "log_interval": 100, # Ticks between statistics log lines
}

_NON_NEGATIVE_KEYS = (
    "shape_count", "shape_size_min", "initial_speed_min", "max_force", "spin_boost",
    "rotation_speed_max", "hue_shift_max", "pointer_radius", "pointer_force",
    "pointer_core_radius", "pointer_core_force", "density_min", "peer_radius",
    "peer_force", "peer_separation_buffer", "center_pull", "wobble_speed_min",
    "wobble_amount_min", "pulse_speed_min", "pulse_amount_max", "hue_speed_boost",
    "saturation_min", "glow_ratio", "glow_alpha_min", "emit_rate", "particle_cap",
    "particle_lifespan_jitter", "particle_speed", "particle_size_fraction",
    "particle_jitter", "particle_alpha_max", "particle_hue_drift", "explosion_radius",
    "explosion_force", "explosion_edge_force", "click_spin_jolt", "click_hue_jolt",
    "shockwave_max_radius", "shockwave_speed_ratio", "shockwave_stroke_weight",
    "shockwave_alpha_max", "secondary_shockwave_offset", "connection_distance",
    "connection_alpha_max", "pointer_radius_ratio", "connection_distance_ratio",
)

_POSITIVE_KEYS = ("max_speed", "particle_lifespan", "shockwave_fade_step", "log_interval")

_UNIT_INTERVAL_KEYS = (
    "friction", "particle_friction", "shockwave_speed_decay", "shockwave_stroke_decay",
    "secondary_shockwave_chance", "secondary_shockwave_scale", "emit_rate",
)

_ORDERED_PAIRS = (
    ("shape_size_min", "shape_size_max"),
    ("star_points_min", "star_points_max"),
    ("initial_speed_min", "initial_speed_max"),
    ("density_min", "density_max"),
    ("wobble_speed_min", "wobble_speed_max"),
    ("wobble_amount_min", "wobble_amount_max"),
    ("pulse_speed_min", "pulse_speed_max"),
    ("saturation_min", "saturation_max"),
    ("glow_alpha_min", "glow_alpha_max"),
)


def build_scene_config(overrides=None):
    """Returns the default scene config with `overrides` applied and validated."""
    overrides = overrides or {}
    unknown = sorted(set(overrides) - set(DEFAULT_SCENE_CONFIG))
    if unknown:
        raise ValueError(f"Unknown scene config keys: {unknown}")

    config = dict(DEFAULT_SCENE_CONFIG)
    config["shape_kinds"] = list(DEFAULT_SCENE_CONFIG["shape_kinds"])
    config.update(overrides)
    validate_scene_config(config)
    return config


def validate_scene_config(config: dict):
    """
    Checks every precondition the scene relies on.

    - Inputs: config (dict) - A complete scene config.
    - Outputs: None.
    - Side Effects: Raises ValueError describing the first violation found.
    """
    missing = sorted(set(DEFAULT_SCENE_CONFIG) - set(config))
    if missing:
        raise ValueError(f"Scene config is missing keys: {missing}")

    for key in _NON_NEGATIVE_KEYS:
        if config[key] < 0:
            raise ValueError(f"'{key}' must be non-negative, got {config[key]}")

    for key in _POSITIVE_KEYS:
        if config[key] <= 0:
            raise ValueError(f"'{key}' must be positive, got {config[key]}")

    for key in _UNIT_INTERVAL_KEYS:
        if not 0.0 <= config[key] <= 1.0:
            raise ValueError(f"'{key}' must be within [0, 1], got {config[key]}")

    if config["friction"] == 0.0:
        raise ValueError("'friction' must be greater than 0")

    for low_key, high_key in _ORDERED_PAIRS:
        if config[low_key] > config[high_key]:
            raise ValueError(
                f"'{low_key}' ({config[low_key]}) must not exceed '{high_key}' ({config[high_key]})"
            )

    if config["star_points_min"] < 3:
        raise ValueError("'star_points_min' must be at least 3")

    # A shape must never render with a non-positive size.
    if config["wobble_amount_max"] + config["pulse_amount_max"] >= 1.0:
        raise ValueError("'wobble_amount_max' + 'pulse_amount_max' must stay below 1")

    kinds = config["shape_kinds"]
    if not kinds:
        raise ValueError("'shape_kinds' must name at least one shape kind")
    for kind in kinds:
        if kind not in SHAPE_KIND_NAMES:
            raise ValueError(f"Unknown shape kind '{kind}'. Expected one of {SHAPE_KIND_NAMES}")

    if config["pointer_mode"] not in POINTER_MODES:
        raise ValueError(f"'pointer_mode' must be one of {POINTER_MODES}, got {config['pointer_mode']!r}")


def load_config(config_path='config.json'):
    """
    Loads the application config file and resolves its scene section.

    - Inputs: config_path (str) - Path to the JSON configuration file.
    - Outputs: (config, scene_config) - The raw file contents and the
      validated scene config built from its optional "scene" section.
    """
    with open(config_path, 'r') as f:
        config = json.load(f)

    scene_config = build_scene_config(config.get('scene', {}))
    logger.debug(f"Scene config resolved from {config_path}: {scene_config}")
    return config, scene_config
