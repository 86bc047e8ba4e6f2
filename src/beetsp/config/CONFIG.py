import math

# Configuration
CONFIG = {
    'num_cities': 8,
    'num_foragers': 2,
    'num_onlookers': 4,
    'num_scouts': 4,
    'speed': 2,
    'base_interval': 0.5,   # seconds per generation at speed 1
    'field_width': 800,
    'field_height': 600,
    'padding': 60,
    'res_dir': 'res',
    'colors': {
        'forager': '#fbbf24',
        'onlooker': '#22d3ee',
        'scout': '#f472b6',
        'path': '#94a3b8',
        'best_path': '#10b981',
        'node': '#10b981',
    }
}


class ConfigurationError(ValueError):
    """Raised when a colony configuration cannot produce a valid run."""


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value):
    return (isinstance(value, (int, float)) and not isinstance(value, bool)
            and math.isfinite(value))


def build_config(overrides=None, base=None):
    """Merge overrides onto a base configuration.

    Args:
        overrides (dict, optional): Keys to replace. Unknown keys are rejected.
        base (dict, optional): Starting configuration, CONFIG when omitted.

    Returns:
        dict: A new configuration dict.
    """
    base = CONFIG if base is None else base
    config = dict(base)
    config['colors'] = dict(base['colors'])
    for key, value in (overrides or {}).items():
        if key not in CONFIG:
            raise ConfigurationError(f"Unknown configuration key: {key!r}")
        if key == 'colors':
            config['colors'].update(value)
        else:
            config[key] = value
    return config


def validate_config(config):
    """Fail fast on a configuration that would produce empty or degenerate state."""
    num_cities = config['num_cities']
    if not _is_int(num_cities) or num_cities < 1:
        raise ConfigurationError(
            f"num_cities must be a positive integer, got {num_cities!r}"
        )

    role_counts = {}
    for key in ('num_foragers', 'num_onlookers', 'num_scouts'):
        value = config[key]
        if not _is_int(value) or value < 0:
            raise ConfigurationError(
                f"{key} must be a non-negative integer, got {value!r}"
            )
        role_counts[key] = value
    if sum(role_counts.values()) == 0:
        raise ConfigurationError(
            "Population is empty: every role count is 0"
        )

    for key in ('speed', 'base_interval'):
        value = config[key]
        if not _is_number(value) or value <= 0:
            raise ConfigurationError(f"{key} must be a positive finite number, got {value!r}")

    width, height, padding = config['field_width'], config['field_height'], config['padding']
    if not all(_is_number(v) for v in (width, height, padding)):
        raise ConfigurationError("Field size and padding must be finite numbers")
    if padding < 0 or width - 2 * padding <= 0 or height - 2 * padding <= 0:
        raise ConfigurationError(
            f"padding {padding} leaves no room in a {width}x{height} field"
        )

    return config
