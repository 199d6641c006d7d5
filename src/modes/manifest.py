"""Module Manifest - Central registry for all puzzle modules.

Maps each module key to its class and the settings it accepts, so the entry
point can build whichever module config.json asks for without hardcoded
references.
"""

from .two_bits import TwoBits


MODE_REGISTRY = {
    "TWO_BITS": {
        "class": TwoBits,
        "name": TwoBits.METADATA["name"],
        "settings": TwoBits.METADATA["settings"],
    },
}


def get_mode_class(mode_key):
    """Get the module class for a given key.

    Args:
        mode_key (str): The module identifier (e.g., "TWO_BITS")

    Returns:
        class: The module class, or None if not found
    """
    mode_info = MODE_REGISTRY.get(mode_key)
    if mode_info:
        return mode_info["class"]
    return None


def get_default_settings(mode_key):
    """Default value of every setting a module accepts.

    Args:
        mode_key (str): The module identifier

    Returns:
        dict: {setting_key: default}, empty for unknown modules
    """
    mode_info = MODE_REGISTRY.get(mode_key)
    if not mode_info:
        return {}
    return {s["key"]: s["default"] for s in mode_info["settings"]}


def create_module(mode_key, host, **settings):
    """Build a module, ignoring settings it doesn't declare.

    Raises:
        KeyError: if ``mode_key`` isn't registered
    """
    mode_class = get_mode_class(mode_key)
    if mode_class is None:
        raise KeyError(f"Unknown module {mode_key!r}")
    kwargs = get_default_settings(mode_key)
    for key, value in settings.items():
        if key in kwargs or key in ("clock", "module_id", "rules_seed", "command_delay", "debug_mode"):
            kwargs[key] = value
    return mode_class(host, **kwargs)
