# File: src/utilities/seed.py
"""Starting code derivation from the bomb's batteries, serial number and ports.

    code = first_letter_position + last_digit * battery_count
    code *= 2 if a Stereo RCA port is present and no RJ-45 port is
    code %= 100

Widget responses arrive from the host as JSON strings, one per widget, e.g.
``{"numbatteries": 2}``, ``{"serial": "AB3CD4"}`` or
``{"presentPorts": ["StereoRCA", "PS2"]}``. Already-decoded dicts are accepted
too.
"""

import json

from utilities.labels import SERIAL_ALPHABET
from utilities.logger import ModuleLogger

QUERYKEY_GET_BATTERIES = "batteries"
QUERYKEY_GET_SERIAL_NUMBER = "serial"
QUERYKEY_GET_PORTS = "ports"

DEFAULT_SERIAL = "0"


class SerialNumberError(ValueError):
    """Raised when the serial number can't produce a final digit."""


def _decode(response):
    if isinstance(response, (str, bytes)):
        return json.loads(response)
    return response


def _responses(bomb_info, key):
    """Query one widget type. A host that returns nothing counts as no widgets."""
    responses = bomb_info.query_widgets(key)
    if responses is None:
        ModuleLogger.warning("SEED", f"No response for widget query '{key}'")
        return []
    return [_decode(r) for r in responses]


def battery_count(responses):
    """Total batteries across all battery holders."""
    return sum(_decode(r).get("numbatteries", 0) for r in responses)


def serial_number(responses):
    """Serial from the first serial widget, or "0" when the bomb has none."""
    for response in responses:
        return _decode(response)["serial"]
    return DEFAULT_SERIAL


def serial_letter_modifier(serial):
    """1-based alphabet position of the first letter in the serial, 0 if none."""
    for char in serial:
        index = SERIAL_ALPHABET.find(char)
        if index >= 0:
            return index + 1
    return 0


def serial_last_digit(serial):
    if not serial or serial[-1] not in "0123456789":
        raise SerialNumberError(f"Serial number {serial!r} does not end in a digit")
    return int(serial[-1])


def present_ports(responses):
    """Union of every port plate's ports."""
    ports = set()
    for response in responses:
        ports.update(_decode(response).get("presentPorts", []))
    return ports


def has_stereo_rca_only(responses):
    ports = present_ports(responses)
    return "StereoRCA" in ports and "RJ45" not in ports


def calculate_initial_code(batteries, serial, stereo_rca_only):
    """Pure form of the starting code formula."""
    code = serial_letter_modifier(serial) + serial_last_digit(serial) * batteries
    if stereo_rca_only:
        code *= 2
    return code % 100


def derive_initial_code(bomb_info):
    """Query the host once per fact and compute the starting code."""
    batteries = battery_count(_responses(bomb_info, QUERYKEY_GET_BATTERIES))
    serial = serial_number(_responses(bomb_info, QUERYKEY_GET_SERIAL_NUMBER))
    rca_only = has_stereo_rca_only(_responses(bomb_info, QUERYKEY_GET_PORTS))

    ModuleLogger.debug(
        "SEED",
        f"batteries={batteries} serial={serial} stereo_rca_only={rca_only}"
    )
    return calculate_initial_code(batteries, serial, rca_only)
