# File: src/dummies/bomb_info.py
"""Dummy BombInfo - answers widget queries from fixed facts."""

import json

from utilities.seed import (
    QUERYKEY_GET_BATTERIES,
    QUERYKEY_GET_PORTS,
    QUERYKEY_GET_SERIAL_NUMBER,
)


class BombInfo:
    """Drop-in BombInfo. Responses are JSON strings, one per widget."""

    def __init__(self, batteries=None, serial=None, ports=None):
        # One entry per battery holder / port plate
        self.batteries = list(batteries or [])
        self.serial = serial
        self.ports = [list(plate) for plate in (ports or [])]
        self.query_counts = {}

    @classmethod
    def from_config(cls, bomb_config):
        return cls(
            batteries=bomb_config.get("batteries"),
            serial=bomb_config.get("serial"),
            ports=bomb_config.get("ports"),
        )

    def query_widgets(self, query_key, query_info=None):
        self.query_counts[query_key] = self.query_counts.get(query_key, 0) + 1

        if query_key == QUERYKEY_GET_BATTERIES:
            return [json.dumps({"numbatteries": n}) for n in self.batteries]
        if query_key == QUERYKEY_GET_SERIAL_NUMBER:
            if self.serial is None:
                return []
            return [json.dumps({"serial": self.serial})]
        if query_key == QUERYKEY_GET_PORTS:
            return [json.dumps({"presentPorts": plate}) for plate in self.ports]
        return []
