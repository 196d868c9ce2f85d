"""Configuration loader for the tuner CLI."""

from __future__ import annotations

import configparser
import os
from configparser import ConfigParser
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .transport.serial_connection import DEFAULT_BAUDRATE, DEFAULT_DEVICE

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "denon-tuner" / "tuner.ini"
DEVICE_ENV = "TUNER_DEVICE"


@dataclass(slots=True)
class TunerConfig:
    device: str = DEFAULT_DEVICE
    baudrate: int = DEFAULT_BAUDRATE
    debug: bool = False
    verbosity: int = 0
    path: Optional[Path] = None

    @property
    def verbose(self) -> bool:
        return self.verbosity > 0


def load_config(
    path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> TunerConfig:
    """Load settings from defaults, an optional INI file, and the environment.

    The file is optional; a missing file leaves the defaults in place.
    ``TUNER_DEVICE`` overrides the device named in the file.

    Raises:
        ValueError: If the file cannot be parsed or ``baudrate`` is not an
            integer.
    """
    config_path = path or DEFAULT_CONFIG_PATH
    environ = os.environ if environ is None else environ

    parser = ConfigParser()
    parser.read_dict(
        {
            "connection": {
                "device": DEFAULT_DEVICE,
                "baudrate": str(DEFAULT_BAUDRATE),
            }
        }
    )
    try:
        loaded = parser.read(config_path)
    except configparser.Error as exc:
        raise ValueError(f"malformed configuration: {exc}") from exc

    section = parser["connection"]
    device = environ.get(DEVICE_ENV) or section.get("device")
    baudrate = section.getint("baudrate")

    return TunerConfig(
        device=device,
        baudrate=baudrate,
        path=config_path if loaded else None,
    )
