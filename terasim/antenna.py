"""Directional antenna model with a turning receiver beam.

The radiation pattern follows the cosine model: the gain at an angle ``phi``
off boresight is ``20 * log10(cos(phi / 2) ** n)`` dB relative to the maximum
gain, with ``n`` chosen so the pattern is 3 dB down at half the beamwidth.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum

__all__ = [
    "Vector",
    "AntennaMode",
    "DirectionalAntenna",
    "azimuth",
    "wrap_degrees",
    "wrap_radians",
]

_TWO_PI = 2.0 * math.pi


@dataclass(frozen=True)
class Vector:
    """A position in metres."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class AntennaMode(IntEnum):
    """Operating mode of an antenna."""

    TRANSMITTER = 0
    RECEIVER = 1
    OMNI = 2


def azimuth(target: Vector, origin: Vector) -> float:
    """Azimuth in radians of ``target`` as seen from ``origin``."""
    return math.atan2(target.y - origin.y, target.x - origin.x)


def wrap_degrees(angle: float) -> float:
    """Bring an angle in degrees into the interval (-360, 360]."""
    if angle > 360.0:
        angle = math.fmod(angle, 360.0)
        if angle <= 0.0:
            angle += 360.0
    elif angle <= -360.0:
        angle = math.fmod(angle, 360.0)
        if angle <= -360.0:
            angle += 360.0
    return angle


def wrap_radians(angle: float) -> float:
    """Bring an angle in radians into the interval (-pi, pi]."""
    if angle > math.pi:
        angle -= _TWO_PI * math.ceil((angle - math.pi) / _TWO_PI)
    elif angle <= -math.pi:
        angle += _TWO_PI * (math.floor((-math.pi - angle) / _TWO_PI) + 1)
    while angle <= -math.pi:
        angle += _TWO_PI
    while angle > math.pi:
        angle -= _TWO_PI
    return angle


@dataclass
class DirectionalAntenna:
    """A directional antenna shared by transmitter and receiver roles.

    ``beamwidth`` is the 3 dB beamwidth in degrees, ``max_gain`` the boresight
    gain in dB, ``turn_speed`` the receiver's turning speed in circles per
    second and ``initial_angle`` its starting orientation in degrees.
    """

    mode: AntennaMode = AntennaMode.RECEIVER
    beamwidth: float = 40.0
    max_gain: float = 14.12
    turn_speed: float = 57708.85
    initial_angle: float = 0.0

    beamwidth_radians: float = field(init=False, default=0.0)
    exponent: float = field(init=False, default=0.0)
    rx_orientation_degrees: float = field(init=False, default=0.0)
    rx_orientation: float = field(init=False, default=0.0)
    tx_orientation_degrees: float = field(init=False, default=0.0)
    tx_orientation: float = field(init=False, default=0.0)
    rx_gain: float = field(init=False, default=0.0)
    tx_gain: float = field(init=False, default=0.0)

    def __post_init__(self) -> None:
        self.mode = AntennaMode(self.mode)
        self.set_beamwidth(self.beamwidth)

    def set_beamwidth(self, degrees: float) -> None:
        """Set the 3 dB beamwidth in degrees and update the pattern exponent."""
        if not 0.0 < degrees <= 180.0:
            raise ValueError(f"beamwidth must be in (0, 180] degrees, got {degrees}")
        self.beamwidth = degrees
        self.beamwidth_radians = math.radians(degrees)
        self.exponent = -3.0 / (20.0 * math.log10(math.cos(self.beamwidth_radians / 4.0)))

    def _pattern_db(self, phi: float) -> float:
        """Gain in dB relative to boresight at ``phi`` radians off axis."""
        phi = wrap_radians(phi)
        return 20.0 * self.exponent * math.log10(math.cos(phi / 2.0))

    def tune_rx_orientation(self, phi_zero: float) -> float:
        """Point the receiver beam at ``phi_zero`` degrees; return radians."""
        degrees = wrap_degrees(phi_zero)
        self.rx_orientation_degrees = degrees
        self.rx_orientation = math.radians(degrees)
        return self.rx_orientation

    def rx_orientation_at(self, now: float) -> float:
        """Orientation in radians of the turning receiver beam at time ``now`` seconds."""
        return self.tune_rx_orientation(self.initial_angle + self.turn_speed * 360.0 * now)

    def rx_gain_db(self, sender: Vector, receiver: Vector) -> float:
        """Receiver gain in dB towards ``sender`` with the current orientation."""
        phi = azimuth(sender, receiver) - self.rx_orientation
        self.rx_gain = self._pattern_db(phi) + self.max_gain
        return self.rx_gain

    def tx_gain_db(self, sender: Vector, receiver: Vector) -> float:
        """Transmitter gain in dB; the transmitter always points at the receiver."""
        pointing = azimuth(receiver, sender)
        phi = wrap_radians(azimuth(receiver, sender) - pointing)
        self.tx_orientation_degrees = math.degrees(phi)
        self.tx_gain = self._pattern_db(phi) + self.max_gain
        return self.tx_gain

    def record_tx_orientation(self, phi_tx: float) -> None:
        """Remember the transmitter's pointing direction in degrees."""
        self.tx_orientation = phi_tx

    def _pair_gain(self, rx_target: Vector, rx_origin: Vector, tx_target: Vector, tx_origin: Vector) -> None:
        self.rx_gain = self._pattern_db(azimuth(rx_target, rx_origin) - self.rx_orientation) + self.max_gain
        pointing = azimuth(tx_target, tx_origin)
        self.record_tx_orientation(math.degrees(pointing))
        phi_tx = wrap_radians(azimuth(tx_target, tx_origin) - pointing)
        self.tx_orientation_degrees = math.degrees(phi_tx)
        self.tx_gain = self._pattern_db(phi_tx) + self.max_gain

    def antenna_gain(
        self,
        x_position: Vector,
        y_position: Vector,
        x_mode: AntennaMode,
        y_mode: AntennaMode,
        rx_orientation: float,
    ) -> float:
        """Total gain in dB between nodes X and Y.

        ``rx_orientation`` is the receiver's beam orientation in radians. A
        receiver/transmitter pair or two omnidirectional nodes give the sum of
        receive and transmit gains; any other combination gives zero.
        """
        x_mode = AntennaMode(x_mode)
        y_mode = AntennaMode(y_mode)
        self.rx_orientation = rx_orientation
        directional = (AntennaMode.TRANSMITTER, AntennaMode.RECEIVER)
        if x_mode is AntennaMode.RECEIVER and y_mode is AntennaMode.TRANSMITTER:
            self._pair_gain(y_position, x_position, x_position, y_position)
        elif x_mode is AntennaMode.TRANSMITTER and y_mode is AntennaMode.RECEIVER:
            self._pair_gain(x_position, y_position, y_position, x_position)
        elif x_mode not in directional and y_mode not in directional:
            self._pair_gain(x_position, y_position, x_position, y_position)
        else:
            self.rx_gain = 0.0
            self.tx_gain = 0.0
        return self.rx_gain + self.tx_gain