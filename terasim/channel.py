"""Shared terahertz channel connecting devices with directional antennas.

For every transmission the channel works out the link budget towards every
other attached device. That means the propagation delay and the total
antenna gain between the pair. With a loss model attached it also gives
the received power. The channel keeps the list of signals currently in
the air, so that the physical layer can compute interference.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Optional

from terasim.antenna import AntennaMode, DirectionalAntenna, Vector

__all__ = [
    "Device",
    "NoiseEntry",
    "LinkBudget",
    "Channel",
    "dbm_to_w",
]

SPEED_OF_LIGHT = 299792458.0  # [m/s]

LossModel = Callable[[Vector, Vector, float], float]


def dbm_to_w(dbm: float) -> float:
    """Convert a power in dBm to watts."""
    return 10.0 ** (dbm / 10.0) / 1000.0


@dataclass(eq=False)
class Device:
    """A node attached to the channel: a position and a directional antenna."""

    node_id: int
    position: Vector = field(default_factory=Vector)
    antenna: DirectionalAntenna = field(default_factory=DirectionalAntenna)
    phy: Any = None


@dataclass(eq=False)
class NoiseEntry:
    """A signal in the air at one receiver."""

    packet: Any
    receiver: Device
    tx_duration: float
    tx_end: float
    rx_power: float

    def matches(self, other: "NoiseEntry") -> bool:
        """True if both entries refer to the same packet at the same receiver."""
        return self.packet is other.packet and self.receiver is other.receiver


@dataclass(frozen=True)
class LinkBudget:
    """What one receiver sees of a transmission.

    ``index`` is the receiver's position in the channel's device list,
    ``delay`` is the propagation delay in seconds and ``total_gain`` is the
    combined antenna gain in dB. ``rx_power`` is in dBm, and is None when
    the channel has no loss model.
    """

    index: int
    receiver: Device
    delay: float
    total_gain: float
    rx_power: Optional[float] = None


def _as_gain_mode(mode: AntennaMode) -> AntennaMode:
    # The gain calculation only distinguishes transmitters from every other mode.
    return AntennaMode.TRANSMITTER if mode == AntennaMode.TRANSMITTER else AntennaMode.RECEIVER


class Channel:
    """A broadcast channel with a noise floor, a delay model and an optional loss model.

    ``loss`` maps ``(sender_position, receiver_position, total_gain_db)`` to a
    received power in dBm.
    """

    def __init__(
        self,
        noise_floor: float = -110.0,
        speed: float = SPEED_OF_LIGHT,
        loss: Optional[LossModel] = None,
    ) -> None:
        if speed <= 0:
            raise ValueError(f"propagation speed must be positive, got {speed}")
        self.noise_floor = noise_floor
        self.speed = speed
        self.loss = loss
        self.devices: list[Device] = []
        self.noise_entries: list[NoiseEntry] = []
        self._rx_orientation = 0.0

    def __len__(self) -> int:
        return len(self.devices)

    def __getitem__(self, index: int) -> Device:
        return self.devices[index]

    def __iter__(self) -> Iterator[Device]:
        return iter(self.devices)

    def add_device(self, device: Device) -> int:
        """Attach a device and return its index."""
        self.devices.append(device)
        return len(self.devices) - 1

    def clear(self) -> None:
        """Detach every device and forget every signal in the air."""
        self.devices.clear()
        self.noise_entries.clear()

    def noise_w(self, interference: float) -> float:
        """Noise floor plus ``interference``, both in watts."""
        return dbm_to_w(self.noise_floor) + interference

    def propagation_delay(self, a: Vector, b: Vector) -> float:
        """Propagation delay in seconds between two positions."""
        distance = math.dist((a.x, a.y, a.z), (b.x, b.y, b.z))
        return distance / self.speed

    def _orientation_for(self, sender: Device, receiver: Device) -> float:
        x_mode = sender.antenna.mode
        y_mode = receiver.antenna.mode
        if x_mode == AntennaMode.RECEIVER and y_mode == AntennaMode.TRANSMITTER:
            self._rx_orientation = sender.antenna.rx_orientation
        elif x_mode == AntennaMode.TRANSMITTER and y_mode == AntennaMode.RECEIVER:
            self._rx_orientation = receiver.antenna.rx_orientation
        elif x_mode == AntennaMode.OMNI and y_mode == AntennaMode.OMNI:
            self._rx_orientation = 0.0
        return self._rx_orientation

    def link_budgets(self, sender: Device) -> list[LinkBudget]:
        """Link budget from ``sender`` to every other attached device."""
        if not any(device is sender for device in self.devices):
            raise ValueError(f"device {sender.node_id} is not attached to this channel")
        budgets = []
        for index, receiver in enumerate(self.devices):
            if receiver is sender:
                continue
            delay = self.propagation_delay(sender.position, receiver.position)
            orientation = self._orientation_for(sender, receiver)
            total_gain = receiver.antenna.antenna_gain(
                sender.position,
                receiver.position,
                _as_gain_mode(sender.antenna.mode),
                _as_gain_mode(receiver.antenna.mode),
                orientation,
            )
            rx_power = None
            if self.loss is not None:
                rx_power = self.loss(sender.position, receiver.position, total_gain)
            budgets.append(LinkBudget(index, receiver, delay, total_gain, rx_power))
        return budgets

    def add_noise_entry(self, entry: NoiseEntry) -> None:
        """Record a signal arriving at a receiver."""
        self.noise_entries.append(entry)

    def delete_noise_entry(self, entry: NoiseEntry) -> bool:
        """Remove the first entry for the same packet and receiver.

        Return True if one was removed.
        """
        for position, existing in enumerate(self.noise_entries):
            if existing.matches(entry):
                del self.noise_entries[position]
                return True
        return False