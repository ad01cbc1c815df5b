"""Nanoscale ad hoc scenario: a few nodes scattered in a small disc."""

from __future__ import annotations

import argparse
import math
import random
from dataclasses import dataclass
from typing import Optional, Sequence

from terasim.antenna import Vector
from terasim.channel import Channel, Device
from terasim.factory import DirectionalAntennaHelper

__all__ = ["NanoScenario", "frame_length", "main"]

# UDP header 8, IP header 20, LLC header 8, MAC header 17 bytes.
_HEADER_BYTES = 8 + 20 + 8 + 17
_MAX_FRAME_BYTES = 255


def frame_length(packet_length: int) -> int:
    """Length in bytes of the MAC frame carrying ``packet_length`` bytes of payload."""
    if packet_length < 0:
        raise ValueError(f"packet length must not be negative, got {packet_length}")
    length = packet_length + _HEADER_BYTES
    if length > _MAX_FRAME_BYTES:
        raise ValueError(f"frame of {length} bytes exceeds {_MAX_FRAME_BYTES} bytes")
    return length


@dataclass
class NanoScenario:
    """Parameters of the nanoscale ad hoc network.

    Times are in seconds, ``radius`` in metres, energies in the units of
    the energy model.
    """

    seed: int = 1
    node_num: int = 7
    packet_length: int = 75
    radius: float = 0.01
    num_sample: int = 10
    pulse_duration: float = 100e-15
    beta: float = 100.0
    rts_enabled: bool = False
    initial_energy: float = 0.0
    data_callback_energy: float = 65.0
    traffic_mean: float = 300.0
    app_start: float = 200e-6
    app_stop: float = 2.0
    sim_duration: float = 0.100000001

    def __post_init__(self) -> None:
        if not 1 <= self.node_num <= 255:
            raise ValueError(f"node count must be in 1..255, got {self.node_num}")
        if self.radius <= 0:
            raise ValueError(f"radius must be positive, got {self.radius}")
        frame_length(self.packet_length)

    @property
    def frame_size(self) -> int:
        """Frame length in bytes for the configured packet length."""
        return frame_length(self.packet_length)

    def positions(self) -> list[Vector]:
        """Node positions drawn uniformly over the disc around the origin."""
        rng = random.Random(self.seed)
        points = []
        for _ in range(self.node_num):
            theta = rng.uniform(0.0, 2.0 * math.pi)
            r = self.radius * math.sqrt(rng.random())
            points.append(Vector(r * math.cos(theta), r * math.sin(theta), 0.0))
        return points

    def build_channel(self, antenna_helper: Optional[DirectionalAntennaHelper] = None) -> Channel:
        """A channel with one device per node, each with its own antenna."""
        helper = antenna_helper or DirectionalAntennaHelper.default()
        channel = Channel()
        for node_id, position in enumerate(self.positions()):
            channel.add_device(Device(node_id, position, helper.create()))
        return channel


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Set up the nanoscale scenario and print its layout."""
    parser = argparse.ArgumentParser(prog="terasim-nano", description=__doc__)
    parser.add_argument("--seed", type=int, default=1, help="seed number")
    parser.add_argument("--nodes", type=int, default=7, help="number of nodes")
    parser.add_argument("--packet-length", type=int, default=75, help="packet size in bytes")
    parser.add_argument("--rts", action="store_true", help="start with an RTS frame (2-way handshake)")
    args = parser.parse_args(argv)

    try:
        scenario = NanoScenario(
            seed=args.seed,
            node_num=args.nodes,
            packet_length=args.packet_length,
            rts_enabled=args.rts,
        )
    except ValueError as error:
        parser.error(str(error))

    print(f"rts on? {int(scenario.rts_enabled)}")
    print(f"nodes = {scenario.node_num}")
    print(f"frame length = {scenario.frame_size} bytes")
    for device in scenario.build_channel():
        print(f"node {device.node_id}: x = {device.position.x:.6f} y = {device.position.y:.6f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())