"""Macroscale centralized scenario: one access point and many clients.

The access point sits at the origin and the clients are scattered over a
disc around it. A configuration number selects the frequency window, the
number of antenna sectors, the cell radius and the modulation. The link
thresholds follow from those choices.
"""

from __future__ import annotations

import argparse
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

__all__ = [
    "Modulation",
    "MacroConfig",
    "noise_floor_dbm",
    "sinr_threshold",
    "build_config",
    "output_filename",
    "turning_speed",
    "summary_lines",
    "main",
]

BOLTZMANN_CONSTANT = 1.380649e-23  # [J/K]
DEFAULT_TEMPERATURE = 300.0  # [K]
DEFAULT_NOISE_FIGURE = 7.0  # [dB]
DEFAULT_CONFIGURATION = 20
PROPAGATION_PS_PER_METRE = 3336  # 1/c in picoseconds per metre

PACKET_SIZE = 65000  # [bytes]
BACKOFF_SLOTS = 5
RTS_RETRY_LIMIT = 5
SIM_DURATION = 0.01  # [s]

# Gain of the sectored antenna pattern relative to 20*log10(sectors).
_SECTOR_GAIN_OFFSET = 4.971498726941338

# The 69.12 GHz window at 287.28 GHz shared by configurations 20-29.
_WINDOW_BANDWIDTH = 69.12e9
_WINDOW_CENTRAL_FREQ = 287.28e9
_WINDOW_TX_POWER = 20.0


class Modulation(Enum):
    """Modulation scheme with its data rate [bps] and required Eb/N0 [dB]."""

    BPSK = (1, 52.4e9, 10.6)
    QPSK = (2, 105.28e9, 10.6)
    PSK8 = (3, 157.44e9, 14.0)
    QAM16 = (4, 210.24e9, 14.4)
    QAM64 = (5, 315.52e9, 18.8)

    def __init__(self, code: int, data_rate: float, bit_energy: float) -> None:
        self.code = code
        self.data_rate = data_rate
        self.bit_energy = bit_energy


# configuration -> (modulation, sectors, radius [m])
_WINDOW_CONFIGS: dict[int, tuple[Modulation, int, float]] = {
    20: (Modulation.PSK8, 30, 18.0),
    21: (Modulation.QAM64, 45, 16.7),
    22: (Modulation.QPSK, 30, 34.0),
    23: (Modulation.QAM16, 45, 35.0),
    24: (Modulation.QAM64, 60, 30.0),
    25: (Modulation.BPSK, 30, 48.0),
    26: (Modulation.PSK8, 45, 40.0),
    27: (Modulation.QAM16, 60, 64.0),
    28: (Modulation.QPSK, 15, 8.4),
    29: (Modulation.QAM64, 30, 7.5),
}

_TURNING_SPEEDS = {20: 9000.0, 29: 19000.0}


def noise_floor_dbm(temperature: float, bandwidth: float) -> float:
    """Thermal noise floor kTB in dBm."""
    if temperature <= 0 or bandwidth <= 0:
        raise ValueError("temperature and bandwidth must be positive")
    return 10.0 * math.log10(BOLTZMANN_CONSTANT * temperature * bandwidth) + 30.0


def sinr_threshold(bit_energy: float, data_rate: float, bandwidth: float) -> float:
    """SINR threshold in dB: Eb/N0 scaled by the ratio of data rate to bandwidth."""
    if data_rate <= 0 or bandwidth <= 0:
        raise ValueError("data rate and bandwidth must be positive")
    return bit_energy + 10.0 * math.log10(data_rate / bandwidth)


@dataclass
class MacroConfig:
    """Physical and link parameters of one macroscale configuration.

    Powers are in dBm, rates in bits per second, frequencies in hertz,
    angles in degrees, gains in dB and the radius in metres.
    ``cs_thresholds`` holds the carrier-sense threshold of every modulation
    for adaptive modulation; it is empty where that is not used.
    """

    configuration: int
    tx_power: float
    bandwidth: float
    central_freq: float
    radius: float
    data_rate: float
    basic_rate: float
    bit_energy: float
    beamwidth: float
    max_gain: float
    sinr_th: float
    noise_floor: float
    noise_total: float
    carrier_sense_th: float
    use_white_list: bool = True
    use_adapt_mcs: bool = True
    modulation: Optional[Modulation] = None
    sectors: Optional[int] = None
    cs_thresholds: dict[Modulation, float] = field(default_factory=dict)
    num_sample: int = 32
    sub_band_width: float = 2.16e9
    num_sub_band: int = 32

    @property
    def prop_delay_ps(self) -> float:
        """Propagation delay across the cell radius in picoseconds."""
        return self.radius * PROPAGATION_PS_PER_METRE


def build_config(
    configuration: int = DEFAULT_CONFIGURATION,
    temperature: float = DEFAULT_TEMPERATURE,
    noise_figure: float = DEFAULT_NOISE_FIGURE,
) -> MacroConfig:
    """Parameters for ``configuration`` 1 or 20-29."""
    if configuration == 1:
        # A true THz window, 90 GHz wide at 1.0345 THz.
        bandwidth = 90e9
        data_rate = 1.8e11
        bit_energy = 10.6
        sinr = sinr_threshold(bit_energy, data_rate, bandwidth)
        floor = noise_floor_dbm(temperature, bandwidth)
        return MacroConfig(
            configuration=configuration,
            tx_power=0.0,
            bandwidth=bandwidth,
            central_freq=1.0345e12,
            radius=2.7,
            data_rate=data_rate,
            basic_rate=1.8e11,
            bit_energy=bit_energy,
            beamwidth=6.0,
            max_gain=30.59,
            sinr_th=sinr,
            noise_floor=floor,
            noise_total=floor + noise_figure,
            carrier_sense_th=floor + sinr,
            use_white_list=False,
            use_adapt_mcs=False,
            sub_band_width=9e8,
            num_sub_band=100,
        )

    try:
        modulation, sectors, radius = _WINDOW_CONFIGS[configuration]
    except KeyError:
        raise ValueError(f"unknown configuration {configuration}; use 1 or 20-29") from None

    bandwidth = _WINDOW_BANDWIDTH
    floor = noise_floor_dbm(temperature, bandwidth)
    total = floor + noise_figure
    sinrs = {m: sinr_threshold(m.bit_energy, m.data_rate, bandwidth) for m in Modulation}
    thresholds = {m: total + s for m, s in sinrs.items()}

    return MacroConfig(
        configuration=configuration,
        tx_power=_WINDOW_TX_POWER,
        bandwidth=bandwidth,
        central_freq=_WINDOW_CENTRAL_FREQ,
        radius=radius,
        data_rate=modulation.data_rate,
        basic_rate=modulation.data_rate,
        bit_energy=modulation.bit_energy,
        beamwidth=float(360 // sectors),
        max_gain=20.0 * math.log10(sectors) - _SECTOR_GAIN_OFFSET,
        sinr_th=sinrs[modulation],
        noise_floor=floor,
        noise_total=total,
        carrier_sense_th=thresholds[modulation],
        modulation=modulation,
        sectors=sectors,
        cs_thresholds=thresholds,
    )


def output_filename(handshake_ways: int, node_num: int, inter_arrival_time: int, seed: int) -> str:
    """Name of the per-packet result file for a run."""
    return f"result_{handshake_ways}way_{node_num}n_{inter_arrival_time}us_{seed}.txt"


def turning_speed(configuration: int) -> float:
    """Antenna turning speed in circles per second for the 0- and 2-way protocols.

    Only configurations 20 and 29 have a tuned speed; others give zero.
    """
    return _TURNING_SPEEDS.get(configuration, 0.0)


def summary_lines(
    config: MacroConfig,
    seed: int,
    node_num: int,
    inter_arrival_time: int,
    handshake_ways: int,
) -> list[str]:
    """Human-readable summary of a run's parameters, one line per entry."""
    return [
        f"seedNum = {seed}",
        f"config = {config.configuration}",
        f"nodeNum = {node_num}",
        f"Tia = {inter_arrival_time}",
        f"Configuration = {config.configuration}",
        f"NoiseFloor = {config.noise_total:f}",
        f"carrierSenseTh = {config.carrier_sense_th:f}",
        f"txPower = {config.tx_power:f}",
        f"SinrTh = {config.sinr_th:f}",
        f"BasicRate = {config.basic_rate:f}",
        f"DataRate = {config.data_rate:f}",
        f"Radius = {config.radius:f}",
        f"Beamwidth = {config.beamwidth:f}",
        f"MaxGain = {config.max_gain:f}",
        f"Use white list = {int(config.use_white_list)}",
        f"Use adaptive MCS = {int(config.use_adapt_mcs)}",
        f"Handshake ways: {handshake_ways} way",
    ]


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Set up the macroscale scenario and print its parameters."""
    parser = argparse.ArgumentParser(prog="terasim-macro", description=__doc__)
    parser.add_argument("--seedNum", type=int, default=1, help="seed number")
    parser.add_argument("--nodeNum", type=int, default=50, help="number of clients")
    parser.add_argument(
        "--way",
        type=int,
        default=3,
        choices=(0, 1, 2, 3),
        help="handshake ways (0: CSMA, 1: ADAPT-1, 2: CSMA/CA, 3: ADAPT-3)",
    )
    parser.add_argument("--packetSize", type=int, default=PACKET_SIZE, help="packet size in bytes")
    parser.add_argument(
        "--interArrivalTime",
        type=int,
        default=200,
        help="mean time in microseconds between packet arrivals (exponential)",
    )
    args = parser.parse_args(argv)
    if args.nodeNum < 1:
        parser.error(f"number of clients must be positive, got {args.nodeNum}")
    if args.packetSize < 1:
        parser.error(f"packet size must be positive, got {args.packetSize}")

    config = build_config(DEFAULT_CONFIGURATION)
    for line in summary_lines(config, args.seedNum, args.nodeNum, args.interArrivalTime, args.way):
        print(line)
    print(f"Output file: {output_filename(args.way, args.nodeNum, args.interArrivalTime, args.seedNum)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())