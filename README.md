# terasim

Models for terahertz-band links. The package provides:

- directional antennas that follow the cosine pattern and can sweep the horizon;
- a channel that turns node positions into per-link delays and antenna gains;
- the parameter sets of a macroscale scenario and a nanoscale scenario.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Antennas (`terasim.antenna`)

`DirectionalAntenna` is a dataclass with the fields `mode`, `beamwidth`
(degrees), `max_gain` (dB), `turn_speed` (circles per second) and
`initial_angle` (degrees).

The mode is an `AntennaMode`: `TRANSMITTER`, `RECEIVER` or `OMNI`.
`set_beamwidth(degrees)` accepts values in (0, 180] and recomputes the pattern
exponent, which makes the pattern 3 dB down at half the beamwidth. Positions
are `Vector(x, y, z)` values in metres.

```python
from terasim.antenna import AntennaMode, DirectionalAntenna, Vector

antenna = DirectionalAntenna()
antenna.set_beamwidth(12.0)
gain = antenna.antenna_gain(
    Vector(0.0, 0.0, 0.0),
    Vector(5.0, 0.0, 0.0),
    AntennaMode.RECEIVER,
    AntennaMode.TRANSMITTER,
    0.0,
)
```

`antenna_gain` returns the sum of the receive and transmit gains in dB in two
cases: a receiver/transmitter pair in either order, or two omnidirectional
nodes. Any other combination returns zero. The last argument is the
receiver's orientation in radians.

Other methods:

- `rx_gain_db(sender, receiver)` and `tx_gain_db(sender, receiver)` give the
  single-ended gains.
- `tune_rx_orientation(degrees)` points the receiver beam at a fixed angle.
- `rx_orientation_at(now)` gives the orientation of the turning beam at `now`
  seconds.
- `record_tx_orientation(phi_tx)` stores a transmit direction in degrees.

The helpers `azimuth(target, origin)`, `wrap_degrees` and `wrap_radians` are
also public.

## Channel (`terasim.channel`)

A `Channel` has a noise floor in dBm (default -110), a propagation speed
(default the speed of light) and an optional loss model. The loss model is a
callable `(sender_position, receiver_position, total_gain_db) -> rx_power_dbm`.

To attach a device, call `add_device(device)`, which returns the device's
index. A `Device` holds a `node_id`, a `position` and an `antenna`.

`link_budgets(sender)` returns one `LinkBudget` for every other attached
device. Each budget holds the receiver's index, the propagation delay in
seconds and the total antenna gain in dB. It also holds `rx_power` in dBm, but
only when a loss model is set; otherwise `rx_power` is `None`. Asking for the
budgets of a device that is not attached raises `ValueError`.

The channel also tracks the signals in the air:

- `add_noise_entry(entry)` records a `NoiseEntry`.
- `delete_noise_entry(entry)` removes the first entry with the same packet and
  receiver.
- `noise_w(interference)` adds the noise floor to an interference level, both
  in watts.
- `dbm_to_w(dbm)` converts a power from dBm to watts.

## Building antennas (`terasim.factory`)

`DirectionalAntennaHelper.default()` returns a helper that builds
`DirectionalAntenna` objects. Set attributes with `set(name, value)` before
calling `create()`. Names may be field names such as `"max_gain"` or the
aliases `"TuneRxTxMode"`, `"BeamWidth"`, `"MaxGain"`, `"TurningSpeed"` and
`"InitialAngle"`. An unknown name raises `ValueError`.

`ObjectFactory` is the general form of this helper. It accepts a registered
type name or any callable.

## Scenarios

### Macroscale (`terasim.macro`)

There is one access point at the origin, with clients on a disc around it.

`build_config(configuration)` accepts configuration 1 or 20–29 and returns a
`MacroConfig`. It contains the bandwidth, noise floor, SINR and carrier-sense
thresholds, data rate, radius, beamwidth, maximum gain and `Modulation`. For
configurations 20–29 it also holds the carrier-sense threshold of every
modulation.

Other functions:

- `noise_floor_dbm(temperature, bandwidth)` gives the thermal noise floor.
- `sinr_threshold(bit_energy, data_rate, bandwidth)` gives the SINR threshold.
- `turning_speed(configuration)` gives the antenna turning speed.
- `output_filename(...)` gives the result file name.
- `summary_lines(...)` gives the printed summary.

The command below prints the summary for configuration 20, followed by the
result file name (`result_<ways>way_<nodes>n_<tia>us_<seed>.txt`):

```
terasim-macro --nodeNum 50 --way 3 --interArrivalTime 200 --seedNum 1 --packetSize 65000
```

`--way` accepts 0–3:

| Value | Protocol |
|-------|----------|
| 0 | CSMA |
| 1 | ADAPT-1 |
| 2 | CSMA/CA |
| 3 | ADAPT-3 |

### Nanoscale (`terasim.nano`)

Nodes are placed in an ad hoc network on a 1 cm disc. `NanoScenario` holds the
parameters. Its methods are:

- `positions()` draws node positions from the seed.
- `build_channel()` returns a `Channel` with one device per node.

`frame_length(packet_length)` adds the 53 header bytes (UDP, IP, LLC and MAC)
to a payload length. It raises `ValueError` if the frame would exceed 255
bytes.

The command below prints the RTS setting, the node count, the frame length and
each node's position:

```
terasim-nano --seed 1 --nodes 7 --packet-length 75 --rts
```

## What this package does not do

The two commands only set up parameters and print them. The package has none
of the following:

- event-driven simulation;
- MAC or physical-layer protocol behaviour;
- traffic generation;
- energy model;
- spectrum-based propagation loss (a loss model must be supplied by the
  caller).

No result files are written.