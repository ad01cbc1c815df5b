import math

import pytest

from terasim.antenna import AntennaMode, DirectionalAntenna, Vector
from terasim.channel import (
    SPEED_OF_LIGHT,
    Channel,
    Device,
    LinkBudget,
    NoiseEntry,
    dbm_to_w,
)


def _device(node_id, x, mode, max_gain=10.0):
    antenna = DirectionalAntenna(mode=mode, max_gain=max_gain, beamwidth=40.0)
    return Device(node_id=node_id, position=Vector(x, 0.0, 0.0), antenna=antenna)


def test_dbm_to_w_reference_points():
    assert dbm_to_w(30.0) == pytest.approx(1.0)
    assert dbm_to_w(0.0) == pytest.approx(1e-3)


def test_noise_w_adds_interference_to_floor():
    channel = Channel(noise_floor=-110.0)
    base = channel.noise_w(0.0)
    assert base == pytest.approx(dbm_to_w(-110.0))
    assert channel.noise_w(2e-12) == pytest.approx(base + 2e-12)


def test_add_device_and_clear():
    channel = Channel()
    a = _device(1, 0.0, AntennaMode.RECEIVER)
    b = _device(2, 1.0, AntennaMode.TRANSMITTER)
    assert channel.add_device(a) == 0
    assert channel.add_device(b) == 1
    assert len(channel) == 2
    assert channel[1] is b
    assert list(channel) == [a, b]
    channel.add_noise_entry(NoiseEntry(object(), b, 1e-9, 2e-9, -50.0))
    channel.clear()
    assert len(channel) == 0
    assert channel.noise_entries == []


def test_propagation_delay_uses_speed():
    channel = Channel()
    delay = channel.propagation_delay(Vector(0, 0, 0), Vector(SPEED_OF_LIGHT, 0, 0))
    assert delay == pytest.approx(1.0)
    assert channel.propagation_delay(Vector(1, 2, 3), Vector(1, 2, 3)) == 0.0


def test_invalid_speed_rejected():
    with pytest.raises(ValueError):
        Channel(speed=0.0)


def test_aligned_receiver_transmitter_gets_twice_max_gain():
    channel = Channel()
    sender = _device(1, 0.0, AntennaMode.RECEIVER, max_gain=10.0)
    receiver = _device(2, 5.0, AntennaMode.TRANSMITTER, max_gain=10.0)
    channel.add_device(sender)
    channel.add_device(receiver)
    budgets = channel.link_budgets(sender)
    assert len(budgets) == 1
    budget = budgets[0]
    assert isinstance(budget, LinkBudget)
    assert budget.index == 1
    assert budget.receiver is receiver
    assert budget.total_gain == pytest.approx(20.0)
    assert budget.delay == pytest.approx(5.0 / SPEED_OF_LIGHT)
    assert budget.rx_power is None


def test_misaligned_receiver_loses_gain():
    channel = Channel()
    sender = _device(1, 0.0, AntennaMode.RECEIVER, max_gain=10.0)
    receiver = _device(2, 5.0, AntennaMode.TRANSMITTER, max_gain=10.0)
    sender.antenna.tune_rx_orientation(90.0)
    channel.add_device(sender)
    channel.add_device(receiver)
    (budget,) = channel.link_budgets(sender)
    assert budget.total_gain < 20.0


def test_omni_pair_gives_zero_gain():
    channel = Channel()
    sender = _device(1, 0.0, AntennaMode.OMNI)
    receiver = _device(2, 1.0, AntennaMode.OMNI)
    channel.add_device(sender)
    channel.add_device(receiver)
    (budget,) = channel.link_budgets(sender)
    assert budget.total_gain == 0.0


def test_loss_model_receives_total_gain():
    calls = []

    def loss(src, dst, gain):
        calls.append((src, dst, gain))
        return gain - 100.0

    channel = Channel(loss=loss)
    sender = _device(1, 0.0, AntennaMode.RECEIVER, max_gain=10.0)
    receiver = _device(2, 3.0, AntennaMode.TRANSMITTER, max_gain=10.0)
    channel.add_device(sender)
    channel.add_device(receiver)
    (budget,) = channel.link_budgets(sender)
    assert budget.rx_power == pytest.approx(budget.total_gain - 100.0)
    assert calls[0][0] == sender.position
    assert calls[0][1] == receiver.position


def test_link_budgets_skip_sender_and_cover_others():
    channel = Channel()
    devices = [_device(i, float(i), AntennaMode.TRANSMITTER) for i in range(4)]
    for device in devices:
        channel.add_device(device)
    budgets = channel.link_budgets(devices[2])
    assert [b.index for b in budgets] == [0, 1, 3]
    assert all(math.isfinite(b.delay) for b in budgets)


def test_link_budgets_unknown_sender():
    channel = Channel()
    channel.add_device(_device(1, 0.0, AntennaMode.RECEIVER))
    with pytest.raises(ValueError):
        channel.link_budgets(_device(9, 1.0, AntennaMode.TRANSMITTER))


def test_delete_noise_entry_removes_matching_only():
    channel = Channel()
    rx_a = _device(1, 0.0, AntennaMode.RECEIVER)
    rx_b = _device(2, 1.0, AntennaMode.RECEIVER)
    packet = object()
    first = NoiseEntry(packet, rx_a, 1e-9, 2e-9, -40.0)
    second = NoiseEntry(packet, rx_b, 1e-9, 2e-9, -45.0)
    channel.add_noise_entry(first)
    channel.add_noise_entry(second)
    probe = NoiseEntry(packet, rx_b, 0.0, 0.0, 0.0)
    assert channel.delete_noise_entry(probe) is True
    assert channel.noise_entries == [first]
    assert channel.delete_noise_entry(probe) is False
    assert channel.noise_entries == [first]