import math

import pytest

from terasim.macro import (
    MacroConfig,
    Modulation,
    build_config,
    main,
    noise_floor_dbm,
    output_filename,
    sinr_threshold,
    summary_lines,
    turning_speed,
)

WINDOW_CONFIGS = list(range(20, 30))


def test_modulation_rates_from_source():
    bpsk = build_config(25)
    assert bpsk.modulation is Modulation.BPSK
    assert bpsk.data_rate == 52.4e9
    qam64 = build_config(21)
    assert qam64.modulation is Modulation.QAM64
    assert qam64.data_rate == 315.52e9
    assert build_config(20).modulation.bit_energy == 14
    assert build_config(23).modulation is Modulation.QAM16


def test_noise_floor_scales_with_bandwidth():
    low = noise_floor_dbm(300, 69.12e9)
    high = noise_floor_dbm(300, 2 * 69.12e9)
    assert high - low == pytest.approx(10 * math.log10(2))


def test_noise_floor_rejects_nonpositive():
    with pytest.raises(ValueError):
        noise_floor_dbm(0, 1e9)


def test_sinr_threshold_equal_rate_and_bandwidth():
    assert sinr_threshold(10.6, 69.12e9, 69.12e9) == pytest.approx(10.6)


def test_sinr_threshold_rejects_zero_rate():
    with pytest.raises(ValueError):
        sinr_threshold(10.6, 0, 1e9)


def test_config_20_values():
    config = build_config(20)
    assert config.modulation is Modulation.PSK8
    assert config.sectors == 30
    assert config.radius == 18
    assert config.beamwidth == 12
    assert config.data_rate == 157.44e9
    assert config.basic_rate == config.data_rate
    assert config.tx_power == 20
    assert config.prop_delay_ps == pytest.approx(18 * 3336)


def test_config_1_values():
    config = build_config(1)
    assert config.bandwidth == 90e9
    assert config.beamwidth == 6
    assert config.max_gain == 30.59
    assert config.use_white_list is False
    assert config.use_adapt_mcs is False
    assert config.cs_thresholds == {}
    assert config.carrier_sense_th == pytest.approx(config.noise_floor + config.sinr_th)


@pytest.mark.parametrize("configuration", WINDOW_CONFIGS)
def test_window_config_invariants(configuration):
    config = build_config(configuration)
    assert config.noise_total == pytest.approx(config.noise_floor + 7)
    assert config.carrier_sense_th == pytest.approx(config.noise_total + config.sinr_th)
    assert config.cs_thresholds[config.modulation] == config.carrier_sense_th
    assert config.beamwidth * config.sectors == 360


def test_thresholds_increase_with_modulation_order():
    thresholds = build_config(20).cs_thresholds
    values = [thresholds[m] for m in Modulation]
    assert values == sorted(values)
    assert len(set(values)) == len(values)


def test_max_gain_grows_with_sectors():
    gains = [build_config(c).max_gain for c in (28, 20, 21, 24)]  # 15, 30, 45, 60 sectors
    assert gains == sorted(gains)


def test_noise_figure_shifts_noise_total():
    base = build_config(20, noise_figure=7)
    other = build_config(20, noise_figure=10)
    assert other.noise_total - base.noise_total == pytest.approx(3)
    assert other.noise_floor == pytest.approx(base.noise_floor)


@pytest.mark.parametrize("configuration", [0, 2, 19, 30])
def test_unknown_configuration(configuration):
    with pytest.raises(ValueError):
        build_config(configuration)


def test_output_filename_format():
    assert output_filename(3, 50, 200, 1) == "result_3way_50n_200us_1.txt"


def test_turning_speed():
    assert turning_speed(20) == 9000
    assert turning_speed(29) == 19000
    assert turning_speed(23) == 0


def test_summary_lines():
    config = build_config(20)
    lines = summary_lines(config, 1, 50, 200, 3)
    assert lines[0] == "seedNum = 1"
    assert "config = 20" in lines
    assert "nodeNum = 50" in lines
    assert "Handshake ways: 3 way" == lines[-1]
    assert f"NoiseFloor = {config.noise_total:f}" in lines
    assert "Use white list = 1" in lines


def test_summary_reflects_disabled_flags():
    lines = summary_lines(build_config(1), 2, 5, 100, 0)
    assert "Use adaptive MCS = 0" in lines
    assert "Beamwidth = 6.000000" in lines


def test_macro_config_prop_delay():
    config = build_config(29)
    assert isinstance(config, MacroConfig)
    assert config.prop_delay_ps == pytest.approx(7.5 * 3336)


def test_main_prints_summary(capsys):
    assert main(["--seedNum", "4", "--nodeNum", "10", "--way", "1"]) == 0
    out = capsys.readouterr().out
    assert "seedNum = 4" in out
    assert "nodeNum = 10" in out
    assert "Handshake ways: 1 way" in out
    assert "result_1way_10n_200us_4.txt" in out


def test_main_rejects_bad_way():
    with pytest.raises(SystemExit):
        main(["--way", "5"])


def test_main_rejects_zero_nodes():
    with pytest.raises(SystemExit):
        main(["--nodeNum", "0"])