import math
import pytest
from core.network.model import NetworkModel
from core.network.trace import ParameterTrace


@pytest.fixture
def two_point_trace():
    # 1 GHz / 2 GHz, 6 dB -> 12 dB loss, 0 -> 90 degrees
    return ParameterTrace.from_arrays([1e9, 2e9], [0.5, 0.25], [0.0, math.pi / 2])


@pytest.fixture
def sweep_trace():
    freqs = [1e8 * k for k in range(1, 11)]
    amps = [1.0 - 0.05 * k for k in range(10)]
    # linear phase of a 100 ps delay
    phases = [math.remainder(-2 * math.pi * f * 100e-12, 2 * math.pi) for f in freqs]
    return ParameterTrace.from_arrays(freqs, amps, phases)


@pytest.fixture
def two_port_network():
    net = NetworkModel()
    net.allocate(2)
    params = {
        (1, 1): (0.1, 10.0),
        (2, 1): (0.9, -5.0),
        (1, 2): (0.9, -5.0),
        (2, 2): (0.1, 10.0),
    }
    for pair, (amp, deg) in params.items():
        net[pair] = ParameterTrace.from_arrays([1e9], [amp], [math.radians(deg)])
    return net


@pytest.fixture
def dummy_logger(caplog):
    caplog.set_level("DEBUG")
    return caplog
