import pytest
import yaml
from inout.yaml_parser import JOB_SCHEMA, parse_job, validate_schema
from inout.touchstone_writer import ParameterFormat
from utils.units import FrequencyUnit
from core.exceptions import SParamError

def test_parse_job_valid(tmp_path):
    job_content = """
inputs:
  - fixture.s2p
  - cable.s2p
output: channel.s2p
format: ma
freq_unit: MHz
probe: ["1.5 GHz", 2000000000]
"""
    file = tmp_path / "job.yaml"
    file.write_text(job_content)
    job = parse_job(str(file))
    assert job.inputs == ["fixture.s2p", "cable.s2p"]
    assert job.output == "channel.s2p"
    assert job.format is ParameterFormat.MAG_ANGLE
    assert job.freq_unit is FrequencyUnit.MHZ
    assert job.probe == ["1.5 GHz", 2000000000]

def test_parse_job_defaults(tmp_path):
    file = tmp_path / "job.yaml"
    with open(file, "w") as f:
        yaml.dump({"inputs": ["a.s2p"], "output": "b.s2p"}, f)
    job = parse_job(str(file))
    assert job.format is ParameterFormat.MAG_ANGLE
    assert job.freq_unit is FrequencyUnit.GHZ
    assert job.probe == []

@pytest.mark.parametrize("data", [
    {"output": "b.s2p"},
    {"inputs": [], "output": "b.s2p"},
    {"inputs": ["a.s2p"], "output": "b.s2p", "format": "XY"},
    {"inputs": ["a.s2p"], "output": "b.s2p", "freq_unit": "THz"},
    None,
])
def test_job_schema_rejects_invalid(data):
    with pytest.raises(SParamError):
        validate_schema(data, JOB_SCHEMA)

def test_validation_errors_are_logged(dummy_logger):
    with pytest.raises(SParamError):
        validate_schema({"output": 5}, JOB_SCHEMA)
    assert "YAML schema validation errors" in dummy_logger.text
