# inout/yaml_parser.py
import yaml
from dataclasses import dataclass, field
from typing import Dict, Any, List
from cerberus import Validator
from core.exceptions import SParamError
from inout.touchstone_writer import ParameterFormat
from utils.logging_config import get_logger
from utils.units import FrequencyUnit

logger = get_logger(__name__)

# Schema for a cascade/export job.
JOB_SCHEMA: Dict[str, Any] = {
    'inputs': {
        'type': 'list',
        'required': True,
        'minlength': 1,
        'schema': {'type': 'string'},
    },
    'output': {
        'type': 'string',
        'required': True,
    },
    'format': {
        'type': 'string',
        'required': False,
        'default': 'MA',
        'allowed': [f.value for f in ParameterFormat],
        'coerce': lambda v: str(v).upper(),
    },
    'freq_unit': {
        'type': 'string',
        'required': False,
        'default': 'GHz',
        'allowed': [u.value for u in FrequencyUnit],
    },
    'probe': {
        'type': 'list',
        'required': False,
        'schema': {'type': ['string', 'number']},
    },
}


@dataclass
class CascadeJob:
    """A validated cascade/export job."""
    inputs: List[str]
    output: str
    format: ParameterFormat = ParameterFormat.MAG_ANGLE
    freq_unit: FrequencyUnit = FrequencyUnit.GHZ
    probe: List[Any] = field(default_factory=list)


def validate_schema(data: Dict[str, Any], schema: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate YAML data against a Cerberus schema.

    Returns:
        The normalized document (defaults applied).

    Raises:
        SParamError: If validation fails.
    """
    validator = Validator(schema)
    if not validator.validate(data or {}):
        errors = validator.errors
        logger.error("YAML schema validation errors: %s", errors)
        raise SParamError("YAML schema validation failed: " + str(errors))
    return validator.document


def parse_job(yaml_file: str) -> CascadeJob:
    """
    Load a cascade job file.

    Example:
        inputs: [fixture.s2p, cable.s2p]
        output: channel.s2p
        freq_unit: MHz
    """
    with open(yaml_file, 'r') as f:
        data = yaml.safe_load(f)
    doc = validate_schema(data, JOB_SCHEMA)
    return CascadeJob(
        inputs=list(doc['inputs']),
        output=doc['output'],
        format=ParameterFormat(doc['format']),
        freq_unit=FrequencyUnit(doc['freq_unit']),
        probe=list(doc.get('probe', [])),
    )
