#!/usr/bin/env python
import argparse
import logging
import sys
from typing import List, Optional
from utils.logging_config import setup_logging, get_logger
from utils.units import FrequencyUnit, parse_frequency
from inout.touchstone_parser import read_touchstone_file
from inout.touchstone_writer import ParameterFormat
from inout.yaml_parser import CascadeJob, parse_job
from core.network.model import NetworkModel
from core.exceptions import SParamError

logger = get_logger(__name__)


def cascade_files(paths: List[str]) -> NetworkModel:
    """Read each Touchstone file and cascade them in order."""
    network = NetworkModel()
    for path in paths:
        stage = read_touchstone_file(path)
        logger.info("Cascading %s (%d points)", path, len(stage[(1, 1)]))
        network *= stage
    return network


def build_job(args: argparse.Namespace) -> CascadeJob:
    """Merge a YAML job file (if any) with command-line overrides."""
    if args.config:
        job = parse_job(args.config)
    else:
        if not args.inputs or not args.output:
            raise SParamError("Either --config or both input files and --output are required.")
        job = CascadeJob(inputs=list(args.inputs), output=args.output)
    if args.inputs and args.config:
        job.inputs = list(args.inputs)
    if args.output:
        job.output = args.output
    if args.format:
        job.format = ParameterFormat.from_token(args.format)
    if args.freq_unit:
        job.freq_unit = FrequencyUnit.from_token(args.freq_unit)
    if args.probe:
        job.probe = list(args.probe)
    return job


def main(argv: Optional[List[str]] = None) -> int:
    """
    Cascade 2-port Touchstone files and export the result.

    Command-line arguments:
      inputs: Touchstone files, applied first to last.
      --output: Destination .s2p file.
      --config: YAML job file (inputs/output/format/freq_unit/probe).
      --format: MA, RI or DB (only MA is written).
      --freq-unit: Hz, kHz, MHz or GHz.
      --probe: Frequency (e.g. "1.5 GHz") at which to log S21; repeatable.
      --verbose: Enable DEBUG logging.
    """
    parser = argparse.ArgumentParser(description="Cascade 2-port S-parameter files.")
    parser.add_argument("inputs", nargs="*", help="Touchstone files to cascade, in order.")
    parser.add_argument("--output", help="Path of the exported .s2p file.")
    parser.add_argument("--config", help="YAML job file.")
    parser.add_argument("--format", help="Export format token (MA, RI, DB).")
    parser.add_argument("--freq-unit", dest="freq_unit", help="Export frequency unit.")
    parser.add_argument("--probe", action="append", help="Log S21 at this frequency.")
    parser.add_argument("--log-file", dest="log_file", help="Also write log output to this file.")
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging.")
    args = parser.parse_args(argv)

    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file)

    try:
        job = build_job(args)
        network = cascade_files(job.inputs)
        for expr in job.probe:
            freq = parse_frequency(expr)
            point = network[(2, 1)].interpolate_point(freq)
            logger.info("S21 @ %.6e Hz: |S21|=%.6f, phase=%.3f rad", freq, point.amplitude, point.phase)
        network.save_to_file(job.output, fmt=job.format, freq_unit=job.freq_unit)
    except (SParamError, ValueError, OSError) as e:
        logger.error("Cascade failed: %s", e)
        return 1

    logger.info("Cascade completed: %d stage(s) written to %s", len(job.inputs), job.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
