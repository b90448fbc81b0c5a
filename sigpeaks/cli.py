# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Command-line interface: find the significant events in a signal file.
"""

import argparse
import json
import logging
import math
import os
import sys
from typing import List, Optional

from .analysis import analyze_signal
from .config import AnalysisConfig
from .errors import SignalError
from .io import load_signal


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="sigpeaks",
        description="Daubechies-4 wavelet decomposition and persistence peak detection"
    )
    parser.add_argument("input", help="Input signal, a .wav file or a text file with one value per line")
    parser.add_argument("--level", type=int, default=None,
                        help="Number of decomposition levels")
    parser.add_argument("--band", type=int, default=None,
                        help="Coefficient band to search for peaks (default: deepest)")
    parser.add_argument("--fraction", type=float, default=None,
                        help="Minimum fraction of the maximum persistence")
    parser.add_argument("--min-section-factor", type=int, default=None,
                        help="Minimum section size in units of 2^level")
    parser.add_argument("--channel", type=int, default=None,
                        help="Channel of a multi-channel WAV file")
    parser.add_argument("--output-dir", type=str, default=None,
                        help="Directory to write peaks.json to")
    parser.add_argument("--plot", action="store_true",
                        help="Plot the decomposition")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug logging")
    return parser


def build_config(args: argparse.Namespace) -> AnalysisConfig:
    """
    Create the analysis configuration.

    Defaults are overridden by SIGPEAKS_* environment variables, which are
    overridden by command-line arguments.

    Args:
        args: Parsed command-line arguments

    Returns:
        A validated AnalysisConfig
    """
    config = AnalysisConfig.from_env()
    overrides = {
        "level": args.level,
        "band": args.band,
        "persistence_fraction": args.fraction,
        "min_section_factor": args.min_section_factor,
        "channel": args.channel,
        "output_dir": args.output_dir,
    }
    for attr, value in overrides.items():
        if value is not None:
            setattr(config, attr, value)
    if args.plot:
        config.plot = True
    config.validate()
    return config


def _json_float(v: float):
    return v if math.isfinite(v) else None


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s"
    )

    try:
        config = build_config(args)
        rate, signal = load_signal(args.input, config.channel)
        result = analyze_signal(signal, config, sample_rate=rate)
    except FileNotFoundError:
        print(f"Error: Input file {args.input} not found.", file=sys.stderr)
        return 1
    except (SignalError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Samples: {result['length']}, sections: {len(result['sections'])}, "
          f"band: {result['band']} ({result['band_length']} coefficients)")
    print(f"Peaks: {len(result['peak_indices'])} of {result['num_peaks']}")
    for i in result["sample_indices"]:
        print(i)

    if config.output_dir:
        os.makedirs(config.output_dir, exist_ok=True)
        out_file = os.path.join(config.output_dir, "peaks.json")
        result["min_persistence"] = _json_float(result["min_persistence"])
        result["max_persistence"] = _json_float(result["max_persistence"])
        with open(out_file, "w") as f:
            json.dump(result, f, indent=2)
        print(f"Results saved to {out_file}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
