# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Analysis configuration for the sigpeaks command line and helpers.
"""

import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class AnalysisConfig:
    """
    Parameters of a wavelet + persistence analysis run.

    Attributes:
        level (int): Number of Daubechies-4 decomposition levels
        min_section_factor (int): A transform section must hold at least
            ``min_section_factor * 2**level`` samples
        persistence_fraction (float): Fraction of the maximum finite
            persistence a peak needs to be reported
        band (int or None): 1-based coefficient band to search for peaks,
            None for the deepest band
        channel (int): Channel of a multi-channel input to analyse
        plot (bool): Whether to plot the decomposition
        output_dir (str or None): Directory for result files
    """

    # Environment variable suffix -> (attribute, parser)
    _ENV_FIELDS = {
        "LEVEL": ("level", int),
        "MIN_SECTION_FACTOR": ("min_section_factor", int),
        "PERSISTENCE_FRACTION": ("persistence_fraction", float),
        "BAND": ("band", int),
        "CHANNEL": ("channel", int),
        "PLOT": ("plot", lambda v: v.strip().lower() in ("1", "true", "yes")),
        "OUTPUT_DIR": ("output_dir", str),
    }

    def __init__(self):
        self.level = 4
        self.min_section_factor = 64
        self.persistence_fraction = 0.1
        self.band = None
        self.channel = 0
        self.plot = False
        self.output_dir = None

    def validate(self) -> None:
        """
        Check the configuration for values no analysis can run with.

        Raises:
            ValueError: If a parameter has the wrong type or is out of range
        """
        for name in ("level", "min_section_factor", "channel", "band"):
            value = getattr(self, name)
            if name == "band" and value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if isinstance(self.persistence_fraction, bool) or not isinstance(
            self.persistence_fraction, (int, float)
        ):
            raise ValueError(
                f"persistence_fraction must be a number, got {self.persistence_fraction!r}"
            )
        if not isinstance(self.plot, bool):
            raise ValueError(f"plot must be True or False, got {self.plot!r}")
        if self.output_dir is not None and not isinstance(self.output_dir, str):
            raise ValueError(f"output_dir must be a path string, got {self.output_dir!r}")

        if self.level < 0:
            raise ValueError(f"level must be >= 0, got {self.level}")
        if self.min_section_factor < 1:
            raise ValueError(
                f"min_section_factor must be >= 1, got {self.min_section_factor}"
            )
        if not 0.0 <= self.persistence_fraction <= 1.0:
            raise ValueError(
                f"persistence_fraction must be in [0, 1], got {self.persistence_fraction}"
            )
        if self.band is not None and not 1 <= self.band <= self.level:
            raise ValueError(f"band must be in [1, {self.level}], got {self.band}")
        if self.channel < 0:
            raise ValueError(f"channel must be >= 0, got {self.channel}")

    def to_dict(self) -> Dict[str, Any]:
        """Return the configuration as a plain dictionary."""
        return {
            "level": self.level,
            "min_section_factor": self.min_section_factor,
            "persistence_fraction": self.persistence_fraction,
            "band": self.band,
            "channel": self.channel,
            "plot": self.plot,
            "output_dir": self.output_dir,
        }

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "AnalysisConfig":
        """
        Build a configuration from a dictionary.

        Unknown keys are rejected so typos do not silently fall back to defaults.

        Args:
            values: Mapping of attribute names to values

        Returns:
            A new AnalysisConfig
        """
        config = cls()
        known = config.to_dict()
        for key, value in values.items():
            if key not in known:
                raise KeyError(f"Unknown configuration key: {key}")
            setattr(config, key, value)
        return config

    @classmethod
    def from_env(
        cls,
        prefix: str = "SIGPEAKS_",
        environ: Optional[Dict[str, str]] = None
    ) -> "AnalysisConfig":
        """
        Build a configuration from defaults overridden by environment variables.

        Args:
            prefix: Prefix of the variables, e.g. ``SIGPEAKS_LEVEL``
            environ: Mapping to read instead of ``os.environ``

        Returns:
            A new AnalysisConfig
        """
        environ = os.environ if environ is None else environ
        config = cls()
        for suffix, (attr, parse) in cls._ENV_FIELDS.items():
            raw = environ.get(prefix + suffix)
            if raw is None or raw == "":
                continue
            try:
                setattr(config, attr, parse(raw))
            except ValueError as e:
                raise ValueError(f"Invalid value for {prefix + suffix}: {raw!r}") from e
            logger.debug("Config %s=%r from environment", attr, getattr(config, attr))
        return config

    def __repr__(self) -> str:
        """String representation of the configuration."""
        fields = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"AnalysisConfig({fields})"
