# Copyright (c) 2026 smoothing_filter contributors
# SPDX-License-Identifier: MIT

"""Configuration for gamma-corrected smoothing."""

import json
import numbers
from dataclasses import dataclass
from pathlib import Path

from smoothing_filter.errors import InvalidParameterError


# Camera sensors apply a ~0.45 gamma, so linearise with 2.22 before blurring
GAMMA = 2.22
OFFSET = 0.099  # Rec. 709
FACTOR = 283.02  # keeps (i / FACTOR) + OFFSET <= 1 for 8-bit input
IN_RANGE = 256
OUT_RANGE = 4096  # 12-bit reverse lookup

DEFAULT_KERNELSIZE = 1
DEFAULT_SIGMA = 1.5

MIN_KERNELSIZE = 0
MAX_KERNELSIZE = 2
MIN_SIGMA = 0.1
MAX_SIGMA = 100.0


@dataclass
class GammaParams:
    """Parameters for the gamma lookup tables."""
    gamma: float = GAMMA
    offset: float = OFFSET
    factor: float = FACTOR
    out_range: int = OUT_RANGE

    def validate(self) -> "GammaParams":
        """
        Check table parameters before the lookup tables are built.

        Returns:
            self, so calls can be chained

        Raises:
            InvalidParameterError: If a value would give an empty or NaN table
        """
        for name in ("gamma", "offset", "factor"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise InvalidParameterError(f"{name} must be a number, got {value!r}")
        if not self.gamma > 0:
            raise InvalidParameterError(f"gamma must be positive, got {self.gamma}")
        if not self.factor > 0:
            raise InvalidParameterError(f"factor must be positive, got {self.factor}")
        if not self.offset >= 0:
            raise InvalidParameterError(f"offset must not be negative, got {self.offset}")
        if isinstance(self.out_range, bool) or not isinstance(self.out_range, numbers.Integral):
            raise InvalidParameterError(
                f"out_range must be an integer, got {self.out_range!r}"
            )
        if self.out_range < 2:
            raise InvalidParameterError(
                f"out_range must be at least 2, got {self.out_range}"
            )
        return self


@dataclass
class SmoothingParams:
    """Tunable smoothing parameters."""
    kernelsize: int = DEFAULT_KERNELSIZE
    sigma: float = DEFAULT_SIGMA

    def validate(self) -> "SmoothingParams":
        """
        Check parameter ranges before they reach the filter.

        Returns:
            self, so calls can be chained

        Raises:
            InvalidParameterError: If a value is out of range or of the wrong type
        """
        if isinstance(self.kernelsize, bool) or not isinstance(self.kernelsize, numbers.Integral):
            raise InvalidParameterError(
                f"kernelsize must be an integer, got {self.kernelsize!r}"
            )
        if not MIN_KERNELSIZE <= self.kernelsize <= MAX_KERNELSIZE:
            raise InvalidParameterError(
                f"kernelsize must be in [{MIN_KERNELSIZE}, {MAX_KERNELSIZE}], "
                f"got {self.kernelsize}"
            )
        if isinstance(self.sigma, bool) or not isinstance(self.sigma, numbers.Real):
            raise InvalidParameterError(f"sigma must be a number, got {self.sigma!r}")
        if not MIN_SIGMA <= self.sigma <= MAX_SIGMA:
            raise InvalidParameterError(
                f"sigma must be in [{MIN_SIGMA}, {MAX_SIGMA}], got {self.sigma}"
            )
        return self

    @property
    def side(self) -> int:
        """Side length of the square kernel."""
        return 2 * self.kernelsize + 1


@dataclass
class Configuration:
    """Configuration for a smoothing run."""

    # Kernel parameters
    kernelsize: int = DEFAULT_KERNELSIZE
    sigma: float = DEFAULT_SIGMA

    # Lookup table precision
    gamma: float = GAMMA
    offset: float = OFFSET
    factor: float = FACTOR
    out_range: int = OUT_RANGE

    # Output settings
    results_path: str = "Results/"
    fourcc: str = "mp4v"
    write_json: bool = False

    @classmethod
    def from_json(cls, path: str) -> "Configuration":
        """Load configuration from appsettings.json file."""
        config_path = Path(path) / "appsettings.json"

        if not config_path.exists():
            return cls()

        with open(config_path, "r") as f:
            # Drop whole-line comments; "//" inside values such as UNC paths stays
            lines = [
                line for line in f.read().split("\n")
                if not line.lstrip().startswith("//")
            ]
            data = json.loads("\n".join(lines))

        config = cls()

        if "Smoothing" in data:
            sm = data["Smoothing"]
            config.kernelsize = sm.get("KernelSize", config.kernelsize)
            config.sigma = sm.get("Sigma", config.sigma)

        if "Gamma" in data:
            gm = data["Gamma"]
            config.gamma = gm.get("Gamma", config.gamma)
            config.offset = gm.get("Offset", config.offset)
            config.factor = gm.get("Factor", config.factor)
            config.out_range = gm.get("OutRange", config.out_range)

        if "Output" in data:
            out = data["Output"]
            config.fourcc = out.get("FourCC", config.fourcc)
            config.write_json = out.get("WriteJson", config.write_json)

        config.results_path = data.get("ResultsPath", config.results_path)

        return config

    def get_smoothing_params(self) -> SmoothingParams:
        """Get kernel parameters."""
        return SmoothingParams(kernelsize=self.kernelsize, sigma=self.sigma)

    def get_gamma_params(self) -> GammaParams:
        """Get lookup table parameters."""
        return GammaParams(
            gamma=self.gamma,
            offset=self.offset,
            factor=self.factor,
            out_range=self.out_range,
        )
