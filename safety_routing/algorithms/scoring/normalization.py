"""
Quantile normalization for network-wide indicator distributions.
"""

import logging
from typing import Dict, Sequence

import numpy as np

logger = logging.getLogger(__name__)

DEGENERATE_VALUE = 0.5


class QuantileNormalizer:
    """
    Map raw indicator values to [0, 1] using low/high quantile clipping.

    Clipping at the 5th/95th percentiles instead of min/max keeps a single
    extreme hotspot from compressing every other segment towards zero.
    An empty or zero-variance distribution maps every value to 0.5.
    """

    def __init__(self, values: Sequence[float], q_low: float = 0.05, q_high: float = 0.95):
        """
        Initialize normalizer from a distribution of raw values.

        Args:
            values: Raw indicator values across the network
            q_low: Lower quantile fraction
            q_high: Upper quantile fraction
        """
        self.q_low = q_low
        self.q_high = q_high
        self.count = len(values)

        if self.count == 0:
            self.q_low_value = 0.0
            self.q_high_value = 1.0
            self.is_degenerate = True
            return

        sorted_values = np.sort(np.asarray(values, dtype=float))
        low_idx = min(int(np.floor(self.count * q_low)), self.count - 1)
        high_idx = min(int(np.floor(self.count * q_high)), self.count - 1)

        self.q_low_value = float(sorted_values[low_idx])
        self.q_high_value = float(sorted_values[high_idx])
        self.is_degenerate = self.q_high_value == self.q_low_value

        if self.is_degenerate:
            logger.debug(f"Degenerate distribution of {self.count} values - normalizing to {DEGENERATE_VALUE}")

    def __call__(self, value: float) -> float:
        if self.is_degenerate:
            return DEGENERATE_VALUE

        scaled = (value - self.q_low_value) / (self.q_high_value - self.q_low_value)
        return float(min(1.0, max(0.0, scaled)))

    def normalize_array(self, values: Sequence[float]) -> np.ndarray:
        """Vectorised normalization of many values."""
        values = np.asarray(values, dtype=float)

        if self.is_degenerate:
            return np.full(values.shape, DEGENERATE_VALUE)

        scaled = (values - self.q_low_value) / (self.q_high_value - self.q_low_value)
        return np.clip(scaled, 0.0, 1.0)

    def get_statistics(self) -> Dict:
        return {
            'count': self.count,
            'q_low': self.q_low,
            'q_high': self.q_high,
            'q_low_value': self.q_low_value,
            'q_high_value': self.q_high_value,
            'is_degenerate': self.is_degenerate
        }
