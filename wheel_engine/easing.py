"""
Easing Curves

Maps linear progress t in [0, 1] to eased progress p in [0, 1].

The wheel uses a two-phase power curve: a fast power-law rise up to a
crossover point, then a long decelerating power-law tail.

    t < t1:   p = k * t^p1
    t >= t1:  p = 1 - A * (1 - t)^p2

with
    Y       = p1 (1 - t1) / (p2 t1 + p1 (1 - t1))
    k       = (1 - Y) / t1^p1
    A       = Y / (1 - t1)^p2

Y is chosen so both value and slope match at t1. With t1 = 0.20,
p1 = 3, p2 = 5 this is the default wheel curve.

Curves accept floats or numpy arrays.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class TwoPhaseEasing:
    """
    Power-law rise then power-law fall.

    Attributes:
        crossover: Progress at which the rise hands over to the fall (t1)
        rise_power: Exponent of the rising segment (p1)
        fall_power: Exponent of the decelerating segment (p2)
    """

    crossover: float = 0.20
    rise_power: float = 3.0
    fall_power: float = 5.0

    def __post_init__(self):
        if not 0.0 < self.crossover < 1.0:
            raise ValueError(f"crossover must be in (0, 1), got {self.crossover}")
        if self.rise_power <= 0 or self.fall_power <= 0:
            raise ValueError("Easing powers must be positive")

    @property
    def split_value(self) -> float:
        """Eased progress reached at the crossover point."""
        t1, p1, p2 = self.crossover, self.rise_power, self.fall_power
        y = (p1 * (1 - t1)) / (p2 * t1 + p1 * (1 - t1))
        return 1 - y

    def __call__(self, t):
        t1, p1, p2 = self.crossover, self.rise_power, self.fall_power
        y = 1 - self.split_value
        k = (1 - y) / t1**p1
        a = y / (1 - t1) ** p2

        t = np.clip(t, 0.0, 1.0)
        eased = np.where(t < t1, k * np.power(t, p1), 1 - a * np.power(1 - t, p2))
        if np.ndim(eased) == 0:
            return float(eased)
        return eased


def linear(t):
    t = np.clip(t, 0.0, 1.0)
    return float(t) if np.ndim(t) == 0 else t


def ease_out_cubic(t):
    """Smooth deceleration."""
    t = np.clip(t, 0.0, 1.0)
    eased = 1 - (1 - t) ** 3
    return float(eased) if np.ndim(eased) == 0 else eased


def get_easing(name: str, **params):
    """
    Get an easing curve by name.

    Args:
        name: "two_phase", "ease_out_cubic" or "linear"
        **params: TwoPhaseEasing parameters (two_phase only)

    Raises:
        ValueError: If the name is not recognized
    """
    if name == "two_phase":
        return TwoPhaseEasing(**params)
    curves = {
        "ease_out_cubic": ease_out_cubic,
        "linear": linear,
    }
    if name not in curves:
        available = ", ".join(["two_phase", *curves.keys()])
        raise ValueError(f"Unknown easing '{name}'. Available: {available}")
    return curves[name]
