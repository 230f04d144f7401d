"""
Default parameters and the configuration record for pass-index analysis.

A dictionary holds the library defaults for every named parameter, and the
Configuration class carries the data series together with one tagged
parameter value per name while the resolver works through it.
"""

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np

from .errors import InvalidArgument

logger = logging.getLogger(__name__)

AUTO = "auto"

METHODS = ("grid", "place", "custom")

# Field-index band for grid cells, in cycles per unit of arc length:
# reciprocals of 2*170 and 26.7/8
GRID_FILTER_BAND = (1 / (2 * 170), 8 / 26.7)

# Theta band for the LFP, in Hz
DEFAULT_LFP_BAND = (6, 10)

# Butterworth order used by both built-in filters
FILTER_ORDER = 3

# Fraction of the peak rate above which a bin counts towards the field volume
FIELD_THRESHOLD = 0.1

"""
Library defaults for the named parameters accepted by resolve().
field_index defaults to the rate-map strategy; the resolver fills it in.
"""
DEFAULT_PARAMS = {
    "method": "grid",
    "binside": AUTO,
    "smth_width": AUTO,
    "field_index": None,
    "sample_along": AUTO,
    "filter_band": AUTO,
    "lfp_filter": DEFAULT_LFP_BAND,
    "slope_bnds": None,
}

PARAM_KINDS = ("auto", "literal", "strategy")


@dataclass(frozen=True)
class Param:
    """A parameter value tagged as auto, literal or strategy."""

    kind: str
    value: Any = None

    def __post_init__(self):
        if self.kind not in PARAM_KINDS:
            raise ValueError(f"Unknown parameter kind '{self.kind}'")

    @classmethod
    def auto(cls) -> "Param":
        return cls("auto", AUTO)

    @classmethod
    def literal(cls, value) -> "Param":
        return cls("literal", value)

    @classmethod
    def strategy(cls, func) -> "Param":
        if not callable(func):
            raise TypeError("A strategy parameter must be callable")
        return cls("strategy", func)

    @classmethod
    def from_user(cls, value) -> "Param":
        """Classify a raw user value: 'auto' string, callable, or literal."""
        if isinstance(value, str) and value == AUTO:
            return cls.auto()
        if callable(value):
            return cls.strategy(value)
        return cls.literal(value)

    @property
    def is_auto(self) -> bool:
        return self.kind == "auto"

    @property
    def is_strategy(self) -> bool:
        return self.kind == "strategy"


class Configuration:
    """
    Data series and parameters for a single pass-index invocation.

    Parameters are stored as Param variants; reading ``config.<name>``
    returns the underlying value. ``using_defaults`` holds the names whose
    value is still the library default. The record is mutable while the
    resolver runs and read-only once frozen.
    """

    def __init__(
        self,
        pos_ts: np.ndarray,
        pos: np.ndarray,
        spk_ts: np.ndarray,
        lfp_ts: np.ndarray | None = None,
        lfp_sig: np.ndarray | None = None,
        params: dict[str, Param] | None = None,
        using_defaults=(),
        unmatched: dict | None = None,
    ):
        self.pos_ts = pos_ts
        self.pos = pos
        self.spk_ts = spk_ts
        self.lfp_ts = lfp_ts
        self.lfp_sig = lfp_sig
        self._params = dict(params or {})
        self.using_defaults = set(using_defaults)
        self.unmatched = dict(unmatched or {})
        self._frozen = False

    def __getattr__(self, name):
        params = self.__dict__.get("_params", {})
        if name in params:
            return params[name].value
        raise AttributeError(
            f"'{type(self).__name__}' object has no attribute '{name}'"
        )

    def __setattr__(self, name, value):
        if self.__dict__.get("_frozen", False):
            raise InvalidArgument(
                f"Configuration is frozen; cannot set attribute '{name}'"
            )
        super().__setattr__(name, value)

    def __contains__(self, name):
        return name in self._params

    def __repr__(self):
        parts = []
        for name, param in self._params.items():
            if param.is_strategy:
                value = getattr(param.value, "__name__", None)
                if value is None:
                    value = getattr(getattr(param.value, "func", None), "__name__", "")
                parts.append(f"{name}=<{value}>")
            elif isinstance(param.value, np.ndarray):
                parts.append(f"{name}=<array {param.value.shape}>")
            else:
                parts.append(f"{name}={param.value!r}")
        return f"Configuration({', '.join(parts)})"

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def ndim(self) -> int:
        """Dimensionality of the position samples."""
        return self.pos.shape[1]

    @property
    def has_lfp(self) -> bool:
        return self.lfp_ts is not None and len(self.lfp_ts) > 0

    def param(self, name: str) -> Param:
        try:
            return self._params[name]
        except KeyError:
            raise InvalidArgument(f"Unknown parameter '{name}'") from None

    def kind(self, name: str) -> str:
        return self.param(name).kind

    def set(self, name: str, param: Param) -> None:
        """Replace a parameter, marking it as no longer the library default."""
        if self._frozen:
            raise InvalidArgument(
                f"Configuration is frozen; cannot set parameter '{name}'"
            )
        if not isinstance(param, Param):
            param = Param.from_user(param)
        self._params[name] = param
        self.using_defaults.discard(name)
        logger.debug("Set %s to %s %r", name, param.kind, param.value)

    def freeze(self) -> "Configuration":
        self.using_defaults = frozenset(self.using_defaults)
        self._frozen = True
        return self

    def to_params(self) -> dict:
        """
        Keyword parameters reproducing this configuration.

        Passing the result back to resolve() with the same data series yields
        the same resolved values, since resolved values are never auto.
        """
        params = {name: param.value for name, param in self._params.items()}
        params.update(self.unmatched)
        return params
