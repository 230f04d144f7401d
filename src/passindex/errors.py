"""Exceptions raised while resolving and running a pass-index configuration."""


class PassIndexError(Exception):
    """Base class for all passindex errors."""


class InvalidArgument(PassIndexError, ValueError):
    """An input series or named parameter has the wrong shape, type or range."""


class InsufficientData(PassIndexError, ValueError):
    """A series is too degenerate to resample, filter or map."""


class ExternalComputationError(PassIndexError, RuntimeError):
    """
    A numeric primitive (filter design, filtering, interpolation) failed.

    Parameters
    ----------
    message : str
        Description of the failure
    band : tuple[float, float], optional
        Frequency band that was being applied
    **params
        Any other values useful for diagnosing the failure
        (e.g. sampling_rate, n_samples)
    """

    def __init__(self, message, band=None, **params):
        self.band = None if band is None else tuple(float(b) for b in band)
        self.params = params
        details = []
        if self.band is not None:
            details.append(f"band={list(self.band)}")
        details.extend(f"{key}={value}" for key, value in params.items())
        if details:
            message = f"{message} ({', '.join(details)})"
        super().__init__(message)
