"""Load kernel parameters from JSON or YAML files."""

from __future__ import annotations

import json
import logging

import yaml

from core.parameters.global_parameters import GlobalParameters

logger = logging.getLogger("compute_kernels")

_INT_KEYS = ("matrix_size", "prime_limit", "first_primes_count")
_BOOL_KEYS = ("check_overflow", "use_compiled_kernels")
_NEGATIVE_POLICIES = ("empty", "reject")


def load_data(filename):
    """Load a parameter mapping from a JSON or YAML file.

    Expected format:
    {
        "matrix_size": 3,
        "prime_limit": 1000,
        ...
    }
    A top-level ``global_parameters`` mapping is also accepted.
    """
    filename_str = str(filename)
    with open(filename_str, "r") as f:
        if filename_str.endswith((".yaml", ".yml")):
            data = yaml.safe_load(f)
        elif filename_str.endswith(".json"):
            data = json.load(f)
        else:
            logger.error(f"Unsupported file format for: {filename_str}")
            raise ValueError(f"Unsupported file format for: {filename_str}")

    return data or {}


def load_config(filename) -> GlobalParameters:
    data = load_data(filename)
    if not isinstance(data, dict):
        raise ValueError(f"Configuration in {filename} must be a mapping.")

    params = data.get("global_parameters", data)
    if not isinstance(params, dict):
        raise ValueError(f"global_parameters in {filename} must be a mapping.")
    known = GlobalParameters()
    unknown = [key for key in params if key not in known]
    if unknown:
        logger.warning("Unknown configuration keys: %s", sorted(unknown))
    validate_parameters(params)
    return GlobalParameters(params)


def validate_parameters(params) -> None:
    """Raise ValueError if a known key holds a value of the wrong type.

    YAML ``false`` loads as a bool, but a quoted ``"false"`` would be truthy,
    so flags must be real booleans.
    """
    for key in _INT_KEYS:
        value = params.get(key, 0)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Parameter {key!r} must be an integer, got {value!r}")
    if params.get("matrix_size", 1) <= 0:
        raise ValueError(
            f"Parameter 'matrix_size' must be positive, got {params['matrix_size']!r}"
        )
    for key in _BOOL_KEYS:
        value = params.get(key, True)
        if not isinstance(value, bool):
            raise ValueError(f"Parameter {key!r} must be true or false, got {value!r}")
    policy = params.get("negative_range_policy", "empty")
    if policy not in _NEGATIVE_POLICIES:
        raise ValueError(
            "Parameter 'negative_range_policy' must be one of "
            f"{', '.join(_NEGATIVE_POLICIES)}, got {policy!r}"
        )
