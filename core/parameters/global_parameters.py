# global_parameters.py


class GlobalParameters:
    def __init__(self, initial_params=None):
        """
        all parameters are defined with underscore, _, instead of spaces
        """
        self._params = {
            # Dimension N of the square matrices used by the demo driver and
            # enforced by the command boundary.
            "matrix_size": 3,
            "prime_limit": 1000,
            "first_primes_count": 10,
            # What to do with a negative enumeration bound:
            #   "empty"  - treat as an empty range (zero primes).
            #   "reject" - raise InvalidRangeError.
            "negative_range_policy": "empty",
            # Refuse fixed-width products whose magnitude bound exceeds int64.
            "check_overflow": True,
            # Compiled kernels still require COMPUTE_KERNELS_ENABLE_FORTRAN=1.
            "use_compiled_kernels": True,
        }
        if initial_params:
            self.update(initial_params)

    def __getattr__(self, name):
        """Attribute access for known parameter keys.

        ``params.prime_limit`` and ``params.get("prime_limit")`` read the same
        internal ``_params`` entry.
        """
        params = self.__dict__.get("_params")
        if params is not None and name in params:
            return params[name]
        raise AttributeError(
            f"{type(self).__name__!s} object has no attribute {name!r}"
        )

    def __setattr__(self, name, value):
        """Attribute assignment for known parameter keys."""
        if name == "_params":
            object.__setattr__(self, name, value)
            return
        params = self.__dict__.get("_params")
        if params is not None and name in params:
            params[name] = value
            return
        object.__setattr__(self, name, value)

    def get(self, key, default=None):
        """Retrieve a parameter value, or return a default if not found."""
        return self._params.get(key, default)

    def set(self, key, value):
        """Set or update a parameter."""
        self._params[key] = value

    def update(self, params):
        """Update multiple parameters at once."""
        self._params.update(params)

    def __contains__(self, key):
        return key in self._params

    def __repr__(self):
        return f"GlobalParameters({self._params})"

    def to_dict(self):
        """Convert the parameters to a dictionary for serialization."""
        return dict(self._params)
