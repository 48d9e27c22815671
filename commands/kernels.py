"""Entry points exposed across the host call boundary."""

from __future__ import annotations

from commands.base import Command
from fortran_kernels.loader import describe_backends
from kernels.matrix import multiply, to_nested_list
from kernels.primes import count_primes, first_n_primes, is_prime


class MultiplyMatricesCommand(Command):
    usage = "multiply_matrices [A] [B]   Product of two NxN integer matrices"

    def execute(self, context, args):
        self._arity(args, 2)
        params = context.params
        a = args[0] if len(args) > 0 else context.default_a
        b = args[1] if len(args) > 1 else context.default_b
        result = multiply(
            a,
            b,
            expected_size=params.get("matrix_size"),
            check_overflow=bool(params.get("check_overflow", True)),
            use_compiled=bool(params.get("use_compiled_kernels", True)),
        )
        return to_nested_list(result)


class IsPrimeCommand(Command):
    usage = "is_prime N                  Primality of one integer"

    def execute(self, context, args):
        self._arity(args, 1)
        if not args:
            raise TypeError("is_prime requires an integer argument")
        return is_prime(
            args[0], use_compiled=bool(context.params.get("use_compiled_kernels", True))
        )


class CountPrimesCommand(Command):
    usage = "count_primes [LIMIT]        Number of primes in [2, LIMIT]"

    def execute(self, context, args):
        self._arity(args, 1)
        params = context.params
        limit = args[0] if args else params.get("prime_limit")
        return count_primes(
            limit,
            negative_policy=params.get("negative_range_policy", "empty"),
            use_compiled=bool(params.get("use_compiled_kernels", True)),
        )


class FirstPrimesCommand(Command):
    usage = "first_primes [N]            The first N primes"

    def execute(self, context, args):
        self._arity(args, 1)
        params = context.params
        n = args[0] if args else params.get("first_primes_count")
        return list(
            first_n_primes(
                n, negative_policy=params.get("negative_range_policy", "empty")
            )
        )


class BackendsCommand(Command):
    usage = "backends                    Implementation used by each kernel"

    def execute(self, context, args):
        self._arity(args, 0)
        return describe_backends()
