import pytest

from commands.context import DEMO_MATRIX_A, CommandContext
from commands.executor import (
    CallResult,
    execute_call,
    execute_command_line,
    run_instructions,
)
from commands.registry import COMMAND_REGISTRY, get_command
from core.parameters.global_parameters import GlobalParameters


@pytest.fixture
def context():
    return CommandContext()


def test_multiply_matrices_defaults_to_demo_operands(context):
    result = execute_call(context, "multiply_matrices")
    assert result == CallResult(
        name="multiply_matrices",
        ok=True,
        value=[[30, 24, 18], [84, 69, 54], [138, 114, 90]],
    )
    assert isinstance(result.value[0][0], int)


def test_multiply_matrices_explicit_operands(context):
    identity = [[1, 0, 0], [0, 1, 0], [0, 0, 1]]
    result = execute_call(context, "multiply_matrices", identity, DEMO_MATRIX_A)
    assert result.unwrap() == DEMO_MATRIX_A


def test_dimension_mismatch_is_a_failed_result(context, caplog):
    with caplog.at_level("WARNING", logger="compute_kernels"):
        result = execute_call(context, "multiply_matrices", [[1, 2], [3, 4]], [[1]])
    assert not result.ok
    assert result.error_type == "DimensionMismatchError"
    assert "multiply_matrices failed" in caplog.text
    with pytest.raises(RuntimeError, match="DimensionMismatchError"):
        result.unwrap()


def test_configured_matrix_size_is_enforced():
    context = CommandContext(params=GlobalParameters({"matrix_size": 2}))
    ok = execute_call(context, "multiply", [[1, 2], [3, 4]], [[1, 0], [0, 1]])
    assert ok.value == [[1, 2], [3, 4]]

    failed = execute_call(context, "multiply")
    assert failed.error_type == "DimensionMismatchError"


def test_overflow_is_a_failed_result(context):
    big = [[2**40] * 3] * 3
    result = execute_call(context, "multiply_matrices", big, big)
    assert result.error_type == "OverflowError"


def test_prime_entry_points(context):
    assert execute_call(context, "is_prime", 97).value is True
    assert execute_call(context, "is_prime", 91).value is False
    assert execute_call(context, "count_primes", 1000).value == 168
    assert execute_call(context, "count_primes").value == 168
    assert execute_call(context, "first_primes", 4).value == [2, 3, 5, 7]
    assert execute_call(context, "first_n_primes").value == [
        2, 3, 5, 7, 11, 13, 17, 19, 23, 29,
    ]


def test_negative_range_follows_configured_policy():
    empty = CommandContext()
    assert execute_call(empty, "count_primes", -4).value == 0

    strict = CommandContext(
        params=GlobalParameters({"negative_range_policy": "reject"})
    )
    result = execute_call(strict, "count_primes", -4)
    assert not result.ok
    assert result.error_type == "InvalidRangeError"
    assert execute_call(strict, "first_primes", -1).error_type == "InvalidRangeError"


def test_bad_arguments_are_failed_results(context):
    assert execute_call(context, "is_prime").error_type == "TypeError"
    assert execute_call(context, "is_prime", 1, 2).error_type == "TypeError"
    assert execute_call(context, "count_primes", "ten").error_type == "TypeError"
    assert execute_call(context, "backends", 1).error_type == "TypeError"


def test_unknown_entry_point(context, caplog):
    with caplog.at_level("WARNING", logger="compute_kernels"):
        result = execute_call(context, "factorial", 5)
    assert result.ok is False
    assert result.error_type == "UnknownEntryPoint"
    assert "Unknown entry point: factorial" in caplog.text


def test_shorthand_names():
    cmd, args = get_command("p100")
    assert cmd is COMMAND_REGISTRY["count_primes"]
    assert args == [100]

    cmd, args = get_command("f3")
    assert cmd is COMMAND_REGISTRY["first_primes"]
    assert args == [3]

    cmd, args = get_command("IS_PRIME")
    assert cmd is COMMAND_REGISTRY["is_prime"]
    assert args == []


def test_backends_entry_point(context):
    assert execute_call(context, "backends").value == {
        "multiply_matrices": "numpy",
        "is_prime": "python",
        "count_primes": "python",
    }


def test_command_lines_decode_json_arguments(context):
    result = execute_command_line(context, "multiply [[1,0],[0,1]] [[5,6],[7,8]]")
    assert not result.ok  # default matrix_size is 3

    context.params.matrix_size = 2
    result = execute_command_line(context, "multiply [[1,0],[0,1]] [[5,6],[7,8]]")
    assert result.value == [[5, 6], [7, 8]]
    assert context.history[-1] == "multiply [[1,0],[0,1]] [[5,6],[7,8]]"


def test_blank_and_comment_lines_are_skipped(context):
    assert execute_command_line(context, "   ") is None
    assert execute_command_line(context, "# count_primes 10") is None
    assert context.history == []


def test_run_instructions_collects_results(context):
    results = run_instructions(
        context,
        ["count_primes 100", "", "p10", "is_prime 2", "nope"],
    )
    assert [r.name for r in results] == ["count_primes", "p10", "is_prime", "nope"]
    assert [r.value for r in results[:3]] == [25, 4, True]
    assert results[3].ok is False
    assert context.history == ["count_primes 100", "p10", "is_prime 2", "nope"]


@pytest.mark.parametrize("name", ["p²", "f²", "p", "f1x", "p-3"])
def test_malformed_shorthand_is_unknown_entry_point(context, name):
    result = execute_call(context, name)
    assert result.ok is False
    assert result.error_type == "UnknownEntryPoint"


def test_malformed_shorthand_in_instruction_line(context):
    result = execute_command_line(context, "f²")
    assert result.error_type == "UnknownEntryPoint"
    assert context.history == ["f²"]


def test_failing_lookup_is_unknown_entry_point(context):
    def broken_lookup(name):
        raise ValueError("bad name")

    result = execute_call(context, "p7", get_command_fn=broken_lookup)
    assert result.error_type == "UnknownEntryPoint"


@pytest.mark.parametrize("line", ["is_prime true", "count_primes false", "first_primes true"])
def test_boolean_arguments_are_type_errors(context, line):
    result = execute_command_line(context, line)
    assert result.ok is False
    assert result.error_type == "TypeError"
