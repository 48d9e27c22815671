from dataclasses import dataclass, field

from core.parameters.global_parameters import GlobalParameters

# Operands of the matrix demo.
DEMO_MATRIX_A = [[1, 2, 3], [4, 5, 6], [7, 8, 9]]
DEMO_MATRIX_B = [[9, 8, 7], [6, 5, 4], [3, 2, 1]]


@dataclass
class CommandContext:
    """Holds the configuration shared by every call in a session."""

    params: GlobalParameters = field(default_factory=GlobalParameters)
    history: list[str] = field(default_factory=list)
    default_a: list[list[int]] = field(
        default_factory=lambda: [row[:] for row in DEMO_MATRIX_A]
    )
    default_b: list[list[int]] = field(
        default_factory=lambda: [row[:] for row in DEMO_MATRIX_B]
    )
