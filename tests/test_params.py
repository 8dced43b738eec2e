from __future__ import annotations

import argparse

import pytest

from mcsalign.params import Parameters, add_alignment_arguments


def test_defaults() -> None:
    params = Parameters()
    assert params.perturbation == 0.2
    assert params.max_nonimproving == 20
    assert params.exceptions == 0
    assert not params.connected
    assert not params.remove_leaf_exceptions
    assert params.restarts == 1
    assert params.max_local_moves == 1000


@pytest.mark.parametrize("kwargs", [
    {"perturbation": -0.1},
    {"perturbation": 1.5},
    {"max_nonimproving": -1},
    {"exceptions": -2},
    {"max_local_moves": 0},
    {"restarts": 0},
])
def test_invalid_values_are_rejected(kwargs) -> None:
    with pytest.raises(ValueError):
        Parameters(**kwargs)


def test_from_args() -> None:
    parser = argparse.ArgumentParser()
    add_alignment_arguments(parser)
    args = parser.parse_args([
        "--perturbation", "0.5", "--max-nonimproving", "7", "--exceptions", "1",
        "--connected", "--remove-leaf-exceptions", "--seed", "42", "--restarts", "3",
        "--max-local-moves", "100",
    ])

    params = Parameters.from_args(args)

    assert params == Parameters(perturbation=0.5, max_nonimproving=7, exceptions=1, connected=True,
                                remove_leaf_exceptions=True, max_local_moves=100, seed=42, restarts=3)
