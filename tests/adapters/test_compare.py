"""Tests for comparison operator translation."""

from __future__ import annotations

import pytest

from tablecompat.adapters import CompareOp, CompareOperator, translate, translate_back
from tablecompat.errors import ConfigError, ConfigErrorKind


@pytest.mark.parametrize(
    ("legacy", "remote"),
    [
        (CompareOp.EQUAL, CompareOperator.EQUAL),
        (CompareOp.NOT_EQUAL, CompareOperator.NOT_EQUAL),
        (CompareOp.LESS, CompareOperator.LESS),
        (CompareOp.LESS_OR_EQUAL, CompareOperator.LESS_OR_EQUAL),
        (CompareOp.GREATER, CompareOperator.GREATER),
        (CompareOp.GREATER_OR_EQUAL, CompareOperator.GREATER_OR_EQUAL),
        (CompareOp.NO_OP, CompareOperator.NO_OP),
    ],
)
def test_translate_maps_each_operator(legacy: CompareOp, remote: CompareOperator) -> None:
    assert translate(legacy) is remote


def test_translate_is_a_bijection() -> None:
    translated = {translate(op) for op in CompareOp}

    assert len(CompareOp) == len(CompareOperator) == 7
    assert translated == set(CompareOperator)
    for op in CompareOp:
        assert translate_back(translate(op)) is op


def test_translate_rejects_unknown_values() -> None:
    with pytest.raises(ConfigError) as excinfo:
        translate("EQUAL")  # type: ignore[arg-type]

    assert excinfo.value.kind is ConfigErrorKind.UNMAPPED_OPERATOR
    assert excinfo.value.value == "EQUAL"


def test_translate_back_rejects_unknown_values() -> None:
    with pytest.raises(ConfigError) as excinfo:
        translate_back(CompareOp.EQUAL)  # type: ignore[arg-type]

    assert excinfo.value.kind is ConfigErrorKind.UNMAPPED_OPERATOR
