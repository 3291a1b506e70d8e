"""Comparison operator translation for conditional mutations."""

from __future__ import annotations

from enum import Enum

from ..errors import ConfigError, ConfigErrorKind


class CompareOp(str, Enum):
    """Comparison operators understood by the legacy client API."""

    LESS = "LESS"
    LESS_OR_EQUAL = "LESS_OR_EQUAL"
    EQUAL = "EQUAL"
    NOT_EQUAL = "NOT_EQUAL"
    GREATER_OR_EQUAL = "GREATER_OR_EQUAL"
    GREATER = "GREATER"
    NO_OP = "NO_OP"


class CompareOperator(str, Enum):
    """Comparison operators accepted by the remote service."""

    LESS = "less"
    LESS_OR_EQUAL = "less_or_equal"
    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    GREATER_OR_EQUAL = "greater_or_equal"
    GREATER = "greater"
    NO_OP = "no_op"


def translate(op: CompareOp) -> CompareOperator:
    """Map a legacy operator onto its remote counterpart.

    Every member is listed explicitly. A member added to either enum without a
    case here raises instead of silently comparing the wrong way.
    """

    if op is CompareOp.EQUAL:
        return CompareOperator.EQUAL
    if op is CompareOp.NOT_EQUAL:
        return CompareOperator.NOT_EQUAL
    if op is CompareOp.LESS:
        return CompareOperator.LESS
    if op is CompareOp.LESS_OR_EQUAL:
        return CompareOperator.LESS_OR_EQUAL
    if op is CompareOp.GREATER:
        return CompareOperator.GREATER
    if op is CompareOp.GREATER_OR_EQUAL:
        return CompareOperator.GREATER_OR_EQUAL
    if op is CompareOp.NO_OP:
        return CompareOperator.NO_OP
    raise ConfigError(ConfigErrorKind.UNMAPPED_OPERATOR, f"Could not translate operator: {op!r}", value=op)


def translate_back(op: CompareOperator) -> CompareOp:
    """Inverse of :func:`translate`."""

    if op is CompareOperator.EQUAL:
        return CompareOp.EQUAL
    if op is CompareOperator.NOT_EQUAL:
        return CompareOp.NOT_EQUAL
    if op is CompareOperator.LESS:
        return CompareOp.LESS
    if op is CompareOperator.LESS_OR_EQUAL:
        return CompareOp.LESS_OR_EQUAL
    if op is CompareOperator.GREATER:
        return CompareOp.GREATER
    if op is CompareOperator.GREATER_OR_EQUAL:
        return CompareOp.GREATER_OR_EQUAL
    if op is CompareOperator.NO_OP:
        return CompareOp.NO_OP
    raise ConfigError(ConfigErrorKind.UNMAPPED_OPERATOR, f"Could not translate operator: {op!r}", value=op)


__all__ = ["CompareOp", "CompareOperator", "translate", "translate_back"]
