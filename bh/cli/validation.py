"""
Input Validation.

Local checks on command arguments, run before any network call.
"""

import re

from bh.core.exceptions import ValidationError
from bh.schemas.bountyhub import WorkflowInputs

_SCAN_NAME_RE = re.compile(r"[A-Za-z0-9_]+")
_WORKFLOW_VAR_KEY_RE = re.compile(r"[A-Za-z0-9_-]+")

_BOOL_VALUES = {"true": True, "false": False}


def valid_scan_name(name: str) -> bool:
    """Scan names are non-empty ASCII letters, digits and underscores."""
    return _SCAN_NAME_RE.fullmatch(name) is not None


def valid_workflow_var_key(key: str) -> bool:
    """Workflow input keys additionally allow dashes."""
    return _WORKFLOW_VAR_KEY_RE.fullmatch(key) is not None


def split_input(value: str) -> tuple[str, str]:
    """
    Split a `key=value` input at the first '='.

    Raises:
        ValidationError: If there is no '=' at all
    """
    key, sep, rest = value.partition("=")
    if not sep:
        raise ValidationError(f"Failed to get the value from input '{value}': expected key=value")
    return key, rest


def parse_bool(value: str) -> bool:
    """Accept exactly `true` or `false`."""
    try:
        return _BOOL_VALUES[value]
    except KeyError:
        raise ValidationError(f"Value '{value}' is not a valid boolean") from None


def _checked_key(key: str) -> str:
    if not valid_workflow_var_key(key):
        raise ValidationError(f"Key '{key}' is in invalid format")
    return key


def build_inputs(
    string_inputs: list[str] | None,
    bool_inputs: list[str] | None,
) -> WorkflowInputs | None:
    """
    Build the scan dispatch `inputs` mapping.

    String inputs are applied first, then bool inputs, so a bool wins
    over a string with the same key. Returns None when no input was given.
    """
    if not string_inputs and not bool_inputs:
        return None

    inputs: WorkflowInputs = {}

    for raw in string_inputs or []:
        key, value = split_input(raw)
        inputs[_checked_key(key)] = value

    for raw in bool_inputs or []:
        key, value = split_input(raw)
        inputs[_checked_key(key)] = parse_bool(value)

    return dict(sorted(inputs.items()))
