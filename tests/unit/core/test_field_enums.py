"""Unit tests for field and status enums."""

from teamcity.rest.core import BuildField, BuildState, ChangeType, TestRunField


def test_build_default_fields_subset_of_vocabulary():
    assert BuildField.default_fields() <= frozenset(BuildField)
    assert BuildField.STATUS in BuildField.default_fields()


def test_test_run_defaults_exclude_details():
    """Details are heavy and not prefetched unless asked for."""
    assert TestRunField.DETAILS not in TestRunField.default_fields()


def test_build_state_parse_is_case_insensitive():
    assert BuildState.parse("FINISHED") is BuildState.FINISHED
    assert BuildState.parse("running") is BuildState.RUNNING


def test_build_state_parse_unknown_values():
    assert BuildState.parse(None) is BuildState.UNKNOWN
    assert BuildState.parse("exploded") is BuildState.UNKNOWN


def test_change_type_parse():
    assert ChangeType.parse("edited") is ChangeType.EDITED
    assert ChangeType.parse("COPIED") is ChangeType.COPIED
    assert ChangeType.parse("moved") is ChangeType.UNKNOWN
    assert ChangeType.parse(None) is ChangeType.UNKNOWN
