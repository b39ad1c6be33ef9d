from pytest_archon import archrule


def test_mapping_independence() -> None:
    """
    The record mapper is usable on its own.
    It must not depend on the builders or on execution plumbing.
    """
    (
        archrule("mapping_independence")
        .match("sqx.mapping*")
        .should_not_import("sqx.builders*")
        .should_not_import("sqx.config")
        .should_not_import("sqx.queryable")
        .should_not_import("sqx.results")
        .check("sqx")
    )


def test_exceptions_are_a_leaf() -> None:
    """
    Exceptions are imported everywhere, so they import nothing from sqx.
    """
    (
        archrule("exceptions_leaf")
        .match("sqx.exceptions")
        .should_not_import("sqx.mapping*")
        .should_not_import("sqx.builders*")
        .should_not_import("sqx.config")
        .check("sqx")
    )


def test_rendering_independence() -> None:
    """Placeholder rendering only depends on SQLAlchemy."""
    (
        archrule("rendering_independence")
        .match("sqx.placeholder")
        .should_not_import("sqx.mapping*")
        .should_not_import("sqx.builders*")
        .check("sqx")
    )

