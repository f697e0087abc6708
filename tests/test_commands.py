"""
Tests for argument-vector construction.

Covers canonical command tokens, positional placement, flag ordering,
omission of absent/empty/unrecognized options, and determinism.
"""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from forgekit_bridge.commands import (
    AddOptions, NewOptions, Operation, PathOptions, RemoveOptions, SearchOptions,
    TemplatesOptions, build_args, coerce_options, options_model_for,
)

_MINIMAL_OPTIONS = {
    Operation.NEW: {"name": "myapp"},
    Operation.BUILD: {},
    Operation.PACKAGE: {},
    Operation.BUILD_PACKAGE: {},
    Operation.RUN: {},
    Operation.ADD: {"package": "serde"},
    Operation.REMOVE: {"package": "serde"},
    Operation.UPDATE: {},
    Operation.SEARCH: {"query": "json"},
    Operation.TEMPLATES: {},
}


class TestCommandTokens:
    """Test the leading command token of every operation."""

    @pytest.mark.parametrize("operation", list(Operation))
    def test_first_token_is_canonical(self, operation):
        """Test every operation starts with its canonical token."""
        args = build_args(operation, _MINIMAL_OPTIONS[operation])
        assert args[0] == operation.value

    def test_canonical_token_values(self):
        """Test the token set matches the toolchain's command names."""
        assert [op.value for op in Operation] == [
            "new", "build", "package", "build-package", "run",
            "add", "remove", "update", "search", "templates",
        ]

    def test_operation_accepts_plain_string(self):
        """Test operations given by token string are accepted."""
        assert build_args("build-package") == ["build-package"]


class TestBuildArgs:
    """Test positional and flag layout."""

    def test_new_with_template(self):
        """Test New with a template option."""
        assert build_args(Operation.NEW, {"name": "myapp", "template": "cli"}) == [
            "new", "myapp", "--template", "cli",
        ]

    def test_add_with_version(self):
        """Test Add with a version option."""
        assert build_args(Operation.ADD, {"package": "serde", "version": "1.0"}) == [
            "add", "serde", "--version", "1.0",
        ]

    def test_flag_order_is_path_template_version(self):
        """Test flags follow the fixed order regardless of input order."""
        new_args = build_args(Operation.NEW, {"template": "gui", "path": "./apps", "name": "myapp"})
        assert new_args == ["new", "myapp", "--path", "./apps", "--template", "gui"]

        add_args = build_args(Operation.ADD, {"version": "1.0", "path": "./myapp", "package": "serde"})
        assert add_args == ["add", "serde", "--path", "./myapp", "--version", "1.0"]

    @pytest.mark.parametrize("operation", [
        Operation.BUILD, Operation.PACKAGE, Operation.BUILD_PACKAGE, Operation.RUN, Operation.UPDATE,
    ])
    def test_path_only_operations(self, operation):
        """Test path-only operations emit just the path flag."""
        assert build_args(operation, {"path": "./myapp"}) == [operation.value, "--path", "./myapp"]

    def test_remove_with_path(self):
        """Test Remove places the dependency before the path flag."""
        assert build_args(Operation.REMOVE, RemoveOptions(package="serde", path="p")) == [
            "remove", "serde", "--path", "p",
        ]

    def test_search_query_is_positional(self):
        """Test Search passes the query as its positional argument."""
        assert build_args(Operation.SEARCH, {"query": "http client"}) == ["search", "http client"]

    def test_templates_takes_no_arguments(self):
        """Test Templates builds a bare command."""
        assert build_args(Operation.TEMPLATES) == ["templates"]
        assert build_args(Operation.TEMPLATES, {"path": "x", "template": "y"}) == ["templates"]

    def test_values_pass_through_unescaped(self):
        """Test values with spaces and shell characters are not quoted."""
        args = build_args(Operation.NEW, {"name": "my app", "path": "$HOME/a b;c"})
        assert args == ["new", "my app", "--path", "$HOME/a b;c"]


class TestUnrecognizedOptions:
    """Test options an operation does not recognize never appear."""

    def test_template_ignored_outside_new(self):
        """Test template is dropped for Build."""
        assert build_args(Operation.BUILD, {"template": "cli"}) == ["build"]

    def test_version_ignored_outside_add(self):
        """Test version is dropped for New and Remove."""
        assert build_args(Operation.NEW, {"name": "a", "version": "1.0"}) == ["new", "a"]
        assert build_args(Operation.REMOVE, {"package": "serde", "version": "1.0"}) == ["remove", "serde"]

    def test_path_ignored_for_search(self):
        """Test path is dropped for Search."""
        assert build_args(Operation.SEARCH, {"query": "json", "path": "./x"}) == ["search", "json"]

    def test_unknown_keys_ignored(self):
        """Test arbitrary keys are ignored."""
        assert build_args(Operation.RUN, {"force": "yes", "--path": "x"}) == ["run"]

    def test_model_of_other_operation_is_revalidated(self):
        """Test passing NewOptions to Build keeps only path."""
        options = NewOptions(name="myapp", template="cli", path="./myapp")
        assert build_args(Operation.BUILD, options) == ["build", "--path", "./myapp"]

    @pytest.mark.parametrize("operation", [
        Operation.BUILD, Operation.PACKAGE, Operation.BUILD_PACKAGE, Operation.RUN, Operation.UPDATE,
    ])
    @pytest.mark.parametrize("options", [
        NewOptions(name="myapp", template="cli"),
        AddOptions(package="serde", version="1.0"),
        RemoveOptions(package="serde"),
    ])
    def test_path_subclass_models_reduced_to_path(self, operation, options):
        """Test richer PathOptions subclasses contribute neither positional nor extra flags."""
        assert build_args(operation, options) == [operation.value]


class TestAbsentOptions:
    """Test which values count as present."""

    def test_none_and_empty_are_absent(self):
        """Test None and empty strings are omitted."""
        assert build_args(Operation.NEW, {"name": "a", "path": None, "template": ""}) == ["new", "a"]
        assert build_args(Operation.ADD, AddOptions(package="serde", version="")) == ["add", "serde"]

    def test_missing_positional_rejected(self):
        """Test a required positional must be supplied."""
        with pytest.raises(ValidationError):
            build_args(Operation.NEW, {})
        with pytest.raises(ValidationError):
            build_args(Operation.ADD, {"version": "1.0"})

    @pytest.mark.parametrize("operation,options,expected", [
        (Operation.SEARCH, {"query": ""}, ["search", ""]),
        (Operation.NEW, {"name": "", "template": "cli"}, ["new", "", "--template", "cli"]),
        (Operation.REMOVE, RemoveOptions(package=""), ["remove", ""]),
    ])
    def test_empty_positional_passed_through(self, operation, options, expected):
        """Test an empty positional is forwarded verbatim for the toolchain to judge."""
        assert build_args(operation, options) == expected


class TestDeterminism:
    """Test build_args is a pure function."""

    def test_repeated_builds_are_identical(self):
        """Test identical inputs yield identical vectors."""
        options = {"name": "myapp", "path": "./a", "template": "cli"}
        first = build_args(Operation.NEW, options)
        second = build_args(Operation.NEW, options)
        assert first == second
        assert first is not second

    def test_input_mapping_not_mutated(self):
        """Test the caller's mapping is left untouched."""
        options = {"package": "serde", "version": "1.0", "extra": "x"}
        build_args(Operation.ADD, options)
        assert options == {"package": "serde", "version": "1.0", "extra": "x"}


class TestOptionModels:
    """Test the per-operation option models."""

    def test_model_lookup(self):
        """Test each operation maps to its model."""
        assert options_model_for(Operation.NEW) is NewOptions
        assert options_model_for(Operation.ADD) is AddOptions
        assert options_model_for(Operation.REMOVE) is RemoveOptions
        assert options_model_for(Operation.SEARCH) is SearchOptions
        assert options_model_for(Operation.TEMPLATES) is TemplatesOptions
        assert options_model_for(Operation.UPDATE) is PathOptions

    def test_matching_model_returned_as_is(self):
        """Test an instance of the right model is not copied."""
        options = PathOptions(path="./x")
        assert coerce_options(Operation.BUILD, options) is options

    def test_models_are_frozen(self):
        """Test option models are immutable."""
        options = NewOptions(name="a")
        with pytest.raises(ValidationError):
            options.name = "b"
