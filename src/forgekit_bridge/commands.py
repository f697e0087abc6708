"""
Toolchain operations and argument-vector construction.

Each operation has an explicit options model listing only the options the
toolchain accepts for it. ``build_args`` turns an operation plus its options
into the exact argument vector passed to the ``forgekit`` executable.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "Operation",
    "OperationOptions",
    "PathOptions",
    "NewOptions",
    "AddOptions",
    "RemoveOptions",
    "SearchOptions",
    "TemplatesOptions",
    "FLAG_ORDER",
    "OptionsLike",
    "options_model_for",
    "coerce_options",
    "build_args",
]


class Operation(str, Enum):
    """Supported toolchain operations; the value is the canonical command token."""
    NEW = "new"
    BUILD = "build"
    PACKAGE = "package"
    BUILD_PACKAGE = "build-package"
    RUN = "run"
    ADD = "add"
    REMOVE = "remove"
    UPDATE = "update"
    SEARCH = "search"
    TEMPLATES = "templates"


# Flags are always emitted in this order, after the positional argument
FLAG_ORDER = ("path", "template", "version")


class OperationOptions(BaseModel):
    """
    Base options model.

    Unknown keys are ignored, so a loose mapping never leaks an option the
    operation does not recognize into the argument vector.
    """
    model_config = ConfigDict(extra="ignore", frozen=True)

    positional_field: ClassVar[Optional[str]] = None

    def positional(self) -> Optional[str]:
        if self.positional_field is None:
            return None
        return getattr(self, self.positional_field)

    def flags(self) -> List[str]:
        """Present options as ``--flag value`` pairs in FLAG_ORDER."""
        args: List[str] = []
        for key in FLAG_ORDER:
            value = getattr(self, key, None)
            # Empty strings count as absent
            if value:
                args.extend([f"--{key}", value])
        return args


class PathOptions(OperationOptions):
    """Options for operations that only take a project path."""
    path: Optional[str] = Field(default=None, description="Project directory")


class NewOptions(PathOptions):
    positional_field: ClassVar[Optional[str]] = "name"

    name: str = Field(..., description="Name of the new project")
    template: Optional[str] = Field(default=None, description="Project template")


class AddOptions(PathOptions):
    positional_field: ClassVar[Optional[str]] = "package"

    package: str = Field(..., description="Dependency to add")
    version: Optional[str] = Field(default=None, description="Version requirement")


class RemoveOptions(PathOptions):
    positional_field: ClassVar[Optional[str]] = "package"

    package: str = Field(..., description="Dependency to remove")


class SearchOptions(OperationOptions):
    positional_field: ClassVar[Optional[str]] = "query"

    query: str = Field(..., description="Package search query")


class TemplatesOptions(OperationOptions):
    """``templates`` takes no arguments."""


_OPTIONS_MODELS: Dict[Operation, Type[OperationOptions]] = {
    Operation.NEW: NewOptions,
    Operation.BUILD: PathOptions,
    Operation.PACKAGE: PathOptions,
    Operation.BUILD_PACKAGE: PathOptions,
    Operation.RUN: PathOptions,
    Operation.ADD: AddOptions,
    Operation.REMOVE: RemoveOptions,
    Operation.UPDATE: PathOptions,
    Operation.SEARCH: SearchOptions,
    Operation.TEMPLATES: TemplatesOptions,
}

OptionsLike = Union[OperationOptions, Mapping[str, Any], None]


def options_model_for(operation: Operation) -> Type[OperationOptions]:
    """Return the options model class accepted by ``operation``."""
    return _OPTIONS_MODELS[Operation(operation)]


def coerce_options(operation: Operation, options: OptionsLike = None) -> OperationOptions:
    """
    Normalize ``options`` into the model for ``operation``.

    Accepts an instance of exactly the right model as-is, re-validates
    instances of any other model (subclasses included) and validates plain
    mappings. Keys the operation does not recognize are dropped. Positional
    values are not checked for content; an empty string is passed through.

    Raises:
        pydantic.ValidationError: If a required positional is missing
    """
    model = options_model_for(operation)
    if options is None:
        options = {}
    # Exact match only: subclasses carry options this operation does not take
    if type(options) is model:
        return options
    if isinstance(options, BaseModel):
        options = options.model_dump()
    return model.model_validate(dict(options))


def build_args(operation: Operation, options: OptionsLike = None) -> List[str]:
    """
    Build the argument vector for one toolchain invocation.

    Layout: command token, then the positional argument (project name,
    dependency name or search query), then ``--path``, ``--template`` and
    ``--version`` in that order for whichever are present. No quoting or
    escaping is applied.

    Examples:
        >>> build_args(Operation.NEW, {"name": "myapp", "template": "cli"})
        ['new', 'myapp', '--template', 'cli']
        >>> build_args(Operation.ADD, AddOptions(package="serde", version="1.0"))
        ['add', 'serde', '--version', '1.0']
    """
    operation = Operation(operation)
    opts = coerce_options(operation, options)

    args = [operation.value]
    positional = opts.positional()
    if positional is not None:
        args.append(positional)
    args.extend(opts.flags())
    return args
