"""Property discovery — resolves view-model property names to rules and readability.

Rules are declared as typing.Annotated metadata, either on class-level field
annotations (plain classes, dataclasses, pydantic models) or on the return
annotation of a property getter:

    class PersonViewModel:
        first_name: Annotated[Optional[str], Required()] = None

        @property
        def initials(self) -> Annotated[str, MaxLength(length=3)]:
            ...

Discovery runs once per view-model type and is cached. String annotations
(`from __future__ import annotations`) are evaluated per member against the
module globals and the class namespace.
"""

import inspect
import sys
import types
import typing
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Annotated, Optional, Union

import structlog

from viewmodel_validation.validators.models import DisplayName
from viewmodel_validation.validators.rules.base import Rule

logger = structlog.get_logger()

_MISSING = object()

_NOT_PROPERTIES = (staticmethod, classmethod)

_UNION_TYPES = (Union, types.UnionType)


@dataclass(frozen=True)
class DeclaredProperty:
    """A named member of a view-model type, as seen by the builder.

    `unresolved` holds the evaluation error of a rule-bearing annotation that
    could not be evaluated; the builder refuses such a property.
    """

    name: str
    readable: bool
    rules: tuple[Rule, ...] = ()
    display_name: Optional[str] = None
    unresolved: Optional[str] = None


def _metadata(annotation: Any):
    """Annotated metadata items, unwrapping unions such as Optional[Annotated[T, ...]]."""
    origin = typing.get_origin(annotation)
    if origin is Annotated:
        yield from annotation.__metadata__
    elif origin in _UNION_TYPES:
        for arg in typing.get_args(annotation):
            yield from _metadata(arg)


def rules_from_annotation(annotation: Any) -> tuple[Rule, ...]:
    """Extract Rule instances from an Annotated hint, in declaration order.

    Optional[Annotated[T, ...]] is unwrapped as well as Annotated[Optional[T], ...].
    """
    if annotation is None:
        return ()
    return tuple(item for item in _metadata(annotation) if isinstance(item, Rule))


def display_name_from_annotation(annotation: Any) -> Optional[str]:
    """The first DisplayName declared in an Annotated hint, if any."""
    for item in _metadata(annotation):
        if isinstance(item, DisplayName):
            return item.name
    return None


def _own_annotations(klass: type) -> dict[str, Any]:
    """Annotations declared directly on `klass`, unevaluated."""
    try:
        return inspect.get_annotations(klass)
    except NameError:
        return {}


def _module_globals(obj: Any) -> dict[str, Any]:
    module = sys.modules.get(getattr(obj, "__module__", None))
    return getattr(module, "__dict__", {})


def _declare(
    name: str,
    annotation: Any,
    readable: bool,
    owner: str,
    globalns: dict[str, Any],
    localns: dict[str, Any],
) -> DeclaredProperty:
    """Evaluate one annotation and build its DeclaredProperty.

    String annotations (postponed evaluation, or written as strings) are
    evaluated one at a time, so an unresolvable name only affects the member
    that uses it.
    """
    if isinstance(annotation, str):
        try:
            annotation = eval(annotation, globalns, localns)
        except (NameError, AttributeError, TypeError, SyntaxError) as e:
            if "Annotated" in annotation:
                logger.warning("annotation_unresolved", owner=owner, name=name, error=str(e))
                return DeclaredProperty(name=name, readable=readable, unresolved=str(e))
            logger.debug("annotation_unresolved", owner=owner, name=name, error=str(e))
            return DeclaredProperty(name=name, readable=readable)

    return DeclaredProperty(
        name=name,
        readable=readable,
        rules=rules_from_annotation(annotation),
        display_name=display_name_from_annotation(annotation),
    )


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return typing.get_origin(annotation) is typing.ClassVar


def _is_public(name: str) -> bool:
    return not name.startswith("_")


@lru_cache(maxsize=256)
def declared_properties(view_model_type: type) -> dict[str, DeclaredProperty]:
    """All annotated fields and properties of a type, base classes first.

    Args:
        view_model_type: The class of the view-model

    Returns:
        Mapping of member name to DeclaredProperty, in declaration order
    """
    members: dict[str, DeclaredProperty] = {}

    for klass in reversed(view_model_type.__mro__):
        if klass is object:
            continue

        owner = klass.__qualname__
        namespace = dict(vars(klass))

        for name, annotation in _own_annotations(klass).items():
            if _is_class_var(annotation):
                continue
            members[name] = _declare(
                name, annotation, _is_public(name), owner, _module_globals(klass), namespace
            )

        for name, value in vars(klass).items():
            if not isinstance(value, property):
                continue
            readable = value.fget is not None and _is_public(name)
            if value.fget is None:
                members[name] = DeclaredProperty(name=name, readable=readable)
                continue
            annotation = inspect.get_annotations(value.fget).get("return")
            members[name] = _declare(
                name, annotation, readable, owner, getattr(value.fget, "__globals__", {}), namespace
            )

    return members


def resolve_property(view_model_type: type, name: str) -> Optional[DeclaredProperty]:
    """Resolve a single member name.

    Returns:
        The DeclaredProperty, or None if the type has no property of that name.
        Methods are not properties. Plain class attributes are readable and
        carry no rules.
    """
    declared = declared_properties(view_model_type).get(name)
    if declared is not None:
        return declared

    attr = inspect.getattr_static(view_model_type, name, _MISSING)
    if attr is _MISSING:
        return None
    if callable(attr) or isinstance(attr, _NOT_PROPERTIES):
        return None

    return DeclaredProperty(name=name, readable=_is_public(name))


def rule_bearing_properties(view_model_type: type) -> list[str]:
    """Names of public, readable properties that declare at least one rule.

    Properties whose rule annotation could not be evaluated are included, so
    that registering them reports the error.
    """
    return [
        prop.name
        for prop in declared_properties(view_model_type).values()
        if prop.readable and (prop.rules or prop.unresolved)
    ]
