# Optline Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Builds a command's argument model by introspecting its constructor.

Every keyword-capable parameter of the command's `__init__` becomes an
`Argument`. Names, arity, defaults, and documentation come from the parameter
itself and from an optional `arg(...)` placed in `typing.Annotated`. Dataclass
fields declared with `default_factory` count as defaulted.

Functions:
- build_argument_lookup: Introspect a command class into an `ArgumentLookup`.
"""
from __future__ import annotations

import dataclasses
import inspect
import types
from typing import Annotated, Any, Union, get_args, get_origin, get_type_hints

from optline.declarations import ArgSpec
from optline.exceptions import CommandDefinitionError
from optline.logger import logger
from optline.parser.argument import Argument
from optline.parser.argument_lookup import ArgumentLookup
from optline.parser.tokenizer import is_valid_long_name, is_valid_short_name
from optline.parser.utils import describe_type
from optline.utils import to_kebab_case

_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def _type_hints(cls: type) -> dict[str, Any]:
    hints: dict[str, Any] = {}
    for source in (cls, cls.__init__):
        try:
            hints.update(get_type_hints(source, include_extras=True))
        except (NameError, TypeError) as error:
            raise CommandDefinitionError(
                f"Could not resolve the type hints of '{cls.__name__}': {error}"
            ) from error
    return hints


def _split_annotated(annotation: Any) -> tuple[Any, ArgSpec]:
    """Separate `Annotated[T, arg(...)]` into `T` and its `ArgSpec`."""
    if get_origin(annotation) is Annotated:
        base, *extras = get_args(annotation)
        specs = [extra for extra in extras if isinstance(extra, ArgSpec)]
        return base, specs[0] if specs else ArgSpec()

    if isinstance(annotation, types.UnionType) or get_origin(annotation) is Union:
        members = []
        found = ArgSpec()
        for member in get_args(annotation):
            base, spec = _split_annotated(member)
            if spec != ArgSpec():
                found = spec
            members.append(base)
        return Union[tuple(members)], found

    return annotation, ArgSpec()


def _dataclass_defaults(cls: type) -> dict[str, Any]:
    if not dataclasses.is_dataclass(cls):
        return {}
    return {
        field.name: field.default_factory()
        for field in dataclasses.fields(cls)
        if field.default_factory is not dataclasses.MISSING
    }


def _build_argument(
    cls: type,
    index: int,
    parameter: inspect.Parameter,
    annotation: Any,
    factory_defaults: dict[str, Any],
) -> Argument:
    name = parameter.name
    base, spec = _split_annotated(annotation)
    descriptor = describe_type(base)

    long_name = spec.name or to_kebab_case(name)
    if not is_valid_long_name(long_name):
        raise CommandDefinitionError(
            f"'{cls.__name__}.{name}': '{long_name}' is not a valid option name"
        )
    # `-5` always tokenizes as a negative number
    if spec.flag is not None and (
        not is_valid_short_name(spec.flag) or spec.flag.isdigit()
    ):
        raise CommandDefinitionError(
            f"'{cls.__name__}.{name}': the flag '{spec.flag}' must be a single "
            "letter"
        )

    has_default = True
    default: Any = None
    if name in factory_defaults:
        default = factory_defaults[name]
    elif parameter.default is not inspect.Parameter.empty:
        default = parameter.default
    elif descriptor.is_flag:
        default = False
    else:
        has_default = False

    if spec.hidden and not has_default:
        raise CommandDefinitionError(
            f"'{cls.__name__}.{name}' is hidden and must declare a default value"
        )

    min_elements = spec.min_elements
    max_elements = spec.max_elements
    if descriptor.is_collection:
        min_elements = 1 if min_elements is None else min_elements
        if min_elements < 0:
            raise CommandDefinitionError(
                f"'{cls.__name__}.{name}': min_elements must not be negative"
            )
        if max_elements is not None and max_elements < min_elements:
            raise CommandDefinitionError(
                f"'{cls.__name__}.{name}': min_elements ({min_elements}) is greater "
                f"than max_elements ({max_elements})"
            )
    elif min_elements is not None or max_elements is not None:
        raise CommandDefinitionError(
            f"'{cls.__name__}.{name}': min_elements and max_elements apply only to "
            "collection arguments"
        )

    return Argument(
        name=name,
        index=index,
        type_descriptor=descriptor,
        long_name=long_name,
        short_name=spec.flag,
        has_default=has_default,
        default=default,
        doc=spec.doc,
        min_elements=min_elements,
        max_elements=max_elements,
        mutually_exclusive=set(spec.mutex),
        sensitive=spec.sensitive,
        special=spec.special,
        hidden=spec.hidden,
        group=spec.group,
        converter=spec.converter,
        declaring_class=cls,
    )


def _link_mutually_exclusive(cls: type, lookup: ArgumentLookup) -> None:
    """Resolve mutex declarations to parameter names and make them symmetric."""
    for argument in lookup:
        resolved = set()
        for partner_name in argument.mutually_exclusive:
            partner = lookup.for_field(partner_name) or lookup.by_name(partner_name)
            if partner is None:
                raise CommandDefinitionError(
                    f"'{cls.__name__}.{argument.name}' is declared mutually exclusive "
                    f"with '{partner_name}', which does not exist"
                )
            if partner is argument:
                raise CommandDefinitionError(
                    f"'{cls.__name__}.{argument.name}' cannot be mutually exclusive "
                    "with itself"
                )
            resolved.add(partner.name)
        argument.mutually_exclusive = resolved

    for argument in lookup:
        for partner_name in list(argument.mutually_exclusive):
            partner = lookup.for_field(partner_name)
            assert partner is not None
            partner.mutually_exclusive.add(argument.name)


def build_argument_lookup(cls: type) -> ArgumentLookup:
    """
    Introspect a command class into an ordered `ArgumentLookup`.

    Args:
        cls (type): The command class. Its constructor parameters are the arguments.

    Returns:
        ArgumentLookup: One `Argument` per parameter, in declaration order.

    Raises:
        CommandDefinitionError: If the declaration is inconsistent: names that
            collide or do not fit the option grammar, arity bounds on scalars,
            hidden parameters without defaults, or mutex references to unknown
            parameters.
    """
    if not isinstance(cls, type):
        raise CommandDefinitionError(f"Commands must be classes, got {cls!r}")
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError) as error:
        raise CommandDefinitionError(
            f"Could not read the constructor of '{cls.__name__}': {error}"
        ) from error

    hints = _type_hints(cls)
    factory_defaults = _dataclass_defaults(cls)
    lookup = ArgumentLookup()
    index = 0
    for parameter in signature.parameters.values():
        if parameter.kind in _SKIPPED_KINDS:
            continue
        if parameter.kind is inspect.Parameter.POSITIONAL_ONLY:
            raise CommandDefinitionError(
                f"'{cls.__name__}.{parameter.name}' is positional-only; command "
                "parameters must be accepted by keyword"
            )
        annotation = hints.get(parameter.name, str)
        lookup.add(_build_argument(cls, index, parameter, annotation, factory_defaults))
        index += 1

    _link_mutually_exclusive(cls, lookup)
    logger.debug("[%s] Built %d arguments.", cls.__name__, len(lookup))
    return lookup
