"""API conventions: shared response metadata matched to actions by shape.

A convention class holds static methods whose names, parameters and
response declarations describe a family of actions. An action that
declares no response metadata of its own gets the declarations of the
first convention method it matches.
"""

import inspect
import logging
from typing import Annotated, Any, Callable, Iterable, Iterator, get_args, get_origin, get_type_hints

from .attributes import (
    ApiConventionMethodAttribute,
    ApiConventionNameMatchAttribute,
    ApiConventionTypeAttribute,
    NameMatch,
    ResponseMetadataProvider,
    TypeMatch,
    api_convention_name_match,
    get_declared_metadata,
    produces_default_response_type,
    produces_response_type,
)
from .models import ApiConventionResult, ControllerActionDescriptor

logger = logging.getLogger(__name__)


class DefaultApiConventions:
    """Conventions for the usual create, read, update and delete actions."""

    @staticmethod
    @produces_response_type(200)
    @produces_response_type(404)
    @produces_default_response_type()
    @api_convention_name_match(NameMatch.PREFIX)
    def get(id: Annotated[Any, NameMatch.SUFFIX, TypeMatch.ANY]) -> None:
        pass

    @staticmethod
    @produces_response_type(200)
    @produces_response_type(404)
    @produces_default_response_type()
    @api_convention_name_match(NameMatch.PREFIX)
    def find(id: Annotated[Any, NameMatch.SUFFIX, TypeMatch.ANY]) -> None:
        pass

    @staticmethod
    @produces_response_type(201)
    @produces_response_type(400)
    @produces_default_response_type()
    @api_convention_name_match(NameMatch.PREFIX)
    def post(model: Annotated[Any, NameMatch.ANY, TypeMatch.ANY]) -> None:
        pass

    @staticmethod
    @produces_response_type(201)
    @produces_response_type(400)
    @produces_default_response_type()
    @api_convention_name_match(NameMatch.PREFIX)
    def create(model: Annotated[Any, NameMatch.ANY, TypeMatch.ANY]) -> None:
        pass

    @staticmethod
    @produces_response_type(204)
    @produces_response_type(404)
    @produces_response_type(400)
    @produces_default_response_type()
    @api_convention_name_match(NameMatch.PREFIX)
    def put(
        id: Annotated[Any, NameMatch.SUFFIX, TypeMatch.ANY],
        model: Annotated[Any, NameMatch.ANY, TypeMatch.ANY],
    ) -> None:
        pass

    @staticmethod
    @produces_response_type(204)
    @produces_response_type(404)
    @produces_response_type(400)
    @produces_default_response_type()
    @api_convention_name_match(NameMatch.PREFIX)
    def edit(
        id: Annotated[Any, NameMatch.SUFFIX, TypeMatch.ANY],
        model: Annotated[Any, NameMatch.ANY, TypeMatch.ANY],
    ) -> None:
        pass

    @staticmethod
    @produces_response_type(204)
    @produces_response_type(404)
    @produces_response_type(400)
    @produces_default_response_type()
    @api_convention_name_match(NameMatch.PREFIX)
    def update(
        id: Annotated[Any, NameMatch.SUFFIX, TypeMatch.ANY],
        model: Annotated[Any, NameMatch.ANY, TypeMatch.ANY],
    ) -> None:
        pass

    @staticmethod
    @produces_response_type(200)
    @produces_response_type(404)
    @produces_response_type(400)
    @produces_default_response_type()
    @api_convention_name_match(NameMatch.PREFIX)
    def delete(id: Annotated[Any, NameMatch.SUFFIX, TypeMatch.ANY]) -> None:
        pass


def _action_parameters(method: Callable[..., Any]) -> list[inspect.Parameter]:
    parameters = list(inspect.signature(method).parameters.values())
    if parameters and parameters[0].name in ("self", "cls"):
        parameters = parameters[1:]
    return parameters


def _type_hints(method: Callable[..., Any]) -> dict[str, Any]:
    try:
        return get_type_hints(method, include_extras=True)
    except (NameError, TypeError) as e:
        logger.warning(f"Could not resolve annotations of {method!r}: {e}")
        return {}


class ApiConventionMatcher:
    """Decides whether an action method matches a convention method.

    All methods are static as the class carries no state.
    """

    @staticmethod
    def is_match(method: Callable[..., Any], convention_method: Callable[..., Any]) -> bool:
        """Match names, then parameters position by position.

        A `*args` convention parameter matches all remaining action
        parameters; otherwise both must have the same parameter count.
        """
        name_behavior = ApiConventionMatcher.get_method_name_match(convention_method)
        if not ApiConventionMatcher.is_name_match(
            method.__name__, convention_method.__name__, name_behavior
        ):
            return False

        method_parameters = _action_parameters(method)
        convention_parameters = _action_parameters(convention_method)
        method_hints = _type_hints(method)
        convention_hints = _type_hints(convention_method)

        for index, convention_parameter in enumerate(convention_parameters):
            if convention_parameter.kind is inspect.Parameter.VAR_POSITIONAL:
                return True

            if index >= len(method_parameters):
                return False

            method_parameter = method_parameters[index]
            convention_type, name_match, type_match = ApiConventionMatcher._parameter_behavior(
                convention_hints.get(convention_parameter.name, Any)
            )
            method_type = method_hints.get(method_parameter.name, Any)
            if get_origin(method_type) is Annotated:
                method_type = get_args(method_type)[0]

            if not ApiConventionMatcher.is_type_match(method_type, convention_type, type_match):
                return False
            if not ApiConventionMatcher.is_name_match(
                method_parameter.name, convention_parameter.name, name_match
            ):
                return False

        return len(method_parameters) == len(convention_parameters)

    @staticmethod
    def get_method_name_match(convention_method: Callable[..., Any]) -> NameMatch:
        for declaration in get_declared_metadata(convention_method):
            if isinstance(declaration, ApiConventionNameMatchAttribute):
                return declaration.behavior
        return NameMatch.EXACT

    @staticmethod
    def _parameter_behavior(hint: Any) -> tuple[Any, NameMatch, TypeMatch]:
        name_match = NameMatch.EXACT
        type_match = TypeMatch.ASSIGNABLE_FROM
        if get_origin(hint) is not Annotated:
            return hint, name_match, type_match

        base, *extras = get_args(hint)
        for extra in extras:
            if isinstance(extra, NameMatch):
                name_match = extra
            elif isinstance(extra, TypeMatch):
                type_match = extra
        return base, name_match, type_match

    @staticmethod
    def is_name_match(name: str, convention_name: str, behavior: NameMatch) -> bool:
        if behavior is NameMatch.ANY:
            return True
        if behavior is NameMatch.EXACT:
            return name == convention_name
        if behavior is NameMatch.PREFIX:
            return ApiConventionMatcher.is_name_match_prefix(name, convention_name)
        if behavior is NameMatch.SUFFIX:
            return ApiConventionMatcher.is_name_match_suffix(name, convention_name)
        return False

    @staticmethod
    def is_name_match_prefix(name: str, convention_name: str) -> bool:
        """'get_user' and 'getUser' start with 'get'; 'getaway' does not."""
        if not name.startswith(convention_name):
            return False
        if len(name) == len(convention_name):
            return True
        next_char = name[len(convention_name)]
        return next_char == "_" or next_char.isupper()

    @staticmethod
    def is_name_match_suffix(name: str, convention_name: str) -> bool:
        """'user_id' and 'userId' end with 'id'; 'paid' does not."""
        if len(name) < len(convention_name) or not convention_name:
            return False
        if len(name) == len(convention_name):
            return name == convention_name

        if name.endswith("_" + convention_name):
            return True

        # camelCase: lower-case character, then the capitalized convention name
        index = len(name) - len(convention_name)
        if not name[index - 1].islower():
            return False
        return (
            name[index] == convention_name[0].upper()
            and name[index + 1:] == convention_name[1:]
        )

    @staticmethod
    def is_type_match(type_: Any, convention_type: Any, behavior: TypeMatch) -> bool:
        if behavior is TypeMatch.ANY:
            return True
        if convention_type is Any or convention_type is object:
            return True
        if isinstance(type_, type) and isinstance(convention_type, type):
            return issubclass(type_, convention_type)
        return type_ == convention_type


def _convention_methods(convention_type: type) -> Iterator[Callable[..., Any]]:
    for name, member in vars(convention_type).items():
        if name.startswith("_"):
            continue
        if isinstance(member, (staticmethod, classmethod)):
            member = member.__func__
        if inspect.isfunction(member):
            yield member


def _response_metadata_of(convention_method: Callable[..., Any]) -> tuple[ResponseMetadataProvider, ...]:
    return tuple(
        declaration
        for declaration in get_declared_metadata(convention_method)
        if isinstance(declaration, ResponseMetadataProvider)
    )


def try_get_api_convention_result(
    method: Callable[..., Any],
    convention_method: ApiConventionMethodAttribute | None,
    convention_types: Iterable[ApiConventionTypeAttribute],
) -> ApiConventionResult | None:
    """Find the convention result for an action method.

    An explicit convention method wins. Otherwise the convention types are
    searched in order and the first matching method is used.
    """
    if convention_method is not None:
        return ApiConventionResult(_response_metadata_of(convention_method.get_method()))

    for convention_type_attribute in convention_types:
        for candidate in _convention_methods(convention_type_attribute.convention_type):
            if ApiConventionMatcher.is_match(method, candidate):
                logger.debug(
                    f"Action {method.__name__} matched convention "
                    f"{convention_type_attribute.convention_type.__name__}.{candidate.__name__}"
                )
                return ApiConventionResult(_response_metadata_of(candidate))

    return None


def apply_api_conventions(action: ControllerActionDescriptor) -> bool:
    """Attach an ApiConventionResult to an action's properties.

    Actions that declare response metadata themselves are left alone.

    Returns:
        True if a convention result was attached.
    """
    if any(isinstance(d.filter, ResponseMetadataProvider) for d in action.filter_descriptors):
        return False

    result = try_get_api_convention_result(
        action.method,
        action.properties.get(ApiConventionMethodAttribute),
        action.properties.get(ApiConventionTypeAttribute, ()),
    )
    if result is None:
        logger.debug(f"No API convention matched {action.display_name}")
        return False

    action.properties[ApiConventionResult] = result
    return True
