"""Response metadata declarations for controllers and actions.

Declarations are attached with decorators and kept in source order
(top to bottom) on the decorated function or class:

    class OrdersController(ControllerBase):
        @produces(Order)
        @produces_response_type(404)
        def get(self, id: int) -> ActionResult[Order]: ...
"""

from enum import Enum
from typing import Any, Callable, TypeVar

from .media_types import MediaType, MediaTypeCollection
from .models import DEFAULT_STATUS_CODE, VOID

_DECLARATIONS_ATTR = "__mvcmeta_declarations__"

F = TypeVar("F", bound=Callable[..., Any])


class NameMatch(Enum):
    """How a convention name is compared to an action or parameter name."""

    ANY = "any"
    EXACT = "exact"
    PREFIX = "prefix"
    SUFFIX = "suffix"


class TypeMatch(Enum):
    """How a convention parameter type is compared to an action parameter type."""

    ANY = "any"
    ASSIGNABLE_FROM = "assignable_from"


# ============================================================================
# Response metadata
# ============================================================================


class ResponseMetadataProvider:
    """Declares a response an action can produce.

    Subclasses set `status_code` and `type` and may override
    `set_content_types` to change the declared content types.
    """

    status_code: int = 200
    type: Any = VOID
    is_default_response: bool = False

    def set_content_types(self, content_types: MediaTypeCollection) -> None:
        """Adjust the running collection of declared content types."""

    def __repr__(self) -> str:
        type_name = getattr(self.type, "__name__", repr(self.type))
        return f"{type(self).__name__}(status_code={self.status_code}, type={type_name})"


class ProducesAttribute(ResponseMetadataProvider):
    """The action produces `type` with status 200 in the given content types."""

    def __init__(self, type_or_content_type: Any = None, *content_types: str):
        if isinstance(type_or_content_type, str):
            self.type = None
            content_types = (type_or_content_type, *content_types)
        else:
            if type_or_content_type is None and not content_types:
                raise ValueError("produces() requires a type or at least one content type")
            self.type = type_or_content_type

        self.status_code = 200
        self.content_types = MediaTypeCollection()
        for content_type in content_types:
            parsed = MediaType.parse(content_type)
            if parsed.matches_all_types or parsed.matches_all_subtypes:
                raise ValueError(
                    f"Invalid content type '{content_type}': media types which match "
                    "all types or all subtypes are not supported"
                )
            self.content_types.append(content_type)

    def set_content_types(self, content_types: MediaTypeCollection) -> None:
        content_types.clear()
        content_types.extend(self.content_types)


class ProducesResponseTypeAttribute(ResponseMetadataProvider):
    """The action may respond with `status_code`, optionally with a body type."""

    def __init__(self, status_code: int, type: Any = VOID):
        self.status_code = status_code
        self.type = VOID if type is None else type


class ProducesDefaultResponseTypeAttribute(ResponseMetadataProvider):
    """Describes the response for any status code not declared otherwise."""

    is_default_response = True

    def __init__(self, type: Any = VOID):
        self.status_code = DEFAULT_STATUS_CODE
        self.type = VOID if type is None else type


class ProducesErrorResponseTypeAttribute:
    """Body type used for 4xx and default responses that declare no type."""

    def __init__(self, type: Any):
        if type is None:
            raise ValueError("produces_error_response_type() requires a type")
        self.type = type


# ============================================================================
# Conventions
# ============================================================================


class ApiConventionTypeAttribute:
    """Applies the convention methods of `convention_type` to actions."""

    def __init__(self, convention_type: type):
        if not isinstance(convention_type, type):
            raise TypeError("api_convention_type() requires a class")
        self.convention_type = convention_type


class ApiConventionMethodAttribute:
    """Applies one named convention method to an action."""

    def __init__(self, convention_type: type, method_name: str):
        method = getattr(convention_type, method_name, None)
        if method is None or not callable(method):
            raise ValueError(
                f"Method '{method_name}' not found on convention type "
                f"'{convention_type.__name__}'"
            )
        self.convention_type = convention_type
        self.method_name = method_name

    def get_method(self) -> Callable[..., Any]:
        return getattr(self.convention_type, self.method_name)


class ApiConventionNameMatchAttribute:
    """How a convention method name matches action names (default EXACT)."""

    def __init__(self, behavior: NameMatch):
        self.behavior = behavior


# ============================================================================
# Declaration storage
# ============================================================================


def _own_declarations(obj: Any) -> list[Any]:
    # vars() so a subclass never appends to its base class's list
    declarations = vars(obj).get(_DECLARATIONS_ATTR)
    if declarations is None:
        declarations = []
        setattr(obj, _DECLARATIONS_ATTR, declarations)
    return declarations


def add_declaration(obj: Any, declaration: Any) -> Any:
    """Attach a declaration to a function or class.

    Decorators run bottom-up, so each new declaration goes first to keep
    the list in source order.
    """
    target = obj.__func__ if isinstance(obj, (staticmethod, classmethod)) else obj
    _own_declarations(target).insert(0, declaration)
    return obj


def get_declared_metadata(obj: Any) -> tuple[Any, ...]:
    """Declarations attached directly to `obj`, in source order."""
    if isinstance(obj, (staticmethod, classmethod)):
        obj = obj.__func__
    try:
        return tuple(vars(obj).get(_DECLARATIONS_ATTR, ()))
    except TypeError:
        return ()


def _declare(declaration: Any) -> Callable[[F], F]:
    def decorator(obj: F) -> F:
        return add_declaration(obj, declaration)

    return decorator


def produces(type_or_content_type: Any = None, *content_types: str) -> Callable[[F], F]:
    """Declare the success body type and/or the content types of an action."""
    return _declare(ProducesAttribute(type_or_content_type, *content_types))


def produces_response_type(status_code: int, type: Any = VOID) -> Callable[[F], F]:
    """Declare a status code the action may respond with."""
    return _declare(ProducesResponseTypeAttribute(status_code, type))


def produces_default_response_type(type: Any = VOID) -> Callable[[F], F]:
    """Declare the default response of an action."""
    return _declare(ProducesDefaultResponseTypeAttribute(type))


def produces_error_response_type(type: Any) -> Callable[[F], F]:
    """Declare the error body type for a controller or action."""
    return _declare(ProducesErrorResponseTypeAttribute(type))


def api_convention_type(convention_type: type) -> Callable[[F], F]:
    """Apply a convention class to a controller or action."""
    return _declare(ApiConventionTypeAttribute(convention_type))


def api_convention_method(convention_type: type, method_name: str) -> Callable[[F], F]:
    """Apply a single convention method to an action."""
    return _declare(ApiConventionMethodAttribute(convention_type, method_name))


def api_convention_name_match(behavior: NameMatch) -> Callable[[F], F]:
    """Set how a convention method's name is matched."""
    return _declare(ApiConventionNameMatchAttribute(behavior))
