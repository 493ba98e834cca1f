"""Domain models for the mvcmeta metadata toolkit.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from .ports import OutputFormatter


# Marker for "no response body"; matches what get_type_hints() yields for `-> None`.
VOID: type = type(None)

# Status code used for the catch-all "default" response.
DEFAULT_STATUS_CODE = 0

T = TypeVar("T")


class ActionResultBase:
    """A result that describes an HTTP response rather than carrying data.

    Actions declared to return a subclass of this type give no information
    about the body they produce.
    """

    status_code: int | None = None


class StatusCodeResult(ActionResultBase):
    """Result carrying only an HTTP status code."""

    def __init__(self, status_code: int):
        self.status_code = status_code


class ActionResult(Generic[T]):
    """Either a value of type T or an ActionResultBase.

    Declaring `-> ActionResult[Order]` tells the API description that the
    successful body is an Order even though the action may short-circuit
    with another result.
    """

    def __init__(self, value: T | None = None, result: ActionResultBase | None = None):
        if value is not None and result is not None:
            raise ValueError("ActionResult takes either a value or a result, not both")
        self.value = value
        self.result = result


class ControllerBase:
    """Base class for controllers; public methods of subclasses are actions."""


class FilterScope(Enum):
    """Where a filter was declared. Lower scopes run first."""

    GLOBAL = 0
    CONTROLLER = 10
    ACTION = 20


@dataclass(frozen=True)
class FilterDescriptor:
    """A filter declaration together with the scope it came from."""

    filter: Any
    scope: FilterScope


@dataclass
class ControllerActionDescriptor:
    """Describes one action method on a controller.

    `properties` is an open bag keyed by type, used by conventions and
    other application-model steps to attach extra metadata.
    """

    controller_type: type | None
    action_name: str
    method: Any
    filter_descriptors: list[FilterDescriptor] = field(default_factory=list)
    properties: dict[Any, Any] = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        """Controller and action name, e.g. 'OrdersController.get'."""
        if self.controller_type is None:
            return self.action_name
        return f"{self.controller_type.__name__}.{self.action_name}"


@dataclass(frozen=True)
class ModelMetadata:
    """Metadata for a model type or one of its properties."""

    model_type: Any
    container_type: type | None = None
    property_name: str | None = None
    display_name: str | None = None
    validator_metadata: tuple[Any, ...] = ()

    def get_display_name(self) -> str:
        """Display name, falling back to the property name, then the type name."""
        if self.display_name:
            return self.display_name
        if self.property_name:
            return self.property_name
        return getattr(self.model_type, "__name__", str(self.model_type))


@dataclass(frozen=True)
class ApiResponseFormat:
    """A media type a response can be written as."""

    media_type: str
    formatter: "OutputFormatter | None" = None


@dataclass(frozen=True)
class ApiResponseType:
    """A possible response of an action.

    `type` is VOID when the response has no body.
    """

    status_code: int
    type: Any
    is_default_response: bool = False
    api_response_formats: tuple[ApiResponseFormat, ...] = ()
    model_metadata: ModelMetadata | None = None


@dataclass(frozen=True)
class ApiConventionResult:
    """Response metadata matched to an action by an API convention.

    Stored in ControllerActionDescriptor.properties under this class.
    """

    response_metadata_providers: tuple[Any, ...]


@dataclass(frozen=True)
class LocalizedString:
    """A localized message and whether the lookup found a resource."""

    name: str
    value: str
    resource_not_found: bool = False

    def __str__(self) -> str:
        return self.value


@dataclass
class MvcOptions:
    """Options shared by the metadata services."""

    output_formatters: list["OutputFormatter"] = field(default_factory=list)
