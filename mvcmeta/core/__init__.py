"""Core metadata logic for the mvcmeta toolkit.

This package contains zero external dependencies and represents
the pure inference and rendering logic of the toolkit. Serialization,
localization resources and the command line are handled by the
adapters package.
"""

from .attributes import (
    NameMatch,
    TypeMatch,
    api_convention_method,
    api_convention_name_match,
    api_convention_type,
    produces,
    produces_default_response_type,
    produces_error_response_type,
    produces_response_type,
)
from .models import (
    DEFAULT_STATUS_CODE,
    VOID,
    ActionResult,
    ActionResultBase,
    ApiConventionResult,
    ApiResponseFormat,
    ApiResponseType,
    ControllerActionDescriptor,
    ControllerBase,
    FilterDescriptor,
    FilterScope,
    LocalizedString,
    ModelMetadata,
    MvcOptions,
    StatusCodeResult,
)

__all__ = [
    "DEFAULT_STATUS_CODE",
    "VOID",
    "ActionResult",
    "ActionResultBase",
    "ApiConventionResult",
    "ApiResponseFormat",
    "ApiResponseType",
    "ControllerActionDescriptor",
    "ControllerBase",
    "FilterDescriptor",
    "FilterScope",
    "LocalizedString",
    "ModelMetadata",
    "MvcOptions",
    "NameMatch",
    "StatusCodeResult",
    "TypeMatch",
    "api_convention_method",
    "api_convention_name_match",
    "api_convention_type",
    "produces",
    "produces_default_response_type",
    "produces_error_response_type",
    "produces_response_type",
]
