"""Inference of the responses a controller action can produce.

ApiResponseTypeProvider combines three sources, in order of precedence:

1. Response metadata declared on the action or its controller
   (produces, produces_response_type, produces_default_response_type)
2. Response metadata matched by an API convention (ApiConventionResult
   in the action's properties), used only when (1) is empty
3. The action's declared return type, as a single 200 response
"""

import collections.abc
import inspect
import logging
import types
from dataclasses import replace
from typing import Any, get_args, get_origin, get_type_hints

from .attributes import ProducesErrorResponseTypeAttribute, ResponseMetadataProvider
from .media_types import MediaTypeCollection
from .models import (
    VOID,
    ActionResultBase,
    ApiConventionResult,
    ApiResponseFormat,
    ApiResponseType,
    ControllerActionDescriptor,
    MvcOptions,
)
from .ports import ModelMetadataProvider
from .result_type_mapper import ActionResultTypeMapper

logger = logging.getLogger(__name__)

_AWAITABLE_ORIGINS = (collections.abc.Awaitable, collections.abc.Coroutine)


def _is_client_error(status_code: int) -> bool:
    return 400 <= status_code < 500


def _return_only():
    pass


class ApiResponseTypeProvider:
    """Produces one ApiResponseType per distinct status code of an action.

    Stateless apart from its read-only collaborators; safe to share.
    """

    def __init__(
        self,
        model_metadata_provider: ModelMetadataProvider,
        action_result_type_mapper: ActionResultTypeMapper,
        mvc_options: MvcOptions,
    ):
        self.model_metadata_provider = model_metadata_provider
        self.action_result_type_mapper = action_result_type_mapper
        self.mvc_options = mvc_options

    def get_api_response_types(
        self, action: ControllerActionDescriptor
    ) -> list[ApiResponseType]:
        """Infer the responses of an action.

        Args:
            action: Descriptor of the action to describe.

        Returns:
            ApiResponseType entries, one per status code. Only entries with a
            body carry formats. Empty if nothing is known about the action.
        """
        declared_return_type = self._get_declared_return_type(action)
        runtime_return_type = self._get_runtime_return_type(declared_return_type)

        response_metadata = self._get_response_metadata(action)
        if not response_metadata:
            convention_result = action.properties.get(ApiConventionResult)
            if convention_result is not None:
                logger.debug(
                    f"Using convention response metadata for {action.display_name}"
                )
                response_metadata = list(convention_result.response_metadata_providers)

        default_error_type: Any = VOID
        error_type_attribute = action.properties.get(ProducesErrorResponseTypeAttribute)
        if error_type_attribute is not None:
            default_error_type = error_type_attribute.type

        response_types = self._build_response_types(
            response_metadata, runtime_return_type, default_error_type
        )
        logger.debug(
            f"Inferred {len(response_types)} response type(s) for {action.display_name}"
        )
        return response_types

    def _build_response_types(
        self,
        response_metadata: list[ResponseMetadataProvider],
        return_type: Any,
        default_error_type: Any,
    ) -> list[ApiResponseType]:
        results: dict[int, ApiResponseType] = {}

        # Each declaration may see and replace the content types of the ones before it
        content_types = MediaTypeCollection()
        for metadata in response_metadata:
            metadata.set_content_types(content_types)

            status_code = metadata.status_code
            response_type = metadata.type
            is_default = bool(getattr(metadata, "is_default_response", False))

            if response_type is VOID:
                if return_type is not None and status_code in (200, 201):
                    # A bare 200/201 declaration describes the action's own return type
                    response_type = return_type
                elif _is_client_error(status_code) or is_default:
                    response_type = default_error_type

            if response_type is None:
                logger.debug(f"Skipping {metadata!r}: no response type")
                continue

            results[status_code] = ApiResponseType(
                status_code=status_code,
                type=response_type,
                is_default_response=is_default,
            )

        if not results and return_type is not None:
            results[200] = ApiResponseType(status_code=200, type=return_type)

        if not content_types:
            # No declared content types: every formatter takes part in negotiation
            content_types.append(None)

        return [self._with_formats(entry, content_types) for entry in results.values()]

    def _with_formats(
        self, entry: ApiResponseType, declared_content_types: MediaTypeCollection
    ) -> ApiResponseType:
        if entry.type is None or entry.type is VOID:
            return entry

        formats: list[ApiResponseFormat] = []
        for content_type in declared_content_types:
            is_supported = False
            for formatter in self.mvc_options.output_formatters:
                supported = formatter.get_supported_content_types(content_type, entry.type)
                if supported is None:
                    continue

                is_supported = True
                formats.extend(
                    ApiResponseFormat(media_type=media_type, formatter=formatter)
                    for media_type in supported
                )

            if not is_supported and content_type is not None:
                # Keep what the user declared even if no formatter can write it
                formats.append(ApiResponseFormat(media_type=content_type))

        return replace(
            entry,
            api_response_formats=tuple(formats),
            model_metadata=self.model_metadata_provider.get_metadata_for_type(entry.type),
        )

    @staticmethod
    def _get_response_metadata(
        action: ControllerActionDescriptor,
    ) -> list[ResponseMetadataProvider]:
        return [
            descriptor.filter
            for descriptor in action.filter_descriptors
            if isinstance(descriptor.filter, ResponseMetadataProvider)
        ]

    def _get_declared_return_type(self, action: ControllerActionDescriptor) -> Any:
        """Declared body type: VOID, a type, or None when unknown."""
        function = inspect.unwrap(getattr(action.method, "__func__", action.method))
        try:
            annotations = getattr(function, "__annotations__", None) or {}
        except NameError as e:
            logger.warning(f"Could not read annotations of {action.display_name}: {e}")
            return None
        if "return" not in annotations:
            return None

        # Resolve the return annotation alone so a bad parameter annotation cannot hide it
        return_only = types.FunctionType(_return_only.__code__, function.__globals__)
        return_only.__annotations__ = {"return": annotations["return"]}
        try:
            declared = get_type_hints(return_only)["return"]
        except (NameError, TypeError) as e:
            logger.warning(
                f"Could not resolve return annotation of {action.display_name}: {e}"
            )
            return None

        if declared is VOID:
            return VOID

        if get_origin(declared) in _AWAITABLE_ORIGINS:
            args = get_args(declared)
            declared = args[-1] if args else None
            if declared is None or declared is VOID:
                return VOID

        declared = self.action_result_type_mapper.get_result_data_type(declared)

        # Action results describe the response, not its body
        if isinstance(declared, type) and issubclass(declared, ActionResultBase):
            return None

        return declared

    @staticmethod
    def _get_runtime_return_type(declared_return_type: Any) -> Any:
        # An action that may return anything tells us nothing
        if declared_return_type is object or declared_return_type is Any:
            return None
        return declared_return_type
