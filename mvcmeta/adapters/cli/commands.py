"""CLI command implementations for mvcmeta.

Maps CLI commands (describe actions, describe validation) to the core
metadata services. Handles CLI-specific formatting and error reporting.
"""

import importlib
import logging
from typing import Any

from mvcmeta.core.client_validation import (
    ValidationAttributeAdapterProvider,
    render_client_validation,
)
from mvcmeta.core.conventions import apply_api_conventions
from mvcmeta.core.discovery import discover_actions
from mvcmeta.core.models import VOID, ApiResponseType, ControllerActionDescriptor
from mvcmeta.core.ports import ModelMetadataProvider, StringLocalizer
from mvcmeta.core.response_types import ApiResponseTypeProvider

logger = logging.getLogger(__name__)


def type_name(value: Any) -> str | None:
    """Readable name for a response body type."""
    if value is None:
        return None
    if value is VOID:
        return "void"
    if isinstance(value, type):
        return value.__qualname__
    return repr(value).replace("typing.", "")


def _import_object(path: str) -> Any:
    """Import 'package.module:Name' or a plain module path.

    Raises:
        ValueError: If the module or attribute cannot be found.
    """
    module_name, _, attribute = path.partition(":")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Cannot import module '{module_name}': {e}") from e
    if not attribute:
        return module
    try:
        return getattr(module, attribute)
    except AttributeError as e:
        raise ValueError(f"Module '{module_name}' has no attribute '{attribute}'") from e


class DescribeCommandHandler:
    """Handles CLI commands by delegating to the core metadata services.

    Provides a command-line interface for describing API responses and
    rendering client validation attributes.
    """

    def __init__(
        self,
        response_type_provider: ApiResponseTypeProvider,
        metadata_provider: ModelMetadataProvider,
        string_localizer: StringLocalizer | None = None,
        adapter_provider: ValidationAttributeAdapterProvider | None = None,
    ):
        """Initialize the CLI command handler.

        Args:
            response_type_provider: Infers the responses of each action.
            metadata_provider: Describes model properties.
            string_localizer: Optional localizer for validation messages.
            adapter_provider: Chooses client adapters; default set if None.
        """
        self.response_type_provider = response_type_provider
        self.metadata_provider = metadata_provider
        self.string_localizer = string_localizer
        self.adapter_provider = adapter_provider or ValidationAttributeAdapterProvider()

    def describe_actions(
        self, module_path: str, output_format: str = "json", verbose: bool = False
    ) -> dict[str, Any]:
        """Describe the responses of every action in a controllers module.

        Args:
            module_path: Import path of the controllers module.
            output_format: "json" for structured data, "text" for a table.
            verbose: If True, log each described action.

        Returns:
            Dictionary with status and the action descriptions.
        """
        try:
            module = _import_object(module_path)
            actions = discover_actions(module)

            described = []
            for action in actions:
                apply_api_conventions(action)
                response_types = self.response_type_provider.get_api_response_types(action)
                described.append(self._action_to_dict(action, response_types))
                if verbose:
                    logger.info(
                        f"Described {action.display_name}",
                        extra={"responses": len(response_types), "verbose": True},
                    )

            result: dict[str, Any] = {
                "status": "success",
                "operation": "describe_actions",
                "module": module_path,
                "action_count": len(described),
            }
            if output_format == "text":
                result["output"] = self._format_actions_text(described)
            else:
                result["actions"] = described
            return result

        except ValueError as e:
            logger.error(f"Failed to describe actions: {e}")
            return {
                "status": "error",
                "operation": "describe_actions",
                "module": module_path,
                "message": str(e),
            }

    def describe_validation(
        self, model_path: str, output_format: str = "json"
    ) -> dict[str, Any]:
        """Render client validation attributes for every property of a model.

        Args:
            model_path: 'package.module:ModelName'.
            output_format: "json" for structured data, "text" for HTML-like lines.

        Returns:
            Dictionary with status and the attributes per property.
        """
        try:
            model_type = _import_object(model_path)
            if not isinstance(model_type, type):
                raise ValueError(f"'{model_path}' is not a class")

            fields: dict[str, dict[str, str]] = {}
            for metadata in self.metadata_provider.get_metadata_for_properties(model_type):
                fields[metadata.property_name] = render_client_validation(
                    metadata,
                    self.metadata_provider,
                    self.string_localizer,
                    self.adapter_provider,
                )

            result: dict[str, Any] = {
                "status": "success",
                "operation": "describe_validation",
                "model": model_path,
            }
            if output_format == "text":
                result["output"] = self._format_validation_text(fields)
            else:
                result["fields"] = fields
            return result

        except ValueError as e:
            logger.error(f"Failed to describe validation: {e}")
            return {
                "status": "error",
                "operation": "describe_validation",
                "model": model_path,
                "message": str(e),
            }

    @staticmethod
    def _action_to_dict(
        action: ControllerActionDescriptor, response_types: list[ApiResponseType]
    ) -> dict[str, Any]:
        return {
            "controller": action.controller_type.__name__ if action.controller_type else None,
            "action": action.action_name,
            "responses": [
                {
                    "status_code": response.status_code,
                    "type": type_name(response.type),
                    "is_default_response": response.is_default_response,
                    "formats": [f.media_type for f in response.api_response_formats],
                }
                for response in sorted(response_types, key=lambda r: r.status_code)
            ],
        }

    @staticmethod
    def _format_actions_text(described: list[dict[str, Any]]) -> str:
        lines: list[str] = []
        for action in described:
            lines.append(f"{action['controller']}.{action['action']}")
            if not action["responses"]:
                lines.append("  (no response information)")
            for response in action["responses"]:
                status = "default" if response["is_default_response"] else str(response["status_code"])
                formats = ", ".join(response["formats"])
                line = f"  {status:<8} {response['type']}"
                if formats:
                    line += f"  [{formats}]"
                lines.append(line)
        return "\n".join(lines)

    @staticmethod
    def _format_validation_text(fields: dict[str, dict[str, str]]) -> str:
        lines: list[str] = []
        for name, attributes in fields.items():
            rendered = " ".join(f'{key}="{value}"' for key, value in attributes.items())
            lines.append(f"{name}: {rendered}" if rendered else f"{name}:")
        return "\n".join(lines)
