"""Composition root for the mvcmeta toolkit.

This module is the ONLY location that imports both core metadata logic
and concrete adapter implementations. All wiring of dependencies
happens here, creating a clear entry point for the application.

Module Structure:
- Configuration loading via config module
- Adapter instantiation
- Core service initialization
- Dependency injection
- Command execution

Usage:
    mvcmeta                                   # describe CONTROLLERS_MODULE
    mvcmeta describe_actions '{"module": "app.controllers"}'
    mvcmeta describe_validation '{"model": "app.models:Registration"}'
"""

import json
import logging
import sys
from typing import Any

from mvcmeta.adapters.cli.commands import DescribeCommandHandler
from mvcmeta.adapters.formatters import JsonOutputFormatter, PlainTextOutputFormatter
from mvcmeta.adapters.localization import JsonResourceStringLocalizer
from mvcmeta.config import Settings, load_settings
from mvcmeta.core.metadata import DefaultModelMetadataProvider
from mvcmeta.core.models import MvcOptions
from mvcmeta.core.response_types import ApiResponseTypeProvider
from mvcmeta.core.result_type_mapper import ActionResultTypeMapper


def execute_cli_command(
    handler: DescribeCommandHandler,
    command: str,
    args: dict[str, Any],
    default_format: str = "json",
) -> dict[str, Any]:
    """Execute a CLI command.

    Args:
        handler: DescribeCommandHandler instance.
        command: Command name.
        args: Command arguments.
        default_format: Output format when args do not name one.

    Returns:
        Command result dictionary.

    Raises:
        ValueError: If command is not recognized or arguments are missing.
    """
    output_format = args.get("format", default_format)

    if command == "describe_actions":
        if "module" not in args:
            raise ValueError("Missing required parameter: module")
        return handler.describe_actions(
            module_path=args["module"],
            output_format=output_format,
            verbose=args.get("verbose", False),
        )

    elif command == "describe_validation":
        if "model" not in args:
            raise ValueError("Missing required parameter: model")
        return handler.describe_validation(
            model_path=args["model"],
            output_format=output_format,
        )

    else:
        raise ValueError(f"Unknown command: {command}. Use 'help' for available commands.")


def _print_cli_help() -> None:
    """Print CLI help message."""
    help_text = """
Available Commands (JSON format):

  describe_actions
    Describe the response types of every controller action in a module.
    Required: module
    Optional: format ("json" or "text"), verbose

    Example: describe_actions {"module": "app.controllers", "format": "text"}

  describe_validation
    Render client validation attributes for every property of a model.
    Required: model ("package.module:ClassName")
    Optional: format ("json" or "text")

    Example: describe_validation {"model": "app.models:Registration"}

  help
    Show this help message.

Without a command, CONTROLLERS_MODULE from the environment is described.
    """
    print(help_text)


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Logs go to stderr so stdout stays machine-readable
    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )


def build_handler(settings: Settings) -> DescribeCommandHandler:
    """Instantiate adapters and core services from settings."""
    logger = logging.getLogger(__name__)

    formatters = [JsonOutputFormatter(indent=settings.json_indent or None)]
    if settings.include_plain_text_formatter:
        formatters.append(PlainTextOutputFormatter())
    logger.info(f"Output formatters: {', '.join(type(f).__name__ for f in formatters)}")

    string_localizer = None
    if settings.resources_path:
        string_localizer = JsonResourceStringLocalizer(
            resources_path=settings.resources_path,
            base_name=settings.resources_base_name,
            culture=settings.culture or None,
        )
        logger.info(f"Validation messages: {settings.resources_path} ({settings.culture or 'neutral'})")

    metadata_provider = DefaultModelMetadataProvider()
    response_type_provider = ApiResponseTypeProvider(
        model_metadata_provider=metadata_provider,
        action_result_type_mapper=ActionResultTypeMapper(),
        mvc_options=MvcOptions(output_formatters=formatters),
    )

    return DescribeCommandHandler(
        response_type_provider=response_type_provider,
        metadata_provider=metadata_provider,
        string_localizer=string_localizer,
    )


def bootstrap(argv: list[str] | None = None) -> int:
    """Load configuration, wire adapters, and run one command.

    Steps:
    1. Load configuration from environment
    2. Configure logging
    3. Instantiate adapters and core services
    4. Execute the requested command and print its result

    Returns:
        Process exit code: 0 on success, 1 if the command reported an error.
    """
    argv = list(sys.argv[1:] if argv is None else argv)

    # Step 1: Load configuration
    settings = load_settings()

    # Step 2: Configure logging
    configure_logging("DEBUG" if settings.debug else settings.log_level, settings.log_format)
    logger = logging.getLogger(__name__)

    if argv and argv[0] in ("help", "-h", "--help"):
        _print_cli_help()
        return 0

    # Step 3: Instantiate adapters and core services
    handler = build_handler(settings)

    # Step 4: Execute command
    if argv:
        command = argv[0]
        try:
            args = json.loads(argv[1]) if len(argv) > 1 else {}
        except json.JSONDecodeError:
            logger.error("Invalid JSON arguments. Use 'help' for command syntax.")
            return 1
    elif settings.controllers_module:
        command = "describe_actions"
        args = {"module": settings.controllers_module}
    else:
        logger.error("No command given and CONTROLLERS_MODULE is not set")
        _print_cli_help()
        return 1

    try:
        result = execute_cli_command(handler, command, args, default_format=settings.output_format)
    except ValueError as e:
        logger.error(str(e))
        return 1

    if "output" in result:
        print(result["output"])
    else:
        print(json.dumps(result, indent=2, default=str))

    return 0 if result.get("status") == "success" else 1


def main() -> None:
    """Application entry point.

    Exit codes:
        0: Successful run
        1: Command or bootstrap error
        130: Interrupted by user (SIGINT/KeyboardInterrupt)
    """
    logger = logging.getLogger(__name__)
    try:
        sys.exit(bootstrap())
    except KeyboardInterrupt:
        logger.warning("Interrupted by user (SIGINT)")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
