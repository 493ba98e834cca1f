"""Discovery of controllers and their actions.

Builds ControllerActionDescriptor instances from controller classes,
turning declarations into filter descriptors and property-bag entries.
"""

import inspect
import logging
from types import ModuleType
from typing import Any

from .attributes import (
    ApiConventionMethodAttribute,
    ApiConventionTypeAttribute,
    ProducesErrorResponseTypeAttribute,
    ResponseMetadataProvider,
    get_declared_metadata,
)
from .models import ControllerActionDescriptor, ControllerBase, FilterDescriptor, FilterScope

logger = logging.getLogger(__name__)

CONTROLLER_SUFFIX = "Controller"


def is_controller(candidate: Any) -> bool:
    """Subclasses of ControllerBase, or classes named '...Controller'."""
    if not inspect.isclass(candidate) or candidate is ControllerBase:
        return False
    if inspect.isabstract(candidate):
        return False
    return issubclass(candidate, ControllerBase) or candidate.__name__.endswith(CONTROLLER_SUFFIX)


def get_action_names(controller_type: type) -> list[str]:
    """Public methods of a controller, in definition order."""
    names: list[str] = []
    for klass in reversed(controller_type.__mro__):
        if klass in (object, ControllerBase):
            continue
        for name, member in vars(klass).items():
            if name.startswith("_") or name in names:
                continue
            if inspect.isfunction(member):
                names.append(name)
    return names


def _controller_declarations(controller_type: type) -> list[Any]:
    # Base class declarations first so subclasses can override them
    declarations: list[Any] = []
    for klass in reversed(controller_type.__mro__):
        declarations.extend(get_declared_metadata(klass))
    return declarations


def create_action_descriptor(controller_type: type, action_name: str) -> ControllerActionDescriptor:
    """Describe one action of a controller.

    Raises:
        ValueError: If the controller has no such public method.
    """
    method = getattr(controller_type, action_name, None)
    if method is None or not inspect.isfunction(method):
        raise ValueError(
            f"'{action_name}' is not an action of {controller_type.__name__}"
        )

    descriptor = ControllerActionDescriptor(
        controller_type=controller_type,
        action_name=action_name,
        method=method,
    )

    convention_types: dict[FilterScope, list[ApiConventionTypeAttribute]] = {
        FilterScope.CONTROLLER: [],
        FilterScope.ACTION: [],
    }
    scoped = [
        (FilterScope.CONTROLLER, _controller_declarations(controller_type)),
        (FilterScope.ACTION, list(get_declared_metadata(method))),
    ]
    for scope, declarations in scoped:
        for declaration in declarations:
            if isinstance(declaration, ResponseMetadataProvider):
                descriptor.filter_descriptors.append(FilterDescriptor(declaration, scope))
            elif isinstance(declaration, ProducesErrorResponseTypeAttribute):
                # Action scope comes last and wins
                descriptor.properties[ProducesErrorResponseTypeAttribute] = declaration
            elif isinstance(declaration, ApiConventionMethodAttribute):
                descriptor.properties[ApiConventionMethodAttribute] = declaration
            elif isinstance(declaration, ApiConventionTypeAttribute):
                convention_types[scope].append(declaration)

    # Action-level conventions are tried before controller-level ones
    ordered = convention_types[FilterScope.ACTION] + convention_types[FilterScope.CONTROLLER]
    if ordered:
        descriptor.properties[ApiConventionTypeAttribute] = tuple(ordered)

    return descriptor


def discover_controllers(module: ModuleType) -> list[type]:
    """Controller classes defined in a module, in definition order."""
    return [
        member
        for name, member in vars(module).items()
        if is_controller(member) and member.__module__ == module.__name__
    ]


def discover_actions(module: ModuleType) -> list[ControllerActionDescriptor]:
    """Descriptors for every action of every controller in a module."""
    descriptors: list[ControllerActionDescriptor] = []
    for controller_type in discover_controllers(module):
        for action_name in get_action_names(controller_type):
            descriptors.append(create_action_descriptor(controller_type, action_name))
    logger.debug(f"Discovered {len(descriptors)} action(s) in {module.__name__}")
    return descriptors
