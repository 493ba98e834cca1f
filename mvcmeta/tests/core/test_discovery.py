"""Unit tests for controller and action discovery."""

import types

import pytest

from mvcmeta.core.attributes import (
    ApiConventionMethodAttribute,
    ApiConventionTypeAttribute,
    ProducesErrorResponseTypeAttribute,
    api_convention_method,
    api_convention_type,
    get_declared_metadata,
    produces,
    produces_error_response_type,
    produces_response_type,
)
from mvcmeta.core.conventions import DefaultApiConventions
from mvcmeta.core.discovery import (
    create_action_descriptor,
    discover_actions,
    discover_controllers,
    get_action_names,
    is_controller,
)
from mvcmeta.core.models import ControllerBase, FilterScope


class Problem:
    pass


class ValidationProblem(Problem):
    pass


class OtherConventions:
    @staticmethod
    @produces_response_type(202)
    def enqueue(job: object) -> None:
        pass


@api_convention_type(DefaultApiConventions)
@produces_error_response_type(Problem)
@produces_response_type(500)
class BaseApiController(ControllerBase):
    def health(self) -> str: ...


@api_convention_type(OtherConventions)
class JobsController(BaseApiController):
    @produces(dict)
    @produces_response_type(404)
    def get(self, id: int) -> dict: ...

    @produces_error_response_type(ValidationProblem)
    @api_convention_method(OtherConventions, "enqueue")
    @api_convention_type(DefaultApiConventions)
    def start(self, job: object) -> None: ...

    def _helper(self) -> None: ...


class LegacyController:
    def index(self) -> str: ...


class NotAController:
    pass


class Helper:
    def run(self) -> None: ...


# ============================================================================
# Controllers and actions
# ============================================================================


class TestIsController:
    @pytest.mark.parametrize(
        "candidate,expected",
        [
            (JobsController, True),
            (LegacyController, True),
            (NotAController, True),
            (Helper, False),
            (ControllerBase, False),
            (JobsController.get, False),
            ("JobsController", False),
        ],
    )
    def test_is_controller(self, candidate, expected) -> None:
        assert is_controller(candidate) is expected


class TestGetActionNames:
    def test_public_methods_including_inherited(self) -> None:
        assert get_action_names(JobsController) == ["health", "get", "start"]

    def test_controller_without_actions(self) -> None:
        assert get_action_names(NotAController) == []


# ============================================================================
# Action descriptors
# ============================================================================


class TestCreateActionDescriptor:
    def test_basic_fields(self) -> None:
        descriptor = create_action_descriptor(JobsController, "get")

        assert descriptor.controller_type is JobsController
        assert descriptor.action_name == "get"
        assert descriptor.method is JobsController.get
        assert descriptor.display_name == "JobsController.get"

    def test_response_metadata_becomes_filters(self) -> None:
        descriptor = create_action_descriptor(JobsController, "get")

        filters = [
            (type(d.filter).__name__, d.filter.status_code, d.scope)
            for d in descriptor.filter_descriptors
        ]
        assert filters == [
            ("ProducesResponseTypeAttribute", 500, FilterScope.CONTROLLER),
            ("ProducesAttribute", 200, FilterScope.ACTION),
            ("ProducesResponseTypeAttribute", 404, FilterScope.ACTION),
        ]

    def test_error_type_from_controller(self) -> None:
        descriptor = create_action_descriptor(JobsController, "get")

        assert descriptor.properties[ProducesErrorResponseTypeAttribute].type is Problem

    def test_action_error_type_wins(self) -> None:
        descriptor = create_action_descriptor(JobsController, "start")

        assert descriptor.properties[ProducesErrorResponseTypeAttribute].type is ValidationProblem

    def test_convention_method_in_properties(self) -> None:
        descriptor = create_action_descriptor(JobsController, "start")

        attribute = descriptor.properties[ApiConventionMethodAttribute]
        assert attribute.get_method() is OtherConventions.enqueue

    def test_convention_types_action_first(self) -> None:
        descriptor = create_action_descriptor(JobsController, "start")

        convention_types = [
            a.convention_type for a in descriptor.properties[ApiConventionTypeAttribute]
        ]
        assert convention_types == [DefaultApiConventions, DefaultApiConventions, OtherConventions]

    def test_no_convention_types(self) -> None:
        descriptor = create_action_descriptor(LegacyController, "index")

        assert ApiConventionTypeAttribute not in descriptor.properties
        assert descriptor.filter_descriptors == []

    def test_unknown_action(self) -> None:
        with pytest.raises(ValueError, match="not an action"):
            create_action_descriptor(JobsController, "missing")

    def test_non_method_attribute_is_not_an_action(self) -> None:
        with pytest.raises(ValueError, match="not an action"):
            create_action_descriptor(JobsController, "__module__")

    def test_declarations_are_not_shared_with_base_class(self) -> None:
        base_declarations = [type(d).__name__ for d in get_declared_metadata(BaseApiController)]
        own_declarations = [type(d).__name__ for d in get_declared_metadata(JobsController)]

        assert base_declarations == [
            "ApiConventionTypeAttribute",
            "ProducesErrorResponseTypeAttribute",
            "ProducesResponseTypeAttribute",
        ]
        assert own_declarations == ["ApiConventionTypeAttribute"]


# ============================================================================
# Module discovery
# ============================================================================


class TestModuleDiscovery:
    @pytest.fixture
    def module(self) -> types.ModuleType:
        module = types.ModuleType("sample_controllers")

        class OrdersController(ControllerBase):
            def list_orders(self) -> list: ...

            def get(self, id: int) -> dict: ...

        class Utility:
            pass

        OrdersController.__module__ = module.__name__
        Utility.__module__ = module.__name__
        module.OrdersController = OrdersController
        module.Utility = Utility
        module.ControllerBase = ControllerBase
        module.JobsController = JobsController
        return module

    def test_discover_controllers_skips_imported(self, module) -> None:
        assert [c.__name__ for c in discover_controllers(module)] == ["OrdersController"]

    def test_discover_actions(self, module) -> None:
        descriptors = discover_actions(module)

        assert [d.display_name for d in descriptors] == [
            "OrdersController.list_orders",
            "OrdersController.get",
        ]
