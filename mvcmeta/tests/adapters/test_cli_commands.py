"""Unit tests for the CLI command handler."""

import pytest

from mvcmeta.adapters.cli.commands import DescribeCommandHandler, type_name
from mvcmeta.adapters.formatters import JsonOutputFormatter, PlainTextOutputFormatter
from mvcmeta.core.metadata import DefaultModelMetadataProvider
from mvcmeta.core.models import VOID, MvcOptions
from mvcmeta.core.response_types import ApiResponseTypeProvider
from mvcmeta.core.result_type_mapper import ActionResultTypeMapper
from mvcmeta.tests.fakes import FakeStringLocalizer
from mvcmeta.tests.sample_app import Product

SAMPLE_MODULE = "mvcmeta.tests.sample_app"
JSON_TYPES = ["application/json", "text/json", "application/*+json"]


@pytest.fixture
def metadata_provider():
    """Create the default model metadata provider."""
    return DefaultModelMetadataProvider()


@pytest.fixture
def handler(metadata_provider):
    """Create a handler wired with the JSON and plain text formatters."""
    response_type_provider = ApiResponseTypeProvider(
        model_metadata_provider=metadata_provider,
        action_result_type_mapper=ActionResultTypeMapper(),
        mvc_options=MvcOptions(
            output_formatters=[JsonOutputFormatter(), PlainTextOutputFormatter()]
        ),
    )
    return DescribeCommandHandler(
        response_type_provider=response_type_provider,
        metadata_provider=metadata_provider,
    )


def actions_by_name(result):
    return {action["action"]: action for action in result["actions"]}


# ============================================================================
# type_name
# ============================================================================


def test_type_name():
    """Test readable names for body types."""
    assert type_name(None) is None
    assert type_name(VOID) == "void"
    assert type_name(Product) == "Product"
    assert type_name(list[Product]) == "list[mvcmeta.tests.sample_app.Product]"


# ============================================================================
# describe_actions
# ============================================================================


def test_describe_actions_success(handler):
    """Test that every action of the module is described."""
    result = handler.describe_actions(SAMPLE_MODULE)

    assert result["status"] == "success"
    assert result["operation"] == "describe_actions"
    assert result["module"] == SAMPLE_MODULE
    assert result["action_count"] == 4
    assert [a["action"] for a in result["actions"]] == ["get_product", "create", "delete", "export"]
    assert all(a["controller"] == "ProductsController" for a in result["actions"])


def test_describe_actions_applies_conventions(handler):
    """Test that convention results and the error type shape the responses."""
    actions = actions_by_name(handler.describe_actions(SAMPLE_MODULE))

    assert actions["get_product"]["responses"] == [
        {"status_code": 0, "type": "Problem", "is_default_response": True, "formats": JSON_TYPES},
        {"status_code": 200, "type": "Product", "is_default_response": False, "formats": JSON_TYPES},
        {"status_code": 404, "type": "Problem", "is_default_response": False, "formats": JSON_TYPES},
    ]


def test_describe_actions_explicit_metadata(handler):
    """Test that declared metadata and content types are used as-is."""
    actions = actions_by_name(handler.describe_actions(SAMPLE_MODULE))

    assert actions["create"]["responses"] == [
        {
            "status_code": 200,
            "type": "Product",
            "is_default_response": False,
            "formats": ["application/json"],
        },
        {
            "status_code": 409,
            "type": "Problem",
            "is_default_response": False,
            "formats": ["application/json"],
        },
    ]


def test_describe_actions_void_and_text(handler):
    """Test bodiless responses and formatter selection by type."""
    actions = actions_by_name(handler.describe_actions(SAMPLE_MODULE))

    delete = {r["status_code"]: r for r in actions["delete"]["responses"]}
    assert list(delete) == [0, 200, 400, 404]
    assert delete[200]["type"] == "void"
    assert delete[200]["formats"] == []

    export = actions["export"]["responses"]
    assert len(export) == 1
    assert export[0]["type"] == "str"
    assert export[0]["formats"] == JSON_TYPES + ["text/plain"]


def test_describe_actions_text_output(handler):
    """Test the text table output."""
    result = handler.describe_actions(SAMPLE_MODULE, output_format="text")

    assert "actions" not in result
    lines = result["output"].splitlines()
    assert lines[0] == "ProductsController.get_product"
    assert lines[1] == f"  default  Problem  [{', '.join(JSON_TYPES)}]"
    assert "  200      void" in lines


def test_describe_actions_unknown_module(handler):
    """Test error reporting for modules that cannot be imported."""
    result = handler.describe_actions("mvcmeta.tests.does_not_exist")

    assert result["status"] == "error"
    assert result["operation"] == "describe_actions"
    assert "Cannot import module" in result["message"]


def test_describe_actions_verbose_logs(handler, caplog):
    """Test that verbose mode logs each action."""
    with caplog.at_level("INFO", logger="mvcmeta.adapters.cli.commands"):
        handler.describe_actions(SAMPLE_MODULE, verbose=True)

    assert "Described ProductsController.get_product" in caplog.text


# ============================================================================
# describe_validation
# ============================================================================


def test_describe_validation_success(handler):
    """Test client validation attributes for every property."""
    result = handler.describe_validation(f"{SAMPLE_MODULE}:Registration")

    assert result["status"] == "success"
    assert result["operation"] == "describe_validation"
    fields = result["fields"]
    assert list(fields) == ["user_name", "password", "confirm_password", "nickname"]
    assert fields["user_name"] == {
        "data-val": "true",
        "data-val-required": "The User name field is required.",
    }
    assert fields["password"]["data-val-length-min"] == "8"
    assert fields["confirm_password"] == {
        "data-val": "true",
        "data-val-equalto": "'Confirm password' and 'password' do not match.",
        "data-val-equalto-other": "*.password",
    }
    assert fields["nickname"] == {}


def test_describe_validation_with_localizer(metadata_provider, handler):
    """Test that the localizer is passed through to the adapters."""
    localizer = FakeStringLocalizer()
    localized = DescribeCommandHandler(
        response_type_provider=handler.response_type_provider,
        metadata_provider=metadata_provider,
        string_localizer=localizer,
    )

    result = localized.describe_validation(f"{SAMPLE_MODULE}:Registration")

    # Default messages are never looked up
    assert result["status"] == "success"
    assert localizer.calls == []


def test_describe_validation_text_output(handler):
    """Test the attribute listing output."""
    result = handler.describe_validation(f"{SAMPLE_MODULE}:Registration", output_format="text")

    lines = result["output"].splitlines()
    assert lines[0] == (
        'user_name: data-val="true" data-val-required="The User name field is required."'
    )
    assert lines[-1] == "nickname:"


@pytest.mark.parametrize(
    "model_path,message",
    [
        (f"{SAMPLE_MODULE}:Missing", "has no attribute"),
        (f"{SAMPLE_MODULE}:SAMPLE", "has no attribute"),
        ("mvcmeta.tests.sample_app:DefaultApiConventions.get", "has no attribute"),
        (SAMPLE_MODULE, "is not a class"),
    ],
)
def test_describe_validation_errors(handler, model_path, message):
    """Test error reporting for bad model paths."""
    result = handler.describe_validation(model_path)

    assert result["status"] == "error"
    assert message in result["message"]
