"""Sample controllers and models used by the CLI and composition root tests."""

from dataclasses import dataclass
from typing import Annotated

from mvcmeta.core import (
    ActionResult,
    ControllerBase,
    api_convention_type,
    produces,
    produces_error_response_type,
    produces_response_type,
)
from mvcmeta.core.conventions import DefaultApiConventions
from mvcmeta.core.metadata import DisplayAttribute
from mvcmeta.core.validation import CompareAttribute, RequiredAttribute, StringLengthAttribute


@dataclass
class Problem:
    title: str
    status: int


@dataclass
class Product:
    id: int
    name: str


@dataclass
class Registration:
    user_name: Annotated[str, DisplayAttribute(name="User name"), RequiredAttribute()]
    password: Annotated[str, StringLengthAttribute(100, minimum_length=8)]
    confirm_password: Annotated[
        str,
        DisplayAttribute(name="Confirm password"),
        CompareAttribute("password"),
    ]
    nickname: str = ""


@api_convention_type(DefaultApiConventions)
@produces_error_response_type(Problem)
class ProductsController(ControllerBase):
    def get_product(self, id: int) -> ActionResult[Product]: ...

    @produces(Product, "application/json")
    @produces_response_type(409)
    def create(self, product: Product) -> ActionResult[Product]: ...

    def delete(self, id: int) -> None: ...

    def export(self) -> str: ...
