"""Mapping of declared action return types to response body types."""

from typing import Any, get_args, get_origin

from .models import ActionResult


class ActionResultTypeMapper:
    """Maps ActionResult[T] to T. Other types are returned unchanged."""

    def get_result_data_type(self, return_type: Any) -> Any:
        if get_origin(return_type) is ActionResult:
            args = get_args(return_type)
            if args:
                return args[0]
        return return_type
