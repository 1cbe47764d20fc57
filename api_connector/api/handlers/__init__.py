"""
Request handlers for the API module.
"""

from .resource_handlers import (
    handle_resource_add,
    handle_resource_delete,
    handle_resource_get,
    handle_resource_list,
    handle_resource_refresh,
    handle_test_resource,
)

__all__ = [
    "handle_test_resource",
    "handle_resource_list",
    "handle_resource_add",
    "handle_resource_get",
    "handle_resource_delete",
    "handle_resource_refresh",
]
