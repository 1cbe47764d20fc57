"""
Resource-related route definitions.
"""

from aiohttp import web

from ..handlers.resource_handlers import (
    handle_resource_add,
    handle_resource_delete,
    handle_resource_get,
    handle_resource_list,
    handle_resource_refresh,
    handle_test_resource,
)

routes = web.RouteTableDef()


@routes.post(r"/api/test-resource/", name="test_resource")
async def resource_test(request):
    """Fetch a URL once and return its JSON payload."""
    return await handle_test_resource(request)


@routes.get(r"/api/resources/", name="resources")
async def resource_list(request):
    """List resources with their current observation."""
    return await handle_resource_list(request)


@routes.post(r"/api/resources/", name="resource_add")
async def resource_add(request):
    """Register a new resource and start polling it."""
    return await handle_resource_add(request)


@routes.get(r"/api/resources/{rid}/", name="resource")
async def resource_get(request):
    """Get one resource with its current observation."""
    return await handle_resource_get(request)


@routes.delete(r"/api/resources/{rid}/", name="resource_delete")
async def resource_delete(request):
    """Delete a resource and stop polling it."""
    return await handle_resource_delete(request)


@routes.post(r"/api/resources/{rid}/refresh/", name="refresh")
async def resource_refresh(request):
    """Fetch a resource again right away."""
    return await handle_resource_refresh(request)
