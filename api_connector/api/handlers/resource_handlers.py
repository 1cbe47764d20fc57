"""
Resource-related request handlers.
"""

from aiohttp import web
from aiohttp.web_request import Request

from api_connector.core.connector import ResourceConnector
from api_connector.core.exceptions import ConfigurationError, ConnectorException, handle_exception
from api_connector.core.fetcher import Fetcher
from api_connector.core.result import Err


def _get_connector(request: Request) -> ResourceConnector:
    return request.app["connector"]


async def _read_fields(request: Request) -> dict:
    """Accepts a JSON body as well as url-encoded or multipart forms."""
    if request.content_type == "application/json":
        try:
            body = await request.json()
        except ValueError:
            raise ConnectorException(400, "Malformed JSON body")
        if not isinstance(body, dict):
            raise ConnectorException(400, "Expected a JSON object")
        return body
    return dict(await request.post())


async def handle_test_resource(request: Request):
    """Fetch a URL once and return its JSON payload."""
    fields = await _read_fields(request)
    url = fields.get("url")
    if not isinstance(url, str) or not url.strip():
        raise ConnectorException(400, "URL is required")
    url = url.strip()
    fetcher = Fetcher(request.app["csession"])
    result = await fetcher.fetch(url)
    if isinstance(result, Err):
        handle_exception(result.error.status, str(result.error), url)
    return web.json_response({"success": True, "data": result.value})


async def handle_resource_list(request: Request):
    views = _get_connector(request).views()
    return web.json_response([view.to_dict() for view in views])


async def handle_resource_add(request: Request):
    fields = await _read_fields(request)
    name, url = fields.get("name"), fields.get("url")
    if not isinstance(name, str) or not isinstance(url, str):
        raise ConnectorException(400, "Both name and URL are required")
    connector = _get_connector(request)
    try:
        resource = connector.add(name, url)
    except ConfigurationError as e:
        raise ConnectorException(400, str(e))
    return web.json_response(connector.view(resource.id).to_dict(), status=201)


async def handle_resource_get(request: Request):
    view = _get_connector(request).view(request.match_info["rid"])
    if view is None:
        raise ConnectorException(404, "Resource not found")
    return web.json_response(view.to_dict())


async def handle_resource_delete(request: Request):
    _get_connector(request).remove(request.match_info["rid"])
    return web.Response(status=204)


async def handle_resource_refresh(request: Request):
    resource_id = request.match_info["rid"]
    if not _get_connector(request).refresh(resource_id):
        raise ConnectorException(404, "Resource not found")
    return web.json_response({"id": resource_id, "refresh": "scheduled"}, status=202)
