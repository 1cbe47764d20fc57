from aiohttp import web


@web.middleware
async def cors_middleware(request, handler):
    """
    Middleware to handle CORS and the mandatory OPTIONS preflight.
    """
    if request.method == "OPTIONS":
        response = web.Response(status=204)
    else:
        try:
            response = await handler(request)
        except web.HTTPException as e:
            # error responses need the headers too, or browsers hide the body
            _add_cors_headers(e)
            raise
    _add_cors_headers(response)
    return response


def _add_cors_headers(response) -> None:
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, DELETE, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = (
        "Content-Type, Authorization, X-Requested-With"
    )
    response.headers["Access-Control-Expose-Headers"] = "*"
