import logging

from fastapi.responses import JSONResponse

from blog_api.result import Err, Ok, Result


def render(result: Result) -> JSONResponse:
    """Write *result* as the whole response body; HTTP status follows ``statusCode``."""
    return JSONResponse(status_code=result.status_code, content=result.to_payload())


def log_outcome(logger: logging.Logger, result: Result, action: str) -> None:
    match result:
        case Ok():
            logger.info("%s succeeded", action)
        case Err(error=error, status_code=status_code):
            logger.warning("%s failed (%s): %s", action, status_code, error)
