from fastapi.responses import JSONResponse


def error_response(message: str, status_code: int = 400, **extra) -> JSONResponse:
    content = {"success": False, "error": message}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)
