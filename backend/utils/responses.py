from fastapi.responses import JSONResponse


def status_ok_response():
    """Acknowledgement body for webhooks and health checks"""
    return JSONResponse(status_code=200, content={"status": "ok"})


def error_response(error_code, status=400, message="An error occurred", data=None):
    return JSONResponse(
        status_code=status,
        content={
            "ok": False,
            "data": data or {},
            "error": error_code,
            "message": message,
        }
    )
