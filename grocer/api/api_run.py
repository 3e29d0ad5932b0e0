from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from grocer.infra.Price_Repository import UpstreamDataError
from grocer.utilities.constants import GENERIC_ERROR

# Routers
from grocer.api.routes import compare, deals, prices

# Logging
logger = logging.getLogger("grocer_app")

# Initialize FastAPI app
app = FastAPI(title="Grocer Price Comparison API")

# Include routers
app.include_router(prices.router)
app.include_router(deals.router)
app.include_router(compare.router)


@app.exception_handler(StarletteHTTPException)
async def _http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail},
                        headers=getattr(exc, "headers", None))


@app.exception_handler(UpstreamDataError)
async def _upstream_error(request: Request, exc: UpstreamDataError):
    # Never return partial data; the cause stays in the log
    logger.error("Upstream data failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"error": GENERIC_ERROR})


@app.get("/health")
def health():
    return {"status": "ok"}
