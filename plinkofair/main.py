import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse

from . import config
from .routers import plinko, rounds
from .services.errors import InvalidInput, RoundNotFound, RoundStateError

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Plinko API (provably fair)")

# Routers
app.include_router(rounds.router)
app.include_router(plinko.router)


@app.exception_handler(InvalidInput)
async def invalid_input(request: Request, exc: InvalidInput):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(RoundNotFound)
async def round_not_found(request: Request, exc: RoundNotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(RoundStateError)
async def round_state(request: Request, exc: RoundStateError):
    logger.info("rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/docs")

@app.get("/healthz")
def healthz():
    return {"ok": True}
