import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from walletlens.api.analytics import router as analytics_router
from walletlens.api.tax import router as tax_router
from walletlens.container import Container
from walletlens.exceptions import InsufficientLotBalanceError, InvalidConfigurationError

logger = logging.getLogger("walletlens.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = Container()
    app.state.container = container
    yield
    await container.http_client().close()


app = FastAPI(title="WalletLens", version="0.1.0", lifespan=lifespan)


@app.exception_handler(InsufficientLotBalanceError)
async def lot_balance_handler(request: Request, exc: InsufficientLotBalanceError):
    logger.warning("Lot balance integrity failure on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=409,
        content={
            "detail": str(exc),
            "symbol": exc.symbol,
            "event_id": exc.event_id,
            "requested": str(exc.requested),
            "available": str(exc.available),
        },
    )


@app.exception_handler(InvalidConfigurationError)
async def invalid_configuration_handler(request: Request, exc: InvalidConfigurationError):
    return JSONResponse(status_code=422, content={"detail": exc.errors})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
    logger.error("Unhandled error on %s %s:\n%s", request.method, request.url.path, "".join(tb))
    return JSONResponse(status_code=500, content={"detail": str(exc)})


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(tax_router)
app.include_router(analytics_router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}
