import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .errors import MalformedRequest, QuoteError
from .logging_config import setup_logging
from .routers import quotes

setup_logging()
logger = logging.getLogger(__name__)

# -------------------------------------------------------------------
# App + CORS
# -------------------------------------------------------------------

app = FastAPI(title="Pressure Washing Quote API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health_check():
    return {"status": "ok"}


# -------------------------------------------------------------------
# Error responses: always {"error": ..., "code": ...}
# -------------------------------------------------------------------

@app.exception_handler(QuoteError)
async def quote_error_handler(request: Request, exc: QuoteError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
async def malformed_body_handler(request: Request, exc: RequestValidationError):
    logger.warning("Malformed request body at %s: %s", request.url.path, exc.errors())
    err = MalformedRequest()
    return JSONResponse(status_code=err.status_code, content=err.to_body())


app.include_router(quotes.router)
