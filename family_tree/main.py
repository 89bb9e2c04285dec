from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from family_tree.core.config import settings
from family_tree.core.logging_config import configure_logging
from family_tree.routers import backups, debug, family_members, health

configure_logging()

app = FastAPI(
    title="Family Tree Data API",
    version="1.0.0",
    description="Read and edit the family-member JSON store, with a timestamped backup on every bulk update.",
    root_path=settings.root_path,
)


# Clients expect {"error": "..."} rather than FastAPI's {"detail": "..."}.
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = "Method not allowed" if exc.status_code == 405 else exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={"error": "Invalid family member payload", "details": jsonable_encoder(exc.errors())},
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(family_members.router)
app.include_router(backups.router)
app.include_router(debug.router)
