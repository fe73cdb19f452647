"""FastAPI application entry point for the CV Studio API."""

from __future__ import annotations

import os

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cv_studio.api.routes import export, health, templates
from cv_studio.exceptions import CVStudioError, NoTemplateSelectedError

app = FastAPI(
    title="CV Studio API",
    description="Browse CV templates, render previews and export CVs as PDF, DOCX or text",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CVStudioError)
async def cv_studio_error_handler(request: Request, exc: CVStudioError) -> JSONResponse:
    """Turn package errors that escape a route into JSON error responses."""
    code = (
        status.HTTP_409_CONFLICT
        if isinstance(exc, NoTemplateSelectedError)
        else status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    return JSONResponse(status_code=code, content={"detail": str(exc)})


app.include_router(health.router)
app.include_router(templates.router, prefix="/api")
app.include_router(export.router, prefix="/api")


def main() -> None:
    """Start the development server."""
    import uvicorn

    uvicorn.run(
        "cv_studio.api.main:app",
        host=os.getenv("CV_STUDIO_HOST", "127.0.0.1"),
        port=int(os.getenv("CV_STUDIO_PORT", "8000")),
        reload=False,
    )


if __name__ == "__main__":
    main()
