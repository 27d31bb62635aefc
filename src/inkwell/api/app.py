"""FastAPI application exposing the Markdown pipeline to the authoring studio."""

import secrets
from typing import Any

import structlog
from fastapi import Depends, FastAPI, HTTPException, Security
from fastapi.middleware.cors import CORSMiddleware
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from .. import __version__
from ..core.model import to_dict

log = structlog.get_logger()


class MarkdownRequest(BaseModel):
    text: str


def create_app(runtime: Any, token: str | None = None, enable_cors: bool = False) -> FastAPI:
    """
    Create FastAPI application with runtime injected.

    Args:
        runtime: Runtime instance with parser, extractor and renderer
        token: Bearer token for authentication (None to disable auth)
        enable_cors: Enable CORS middleware for a browser-hosted studio

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Inkwell API",
        description="Markdown to blocks, table of contents and HTML",
        version=__version__,
        docs_url="/docs" if token is None else None,
        redoc_url="/redoc" if token is None else None,
    )

    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    if token:
        security_scheme = HTTPBearer(auto_error=False)

        async def verify_token(
            credentials: HTTPAuthorizationCredentials | None = Security(security_scheme),  # noqa: B008
        ) -> None:
            """Verify bearer token."""
            if credentials is None or not secrets.compare_digest(
                credentials.credentials.encode(), token.encode()
            ):
                log.warning("api_auth_rejected")
                raise HTTPException(status_code=401, detail="Invalid or missing token")
    else:

        async def verify_token() -> None:
            """No-op when auth is disabled."""
            return None

    @app.get("/health")
    async def health(auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok", "version": __version__}

    @app.post("/render")
    async def render_blocks(req: MarkdownRequest, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Parse Markdown into block nodes."""
        blocks = runtime.parser.parse(req.text)
        log.info("api_render", chars=len(req.text), blocks=len(blocks))
        return {"blocks": [to_dict(b) for b in blocks]}

    @app.post("/toc")
    async def toc(req: MarkdownRequest, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Extract the table of contents."""
        headings = runtime.extractor.extract(req.text)
        log.info("api_toc", chars=len(req.text), headings=len(headings))
        return {"headings": [to_dict(h) for h in headings]}

    @app.post("/html")
    async def html(req: MarkdownRequest, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Render Markdown straight to HTML."""
        blocks = runtime.parser.parse(req.text)
        return {"html": runtime.renderer.render_html(blocks)}

    @app.post("/preview")
    async def preview(req: MarkdownRequest, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Metadata, summary, headings, blocks and HTML for the reading view."""
        log.info("api_preview", chars=len(req.text))
        return runtime.preview(req.text)

    return app


def generate_token() -> str:
    """Generate a random bearer token."""
    return secrets.token_urlsafe(32)
