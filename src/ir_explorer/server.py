"""HTTP API: compile a snippet and return raw or rendered IR dumps."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from ir_explorer import __version__
from ir_explorer.compiler import CompileResult, compile_source
from ir_explorer.config import CompilerConfig, ExplorerConfig
from ir_explorer.ir_kinds import VALID_KINDS
from ir_explorer.render import render_dump
from ir_explorer.session import CompileSession

logger = logging.getLogger(__name__)


class CompileRequest(BaseModel):
    source: str
    ir_type: str


class CompileResponse(BaseModel):
    success: bool
    ir_output: str
    messages: str


class CompileAllRequest(BaseModel):
    source: str
    ir_types: list[str]


def _compile_kind(source: str, kind: str, config: CompilerConfig) -> CompileResult:
    return compile_source(source, kind, config)


def create_app(config: ExplorerConfig | None = None) -> FastAPI:
    """Build the API app. A configured static directory is served at /."""
    config = config or ExplorerConfig()
    app = FastAPI(title="IR Explorer", version=__version__)
    app.state.session = CompileSession(config.compiler, compile_fn=_compile_kind)

    async def _compile(req: CompileRequest) -> CompileResult:
        logger.info("compile %s (%d bytes)", req.ir_type, len(req.source))
        return await run_in_threadpool(
            compile_source, req.source, req.ir_type, config.compiler,
        )

    @app.post("/api/compile", response_model=CompileResponse)
    async def compile_endpoint(req: CompileRequest) -> dict:
        result = await _compile(req)
        return result.to_dict()

    @app.post("/api/render")
    async def render_endpoint(req: CompileRequest) -> dict:
        result = await _compile(req)
        rendered = render_dump(result, language=config.render.language)
        return {
            "success": result.success,
            "messages": rendered.messages,
            "line_numbers": rendered.line_numbers,
            "lines": [line.to_dict() for line in rendered.lines],
        }

    @app.post("/api/compile-all")
    async def compile_all_endpoint(req: CompileAllRequest) -> dict:
        session: CompileSession = app.state.session
        logger.info("compile %s (%d bytes)", ",".join(req.ir_types), len(req.source))
        results = await run_in_threadpool(session.compile_all, req.source, req.ir_types)
        # Kinds missing from the results were dropped as stale: a newer
        # request started while they compiled.
        superseded = len(results) < len(dict.fromkeys(req.ir_types))
        return {
            "superseded": superseded,
            "results": {kind: result.to_dict() for kind, result in results.items()},
        }

    @app.get("/api/ir-kinds")
    async def ir_kinds() -> dict:
        return {"kinds": list(VALID_KINDS), "default": config.render.default_kind}

    if config.server.static_dir:
        static = Path(config.server.static_dir)
        if static.is_dir():
            app.mount("/", StaticFiles(directory=static, html=True), name="static")
        else:
            logger.warning("static dir %s does not exist, not serving it", static)

    return app


def serve(config: ExplorerConfig, *, host: str | None = None, port: int | None = None) -> None:
    """Run the API with uvicorn until interrupted."""
    import uvicorn

    uvicorn.run(
        create_app(config),
        host=host or config.server.host,
        port=port or config.server.port,
    )
