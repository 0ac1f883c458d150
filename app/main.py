from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import Body, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from agent.agent import AgentContext, build_context, handle_event
from agent.tools.payload import describe_event
from config.settings import get_settings


settings = get_settings()
logging.basicConfig(level=settings.log_level, format="[%(asctime)s] %(levelname)s - %(message)s")
logger = logging.getLogger("daily_word")


def create_app(context: Optional[AgentContext] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "context", None) is None:
            app.state.context = build_context(get_settings())
        yield

    app = FastAPI(title="Daily French Word Agent", version="1.0.0", lifespan=lifespan)
    app.state.context = context

    # CORS: allow local tools during development
    if get_settings().is_dev:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.post("/mastra/agent")
    def mastra_agent(request: Request, body: Any = Body(default=None)):
        try:
            logger.info("Incoming event: %s", describe_event(body))
            payload = handle_event(request.app.state.context, body)
            return payload.model_dump()
        except Exception as e:
            logger.exception("Agent error: %s", e)
            return JSONResponse(status_code=500, content={"error": "Agent internal error"})

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info("Telex word agent running on port %s", settings.port)
    logger.info("POST /mastra/agent is the A2A entrypoint.")
    uvicorn.run(app, host=settings.host, port=settings.port)
