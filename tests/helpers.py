"""Shared builders for the in-process assistant endpoint and sessions."""
from typing import Any, Dict, Optional

import httpx
from fastapi import FastAPI, HTTPException

from dispatch import make_http_client
from main import ChatSession
from models import ChatRequest
from settings import Settings

ENDPOINT_URL = "http://testserver/chat"


def make_endpoint(status_code: int = 200, payload: Optional[Dict[str, Any]] = None) -> FastAPI:
    """In-process assistant endpoint honouring the /chat contract."""
    app = FastAPI(title="Assistant endpoint")
    app.state.received = []

    @app.post("/chat")
    def chat(req: ChatRequest):
        app.state.received.append(req.message)
        if status_code >= 400:
            raise HTTPException(status_code=status_code, detail="simulated failure")
        if payload is not None:
            return payload
        return {"message": f"echo: {req.message}"}

    return app


def asgi_client(app: FastAPI) -> httpx.AsyncClient:
    return make_http_client(transport=httpx.ASGITransport(app=app))


def mock_client(handler) -> httpx.AsyncClient:
    return make_http_client(transport=httpx.MockTransport(handler))


def make_session(http_client: httpx.AsyncClient) -> ChatSession:
    return ChatSession(Settings(CHAT_ENDPOINT_URL=ENDPOINT_URL), http_client=http_client)
