"""FastAPI webhook receiver.

Deliveries are acknowledged to GitHub immediately and handled as background
tasks, one turn per delivery. Turns share no mutable state, so concurrent
deliveries need no coordination.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import logging

from fastapi import BackgroundTasks, FastAPI, Header, HTTPException, Request

logger = logging.getLogger(__name__)


def verify_signature(secret: str | None, body: bytes, signature: str | None) -> bool:
    """Check an ``X-Hub-Signature-256`` header. Always True when no secret is configured."""
    if not secret:
        return True
    if not signature:
        return False
    expected = "sha256=" + hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(expected, signature)


def create_app(router, webhook_secret: str | None = None) -> FastAPI:
    app = FastAPI(title="threadbot")

    if not webhook_secret:
        logger.warning("GITHUB_WEBHOOK_SECRET is not set; webhook signatures will not be verified.")

    @app.post("/webhook")
    async def webhook(
        request: Request,
        background_tasks: BackgroundTasks,
        x_github_event: str | None = Header(None),
        x_github_delivery: str | None = Header(None),
        x_hub_signature_256: str | None = Header(None),
    ):
        body = await request.body()
        if not verify_signature(webhook_secret, body, x_hub_signature_256):
            raise HTTPException(status_code=401, detail="Invalid signature")

        if x_github_event == "ping":
            return {"status": "pong"}

        try:
            payload = json.loads(body)
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid JSON payload")
        if not isinstance(payload, dict):
            raise HTTPException(status_code=400, detail="Invalid JSON payload")

        event = x_github_event or ""
        action = payload.get("action")
        if not router.supports(event, payload):
            logger.debug("Ignoring delivery %s: %s.%s", x_github_delivery, event, action)
            return {"status": "ignored", "event": event, "action": action}

        logger.info("Received delivery %s: %s.%s", x_github_delivery, event, action)
        background_tasks.add_task(router.dispatch, event, payload)
        return {"status": "processing", "event": event, "action": action}

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app
