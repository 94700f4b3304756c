"""HTTP and websocket surface for scorers and spectators."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import Body, FastAPI, Header, Request, WebSocket, WebSocketDisconnect
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from ..config import settings
from ..database import get_session
from ..exceptions import NotFoundError, ScoringError
from ..notifications import notifier
from ..schemas import MatchCreate, MatchDetail, MatchResponse, PasscodeRequest, parse_command
from ..services import MatchService, ScoringService

logger = logging.getLogger(__name__)

PASSCODE_HEADER = "X-Passcode"


def _validation_message(errors: List[Dict[str, Any]]) -> str:
    """Flatten pydantic errors into one line for the ``error`` field."""
    parts = []
    for error in errors:
        message = str(error.get("msg", "Invalid value")).removeprefix("Value error, ")
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    app = FastAPI(
        title="Live Cricket Scorer API",
        version="0.1.0",
        description="Ball-by-ball scoring for scorers and live scorecards for spectators",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ScoringError)
    async def scoring_error_handler(request: Request, exc: ScoringError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": _validation_message(exc.errors())})

    @app.exception_handler(PydanticValidationError)
    async def command_validation_handler(request: Request, exc: PydanticValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": _validation_message(exc.errors())})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.get("/health")
    def health_check():
        return {"status": "ok", "time": datetime.now(timezone.utc).isoformat()}

    @app.post("/api/matches", status_code=201, response_model=MatchResponse)
    def create_match(data: MatchCreate):
        with get_session() as session:
            service = MatchService(session)
            match = service.create_match(data)
            response = MatchResponse.model_validate(match)
        notifier.publish_all(service.changes)
        return response

    @app.get("/api/matches", response_model=List[MatchResponse])
    def list_matches():
        with get_session() as session:
            return [MatchResponse.model_validate(m) for m in MatchService(session).list_matches()]

    @app.get("/api/matches/{match_id}", response_model=MatchDetail)
    def get_match(match_id: int):
        with get_session() as session:
            return MatchService(session).get_match_detail(match_id)

    @app.get("/api/matches/{match_id}/scorecard")
    def get_scorecard(match_id: int):
        with get_session() as session:
            return MatchService(session).scorecard(match_id)

    @app.post("/api/matches/{match_id}/verify")
    def verify_passcode(match_id: int, data: PasscodeRequest):
        with get_session() as session:
            valid = MatchService(session).verify_passcode(match_id, data.passcode)
        return {"valid": valid}

    @app.delete("/api/matches/{match_id}")
    def delete_match(match_id: int, passcode: Optional[str] = Header(None, alias=PASSCODE_HEADER)):
        with get_session() as session:
            service = MatchService(session)
            service.delete_match(match_id, passcode)
        notifier.publish_all(service.changes)
        return {"deleted": True, "match_id": match_id}

    @app.post("/api/matches/{match_id}/score", response_model=MatchDetail)
    def score(
        match_id: int,
        payload: Dict[str, Any] = Body(...),
        passcode: Optional[str] = Header(None, alias=PASSCODE_HEADER),
    ):
        """Apply one scoring command and return the updated match."""
        with get_session() as session:
            MatchService(session).require_passcode(match_id, passcode)
            command = parse_command(payload)
            scoring = ScoringService(session)
            scoring.execute(match_id, command)
            detail = MatchService(session).get_match_detail(match_id)
        notifier.publish_all(scoring.changes)
        return detail

    def _match_exists(match_id: int) -> bool:
        try:
            with get_session() as session:
                MatchService(session).get_match(match_id)
        except NotFoundError:
            return False
        return True

    @app.websocket("/api/matches/{match_id}/live")
    async def live_updates(websocket: WebSocket, match_id: int):
        """Forward change notifications for one match until the client disconnects."""
        if not await run_in_threadpool(_match_exists, match_id):
            await websocket.close(code=4404)
            return

        loop = asyncio.get_running_loop()
        queue: asyncio.Queue = asyncio.Queue()
        unsubscribe = notifier.subscribe(
            match_id, lambda event: loop.call_soon_threadsafe(queue.put_nowait, event)
        )
        logger.debug(f"Spectator subscribed to match {match_id}")

        receiver = getter = None
        try:
            await websocket.accept()
            receiver = asyncio.ensure_future(websocket.receive())
            getter = asyncio.ensure_future(queue.get())
            while True:
                done, _ = await asyncio.wait({receiver, getter}, return_when=asyncio.FIRST_COMPLETED)
                if getter in done:
                    await websocket.send_json(getter.result().to_dict())
                    getter = asyncio.ensure_future(queue.get())
                if receiver in done:
                    # Anything the client sends other than a close is ignored
                    if receiver.result()["type"] == "websocket.disconnect":
                        break
                    receiver = asyncio.ensure_future(websocket.receive())
        except WebSocketDisconnect:
            pass
        finally:
            for task in (receiver, getter):
                if task is not None:
                    task.cancel()
            unsubscribe()
            logger.debug(f"Spectator left match {match_id}")

    return app


app = create_app()
