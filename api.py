from __future__ import annotations

import logging
import os
from dataclasses import asdict

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from assistant.errors import MalformedInput, ModelProviderFailure, ProviderLookupFailure
from assistant.gateway import TravelGateway
from assistant.orchestrator import ChatOrchestrator
from assistant.session import DEFAULT_SESSION_KEY, SessionStore
from util.config import Settings


load_dotenv()

logger = logging.getLogger(__name__)


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    session_id: str | None = Field(None, alias="sessionId")


def create_app(settings: Settings | None = None, orchestrator: ChatOrchestrator | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    if orchestrator is None:
        store = SessionStore(ttl_seconds=settings.session_ttl_seconds, max_sessions=settings.max_sessions)
        orchestrator = ChatOrchestrator(store, TravelGateway(settings), settings=settings)

    app = FastAPI(title="AI Travel Planner API")
    app.state.orchestrator = orchestrator
    app.state.gateway = orchestrator.gateway

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def _invalid_body(request: Request, exc: RequestValidationError):
        return JSONResponse({"error": "Invalid request body"}, status_code=400)

    @app.exception_handler(MalformedInput)
    async def _malformed(request: Request, exc: MalformedInput):
        return JSONResponse({"error": str(exc)}, status_code=400)

    @app.exception_handler(ModelProviderFailure)
    async def _model_failed(request: Request, exc: ModelProviderFailure):
        return JSONResponse({"error": str(exc)}, status_code=500)

    @app.exception_handler(ProviderLookupFailure)
    async def _lookup_failed(request: Request, exc: ProviderLookupFailure):
        return JSONResponse({"error": str(exc)}, status_code=502)

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse({"error": "Internal server error"}, status_code=500)

    _register_routes(app)
    return app


def get_orchestrator(request: Request) -> ChatOrchestrator:
    return request.app.state.orchestrator


def get_gateway(request: Request) -> TravelGateway:
    return request.app.state.gateway


def _register_routes(app: FastAPI) -> None:
    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.post("/api/chat")
    def chat(req: ChatRequest, orchestrator: ChatOrchestrator = Depends(get_orchestrator)):
        user = (req.message or "").strip()
        if not user:
            raise MalformedInput("message must not be empty")
        reply = orchestrator.handle_turn(req.session_id or DEFAULT_SESSION_KEY, user)
        return {"message": reply}

    @app.get("/api/flights")
    def flights(
        origin: str,
        destination: str,
        date: str,
        gateway: TravelGateway = Depends(get_gateway),
    ):
        return {"flights": [asdict(f) for f in gateway.search_flights(origin, destination, date)]}

    @app.get("/api/flights/{flight_number}/status")
    def flight_status(flight_number: str, gateway: TravelGateway = Depends(get_gateway)):
        return asdict(gateway.track_flight(flight_number))

    @app.get("/api/airports")
    def airports(query: str = Query(..., min_length=2), gateway: TravelGateway = Depends(get_gateway)):
        return {"airports": [asdict(a) for a in gateway.search_airports(query)]}

    @app.get("/api/airports/{code}/schedule")
    def airport_schedule(
        code: str,
        direction: str = Query("departure", pattern="^(departure|arrival)$"),
        gateway: TravelGateway = Depends(get_gateway),
    ):
        return {"flights": [asdict(f) for f in gateway.airport_schedule(code, direction)]}

    @app.get("/api/airlines/{code}")
    def airline(code: str, gateway: TravelGateway = Depends(get_gateway)):
        return asdict(gateway.airline_info(code))

    @app.get("/api/exchange-rate")
    def exchange_rate(base: str, target: str, gateway: TravelGateway = Depends(get_gateway)):
        return asdict(gateway.exchange_rate(base, target))


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "3001")))
