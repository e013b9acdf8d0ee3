"""API v1 router registration."""

from fastapi import APIRouter

from controle_jurados.api.routes import ballots, draws, judges, jurors

v1_router = APIRouter(prefix="/v1")
v1_router.include_router(jurors.router)
v1_router.include_router(judges.router)
v1_router.include_router(draws.router)
v1_router.include_router(ballots.router)
