"""CLI bootstrap for controle-jurados maintenance jobs."""

from typing import Annotated

import typer

from controle_jurados.core.clock import Clock, FixedClock, SystemClock
from controle_jurados.core.logging import configure_logging
from controle_jurados.core.settings import get_settings
from controle_jurados.db.session import SessionFactory, session_scope
from controle_jurados.domain.calendar_year import parse_iso_date
from controle_jurados.domain.errors import DomainError
from controle_jurados.repositories.judge_repository import JudgeRepository
from controle_jurados.repositories.juror_repository import JurorRepository
from controle_jurados.services.judge_service import JudgeService
from controle_jurados.services.juror_service import JurorService

app = typer.Typer(help="CLI for juror lifecycle maintenance.")


@app.callback()
def configure() -> None:
    """Configure process logging before any command runs."""
    configure_logging(get_settings().log_level)


@app.command("healthcheck")
def healthcheck() -> None:
    """Verify that the CLI entrypoint is available."""
    typer.echo("controle-jurados is ready")


def _resolve_clock(today: str | None) -> Clock:
    if today is None:
        return SystemClock(get_settings().app_timezone)
    return FixedClock(parse_iso_date(today))


@app.command("reactivate-suspensions")
def reactivate_suspensions(
    today: Annotated[
        str | None,
        typer.Option(help="Override today's date (YYYY-MM-DD)."),
    ] = None,
) -> None:
    """Reactivate jurors whose temporary suspension has ended."""
    try:
        clock = _resolve_clock(today)
        with session_scope(SessionFactory) as session:
            service = JurorService(
                juror_repository=JurorRepository(session),
                session=session,
                clock=clock,
            )
            reactivated = service.reactivate_expired_suspensions()
    except DomainError as exc:
        typer.echo(exc.message, err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(f"Jurados reativados: {reactivated}")


@app.command("ensure-titular")
def ensure_titular() -> None:
    """Repair the single titular judge invariant."""
    try:
        with session_scope(SessionFactory) as session:
            service = JudgeService(
                judge_repository=JudgeRepository(session),
                session=session,
            )
            titular = service.ensure_titular()
            titular_name = titular.name if titular is not None else None
    except DomainError as exc:
        typer.echo(exc.message, err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(f"Juiz titular: {titular_name or '-'}")


def main() -> None:
    """Run the controle-jurados CLI application."""
    app()


if __name__ == "__main__":
    main()
