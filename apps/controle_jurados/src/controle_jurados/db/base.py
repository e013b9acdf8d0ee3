"""SQLAlchemy base metadata and model registration utilities."""

from importlib import import_module

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


def import_orm_models() -> None:
    """Import ORM models so metadata is fully populated."""

    modules = (
        "controle_jurados.db.models.institution",
        "controle_jurados.db.models.juror",
        "controle_jurados.db.models.judge",
        "controle_jurados.db.models.draw",
        "controle_jurados.db.models.draw_assignment",
        "controle_jurados.db.models.ballot",
        "controle_jurados.db.models.last_service_mark",
    )
    for module_name in modules:
        import_module(module_name)
