"""Check that the configured database is reachable and the cars table exists.

Usage: python verify_db.py   (exit code 0 on success)
"""
import sys

from sqlalchemy import func, inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, Session, select

from service_car.db.session import engine
from service_car.models import Car


def verify_database() -> int:
    print(f"Database: {engine.url.render_as_string(hide_password=True)}")
    try:
        SQLModel.metadata.create_all(engine)
        tables = inspect(engine).get_table_names()
        with Session(engine) as session:
            count = session.exec(select(func.count()).select_from(Car)).one()
    except SQLAlchemyError as exc:
        print(f"FAILED: {exc}")
        return 1

    print(f"Tables: {', '.join(sorted(tables))}")
    print(f"Cars stored: {count}")
    return 0


if __name__ == "__main__":
    sys.exit(verify_database())
