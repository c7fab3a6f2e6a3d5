from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from mychat.db.session import engine as default_engine, Base
from mychat.utils.logger import get_logger, setup_logging

# Import all models before create_all
from mychat.models import user, contact  # noqa: F401

logger = get_logger(__name__)


def create_missing_tables(engine: Engine = None):
    engine = engine or default_engine
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created (if missing)")


def add_missing_columns(engine: Engine = None):
    engine = engine or default_engine
    inspector = inspect(engine)
    with engine.connect() as conn:
        for table_name, model_table in Base.metadata.tables.items():
            if table_name not in inspector.get_table_names():
                logger.warning("Table %s not found in DB, creating it...", table_name)
                model_table.create(bind=engine, checkfirst=True)
                continue

            existing_cols = [col["name"] for col in inspector.get_columns(table_name)]
            for col_name, col in model_table.columns.items():
                if col_name in existing_cols:
                    continue
                sql = f'ALTER TABLE "{table_name}" ADD COLUMN "{col_name}" {col.type.compile(engine.dialect)};'
                logger.info("Adding column %s.%s", table_name, col_name)
                conn.execute(text(sql))
                conn.commit()


if __name__ == "__main__":
    setup_logging()
    logger.info("Syncing database...")
    create_missing_tables()
    add_missing_columns()
    logger.info("Database sync complete.")
