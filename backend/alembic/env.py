from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from interview_prep.models import KeyValueEntry, UserScoringWeights  # noqa: F401
from interview_prep.platform.config import settings
from interview_prep.platform.database import Base

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# The service's own DATABASE_URL; sqlalchemy.url in alembic.ini is not read.
database_url = settings.DATABASE_URL
# SQLite needs batch mode for ALTER TABLE.
render_as_batch = database_url.startswith("sqlite")


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=render_as_batch,
        **kwargs,
    )


def run_migrations_offline() -> None:
    _configure(url=database_url, literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = create_engine(database_url, poolclass=pool.NullPool)
    with connectable.connect() as connection:
        _configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
