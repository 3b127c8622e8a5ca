import logging
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from stacks.configs import DB_URI, DEBUG

logger = logging.getLogger(__name__)


def make_engine(uri: str = DB_URI, **kwargs) -> Engine:
    """Builds an engine for `uri`. SQLite engines are shareable across
    threads and enforce foreign keys so cascades behave as on PostgreSQL.
    """
    engine_kwargs = {'echo': DEBUG}
    if uri.startswith('sqlite'):
        engine_kwargs['connect_args'] = {'check_same_thread': False}
        if ':memory:' in uri:
            engine_kwargs['poolclass'] = StaticPool
    else:
        engine_kwargs['client_encoding'] = 'utf8'
    engine_kwargs.update(kwargs)
    engine = create_engine(uri, **engine_kwargs)

    if uri.startswith('sqlite'):
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = make_engine()
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


class StacksBase:
    @classmethod
    def get_many(cls, session, offset=None, limit=None):
        return session.query(cls).order_by(*cls.__table__.primary_key.columns) \
            .offset(offset).limit(limit).all()


Base = declarative_base(cls=StacksBase)


def get_session():
    """Yields one session per request and closes it afterwards."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def init(engine_to_init: Engine = engine):
    try:
        Base.metadata.create_all(bind=engine_to_init)
    except Exception as e:
        logger.warning(f"[WARNING] Database initialization failed: {e}")
