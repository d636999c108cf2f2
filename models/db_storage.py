from models.user import User
from models.refresh_token import RefreshToken
from models.webhook import Webhook
from sqlalchemy import create_engine, event
from sqlalchemy.orm import scoped_session, sessionmaker
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from models.base_model import Base

# Map model names for easy querying
classes = {
    "User": User,
    "RefreshToken": RefreshToken,
    "Webhook": Webhook,
}


class DBStorage:
    __engine = None
    __session = None

    def configure(self, database_url: str, echo: bool = False):
        """Bind the storage to an engine for ``database_url`` and start a session registry."""
        if self.__session is not None:
            self.__session.remove()
        if self.__engine is not None:
            self.__engine.dispose()

        options = {"echo": echo}
        if database_url.startswith("sqlite"):
            if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
                # One shared connection, otherwise every connection sees an empty database
                options["poolclass"] = StaticPool
            options["connect_args"] = {"check_same_thread": False}
        else:
            options["pool_pre_ping"] = True
        self.__engine = create_engine(database_url, **options)

        if self.__engine.url.get_backend_name() == "sqlite":
            # Enable SQLite foreign keys (needed for ON DELETE CASCADE)
            @event.listens_for(self.__engine, "connect")
            def _set_sqlite_pragma(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        self.reload()

    def reload(self):
        """Create tables and start session"""
        Base.metadata.create_all(self.__engine)
        session_factory = sessionmaker(bind=self.__engine, expire_on_commit=False)
        self.__session = scoped_session(session_factory)

    def drop_all(self):
        """Drop every table (tests and local resets)."""
        self.__session.remove()
        Base.metadata.drop_all(self.__engine)

    def new(self, obj):
        """Add object to session"""
        self.__session.add(obj)

    def save(self):
        """Commit session"""
        try:
            self.__session.commit()
        except SQLAlchemyError:
            self.__session.rollback()
            raise

    def delete(self, obj=None):
        """Delete object if exists (hard delete)"""
        if obj:
            self.__session.delete(obj)

    def get(self, cls, id):
        """Fetch one object by class and ID"""
        if cls in classes.values():
            return self.__session.get(cls, id)
        return None

    def count(self, cls):
        """Count rows of one model"""
        return self.__session.query(cls).count()

    def close(self):
        """Remove session (for API teardown)"""
        if self.__session is not None:
            self.__session.remove()

    # expose the SQLAlchemy session for advanced querying (filters, ordering, bulk deletes)
    def get_session(self):
        return self.__session
