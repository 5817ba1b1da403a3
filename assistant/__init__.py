def init_db(engine=None):
    """Create tables (simple dev mode)."""
    from assistant.models import Base

    if engine is None:
        from assistant.db import engine
    Base.metadata.create_all(bind=engine)
