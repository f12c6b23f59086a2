from menu_catalog.database.main import (
    Base,
    DatabaseEngine,
    create_tables,
    dispose_engine,
    get_session,
    test_connection,
)

__all__ = ['Base', 'DatabaseEngine', 'create_tables', 'dispose_engine', 'get_session', 'test_connection']
