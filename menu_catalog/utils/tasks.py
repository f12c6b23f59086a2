from menu_catalog.utils.log import setup_logging

logger = setup_logging()


async def database_test_connection() -> bool:
    """
    Test the connection to the database.
    :return: True if the connection is successful, otherwise False.
    """
    from menu_catalog.database import test_connection

    try:
        await test_connection()
        return True
    except RuntimeError as e:
        logger.error(e)
        return False
