from dotenv import load_dotenv

load_dotenv()

if __name__ == "__main__":
    import asyncio

    from menu_catalog.app import Application

    app = Application()
    asyncio.run(app.start())
