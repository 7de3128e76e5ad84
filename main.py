# main.py
import uvicorn

from app.config.settings import get_settings
from app.main import app

if __name__ == "__main__":
    settings = get_settings()
    if settings.reload:
        uvicorn.run("app.main:app", host=settings.host, port=settings.port, reload=True)
    else:
        uvicorn.run(app, host=settings.host, port=settings.port)
