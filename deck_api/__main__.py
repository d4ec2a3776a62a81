import uvicorn

from deck_api.load_secrets import load_settings
from deck_api.main import create_app

if __name__ == "__main__":
    settings = load_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
