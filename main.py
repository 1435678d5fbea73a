from taskboard.core.config import get_settings
from taskboard.server import create_app
from taskboard.utils.logger import setup_logging

settings = get_settings()

setup_logging(settings.log_level)

app = create_app(settings)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app="main:app", host="0.0.0.0", port=8000, reload=True)
