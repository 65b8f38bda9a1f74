"""ASGI entry point: ``uvicorn app:app`` or ``python app.py``."""

from dotenv import load_dotenv

load_dotenv()

from api.application import configure_logging, create_app  # noqa: E402
from infrastructure.config import get_port  # noqa: E402

configure_logging()

app = create_app()


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=get_port())
