"""
Layout builder — FastAPI app
Démarrer : uvicorn layout_builder.app:app --reload --port 8001
      ou : python -m layout_builder.app
"""
import logging

from fastapi import FastAPI

from . import __version__
from .router import router

log = logging.getLogger(__name__)


def create_app() -> FastAPI:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s — %(message)s")
    app = FastAPI(title="Layout Builder", version=__version__, docs_url="/docs")
    app.include_router(router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    log.info("layout builder prêt")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8001)
