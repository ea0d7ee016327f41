"""Entrypoint for the transcode worker: serve the FastAPI app with uvicorn on PORT."""

import uvicorn

from .config import bootstrap_env, get_settings


def main() -> None:
    bootstrap_env()
    settings = get_settings()
    uvicorn.run(
        "transcode_worker.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
