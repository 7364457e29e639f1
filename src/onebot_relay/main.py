"""Entrypoint: run the OneBot relay server."""

import uvicorn

from onebot_relay.api.app import create_app
from onebot_relay.config.settings import Settings


def main() -> None:
    settings = Settings()
    app = create_app()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
