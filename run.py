import logging

import uvicorn

from linkharvest.api.app import create_app
from linkharvest.container import Container

logger = logging.getLogger(__name__)


def main(container=None):
    # Allow tests to inject a pre-wired container
    if container is None:
        container = Container()

    level_name = str(container.config.LOG_LEVEL() or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(container)
    host = container.config.HOST() or "0.0.0.0"
    port = int(container.config.PORT() or 8080)
    logger.info("Listening on %s:%s...", host, port)
    uvicorn.run(app, host=host, port=port)


if __name__ == '__main__':
    main()
