"""Server module entry point for running with python -m server."""

import uvicorn

from server.server_config import HOST, PORT, RELOAD
from specdeck.utils.logging_config import get_logger

logger = get_logger(__name__)

if __name__ == "__main__":
    logger.info("Starting specdeck server on %s:%s", HOST, PORT)

    uvicorn.run(
        "server.main:app",
        host=HOST,
        port=PORT,
        reload=RELOAD,
        log_config=None,  # Disable uvicorn's default logging config
    )
