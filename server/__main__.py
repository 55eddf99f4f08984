"""Run the position feed server with the configured bind address."""

import uvicorn

from server.config import load_config


def main() -> None:
    config = load_config()
    uvicorn.run("server.main:app", host=config.server.host, port=config.server.port)


if __name__ == "__main__":
    main()
