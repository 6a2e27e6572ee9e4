"""Launch the route risk FastAPI server."""

import logging

import uvicorn

from route_risk.config import get_settings


def main():
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run("route_risk.server:app", host=settings.api_host, port=settings.api_port, reload=settings.log_level.upper() == "DEBUG")


if __name__ == "__main__":
    main()
