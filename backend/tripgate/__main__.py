"""Run the gateway with uvicorn: python -m tripgate"""

import uvicorn

from tripgate.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "tripgate.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
