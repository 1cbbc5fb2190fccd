"""
Run the product catalog with uvicorn: `python -m app`.

Host and port come from HOST and PORT (default 0.0.0.0:3000).
"""

import uvicorn

from app.config import settings


def main() -> None:
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
