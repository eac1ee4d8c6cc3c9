"""
Run the API with uvicorn: `python -m audiocraft` or the `audiocraft` script.

Host and port come from HOST / PORT (see audiocraft.config).
"""

import uvicorn

from audiocraft.config import settings


def main() -> None:
    uvicorn.run(
        "audiocraft.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
