import os

import uvicorn
from dotenv import load_dotenv

from newswire.logging import configure_logging, level_from_name

# Load NEWSWIRE_* settings from a local .env file when present.
load_dotenv()

HOST = os.getenv("NEWSWIRE_HOST", "127.0.0.1")
PORT = int(os.getenv("NEWSWIRE_PORT", "8000"))
LOG_LEVEL = os.getenv("NEWSWIRE_LOG_LEVEL", "info")


def main() -> None:
    configure_logging("newswire-api", level=level_from_name(LOG_LEVEL))
    uvicorn.run("newswire.api:app", host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
