"""Run the relay with ``python -m saweria_relay``."""

import uvicorn

from .core import HOST, PORT


def main() -> None:
    uvicorn.run("saweria_relay.app:app", host=HOST, port=PORT)


if __name__ == "__main__":
    main()
