"""Run the relay server: `python -m relay`."""

from __future__ import annotations

import uvicorn

from relay.runtime.settings import load_websocket_settings


def main() -> None:
    ws = load_websocket_settings()
    uvicorn.run("relay.server:app", host=ws.host, port=ws.port, ws="websockets", log_config=None)


if __name__ == "__main__":
    main()
