"""Microphone client for the relay: `python -m relay.client --server localhost:3000`."""

from __future__ import annotations

import asyncio
import argparse
import contextlib

from relay.runtime.logging import configure_logging
from relay.config.transcript import PROVISIONAL_PROMOTION_TIMEOUT_S

from .view import TranscriptView
from .microphone import MicrophoneStream
from .relay_client import RelayClient, build_ws_url


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Stream microphone audio to the transcription relay")
    parser.add_argument("--server", default="localhost:3000", help="host:port or full ws:// URL")
    parser.add_argument("--path", default="/ws", help="WebSocket endpoint path")
    parser.add_argument("--secure", action="store_true", help="Use wss://")
    parser.add_argument("--device", default=None, help="Input device index or name")
    parser.add_argument("--sample-rate", type=int, default=None, help="Capture rate (defaults to the device rate)")
    parser.add_argument(
        "--promotion-timeout",
        type=float,
        default=PROVISIONAL_PROMOTION_TIMEOUT_S,
        help="Seconds of silence before provisional text is promoted",
    )
    return parser.parse_args()


def _device(value: str | None) -> int | str | None:
    if value is None:
        return None
    return int(value) if value.isdigit() else value


async def _run(args: argparse.Namespace) -> None:
    mic = MicrophoneStream(device=_device(args.device), sample_rate=args.sample_rate)
    client = RelayClient(
        build_ws_url(args.server, args.path, secure=args.secure),
        view=TranscriptView(promotion_timeout_s=args.promotion_timeout),
    )
    print("Streaming microphone audio. Press Enter to generate an answer, Ctrl-C to stop.")
    mic.start()
    try:
        await client.run(mic.blocks(), input_rate=mic.sample_rate)
    finally:
        mic.stop()


def main() -> None:
    configure_logging()
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(_run(_parse_args()))


if __name__ == "__main__":
    main()
