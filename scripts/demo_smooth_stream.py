import asyncio
import logging
import sys

import httpx

from smooth_streamer import SmoothStreamer
from smooth_streamer.config import settings

SAMPLE_TEXT = (
    "Streaming responses rarely arrive at a comfortable reading pace. "
    "Some chunks are a single token, others are <b>whole paragraphs</b>, "
    "and the gaps between them are anything but even."
)


def _printer():
    shown = {"text": ""}

    def on_fragment(fragment: str):
        previous = shown["text"]
        if fragment.startswith(previous):
            sys.stdout.write(fragment[len(previous):])
        else:
            sys.stdout.write("\n" + fragment)
        sys.stdout.flush()
        shown["text"] = fragment

    return on_fragment


async def feed_sample(streamer: SmoothStreamer):
    for start in range(0, len(SAMPLE_TEXT), 17):
        chunk = SAMPLE_TEXT[start:start + 17]
        if streamer.replace_mode:
            chunk = SAMPLE_TEXT[:start + 17]
        streamer.enqueue(chunk)
        await asyncio.sleep(0.05)


async def feed_sse(streamer: SmoothStreamer, url: str):
    async with httpx.AsyncClient(timeout=None) as client:
        async with client.stream("GET", url) as resp:
            resp.raise_for_status()
            current_event = None
            async for line in resp.aiter_lines():
                if line.startswith("event:"):
                    current_event = line.split(":", 1)[1].strip()
                    continue
                if line.startswith("data:"):
                    data = line.split(":", 1)[1].lstrip()
                    if current_event == "delta" or current_event is None:
                        streamer.enqueue(data)
                    elif current_event == "end":
                        break


async def main():
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s", encoding="utf-8")
    streamer = SmoothStreamer.from_options()
    streamer.subscribe(_printer())
    streamer.on_stream_end(lambda: logging.getLogger(__name__).debug("stream drained"))

    if len(sys.argv) > 1:
        await feed_sse(streamer, sys.argv[1])
    else:
        await feed_sample(streamer)
    await streamer.join()
    sys.stdout.write("\n")


if __name__ == "__main__":
    asyncio.run(main())
