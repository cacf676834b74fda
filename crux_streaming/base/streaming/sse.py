"""Server-sent-event decoding for OpenAI-style streams.

Parses a byte-chunk stream according to:
 - https://developer.mozilla.org/en-US/docs/Web/API/Server-sent_events/Using_server-sent_events
 - https://github.com/openai/openai-cookbook/blob/970d8261fbf6206718fe205e88e37f4745f9cf76/examples/How_to_stream_completions.ipynb

Only ``data: `` frames are decoded; other SSE fields (comments, ids, event
names) are dropped. The ``[DONE]`` sentinel frame is skipped, not treated as
end of stream: the generator ends when the byte stream does.
"""
from __future__ import annotations

import codecs
import json
from typing import Any, AsyncIterable, AsyncIterator, Optional

from ..errors import MalformedStreamError

SSE_PREFIX = "data: "
SSE_TERMINATOR = "\n\n"
SSE_FINAL_EVENT = "[DONE]"


async def iter_sse_json(
    chunks: AsyncIterable[bytes],
    *,
    provider: str = "openai",
    model: Optional[str] = None,
) -> AsyncIterator[Any]:
    """Yield the JSON payload of each complete ``data:`` frame in ``chunks``.

    Text not yet terminated by a blank line is buffered until the next chunk;
    whatever remains buffered when the source ends is discarded. UTF-8 is
    decoded incrementally so a character split across chunks is preserved;
    invalid bytes become U+FFFD instead of failing the stream.

    Raises:
        MalformedStreamError: a data frame's payload is not valid JSON.
    """
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    buffered = ""

    async for chunk in chunks:
        frames = (buffered + decoder.decode(chunk)).split(SSE_TERMINATOR)
        buffered = frames.pop()

        for frame in frames:
            if not frame.startswith(SSE_PREFIX):
                continue
            text = frame[len(SSE_PREFIX):]
            if text == SSE_FINAL_EVENT:
                continue
            try:
                event = json.loads(text)
            except json.JSONDecodeError as e:
                raise MalformedStreamError.for_payload(text, e, provider=provider, model=model) from e
            yield event


__all__ = ["iter_sse_json", "SSE_PREFIX", "SSE_TERMINATOR", "SSE_FINAL_EVENT"]
