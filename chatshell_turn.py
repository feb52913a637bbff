from dataclasses import dataclass
from typing import List, Optional

from chatshell_errors import ProtocolError, TransportError, TurnFailed
from chatshell_log import log_event
from chatshell_stream import decode_records
from chatshell_transport import open_generate


@dataclass
class TurnResult:
    reply: str
    context: Optional[List[int]]
    fragments: int


def build_request(session, prompt):
    payload = {
        "model": session.model,
        "prompt": prompt,
        "stream": True,
        # Sent every turn; the server ignores it once a context is supplied.
        "system": session.system_prompt,
    }
    if session.context is not None:
        payload["context"] = list(session.context)
    return payload


def _stream_reply(stream, on_fragment):
    parts = []
    for record in decode_records(stream.lines()):
        if record.text:
            parts.append(record.text)
            if on_fragment is not None:
                on_fragment(record.text)
        if record.done:
            return "".join(parts), record.context, len(parts)
    raise ProtocolError("Stream ended before the final record")


def run_turn(session, user_text, on_fragment=None, base_url=None, transport=open_generate):
    """Send one prompt and stream the reply back.

    Returns None for blank input without touching the network. On success the
    session context is replaced by the final record's token. Any transport or
    protocol failure clears the context and raises TurnFailed.
    """
    if not user_text or not user_text.strip():
        return None

    payload = build_request(session, user_text)
    log_event(f"turn start model={session.model} context={'yes' if session.context else 'no'}")

    try:
        with transport(payload, base_url=base_url) as stream:
            reply, context, fragments = _stream_reply(stream, on_fragment)
    except (TransportError, ProtocolError) as e:
        session.reset()
        log_event(f"turn failed model={session.model}: {e}")
        raise TurnFailed(e) from e

    session.context = context
    session.turns += 1
    log_event(f"turn done model={session.model} chars={len(reply)} fragments={fragments}")
    return TurnResult(reply=reply, context=context, fragments=fragments)
