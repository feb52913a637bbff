import json
from dataclasses import dataclass
from typing import List, Optional

from chatshell_errors import ProtocolError


@dataclass(frozen=True)
class ProgressRecord:
    text: str
    done: bool
    context: Optional[List[int]] = None


def _is_token(value):
    return isinstance(value, list) and all(
        isinstance(item, int) and not isinstance(item, bool) for item in value
    )


def parse_record(line):
    """Decode one NDJSON line from /api/generate into a ProgressRecord."""
    if isinstance(line, bytes):
        try:
            line = line.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ProtocolError(f"Record is not valid UTF-8: {e}") from e

    try:
        data = json.loads(line)
    except json.JSONDecodeError as e:
        raise ProtocolError(f"Error parsing JSON chunk: {e}") from e

    if not isinstance(data, dict):
        raise ProtocolError(f"Record is not a JSON object: {line[:80]!r}")
    if data.get("error"):
        raise ProtocolError(f"Server reported an error: {data['error']}")

    text = data.get("response", "")
    done = data.get("done", False)
    if not isinstance(text, str):
        raise ProtocolError("Record field 'response' is not a string")
    if not isinstance(done, bool):
        raise ProtocolError("Record field 'done' is not a boolean")

    context = None
    if done and data.get("context") is not None:
        context = data["context"]
        if not _is_token(context):
            raise ProtocolError("Record field 'context' is not a list of integers")

    return ProgressRecord(text=text, done=done, context=context)


def decode_records(lines):
    """Yield records lazily, stopping after the first one marked done.

    Lines after the final record are never read or parsed.
    """
    for line in lines:
        if not line or not line.strip():
            continue
        record = parse_record(line)
        yield record
        if record.done:
            return
