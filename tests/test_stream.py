import pytest

from chatshell_errors import ProtocolError
from chatshell_stream import ProgressRecord, decode_records, parse_record


def test_two_records_stop_at_final():
    lines = [
        b'{"response":"Hi","done":false}',
        b'{"response":" there","done":true,"context":[1,2,3]}',
    ]
    records = list(decode_records(lines))
    assert records == [
        ProgressRecord(text="Hi", done=False),
        ProgressRecord(text=" there", done=True, context=[1, 2, 3]),
    ]
    assert "".join(r.text for r in records) == "Hi there"


def test_lines_after_final_are_not_read():
    def lines():
        yield '{"response":"ok","done":true,"context":[7]}'
        raise AssertionError("read past the final record")

    records = list(decode_records(lines()))
    assert records[-1].context == [7]


def test_blank_keepalive_lines_are_skipped():
    lines = ["", b"   ", '{"response":"a","done":true}']
    assert [r.text for r in decode_records(lines)] == ["a"]


def test_token_on_non_final_record_is_dropped():
    record = parse_record('{"response":"x","done":false,"context":[9]}')
    assert record.context is None


def test_final_without_token():
    record = parse_record('{"response":"","done":true}')
    assert record.done and record.context is None


@pytest.mark.parametrize(
    "line",
    [
        "not json",
        "[1, 2]",
        '{"response": 5, "done": false}',
        '{"response": "x", "done": "yes"}',
        '{"response": "x", "done": true, "context": ["a"]}',
        b"\xff\xfe",
    ],
)
def test_malformed_record_is_protocol_error(line):
    with pytest.raises(ProtocolError):
        parse_record(line)


def test_server_error_record():
    with pytest.raises(ProtocolError, match="model runner crashed"):
        parse_record('{"error":"model runner crashed"}')


def test_decoder_is_lazy():
    seen = []

    def lines():
        for line in ['{"response":"a","done":false}', "garbage"]:
            seen.append(line)
            yield line

    records = decode_records(lines())
    assert next(records).text == "a"
    assert len(seen) == 1
    with pytest.raises(ProtocolError):
        next(records)
