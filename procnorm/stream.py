"""
Stream driver around the transform dispatcher.

Responsibilities:
- encoding detection for uploaded bytes
- splitting a text stream into JSON values (newline-agnostic)
- one dispatch per value, fanning out list results
- newline-framed output with a single trailing newline
- per-batch report of dropped and failed records
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Iterator, List, Optional, TextIO, Tuple

from charset_normalizer import from_bytes

from .config import TransformConfig
from .dispatch import transform
from .models import ReportSummary, TransformReport, TransformResponse

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 64 * 1024
_WHITESPACE = " \t\r\n"
_BOM = "\ufeff"


class StreamError(ValueError):
    """Raised when the input stream is not a sequence of JSON values."""
    pass


def decode_input(raw: bytes) -> Tuple[str, str]:
    """
    Decode input bytes to text.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - UTF-8 input with a BOM is decoded with utf-8-sig so the BOM is dropped.
    - If decode fails, fall back to UTF-8, then to replacement characters.
    """
    match = from_bytes(raw).best()
    decode_used = match.encoding if match is not None else "utf-8"
    if raw.startswith(b"\xef\xbb\xbf") and decode_used.lower().replace("-", "_") in ("utf_8", "utf8"):
        decode_used = "utf-8-sig"

    try:
        return raw.decode(decode_used), decode_used
    except (UnicodeDecodeError, LookupError):
        logger.warning("Could not decode input as %s, retrying as utf-8", decode_used)
    try:
        return raw.decode("utf-8"), "utf-8"
    except UnicodeDecodeError:
        return raw.decode("utf-8", errors="replace"), "utf-8"


def _skip_whitespace(buffer: str, pos: int) -> int:
    while pos < len(buffer) and buffer[pos] in _WHITESPACE:
        pos += 1
    return pos


def _drain(decoder: json.JSONDecoder, buffer: str, final: bool) -> Tuple[List[Any], str]:
    values = []
    pos = _skip_whitespace(buffer, 0)
    while pos < len(buffer):
        try:
            value, end = decoder.raw_decode(buffer, pos)
        except json.JSONDecodeError as e:
            if final:
                raise StreamError(f"Invalid JSON at offset {e.pos}: {e.msg}") from e
            break
        # A number touching the end of the buffer may continue in the next chunk.
        if not final and end == len(buffer) and isinstance(value, (int, float)) and not isinstance(value, bool):
            break
        values.append(value)
        pos = _skip_whitespace(buffer, end)
    return values, buffer[pos:]


def iter_json_values(chunks: Iterable[str]) -> Iterator[Any]:
    """Yield every JSON value in the concatenated chunks, whatever separates them."""
    decoder = json.JSONDecoder()
    buffer = ""
    first = True
    for chunk in chunks:
        if first and chunk:
            chunk = chunk[1:] if chunk.startswith(_BOM) else chunk
            first = False
        buffer += chunk
        values, buffer = _drain(decoder, buffer, final=False)
        yield from values
    values, _ = _drain(decoder, buffer, final=True)
    yield from values


def read_chunks(stream: TextIO, size: int = READ_CHUNK_SIZE) -> Iterator[str]:
    return iter(lambda: stream.read(size), "")


def transform_values(
    values: Iterable[Any],
    config: TransformConfig,
    report: Optional[TransformReport] = None,
) -> Iterator[Any]:
    """
    Dispatch each value and yield the records to emit.

    Adapter exceptions are logged and counted, and the batch continues,
    unless the configuration is strict.
    """
    if report is None:
        report = TransformReport(transform=config.transform, summary=ReportSummary())
    summary = report.summary

    for ordinal, value in enumerate(values, start=1):
        summary.input_records += 1
        try:
            result = transform(value, config)
        except Exception as e:
            if config.strict:
                raise
            summary.failed += 1
            logger.error("Transform %r failed on record %d: %s", config.transform, ordinal, e)
            report.failures.append({"record": ordinal, "error": f"{type(e).__name__}: {e}"})
            continue

        if result is None or result == []:
            summary.dropped += 1
        elif isinstance(result, list):
            summary.output_records += len(result)
            yield from result
        else:
            summary.output_records += 1
            yield result


def serialize(record: Any) -> str:
    return json.dumps(record, ensure_ascii=False, separators=(",", ":"))


def write_records(records: Iterable[Any], out: TextIO) -> int:
    """Newline-separated records followed by one trailing newline."""
    count = 0
    for record in records:
        if count:
            out.write("\n")
        out.write(serialize(record))
        count += 1
    out.write("\n")
    return count


def process_stream(source: TextIO, out: TextIO, config: TransformConfig) -> TransformReport:
    report = TransformReport(transform=config.transform, summary=ReportSummary())
    values = iter_json_values(read_chunks(source))
    write_records(transform_values(values, config, report), out)
    logger.info(
        "Transform %r: %d in, %d out, %d dropped, %d failed",
        config.transform,
        report.summary.input_records,
        report.summary.output_records,
        report.summary.dropped,
        report.summary.failed,
    )
    return report


def transform_bytes(raw: bytes, config: TransformConfig) -> TransformResponse:
    """Whole-payload variant used by the HTTP surface."""
    text, encoding = decode_input(raw)
    report = TransformReport(transform=config.transform, summary=ReportSummary(), encoding=encoding)
    records = list(transform_values(iter_json_values([text]), config, report))
    return TransformResponse(records=records, report=report)
