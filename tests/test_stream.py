import io
import json

import pytest

from procnorm import cli, stream
from procnorm.config import TransformConfig
from procnorm.stream import StreamError, iter_json_values, process_stream, write_records


def test_iter_json_values_is_newline_agnostic():
    chunks = ['{"a":1}{"b":', '2}\n[1,2]  3', "4\n\n", '{"c":\n"ñ"}']
    assert list(iter_json_values(chunks)) == [{"a": 1}, {"b": 2}, [1, 2], 34, {"c": "ñ"}]


def test_iter_json_values_rejects_malformed_input():
    with pytest.raises(StreamError):
        list(iter_json_values(['{"a": 1} {"b":']))


def test_write_records_framing():
    out = io.StringIO()
    assert write_records([{"a": 1}, {"b": "é"}], out) == 2
    assert out.getvalue() == '{"a":1}\n{"b":"é"}\n'

    out = io.StringIO()
    write_records([], out)
    assert out.getvalue() == "\n"


def _opentender_release():
    return {
        "ocid": "ocds-ot-9",
        "parties": [{"id": "HU_B", "name": "Budapest", "roles": ["buyer"]}],
        "awards": [
            {"id": "1", "suppliers": [{"id": "AT_1", "name": "Strabag AG"}]},
            {"id": "2", "suppliers": [{"id": "AT_2", "name": "Porr AG"}]},
        ],
    }


def test_one_input_line_fans_out_to_many_output_lines():
    source = io.StringIO(json.dumps(_opentender_release()) + "\n")
    out = io.StringIO()
    report = process_stream(source, out, TransformConfig(transform="opentender-contracts"))

    lines = out.getvalue().rstrip("\n").split("\n")
    assert len(lines) == 2
    assert [json.loads(line)["id"] for line in lines] == ["HU_ocds-ot-9-1", "HU_ocds-ot-9-2"]
    assert report.summary.input_records == 1
    assert report.summary.output_records == 2


def test_dropped_records_emit_nothing():
    source = io.StringIO('{"id": 1}\n{"id": 2, "periodoreporta": "2021"}\n')
    out = io.StringIO()
    report = process_stream(source, out, TransformConfig(transform="pnt"))

    assert out.getvalue().count("\n") == 1
    assert report.summary.dropped == 1
    assert report.summary.output_records == 1


def test_failing_record_is_reported_and_batch_continues(monkeypatch):
    def flaky(record, config):
        if record.get("boom"):
            raise KeyError("informacion")
        return record

    monkeypatch.setattr(stream, "transform", flaky)
    source = io.StringIO('{"n": 1}\n{"boom": true}\n{"n": 3}\n')
    out = io.StringIO()
    report = process_stream(source, out, TransformConfig(transform="sipot"))

    assert out.getvalue() == '{"n":1}\n{"n":3}\n'
    assert report.summary.failed == 1
    assert report.failures[0]["record"] == 2


def test_strict_mode_fails_the_batch(monkeypatch):
    def broken(record, config):
        raise KeyError("informacion")

    monkeypatch.setattr(stream, "transform", broken)
    with pytest.raises(KeyError):
        process_stream(io.StringIO("{}"), io.StringIO(), TransformConfig(transform="sipot", strict=True))


def test_cli_runs_transform(monkeypatch):
    out = io.StringIO()
    monkeypatch.setattr("sys.stdin", io.StringIO('{"informacion": [[1, "Monto", "$2.50"]]}'))
    monkeypatch.setattr("sys.stdout", out)

    assert cli.main(["-t", "sipot", "-d", "folder=X|anio=2021"]) == 0
    assert json.loads(out.getvalue()) == {"monto": 2.5, "folder": "X", "anio": 2021}


def test_cli_rejects_identical_delimiters(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("{}"))
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["-t", "pnt", "--field-delimiter", ";", "--value-delimiter", ";"])
    assert excinfo.value.code == 2


def test_leading_byte_order_mark_is_ignored():
    out = io.StringIO()
    report = process_stream(io.StringIO('\ufeff{"a":1}\n{"b":2}'), out, TransformConfig(transform="unknown"))

    assert out.getvalue() == '{"a":1}\n{"b":2}\n'
    assert report.summary.output_records == 2
    assert list(iter_json_values(["", "\ufeff[1]"])) == [[1]]
