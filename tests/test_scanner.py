import json
import shlex
import sys

import pytest

from locsync.catalog_pkg import PlainComment, Structured
from locsync.errors import ScanError
from locsync.scanner import descriptors_from_json, scan


def write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


def test_reads_descriptor_files_one_batch_per_file(make_config, tmp_path):
    write_json(tmp_path / "src" / "a.json", [
        {"id": "A", "defaultMessage": "Hello", "description": "greeting"},
    ])
    write_json(tmp_path / "src" / "nested" / "b.json", {
        "B": {"defaultMessage": "Bye", "description": {"comment": "farewell", "skipUpload": True}},
    })
    config = make_config(file_pattern=str(tmp_path / "src" / "**" / "*.json"))

    batches = list(scan(config))

    assert len(batches) == 2
    (a,), (b,) = batches
    assert (a.id, a.default_message, a.description) == ("A", "Hello", PlainComment("greeting"))
    assert b.description == Structured(comment="farewell", skip_upload=True)
    assert b.skip_upload


def test_scan_is_lazy(make_config, tmp_path):
    write_json(tmp_path / "ok.json", [])
    (tmp_path / "zz-broken.json").write_text("{", encoding="utf-8")
    config = make_config(file_pattern=str(tmp_path / "*.json"))

    batches = scan(config)
    assert next(batches) == []
    with pytest.raises(ScanError) as exc:
        next(batches)
    assert "zz-broken.json" in exc.value.path


@pytest.mark.parametrize("data", ["text", [1], {"A": "not an object"}, [{"defaultMessage": "no id"}]])
def test_rejects_bad_descriptor_shapes(data):
    with pytest.raises(ScanError):
        descriptors_from_json(data, "x.json")


def _extractor(tmp_path, body):
    script = tmp_path / "extract.py"
    script.write_text(body, encoding="utf-8")
    return f"{shlex.quote(sys.executable)} {shlex.quote(str(script))} --in {{file}}"


def test_runs_each_extractor_per_file(make_config, tmp_path):
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.js").write_text("// source", encoding="utf-8")
    template = _extractor(tmp_path, (
        "import json, os, sys\n"
        "path = sys.argv[sys.argv.index('--in') + 1]\n"
        "print(json.dumps([{'id': os.path.basename(path), 'defaultMessage': 'x'}]))\n"
    ))
    config = make_config(
        file_pattern=str(tmp_path / "src" / "*.js"),
        extractors=(template, template),
    )

    batches = list(scan(config))

    assert [[m.id for m in batch] for batch in batches] == [["app.js"], ["app.js"]]


def test_failing_extractor_raises_scan_error(make_config, tmp_path):
    (tmp_path / "app.js").write_text("", encoding="utf-8")
    template = _extractor(tmp_path, "import sys\nsys.stderr.write('boom')\nsys.exit(3)\n")
    config = make_config(file_pattern=str(tmp_path / "*.js"), extractors=(template,))

    with pytest.raises(ScanError) as exc:
        list(scan(config))

    assert "exited 3" in str(exc.value)
    assert "boom" in str(exc.value)
