"""Tests for the spouse-client command line and the print_db script."""

import asyncio
import json
from pathlib import Path

import httpx

import print_db
from client import cli
from client.api_client import SpouseApiClient
from models.spouse_record import SpouseRecord


def _patch_api(monkeypatch, records):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            return httpx.Response(201, json={"id": 1, **json.loads(request.content)})
        return httpx.Response(200, json=records)

    def factory(base_url):
        transport = httpx.MockTransport(handler)
        return SpouseApiClient(client=httpx.AsyncClient(transport=transport, base_url=base_url))

    monkeypatch.setattr(cli, "SpouseApiClient", factory)


def test_list_prints_one_line_per_spouse(monkeypatch, capsys):
    _patch_api(monkeypatch, [{"id": 1, "userName": "Alice", "spouseName": "Dumbledore", "imageData": "d"}])
    assert cli.main(["list"]) == 0
    assert capsys.readouterr().out.strip() == "1\tDumbledore\tadded by Alice"


def test_add_submits_encoded_image(monkeypatch, capsys, tmp_path: Path, png_bytes):
    image = tmp_path / "spouse.png"
    image.write_bytes(png_bytes)
    _patch_api(monkeypatch, [])
    assert cli.main(["add", "--user", "Alice", "--spouse", "Dumbledore", "--image", str(image)]) == 0
    assert "Success!" in capsys.readouterr().out


def test_add_reports_validation_errors(monkeypatch, capsys, tmp_path: Path, png_bytes):
    image = tmp_path / "spouse.png"
    image.write_bytes(png_bytes)
    _patch_api(monkeypatch, [])
    assert cli.main(["add", "--user", "A", "--spouse", "Dumbledore", "--image", str(image)]) == 1
    assert "userName: Username must be at least 2 characters" in capsys.readouterr().err


def test_gallery_writes_html(monkeypatch, tmp_path: Path):
    _patch_api(monkeypatch, [{"id": 1, "userName": "Alice", "spouseName": "Dumbledore", "imageData": "d"}])
    out = tmp_path / "gallery.html"
    assert cli.main(["gallery", "--out", str(out)]) == 0
    assert "Added by Alice" in out.read_text(encoding="utf-8")


def test_print_db_summarises_image_data():
    line = print_db.format_spouse(SpouseRecord(3, "Alice", "Dumbledore", "data:image/png;base64," + "A" * 10))
    assert line == "id=3: user_name='Alice'; spouse_name='Dumbledore'; image_data=data:image/png;base64 (32 chars)"


def test_print_db_main_lists_rows(monkeypatch, capsys, tmp_path: Path):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'app.db'}")
    asyncio.run(print_db.main())
    assert capsys.readouterr().out.strip() == "Table: spouses (0 rows)"


def test_add_with_missing_image_reports_inline_error(monkeypatch, capsys, tmp_path: Path):
    _patch_api(monkeypatch, [])
    missing = tmp_path / "missing.png"
    assert cli.main(["add", "--user", "Alice", "--spouse", "D", "--image", str(missing)]) == 1
    captured = capsys.readouterr()
    assert "imageData: Could not read image file" in captured.err
    assert "Success!" not in captured.out


def test_add_with_empty_image_reports_inline_error(monkeypatch, capsys, tmp_path: Path):
    empty = tmp_path / "empty.png"
    empty.write_bytes(b"")
    _patch_api(monkeypatch, [])
    assert cli.main(["add", "--user", "Alice", "--spouse", "D", "--image", str(empty)]) == 1
    assert "imageData: Image file is empty." in capsys.readouterr().err
