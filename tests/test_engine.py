"""Tests for QR rendering and PNG export."""

import io

import pytest
from PIL import Image, ImageChops

from cardqr.contact import encode_vcard
from cardqr.engine import EmptyInputError, ExportIOError, QREngine


def _decode(img: Image.Image) -> str:
    zxingcpp = pytest.importorskip("zxingcpp")
    results = zxingcpp.read_barcodes(img.convert("L"))
    assert len(results) == 1
    return results[0].text


def test_render_is_512_opaque_gray(jane):
    bitmap = QREngine.render(encode_vcard(jane))
    assert (bitmap.width, bitmap.height) == (512, 512)
    assert len(bitmap.pixels) == 512 * 512 * 4

    r, g, b, a = bitmap.to_image().split()
    assert ImageChops.difference(r, g).getbbox() is None
    assert ImageChops.difference(g, b).getbbox() is None
    assert a.getextrema() == (255, 255)
    assert {value for _, value in r.getcolors()} <= {0, 255}


def test_render_corners_are_quiet_zone(jane):
    bitmap = QREngine.render(encode_vcard(jane))
    assert bitmap.pixel(0, 0) == (255, 255, 255, 255)
    assert bitmap.pixel(511, 511) == (255, 255, 255, 255)


def test_render_is_deterministic(full_record):
    text = encode_vcard(full_record)
    assert QREngine.render(text) == QREngine.render(text)


def test_rasterize_grayscale(jane):
    img = QREngine.rasterize(encode_vcard(jane))
    assert img.mode == "L"
    assert img.size == (512, 512)


def test_export_empty_raises_without_writing(tmp_path, monkeypatch):
    def fail(_text):
        raise AssertionError("rasterizer must not run")

    monkeypatch.setattr(QREngine, "rasterize", staticmethod(fail))
    target = tmp_path / "qrcode.png"
    with pytest.raises(EmptyInputError):
        QREngine.export("", target)
    assert not target.exists()


def test_export_writes_png(tmp_path, jane):
    target = tmp_path / "qrcode.png"
    written = QREngine.export(encode_vcard(jane), target)
    assert written == target
    with Image.open(target) as img:
        assert img.format == "PNG"
        assert img.size == (512, 512)


def test_export_overwrites_existing_file(tmp_path, jane):
    target = tmp_path / "qrcode.png"
    target.write_bytes(b"old contents")
    QREngine.export(encode_vcard(jane), target)
    assert target.read_bytes().startswith(b"\x89PNG")


def test_export_does_not_reuse_display_bitmap(tmp_path, jane, monkeypatch):
    calls = []
    original = QREngine.rasterize

    def counting(text):
        calls.append(text)
        return original(text)

    monkeypatch.setattr(QREngine, "rasterize", staticmethod(counting))
    text = encode_vcard(jane)
    QREngine.render(text)
    QREngine.export(text, tmp_path / "qrcode.png")
    assert calls == [text, text]


def test_export_missing_directory_raises_io_error(tmp_path, jane):
    target = tmp_path / "missing" / "qrcode.png"
    with pytest.raises(ExportIOError) as excinfo:
        QREngine.export(encode_vcard(jane), target)
    assert excinfo.value.path == target
    assert excinfo.value.reason
    assert not target.exists()


def test_export_to_directory_raises_io_error(tmp_path, jane):
    with pytest.raises(ExportIOError):
        QREngine.export(encode_vcard(jane), tmp_path)


def test_png_bytes(jane):
    data = QREngine.png_bytes(encode_vcard(jane))
    with Image.open(io.BytesIO(data)) as img:
        assert img.size == (512, 512)
    with pytest.raises(EmptyInputError):
        QREngine.png_bytes("")


def test_large_payload_logs_warning(caplog):
    with caplog.at_level("WARNING", logger="cardqr.engine"):
        QREngine.check_payload_size("x" * 2500)
    assert "2500 bytes" in caplog.text


def test_export_round_trip(tmp_path, jane):
    text = encode_vcard(jane)
    target = tmp_path / "qrcode.png"
    QREngine.export(text, target)
    with Image.open(target) as img:
        assert _decode(img) == text


def test_render_round_trip(full_record):
    text = encode_vcard(full_record)
    assert _decode(QREngine.render(text).to_image()) == text
