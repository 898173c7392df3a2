import pytest

import schema_pdf_renderer.barcode as barcode
import schema_pdf_renderer.cache as cache
import schema_pdf_renderer.config
import schema_pdf_renderer.render as render
import schema_pdf_renderer.schema as schema


PAGE_HEIGHT = 800.0
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


#============================================
def build_barcode_schema(symbology: str) -> schema.BarcodeSchema:
	"""
	Barcode schema of the given symbology in a 40 x 20 mm box.
	"""
	return schema.BarcodeSchema(
		symbology=symbology,
		box=schema.Box(x=5.0, y=5.0, width=40.0, height=20.0),
	)


#============================================
def test_gs1_check_digit() -> None:
	"""
	Known GS1 check digits.
	"""
	assert barcode.gs1_check_digit("490123456789") == "4"
	assert barcode.gs1_check_digit("1234567") == "0"
	assert barcode.gs1_check_digit("03600029145") == "2"
	assert barcode.gs1_check_digit("1234567890123") == "1"


#============================================
@pytest.mark.parametrize(
	("symbology", "value", "expected"),
	[
		("ean13", "490123456789", True),
		("ean13", "4901234567894", True),
		("ean13", "4901234567890", False),
		("ean13", "49012345678", False),
		("ean8", "12345670", True),
		("ean8", "12345671", False),
		("upca", "036000291452", True),
		("upca", "03600029145", True),
		("upca", "036000291453", False),
		("itf14", "12345678901231", True),
		("itf14", "1234567890123", True),
		("itf14", "12345678901230", False),
		("code39", "ABC-123 $/+%.", True),
		("code39", "abc", False),
		("code128", "Hello, world!", True),
		("code128", "日本", False),
		("nw7", "A12345B", True),
		("nw7", "a1-2.3d", True),
		("nw7", "12345", False),
		("qrcode", "x" * 499, True),
		("qrcode", "x" * 500, False),
		("japanpost", "1234567", False),
		("qrcode", "", False),
	],
)
def test_validate_barcode_input(symbology: str, value: str, expected: bool) -> None:
	"""
	Per-symbology input validation.
	"""
	assert barcode.validate_barcode_input(symbology, value) is expected


#============================================
def test_invalid_barcode_draws_nothing_and_caches_nothing(recording_page) -> None:
	"""
	Invalid barcode input is skipped with a diagnostic.
	"""
	image_cache = cache.ImageCache()
	diagnostics = render.Diagnostics()
	render.draw_schema(
		"not-a-number",
		build_barcode_schema("ean13"),
		recording_page,
		PAGE_HEIGHT,
		schema_pdf_renderer.config.RenderSettings(),
		image_cache,
		diagnostics,
		name="code",
	)
	assert recording_page.calls == []
	assert recording_page.embed_count == 0
	assert len(image_cache) == 0
	assert len(diagnostics.messages) == 1
	assert "code" in diagnostics.messages[0]


#============================================
def test_barcode_generated_once_per_input(recording_page, monkeypatch) -> None:
	"""
	Repeated barcode input is generated and embedded once.
	"""
	generated: list[tuple[str, str]] = []

	def fake_create_barcode(symbology: str, value: str, style: schema.BarcodeSchema) -> bytes:
		generated.append((symbology, value))
		return PNG_SIGNATURE

	monkeypatch.setattr(barcode, "create_barcode", fake_create_barcode)
	image_cache = cache.ImageCache()
	barcode_schema = build_barcode_schema("code128")
	for _ in range(3):
		render.draw_barcode_schema("ABC123", barcode_schema, recording_page, PAGE_HEIGHT, image_cache)
	assert generated == [("code128", "ABC123")]
	assert recording_page.embed_count == 1
	assert recording_page.kinds() == ["image", "image", "image"]
	assert "code128ABC123" in image_cache


#============================================
@pytest.mark.parametrize(
	("symbology", "value"),
	[
		("qrcode", "https://example.com/item/42"),
		("code128", "ABC-123"),
		("ean13", "490123456789"),
		("code39", "HELLO 39"),
	],
)
def test_create_barcode_returns_png(symbology: str, value: str) -> None:
	"""
	Barcode generation produces PNG bytes.
	"""
	data = barcode.create_barcode(symbology, value, build_barcode_schema(symbology))
	assert data.startswith(PNG_SIGNATURE)
	assert len(data) > len(PNG_SIGNATURE)
