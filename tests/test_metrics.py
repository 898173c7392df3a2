import pytest

import schema_pdf_renderer.config
import schema_pdf_renderer.errors
import schema_pdf_renderer.metrics as metrics


# Helvetica AFM advance widths (no kerning): "Hello, world!" sums to 5501
# units, 66.012 pt at 12 pt.
HELLO_WIDTH_MM = 23.287581336
HELLO_SPACED_WIDTH_MM = 27.520917336


#============================================
def test_helvetica_width_regression() -> None:
	"""
	Pinned width for the reference string and font.
	"""
	width = metrics.calculate_text_width_in_mm("Hello, world!", 12, "Helvetica", 0)
	assert width == pytest.approx(HELLO_WIDTH_MM, abs=1e-9)


#============================================
def test_character_spacing_adds_gaps_between_glyphs() -> None:
	"""
	Spacing of 1 pt adds (length - 1) points.
	"""
	width = metrics.calculate_text_width_in_mm("Hello, world!", 12, "Helvetica", 1)
	assert width == pytest.approx(HELLO_SPACED_WIDTH_MM, abs=1e-9)
	gap = schema_pdf_renderer.config.points_to_mm(12.0)
	assert width - HELLO_WIDTH_MM == pytest.approx(gap, abs=1e-9)


#============================================
def test_empty_string_has_zero_width() -> None:
	"""
	Empty text measures zero even with character spacing.
	"""
	assert metrics.calculate_text_width_in_mm("", 12, "Helvetica", 0) == 0
	assert metrics.calculate_text_width_in_mm("", 12, "Helvetica", 5) == 0


#============================================
def test_measurement_is_deterministic() -> None:
	"""
	Identical text, size and font measure identically.
	"""
	provider = metrics.FontMetrics("Courier")
	first = provider.measure_width("deterministic", 9.5)
	second = metrics.FontMetrics("Courier").measure_width("deterministic", 9.5)
	assert first == second
	# Courier glyphs are 600 units wide
	assert first == pytest.approx(len("deterministic") * 600 * 9.5 / 1000.0)


#============================================
def test_unknown_font_raises_metrics_error() -> None:
	"""
	Missing fonts fail loudly instead of measuring zero.
	"""
	with pytest.raises(schema_pdf_renderer.errors.MetricsError):
		metrics.FontMetrics("NoSuchFont-Regular")


#============================================
def test_resolve_font_name_uses_table_and_fallback() -> None:
	"""
	Schema fonts map through the settings table; missing names fall back.
	"""
	settings = schema_pdf_renderer.config.RenderSettings(
		fonts={"Body": "Times-Roman"},
		fallback_font_name="Courier",
	)
	assert metrics.resolve_font_name("Body", settings) == "Times-Roman"
	assert metrics.resolve_font_name(None, settings) == "Courier"
	assert metrics.resolve_font_name("Helvetica-Bold", settings) == "Helvetica-Bold"


#============================================
def test_register_missing_ttf_raises_embed_error(tmp_path) -> None:
	"""
	A font file that cannot be read is an embedding failure.
	"""
	with pytest.raises(schema_pdf_renderer.errors.ResourceEmbedError):
		metrics.register_ttf_font("Missing", str(tmp_path / "missing.ttf"))


#============================================
def test_unmapped_glyph_raises_metrics_error() -> None:
	"""
	Characters outside a standard font's encoding are not measured as notdef.
	"""
	provider = metrics.FontMetrics("Helvetica")
	assert provider.unmapped_characters("ab日本日") == ["日", "本"]
	with pytest.raises(schema_pdf_renderer.errors.MetricsError):
		provider.measure_width("日本", 12)
	with pytest.raises(schema_pdf_renderer.errors.MetricsError):
		metrics.calculate_text_width_in_mm("price 日", 12, "Helvetica", 0)


#============================================
def test_encodable_accents_still_measure() -> None:
	"""
	Latin-1 and WinAnsi characters map to real glyphs.
	"""
	provider = metrics.FontMetrics("Helvetica")
	assert provider.unmapped_characters("café ñ") == []
	assert provider.measure_width("café", 12) > 0
