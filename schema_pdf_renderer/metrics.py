"""
Font metrics backed by ReportLab.
"""

# PIP3 modules
import reportlab.pdfbase.pdfmetrics
import reportlab.pdfbase.ttfonts

# local repo modules
import schema_pdf_renderer as spr
import schema_pdf_renderer.config
import schema_pdf_renderer.errors


MetricsError = spr.errors.MetricsError
ResourceEmbedError = spr.errors.ResourceEmbedError


class FontMetrics:
	"""
	Measure string advance widths for one registered ReportLab font.
	"""

	def __init__(self, font_name: str) -> None:
		try:
			self.font = reportlab.pdfbase.pdfmetrics.getFont(font_name)
		except KeyError as error:
			raise MetricsError(f"Font is not registered: {font_name}") from error
		self.font_name = font_name
		self._glyph_cache: dict[str, bool] = {}

	def unmapped_characters(self, text: str) -> list[str]:
		"""
		List the characters of a string the font cannot encode.

		ReportLab measures such characters with a substitute notdef glyph
		instead of failing, so they are looked up explicitly.

		Args:
			text: String to check.

		Returns:
			Distinct unmapped characters in order of first appearance.
		"""
		return [char for char in dict.fromkeys(text) if not self.has_glyph(char)]

	def has_glyph(self, char: str) -> bool:
		known = self._glyph_cache.get(char)
		if known is not None:
			return known
		if isinstance(self.font, reportlab.pdfbase.ttfonts.TTFont):
			known = ord(char) in self.font.face.charToGlyph
		else:
			segments = reportlab.pdfbase.pdfmetrics.unicode2T1(char, [self.font])
			known = all(
				getattr(segment_font, "fontName", segment_font) == self.font.fontName
				for segment_font, _encoded in segments
			)
		self._glyph_cache[char] = known
		return known

	def measure_width(self, text: str, font_size: float) -> float:
		"""
		Measure the advance width of a string.

		Args:
			text: String to measure.
			font_size: Font size in points.

		Returns:
			Width in points.
		"""
		missing = self.unmapped_characters(text)
		if missing:
			raise MetricsError(
				f"{self.font_name} has no glyph for {''.join(missing)!r}"
			)
		try:
			return self.font.stringWidth(text, font_size)
		except (KeyError, UnicodeError, ValueError) as error:
			raise MetricsError(
				f"Cannot measure {text!r} with {self.font_name} at {font_size}"
			) from error


#============================================
def text_width(
	metrics: FontMetrics,
	text: str,
	font_size: float,
	character_spacing: float,
) -> float:
	"""
	Width of a string including character spacing between glyphs.

	Args:
		metrics: Metrics provider for the font.
		text: String to measure.
		font_size: Font size in points.
		character_spacing: Extra space between characters in points.

	Returns:
		Width in points, 0.0 for an empty string.
	"""
	if not text:
		return 0.0
	width = metrics.measure_width(text, font_size)
	return width + (len(text) - 1) * character_spacing


#============================================
def calculate_text_width_in_mm(
	text: str,
	font_size: float,
	font_name: str,
	character_spacing: float,
) -> float:
	"""
	Measure a string in millimeters.

	Args:
		text: String to measure.
		font_size: Font size in points.
		font_name: Registered ReportLab font name.
		character_spacing: Extra space between characters in points.

	Returns:
		Width in millimeters.
	"""
	metrics = FontMetrics(font_name)
	width = text_width(metrics, text, font_size, character_spacing)
	return spr.config.points_to_mm(width)


#============================================
def register_ttf_font(font_name: str, path: str) -> str:
	"""
	Register a TrueType font file with ReportLab.

	Args:
		font_name: Name to register the font under.
		path: Path to the .ttf file.

	Returns:
		The registered font name.
	"""
	try:
		font = reportlab.pdfbase.ttfonts.TTFont(font_name, path)
	except (OSError, reportlab.pdfbase.ttfonts.TTFError) as error:
		raise ResourceEmbedError(f"Cannot load font {font_name} from {path}") from error
	reportlab.pdfbase.pdfmetrics.registerFont(font)
	return font_name


#============================================
def resolve_font_name(
	schema_font_name: str | None,
	settings: spr.config.RenderSettings,
) -> str:
	"""
	Map a schema font name onto a registered ReportLab font name.

	Args:
		schema_font_name: Font name declared on the schema, if any.
		settings: Render settings with the font table and fallback.

	Returns:
		ReportLab font name.
	"""
	name = schema_font_name or settings.fallback_font_name
	return settings.fonts.get(name, name)
