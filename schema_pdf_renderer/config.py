"""
Shared configuration and constants.
"""

import dataclasses


MM_TO_PT = 2.8346
PT_TO_MM = 0.352778

DEFAULT_FONT_NAME = "Helvetica"
DEFAULT_FONT_SIZE = 13.0
DEFAULT_CHARACTER_SPACING = 0.0
DEFAULT_LINE_HEIGHT = 1.0
DEFAULT_ALIGNMENT = "left"
DEFAULT_FONT_COLOR = "#000000"
DEFAULT_BARCODE_COLOR = "#000000"
DEFAULT_BARCODE_BACKGROUND = "#ffffff"

# Slack in points before a candidate line counts as overflowing. Tuned against
# reportlab's AFM widths; re-tune when swapping the metrics backend.
DEFAULT_SPLIT_THRESHOLD = 3.0

ALIGNMENTS = ("left", "center", "right")

# A4 portrait in millimeters.
DEFAULT_PAGE_WIDTH_MM = 210.0
DEFAULT_PAGE_HEIGHT_MM = 297.0

QR_MAX_INPUT_LENGTH = 500
BARCODE_RASTER_DPI = 300
PROGRESS_BAR_WIDTH = 20
PROGRESS_UPDATE_EVERY = 10


@dataclasses.dataclass
class RenderSettings:
	fonts: dict[str, str] = dataclasses.field(default_factory=dict)
	fallback_font_name: str = DEFAULT_FONT_NAME
	split_threshold: float = DEFAULT_SPLIT_THRESHOLD


@dataclasses.dataclass
class BlankPdf:
	width: float = DEFAULT_PAGE_WIDTH_MM
	height: float = DEFAULT_PAGE_HEIGHT_MM


@dataclasses.dataclass
class GenerateResult:
	pdf_bytes: bytes
	pages: int
	inputs: int
	diagnostics: list[str]


#============================================
def mm_to_points(value: float) -> float:
	"""
	Convert millimeters to points.

	Args:
		value: Millimeter value.

	Returns:
		Points value.
	"""
	return value * MM_TO_PT


#============================================
def points_to_mm(value: float) -> float:
	"""
	Convert points to millimeters.

	Args:
		value: Points value.

	Returns:
		Millimeter value.
	"""
	return value * PT_TO_MM
