"""
Schema variants and their style parameters.
"""

# Standard Library
import dataclasses

# local repo modules
import schema_pdf_renderer as spr
import schema_pdf_renderer.config


DEFAULT_FONT_SIZE = spr.config.DEFAULT_FONT_SIZE
DEFAULT_CHARACTER_SPACING = spr.config.DEFAULT_CHARACTER_SPACING
DEFAULT_LINE_HEIGHT = spr.config.DEFAULT_LINE_HEIGHT
DEFAULT_ALIGNMENT = spr.config.DEFAULT_ALIGNMENT
DEFAULT_FONT_COLOR = spr.config.DEFAULT_FONT_COLOR
DEFAULT_BARCODE_COLOR = spr.config.DEFAULT_BARCODE_COLOR
DEFAULT_BARCODE_BACKGROUND = spr.config.DEFAULT_BARCODE_BACKGROUND

BARCODE_SYMBOLOGIES = (
	"qrcode",
	"ean13",
	"ean8",
	"code39",
	"code128",
	"nw7",
	"itf14",
	"upca",
)


@dataclasses.dataclass(frozen=True)
class Box:
	x: float
	y: float
	width: float
	height: float

	def to_points(self) -> "Box":
		"""
		Return the same box with every field converted from mm to points.
		"""
		return Box(
			x=spr.config.mm_to_points(self.x),
			y=spr.config.mm_to_points(self.y),
			width=spr.config.mm_to_points(self.width),
			height=spr.config.mm_to_points(self.height),
		)


@dataclasses.dataclass(frozen=True)
class StyleParams:
	font_size: float = DEFAULT_FONT_SIZE
	character_spacing: float = DEFAULT_CHARACTER_SPACING
	line_height: float = DEFAULT_LINE_HEIGHT
	alignment: str = DEFAULT_ALIGNMENT
	color: str = DEFAULT_FONT_COLOR
	rotation: float = 0.0


@dataclasses.dataclass
class TextSchema:
	box: Box
	font_name: str | None = None
	font_size: float | None = None
	character_spacing: float | None = None
	line_height: float | None = None
	alignment: str | None = None
	font_color: str | None = None
	background_color: str | None = None
	rotation: float = 0.0

	@property
	def kind(self) -> str:
		return "text"


@dataclasses.dataclass
class ImageSchema:
	box: Box
	rotation: float = 0.0

	@property
	def kind(self) -> str:
		return "image"


@dataclasses.dataclass
class BarcodeSchema:
	symbology: str
	box: Box
	rotation: float = 0.0
	bar_color: str = DEFAULT_BARCODE_COLOR
	background_color: str = DEFAULT_BARCODE_BACKGROUND
	include_text: bool = False

	@property
	def kind(self) -> str:
		return self.symbology


@dataclasses.dataclass
class UnsupportedSchema:
	kind: str
	box: Box


Schema = TextSchema | ImageSchema | BarcodeSchema | UnsupportedSchema


#============================================
def get_style_params(schema: TextSchema) -> StyleParams:
	"""
	Resolve a text schema's style fields, filling in defaults.

	Args:
		schema: Text schema.

	Returns:
		StyleParams for the schema.
	"""
	font_size = schema.font_size
	if font_size is None:
		font_size = DEFAULT_FONT_SIZE
	character_spacing = schema.character_spacing
	if character_spacing is None:
		character_spacing = DEFAULT_CHARACTER_SPACING
	line_height = schema.line_height
	if line_height is None:
		line_height = DEFAULT_LINE_HEIGHT
	return StyleParams(
		font_size=font_size,
		character_spacing=character_spacing,
		line_height=line_height,
		alignment=schema.alignment or DEFAULT_ALIGNMENT,
		color=schema.font_color or DEFAULT_FONT_COLOR,
		rotation=schema.rotation,
	)


#============================================
def parse_box(data: dict) -> Box:
	"""
	Read position and size fields from a schema dictionary.

	Args:
		data: Schema dictionary with "position", "width" and "height".

	Returns:
		Box in millimeters.
	"""
	position = data.get("position") or {}
	return Box(
		x=float(position.get("x", 0.0)),
		y=float(position.get("y", 0.0)),
		width=float(data.get("width", 0.0)),
		height=float(data.get("height", 0.0)),
	)


def _optional_float(value) -> float | None:
	if value is None:
		return None
	return float(value)


#============================================
def schema_from_dict(data: dict) -> Schema:
	"""
	Build a schema object from a template dictionary.

	The dictionary is assumed to be valid; only defaults and numeric
	coercion are applied.

	Args:
		data: Schema dictionary using the template JSON field names.

	Returns:
		Schema variant matching the "type" field.
	"""
	kind = str(data.get("type", ""))
	box = parse_box(data)
	rotation = float(data.get("rotate", 0.0) or 0.0)
	if kind == "text":
		return TextSchema(
			box=box,
			font_name=data.get("fontName"),
			font_size=_optional_float(data.get("fontSize")),
			character_spacing=_optional_float(data.get("characterSpacing")),
			line_height=_optional_float(data.get("lineHeight")),
			alignment=data.get("alignment"),
			font_color=data.get("fontColor"),
			background_color=data.get("backgroundColor"),
			rotation=rotation,
		)
	if kind == "image":
		return ImageSchema(box=box, rotation=rotation)
	if kind in BARCODE_SYMBOLOGIES:
		return BarcodeSchema(
			symbology=kind,
			box=box,
			rotation=rotation,
			bar_color=data.get("barColor") or DEFAULT_BARCODE_COLOR,
			background_color=data.get("backgroundColor") or DEFAULT_BARCODE_BACKGROUND,
			include_text=bool(data.get("includetext", False)),
		)
	return UnsupportedSchema(kind=kind, box=box)
