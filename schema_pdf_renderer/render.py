"""
Schema drawing routines and the per-schema dispatcher.
"""

# Standard Library
import base64
import binascii
import dataclasses
import logging
import typing

# local repo modules
import schema_pdf_renderer as spr
import schema_pdf_renderer.barcode
import schema_pdf_renderer.cache
import schema_pdf_renderer.config
import schema_pdf_renderer.errors
import schema_pdf_renderer.layout
import schema_pdf_renderer.metrics
import schema_pdf_renderer.page
import schema_pdf_renderer.schema


logger = logging.getLogger(__name__)

TextSchema = spr.schema.TextSchema
ImageSchema = spr.schema.ImageSchema
BarcodeSchema = spr.schema.BarcodeSchema
Schema = spr.schema.Schema
ReportlabPage = spr.page.ReportlabPage
ImageCache = spr.cache.ImageCache
RenderSettings = spr.config.RenderSettings
SkippableInputError = spr.errors.SkippableInputError
ResourceEmbedError = spr.errors.ResourceEmbedError


@dataclasses.dataclass
class Diagnostics:
	messages: list[str] = dataclasses.field(default_factory=list)

	def report(self, message: str) -> None:
		self.messages.append(message)
		logger.warning(message)


#============================================
def decode_image_input(value: str) -> bytes:
	"""
	Decode an image input given as a data URI or bare base64.

	Args:
		value: "data:image/png;base64,..." or base64 text.

	Returns:
		Raw image bytes.
	"""
	payload = value
	if value.startswith("data:"):
		_header, _, payload = value.partition(",")
	try:
		return base64.b64decode(payload, validate=True)
	except (binascii.Error, ValueError) as error:
		raise ResourceEmbedError("Image input is not valid base64") from error


#============================================
def draw_background_color(
	schema: TextSchema,
	page: ReportlabPage,
	page_height: float,
) -> None:
	"""
	Fill a text schema's box with its background color.

	Args:
		schema: Text schema.
		page: Page to draw on.
		page_height: Page height in points.
	"""
	if not schema.background_color:
		return
	box = schema.box.to_points()
	alignment = schema.alignment or spr.config.DEFAULT_ALIGNMENT
	page.draw_rectangle(
		x=spr.layout.map_x(box.x, alignment, box.width, box.width),
		y=spr.layout.map_y(box.y, page_height, box.height),
		width=box.width,
		height=box.height,
		color=schema.background_color,
		rotation=schema.rotation,
	)


#============================================
def draw_text_schema(
	value: str,
	schema: TextSchema,
	page: ReportlabPage,
	page_height: float,
	settings: RenderSettings,
) -> int:
	"""
	Wrap and draw a text run inside a text schema's box.

	Args:
		value: Text run, may contain hard line breaks.
		schema: Text schema.
		page: Page to draw on.
		page_height: Page height in points.
		settings: Render settings (fonts, split threshold).

	Returns:
		Number of physical lines laid out.
	"""
	box = schema.box.to_points()
	style = spr.schema.get_style_params(schema)
	font_name = spr.metrics.resolve_font_name(schema.font_name, settings)
	metrics = spr.metrics.FontMetrics(font_name)

	draw_background_color(schema, page, page_height)

	is_overflow = spr.layout.build_overflow_check(
		metrics,
		box.width,
		style.font_size,
		style.character_spacing,
		settings.split_threshold,
	)
	flow = spr.layout.split_text_run(value, is_overflow)
	for line in flow.lines:
		if not line.text:
			continue
		line_width = spr.metrics.text_width(
			metrics,
			line.text,
			style.font_size,
			style.character_spacing,
		)
		page.draw_text(
			line.text,
			x=spr.layout.map_x(box.x, style.alignment, box.width, line_width),
			y=spr.layout.baseline_y(
				box.y,
				page_height,
				style.font_size,
				style.line_height,
				line.index,
			),
			size=style.font_size,
			color=style.color,
			rotation=style.rotation,
			line_height=style.line_height * style.font_size,
			font_name=font_name,
			character_spacing=style.character_spacing,
		)
	return flow.line_count


#============================================
def _draw_cached_image(
	key: str,
	load_bytes: typing.Callable[[], bytes],
	box: spr.schema.Box,
	rotation: float,
	page: ReportlabPage,
	page_height: float,
	cache: ImageCache,
) -> None:
	handle = cache.get(key)
	if handle is None:
		handle = page.embed_image(load_bytes())
		cache.put(key, handle)
	box = box.to_points()
	page.draw_image(
		handle,
		x=spr.layout.map_x(box.x, "left", box.width, box.width),
		y=spr.layout.map_y(box.y, page_height, box.height),
		width=box.width,
		height=box.height,
		rotation=rotation,
	)


#============================================
def draw_image_schema(
	value: str,
	schema: ImageSchema,
	page: ReportlabPage,
	page_height: float,
	cache: ImageCache,
) -> None:
	"""
	Draw an image input, embedding it once per session.

	Args:
		value: Image as a data URI or base64 text.
		schema: Image schema.
		page: Page to draw on.
		page_height: Page height in points.
		cache: Session image cache.
	"""
	key = spr.cache.cache_key(schema.kind, value)
	_draw_cached_image(
		key,
		lambda: decode_image_input(value),
		schema.box,
		schema.rotation,
		page,
		page_height,
		cache,
	)


#============================================
def draw_barcode_schema(
	value: str,
	schema: BarcodeSchema,
	page: ReportlabPage,
	page_height: float,
	cache: ImageCache,
) -> None:
	"""
	Draw a barcode, generating and embedding it once per session.

	Args:
		value: Barcode payload.
		schema: Barcode schema.
		page: Page to draw on.
		page_height: Page height in points.
		cache: Session image cache.
	"""
	if not spr.barcode.validate_barcode_input(schema.symbology, value):
		raise SkippableInputError(f"Invalid {schema.symbology} input: {value!r}")
	key = spr.cache.cache_key(schema.kind, value)
	_draw_cached_image(
		key,
		lambda: spr.barcode.create_barcode(schema.symbology, value, schema),
		schema.box,
		schema.rotation,
		page,
		page_height,
		cache,
	)


#============================================
def draw_schema(
	value: str | int | float | None,
	schema: Schema | None,
	page: ReportlabPage,
	page_height: float,
	settings: RenderSettings,
	cache: ImageCache,
	diagnostics: Diagnostics,
	name: str = "",
) -> None:
	"""
	Draw one schema's input, routing on the schema variant.

	Skippable problems are recorded in diagnostics and nothing is drawn;
	embedding and metrics failures propagate.

	Args:
		value: Input value for the schema; numbers are drawn as their text.
		schema: Schema to draw.
		page: Page to draw on.
		page_height: Page height in points.
		settings: Render settings.
		cache: Session image cache.
		diagnostics: Collector for skipped schemas.
		name: Schema name used in diagnostics.
	"""
	label = name or "schema"
	try:
		if isinstance(value, (int, float)):
			value = str(value)
		if value is not None and not isinstance(value, str):
			raise SkippableInputError(f"Input for {label} is a {type(value).__name__}, not text")
		if not value or schema is None:
			raise SkippableInputError(f"No input for {label}")
		match schema:
			case TextSchema():
				draw_text_schema(value, schema, page, page_height, settings)
			case ImageSchema():
				draw_image_schema(value, schema, page, page_height, cache)
			case BarcodeSchema():
				draw_barcode_schema(value, schema, page, page_height, cache)
			case _:
				kind = getattr(schema, "kind", type(schema).__name__)
				raise SkippableInputError(f"Unknown schema kind {kind!r}")
	except SkippableInputError as error:
		diagnostics.report(f"Skipped {label}: {error}")
