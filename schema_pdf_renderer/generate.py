"""
Document generation: render every input record onto the template pages.
"""

# Standard Library
import base64
import dataclasses
import hashlib
import io
import json
import pathlib
import typing

# PIP3 modules
import pypdf
import pypdf.errors
import pypdf.generic
import reportlab.pdfgen.canvas

# local repo modules
import schema_pdf_renderer as spr
import schema_pdf_renderer.cache
import schema_pdf_renderer.config
import schema_pdf_renderer.errors
import schema_pdf_renderer.page
import schema_pdf_renderer.render
import schema_pdf_renderer.schema


BlankPdf = spr.config.BlankPdf
GenerateResult = spr.config.GenerateResult
RenderSettings = spr.config.RenderSettings
Schema = spr.schema.Schema
ImageCache = spr.cache.ImageCache
Diagnostics = spr.render.Diagnostics
ResourceEmbedError = spr.errors.ResourceEmbedError
ProgressCallback = typing.Callable[[int, int], None]

PDF_DATA_URI_PREFIX = "data:application/pdf;base64,"


@dataclasses.dataclass
class Template:
	base_pdf: BlankPdf | bytes
	schemas: list[dict[str, Schema]]


@dataclasses.dataclass
class RenderSession:
	"""
	State owned by one document render; discarded when it finishes.
	"""
	settings: RenderSettings
	cache: ImageCache = dataclasses.field(default_factory=ImageCache)
	diagnostics: Diagnostics = dataclasses.field(default_factory=Diagnostics)


#============================================
def load_base_pdf(value, base_dir: pathlib.Path | None = None) -> BlankPdf | bytes:
	"""
	Interpret a template's basePdf entry.

	Args:
		value: Dict with width/height in mm, a PDF data URI, a file path, or None.
		base_dir: Directory that relative file paths are resolved against.

	Returns:
		BlankPdf or the raw PDF bytes.
	"""
	if value is None:
		return BlankPdf()
	if isinstance(value, dict):
		return BlankPdf(
			width=float(value.get("width", spr.config.DEFAULT_PAGE_WIDTH_MM)),
			height=float(value.get("height", spr.config.DEFAULT_PAGE_HEIGHT_MM)),
		)
	if isinstance(value, bytes):
		return value
	text = str(value)
	if text.startswith(PDF_DATA_URI_PREFIX):
		return base64.b64decode(text[len(PDF_DATA_URI_PREFIX):])
	path = pathlib.Path(text)
	if base_dir is not None and not path.is_absolute():
		path = base_dir / path
	try:
		return path.read_bytes()
	except OSError as error:
		raise ResourceEmbedError(f"Cannot read base PDF: {path}") from error


#============================================
def template_from_dict(data: dict, base_dir: pathlib.Path | None = None) -> Template:
	"""
	Build a Template from its JSON dictionary.

	Args:
		data: Dict with "basePdf" and "schemas" (a list of name -> schema dicts).
		base_dir: Directory for resolving a relative basePdf path.

	Returns:
		Template.
	"""
	pages: list[dict[str, Schema]] = []
	for page_schemas in data.get("schemas", []):
		pages.append(
			{
				name: spr.schema.schema_from_dict(schema_data)
				for name, schema_data in page_schemas.items()
			}
		)
	return Template(
		base_pdf=load_base_pdf(data.get("basePdf"), base_dir),
		schemas=pages,
	)


#============================================
def render_overlay(
	record: dict[str, str],
	schemas: dict[str, Schema],
	page_box: tuple[float, float, float, float],
	session: RenderSession,
) -> pypdf.PageObject:
	"""
	Draw one page's schemas onto a transparent overlay page.

	Args:
		record: Input values keyed by schema name.
		schemas: Ordered schemas for the page; later ones draw on top.
		page_box: Target media box (left, bottom, right, top) in points.
		session: Current render session.

	Returns:
		The overlay as a pypdf page.
	"""
	left, bottom, right, top = page_box
	page_height = top - bottom
	buffer = io.BytesIO()
	pdf = reportlab.pdfgen.canvas.Canvas(buffer, pagesize=(right, top))
	pdf.translate(left, bottom)
	page = spr.page.ReportlabPage(pdf)
	for name, schema in schemas.items():
		spr.render.draw_schema(
			record.get(name),
			schema,
			page,
			page_height,
			session.settings,
			session.cache,
			session.diagnostics,
			name=name,
		)
	pdf.showPage()
	pdf.save()
	buffer.seek(0)
	reader = pypdf.PdfReader(buffer)
	return reader.pages[0]


#============================================
def _rectangle_copy(box: pypdf.generic.RectangleObject) -> pypdf.generic.RectangleObject:
	return pypdf.generic.RectangleObject([box.left, box.bottom, box.right, box.top])


#============================================
def compose_page(base_page: pypdf.PageObject, overlay: pypdf.PageObject) -> pypdf.PageObject:
	"""
	Lay an overlay over a copy of a base page, keeping the base page boxes.

	Args:
		base_page: Page from the template's base PDF.
		overlay: Rendered schema overlay.

	Returns:
		New page object.
	"""
	media_box = base_page.mediabox
	page = pypdf.PageObject.create_blank_page(
		width=float(media_box.right),
		height=float(media_box.top),
	)
	page.merge_page(base_page)
	page.merge_page(overlay)
	page.mediabox = _rectangle_copy(base_page.mediabox)
	page.bleedbox = _rectangle_copy(base_page.bleedbox)
	page.trimbox = _rectangle_copy(base_page.trimbox)
	return page


#============================================
def generate(
	template: Template,
	inputs: list[dict[str, str]],
	settings: RenderSettings | None = None,
	progress: ProgressCallback | None = None,
) -> GenerateResult:
	"""
	Render every input record onto the template and return the PDF.

	Args:
		template: Template with base PDF and per-page schemas.
		inputs: Input records, one document section per record.
		settings: Render settings; defaults when omitted.
		progress: Called with (records done, total records) after each record.

	Returns:
		GenerateResult with the PDF bytes and a summary.
	"""
	if settings is None:
		settings = RenderSettings()
	session = RenderSession(settings=settings)
	writer = pypdf.PdfWriter()

	base_pages: list[pypdf.PageObject] = []
	if isinstance(template.base_pdf, BlankPdf):
		width = spr.config.mm_to_points(template.base_pdf.width)
		height = spr.config.mm_to_points(template.base_pdf.height)
		page_boxes = [(0.0, 0.0, width, height)] * len(template.schemas)
	else:
		try:
			base_reader = pypdf.PdfReader(io.BytesIO(template.base_pdf))
			base_pages = list(base_reader.pages)
		except pypdf.errors.PdfReadError as error:
			raise ResourceEmbedError("Cannot read base PDF") from error
		page_boxes = [
			(
				float(base_page.mediabox.left),
				float(base_page.mediabox.bottom),
				float(base_page.mediabox.right),
				float(base_page.mediabox.top),
			)
			for base_page in base_pages
		]

	for record_index, record in enumerate(inputs, start=1):
		for index, page_box in enumerate(page_boxes):
			schemas: dict[str, Schema] = {}
			if index < len(template.schemas):
				schemas = template.schemas[index]
			overlay = render_overlay(record, schemas, page_box, session)
			if base_pages:
				writer.add_page(compose_page(base_pages[index], overlay))
			else:
				writer.add_page(overlay)
		if progress is not None:
			progress(record_index, len(inputs))

	buffer = io.BytesIO()
	writer.write(buffer)
	return GenerateResult(
		pdf_bytes=buffer.getvalue(),
		pages=len(writer.pages),
		inputs=len(inputs),
		diagnostics=list(session.diagnostics.messages),
	)


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	template_path: pathlib.Path,
	inputs_path: pathlib.Path,
	result: GenerateResult,
	settings: RenderSettings,
) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		template_path: Template JSON path.
		inputs_path: Inputs JSON path.
		result: Generation result.
		settings: Render settings used.
	"""
	template_hash = hashlib.sha256(template_path.read_bytes()).hexdigest()
	data = {
		"template": str(template_path),
		"template_sha256": template_hash,
		"inputs": str(inputs_path),
		"records": result.inputs,
		"pages": result.pages,
		"diagnostics": result.diagnostics,
		"fonts": {
			"fallback": settings.fallback_font_name,
			"registered": settings.fonts,
		},
		"split_threshold": settings.split_threshold,
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)
