"""
Drawing primitives on a ReportLab canvas page.
"""

# Standard Library
import io

# PIP3 modules
import PIL.Image
import reportlab.lib.utils
import reportlab.pdfgen.canvas

# local repo modules
import schema_pdf_renderer as spr
import schema_pdf_renderer.errors


ResourceEmbedError = spr.errors.ResourceEmbedError


#============================================
def parse_hex_color(value: str) -> tuple[float, float, float]:
	"""
	Parse a hex color string into RGB floats.

	Args:
		value: Color string like "#AABBCC" or "#ABC".

	Returns:
		Tuple of (r, g, b) in 0.0-1.0 range; black when unparsable.
	"""
	if not value or not value.startswith("#"):
		return (0.0, 0.0, 0.0)
	digits = value[1:]
	if len(digits) == 3:
		digits = "".join(char * 2 for char in digits)
	if len(digits) != 6:
		return (0.0, 0.0, 0.0)
	try:
		red = int(digits[0:2], 16) / 255.0
		green = int(digits[2:4], 16) / 255.0
		blue = int(digits[4:6], 16) / 255.0
	except ValueError:
		return (0.0, 0.0, 0.0)
	return (red, green, blue)


class ReportlabPage:
	"""
	One page of a ReportLab canvas, addressed in PDF points.

	Every primitive draws at (x, y) and rotates counter-clockwise about
	that origin.
	"""

	def __init__(self, pdf: reportlab.pdfgen.canvas.Canvas) -> None:
		self.pdf = pdf

	def embed_image(self, data: bytes) -> reportlab.lib.utils.ImageReader:
		"""
		Decode image bytes into a handle the canvas can draw.

		Args:
			data: PNG or JPEG bytes.

		Returns:
			ImageReader instance.
		"""
		try:
			image = PIL.Image.open(io.BytesIO(data))
			image.load()
		except (OSError, ValueError) as error:
			raise ResourceEmbedError("Cannot decode image data") from error
		return reportlab.lib.utils.ImageReader(image)

	def draw_text(
		self,
		text: str,
		*,
		x: float,
		y: float,
		size: float,
		color: str,
		rotation: float,
		line_height: float,
		font_name: str,
		character_spacing: float,
	) -> None:
		self.pdf.saveState()
		self.pdf.translate(x, y)
		if rotation:
			self.pdf.rotate(rotation)
		text_object = self.pdf.beginText(0.0, 0.0)
		text_object.setFont(font_name, size, leading=line_height)
		text_object.setCharSpace(character_spacing)
		text_object.setFillColorRGB(*parse_hex_color(color))
		text_object.textOut(text)
		self.pdf.drawText(text_object)
		self.pdf.restoreState()

	def draw_image(
		self,
		handle: reportlab.lib.utils.ImageReader,
		*,
		x: float,
		y: float,
		width: float,
		height: float,
		rotation: float,
	) -> None:
		self.pdf.saveState()
		self.pdf.translate(x, y)
		if rotation:
			self.pdf.rotate(rotation)
		self.pdf.drawImage(
			handle,
			0.0,
			0.0,
			width=width,
			height=height,
			mask="auto",
			preserveAspectRatio=False,
			anchor="sw",
		)
		self.pdf.restoreState()

	def draw_rectangle(
		self,
		*,
		x: float,
		y: float,
		width: float,
		height: float,
		color: str,
		rotation: float,
	) -> None:
		self.pdf.saveState()
		self.pdf.translate(x, y)
		if rotation:
			self.pdf.rotate(rotation)
		self.pdf.setFillColorRGB(*parse_hex_color(color))
		self.pdf.rect(0.0, 0.0, width, height, stroke=0, fill=1)
		self.pdf.restoreState()
