"""
Barcode input validation and barcode image generation.
"""

# Standard Library
import io
import re

# PIP3 modules
import barcode
import barcode.errors
import barcode.writer
import PIL.Image
import qrcode
import qrcode.constants

# local repo modules
import schema_pdf_renderer as spr
import schema_pdf_renderer.config
import schema_pdf_renderer.errors
import schema_pdf_renderer.schema


BarcodeSchema = spr.schema.BarcodeSchema
ResourceEmbedError = spr.errors.ResourceEmbedError

QR_MAX_INPUT_LENGTH = spr.config.QR_MAX_INPUT_LENGTH
BARCODE_RASTER_DPI = spr.config.BARCODE_RASTER_DPI

CODE39_PATTERN = re.compile(r"^[0-9A-Z\-.$/+% ]+$")
NW7_PATTERN = re.compile(r"^[A-Da-d][0-9\-.:/+$]+[A-Da-d]$")

# symbology -> (python-barcode class name, extra constructor kwargs)
LINEAR_BARCODE_CLASSES = {
	"ean13": ("ean13", {}),
	"ean8": ("ean8", {}),
	"code39": ("code39", {"add_checksum": False}),
	"code128": ("code128", {}),
	"nw7": ("codabar", {}),
	"itf14": ("itf", {}),
	"upca": ("upca", {}),
}


#============================================
def gs1_check_digit(body: str) -> str:
	"""
	Compute the GS1 mod-10 check digit.

	Args:
		body: Digits without the check digit.

	Returns:
		Check digit as a one-character string.
	"""
	total = 0
	for position, char in enumerate(reversed(body)):
		weight = 3 if position % 2 == 0 else 1
		total += int(char) * weight
	return str((10 - total % 10) % 10)


#============================================
def _valid_gs1(value: str, full_length: int) -> bool:
	"""
	Accept digits with or without their trailing check digit.
	"""
	if not value.isascii() or not value.isdigit():
		return False
	if len(value) == full_length - 1:
		return True
	if len(value) != full_length:
		return False
	return gs1_check_digit(value[:-1]) == value[-1]


#============================================
def validate_barcode_input(symbology: str, value: str) -> bool:
	"""
	Check whether an input string can be encoded in a symbology.

	Args:
		symbology: Barcode symbology name.
		value: Input string.

	Returns:
		True if the input is valid for the symbology.
	"""
	if not value:
		return False
	if symbology == "qrcode":
		return len(value) < QR_MAX_INPUT_LENGTH
	if symbology == "ean13":
		return _valid_gs1(value, 13)
	if symbology == "ean8":
		return _valid_gs1(value, 8)
	if symbology == "itf14":
		return _valid_gs1(value, 14)
	if symbology == "upca":
		return _valid_gs1(value, 12)
	if symbology == "code39":
		return CODE39_PATTERN.match(value) is not None
	if symbology == "code128":
		return all(ord(char) < 128 for char in value)
	if symbology == "nw7":
		return NW7_PATTERN.match(value) is not None
	return False


#============================================
def _image_to_png(image: PIL.Image.Image) -> bytes:
	buffer = io.BytesIO()
	image.save(buffer, format="PNG")
	return buffer.getvalue()


#============================================
def _render_qrcode(value: str, style: BarcodeSchema) -> PIL.Image.Image:
	qr = qrcode.QRCode(
		error_correction=qrcode.constants.ERROR_CORRECT_M,
		box_size=10,
		border=0,
	)
	qr.add_data(value)
	qr.make(fit=True)
	image = qr.make_image(fill_color=style.bar_color, back_color=style.background_color)
	return image.get_image()


#============================================
def _render_linear(symbology: str, value: str, style: BarcodeSchema) -> PIL.Image.Image:
	class_name, kwargs = LINEAR_BARCODE_CLASSES[symbology]
	if symbology == "nw7":
		value = value.upper()
	if symbology == "itf14" and len(value) == 13:
		value = value + gs1_check_digit(value)
	barcode_class = barcode.get_barcode_class(class_name)
	instance = barcode_class(value, writer=barcode.writer.ImageWriter(), **kwargs)
	writer_options = {
		"background": style.background_color,
		"foreground": style.bar_color,
		"write_text": style.include_text,
		"quiet_zone": 0.0,
		"dpi": BARCODE_RASTER_DPI,
	}
	return instance.render(writer_options)


#============================================
def create_barcode(symbology: str, value: str, style: BarcodeSchema) -> bytes:
	"""
	Generate a barcode image.

	Args:
		symbology: Barcode symbology name.
		value: Validated input string.
		style: Barcode schema carrying bar/background colors and text flag.

	Returns:
		PNG image bytes.
	"""
	try:
		if symbology == "qrcode":
			image = _render_qrcode(value, style)
		elif symbology in LINEAR_BARCODE_CLASSES:
			image = _render_linear(symbology, value, style)
		else:
			raise ResourceEmbedError(f"Unsupported barcode symbology: {symbology}")
	except (barcode.errors.BarcodeError, ValueError, KeyError) as error:
		raise ResourceEmbedError(f"Cannot generate {symbology} barcode for {value!r}") from error
	return _image_to_png(image)
