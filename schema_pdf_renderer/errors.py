"""
Error types raised while rendering schemas.
"""


class RenderError(Exception):
	"""
	Base class for rendering failures.
	"""


class SkippableInputError(RenderError):
	"""
	Input that cannot be drawn but must not abort the page.

	Raised for missing input, unknown schema kinds and barcode input that
	fails validation. The dispatcher absorbs it and records a diagnostic.
	"""


class ResourceEmbedError(RenderError):
	"""
	A font, image or barcode asset could not be embedded.
	"""


class MetricsError(RenderError):
	"""
	Text width measurement failed for a font and string.
	"""
