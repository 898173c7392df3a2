"""
Per-session cache of embedded images and barcodes.
"""

# PIP3 modules
import reportlab.lib.utils


#============================================
def cache_key(kind: str, value: str) -> str:
	"""
	Build a cache key from a schema kind and its literal input.

	Args:
		kind: Schema kind, e.g. "image" or a barcode symbology.
		value: Input string as given.

	Returns:
		Cache key.
	"""
	return f"{kind}{value}"


class ImageCache:
	"""
	Embedded image handles keyed by schema kind and input.

	One instance belongs to one document render and is dropped with it.
	Entries are written once and never replaced.
	"""

	def __init__(self) -> None:
		self._entries: dict[str, reportlab.lib.utils.ImageReader] = {}

	def get(self, key: str) -> reportlab.lib.utils.ImageReader | None:
		return self._entries.get(key)

	def put(self, key: str, handle: reportlab.lib.utils.ImageReader) -> None:
		self._entries.setdefault(key, handle)

	def __contains__(self, key: str) -> bool:
		return key in self._entries

	def __len__(self) -> int:
		return len(self._entries)
