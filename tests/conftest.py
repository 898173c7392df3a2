"""
Pytest configuration for local imports and shared fakes.
"""

# Standard Library
import base64
import io
import os
import sys

# PIP3 modules
import PIL.Image
import pytest

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()


class RecordingPage:
	"""
	Page stand-in that records draw calls instead of drawing.
	"""

	def __init__(self) -> None:
		self.calls: list[tuple[str, dict]] = []
		self.embed_count = 0

	def embed_image(self, data: bytes) -> object:
		self.embed_count += 1
		return ("handle", self.embed_count, len(data))

	def draw_text(self, text: str, **options) -> None:
		self.calls.append(("text", dict(options, text=text)))

	def draw_image(self, handle: object, **options) -> None:
		self.calls.append(("image", dict(options, handle=handle)))

	def draw_rectangle(self, **options) -> None:
		self.calls.append(("rectangle", options))

	def kinds(self) -> list[str]:
		return [kind for kind, _options in self.calls]

	def texts(self) -> list[dict]:
		return [options for kind, options in self.calls if kind == "text"]


#============================================
@pytest.fixture
def recording_page() -> RecordingPage:
	"""
	Fresh recording page.
	"""
	return RecordingPage()


#============================================
def make_png_bytes(color: tuple[int, int, int] = (200, 30, 30)) -> bytes:
	"""
	Build a small PNG image.

	Args:
		color: RGB fill color.

	Returns:
		PNG bytes.
	"""
	image = PIL.Image.new("RGB", (4, 4), color)
	buffer = io.BytesIO()
	image.save(buffer, format="PNG")
	return buffer.getvalue()


#============================================
@pytest.fixture
def png_data_uri() -> str:
	"""
	PNG image encoded as a data URI.
	"""
	encoded = base64.b64encode(make_png_bytes()).decode("ascii")
	return f"data:image/png;base64,{encoded}"
