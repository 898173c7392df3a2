"""
Line breaking and page coordinate mapping for text schemas.

Text is first split on hard breaks (CR, LF, CRLF). Each segment is then
broken greedily: characters are appended to a candidate line until the
overflow predicate fires, at which point the candidate is emitted and the
offending character starts the next line. A character that overflows on
its own still gets a line, so the scan always terminates.

Page coordinates put y = 0 at the bottom of the page while schema anchors
are measured from the top, hence map_y().
"""

# Standard Library
import dataclasses
import functools
import re
import typing

# local repo modules
import schema_pdf_renderer as spr
import schema_pdf_renderer.metrics


# CRLF is matched first so a Windows line ending is one break, not two
# (unlike an alternation that tries a lone CR first).
HARD_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")

OverflowCheck = typing.Callable[[str], bool]


@dataclasses.dataclass(frozen=True)
class PhysicalLine:
	text: str
	index: int


@dataclasses.dataclass(frozen=True)
class LineFlow:
	lines: tuple[PhysicalLine, ...]
	line_count: int


#============================================
def _split_step(
	state: tuple[tuple[str, ...], str],
	char: str,
	is_overflow: OverflowCheck,
) -> tuple[tuple[str, ...], str]:
	lines, candidate = state
	if not is_overflow(candidate + char):
		return (lines, candidate + char)
	if not candidate:
		# a lone character that overflows is placed on its own line
		return (lines + (char,), "")
	return (lines + (candidate,), char)


#============================================
def split_lines(line: str, is_overflow: OverflowCheck) -> tuple[str, ...]:
	"""
	Break one line into sub-lines that fit the overflow predicate.

	Args:
		line: Line without hard breaks.
		is_overflow: Returns True when a candidate string is too wide.

	Returns:
		Sub-lines in order. An empty line yields a single empty string.
	"""
	if not line:
		return ("",)
	step = functools.partial(_split_step, is_overflow=is_overflow)
	lines, candidate = functools.reduce(step, line, ((), ""))
	if candidate:
		lines = lines + (candidate,)
	return lines


#============================================
def split_hard_breaks(text: str) -> list[str]:
	"""
	Split a text run on CR, LF and CRLF.

	Args:
		text: Raw text run.

	Returns:
		Segments in order; consecutive breaks keep their empty segments.
	"""
	return HARD_BREAK_PATTERN.split(text)


#============================================
def split_text_run(text: str, is_overflow: OverflowCheck) -> LineFlow:
	"""
	Break a full text run into physical lines.

	Every physical line carries its index in the overall flow, so the line
	count keeps running across hard-broken segments.

	Args:
		text: Raw text run.
		is_overflow: Overflow predicate for candidate strings.

	Returns:
		LineFlow with the physical lines and the total line count.
	"""
	def append_segment(flow: LineFlow, segment: str) -> LineFlow:
		sub_lines = split_lines(segment, is_overflow)
		new_lines = tuple(
			PhysicalLine(text=sub_line, index=flow.line_count + offset)
			for offset, sub_line in enumerate(sub_lines)
		)
		return LineFlow(
			lines=flow.lines + new_lines,
			line_count=flow.line_count + len(new_lines),
		)

	return functools.reduce(
		append_segment,
		split_hard_breaks(text),
		LineFlow(lines=(), line_count=0),
	)


#============================================
def build_overflow_check(
	metrics: spr.metrics.FontMetrics,
	box_width: float,
	font_size: float,
	character_spacing: float,
	split_threshold: float,
) -> OverflowCheck:
	"""
	Compose an overflow predicate from font metrics and a box width.

	Args:
		metrics: Metrics provider for the font.
		box_width: Wrap width in points.
		font_size: Font size in points.
		character_spacing: Extra space between characters in points.
		split_threshold: Slack in points; a candidate overflows when the
			remaining space is at or below it.

	Returns:
		Predicate taking a candidate string.
	"""
	def is_overflow(candidate: str) -> bool:
		width = spr.metrics.text_width(metrics, candidate, font_size, character_spacing)
		return box_width - width <= split_threshold

	return is_overflow


#============================================
def map_x(anchor_x: float, alignment: str, box_width: float, content_width: float) -> float:
	"""
	Compute the x origin for content aligned within a box.

	Args:
		anchor_x: Left edge of the box in points.
		alignment: "left", "center" or "right".
		box_width: Box width in points.
		content_width: Width of the content being placed.

	Returns:
		X coordinate in points.
	"""
	if alignment == "center":
		return anchor_x + (box_width - content_width) / 2.0
	if alignment == "right":
		return anchor_x + box_width - content_width
	return anchor_x


#============================================
def map_y(anchor_y: float, page_height: float, content_height: float) -> float:
	"""
	Convert a top-down anchor into a bottom-up page y coordinate.

	Args:
		anchor_y: Distance from the top of the page in points.
		page_height: Page height in points.
		content_height: Height of the content being placed.

	Returns:
		Y coordinate of the content's bottom edge in points.
	"""
	return page_height - anchor_y - content_height


#============================================
def baseline_y(
	anchor_y: float,
	page_height: float,
	font_size: float,
	line_height: float,
	index: int,
) -> float:
	"""
	Compute the baseline y coordinate for a physical line.

	Args:
		anchor_y: Top of the text box in points from the top of the page.
		page_height: Page height in points.
		font_size: Font size in points.
		line_height: Line height multiplier; 0 packs lines without leading.
		index: Line index within the whole text flow.

	Returns:
		Baseline y coordinate in points.
	"""
	y = map_y(anchor_y, page_height, font_size) - line_height * font_size * index
	if line_height != 0:
		y -= (line_height - 1.0) * font_size / 2.0
	return y
