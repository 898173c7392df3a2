"""
CLI entry points for rendering schema templates to PDF.
"""

# Standard Library
import argparse
import json
import pathlib
import time

# local repo modules
import schema_pdf_renderer as spr
import schema_pdf_renderer.config
import schema_pdf_renderer.generate
import schema_pdf_renderer.metrics


RenderSettings = spr.config.RenderSettings

DEFAULT_FONT_NAME = spr.config.DEFAULT_FONT_NAME
DEFAULT_SPLIT_THRESHOLD = spr.config.DEFAULT_SPLIT_THRESHOLD
PROGRESS_BAR_WIDTH = spr.config.PROGRESS_BAR_WIDTH
PROGRESS_UPDATE_EVERY = spr.config.PROGRESS_UPDATE_EVERY


#============================================
def parse_font_spec(value: str) -> tuple[str, str]:
	"""
	Parse a NAME=PATH font argument.

	Args:
		value: Font argument string.

	Returns:
		Tuple of (font name, font file path).
	"""
	name, separator, path = value.partition("=")
	if not separator or not name or not path:
		raise argparse.ArgumentTypeError(f"Expected NAME=PATH, got {value!r}")
	return (name, path)


#============================================
def print_progress(prefix: str, current: int, total: int) -> None:
	"""
	Print a simple progress bar.

	Args:
		prefix: Label text.
		current: Current count.
		total: Total count.
	"""
	if total <= 0:
		return
	percent = int(round((current / total) * 100.0))
	filled = int(round(PROGRESS_BAR_WIDTH * percent / 100.0))
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	print(f"{prefix} [{bar}] {current}/{total} ({percent}%)", end="\r")


#============================================
def report_record_progress(current: int, total: int) -> None:
	if current % PROGRESS_UPDATE_EVERY == 0 or current == total:
		print_progress("Records", current, total)


#============================================
def build_settings(args: argparse.Namespace) -> RenderSettings:
	"""
	Build render settings from CLI args, registering any TrueType fonts.

	Args:
		args: Parsed argparse namespace.

	Returns:
		RenderSettings.
	"""
	fonts: dict[str, str] = {}
	for name, path in args.fonts:
		fonts[name] = spr.metrics.register_ttf_font(name, path)
	return RenderSettings(
		fonts=fonts,
		fallback_font_name=args.fallback_font,
		split_threshold=args.split_threshold,
	)


#============================================
def parse_args() -> argparse.Namespace:
	"""
	Parse command line arguments.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Render schema templates and inputs to a PDF.")
	parser.add_argument("template", help="Template JSON file.")
	parser.add_argument("inputs", help="Inputs JSON file (a list of name -> value records).")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", required=True, help="Output PDF path.")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")

	font_group = parser.add_argument_group("Fonts")
	font_group.add_argument(
		"-f",
		"--font",
		dest="fonts",
		action="append",
		type=parse_font_spec,
		help="Register a TrueType font as NAME=PATH. Repeatable.",
	)
	font_group.add_argument(
		"--fallback-font",
		dest="fallback_font",
		default=DEFAULT_FONT_NAME,
		help="Font for schemas without a font name.",
	)

	layout_group = parser.add_argument_group("Layout")
	layout_group.add_argument(
		"-t",
		"--split-threshold",
		dest="split_threshold",
		type=float,
		default=DEFAULT_SPLIT_THRESHOLD,
		help="Slack in points before a line is wrapped.",
	)

	parser.set_defaults(fonts=[])

	args = parser.parse_args()
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> None:
	"""
	Render the template for every input record and write the PDF.

	Args:
		args: Parsed argparse namespace.
	"""
	template_path = pathlib.Path(args.template)
	inputs_path = pathlib.Path(args.inputs)
	output_path = pathlib.Path(args.output_path)
	print("Schema PDF render")
	print(f"Template: {template_path}")
	print(f"Inputs: {inputs_path}")
	print(f"Output PDF: {output_path}")
	print(f"Split threshold: {args.split_threshold}")

	start_time = time.perf_counter()
	settings = build_settings(args)
	if settings.fonts:
		print(f"Fonts registered: {', '.join(sorted(settings.fonts))}")

	with template_path.open("r", encoding="utf-8") as handle:
		template_data = json.load(handle)
	with inputs_path.open("r", encoding="utf-8") as handle:
		inputs = json.load(handle)
	template = spr.generate.template_from_dict(template_data, template_path.parent)
	print(f"Template pages: {len(template.schemas)}")
	print(f"Input records: {len(inputs)}")

	render_start = time.perf_counter()
	print_progress("Records", 0, len(inputs))
	result = spr.generate.generate(template, inputs, settings, progress=report_record_progress)
	render_end = time.perf_counter()
	if inputs:
		print()
	output_path.write_bytes(result.pdf_bytes)
	print(f"Pages written: {result.pages}")
	if result.diagnostics:
		print(f"Skipped schemas: {len(result.diagnostics)}")

	manifest_path = args.manifest_path
	if manifest_path is None:
		manifest_path = f"{output_path}.json"
	spr.generate.write_manifest(
		pathlib.Path(manifest_path),
		template_path,
		inputs_path,
		result,
		settings,
	)

	total_time = time.perf_counter() - start_time
	print(
		"Timing: render={:.2f}s total={:.2f}s".format(
			render_end - render_start,
			total_time,
		)
	)
	print(f"Manifest written: {manifest_path}")


#============================================
def main() -> None:
	"""
	Main entry point.
	"""
	args = parse_args()
	run_pipeline(args)
