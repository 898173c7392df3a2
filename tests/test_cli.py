import argparse
import json
import pathlib

import pypdf
import pytest

import schema_pdf_renderer.cli as cli
import schema_pdf_renderer.config


#============================================
def test_parse_font_spec() -> None:
	"""
	Font arguments split on the first equals sign.
	"""
	assert cli.parse_font_spec("Body=/fonts/a=b.ttf") == ("Body", "/fonts/a=b.ttf")
	for bad in ("Body", "=path.ttf", "Body="):
		with pytest.raises(argparse.ArgumentTypeError):
			cli.parse_font_spec(bad)


#============================================
def test_run_pipeline_writes_pdf_and_manifest(tmp_path: pathlib.Path, capsys) -> None:
	"""
	Template and inputs on disk render to a PDF with a manifest beside it.
	"""
	template_path = tmp_path / "template.json"
	template_path.write_text(
		json.dumps(
			{
				"basePdf": {"width": 90, "height": 50},
				"schemas": [
					{
						"title": {
							"type": "text",
							"position": {"x": 5, "y": 5},
							"width": 80,
							"height": 10,
						},
						"code": {
							"type": "code128",
							"position": {"x": 5, "y": 20},
							"width": 60,
							"height": 15,
						},
					}
				],
			}
		),
		encoding="utf-8",
	)
	inputs_path = tmp_path / "inputs.json"
	inputs_path.write_text(
		json.dumps(
			[
				{"title": "First", "code": "A-001"},
				{"title": "Second", "code": "A-002"},
			]
		),
		encoding="utf-8",
	)
	output_path = tmp_path / "out.pdf"
	args = argparse.Namespace(
		template=str(template_path),
		inputs=str(inputs_path),
		output_path=str(output_path),
		manifest_path=None,
		fonts=[],
		fallback_font="Helvetica",
		split_threshold=schema_pdf_renderer.config.DEFAULT_SPLIT_THRESHOLD,
	)
	cli.run_pipeline(args)

	reader = pypdf.PdfReader(str(output_path))
	assert len(reader.pages) == 2
	assert "Second" in reader.pages[1].extract_text()

	manifest = json.loads((tmp_path / "out.pdf.json").read_text(encoding="utf-8"))
	assert manifest["records"] == 2
	assert manifest["pages"] == 2
	assert manifest["diagnostics"] == []

	captured = capsys.readouterr()
	assert "Pages written: 2" in captured.out
	assert "2/2 (100%)" in captured.out
