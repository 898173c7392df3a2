#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Render schema templates and input records to a PDF.
"""

import schema_pdf_renderer.cli


if __name__ == "__main__":
	schema_pdf_renderer.cli.main()
