"""
Raster snapshot of the rendered page.
"""

# Standard Library
import pathlib

# PIP3 modules
import fitz
import PIL.Image

# local repo modules
import quadrant_checklist as qc
import quadrant_checklist.config


POINTS_PER_INCH = qc.config.POINTS_PER_INCH
SNAPSHOT_DPI = qc.config.SNAPSHOT_DPI


class SnapshotError(Exception):
	pass


#============================================
def render_page_image(pdf_path: pathlib.Path, dpi: int = SNAPSHOT_DPI) -> PIL.Image.Image:
	"""
	Render the first page of a PDF to an image.

	Args:
		pdf_path: PDF path.
		dpi: Raster resolution.

	Returns:
		PIL image.
	"""
	try:
		document = fitz.open(pdf_path)
	except (RuntimeError, OSError, ValueError) as error:
		raise SnapshotError(f"Could not open {pdf_path}: {error}") from error
	try:
		if document.page_count < 1:
			raise SnapshotError(f"No pages in {pdf_path}")
		page = document[0]
		scale = dpi / POINTS_PER_INCH
		matrix = fitz.Matrix(scale, scale)
		pixmap = page.get_pixmap(matrix=matrix, alpha=False)
		image = PIL.Image.frombytes("RGB", [pixmap.width, pixmap.height], pixmap.samples)
	finally:
		document.close()
	return image


#============================================
def snapshot_pdf(
	pdf_path: pathlib.Path,
	output_path: pathlib.Path,
	dpi: int = SNAPSHOT_DPI,
) -> pathlib.Path:
	"""
	Flatten the rendered page into a single-page raster PDF.

	The page size of the result matches the source because the image is
	written at the same resolution it was rasterized with.

	Args:
		pdf_path: Rendered layout PDF.
		output_path: Snapshot PDF path.
		dpi: Raster resolution.

	Returns:
		Output path.
	"""
	image = render_page_image(pdf_path, dpi)
	try:
		image.save(output_path, "PDF", resolution=float(dpi))
	except (OSError, ValueError) as error:
		raise SnapshotError(f"Could not write {output_path}: {error}") from error
	return output_path
