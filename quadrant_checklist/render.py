"""
Rendering of packed quadrants onto a Letter page.
"""

# Standard Library
import dataclasses
import io
import json
import pathlib

# PIP3 modules
import PIL.Image
import pypdf
import reportlab.lib.utils
import reportlab.pdfgen.canvas

# local repo modules
import quadrant_checklist as qc
import quadrant_checklist.config
import quadrant_checklist.icon_match
import quadrant_checklist.lexicon
import quadrant_checklist.list_parser
import quadrant_checklist.measure
import quadrant_checklist.pack


ListModel = qc.list_parser.ListModel
Section = qc.list_parser.Section
IconLexicon = qc.lexicon.IconLexicon
PackResult = qc.pack.PackResult
RenderConfig = qc.config.RenderConfig
SectionLayout = qc.measure.SectionLayout

match_icon_key = qc.icon_match.match_icon_key
layout_section = qc.measure.layout_section
wrap_text_to_width = qc.measure.wrap_text_to_width
wrap_title = qc.measure.wrap_title

QUADRANT_COUNT = qc.config.QUADRANT_COUNT
QUADRANT_NAMES = qc.config.QUADRANT_NAMES
DEFAULT_FONT_REGULAR = qc.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_BOLD = qc.config.DEFAULT_FONT_BOLD
TITLE_LEADING = qc.config.TITLE_LEADING
TITLE_SPACING = qc.config.TITLE_SPACING
HEADING_LEADING = qc.config.HEADING_LEADING
HEADING_SPACING = qc.config.HEADING_SPACING
ITEM_LEADING = qc.config.ITEM_LEADING
ITEM_SPACING = qc.config.ITEM_SPACING
CHECKBOX_SCALE = qc.config.CHECKBOX_SCALE
CHECKBOX_GAP = qc.config.CHECKBOX_GAP
ICON_SCALE = qc.config.ICON_SCALE
ICON_EXTENSION = qc.config.ICON_EXTENSION
RULE_THICKNESS = qc.config.RULE_THICKNESS
FOLD_LINE_GRAY = qc.config.FOLD_LINE_GRAY
EMPTY_STATE_MESSAGE = qc.config.EMPTY_STATE_MESSAGE


@dataclasses.dataclass
class RenderResult:
	entries_per_quadrant: list[int]
	items_drawn: int
	icons_drawn: int
	icons_missing: int
	icon_keys: dict[str, str | None]
	placed_items: int
	dropped_items: int


#============================================
def build_icon_cache(
	icon_dir: pathlib.Path | None,
	keys: set[str],
) -> dict[str, reportlab.lib.utils.ImageReader]:
	"""
	Load icon images for the matched keys.

	Keys without a readable asset are left out of the cache.

	Args:
		icon_dir: Directory holding <key>.png files, or None for no icons.
		keys: Icon keys to load.

	Returns:
		Cache of ImageReader instances keyed by icon key.
	"""
	icon_cache: dict[str, reportlab.lib.utils.ImageReader] = {}
	if icon_dir is None:
		return icon_cache
	for key in sorted(keys):
		path = icon_dir / f"{key}{ICON_EXTENSION}"
		if not path.is_file():
			continue
		try:
			image = PIL.Image.open(path)
			image.load()
		except OSError:
			continue
		icon_cache[key] = reportlab.lib.utils.ImageReader(image)
	return icon_cache


#============================================
def draw_title(
	pdf: reportlab.pdfgen.canvas.Canvas,
	title: str,
	top_y: float,
	config: RenderConfig,
) -> float:
	"""
	Draw the list title and return the y position below the title block.

	Args:
		pdf: ReportLab canvas.
		title: List title.
		top_y: Top of the drawing area.
		config: Render configuration.

	Returns:
		Cursor y after the title block.
	"""
	title_size = config.text_size.title_size
	line_height = title_size * TITLE_LEADING
	lines = wrap_title(title, config.geometry.column_width, config.text_size)
	pdf.setFont(DEFAULT_FONT_BOLD, title_size)
	pdf.setFillColorRGB(0.0, 0.0, 0.0)
	for index, line in enumerate(lines):
		pdf.drawString(0.0, top_y - title_size - index * line_height, line)
	drawn_height = len(lines) * line_height + TITLE_SPACING
	return top_y - max(config.geometry.title_block_height, drawn_height)


#============================================
def draw_empty_state(
	pdf: reportlab.pdfgen.canvas.Canvas,
	top_y: float,
	config: RenderConfig,
) -> None:
	"""
	Draw the all-checked message wrapped to the column width.

	Args:
		pdf: ReportLab canvas.
		top_y: Top of the drawing area.
		config: Render configuration.
	"""
	item_size = config.text_size.item_size
	line_height = item_size * ITEM_LEADING
	lines = wrap_text_to_width(EMPTY_STATE_MESSAGE, DEFAULT_FONT_REGULAR, item_size, config.geometry.column_width)
	pdf.setFont(DEFAULT_FONT_REGULAR, item_size)
	for index, line in enumerate(lines):
		pdf.drawString(0.0, top_y - item_size - index * line_height, line)


#============================================
def draw_section(
	pdf: reportlab.pdfgen.canvas.Canvas,
	layout: SectionLayout,
	top_y: float,
	config: RenderConfig,
	icon_keys: dict[str, str | None],
	icon_cache: dict[str, reportlab.lib.utils.ImageReader],
) -> tuple[float, int]:
	"""
	Draw a section heading and its items.

	Args:
		pdf: ReportLab canvas.
		layout: Precomputed section layout.
		top_y: Top of the section box.
		config: Render configuration.
		icon_keys: Matched icon key per item text.
		icon_cache: Loaded icons.

	Returns:
		Tuple of (cursor y below the section, icons drawn).
	"""
	text_size = config.text_size
	column_width = config.geometry.column_width
	cursor = top_y

	pdf.setFillColorRGB(0.0, 0.0, 0.0)
	pdf.setFont(DEFAULT_FONT_BOLD, text_size.heading_size)
	for line in layout.heading_lines:
		pdf.drawString(0.0, cursor - text_size.heading_size, line)
		cursor -= text_size.heading_size * HEADING_LEADING
	pdf.setLineWidth(RULE_THICKNESS)
	pdf.line(0.0, cursor - HEADING_SPACING / 2.0, column_width, cursor - HEADING_SPACING / 2.0)
	cursor -= HEADING_SPACING

	item_size = text_size.item_size
	box_size = item_size * CHECKBOX_SCALE
	icon_size = item_size * ICON_SCALE
	line_height = item_size * ITEM_LEADING
	icons_drawn = 0
	pdf.setFont(DEFAULT_FONT_REGULAR, item_size)
	for index, item in enumerate(layout.items):
		if index > 0:
			cursor -= ITEM_SPACING
		baseline = cursor - item_size
		pdf.rect(0.0, baseline, box_size, box_size, stroke=1, fill=0)
		text_x = box_size + CHECKBOX_GAP
		for line_index, line in enumerate(item.lines):
			pdf.drawString(text_x, baseline - line_index * line_height, line)
		key = icon_keys.get(item.text)
		if key is not None and key in icon_cache:
			pdf.drawImage(
				icon_cache[key],
				column_width - icon_size,
				cursor - icon_size,
				width=icon_size,
				height=icon_size,
				mask="auto",
				preserveAspectRatio=True,
				anchor="c",
			)
			icons_drawn += 1
		cursor -= item.height
	return (cursor, icons_drawn)


#============================================
def build_quadrant_tile(
	quadrant_index: int,
	sections: list[Section],
	model: ListModel,
	config: RenderConfig,
	icon_keys: dict[str, str | None],
	icon_cache: dict[str, reportlab.lib.utils.ImageReader],
) -> tuple[pypdf.PageObject, int]:
	"""
	Render one quadrant into a tile page sized to the quadrant.

	Args:
		quadrant_index: Quadrant index in visiting order.
		sections: Packed sections for this quadrant.
		model: Parsed list model.
		config: Render configuration.
		icon_keys: Matched icon key per item text.
		icon_cache: Loaded icons.

	Returns:
		Tuple of (tile page, icons drawn).
	"""
	geometry = config.geometry
	buffer = io.BytesIO()
	pdf = reportlab.pdfgen.canvas.Canvas(
		buffer,
		pagesize=(geometry.column_width, geometry.quadrant_height),
	)
	cursor = geometry.quadrant_height
	if quadrant_index == 0:
		cursor = draw_title(pdf, model.title, cursor, config)
		if not model.sections:
			draw_empty_state(pdf, cursor, config)

	icons_drawn = 0
	for index, section in enumerate(sections):
		if index > 0:
			cursor -= geometry.section_gap
		layout = layout_section(section.name, section.items, geometry.column_width, config.text_size)
		cursor, section_icons = draw_section(pdf, layout, cursor, config, icon_keys, icon_cache)
		icons_drawn += section_icons
	pdf.save()
	buffer.seek(0)
	reader = pypdf.PdfReader(buffer)
	return (reader.pages[0], icons_drawn)


#============================================
def build_guide_overlay(config: RenderConfig) -> pypdf.PageObject:
	"""
	Build a PDF overlay page with fold lines and quadrant outlines.

	Args:
		config: Render configuration.

	Returns:
		PDF page object.
	"""
	geometry = config.geometry
	buffer = io.BytesIO()
	pdf = reportlab.pdfgen.canvas.Canvas(buffer, pagesize=(geometry.page_width, geometry.page_height))
	pdf.setLineWidth(0.3)
	if config.draw_fold_lines:
		pdf.setStrokeColorRGB(FOLD_LINE_GRAY, FOLD_LINE_GRAY, FOLD_LINE_GRAY)
		pdf.setDash(3, 3)
		center_x = geometry.page_width / 2.0
		center_y = geometry.bottom_margin + geometry.quadrant_height + geometry.gutter / 2.0
		pdf.line(center_x, 0.0, center_x, geometry.page_height)
		pdf.line(0.0, center_y, geometry.page_width, center_y)
		pdf.setDash()
	if config.draw_outlines:
		pdf.setStrokeColorRGB(0.7, 0.7, 0.7)
		for index in range(QUADRANT_COUNT):
			x, y = geometry.quadrant_origin(index)
			pdf.rect(x, y, geometry.column_width, geometry.quadrant_height, stroke=1, fill=0)
	pdf.save()
	buffer.seek(0)
	reader = pypdf.PdfReader(buffer)
	return reader.pages[0]


#============================================
def collect_icon_keys(pack_result: PackResult, lexicon: IconLexicon) -> dict[str, str | None]:
	"""
	Match every packed item to an icon key.

	Args:
		pack_result: Packed quadrants.
		lexicon: Icon lexicon.

	Returns:
		Icon key or None per item text.
	"""
	icon_keys: dict[str, str | None] = {}
	for sections in pack_result.quadrants:
		for section in sections:
			for item in section.items:
				if item not in icon_keys:
					icon_keys[item] = match_icon_key(item, lexicon)
	return icon_keys


#============================================
def render_checklist_pdf(
	model: ListModel,
	pack_result: PackResult,
	output_path: pathlib.Path,
	config: RenderConfig,
	lexicon: IconLexicon,
) -> RenderResult:
	"""
	Render packed quadrants to a single Letter page PDF.

	Args:
		model: Parsed list model.
		pack_result: Packed quadrants.
		output_path: Output PDF path.
		config: Render configuration.
		lexicon: Icon lexicon.

	Returns:
		RenderResult.
	"""
	geometry = config.geometry
	icon_keys = collect_icon_keys(pack_result, lexicon)
	matched = {key for key in icon_keys.values() if key is not None}
	icon_cache = build_icon_cache(config.icon_dir, matched)

	writer = pypdf.PdfWriter()
	page = pypdf.PageObject.create_blank_page(
		width=geometry.page_width,
		height=geometry.page_height,
	)
	writer.add_page(page)
	page = writer.pages[-1]
	if config.draw_fold_lines or config.draw_outlines:
		page.merge_page(build_guide_overlay(config))

	icons_drawn = 0
	items_drawn = 0
	for index in range(QUADRANT_COUNT):
		sections = pack_result.quadrants[index]
		if index > 0 and not sections:
			continue
		tile_page, tile_icons = build_quadrant_tile(
			index,
			sections,
			model,
			config,
			icon_keys,
			icon_cache,
		)
		icons_drawn += tile_icons
		items_drawn += sum(len(section.items) for section in sections)
		x, y = geometry.quadrant_origin(index)
		page.merge_transformed_page(tile_page, pypdf.Transformation().translate(x, y))

	writer.write(str(output_path))

	icons_missing = 0
	for sections in pack_result.quadrants:
		for section in sections:
			for item in section.items:
				key = icon_keys.get(item)
				if key is not None and key not in icon_cache:
					icons_missing += 1

	return RenderResult(
		entries_per_quadrant=[len(sections) for sections in pack_result.quadrants],
		items_drawn=items_drawn,
		icons_drawn=icons_drawn,
		icons_missing=icons_missing,
		icon_keys=icon_keys,
		placed_items=pack_result.placed_items,
		dropped_items=pack_result.dropped_items,
	)


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	model: ListModel,
	pack_result: PackResult,
	result: RenderResult,
	config: RenderConfig,
) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		model: Parsed list model.
		pack_result: Packed quadrants.
		result: Render result.
		config: Render configuration.
	"""
	geometry = config.geometry
	quadrants = []
	for name, sections in zip(QUADRANT_NAMES, pack_result.quadrants):
		quadrants.append(
			{
				"quadrant": name,
				"sections": [
					{"name": section.name, "items": list(section.items)}
					for section in sections
				],
			}
		)
	data = {
		"title": model.title,
		"quadrants": quadrants,
		"icon_keys": result.icon_keys,
		"total_items": pack_result.total_items,
		"placed_items": pack_result.placed_items,
		"dropped_items": pack_result.dropped_items,
		"icons_drawn": result.icons_drawn,
		"icons_missing": result.icons_missing,
		"layout": {
			"page_width": geometry.page_width,
			"page_height": geometry.page_height,
			"column_width": geometry.column_width,
			"quadrant_height": geometry.quadrant_height,
			"gutter": geometry.gutter,
			"title_block_height": geometry.title_block_height,
			"section_gap": geometry.section_gap,
			"quadrant_leakage": list(geometry.quadrant_leakage),
			"title_size": config.text_size.title_size,
			"heading_size": config.text_size.heading_size,
			"item_size": config.text_size.item_size,
		},
		"fonts": {
			"regular": DEFAULT_FONT_REGULAR,
			"bold": DEFAULT_FONT_BOLD,
		},
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)
