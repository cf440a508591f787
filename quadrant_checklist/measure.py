"""
Section layout and height measurement at print geometry.
"""

# Standard Library
import dataclasses
import typing

# PIP3 modules
import reportlab.pdfbase.pdfmetrics

# local repo modules
import quadrant_checklist as qc
import quadrant_checklist.config


TextSizePreset = qc.config.TextSizePreset
PageGeometry = qc.config.PageGeometry

DEFAULT_FONT_REGULAR = qc.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_BOLD = qc.config.DEFAULT_FONT_BOLD
HEADING_LEADING = qc.config.HEADING_LEADING
HEADING_SPACING = qc.config.HEADING_SPACING
ITEM_LEADING = qc.config.ITEM_LEADING
ITEM_SPACING = qc.config.ITEM_SPACING
CHECKBOX_SCALE = qc.config.CHECKBOX_SCALE
CHECKBOX_GAP = qc.config.CHECKBOX_GAP
ICON_SCALE = qc.config.ICON_SCALE
ICON_GAP = qc.config.ICON_GAP

MeasureFn = typing.Callable[[str, typing.Sequence[str]], float]


@dataclasses.dataclass
class ItemLayout:
	text: str
	lines: list[str]
	height: float


@dataclasses.dataclass
class SectionLayout:
	name: str
	heading_lines: list[str]
	heading_height: float
	items: list[ItemLayout]
	height: float


#============================================
def split_long_word(
	word: str,
	font_name: str,
	font_size: float,
	max_width: float,
) -> list[str]:
	"""
	Break a word into character runs that each fit within a max width.

	Every run holds at least one character, so a limit narrower than a
	single glyph still makes progress.

	Args:
		word: Word without spaces.
		font_name: Font name for width calculation.
		font_size: Font size for width calculation.
		max_width: Maximum run width in points.

	Returns:
		Runs in order; joined they equal the word.
	"""
	pieces: list[str] = []
	current = ""
	for char in word:
		candidate = current + char
		width = reportlab.pdfbase.pdfmetrics.stringWidth(candidate, font_name, font_size)
		if width <= max_width or not current:
			current = candidate
			continue
		pieces.append(current)
		current = char
	if current:
		pieces.append(current)
	return pieces


#============================================
def wrap_text_to_width(
	text: str,
	font_name: str,
	font_size: float,
	max_width: float,
) -> list[str]:
	"""
	Wrap text to fit within a max width.

	A single word wider than the limit is broken across lines by character.

	Args:
		text: Input text.
		font_name: Font name for width calculation.
		font_size: Font size for width calculation.
		max_width: Maximum line width in points.

	Returns:
		Wrapped lines.
	"""
	words = text.split()
	if not words:
		return [text]
	lines: list[str] = []
	current = ""
	for word in words:
		for piece in split_long_word(word, font_name, font_size, max_width):
			candidate = piece if not current else f"{current} {piece}"
			width = reportlab.pdfbase.pdfmetrics.stringWidth(candidate, font_name, font_size)
			if width <= max_width or not current:
				current = candidate
				continue
			lines.append(current)
			current = piece
	if current:
		lines.append(current)
	return lines


#============================================
def wrap_title(title: str, column_width: float, text_size: TextSizePreset) -> list[str]:
	"""
	Wrap the list title in the title font at the column width.
	"""
	return wrap_text_to_width(title, DEFAULT_FONT_BOLD, text_size.title_size, column_width)


#============================================
def fit_title_block(geometry: PageGeometry, title: str, text_size: TextSizePreset) -> PageGeometry:
	"""
	Return geometry whose title block holds every wrapped title line.

	Args:
		geometry: Page geometry.
		title: List title.
		text_size: Active text size preset.

	Returns:
		PageGeometry with title_block_height sized to the wrapped title.
	"""
	lines = wrap_title(title, geometry.column_width, text_size)
	height = qc.config.compute_title_block_height(text_size, len(lines))
	return dataclasses.replace(geometry, title_block_height=height)


#============================================
def compute_label_width(column_width: float, text_size: TextSizePreset) -> float:
	"""
	Width left for item text after the checkbox and icon slots.

	Args:
		column_width: Quadrant column width.
		text_size: Active text size preset.

	Returns:
		Label width in points.
	"""
	checkbox_width = text_size.item_size * CHECKBOX_SCALE + CHECKBOX_GAP
	icon_width = text_size.item_size * ICON_SCALE + ICON_GAP
	return max(1.0, column_width - checkbox_width - icon_width)


#============================================
def layout_section(
	name: str,
	items: typing.Sequence[str],
	column_width: float,
	text_size: TextSizePreset,
) -> SectionLayout:
	"""
	Lay out a section heading and its items at the column width.

	Args:
		name: Section name.
		items: Item texts.
		column_width: Quadrant column width.
		text_size: Active text size preset.

	Returns:
		SectionLayout with wrapped lines and heights.
	"""
	heading_lines = wrap_text_to_width(
		name,
		DEFAULT_FONT_BOLD,
		text_size.heading_size,
		column_width,
	)
	heading_height = len(heading_lines) * text_size.heading_size * HEADING_LEADING + HEADING_SPACING

	label_width = compute_label_width(column_width, text_size)
	line_height = text_size.item_size * ITEM_LEADING
	item_layouts: list[ItemLayout] = []
	for item in items:
		lines = wrap_text_to_width(item, DEFAULT_FONT_REGULAR, text_size.item_size, label_width)
		item_layouts.append(ItemLayout(text=item, lines=lines, height=len(lines) * line_height))

	height = heading_height
	height += sum(item.height for item in item_layouts)
	if item_layouts:
		height += ITEM_SPACING * (len(item_layouts) - 1)
	return SectionLayout(
		name=name,
		heading_lines=heading_lines,
		heading_height=heading_height,
		items=item_layouts,
		height=height,
	)


#============================================
def make_measure_fn(column_width: float, text_size: TextSizePreset) -> MeasureFn:
	"""
	Build a section height function bound to one column width and text size.

	Args:
		column_width: Quadrant column width.
		text_size: Active text size preset.

	Returns:
		Callable of (name, items) returning height in points.
	"""
	def measure_section(name: str, items: typing.Sequence[str]) -> float:
		return layout_section(name, items, column_width, text_size).height

	return measure_section
