"""
Shared configuration and constants.
"""

# Standard Library
import dataclasses
import pathlib


POINTS_PER_INCH = 72.0
PAGE_WIDTH = 8.5 * POINTS_PER_INCH
PAGE_HEIGHT = 11.0 * POINTS_PER_INCH
QUADRANT_COUNT = 4
QUADRANT_NAMES = ("TL", "TR", "BL", "BR")

DEFAULT_MARGIN = 28.8
DEFAULT_GUTTER = 28.8
DEFAULT_SECTION_GAP = 8.0
DEFAULT_SAFETY_EPSILON = 1.0
# Overflow guards for the two top quadrants, tuned for Helvetica at the presets below.
DEFAULT_QUADRANT_LEAKAGE = (4.0, 4.0, 0.0, 0.0)

DEFAULT_FONT_REGULAR = "Helvetica"
DEFAULT_FONT_BOLD = "Helvetica-Bold"
TITLE_LEADING = 1.2
TITLE_SPACING = 6.0
HEADING_LEADING = 1.25
HEADING_SPACING = 3.0
ITEM_LEADING = 1.2
ITEM_SPACING = 2.0
CHECKBOX_SCALE = 0.7
CHECKBOX_GAP = 4.0
ICON_SCALE = 1.1
ICON_GAP = 3.0
RULE_THICKNESS = 0.5
FOLD_LINE_GRAY = 0.75

CONTINUATION_SUFFIX = " (cont.)"
DEFAULT_TITLE = "List"
IMPLICIT_SECTION_NAME = "Items"
EMPTY_STATE_MESSAGE = "All items are checked. Nothing left to buy!"

ICON_EXTENSION = ".png"
SNAPSHOT_DPI = 150
DEBOUNCE_SECONDS = 0.2
WATCH_POLL_SECONDS = 0.05

PACKAGE_DIR = pathlib.Path(__file__).resolve().parent
DEFAULT_ICON_MAP_PATH = PACKAGE_DIR / "icon-map.json"
SAMPLE_LIST_PATH = PACKAGE_DIR / "sample.md"


@dataclasses.dataclass(frozen=True)
class TextSizePreset:
	title_size: float
	heading_size: float
	item_size: float


TEXT_SIZE_PRESETS = {
	"small": TextSizePreset(title_size=16.2, heading_size=11.4, item_size=10.8),
	"normal": TextSizePreset(title_size=18.6, heading_size=12.6, item_size=12.0),
	"large": TextSizePreset(title_size=21.0, heading_size=13.8, item_size=13.8),
	"xlarge": TextSizePreset(title_size=23.4, heading_size=15.0, item_size=15.6),
}
DEFAULT_TEXT_SIZE = "normal"


@dataclasses.dataclass(frozen=True)
class PageGeometry:
	"""
	Print geometry of the folded quadrant page, in points.

	Quadrants are indexed in visiting order: 0=TL, 1=TR, 2=BL, 3=BR.
	"""
	page_width: float = PAGE_WIDTH
	page_height: float = PAGE_HEIGHT
	left_margin: float = DEFAULT_MARGIN
	right_margin: float = DEFAULT_MARGIN
	top_margin: float = DEFAULT_MARGIN
	bottom_margin: float = DEFAULT_MARGIN
	gutter: float = DEFAULT_GUTTER
	title_block_height: float = 0.0
	section_gap: float = DEFAULT_SECTION_GAP
	quadrant_leakage: tuple[float, float, float, float] = DEFAULT_QUADRANT_LEAKAGE
	safety_epsilon: float = DEFAULT_SAFETY_EPSILON

	@property
	def column_width(self) -> float:
		content_width = self.page_width - self.left_margin - self.right_margin
		return (content_width - self.gutter) / 2.0

	@property
	def quadrant_height(self) -> float:
		content_height = self.page_height - self.top_margin - self.bottom_margin
		return (content_height - self.gutter) / 2.0

	#============================================
	def usable_height(self, index: int) -> float:
		"""
		Usable height of a quadrant after leakage compensation.

		Args:
			index: Quadrant index in visiting order.

		Returns:
			Height in points.
		"""
		return self.quadrant_height - self.quadrant_leakage[index]

	#============================================
	def quadrant_origin(self, index: int) -> tuple[float, float]:
		"""
		Bottom-left corner of a quadrant in page coordinates.

		Args:
			index: Quadrant index in visiting order.

		Returns:
			Tuple of (x, y) in points.
		"""
		row = index // 2
		col = index % 2
		x = self.left_margin + col * (self.column_width + self.gutter)
		top = self.page_height - self.top_margin - row * (self.quadrant_height + self.gutter)
		return (x, top - self.quadrant_height)


@dataclasses.dataclass
class RenderConfig:
	geometry: PageGeometry
	text_size: TextSizePreset
	icon_dir: pathlib.Path | None
	draw_fold_lines: bool
	draw_outlines: bool


#============================================
def inches_to_points(value: float) -> float:
	"""
	Convert inches to points.

	Args:
		value: Inches value.

	Returns:
		Points value.
	"""
	return value * POINTS_PER_INCH


#============================================
def compute_title_block_height(text_size: TextSizePreset, line_count: int = 1) -> float:
	"""
	Height reserved at the top of the first quadrant for the list title.

	Args:
		text_size: Active text size preset.
		line_count: Number of wrapped title lines.

	Returns:
		Height in points.
	"""
	line_count = max(1, line_count)
	return line_count * text_size.title_size * TITLE_LEADING + TITLE_SPACING


#============================================
def build_geometry(
	text_size: TextSizePreset,
	margin: float = DEFAULT_MARGIN,
	gutter: float = DEFAULT_GUTTER,
	quadrant_leakage: tuple[float, float, float, float] = DEFAULT_QUADRANT_LEAKAGE,
) -> PageGeometry:
	"""
	Build Letter portrait geometry for a text size preset.

	Args:
		text_size: Active text size preset.
		margin: Margin applied on all four sides.
		gutter: Fold gutter between quadrants.
		quadrant_leakage: Per-quadrant height compensation.

	Returns:
		PageGeometry.
	"""
	return PageGeometry(
		left_margin=margin,
		right_margin=margin,
		top_margin=margin,
		bottom_margin=margin,
		gutter=gutter,
		title_block_height=compute_title_block_height(text_size),
		quadrant_leakage=quadrant_leakage,
	)
