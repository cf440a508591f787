import quadrant_checklist.config as config
import quadrant_checklist.list_parser as list_parser
import quadrant_checklist.pack as pack


Section = list_parser.Section
UNIT_HEIGHT = 10.0


#============================================
def build_geometry(
	quadrant_height: float = 100.0,
	section_gap: float = 0.0,
	title_block_height: float = 0.0,
	leakage: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0),
) -> config.PageGeometry:
	"""
	Build a marginless geometry with a chosen quadrant height.
	"""
	return config.PageGeometry(
		page_width=200.0,
		page_height=quadrant_height * 2.0,
		left_margin=0.0,
		right_margin=0.0,
		top_margin=0.0,
		bottom_margin=0.0,
		gutter=0.0,
		title_block_height=title_block_height,
		section_gap=section_gap,
		quadrant_leakage=leakage,
		safety_epsilon=0.0,
	)


#============================================
def unit_measure(name: str, items) -> float:
	return len(items) * UNIT_HEIGHT


#============================================
def make_section(name: str, count: int) -> Section:
	return Section(name=name, items=tuple(f"{name}{index}" for index in range(count)))


#============================================
def flatten(result: pack.PackResult) -> list[str]:
	items: list[str] = []
	for sections in result.quadrants:
		for section in sections:
			items.extend(section.items)
	return items


#============================================
def test_everything_fits_in_first_quadrant() -> None:
	"""
	Small lists stay in TL with names and order intact.
	"""
	sections = [make_section("A", 2), make_section("B", 3)]
	result = pack.pack_sections(sections, unit_measure, build_geometry(section_gap=5.0))
	assert result.quadrants[0] == sections
	assert result.quadrants[1:] == [[], [], []]
	assert result.placed_items == 5
	assert result.dropped_items == 0


#============================================
def test_exact_fill_is_placed_whole() -> None:
	"""
	A section that exactly fills the capacity is not split.
	"""
	result = pack.pack_sections([make_section("A", 10)], unit_measure, build_geometry())
	assert result.quadrants[0] == [make_section("A", 10)]
	assert result.quadrants[1] == []


#============================================
def test_split_at_largest_fitting_prefix() -> None:
	"""
	The split point is the largest item count that fits after the gap.
	"""
	sections = [make_section("A", 4), make_section("B", 10)]
	result = pack.pack_sections(sections, unit_measure, build_geometry(section_gap=5.0))
	# 100 - 40 - 5 leaves room for 5 items of 10
	assert [section.name for section in result.quadrants[0]] == ["A", "B"]
	assert len(result.quadrants[0][1].items) == 5
	assert result.quadrants[1] == [
		Section(name="B (cont.)", items=make_section("B", 10).items[5:]),
	]
	assert result.dropped_items == 0


#============================================
def test_long_section_spans_several_quadrants() -> None:
	"""
	Continuation pieces stay contiguous and keep the source order.
	"""
	section = make_section("A", 25)
	result = pack.pack_sections([section], unit_measure, build_geometry())
	assert [len(entries[0].items) for entries in result.quadrants[:3]] == [10, 10, 5]
	assert result.quadrants[0][0].name == "A"
	assert result.quadrants[1][0].name == "A (cont.)"
	assert result.quadrants[2][0].name == "A (cont.)"
	assert result.quadrants[3] == []
	assert flatten(result) == list(section.items)


#============================================
def test_overflow_is_truncated_and_counted() -> None:
	"""
	Content beyond the fourth quadrant is dropped silently.
	"""
	sections = [make_section(name, 10) for name in "ABCDE"]
	result = pack.pack_sections(sections, unit_measure, build_geometry())
	assert [entries[0].name for entries in result.quadrants] == ["A", "B", "C", "D"]
	assert result.total_items == 50
	assert result.placed_items == 40
	assert result.dropped_items == 10
	assert len(flatten(result)) == 40


#============================================
def test_item_count_preserved_when_it_fits() -> None:
	"""
	Every item is placed exactly once when capacity allows.
	"""
	sections = [make_section(name, count) for name, count in (("A", 7), ("B", 9), ("C", 12), ("D", 3))]
	result = pack.pack_sections(sections, unit_measure, build_geometry(section_gap=2.0))
	expected = [item for section in sections for item in section.items]
	assert flatten(result) == expected
	assert result.dropped_items == 0


#============================================
def test_title_block_reduces_first_quadrant() -> None:
	"""
	The title block takes room from TL only.
	"""
	geometry = build_geometry(title_block_height=30.0)
	result = pack.pack_sections([make_section("A", 17)], unit_measure, geometry)
	assert len(result.quadrants[0][0].items) == 7
	assert len(result.quadrants[1][0].items) == 10


#============================================
def test_leakage_compensation_per_quadrant() -> None:
	"""
	Leakage constants shrink the matching quadrant.
	"""
	geometry = build_geometry(leakage=(10.0, 20.0, 0.0, 0.0))
	assert pack.compute_capacity(geometry, 0) == 90.0
	assert pack.compute_capacity(geometry, 1) == 80.0
	result = pack.pack_sections([make_section("A", 30)], unit_measure, geometry)
	assert [len(entries[0].items) for entries in result.quadrants[:3]] == [9, 8, 10]
	assert len(result.quadrants[3][0].items) == 3


#============================================
def test_quadrant_skipped_when_no_item_fits() -> None:
	"""
	When not even one item fits, the section moves on unsplit.
	"""
	def measure_with_heading(name: str, items) -> float:
		return 20.0 + len(items) * UNIT_HEIGHT

	sections = [make_section("A", 5), make_section("B", 3)]
	result = pack.pack_sections(sections, measure_with_heading, build_geometry(section_gap=5.0))
	# A uses 70, leaving 25 which is less than gap plus heading plus one item
	assert result.quadrants[0] == [sections[0]]
	assert result.quadrants[1] == [sections[1]]


#============================================
def test_find_largest_fit() -> None:
	"""
	Binary search returns the largest fitting count and 0 when none fits.
	"""
	items = [str(index) for index in range(13)]
	assert pack.find_largest_fit("X", items, unit_measure, 45.0) == 4
	assert pack.find_largest_fit("X", items, unit_measure, 130.0) == 13
	assert pack.find_largest_fit("X", items, unit_measure, 9.9) == 0
	assert pack.find_largest_fit("X", [], unit_measure, 100.0) == 0


#============================================
def test_empty_input() -> None:
	"""
	No sections gives four empty quadrants.
	"""
	result = pack.pack_sections([], unit_measure, build_geometry())
	assert result.quadrants == [[], [], [], []]
	assert result.total_items == 0
