"""
Height-aware packing of sections into the four page quadrants.
"""

# Standard Library
import dataclasses
import typing

# local repo modules
import quadrant_checklist as qc
import quadrant_checklist.config
import quadrant_checklist.list_parser
import quadrant_checklist.measure


Section = qc.list_parser.Section
PageGeometry = qc.config.PageGeometry
MeasureFn = qc.measure.MeasureFn

QUADRANT_COUNT = qc.config.QUADRANT_COUNT
CONTINUATION_SUFFIX = qc.config.CONTINUATION_SUFFIX


@dataclasses.dataclass
class PackResult:
	quadrants: list[list[Section]]
	total_items: int
	placed_items: int
	dropped_items: int


#============================================
def compute_capacity(geometry: PageGeometry, quadrant_index: int) -> float:
	"""
	Height available for sections in a quadrant.

	The title block is reserved at the top of the first quadrant.

	Args:
		geometry: Page geometry.
		quadrant_index: Quadrant index in visiting order.

	Returns:
		Capacity in points.
	"""
	capacity = geometry.usable_height(quadrant_index)
	if quadrant_index == 0:
		capacity -= geometry.title_block_height
	return capacity - geometry.safety_epsilon


#============================================
def find_largest_fit(
	name: str,
	items: typing.Sequence[str],
	measure_fn: MeasureFn,
	available: float,
) -> int:
	"""
	Binary search the largest item prefix whose measured height fits.

	Assumes height never decreases as items are added.

	Args:
		name: Section name used for the measurement.
		items: Candidate items.
		measure_fn: Section height function.
		available: Available height in points.

	Returns:
		Largest fitting prefix length, 0 when nothing fits.
	"""
	low = 1
	high = len(items)
	best = 0
	while low <= high:
		middle = (low + high) // 2
		if measure_fn(name, items[:middle]) <= available:
			best = middle
			low = middle + 1
		else:
			high = middle - 1
	return best


#============================================
def pack_sections(
	sections: typing.Sequence[Section],
	measure_fn: MeasureFn,
	geometry: PageGeometry,
) -> PackResult:
	"""
	Pack sections into quadrants TL, TR, BL, BR in a single pass.

	Sections are placed whole when they fit, otherwise split at the largest
	item prefix that fits, with later pieces renamed as continuations.
	Content left over after the fourth quadrant is dropped and counted.

	Args:
		sections: Parsed sections, each with at least one item.
		measure_fn: Section height function, excluding inter-section gaps.
		geometry: Page geometry.

	Returns:
		PackResult.
	"""
	quadrants: list[list[Section]] = [[] for _ in range(QUADRANT_COUNT)]
	total_items = sum(len(section.items) for section in sections)
	placed_items = 0

	quadrant_index = 0
	used_height = 0.0

	for section in sections:
		if quadrant_index >= QUADRANT_COUNT:
			break
		items = list(section.items)
		if not items:
			continue

		gap = geometry.section_gap if quadrants[quadrant_index] else 0.0
		remaining = compute_capacity(geometry, quadrant_index) - used_height
		height = measure_fn(section.name, items)
		if height + gap <= remaining:
			quadrants[quadrant_index].append(Section(name=section.name, items=tuple(items)))
			used_height += gap + height
			placed_items += len(items)
			continue

		cursor = 0
		pieces = 0
		while cursor < len(items) and quadrant_index < QUADRANT_COUNT:
			name = section.name if pieces == 0 else section.name + CONTINUATION_SUFFIX
			rest = items[cursor:]
			gap = geometry.section_gap if quadrants[quadrant_index] else 0.0
			available = compute_capacity(geometry, quadrant_index) - used_height - gap
			count = find_largest_fit(name, rest, measure_fn, available)
			if count == 0:
				quadrant_index += 1
				used_height = 0.0
				continue
			piece = Section(name=name, items=tuple(rest[:count]))
			quadrants[quadrant_index].append(piece)
			used_height += gap + measure_fn(name, piece.items)
			placed_items += count
			cursor += count
			pieces += 1
			if cursor < len(items):
				quadrant_index += 1
				used_height = 0.0

	return PackResult(
		quadrants=quadrants,
		total_items=total_items,
		placed_items=placed_items,
		dropped_items=total_items - placed_items,
	)
