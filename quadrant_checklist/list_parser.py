"""
Checklist text parsing.
"""

# Standard Library
import dataclasses
import enum
import re

# local repo modules
import quadrant_checklist as qc
import quadrant_checklist.config


DEFAULT_TITLE = qc.config.DEFAULT_TITLE
IMPLICIT_SECTION_NAME = qc.config.IMPLICIT_SECTION_NAME

CHECKED_GLYPH = "✓"
UNCHECKED_GLYPH = "◦"


class LineKind(enum.Enum):
	CHECKED_ITEM = "checked_item"
	UNCHECKED_ITEM = "unchecked_item"
	HEADING = "heading"
	PLAIN = "plain"


@dataclasses.dataclass(frozen=True)
class ParsedLine:
	kind: LineKind
	text: str
	level: int = 0


@dataclasses.dataclass(frozen=True)
class LineRule:
	kind: LineKind
	pattern: re.Pattern


@dataclasses.dataclass(frozen=True)
class Section:
	name: str
	items: tuple[str, ...]


@dataclasses.dataclass(frozen=True)
class ListModel:
	title: str
	sections: tuple[Section, ...]


# Order matters: a checkbox line also matches the plain bullet pattern.
LINE_RULES = (
	LineRule(LineKind.CHECKED_ITEM, re.compile(r"^\s*[-*+]\s*\[[xX]\]\s+(.*)$")),
	LineRule(LineKind.UNCHECKED_ITEM, re.compile(r"^\s*[-*+]\s*\[\s\]\s+(.*)$")),
	LineRule(LineKind.CHECKED_ITEM, re.compile(r"^\s*" + CHECKED_GLYPH + r"\s+(.*)$")),
	LineRule(LineKind.UNCHECKED_ITEM, re.compile(r"^\s*" + UNCHECKED_GLYPH + r"\s+(.*)$")),
	LineRule(LineKind.UNCHECKED_ITEM, re.compile(r"^\s*[-*+]\s+(.*)$")),
	LineRule(LineKind.HEADING, re.compile(r"^\s*(#{1,6})\s+(.*)$")),
)


#============================================
def classify_line(line: str) -> ParsedLine:
	"""
	Classify a single non-blank line.

	Args:
		line: Line with trailing whitespace removed.

	Returns:
		ParsedLine from the first matching rule, or a PLAIN line.
	"""
	for rule in LINE_RULES:
		match = rule.pattern.match(line)
		if match is None:
			continue
		if rule.kind == LineKind.HEADING:
			return ParsedLine(LineKind.HEADING, match.group(2).strip(), len(match.group(1)))
		return ParsedLine(rule.kind, match.group(1).strip())
	return ParsedLine(LineKind.PLAIN, line.strip())


#============================================
def parse_list(source_text: str) -> ListModel:
	"""
	Parse freeform checklist text into a title and sections.

	Checked items are dropped and sections left without items are removed.
	Parsing never fails; unrecognized lines become the title or a section name.

	Args:
		source_text: Raw multi-line text.

	Returns:
		ListModel.
	"""
	title: str | None = None
	sections: list[tuple[str, list[str]]] = []
	for raw_line in source_text.splitlines():
		line = raw_line.rstrip()
		if not line.strip():
			continue
		parsed = classify_line(line)
		if parsed.kind == LineKind.HEADING:
			if parsed.level == 1 and title is None:
				title = parsed.text
			else:
				sections.append((parsed.text, []))
			continue
		if parsed.kind in (LineKind.CHECKED_ITEM, LineKind.UNCHECKED_ITEM):
			if not sections:
				sections.append((IMPLICIT_SECTION_NAME, []))
			if parsed.kind == LineKind.UNCHECKED_ITEM:
				sections[-1][1].append(parsed.text)
			continue
		if title is None:
			title = parsed.text
		else:
			sections.append((parsed.text, []))

	kept = tuple(
		Section(name=name, items=tuple(items))
		for name, items in sections
		if items
	)
	return ListModel(title=title or DEFAULT_TITLE, sections=kept)


#============================================
def count_items(sections: tuple[Section, ...] | list[Section]) -> int:
	"""
	Count items across sections.

	Args:
		sections: Sections to count.

	Returns:
		Total item count.
	"""
	return sum(len(section.items) for section in sections)
