"""
Item text normalization for icon matching.
"""

# Standard Library
import re
import unicodedata


ANNOTATION_PATTERN = re.compile(r"\([^()]*\)|\[[^\[\]]*\]")
POSSESSIVE_PATTERN = re.compile(r"(?<=\w)['’]s\b|(?<=s)['’](?=\s|$)")
SEPARATOR_PATTERN = re.compile(r"[_/\\]")
PUNCTUATION_PATTERN = re.compile(r"[^\w\s-]")
WHITESPACE_PATTERN = re.compile(r"\s+")
QUANTITY_PATTERN = re.compile(r"^(?:\d+(?:[.,/]\d+)?x?|x\d+)$")

MODIFIER_WORDS = frozenset({
	# colors
	"red", "green", "yellow", "white", "black", "purple", "golden", "gold",
	# ripeness and state
	"ripe", "unripe", "overripe", "fresh", "organic", "raw", "frozen", "dried",
	# size and quantity
	"large", "small", "medium", "big", "jumbo", "mini", "baby", "extra",
	"dozen", "half", "whole", "lb", "lbs", "oz", "g", "kg", "ml", "ct",
	# packaging
	"bag", "bags", "box", "boxes", "can", "cans", "jar", "jars", "bottle",
	"bottles", "carton", "cartons", "pack", "packs", "package", "packages",
	"bunch", "bunches", "container", "containers", "tub", "tubs",
})


#============================================
def normalize(text: str) -> str:
	"""
	Canonicalize raw item text for matching.

	Strips bracketed annotations and possessives, lower-cases, removes
	diacritics, turns underscores and slashes into spaces, drops punctuation
	other than hyphens and collapses whitespace.

	Args:
		text: Raw item text.

	Returns:
		Normalized text, possibly empty.
	"""
	if not text:
		return ""
	value = text
	# nested annotations unwrap from the inside out
	while True:
		stripped = ANNOTATION_PATTERN.sub(" ", value)
		if stripped == value:
			break
		value = stripped
	value = POSSESSIVE_PATTERN.sub("", value)
	value = value.lower()
	decomposed = unicodedata.normalize("NFKD", value)
	value = "".join(char for char in decomposed if not unicodedata.combining(char))
	value = SEPARATOR_PATTERN.sub(" ", value)
	value = PUNCTUATION_PATTERN.sub("", value)
	value = WHITESPACE_PATTERN.sub(" ", value)
	return value.strip()


#============================================
def is_modifier(token: str) -> bool:
	"""
	Check whether a token is a descriptor rather than an item noun.

	Args:
		token: Normalized token.

	Returns:
		True for descriptor words and bare quantities.
	"""
	if token in MODIFIER_WORDS:
		return True
	return QUANTITY_PATTERN.match(token) is not None


#============================================
def strip_modifiers(text: str) -> str:
	"""
	Remove standalone descriptor tokens.

	Args:
		text: Whitespace separated text.

	Returns:
		Text without descriptors, or the input when nothing would remain.
	"""
	tokens = text.split()
	kept = [token for token in tokens if not is_modifier(token.lower())]
	if not kept:
		return text
	return " ".join(kept)


#============================================
def singularize(word: str) -> str:
	"""
	Singularize a word using ordered suffix rules.

	Args:
		word: Lower-case word.

	Returns:
		Singular form.
	"""
	if word.endswith("ies"):
		return word[:-3] + "y"
	if word.endswith("oes"):
		return word[:-2]
	if word.endswith(("ches", "shes", "xes", "zes")):
		return word[:-2]
	if word.endswith("s") and not word.endswith(("ss", "us")):
		return word[:-1]
	return word
