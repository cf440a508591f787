import quadrant_checklist.textnorm as textnorm


#============================================
def test_normalize_strips_annotations_and_case() -> None:
	"""
	Parenthesized notes vanish and the rest is lower-cased.
	"""
	assert textnorm.normalize("Bell Peppers (organic)") == "bell peppers"
	assert textnorm.normalize("Eggs [check date]") == "eggs"
	assert textnorm.normalize("Milk (2% (not skim))") == "milk"


#============================================
def test_normalize_accents_and_punctuation() -> None:
	"""
	Diacritics are removed and punctuation other than hyphens is dropped.
	"""
	assert textnorm.normalize("Jalapeño!") == "jalapeno"
	assert textnorm.normalize("Crème  fraîche") == "creme fraiche"
	assert textnorm.normalize("half-and-half, 1 qt.") == "half-and-half 1 qt"
	assert textnorm.normalize("salt/pepper") == "salt pepper"
	assert textnorm.normalize("toilet_paper") == "toilet paper"
	assert textnorm.normalize("a\\b") == "a b"


#============================================
def test_normalize_possessives() -> None:
	"""
	Possessive suffixes are removed before punctuation stripping.
	"""
	assert textnorm.normalize("Trader Joe's Salsa") == "trader joe salsa"
	assert textnorm.normalize("Farmers' eggs") == "farmers eggs"


#============================================
def test_normalize_empty_inputs() -> None:
	"""
	Empty and punctuation-only inputs normalize to an empty string.
	"""
	assert textnorm.normalize("") == ""
	assert textnorm.normalize("   ") == ""
	assert textnorm.normalize("(just a note)") == ""


#============================================
def test_strip_modifiers() -> None:
	"""
	Descriptor tokens and quantities are removed from the phrase.
	"""
	assert textnorm.strip_modifiers("2 large red bell peppers") == "bell peppers"
	assert textnorm.strip_modifiers("bag of ripe bananas") == "of bananas"
	assert textnorm.strip_modifiers("3x yogurt") == "yogurt"


#============================================
def test_strip_modifiers_keeps_text_when_all_modifiers() -> None:
	"""
	Stripping never turns a non-empty phrase into an empty one.
	"""
	assert textnorm.strip_modifiers("green") == "green"
	assert textnorm.strip_modifiers("large bag") == "large bag"
	assert textnorm.strip_modifiers("") == ""


#============================================
def test_singularize_rules() -> None:
	"""
	Suffix rules apply in order and protect -ss and -us endings.
	"""
	assert textnorm.singularize("boxes") == "box"
	assert textnorm.singularize("hummus") == "hummus"
	assert textnorm.singularize("berries") == "berry"
	assert textnorm.singularize("tomatoes") == "tomato"
	assert textnorm.singularize("peaches") == "peach"
	assert textnorm.singularize("radishes") == "radish"
	assert textnorm.singularize("apples") == "apple"
	assert textnorm.singularize("glass") == "glass"
	assert textnorm.singularize("milk") == "milk"
