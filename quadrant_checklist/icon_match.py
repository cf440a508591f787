"""
Item text to icon key matching.
"""

# local repo modules
import quadrant_checklist as qc
import quadrant_checklist.lexicon
import quadrant_checklist.textnorm


IconLexicon = qc.lexicon.IconLexicon
icon_key_for_filename = qc.lexicon.icon_key_for_filename
normalize = qc.textnorm.normalize
strip_modifiers = qc.textnorm.strip_modifiers
singularize = qc.textnorm.singularize

MAX_TAIL_NGRAM = 3


#============================================
def lookup_synonym(phrase: str, lexicon: IconLexicon) -> str | None:
	"""
	Look up a phrase in the synonym table.

	Args:
		phrase: Normalized phrase.
		lexicon: Icon lexicon.

	Returns:
		Canonical icon key or None.
	"""
	target = lexicon.synonyms.get(phrase)
	if target is None:
		return None
	if lexicon.enforce_canonical and target not in lexicon.canonical:
		return None
	return target


#============================================
def lookup_direct(phrase: str, lexicon: IconLexicon) -> str | None:
	"""
	Use a phrase directly as an icon key.

	Args:
		phrase: Normalized phrase.
		lexicon: Icon lexicon.

	Returns:
		Icon key, or None when the whitelist rejects it.
	"""
	key = icon_key_for_filename(phrase)
	if not key:
		return None
	if lexicon.enforce_canonical and key not in lexicon.canonical:
		return None
	return key


#============================================
def lookup_phrase(phrase: str, lexicon: IconLexicon) -> str | None:
	key = lookup_synonym(phrase, lexicon)
	if key is not None:
		return key
	return lookup_direct(phrase, lexicon)


#============================================
def match_icon_key(raw_text: str, lexicon: IconLexicon) -> str | None:
	"""
	Map raw item text to an icon key.

	Tries synonyms on the whole phrase, then the whole singular phrase, then
	tail n-grams (grocery descriptions put the noun last), then each token.

	Args:
		raw_text: Item text as written in the list.
		lexicon: Icon lexicon.

	Returns:
		Filename-safe icon key or None.
	"""
	cleaned = normalize(strip_modifiers(normalize(raw_text)))
	if not cleaned:
		return None

	tokens = [singularize(token) for token in cleaned.split()]
	full_singular = " ".join(tokens)

	for phrase in (cleaned, full_singular):
		key = lookup_synonym(phrase, lexicon)
		if key is not None:
			return key

	if full_singular:
		key = lookup_direct(full_singular, lexicon)
		if key is not None:
			return key

	for size in range(min(MAX_TAIL_NGRAM, len(tokens)), 0, -1):
		key = lookup_phrase(" ".join(tokens[-size:]), lexicon)
		if key is not None:
			return key

	if tokens:
		key = lookup_phrase(tokens[-1], lexicon)
		if key is not None:
			return key

	for token in tokens:
		key = lookup_phrase(token, lexicon)
		if key is not None:
			return key
	return None
