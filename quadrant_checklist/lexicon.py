"""
Icon lexicon loading.
"""

# Standard Library
import dataclasses
import json
import pathlib
import types
import typing

# local repo modules
import quadrant_checklist as qc
import quadrant_checklist.textnorm


normalize = qc.textnorm.normalize


@dataclasses.dataclass(frozen=True)
class IconLexicon:
	canonical: frozenset[str] = frozenset()
	synonyms: typing.Mapping[str, str] = dataclasses.field(
		default_factory=lambda: types.MappingProxyType({})
	)
	enforce_canonical: bool = False


#============================================
def icon_key_for_filename(phrase: str) -> str:
	"""
	Convert a phrase into a filename-safe icon key.

	Args:
		phrase: Phrase or key.

	Returns:
		Key with spaces replaced by underscores.
	"""
	return "_".join(phrase.split())


#============================================
def build_lexicon(
	canonical: typing.Iterable[str] | None = None,
	synonyms: typing.Mapping[str, str] | None = None,
	enforce_canonical: bool | None = None,
) -> IconLexicon:
	"""
	Build an immutable lexicon from raw canonical keys and synonyms.

	Synonym phrases are normalized so underscored and spaced forms collide.
	Canonical keys are stored in filename form. The whitelist is enforced
	by default only when canonical keys are provided.

	Args:
		canonical: Canonical icon keys.
		synonyms: Phrase to canonical key mapping.
		enforce_canonical: Override for whitelist enforcement.

	Returns:
		IconLexicon.
	"""
	canonical_keys = frozenset(
		icon_key_for_filename(normalize(key))
		for key in (canonical or [])
		if normalize(key)
	)
	synonym_map: dict[str, str] = {}
	for phrase, target in (synonyms or {}).items():
		normalized_phrase = normalize(phrase)
		target_key = icon_key_for_filename(str(target).strip().lower())
		if not normalized_phrase or not target_key:
			continue
		synonym_map[normalized_phrase] = target_key
	if enforce_canonical is None:
		enforce_canonical = bool(canonical_keys)
	return IconLexicon(
		canonical=canonical_keys,
		synonyms=types.MappingProxyType(synonym_map),
		enforce_canonical=enforce_canonical,
	)


#============================================
def load_lexicon(
	path: pathlib.Path,
	enforce_canonical: bool | None = None,
) -> tuple[IconLexicon, str | None]:
	"""
	Load an icon lexicon JSON file.

	A missing or malformed file yields an empty lexicon plus a warning
	message instead of an error.

	Args:
		path: Path to the icon map JSON.
		enforce_canonical: Override for whitelist enforcement.

	Returns:
		Tuple of (lexicon, warning or None).
	"""
	try:
		with path.open("r", encoding="utf-8") as handle:
			data = json.load(handle)
	except (OSError, UnicodeDecodeError, json.JSONDecodeError) as error:
		return (IconLexicon(), f"Could not load icon map {path}: {error}. Icons may be missing.")

	if not isinstance(data, dict):
		return (IconLexicon(), f"Icon map {path} is not a JSON object. Icons may be missing.")
	canonical = data.get("canonical") or []
	synonyms = data.get("synonyms") or {}
	if not isinstance(canonical, list) or not isinstance(synonyms, dict):
		return (IconLexicon(), f"Icon map {path} has unexpected field types. Icons may be missing.")
	canonical = [str(key) for key in canonical]
	lexicon = build_lexicon(canonical, synonyms, enforce_canonical)
	return (lexicon, None)
