import json
import pathlib

import quadrant_checklist.lexicon as lexicon_lib


#============================================
def test_load_lexicon_normalizes_keys(tmp_path: pathlib.Path) -> None:
	"""
	Underscored and spaced synonym phrases are stored in one form.
	"""
	path = tmp_path / "icon-map.json"
	payload = {
		"canonical": ["Apple", "toilet paper"],
		"synonyms": {"Granny_Smith": "apple", "TP": "toilet paper"},
	}
	path.write_text(json.dumps(payload), encoding="utf-8")
	lexicon, warning = lexicon_lib.load_lexicon(path)
	assert warning is None
	assert lexicon.canonical == frozenset({"apple", "toilet_paper"})
	assert lexicon.synonyms["granny smith"] == "apple"
	assert lexicon.synonyms["tp"] == "toilet_paper"
	assert lexicon.enforce_canonical


#============================================
def test_missing_file_degrades_to_empty(tmp_path: pathlib.Path) -> None:
	"""
	A missing icon map gives an empty lexicon and a warning.
	"""
	lexicon, warning = lexicon_lib.load_lexicon(tmp_path / "absent.json")
	assert warning is not None
	assert not lexicon.canonical
	assert not lexicon.synonyms
	assert not lexicon.enforce_canonical


#============================================
def test_malformed_json_degrades_to_empty(tmp_path: pathlib.Path) -> None:
	"""
	Broken JSON and wrong shapes never raise.
	"""
	broken = tmp_path / "broken.json"
	broken.write_text("{not json", encoding="utf-8")
	lexicon, warning = lexicon_lib.load_lexicon(broken)
	assert warning is not None
	assert not lexicon.canonical

	wrong_shape = tmp_path / "list.json"
	wrong_shape.write_text("[1, 2, 3]", encoding="utf-8")
	lexicon, warning = lexicon_lib.load_lexicon(wrong_shape)
	assert warning is not None

	wrong_fields = tmp_path / "fields.json"
	wrong_fields.write_text('{"synonyms": ["a"]}', encoding="utf-8")
	lexicon, warning = lexicon_lib.load_lexicon(wrong_fields)
	assert warning is not None


#============================================
def test_synonyms_only_is_whitelist_free(tmp_path: pathlib.Path) -> None:
	"""
	Without canonical keys the whitelist is off unless forced.
	"""
	path = tmp_path / "icon-map.json"
	path.write_text('{"synonyms": {"scallion": "onion"}}', encoding="utf-8")
	lexicon, _warning = lexicon_lib.load_lexicon(path)
	assert not lexicon.enforce_canonical
	forced, _warning = lexicon_lib.load_lexicon(path, enforce_canonical=True)
	assert forced.enforce_canonical


#============================================
def test_icon_key_for_filename() -> None:
	"""
	Spaces become single underscores.
	"""
	assert lexicon_lib.icon_key_for_filename("bell  pepper") == "bell_pepper"
	assert lexicon_lib.icon_key_for_filename("") == ""
