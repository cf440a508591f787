"""
Pytest configuration for local imports and shared fixtures.
"""

# Standard Library
import os
import sys

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()

# PIP3 modules
import pytest

# local repo modules
import quadrant_checklist.config
import quadrant_checklist.lexicon


#============================================
@pytest.fixture
def bundled_lexicon() -> quadrant_checklist.lexicon.IconLexicon:
	"""
	Load the icon map shipped with the package.
	"""
	lexicon, warning = quadrant_checklist.lexicon.load_lexicon(
		quadrant_checklist.config.DEFAULT_ICON_MAP_PATH,
	)
	assert warning is None
	return lexicon
