"""
Fragment deep links carrying an initial list.

A link looks like ``page.html#text=<payload>&autoprint=1``. The payload is
percent-encoded text, or base64 of the UTF-8 text.
"""

# Standard Library
import base64
import binascii
import dataclasses
import re
import urllib.parse


BASE64_PATTERN = re.compile(r"^[A-Za-z0-9+/_-]+={0,2}$")
TRUE_VALUES = ("1", "true")


@dataclasses.dataclass(frozen=True)
class DeepLink:
	text: str | None
	autoprint: bool


#============================================
def extract_fragment(link: str) -> str:
	"""
	Return the fragment part of a link, or the link itself when bare.

	Args:
		link: Full URL, "#..." fragment or bare query string.

	Returns:
		Fragment without the leading "#".
	"""
	if "#" in link:
		return link.split("#", 1)[1]
	return link


#============================================
def decode_base64_text(value: str) -> str | None:
	"""
	Decode a base64 payload when it clearly holds multi-line text.

	Args:
		value: Candidate payload.

	Returns:
		Decoded text or None.
	"""
	if not BASE64_PATTERN.match(value):
		return None
	padded = value + "=" * (-len(value) % 4)
	try:
		raw = base64.urlsafe_b64decode(padded.replace("+", "-").replace("/", "_"))
		text = raw.decode("utf-8")
	except (binascii.Error, ValueError):
		return None
	if "\n" not in text:
		return None
	return text


#============================================
def decode_text_payload(value: str) -> str:
	"""
	Decode the text payload of a deep link.

	Args:
		value: Query value, already percent-decoded once.

	Returns:
		List text.
	"""
	decoded = decode_base64_text(value)
	if decoded is not None:
		return decoded
	return urllib.parse.unquote(value)


#============================================
def parse_deep_link(link: str) -> DeepLink:
	"""
	Parse the text and autoprint parameters of a deep link.

	Args:
		link: Link or fragment.

	Returns:
		DeepLink with text None when no payload is present.
	"""
	fragment = extract_fragment(link.strip())
	params = dict(urllib.parse.parse_qsl(fragment, keep_blank_values=True))
	raw_text = params.get("text")
	text = None
	if raw_text:
		text = decode_text_payload(raw_text)
	autoprint = params.get("autoprint", "").strip().lower() in TRUE_VALUES
	return DeepLink(text=text, autoprint=autoprint)
