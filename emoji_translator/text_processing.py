"""
Response Post-processing

Turns raw model output into the string returned to the client.
"""

# Standard library
import re

# Pictographic ranges kept by text-to-emoji extraction: emoticons, misc
# symbols & pictographs, transport & map, regional indicators, misc symbols,
# dingbats.
EMOJI_PATTERN = re.compile(
    "[\U0001F600-\U0001F64F"
    "\U0001F300-\U0001F5FF"
    "\U0001F680-\U0001F6FF"
    "\U0001F1E0-\U0001F1FF"
    "\u2600-\u26FF"
    "\u2700-\u27BF]"
)

_LEADING_QUOTE = re.compile(r"^[\"'“”]")
_TRAILING_QUOTE = re.compile(r"[\"'“”]$")


def contains_emojis(text: str) -> bool:
    """Returns True if the text holds at least one pictographic character."""
    return bool(text) and EMOJI_PATTERN.search(text) is not None


def extract_emojis(response: str) -> str:
    """
    Keeps only pictographic characters, joined by single spaces.

    Falls back to the raw response when it contains no emoji at all.
    """
    emojis = EMOJI_PATTERN.findall(response)
    if emojis:
        return " ".join(emojis)
    return response


def clean_text_response(response: str) -> str:
    """
    Normalizes a plain-text answer.

    Strips one surrounding quote character on each side and collapses all
    whitespace, newlines included, to single spaces.
    """
    cleaned = response.strip()
    cleaned = _LEADING_QUOTE.sub("", cleaned)
    cleaned = _TRAILING_QUOTE.sub("", cleaned)
    return " ".join(cleaned.split())
