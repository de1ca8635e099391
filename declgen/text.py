"""Description clean-up helpers applied while normalizing doclets."""

import re

# the tag line plus following lines up to a blank line or the next tag
_EXAMPLE_BLOCK = re.compile(r"^[ \t]*@(?:example|sample)\b.*(?:\n(?![ \t]*(?:@|$)).*)*\n?", re.MULTILINE)
_JSDOC_LINK = re.compile(r"\{@link\s+([^\s|}]+)(?:\s*\|\s*|\s+)?([^}]*)\}")
_MARKDOWN_LINK = re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)")
_URL = re.compile(r"https?://[^\s)\]|}\"'<>]+")
_BLANK_LINES = re.compile(r"\n{3,}")


def remove_examples(text: str) -> str:
    """Drop @example and @sample blocks."""
    return _BLANK_LINES.sub("\n\n", _EXAMPLE_BLOCK.sub("", text)).strip()


def remove_links(text: str, removed_links: list[str]) -> str:
    """Replace inline links with their label and collect the link targets.

    Handles ``{@link target|label}``, ``{@link target label}``,
    ``{@link target}`` and markdown ``[label](target)``.
    """

    def jsdoc(match: re.Match[str]) -> str:
        target, label = match.group(1), match.group(2).strip()
        removed_links.append(target)
        return label or target

    def markdown(match: re.Match[str]) -> str:
        removed_links.append(match.group(2))
        return match.group(1)

    return _MARKDOWN_LINK.sub(markdown, _JSDOC_LINK.sub(jsdoc, text))


def extract_urls(text: str) -> list[str]:
    return _URL.findall(text)
