"""Contract template post-processing.

Turns enhancer output into the HTML fragment stored as a template body, and
substitutes template placeholders when no enhancer output is available.
"""

import re

_MONTHS = (
    "January|February|March|April|May|June|July|"
    "August|September|October|November|December"
)

# Applied in order; later patterns never see text replaced by earlier ones.
PLACEHOLDER_PATTERNS: list[tuple[re.Pattern, str]] = [
    (
        re.compile(
            r"\b[A-Z][a-z]+ [A-Z][a-z]+(?:\s+[A-Z][a-z]+)?\b(?=.*(?:Employee|Contractor|Worker))"
        ),
        "{{ candidate_name }}",
    ),
    (
        re.compile(
            r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*\s+(?:Inc\.|LLC\b|Corporation\b|Corp\.|Company\b)"
        ),
        "{{ company_name }}",
    ),
    (re.compile(r"\$[\d,]+(?:\.\d{2})?"), "{{ salary_amount }}"),
    (re.compile(rf"\b(?:{_MONTHS})\s+\d{{1,2}},?\s+\d{{4}}\b"), "{{ start_date }}"),
    (
        re.compile(r"\b(?:full-time|part-time|contract|temporary|permanent)\b", re.IGNORECASE),
        "{{ employment_type }}",
    ),
]

_PLACEHOLDER_OR_ARTIFACT_RE = re.compile(r"(\{\{[^}]*\}\})|[*_#`~\[\]]")


def basic_placeholder_replacement(content: str) -> str:
    """Replace names, companies, salaries, dates and employment types with placeholders."""
    for pattern, placeholder in PLACEHOLDER_PATTERNS:
        content = pattern.sub(placeholder, content)
    return content


def clean_markdown_from_response(text: str) -> str:
    """Convert markdown in an enhancer response into simple HTML.

    Bold, italic, headings and bullet lists become their HTML tags, code
    fences are dropped and the result is wrapped in paragraphs. ``{{ ... }}``
    placeholders are left untouched.
    """
    cleaned = re.sub(r"\*\*([^*\n]+?)\*\*", r"<strong>\1</strong>", text)
    cleaned = re.sub(r"__([^_\n]+?)__", r"<strong>\1</strong>", cleaned)

    cleaned = re.sub(r"^#{3}\s+(.+)$", r"<h3>\1</h3>", cleaned, flags=re.MULTILINE)
    cleaned = re.sub(r"^#{2}\s+(.+)$", r"<h2>\1</h2>", cleaned, flags=re.MULTILINE)
    cleaned = re.sub(r"^#\s+(.+)$", r"<h1>\1</h1>", cleaned, flags=re.MULTILINE)

    cleaned = re.sub(r"\*([^*\n]+?)\*", r"<em>\1</em>", cleaned)
    cleaned = re.sub(r"\b_([^_\n]+?)_\b", r"<em>\1</em>", cleaned)

    cleaned = re.sub(r"^\s*[-*+]\s+(.+)$", r"<li>\1</li>", cleaned, flags=re.MULTILINE)
    cleaned = re.sub(r"((?:<li>.*</li>\s*)+)", r"<ul>\1</ul>", cleaned)

    cleaned = re.sub(r"```.*?```", "", cleaned, flags=re.DOTALL)
    cleaned = re.sub(r"`([^`]+)`", r"\1", cleaned)

    cleaned = _PLACEHOLDER_OR_ARTIFACT_RE.sub(lambda m: m.group(1) or "", cleaned)

    cleaned = re.sub(r"\n\s*\n", "</p>\n<p>", cleaned)

    if "<p>" not in cleaned and "<h" not in cleaned and "<ul>" not in cleaned:
        cleaned = f"<p>{cleaned}</p>"
    elif not cleaned.startswith("<"):
        cleaned = "<p>" + cleaned
    if not cleaned.endswith(">"):
        cleaned += "</p>"

    cleaned = re.sub(r"<p>\s*</p>", "", cleaned)
    return re.sub(r"\s+", " ", cleaned).strip()
