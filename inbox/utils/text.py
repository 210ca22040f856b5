import warnings

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning


# message bodies are often bare URLs or paths
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)


def strip_markup(text: str | None) -> str:
    """Return the visible text of an HTML fragment, entities decoded and trimmed."""
    if not text:
        return ""
    return BeautifulSoup(text, "html.parser").get_text().strip()


def is_blank(text: str | None) -> bool:
    return not strip_markup(text)
