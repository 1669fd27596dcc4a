"""Links to the external scripture reader."""

from urllib.parse import quote

DEFAULT_READER_URL_TEMPLATE = "https://read.lsbible.org/?q={book}+{chapter}"

# Characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"


def resolve_reader_url(
    book: str, chapter: int, template: str = DEFAULT_READER_URL_TEMPLATE
) -> str:
    """Build the reader URL for a chapter of a book.

    Never checks that the chapter exists; any input yields a URL.
    """
    return template.format(
        book=quote(str(book), safe=_URI_COMPONENT_SAFE),
        chapter=quote(str(chapter), safe=_URI_COMPONENT_SAFE),
    )
