"""
Normalizer.

Brings page text handed over by the PDF extraction step into one
canonical line-break form.
"""

from typing import Iterable, Optional


def normalize(text: Optional[str]) -> str:
    """
    Replace every Windows line terminator with a Unix one.

    Args:
        text: Raw document text (None is treated as empty)

    Returns:
        Text with "\\r\\n" collapsed to "\\n". Nothing else changes.
    """
    if not text:
        return ""
    return text.replace("\r\n", "\n")


def join_pages(pages: Iterable[str]) -> str:
    """
    Concatenate per-page text in page order, each page followed by a newline.

    Mirrors how the page-level extractor assembles a document, so the
    result can be passed straight to normalize().
    """
    return "".join(f"{page or ''}\n" for page in pages)


# Design Rationale and Trade-offs:
#
# 1. Why only replace "\r\n"?
#    - Exports from Windows tools are the only mixed-newline source seen
#    - Other line breaks are collapsed later, inside each section
#    - Trade-off: Lone "\r" survives until comment cleaning
#
# 2. Why append "\n" to every page?
#    - Keeps the last line of a page from merging with the next page
#    - Trade-off: Blocks spanning pages get an extra line break
