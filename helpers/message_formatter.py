from typing import Optional
from models.commit import CommitRecord

MAXLEN = 280

# Every link is counted as a fixed-length shortened URL by the publisher
LINK_LENGTH = 23
SEPARATOR = "\n\n"
ELLIPSIS = "..."

# Smallest budget that still holds an ellipsis body, one separator and the link
MIN_LENGTH = LINK_LENGTH + 2 * len(SEPARATOR) + len(ELLIPSIS)


def build_attribution(author: Optional[str], author_handle: Optional[str] = None) -> str:
    """Build the 'by author (@handle)' line, empty when there is no author"""
    if not author:
        return ""
    if author_handle:
        return f"by {author} (@{author_handle})"
    return f"by {author}"


def weighted_length(text: str, url: str) -> int:
    """Length of a formatted message with its url counted as a shortened link"""
    if url and text.endswith(url):
        return len(text) - len(url) + LINK_LENGTH
    return len(text)


def _fitting_attribution(author: Optional[str], author_handle: Optional[str], max_length: int) -> str:
    # Longest attribution form that leaves room for at least an ellipsis body
    budget = max_length - LINK_LENGTH - 2 * len(SEPARATOR) - len(ELLIPSIS)
    for handle in (author_handle, None):
        attribution = build_attribution(author, handle)
        if len(attribution) <= budget:
            return attribution
    return ""


def format_commit_message(commit: CommitRecord, author_handle: Optional[str] = None,
                          max_length: int = MAXLEN) -> str:
    """
    Format a commit into a message that fits the publisher's character budget

    The url is always kept whole. The attribution is kept whole too, falling
    back to the bare 'by author' form, then to no attribution, when it would
    not leave room for the body. When the body does not fit next to the
    footer, the body is cut and an ellipsis is appended.

    Args:
        commit: Commit to format
        author_handle: Public handle of the commit author, if known
        max_length: Character budget of the message, at least MIN_LENGTH

    Returns:
        str: body, optional attribution and url separated by blank lines

    Raises:
        ValueError: max_length cannot hold the url footer
    """
    if max_length < MIN_LENGTH:
        raise ValueError(f"max_length must be at least {MIN_LENGTH}, got {max_length}")

    attribution = _fitting_attribution(commit.author, author_handle, max_length)
    body = commit.message

    if not attribution:
        footer_reserve = LINK_LENGTH + len(SEPARATOR)
        if len(body) + footer_reserve > max_length:
            body = body[:max_length - footer_reserve - len(ELLIPSIS)] + ELLIPSIS
        return f"{body}{SEPARATOR}{commit.url}"

    footer_reserve = LINK_LENGTH + 2 * len(SEPARATOR)
    if len(body) + len(attribution) + footer_reserve > max_length:
        body = body[:max_length - footer_reserve - len(ELLIPSIS) - len(attribution)] + ELLIPSIS
    return f"{body}{SEPARATOR}{attribution}{SEPARATOR}{commit.url}"
