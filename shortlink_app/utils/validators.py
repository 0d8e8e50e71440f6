"""Validation utilities for the short link service."""

from pydantic import AnyUrl, TypeAdapter, ValidationError

_url_adapter = TypeAdapter(AnyUrl)


def is_valid_url(url: str) -> bool:
    """Check that url is an absolute URL per the WHATWG URL grammar.

    Purely syntactic: nothing is resolved or fetched. Any scheme is
    accepted (https, ftp, mailto, ...), relative references are not.
    """
    if not url or not isinstance(url, str):
        return False
    try:
        _url_adapter.validate_python(url)
    except ValidationError:
        return False
    return True
