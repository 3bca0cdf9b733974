"""Hotel domain models, decoding and ordering."""

from .decoder import (
    CatalogDecodeError,
    DecodeErrorKind,
    build_hotel,
    decode_catalog,
    try_decode_catalog,
)
from .models import CatalogPage, Hotel, Price, Review
from .sorting import SortBy, sort_hotels, sort_options

__all__ = [
    "CatalogDecodeError",
    "CatalogPage",
    "DecodeErrorKind",
    "Hotel",
    "Price",
    "Review",
    "SortBy",
    "build_hotel",
    "decode_catalog",
    "sort_hotels",
    "sort_options",
    "try_decode_catalog",
]
