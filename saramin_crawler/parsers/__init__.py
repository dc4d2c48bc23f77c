from .listing_parser import ListingParser, ListingSequence, canonicalize_link

__all__ = ["ListingParser", "ListingSequence", "canonicalize_link"]
