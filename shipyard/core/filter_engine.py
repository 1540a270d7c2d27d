"""Filter Engine — search, category, price range and tag predicates over listings.

Invariants:
    - filter_listings is pure: same inputs, same output, no hidden state
    - Output preserves the relative order of the input
    - Criteria combine with AND; active tags combine with OR among themselves
    - An empty criterion never excludes anything

Design Decisions:
    - Price ranges parsed once into PriceRange (max=None means unbounded) rather than
      re-split per listing
    - Accepts "min-max", "min+", "min-+" and "min-" (the last three are unbounded)
"""

from dataclasses import dataclass, field

from shipyard.core.errors import InvalidPriceRangeError
from shipyard.core.records import Listing


@dataclass(frozen=True)
class PriceRange:
    minimum: int
    maximum: int | None = None

    def contains(self, price: int) -> bool:
        if price < self.minimum:
            return False
        return self.maximum is None or price <= self.maximum


@dataclass(frozen=True)
class FilterCriteria:
    search_term: str = ""
    category: str = ""
    price_range: str = ""
    active_tags: tuple[str, ...] = field(default_factory=tuple)


def parse_price_range(raw: str) -> PriceRange | None:
    """Parse "min-max" / "min+" into a PriceRange. Empty input means no bound."""
    text = (raw or "").strip()
    if not text:
        return None
    if text.endswith("+"):
        low, high = text[:-1].rstrip("-"), ""
    else:
        low, sep, high = text.partition("-")
        if not sep:
            raise InvalidPriceRangeError(raw)
    try:
        minimum = int(low)
        maximum = int(high) if high else None
    except ValueError:
        raise InvalidPriceRangeError(raw)
    if minimum < 0 or (maximum is not None and maximum < minimum):
        raise InvalidPriceRangeError(raw)
    return PriceRange(minimum, maximum)


def matches_search(listing: Listing, term: str) -> bool:
    if not term:
        return True
    needle = term.lower()
    return needle in listing.name.lower() or needle in listing.description.lower()


def matches_tags(listing: Listing, active_tags: tuple[str, ...]) -> bool:
    if not active_tags:
        return True
    return any(tag in listing.tags for tag in active_tags)


def filter_listings(
    listings: list[Listing], criteria: FilterCriteria,
) -> list[Listing]:
    price_range = parse_price_range(criteria.price_range)
    return [
        listing for listing in listings
        if matches_search(listing, criteria.search_term)
        and (not criteria.category or listing.category == criteria.category)
        and (price_range is None or price_range.contains(listing.price))
        and matches_tags(listing, criteria.active_tags)
    ]
