from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Iterator, List, Optional, Sequence

from store.models import Item

# (id, name, price, category)
DEFAULT_ITEMS = [
    ("0001", "Canva Template Pack", "50.00", "Digital Templates"),
    ("0002", "Resume Template", "10.00", "Digital Templates"),
    ("0003", "Presentation Template PPT", "20.00", "Digital Templates"),
    ("0004", "Instagram Story Templates", "8.00", "Digital Templates"),
    ("0005", "Website Theme HTML", "120.00", "Digital Templates"),
    ("1001", "Ebook: Learn Coding", "20.00", "Educational Content"),
    ("1002", "Online Course: Design Basics", "50.00", "Educational Content"),
    ("1003", "Study Guide - Math", "25.00", "Educational Content"),
    ("1004", "Language Learning Pack", "22.00", "Educational Content"),
    ("1005", "Printable Planner Set", "115.00", "Educational Content"),
    ("2001", "Stock Photos Bundle", "30.00", "Creative Assets"),
    ("2002", "Vector Graphics Pack", "28.00", "Creative Assets"),
    ("2003", "Font Collection", "23.00", "Creative Assets"),
    ("2004", "Icon Set", "18.00", "Creative Assets"),
    ("2005", "Photoshop Presets", "45.00", "Creative Assets"),
    ("3001", "Mobile App: Productivity", "40.00", "Software & Tools"),
    ("3002", "WordPress Plugin Premium", "35.00", "Software & Tools"),
    ("3003", "Website Builder Theme", "45.00", "Software & Tools"),
    ("3004", "API Access Pack", "130.00", "Software & Tools"),
    ("3005", "SDK for Developers", "180.00", "Software & Tools"),
    ("4001", "Royalty-Free Music Pack", "30.00", "Music & Audio"),
    ("4002", "Sound Effects Collection", "25.00", "Music & Audio"),
    ("4003", "Audiobook: Business Success", "25.00", "Music & Audio"),
    ("4004", "Paid Podcast Subscription", "55.00", "Music & Audio"),
    ("4005", "Voiceover Samples", "20.00", "Music & Audio"),
    ("5001", "Business Plan Template", "169.00", "Business & Marketing"),
    ("5002", "Marketing Kit", "49.00", "Business & Marketing"),
    ("5003", "Email Template Set", "18.00", "Business & Marketing"),
    ("5004", "Logo Design Files", "45.00", "Business & Marketing"),
    ("5005", "Brand Style Guide", "50.00", "Business & Marketing"),
]


class Catalog:
    """
    Read-only list of purchasable items, kept in the order they were given.
    Lookups that miss return None or an empty list.
    """

    def __init__(self, items: Iterable[Item]):
        self._items: List[Item] = list(items)
        self._by_id = {}
        for item in self._items:
            if item.id in self._by_id:
                raise ValueError(f"Duplicate item id {item.id!r} in catalog.")
            self._by_id[item.id] = item

    @classmethod
    def default(cls) -> Catalog:
        return cls(
            Item(id=pid, name=name, unit_price=Decimal(price), category=category)
            for pid, name, price, category in DEFAULT_ITEMS
        )

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def items(self) -> List[Item]:
        return list(self._items)

    def find_by_id(self, item_id: str) -> Optional[Item]:
        return self._by_id.get(item_id)

    def search(self, term: str) -> List[Item]:
        """Case-insensitive substring match on name; an empty term matches all."""
        needle = term.lower()
        return [item for item in self._items if needle in item.name.lower()]

    def by_category(self, category: str) -> List[Item]:
        return [item for item in self._items if item.category == category]

    def categories(self) -> List[str]:
        """Distinct categories in first-seen order."""
        return list(dict.fromkeys(item.category for item in self._items))

    def lookup(
        self, query: str, within: Optional[Sequence[Item]] = None
    ) -> Optional[Item]:
        """
        Resolve what a shopper typed into a single item.
        Exact id wins; otherwise the first item whose name contains the query.
        `within` restricts the candidates, e.g. to the current search results.
        """
        query = query.strip()
        if not query:
            return None
        candidates = self._items if within is None else list(within)
        for item in candidates:
            if item.id == query:
                return item
        needle = query.lower()
        for item in candidates:
            if needle in item.name.lower():
                return item
        return None
