"""Static catalog of supported AWS regions.

Each region carries the URL of its CloudFormation resource
specification.  The catalog is ordered (the ``configure`` wizard
selects regions by index) and is validated once at construction time.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass

from perun.exceptions import CatalogError


@dataclass(frozen=True, slots=True)
class RegionEntry:
    """One supported region."""

    code: str
    specification_url: str


class RegionCatalog:
    """Ordered, immutable collection of unique :class:`RegionEntry` items."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Sequence[RegionEntry]) -> None:
        seen: set[str] = set()
        for entry in entries:
            if entry.code in seen:
                raise CatalogError(f"Region {entry.code!r} is listed more than once.")
            seen.add(entry.code)
        self._entries: tuple[RegionEntry, ...] = tuple(entries)

    @classmethod
    def build(
        cls,
        codes: Sequence[str],
        specification_urls: Mapping[str, str],
    ) -> RegionCatalog:
        """Pair an ordered list of region codes with their URLs.

        Raises
        ------
        CatalogError
            If a code is duplicated, lacks a URL, or the URL mapping
            names a region missing from *codes*.
        """
        missing = [code for code in codes if code not in specification_urls]
        if missing:
            raise CatalogError(
                "No resource specification URL for: " + ", ".join(missing),
            )
        unlisted = sorted(set(specification_urls) - set(codes))
        if unlisted:
            raise CatalogError(
                "Resource specification URL for unlisted region: "
                + ", ".join(unlisted),
            )
        return cls([RegionEntry(code, specification_urls[code]) for code in codes])

    @property
    def codes(self) -> tuple[str, ...]:
        return tuple(entry.code for entry in self._entries)

    def specification_urls(self) -> dict[str, str]:
        """Return a fresh ``{region: url}`` dict in catalog order."""
        return {entry.code: entry.specification_url for entry in self._entries}

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> RegionEntry:
        return self._entries[index]

    def __iter__(self) -> Iterator[RegionEntry]:
        return iter(self._entries)

    def __contains__(self, code: object) -> bool:
        return any(entry.code == code for entry in self._entries)


RESOURCE_SPECIFICATION_URLS: dict[str, str] = {
    "us-east-1": "https://d1uauaxba7bl26.cloudfront.net",
    "us-east-2": "https://dnwj8swjjbsbt.cloudfront.net",
    "us-west-1": "https://d68hl49wbnanq.cloudfront.net",
    "us-west-2": "https://d201a2mn26r7lk.cloudfront.net",
    "ca-central-1": "https://d2s8ygphhesbe7.cloudfront.net",
    "eu-central-1": "https://d1mta8qj7i28i2.cloudfront.net",
    "eu-west-1": "https://d3teyb21fexa9r.cloudfront.net",
    "eu-west-2": "https://d1742qcu2c1ncx.cloudfront.net",
    "ap-northeast-1": "https://d33vqc0rt9ld30.cloudfront.net",
    "ap-northeast-2": "https://d1ane3fvebulky.cloudfront.net",
    "ap-southeast-1": "https://doigdx0kgq9el.cloudfront.net",
    "ap-southeast-2": "https://d2stg8d246z9di.cloudfront.net",
    "ap-south-1": "https://d2senuesg1djtx.cloudfront.net",
    "sa-east-1": "https://d3c9jyj3w509b0.cloudfront.net",
}

REGION_ORDER: tuple[str, ...] = (
    "us-east-1",
    "us-east-2",
    "us-west-1",
    "us-west-2",
    "ca-central-1",
    "eu-central-1",
    "eu-west-1",
    "eu-west-2",
    "ap-northeast-1",
    "ap-northeast-2",
    "ap-southeast-1",
    "ap-southeast-2",
    "ap-south-1",
    "sa-east-1",
)

DEFAULT_CATALOG: RegionCatalog = RegionCatalog.build(
    REGION_ORDER, RESOURCE_SPECIFICATION_URLS,
)
