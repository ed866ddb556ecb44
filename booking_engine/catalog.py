"""Package catalog with prices, durations, extensions and downpayment maths."""

import logging
import math
import re
from typing import Any, Iterable, Optional

from booking_engine.config import settings
from booking_engine.errors import TransportError
from booking_engine.ports import CatalogPort
from booking_engine.schemas.catalog_schema import PackageDefinition, PriceQuote

logger = logging.getLogger(__name__)

DEFAULT_PACKAGES: list[PackageDefinition] = [
    PackageDefinition(id="solo", name="Solo Package", price=299, duration_minutes=15),
    PackageDefinition(id="basic", name="Basic Package", price=399, duration_minutes=25),
    PackageDefinition(id="transfer", name="Just Transfer", price=549, duration_minutes=30),
    PackageDefinition(id="standard", name="Standard Package", price=699, duration_minutes=45),
    PackageDefinition(id="family", name="Family Package", price=1249, duration_minutes=50),
    PackageDefinition(id="barkada", name="Barkada Package", price=1949, duration_minutes=50),
    PackageDefinition(id="birthday", name="Birthday Package", price=599, duration_minutes=45),
]

# extension minutes -> price
EXTENSION_RATES: dict[int, int] = {0: 0, 15: 150, 30: 300, 45: 450, 60: 600}

PROMO_PACKAGE_ID = "seasonal-promo"
PROMO_DURATION_MINUTES = 45


def parse_numeric(value: Any) -> int:
    """Pull the digits out of a catalog value.

    Examples:
        >>> parse_numeric("₱299")
        299
        >>> parse_numeric("15 Minutes")
        15
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    if not value:
        return 0
    digits = re.sub(r"\D", "", str(value))
    return int(digits) if digits else 0


def packages_from_documents(
    services: Iterable[dict[str, Any]], promo: Optional[dict[str, Any]] = None
) -> list[PackageDefinition]:
    """Build packages from raw service documents plus an active seasonal promo."""
    packages: list[PackageDefinition] = []
    if promo and promo.get("isActive"):
        packages.append(
            PackageDefinition(
                id=PROMO_PACKAGE_ID,
                name=str(promo.get("title") or "Seasonal Promo"),
                price=parse_numeric(promo.get("price")),
                duration_minutes=PROMO_DURATION_MINUTES,
            )
        )
    for doc in services:
        packages.append(
            PackageDefinition(
                id=str(doc["id"]),
                name=str(doc.get("title") or doc["id"]),
                price=parse_numeric(doc.get("price")),
                duration_minutes=parse_numeric(doc.get("duration")),
            )
        )
    return packages


def quote(
    package: PackageDefinition,
    extension_minutes: int = 0,
    downpayment_percent: Optional[int] = None,
) -> PriceQuote:
    """Price a package plus extension; the downpayment is rounded up.

    Raises:
        ValueError: If the extension is not one of EXTENSION_RATES.
    """
    if extension_minutes not in EXTENSION_RATES:
        raise ValueError(
            f"Unsupported extension {extension_minutes}; valid: {sorted(EXTENSION_RATES)}"
        )
    if downpayment_percent is None:
        downpayment_percent = settings.business.downpayment_percent
    extension_price = EXTENSION_RATES[extension_minutes]
    total = package.price + extension_price
    return PriceQuote(
        package_id=package.id,
        base_price=package.price,
        extension_price=extension_price,
        total_price=total,
        downpayment=math.ceil(total * downpayment_percent / 100),
        duration_total=package.duration_minutes + extension_minutes,
    )


class PackageCatalog:
    """Catalog snapshot with a static fallback when the source is empty."""

    def __init__(self, packages: Optional[Iterable[PackageDefinition]] = None) -> None:
        self._packages = list(packages) if packages else list(DEFAULT_PACKAGES)

    @classmethod
    async def load(cls, source: CatalogPort) -> "PackageCatalog":
        """Read the catalog collaborator, falling back to DEFAULT_PACKAGES."""
        try:
            packages = await source.list_packages()
        except TransportError:
            logger.error("Catalog unavailable, using default packages", exc_info=True)
            return cls()
        if not packages:
            logger.info("Catalog is empty, using default packages")
        return cls(packages)

    def all(self) -> list[PackageDefinition]:
        return list(self._packages)

    def get(self, package_id: str) -> Optional[PackageDefinition]:
        for package in self._packages:
            if package.id == package_id:
                return package
        return None
