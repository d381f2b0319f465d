"""Expose ORM models."""
from .assessment import Assessment
from .improvement import Improvement
from .neighborhood import Neighborhood
from .owner import Owner
from .property import Property
from .sale import Sale

__all__ = [
    "Assessment",
    "Improvement",
    "Neighborhood",
    "Owner",
    "Property",
    "Sale",
]
