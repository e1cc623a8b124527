# Models package init: importing it registers every table with Base.metadata
from flybook.models.catalog import Destination, Hotel, Package
from flybook.models.flight import Flight

__all__ = ["Destination", "Flight", "Hotel", "Package"]
