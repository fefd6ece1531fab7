"""Business logic for districts."""

from ..core.tables import DISTRICTS
from ..schemas.district import DistrictRead
from .base import ResourceService


class DistrictService(ResourceService):
    """CRUD for districts.  Deleting a district keeps its campites and
    clears their ``district_id``."""

    table = DISTRICTS
    read_schema = DistrictRead
    label = "District"
