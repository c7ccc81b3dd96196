# Parking management — Database Models
# Import all models here for SQLAlchemy discovery

from parking_api.models.user import User                   # noqa
from parking_api.models.vehicle import Vehicle             # noqa
from parking_api.models.parking_slot import ParkingSlot    # noqa
from parking_api.models.booking import Booking             # noqa
from parking_api.models.payment import Payment             # noqa
from parking_api.models.vehicle_entry import VehicleEntry  # noqa
from parking_api.models.log import Log                     # noqa
