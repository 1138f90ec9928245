from app.models.user import User
from app.models.item import Item
from app.models.booking import Booking, BookingMessage

# This makes the models directory a Python package and ensures all models are loaded
