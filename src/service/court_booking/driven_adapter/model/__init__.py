"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.court_booking.driven_adapter.model.booking_model import BookingModel
from src.service.court_booking.driven_adapter.model.catalog_model import (
    CourtModel,
    UserModel,
    VenueModel,
)
from src.service.court_booking.driven_adapter.model.notification_model import NotificationModel

__all__ = [
    'BookingModel',
    'CourtModel',
    'NotificationModel',
    'UserModel',
    'VenueModel',
]
