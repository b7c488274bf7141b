"""
Application-wide constants.
Centralized constants following DRY principle.
"""

# User Roles
class UserRole:
    OWNER = 'OWNER'
    ADMIN = 'ADMIN'

    CHOICES = [
        (OWNER, 'Owner'),
        (ADMIN, 'Admin'),
    ]


# Property Types
class PropertyType:
    HOSTEL = 'HOSTEL'
    RESIDENT = 'RESIDENT'
    SHOP = 'SHOP'

    CHOICES = [
        (HOSTEL, 'Hostel'),
        (RESIDENT, 'Resident'),
        (SHOP, 'Shop'),
    ]


# Room rent modes
class RentType:
    PER_ROOM = 'PER_ROOM'
    PER_BED = 'PER_BED'

    CHOICES = [
        (PER_ROOM, 'Per Room'),
        (PER_BED, 'Per Bed'),
    ]


# Room / Bed availability
class AvailabilityStatus:
    AVAILABLE = 'AVAILABLE'
    OCCUPIED = 'OCCUPIED'

    CHOICES = [
        (AVAILABLE, 'Available'),
        (OCCUPIED, 'Occupied'),
    ]


# Occupancy Status
class OccupancyStatus:
    ACTIVE = 'ACTIVE'
    COMPLETED = 'COMPLETED'

    CHOICES = [
        (ACTIVE, 'Active'),
        (COMPLETED, 'Completed'),
    ]


# Payment Status
class PaymentStatus:
    PENDING = 'PENDING'
    PARTIAL = 'PARTIAL'
    PAID = 'PAID'

    CHOICES = [
        (PENDING, 'Pending'),
        (PARTIAL, 'Partial'),
        (PAID, 'Paid'),
    ]

    # Statuses that still expect money
    OUTSTANDING = [PENDING, PARTIAL]


class Gender:
    MALE = 'Male'
    FEMALE = 'Female'

    CHOICES = [
        (MALE, 'Male'),
        (FEMALE, 'Female'),
    ]


# Default Limits
class DefaultLimits:
    RENT_DUE_DAY = 5
    PAYMENT_LEAD_DAYS = 4
    PAYMENT_REMINDER_DAYS = 3
    PAYMENT_UPCOMING_DAYS = 7


# Pagination
class Pagination:
    DEFAULT_PAGE_SIZE = 20
    MAX_PAGE_SIZE = 100
