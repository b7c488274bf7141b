"""
Validation utilities and validators.
Centralized validation logic following single responsibility principle.
"""
from decimal import Decimal
from core.constants import RentType
from core.exceptions import ValidationError as AppValidationError


class ChoiceValidator:
    """Validates enum-like string fields against their CHOICES"""

    @staticmethod
    def validate_choice(value, choices, field_name: str):
        allowed = [choice for choice, _label in choices]
        if value not in allowed:
            raise AppValidationError(
                message=f"Invalid {field_name} '{value}'. Expected one of: {', '.join(allowed)}",
                code="INVALID_CHOICE",
                details={"field": field_name, "value": value, "allowed": allowed}
            )


class RentValidator:
    """Validates rent-related operations"""

    @staticmethod
    def validate_rent_amount(amount: Decimal):
        """Rent must be a positive amount"""
        if amount is None or amount <= 0:
            raise AppValidationError(
                message="Rent amount must be greater than zero",
                code="INVALID_RENT_AMOUNT"
            )
        if amount > Decimal('9999999.99'):
            raise AppValidationError(
                message="Rent amount exceeds maximum allowed",
                code="RENT_AMOUNT_TOO_LARGE"
            )

    @staticmethod
    def validate_advance_amount(amount: Decimal):
        """Advance (deposit) cannot be negative"""
        if amount is not None and amount < 0:
            raise AppValidationError(
                message="Advance amount cannot be negative",
                code="INVALID_ADVANCE_AMOUNT"
            )

    @staticmethod
    def validate_payment_amount(amount: Decimal):
        """A recorded payment must be a positive amount"""
        if amount is None or amount <= 0:
            raise AppValidationError(
                message="Payment amount must be greater than zero",
                code="INVALID_PAYMENT_AMOUNT"
            )

    @staticmethod
    def validate_amount_paid(amount_paid: Decimal):
        if amount_paid is not None and amount_paid < 0:
            raise AppValidationError(
                message="Amount paid cannot be negative",
                code="INVALID_AMOUNT_PAID"
            )


class OccupancyValidator:
    """Validates occupancy operations"""

    @staticmethod
    def validate_dates(join_date, leave_date=None):
        """Validate occupancy dates"""
        if join_date is None:
            raise AppValidationError(
                message="Join date is required",
                code="MISSING_JOIN_DATE"
            )

        if leave_date and leave_date < join_date:
            raise AppValidationError(
                message="Leave date cannot be before join date",
                code="INVALID_LEAVE_DATE"
            )


class RoomValidator:
    """Validates room layout against its rent type"""

    @staticmethod
    def validate_layout(rent_type: str, capacity: int, bed_numbers):
        if capacity is None or capacity < 1:
            raise AppValidationError(
                message="Room capacity must be at least 1",
                code="INVALID_CAPACITY"
            )
        if rent_type == RentType.PER_ROOM and bed_numbers:
            raise AppValidationError(
                message="PER_ROOM rooms cannot have a bed list",
                code="BEDS_NOT_ALLOWED"
            )
        if rent_type == RentType.PER_BED:
            if len(bed_numbers) > capacity:
                raise AppValidationError(
                    message=f"Room capacity is {capacity} but {len(bed_numbers)} beds were given",
                    code="TOO_MANY_BEDS",
                    details={"capacity": capacity, "beds": len(bed_numbers)}
                )
            if len(set(bed_numbers)) != len(bed_numbers):
                raise AppValidationError(
                    message="Bed numbers must be unique within a room",
                    code="DUPLICATE_BED_NUMBER"
                )
