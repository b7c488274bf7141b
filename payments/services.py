"""
Payment services - rent generation, reconciliation and reminders.

PaymentGenerator owns every path that creates a Payment row. All of them
treat an existing row for (tenant, month, year) as "already created": the
existence pre-check handles the common case and the store's unique index
(surfacing as DuplicateKeyError) handles the race.
"""
from datetime import date
from decimal import Decimal
from typing import Callable, Optional, Tuple

from django.db import transaction
from django.utils import timezone

from core.constants import DefaultLimits, OccupancyStatus, PaymentStatus
from core.dto import BackfillSummary, GenerationSummary, PaymentPeriod
from core.exceptions import BusinessLogicError, DuplicateKeyError, NotFoundError
from core.services import BaseService
from core.validators import RentValidator
from occupancy.models import Occupancy
from occupancy.repositories import OccupancyRepository
from occupancy.resolver import due_date_for, due_day
from .models import Payment
from .planning import following_period, initial_period, is_billable, plan_upcoming_payment
from .repositories import PaymentRepository

CREATED = 'created'
ALREADY_EXISTS = 'already_exists'
NO_BASE_PAYMENT = 'no_base_payment'
NOT_DUE = 'not_due'


class PaymentGenerator(BaseService):
    """Creates the initial, next-month and upcoming payments of each stay"""

    def __init__(self, payment_repo: PaymentRepository = None, occupancy_repo: OccupancyRepository = None,
                 clock: Callable[[], date] = timezone.localdate):
        super().__init__()
        self.payment_repo = payment_repo or PaymentRepository()
        self.occupancy_repo = occupancy_repo or OccupancyRepository()
        self.clock = clock

    def _create_for_period(self, occupancy: Occupancy, period: PaymentPeriod, **fields) -> Tuple[Payment, bool]:
        """
        Create the period's payment, or return the one that won the race.

        Returns (payment, created).
        """
        try:
            payment = self.payment_repo.create(
                owner_id=occupancy.owner_id,
                tenant_id=occupancy.tenant_id,
                occupancy=occupancy,
                month=period.month,
                year=period.year,
                rent_amount=occupancy.rent_amount,
                due_date=period.due_date,
                **fields
            )
            return payment, True
        except DuplicateKeyError:
            self.log_info("Payment already exists, skipping", tenant_id=occupancy.tenant_id,
                          month=period.month, year=period.year)
            existing = self.payment_repo.find_for_period(occupancy.tenant_id, period.month, period.year)
            return existing, False

    def create_initial_payment(self, occupancy: Occupancy) -> Optional[Payment]:
        """
        Record the joining month as paid.

        The first month is covered by the joining transaction, so the row is
        created PAID with payment_date set to the join date. Calling this
        again for the same month returns the existing row.
        """
        if not is_billable(occupancy):
            self.log_info("No initial payment: occupancy has no room or rent", occupancy_id=occupancy.id)
            return None

        period = initial_period(occupancy.join_date)
        existing = self.payment_repo.find_for_period(occupancy.tenant_id, period.month, period.year)
        if existing:
            self.log_info("Initial payment already exists", payment_id=existing.id,
                          tenant_id=occupancy.tenant_id, month=period.month, year=period.year)
            return existing

        payment, created = self._create_for_period(
            occupancy, period,
            amount_paid=occupancy.rent_amount,
            payment_date=occupancy.join_date,
        )
        if created:
            self.log_info("Initial payment created", payment_id=payment.id, tenant_id=occupancy.tenant_id,
                          month=period.month, year=period.year)
        return payment

    def scan_and_generate_upcoming(self, lead_days: int = DefaultLimits.PAYMENT_LEAD_DAYS,
                                   today: Optional[date] = None, dry_run: bool = False) -> GenerationSummary:
        """
        Create the next PENDING payment for every active stay whose next due
        date falls within `lead_days` of today.

        Each stay is processed in its own savepoint; a failure is logged and
        counted and the scan moves on.
        """
        today = today or self.clock()
        summary = GenerationSummary()
        occupancies = list(self.occupancy_repo.get_active_assigned())
        summary.total = len(occupancies)
        self.log_info("Scanning active occupancies for upcoming payments", total=summary.total,
                      lead_days=lead_days, today=today.isoformat(), dry_run=dry_run)

        for occupancy in occupancies:
            try:
                with transaction.atomic():
                    outcome, payment = self._generate_upcoming_for(occupancy, today, lead_days, dry_run)
            except Exception as e:
                summary.failed += 1
                self.log_error("Failed to generate upcoming payment", error=e, occupancy_id=occupancy.id,
                               tenant_id=occupancy.tenant_id)
                continue

            setattr(summary, outcome, getattr(summary, outcome) + 1)
            if outcome == CREATED and payment is not None:
                summary.created_ids.append(payment.id)

        self.log_info("Upcoming payment scan finished", total=summary.total, created=summary.created,
                      already_exists=summary.already_exists, no_base_payment=summary.no_base_payment,
                      not_due=summary.not_due, failed=summary.failed)
        return summary

    def _generate_upcoming_for(self, occupancy: Occupancy, today: date, lead_days: int,
                               dry_run: bool) -> Tuple[str, Optional[Payment]]:
        latest = self.payment_repo.latest_for_tenant(occupancy.tenant_id)
        if latest is None:
            return NO_BASE_PAYMENT, None

        period = plan_upcoming_payment(latest.month, latest.year, occupancy.join_date, today, lead_days)
        if period is None:
            return NOT_DUE, None

        if self.payment_repo.find_for_period(occupancy.tenant_id, period.month, period.year):
            return ALREADY_EXISTS, None

        if dry_run:
            self.log_info("Dry run: would create payment", tenant_id=occupancy.tenant_id,
                          month=period.month, year=period.year, due_date=period.due_date.isoformat())
            return CREATED, None

        payment, created = self._create_for_period(occupancy, period, amount_paid=Decimal('0'))
        if not created:
            return ALREADY_EXISTS, payment

        self.log_info("Upcoming payment created", payment_id=payment.id, tenant_id=occupancy.tenant_id,
                      month=period.month, year=period.year, due_date=period.due_date.isoformat())
        return CREATED, payment

    def _resolve_occupancy(self, payment: Payment) -> Occupancy:
        if payment.occupancy_id:
            occupancy = self.occupancy_repo.get_by_id(payment.occupancy_id)
        elif payment.tenant_id:
            occupancy = self.occupancy_repo.find_one(('-join_date', '-id'), tenant_id=payment.tenant_id)
        else:
            occupancy = None
        if occupancy is None:
            raise NotFoundError(resource_type="Occupancy", resource_id=payment.occupancy_id,
                                details={"payment_id": payment.id})
        return occupancy

    def create_next_month_payment(self, current_payment: Payment) -> Optional[Payment]:
        """
        Create the PENDING payment for the month after `current_payment`.

        Returns None when the stay is no longer ACTIVE, otherwise the created
        or already existing payment.
        """
        occupancy = self._resolve_occupancy(current_payment)
        if occupancy.status != OccupancyStatus.ACTIVE:
            self.log_info("Occupancy not active, no next month payment", occupancy_id=occupancy.id,
                          payment_id=current_payment.id)
            return None

        period = following_period(current_payment.month, current_payment.year, occupancy.join_date)
        existing = self.payment_repo.find_for_period(occupancy.tenant_id, period.month, period.year)
        if existing:
            return existing

        payment, created = self._create_for_period(occupancy, period, amount_paid=Decimal('0'))
        if created:
            self.log_info("Next month payment created", payment_id=payment.id, tenant_id=occupancy.tenant_id,
                          month=period.month, year=period.year)
        return payment

    def _cascade_next_month(self, payment: Payment) -> Optional[Payment]:
        """Next-month generation after a payment becomes PAID; never undoes the payment"""
        try:
            with transaction.atomic():
                return self.create_next_month_payment(payment)
        except Exception as e:
            self.log_error("Failed to create next month payment", error=e, payment_id=payment.id)
            return None

    def mark_as_paid(self, payment_id: int, payment_date: Optional[date] = None) -> Tuple[Payment, Optional[Payment]]:
        """
        Settle a payment in full, then generate the following month.

        Returns (payment, next_payment); next_payment is None when the stay
        is closed or the cascade failed.
        """
        with transaction.atomic():
            payment = self.payment_repo.get_for_update(payment_id)
            if payment is None:
                raise NotFoundError(resource_type="Payment", resource_id=payment_id)
            payment.amount_paid = payment.rent_amount
            payment.status = PaymentStatus.PAID
            payment.payment_date = payment_date or self.clock()
            payment.save()

        self.log_info("Payment marked as paid", payment_id=payment.id, tenant_id=payment.tenant_id)
        return payment, self._cascade_next_month(payment)

    def record_payment(self, payment_id: int, amount: Decimal,
                       payment_date: Optional[date] = None) -> Tuple[Payment, Optional[Payment]]:
        """Add a (possibly partial) amount to a payment, clamped to its rent"""
        RentValidator.validate_payment_amount(amount)

        with transaction.atomic():
            payment = self.payment_repo.get_for_update(payment_id)
            if payment is None:
                raise NotFoundError(resource_type="Payment", resource_id=payment_id)
            if payment.status == PaymentStatus.PAID:
                raise BusinessLogicError(
                    message="Payment is already fully paid",
                    code="PAYMENT_ALREADY_PAID",
                    details={"payment_id": payment_id}
                )
            payment.amount_paid = min(payment.amount_paid + amount, payment.rent_amount)
            payment.payment_date = payment_date or self.clock()
            payment.save()

        self.log_info("Payment recorded", payment_id=payment.id, amount=str(amount), status=payment.status)
        if payment.status == PaymentStatus.PAID:
            return payment, self._cascade_next_month(payment)
        return payment, None

    def update_payment(self, payment: Payment, **changes) -> Payment:
        """Apply field changes; status follows amount_paid and a move into PAID cascades"""
        RentValidator.validate_amount_paid(changes.get('amount_paid'))
        if 'rent_amount' in changes:
            RentValidator.validate_rent_amount(changes['rent_amount'])

        was_paid = payment.status == PaymentStatus.PAID
        payment = self.payment_repo.update(payment, **changes)
        self.log_info("Payment updated", payment_id=payment.id, status=payment.status,
                      fields=sorted(changes))

        if not was_paid and payment.status == PaymentStatus.PAID:
            self._cascade_next_month(payment)
        return payment

    def get_upcoming(self, days_ahead: int = DefaultLimits.PAYMENT_UPCOMING_DAYS, owner=None,
                     today: Optional[date] = None):
        return self.payment_repo.upcoming(today or self.clock(), days_ahead, owner=owner)

    def get_overdue(self, owner=None, today: Optional[date] = None):
        return self.payment_repo.overdue(today or self.clock(), owner=owner)


class PaymentReminderService(BaseService):
    """Marks upcoming payments as reminded. Delivery is a log line."""

    def __init__(self, payment_repo: PaymentRepository = None, clock: Callable[[], date] = timezone.localdate):
        super().__init__()
        self.payment_repo = payment_repo or PaymentRepository()
        self.clock = clock

    def send_payment_reminders(self, days_ahead: int = DefaultLimits.PAYMENT_REMINDER_DAYS,
                               today: Optional[date] = None) -> int:
        """Remind each payment due within `days_ahead` at most once per day"""
        today = today or self.clock()
        reminded = 0
        for payment in self.payment_repo.upcoming(today, days_ahead):
            if payment.last_reminder_date == today:
                continue
            days_left = (payment.due_date - today).days
            tenant_name = payment.tenant.name if payment.tenant else "Unknown tenant"
            self.payment_repo.update(payment, reminder_count=payment.reminder_count + 1,
                                     last_reminder_date=today)
            self.log_info(f"Reminder: {tenant_name} - payment due in {days_left} day(s)",
                          payment_id=payment.id, due_date=payment.due_date.isoformat())
            reminded += 1

        self.log_info("Payment reminders sent", count=reminded, days_ahead=days_ahead)
        return reminded


class DueDateBackfillService(BaseService):
    """Fills due_date on payments recorded before due dates were tracked"""

    def __init__(self, payment_repo: PaymentRepository = None):
        super().__init__()
        self.payment_repo = payment_repo or PaymentRepository()

    def backfill_due_dates(self, dry_run: bool = False) -> BackfillSummary:
        payments = list(self.payment_repo.missing_due_date())
        summary = BackfillSummary(total=len(payments))

        for payment in payments:
            try:
                day = due_day(payment.occupancy.join_date) if payment.occupancy else DefaultLimits.RENT_DUE_DAY
                value = due_date_for(payment.year, payment.month, day)
                if not dry_run:
                    with transaction.atomic():
                        self.payment_repo.update(payment, due_date=value)
                summary.updated += 1
            except Exception as e:
                summary.failed += 1
                self.log_error("Failed to backfill due date", error=e, payment_id=payment.id)

        self.log_info("Due date backfill finished", total=summary.total, updated=summary.updated,
                      failed=summary.failed, dry_run=dry_run)
        return summary
