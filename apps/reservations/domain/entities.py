"""
Reservation Domain Entities

Core business entities for the reservation domain:
- Interval: a guest stay or maintenance block occupying a half-open date range
- GuestStay / MaintenanceBlock: the two variants of what an interval holds
- IntervalDraft: an unvalidated candidate coming from a form or a raw record
"""

from dataclasses import dataclass, fields
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import NAMESPACE_URL, UUID, uuid5

from shared.domain.base import Entity, ValueObject
from shared.domain.value_objects import DateRange, parse_amount, parse_date

from apps.reservations.domain.errors import ValidationError

MAINTENANCE_LABEL = 'Maintenance'

ZERO = Decimal('0.00')

LEGACY_ID_NAMESPACE = uuid5(NAMESPACE_URL, 'urn:rental-portfolio:interval')


class IntervalKind(Enum):
    """What occupies the dates"""
    GUEST = 'guest'              # Paying guest stay
    MAINTENANCE = 'maintenance'  # Repair / maintenance block


class DepositStatus(Enum):
    """Security deposit tracking for guest stays"""
    NONE = 'none'            # No deposit taken
    COLLECTED = 'collected'  # Held by the owner
    RETURNED = 'returned'    # Paid back to the guest


@dataclass(frozen=True)
class GuestStay(ValueObject):
    """Fields that only make sense for a paying guest"""
    guest_name: str
    total_price: Decimal = ZERO
    security_deposit: Decimal = ZERO
    deposit_status: DepositStatus = DepositStatus.NONE
    auto_cleaning: bool = True

    kind = IntervalKind.GUEST


@dataclass(frozen=True)
class MaintenanceBlock(ValueObject):
    """Fields that only make sense for a maintenance block"""
    maintenance_expense: Decimal = ZERO

    kind = IntervalKind.MAINTENANCE


@dataclass(eq=False)
class Interval(Entity):
    """
    Interval Entity

    A single reservation or block on one property. Occupies
    ``dates.start_date`` up to, but not including, ``dates.end_date``.

    Variant-specific values are read through properties that return the
    forced value for the other variant (0 money, the maintenance label),
    so callers never branch on missing attributes.
    """

    dates: DateRange
    details: GuestStay | MaintenanceBlock
    notes: str = ''

    @property
    def kind(self) -> IntervalKind:
        return self.details.kind

    @property
    def is_guest(self) -> bool:
        return self.kind is IntervalKind.GUEST

    @property
    def check_in(self):
        return self.dates.start_date

    @property
    def check_out(self):
        return self.dates.end_date

    @property
    def nights(self) -> int:
        return len(self.dates)

    @property
    def guest_name(self) -> str:
        if isinstance(self.details, GuestStay):
            return self.details.guest_name
        return MAINTENANCE_LABEL

    @property
    def total_price(self) -> Decimal:
        if isinstance(self.details, GuestStay):
            return self.details.total_price
        return ZERO

    @property
    def security_deposit(self) -> Decimal:
        if isinstance(self.details, GuestStay):
            return self.details.security_deposit
        return ZERO

    @property
    def deposit_status(self) -> DepositStatus:
        if isinstance(self.details, GuestStay):
            return self.details.deposit_status
        return DepositStatus.NONE

    @property
    def auto_cleaning(self) -> bool:
        if isinstance(self.details, GuestStay):
            return self.details.auto_cleaning
        return False

    @property
    def maintenance_expense(self) -> Decimal:
        if isinstance(self.details, MaintenanceBlock):
            return self.details.maintenance_expense
        return ZERO

    def to_draft(self) -> 'IntervalDraft':
        """Editable copy used as the base of an update patch"""
        return IntervalDraft(
            kind=self.kind.value,
            check_in=self.check_in,
            check_out=self.check_out,
            guest_name=self.guest_name if self.is_guest else '',
            total_price=self.total_price,
            security_deposit=self.security_deposit,
            maintenance_expense=self.maintenance_expense,
            deposit_status=self.deposit_status.value if self.is_guest else None,
            auto_cleaning=self.auto_cleaning,
            notes=self.notes,
        )

    def to_record(self) -> dict:
        """Raw record in the shape the persistence collaborator stores"""
        return {
            'id': str(self.id),
            'type': self.kind.value,
            'checkIn': self.check_in.isoformat(),
            'checkOut': self.check_out.isoformat(),
            'guestName': self.guest_name,
            'totalPrice': str(self.total_price),
            'securityDeposit': str(self.security_deposit),
            'maintenanceExpense': str(self.maintenance_expense),
            'depositStatus': self.deposit_status.value,
            'autoCleaning': self.auto_cleaning,
            'notes': self.notes,
            'createdAt': self.created_at.isoformat(),
        }

    def __str__(self):
        return f"{self.guest_name} ({self.dates})"

    def __repr__(self):
        return f"Interval(id={self.id}, kind={self.kind.value}, dates={self.dates!r})"


# Raw record key -> draft field
RECORD_FIELDS = {
    'type': 'kind',
    'checkIn': 'check_in',
    'checkOut': 'check_out',
    'guestName': 'guest_name',
    'totalPrice': 'total_price',
    'securityDeposit': 'security_deposit',
    'maintenanceExpense': 'maintenance_expense',
    'depositStatus': 'deposit_status',
    'autoCleaning': 'auto_cleaning',
    'notes': 'notes',
}


@dataclass
class IntervalDraft:
    """
    Unvalidated interval candidate

    Holds raw values exactly as a form or a stored record supplied them.
    ``build()`` is the single place they are checked and normalised.
    """
    check_in: Any
    check_out: Any
    kind: Any = IntervalKind.GUEST.value
    guest_name: str = ''
    total_price: Any = None
    security_deposit: Any = None
    maintenance_expense: Any = None
    deposit_status: Any = None
    auto_cleaning: bool = True
    notes: str = ''
    id: UUID | None = None
    created_at: datetime | None = None

    @classmethod
    def field_names(cls) -> set[str]:
        return {f.name for f in fields(cls)} - {'id', 'created_at'}

    @classmethod
    def from_record(cls, record: dict) -> 'IntervalDraft':
        """Read a raw camelCase record (unknown keys are ignored)"""
        values = {draft_name: record[key] for key, draft_name in RECORD_FIELDS.items() if key in record}
        if 'type' not in record:
            values['kind'] = IntervalKind.GUEST.value
        draft = cls(check_in=values.pop('check_in', None), check_out=values.pop('check_out', None), **values)
        if record.get('id'):
            draft.id = _parse_uuid(record['id'])
        if record.get('createdAt'):
            draft.created_at = _parse_timestamp(record['createdAt'])
        return draft

    def build(self) -> Interval:
        """
        Validate and normalise into an Interval

        Raises:
            ValidationError: On any malformed value
        """
        kind = _parse_enum(IntervalKind, self.kind, 'kind')
        dates = _parse_range(self.check_in, self.check_out)

        if kind is IntervalKind.GUEST:
            guest_name = (self.guest_name or '').strip()
            if not guest_name:
                raise ValidationError("Guest name is required for a guest stay", field='guest_name')
            deposit = _parse_money(self.security_deposit, 'security_deposit')
            details = GuestStay(
                guest_name=guest_name,
                total_price=_parse_money(self.total_price, 'total_price'),
                security_deposit=deposit,
                deposit_status=self._deposit_status(deposit),
                auto_cleaning=_parse_flag(self.auto_cleaning, 'auto_cleaning'),
            )
        else:
            details = MaintenanceBlock(
                maintenance_expense=_parse_money(self.maintenance_expense, 'maintenance_expense'),
            )

        interval = Interval(dates=dates, details=details, notes=self.notes or '')
        if self.id is not None:
            interval.id = self.id
        if self.created_at is not None:
            interval.created_at = self.created_at
        return interval

    def _deposit_status(self, deposit: Decimal) -> DepositStatus:
        if deposit <= 0:
            return DepositStatus.NONE
        if self.deposit_status in (None, ''):
            return DepositStatus.COLLECTED
        status = _parse_enum(DepositStatus, self.deposit_status, 'deposit_status')
        # A deposit that was taken cannot be "none"
        return DepositStatus.COLLECTED if status is DepositStatus.NONE else status


def _parse_enum(enum_cls, value, field_name):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ', '.join(member.value for member in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}", field=field_name) from None


def _parse_range(check_in, check_out) -> DateRange:
    try:
        start = parse_date(check_in)
    except ValueError:
        raise ValidationError(f"Invalid check-in date: {check_in!r}", field='check_in') from None
    try:
        end = parse_date(check_out)
    except ValueError:
        raise ValidationError(f"Invalid check-out date: {check_out!r}", field='check_out') from None
    if end <= start:
        raise ValidationError("Check-out must be after check-in", field='check_out')
    return DateRange(start, end)


def _parse_money(value, field_name) -> Decimal:
    try:
        amount = parse_amount(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be a number", field=field_name) from None
    if amount < 0:
        raise ValidationError(f"{field_name} cannot be negative", field=field_name)
    return amount


def _parse_flag(value, field_name) -> bool:
    # Missing in older records: keep the default
    if value is None:
        return True
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be true or false", field=field_name)
    return value


def _parse_uuid(value) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        # Older records used millisecond timestamps as ids
        return uuid5(LEGACY_ID_NAMESPACE, str(value))


def _parse_timestamp(value) -> datetime:
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    except ValueError:
        raise ValidationError(f"Invalid createdAt timestamp: {value!r}", field='created_at') from None
