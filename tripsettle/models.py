"""
Data model for the trip budget: members, expenses and transfers.

Parsing is lenient on numbers (anything that is not a finite number counts
as 0) and strict only on structure, which is the service's concern.
"""
import math
from dataclasses import dataclass

# Payer value meaning "each pays individually"; never matches a member.
EACH_PAYS = '各自'

SPLIT = 'split'
INDIVIDUAL = 'individual'


class InvalidPayload(ValueError):
    """Raised when request data does not have the expected shape."""


def to_number(value):
    """Coerce *value* to a float, treating missing or malformed input as 0."""
    if value is None or value == '':
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


@dataclass(frozen=True)
class Member:
    id: str
    name: str

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise InvalidPayload('Each member must be an object.')
        name = str(data.get('name') or '').strip()
        return cls(id=str(data.get('id') or name), name=name)


@dataclass
class Expense:
    id: str = ''
    item: str = ''
    category: str = ''
    budget: float = 0.0
    actual: float = 0.0
    payer: str = EACH_PAYS
    split_type: str = SPLIT

    def __post_init__(self):
        self.budget = to_number(self.budget)
        self.actual = to_number(self.actual)

    @property
    def is_shared(self):
        return self.split_type == SPLIT

    @property
    def over_budget(self):
        return self.actual > self.budget

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise InvalidPayload('Each expense must be an object.')
        split_type = data.get('splitType') or data.get('split_type') or SPLIT
        payer = data.get('payer')
        return cls(
            id=str(data.get('id') or ''),
            item=str(data.get('item') or ''),
            category=str(data.get('category') or ''),
            budget=data.get('budget'),
            actual=data.get('actual'),
            payer=EACH_PAYS if payer is None else str(payer),
            split_type=str(split_type),
        )


@dataclass(frozen=True)
class Transaction:
    """``from_member`` pays ``to_member`` a whole number of currency units."""
    from_member: str
    to_member: str
    amount: int

    def to_dict(self):
        return {'from': self.from_member, 'to': self.to_member, 'amount': self.amount}


def parse_members(raw):
    if not isinstance(raw, list):
        raise InvalidPayload('"members" must be a list.')
    return [Member.from_dict(item) for item in raw]


def parse_expenses(raw):
    if not isinstance(raw, list):
        raise InvalidPayload('"expenses" must be a list.')
    return [Expense.from_dict(item) for item in raw]
