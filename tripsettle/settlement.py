# tripsettle/settlement.py
"""
Debt settlement for a shared trip budget.

Split expenses go into one pool that every member shares evenly; whoever
fronted the money is credited. The resulting balances are settled with a
greedy nearest-pair walk: biggest debtor against biggest creditor, in whole
currency units. The walk is predictable but not guaranteed to produce the
fewest possible transfers.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List

from tripsettle.models import Transaction, to_number

logger = logging.getLogger(__name__)

# Rounded balances with a magnitude of 1 or less are treated as settled.
DEAD_ZONE = 1
# A side of a pair retires once less than this is left on it.
RETIRE_BELOW = 1


@dataclass
class BalanceSheet:
    shared_total: float = 0.0
    per_head_share: float = 0.0
    balances: Dict[str, float] = field(default_factory=dict)


@dataclass
class SettlementResult:
    total_budget: float = 0.0
    total_actual: float = 0.0
    shared_total: float = 0.0
    per_head_share: float = 0.0
    balances: Dict[str, float] = field(default_factory=dict)
    transactions: List[Transaction] = field(default_factory=list)
    over_budget_expenses: List[str] = field(default_factory=list)

    @property
    def over_budget(self):
        return self.total_actual > self.total_budget

    def to_dict(self):
        return {
            'totalBudget': self.total_budget,
            'totalActual': self.total_actual,
            'sharedTotal': self.shared_total,
            'perHeadShare': self.per_head_share,
            'overBudget': self.over_budget,
            'overBudgetExpenses': list(self.over_budget_expenses),
            'balances': dict(self.balances),
            'transactions': [t.to_dict() for t in self.transactions],
        }


def round_half_up(amount):
    return int(math.floor(amount + 0.5))


def unique_members(members):
    """Members in order, keeping only the first one seen for each id."""
    seen = {}
    for member in members:
        seen.setdefault(member.id, member)
    return list(seen.values())


def compute_balances(members, expenses):
    """
    Work out what each member is owed (positive) or owes (negative)
    relative to a perfectly even split of the shared expenses.

    Balances are keyed by member id. The payer of an expense is matched
    against member *names*; an expense paid by someone who is no longer a
    member still counts toward the pool but credits nobody. A repeated
    member id is counted once.
    """
    members = unique_members(members)
    if not members:
        return BalanceSheet()

    # 1. Everyone starts even
    balances = {member.id: 0.0 for member in members}
    ids_by_name = {}
    for member in members:
        ids_by_name.setdefault(member.name, member.id)

    # 2. Pool the shared expenses and credit whoever paid
    shared_total = 0.0
    for expense in expenses:
        if not expense.is_shared:
            continue
        cost = expense.actual
        shared_total += cost

        payer_id = ids_by_name.get(expense.payer)
        if payer_id is None:
            logger.debug('No member named %r; %s left uncredited', expense.payer, cost)
            continue
        balances[payer_id] += cost

    # 3. Everyone owes an equal share of the pool
    per_head_share = shared_total / len(members)
    for member_id in balances:
        balances[member_id] -= per_head_share

    logger.debug('Shared total %s across %d members (%s each)',
                 shared_total, len(members), per_head_share)
    return BalanceSheet(shared_total, per_head_share, balances)


def compute_transfers(balances):
    """
    Turn a balance map into a list of transfers that settles it.

    Amounts are whole currency units. Keys of *balances* become the
    ``from_member`` / ``to_member`` of each transfer.
    """
    # 1. Separate Debtors and Creditors
    debtors = []
    creditors = []

    for person, amount in balances.items():
        net = round_half_up(to_number(amount))
        if net < -DEAD_ZONE: debtors.append({'person': person, 'amount': net})
        if net > DEAD_ZONE: creditors.append({'person': person, 'amount': net})

    debtors.sort(key=lambda x: x['amount'])
    creditors.sort(key=lambda x: x['amount'], reverse=True)

    # 2. Match them up
    transactions = []
    i = 0
    j = 0

    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]

        amount = min(abs(debtor['amount']), creditor['amount'])
        if amount > 0:
            transactions.append(Transaction(debtor['person'], creditor['person'], amount))

        debtor['amount'] += amount
        creditor['amount'] -= amount

        if abs(debtor['amount']) < RETIRE_BELOW: i += 1
        if creditor['amount'] < RETIRE_BELOW: j += 1

    logger.debug('%d debtors, %d creditors -> %d transfers',
                 len(debtors), len(creditors), len(transactions))
    return transactions


def settle(members, expenses):
    """Totals, per-member balances and transfers for one snapshot."""
    members = unique_members(members)
    expenses = list(expenses)

    sheet = compute_balances(members, expenses)
    names = {member.id: member.name for member in members}

    transactions = [
        Transaction(names[t.from_member], names[t.to_member], t.amount)
        for t in compute_transfers(sheet.balances)
    ]

    balances = {}
    for member_id, amount in sheet.balances.items():
        balances.setdefault(names[member_id], amount)

    return SettlementResult(
        total_budget=sum(e.budget for e in expenses),
        total_actual=sum(e.actual for e in expenses),
        shared_total=sheet.shared_total,
        per_head_share=sheet.per_head_share,
        balances=balances,
        transactions=transactions,
        over_budget_expenses=[e.id for e in expenses if e.over_budget],
    )


def describe_transfers(transactions, currency='¥'):
    """
    Lines like:
      'Bob owes Alice ¥100'
    """
    if not transactions:
        return ['Everyone is already settled!']
    return [f'{t.from_member} owes {t.to_member} {currency}{t.amount:,}'
            for t in transactions]
