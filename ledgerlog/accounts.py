"""Per-user balance accounting over a chronologically ordered event stream."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .events import AMOUNT_CONTEXT, Event, EventKind, format_amount, format_timestamp

Clock = Callable[[], datetime]

ZERO = Decimal("0")


@dataclass
class AccountState:
    """Running balance and ledger lines for one user."""

    user: str
    balance: Optional[Decimal] = None
    lines: List[str] = field(default_factory=list)

    def seed(self, amount: Decimal) -> None:
        if self.balance is None:
            self.balance = amount

    def credit(self, amount: Decimal) -> None:
        self.balance = AMOUNT_CONTEXT.add(self.current_balance, amount)

    def debit(self, amount: Decimal) -> None:
        self.balance = AMOUNT_CONTEXT.subtract(self.current_balance, amount)

    @property
    def current_balance(self) -> Decimal:
        return self.balance if self.balance is not None else ZERO


@dataclass(frozen=True)
class UserLedger:
    user: str
    lines: Tuple[str, ...]
    balance: Decimal

    def render(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)


class Accumulator:
    """Apply events in order, then close every account with a final balance line.

    One instance serves exactly one run: ``finalize`` may be called once and
    no further events are accepted afterwards.
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self.clock: Clock = clock or datetime.now
        self._accounts: Dict[str, AccountState] = {}
        self._last_timestamp: Optional[datetime] = None
        self._finalized = False

    def account(self, user: str) -> AccountState:
        state = self._accounts.get(user)
        if state is None:
            state = AccountState(user=user)
            self._accounts[user] = state
        return state

    def apply(self, event: Event) -> None:
        if self._finalized:
            raise RuntimeError("accumulator already finalized")
        if self._last_timestamp is not None and event.timestamp < self._last_timestamp:
            raise ValueError("events must be applied in chronological order")
        self._last_timestamp = event.timestamp

        actor = self.account(event.actor)
        actor.lines.append(event.raw_text)

        if event.kind is EventKind.BALANCE_INQUIRY:
            actor.seed(event.amount)
        elif event.kind is EventKind.WITHDRAWAL:
            actor.debit(event.amount)
        elif event.kind is EventKind.TRANSFER:
            actor.debit(event.amount)
            recipient = self.account(event.counterpart)  # type: ignore[arg-type]
            recipient.credit(event.amount)
            recipient.lines.append(
                f"[{format_timestamp(event.timestamp)}] {event.counterpart} received "
                f"{format_amount(event.amount)} from {event.actor}"
            )

    def apply_all(self, events: Iterable[Event]) -> None:
        for event in events:
            self.apply(event)

    def finalize(self) -> Dict[str, UserLedger]:
        """Append final balance lines and return ledgers keyed by user, sorted by user."""

        if self._finalized:
            raise RuntimeError("accumulator already finalized")
        self._finalized = True

        stamp = format_timestamp(self.clock())
        ledgers: Dict[str, UserLedger] = {}
        for user in sorted(self._accounts):
            state = self._accounts[user]
            if not state.lines:
                continue
            balance = state.current_balance
            state.lines.append(f"[{stamp}] {user} final balance {format_amount(balance)}")
            ledgers[user] = UserLedger(user=user, lines=tuple(state.lines), balance=balance)
        return ledgers
