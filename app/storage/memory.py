"""In-memory storage for customers, transactions and the activity log.

Customers are indexed by internal id, human-readable customer id and
phone number. Phone numbers are unique: adding a second customer with the
same phone raises DuplicatePhoneError. All data lives in memory and is
lost on restart.
"""

import re
from datetime import datetime
from typing import Dict, List, Optional

from thefuzz import fuzz

from app.models import ActivityEntry, Customer, ExchangeRates, StoredTransaction


class DuplicatePhoneError(ValueError):
    """A customer with this phone number already exists."""

    def __init__(self, existing: Customer) -> None:
        super().__init__("Customer with this phone number already exists")
        self.existing = existing


def _normalize_name(name: str) -> str:
    """Lowercase, strip, and collapse multiple spaces."""
    return re.sub(r"\s+", " ", name.strip().lower())


class MemoryStore:
    """In-memory store for the back office."""

    def __init__(self) -> None:
        self._customers: Dict[str, Customer] = {}
        self._customer_ids: Dict[str, str] = {}  # SFMTL0001 -> id
        self._phones: Dict[str, str] = {}  # phone -> id
        self._transactions: Dict[str, StoredTransaction] = {}
        self._counters: Dict[str, int] = {}
        self._rates: Dict[str, ExchangeRates] = {}
        self._activity_log: List[ActivityEntry] = []

    # -- counters ------------------------------------------------------

    def next_value(self, name: str) -> int:
        """Increment and return the named counter (first value is 1)."""
        self._counters[name] = self._counters.get(name, 0) + 1
        return self._counters[name]

    # -- customers -----------------------------------------------------

    def add_customer(self, customer: Customer) -> None:
        existing = self.get_customer_by_phone(customer.phone)
        if existing is not None:
            raise DuplicatePhoneError(existing)
        self._customers[customer.id] = customer
        self._customer_ids[customer.customer_id] = customer.id
        self._phones[customer.phone] = customer.id

    def get_customer(self, key: str) -> Optional[Customer]:
        """Look up a customer by internal id or SFMTL customer id."""
        if key in self._customers:
            return self._customers[key]
        internal_id = self._customer_ids.get(key)
        return self._customers.get(internal_id) if internal_id else None

    def get_customer_by_phone(self, phone: str) -> Optional[Customer]:
        internal_id = self._phones.get(phone)
        return self._customers.get(internal_id) if internal_id else None

    def search_customers(
        self,
        term: str,
        match_threshold: int = 80,
        limit: int = 10,
    ) -> List[Customer]:
        """Find customers by id, phone or email substring, or by fuzzy name.

        Name matching uses the better of partial_ratio and token_sort_ratio
        so spelling variants and reordered names ("Leota Sina" for
        "Sina Leota") still match. Newest customers come first.
        """
        needle = term.strip().lower()
        normalized = _normalize_name(term)
        matches: List[Customer] = []

        for customer in self._customers.values():
            haystacks = [customer.customer_id.lower(), customer.phone]
            if customer.email:
                haystacks.append(customer.email.lower())
            if any(needle in h for h in haystacks):
                matches.append(customer)
                continue

            name = _normalize_name(customer.full_name)
            if normalized in name:
                matches.append(customer)
                continue
            score = max(
                fuzz.partial_ratio(normalized, name),
                fuzz.token_sort_ratio(normalized, name),
            )
            if score >= match_threshold:
                matches.append(customer)

        matches.sort(key=lambda c: c.created_at, reverse=True)
        return matches[:limit]

    # -- transactions --------------------------------------------------

    def add_transaction(self, tx: StoredTransaction) -> None:
        self._transactions[tx.id] = tx

    def get_transaction(self, key: str) -> Optional[StoredTransaction]:
        """Look up a transaction by internal id or TXN number."""
        if key in self._transactions:
            return self._transactions[key]
        for tx in self._transactions.values():
            if tx.txn_number == key:
                return tx
        return None

    def list_transactions(
        self,
        customer_id: Optional[str] = None,
        agent_id: Optional[str] = None,
        currency: Optional[str] = None,
        search: Optional[str] = None,
        sort_by: str = "date",
        descending: bool = True,
    ) -> List[StoredTransaction]:
        """Return transactions filtered by customer, agent, currency and free text.

        Free text matches the beneficiary name, sender name or TXN number,
        case-insensitively.
        """
        results: List[StoredTransaction] = []
        needle = search.strip().lower() if search else None
        for tx in self._transactions.values():
            if customer_id is not None and tx.customer_id != customer_id:
                continue
            if agent_id is not None and tx.agent_id != agent_id:
                continue
            if currency and tx.currency != currency:
                continue
            if needle:
                fields = [tx.beneficiary_name, tx.sender_name, tx.txn_number]
                if not any(f and needle in f.lower() for f in fields):
                    continue
            results.append(tx)

        if sort_by == "amount":
            results.sort(key=lambda t: t.amount_nzd_cents, reverse=descending)
        else:
            results.sort(key=lambda t: t.created_at, reverse=descending)
        return results

    def list_ptr_transactions(self) -> List[StoredTransaction]:
        """Transactions flagged for a Prescribed Transaction Report, newest first."""
        results = [tx for tx in self._transactions.values() if tx.is_ptr_required]
        results.sort(key=lambda t: t.created_at, reverse=True)
        return results

    def list_go_aml_pending(self) -> List[StoredTransaction]:
        """Export-ready transactions not yet marked as exported, newest first."""
        results = [
            tx
            for tx in self._transactions.values()
            if tx.is_go_aml_export_ready and tx.go_aml_exported_at is None
        ]
        results.sort(key=lambda t: t.created_at, reverse=True)
        return results

    def mark_go_aml_exported(self, ids: List[str], exported_at: datetime) -> List[str]:
        """Stamp pending export-ready transactions; return the ids stamped.

        Unknown ids, transactions below the threshold and transactions
        already exported are left untouched.
        """
        marked: List[str] = []
        for tx_id in dict.fromkeys(ids):
            tx = self._transactions.get(tx_id)
            if tx is None or not tx.is_go_aml_export_ready:
                continue
            if tx.go_aml_exported_at is not None:
                continue
            self._transactions[tx_id] = tx.model_copy(
                update={"go_aml_exported_at": exported_at}
            )
            marked.append(tx_id)
        return marked

    # -- exchange rates ------------------------------------------------

    def set_rates(self, rates: ExchangeRates) -> None:
        self._rates[rates.date_key] = rates

    def get_rates(self, date_key: str) -> Optional[ExchangeRates]:
        return self._rates.get(date_key)

    # -- activity log --------------------------------------------------

    def add_activity(self, entry: ActivityEntry) -> None:
        """Append an entry to the activity log."""
        self._activity_log.append(entry)

    def get_activity_log(
        self,
        entity_id: Optional[str] = None,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
    ) -> List[ActivityEntry]:
        """Return activity entries, optionally filtered by entity and/or time range."""
        results: List[ActivityEntry] = []
        for entry in self._activity_log:
            if entity_id is not None and entry.entity_id != entity_id:
                continue
            if since is not None and entry.timestamp < since:
                continue
            if until is not None and entry.timestamp > until:
                continue
            results.append(entry)
        return results
