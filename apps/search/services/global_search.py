"""
Permission-aware search across the ERP.

Rows are gathered from each source the caller may open, then ranked by
the AI gateway. Without a usable AI answer a deterministic formatter
ranks them instead.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from django.core.serializers.json import DjangoJSONEncoder
from django.db.models import Q

from apps.accounts.access import (
    FINANCE,
    QUALITY_CONTROL,
    SALES_MARKETING,
    STORE_MANAGEMENT,
    EmployeeAccess,
)
from apps.accounts.models import Employee
from apps.approvals.models import ApprovalRequest
from apps.finance.models import PaymentRecord, WithdrawalRequest
from apps.procurement.models import CoffeeRecord, Supplier
from apps.quality.models import QualityAssessment
from apps.sales.models import SalesTransaction
from apps.store.models import StoreReport

from . import ai_gateway
from .exceptions import AIRateLimitError

logger = logging.getLogger(__name__)

MAX_QUERY_LENGTH = 100
MIN_QUERY_LENGTH = 2
SOURCE_LIMIT = 15
FALLBACK_LIMIT = 20

STRIPPED_CHARACTERS = set('%_\\,()`\'"{}<>')

SYSTEM_PROMPT = "You are a search results analyzer. Return only valid JSON."


def sanitize_query(raw: str) -> str:
    """
    Make user input safe for filters and prompts.

    Drops filter and prompt metacharacters and control characters,
    collapses whitespace, and truncates.
    """
    kept = ''.join(
        ch for ch in (raw or '')
        if ch not in STRIPPED_CHARACTERS and (ch.isspace() or ch.isprintable())
    )
    return ' '.join(kept.split())[:MAX_QUERY_LENGTH].strip()


@dataclass(frozen=True)
class SearchSource:
    key: str
    model: type
    search_fields: List[str]
    columns: List[str]
    module: Optional[str] = None
    ordering: List[str] = field(default_factory=list)

    def visible_to(self, access: EmployeeAccess) -> bool:
        return self.module is None or access.has_module_access(self.module)

    def search(self, query: str) -> list:
        condition = Q()
        for name in self.search_fields:
            condition |= Q(**{f'{name}__icontains': query})
        queryset = self.model.objects.filter(condition)
        if self.ordering:
            queryset = queryset.order_by(*self.ordering)
        return list(queryset.values(*self.columns)[:SOURCE_LIMIT])


SOURCES = [
    SearchSource(
        'suppliers', Supplier,
        ['name', 'code', 'phone', 'origin'],
        ['id', 'name', 'code', 'phone', 'origin', 'is_active'],
    ),
    SearchSource(
        'coffee_records', CoffeeRecord,
        ['batch_number', 'supplier_name'],
        ['id', 'batch_number', 'supplier_name', 'kilograms', 'bags', 'coffee_type', 'date', 'status'],
        ordering=['-date'],
    ),
    SearchSource(
        'employees', Employee,
        ['name', 'employee_id', 'department', 'position'],
        ['id', 'name', 'position', 'department', 'employee_id', 'email'],
    ),
    SearchSource(
        'payment_records', PaymentRecord,
        ['batch_number', 'supplier__name', 'status'],
        ['id', 'batch_number', 'supplier__name', 'amount', 'amount_paid', 'status', 'date'],
        module=FINANCE,
        ordering=['-date'],
    ),
    SearchSource(
        'approval_requests', ApprovalRequest,
        ['title', 'request_type', 'department'],
        ['id', 'title', 'request_type', 'amount', 'status', 'department', 'created_at'],
        module=FINANCE,
        ordering=['-created_at'],
    ),
    SearchSource(
        'withdrawal_requests', WithdrawalRequest,
        ['request_ref', 'phone_number', 'status'],
        ['id', 'request_ref', 'amount', 'phone_number', 'status', 'created_at'],
        module=FINANCE,
        ordering=['-created_at'],
    ),
    SearchSource(
        'quality_assessments', QualityAssessment,
        ['batch_number'],
        ['id', 'batch_number', 'moisture', 'suggested_price', 'status', 'created_at'],
        module=QUALITY_CONTROL,
        ordering=['-created_at'],
    ),
    SearchSource(
        'sales_transactions', SalesTransaction,
        ['customer', 'coffee_type', 'truck_details'],
        ['id', 'customer', 'weight', 'total_amount', 'coffee_type', 'date', 'truck_details'],
        module=SALES_MARKETING,
        ordering=['-date'],
    ),
    SearchSource(
        'store_reports', StoreReport,
        ['coffee_type', 'sold_to', 'comments'],
        ['id', 'date', 'coffee_type', 'kilograms_bought', 'kilograms_sold', 'kilograms_left', 'sold_to'],
        module=STORE_MANAGEMENT,
        ordering=['-date'],
    ),
]


def gather_search_data(*, query: str, access: EmployeeAccess) -> dict:
    """Rows matching ``query`` from every source ``access`` may open."""
    data = {}
    for source in SOURCES:
        if not source.visible_to(access):
            continue
        rows = source.search(query)
        if rows:
            data[source.key] = rows
    # UUIDs, Decimals and dates become plain JSON values
    return json.loads(json.dumps(data, cls=DjangoJSONEncoder))


# =============================================================================
# Fallback formatting
# =============================================================================

def _result(row, *, type, title, subtitle, navigate_to, department, module, relevance):
    return {
        'id': row['id'],
        'type': type,
        'title': title,
        'subtitle': subtitle,
        'navigate_to': navigate_to,
        'department': department,
        'module': module,
        'relevance': relevance,
    }


FORMATTERS = {
    'suppliers': lambda r: _result(
        r, type='supplier', title=r['name'], subtitle=f"Code: {r['code']} | {r['origin']}",
        navigate_to=f"/suppliers?id={r['id']}", department='Procurement', module='Suppliers', relevance=80,
    ),
    'coffee_records': lambda r: _result(
        r, type='batch', title=f"Batch: {r['batch_number']}",
        subtitle=f"{r['supplier_name']} | {r['kilograms']}kg | {r['coffee_type']}",
        navigate_to='/quality-control', department='Quality', module='Coffee Records', relevance=85,
    ),
    'employees': lambda r: _result(
        r, type='employee', title=r['name'], subtitle=f"{r['position']} | {r['department']}",
        navigate_to='/human-resources', department='HR', module='Employees', relevance=75,
    ),
    'payment_records': lambda r: _result(
        r, type='payment', title=f"Payment: {r['supplier__name']}",
        subtitle=f"{r['batch_number']} | {r['amount']} UGX | {r['status']}",
        navigate_to='/finance', department='Finance', module='Payments', relevance=85,
    ),
    'approval_requests': lambda r: _result(
        r, type='expense', title=r['title'],
        subtitle=f"{r['request_type']} | {r['amount'] or '-'} UGX | {r['status']}",
        navigate_to='/approvals', department='Finance', module='Approvals', relevance=70,
    ),
    'withdrawal_requests': lambda r: _result(
        r, type='withdrawal', title=f"Withdrawal: {r['request_ref']}",
        subtitle=f"{r['amount']} UGX | {r['status']}",
        navigate_to='/finance', department='Finance', module='Withdrawals', relevance=65,
    ),
    'quality_assessments': lambda r: _result(
        r, type='quality', title=f"Assessment: {r['batch_number']}",
        subtitle=f"Moisture {r['moisture']}% | {r['status']}",
        navigate_to='/quality-control', department='Quality', module='Quality Assessments', relevance=85,
    ),
    'sales_transactions': lambda r: _result(
        r, type='sale', title=f"Sale: {r['customer']}",
        subtitle=f"{r['weight']}kg | {r['total_amount']} UGX",
        navigate_to='/sales-marketing', department='Sales', module='Sales', relevance=80,
    ),
    'store_reports': lambda r: _result(
        r, type='store', title=f"Store report {r['date']}",
        subtitle=f"{r['coffee_type']} | {r['kilograms_left']}kg left",
        navigate_to='/store', department='Store', module='Store Reports', relevance=70,
    ),
}


def format_basic_results(data: dict) -> list:
    """Deterministic ranking used when the AI answer is unavailable."""
    results = []
    for key, rows in data.items():
        formatter: Callable = FORMATTERS[key]
        results.extend(formatter(row) for row in rows)
    results.sort(key=lambda result: result['relevance'], reverse=True)
    return results[:FALLBACK_LIMIT]


def _fallback(data: dict) -> dict:
    return {'results': format_basic_results(data), 'suggestions': [], 'fallback': True}


# =============================================================================
# Entry point
# =============================================================================

def build_prompt(*, query: str, access: EmployeeAccess, data: dict) -> str:
    return (
        "You are a search assistant for a coffee trading company management system.\n"
        f'The user searched for: "{query}"\n'
        f"User's department: {access.department or 'Unknown'}\n"
        f"User's permissions: {', '.join(access.permissions)}\n\n"
        "Here is the data found across the system:\n"
        f"{json.dumps(data, indent=2)}\n\n"
        'Return a JSON object with "results" and "suggestions".\n'
        "Each result has: id, type (supplier, batch, employee, payment, expense, "
        "quality, sale, store, withdrawal), title, subtitle, navigate_to, "
        "department, module and relevance (0-100).\n"
        "Each suggestion has: text and action (a search query or path). "
        "Give 2-3 suggestions.\n"
        "Rank matches from the user's department, exact matches, recent dates "
        "and pending items first.\n"
        "Return ONLY valid JSON, no markdown or explanation."
    )


def global_search(*, raw_query: str, access: EmployeeAccess) -> dict:
    """
    Search everything ``access`` may see.

    Raises:
        AIGatewayError: When the gateway fails for a reason other than rate limiting
    """
    query = sanitize_query(raw_query)
    if len(query) < MIN_QUERY_LENGTH:
        return {'results': [], 'suggestions': []}

    data = gather_search_data(query=query, access=access)
    logger.info("Search %r matched sources: %s", query, ', '.join(data) or 'none')

    if not ai_gateway.is_configured():
        return _fallback(data)

    messages = [
        {'role': 'system', 'content': SYSTEM_PROMPT},
        {'role': 'user', 'content': build_prompt(query=query, access=access, data=data)},
    ]
    try:
        content = ai_gateway.chat_completion(messages=messages)
    except AIRateLimitError:
        return _fallback(data)

    try:
        parsed = json.loads(ai_gateway.strip_code_fences(content))
    except ValueError:
        logger.warning("Unparseable AI search answer; using basic ranking")
        return _fallback(data)
    if not isinstance(parsed, dict) or not isinstance(parsed.get('results'), list):
        logger.warning("AI search answer missing results; using basic ranking")
        return _fallback(data)

    return {
        'results': parsed['results'],
        'suggestions': parsed.get('suggestions') or [],
    }
