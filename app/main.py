"""
Streamlit Frontend for Money Manager

DESIGN PRINCIPLES:
1. Simple, clear interface
2. Balances always reflect what was recorded
3. Clear error messages in simple language
4. Locked entries are shown, never silently hidden

The UI talks only to the components built by the orchestrator:
- The ledger store for every read and mutation
- The dashboard service for period summaries
- The audit logger for the recent activity page
"""

from datetime import date, datetime
from decimal import Decimal

import streamlit as st
from pydantic import ValidationError

from money_manager.config import get_settings, validate_all_settings
from money_manager.ledger import AccountInUseError, LedgerValidationError
from money_manager.ledger.edit_lock import time_left
from money_manager.models.ledger import (
    ALL,
    Division,
    FilterOptions,
    PeriodKind,
    TransactionDraft,
    TransactionType,
    TransferDraft,
)
from money_manager.orchestrator import AppComponents, create_app_components


# Page configuration
st.set_page_config(
    page_title="Money Manager",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS for better UX
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
        margin-top: 10px;
    }
    .income {
        color: #10b981;
        font-weight: bold;
    }
    .expense {
        color: #ef4444;
        font-weight: bold;
    }
    .big-number {
        font-size: 2.5em;
        font-weight: bold;
        color: #2c3e50;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_components() -> AppComponents:
    """Get or create application components (cached)."""
    return create_app_components()


def money(amount: Decimal) -> str:
    return f"{get_settings().ledger.currency_symbol}{amount:,.2f}"


def main():
    """Main application entry point."""
    components = get_components()

    # Sidebar navigation
    st.sidebar.title("💰 Money Manager")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        [
            "📊 Dashboard",
            "➕ Add Transaction",
            "🔁 Transfer",
            "📜 History",
            "🏦 Accounts",
            "🧾 Activity",
            "⚙️ Settings",
        ],
        index=0,
    )

    st.sidebar.markdown("---")
    st.sidebar.markdown(
        f"""
        **Total balance:** {money(components.store.get_total_balance())}

        Entries can be edited or deleted for
        {components.store.edit_window_hours} hours after you add them.
        """
    )

    # Route to appropriate page
    if page == "📊 Dashboard":
        render_dashboard_page(components)
    elif page == "➕ Add Transaction":
        render_add_transaction_page(components)
    elif page == "🔁 Transfer":
        render_transfer_page(components)
    elif page == "📜 History":
        render_history_page(components)
    elif page == "🏦 Accounts":
        render_accounts_page(components)
    elif page == "🧾 Activity":
        render_activity_page(components)
    elif page == "⚙️ Settings":
        render_settings_page()


def render_dashboard_page(components: AppComponents):
    """Render the period dashboard."""
    st.title("📊 Dashboard")

    col1, col2 = st.columns([3, 1])
    with col1:
        choice = st.radio(
            "Period",
            options=[PeriodKind.WEEKLY, PeriodKind.MONTHLY, PeriodKind.YEARLY, "custom"],
            format_func=lambda k: "Custom" if k == "custom" else k.value.title(),
            horizontal=True,
        )
    if "period_offset" not in st.session_state:
        st.session_state.period_offset = 0

    if choice == "custom":
        date_range = st.date_input("Date Range", value=(date.today().replace(day=1), date.today()))
        if not isinstance(date_range, (list, tuple)) or len(date_range) != 2:
            st.info("Pick a start and an end date.")
            return
        try:
            summary = components.dashboard.custom_summary(date_range[0], date_range[1])
        except ValueError as e:
            st.error(str(e))
            return
    else:
        with col2:
            back, forward = st.columns(2)
            if back.button("◀ Previous"):
                st.session_state.period_offset += 1
            if forward.button("Next ▶", disabled=st.session_state.period_offset == 0):
                st.session_state.period_offset = max(st.session_state.period_offset - 1, 0)
        summary = components.dashboard.summary(choice, st.session_state.period_offset)

    st.subheader(summary.label)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Income", money(summary.total_income))
    col2.metric("Expense", money(summary.total_expense))
    col3.metric("Balance", money(summary.balance))
    col4.metric("All Accounts", money(summary.total_account_balance))

    if summary.period_comparison:
        st.markdown("### Comparison")
        st.bar_chart(
            {
                "Income": {p.period: float(p.income) for p in summary.period_comparison},
                "Expense": {p.period: float(p.expense) for p in summary.period_comparison},
            }
        )

    col1, col2 = st.columns(2)
    with col1:
        st.markdown("### Expenses by Category")
        for total in summary.expense_categories:
            st.markdown(f"- **{total.name}** ({total.count}): {money(total.amount)}")
        if not summary.expense_categories:
            st.caption("No expenses in this period.")
    with col2:
        st.markdown("### Income by Category")
        for total in summary.income_categories:
            st.markdown(f"- **{total.name}** ({total.count}): {money(total.amount)}")
        if not summary.income_categories:
            st.caption("No income in this period.")

    st.markdown("### Recent Transactions")
    for txn in summary.recent_transactions:
        sign = "+" if txn.type == TransactionType.INCOME else "-"
        css = "income" if txn.type == TransactionType.INCOME else "expense"
        st.markdown(
            f"{txn.date_time:%d %b %Y %H:%M} · {txn.description or txn.category} "
            f"<span class='{css}'>{sign}{money(txn.amount)}</span>",
            unsafe_allow_html=True,
        )


def render_add_transaction_page(components: AppComponents):
    """Render the income/expense form."""
    st.title("➕ Add Transaction")
    store = components.store

    txn_type = st.radio(
        "Type",
        options=list(TransactionType),
        format_func=lambda t: t.value.title(),
        horizontal=True,
    )
    categories = store.categories_for(txn_type)
    accounts = store.accounts

    if not accounts:
        st.warning("Add an account first.")
        return

    with st.form("add_transaction"):
        col1, col2 = st.columns(2)
        with col1:
            amount = st.number_input("Amount *", min_value=0.0, step=0.01, format="%.2f")
            category = st.selectbox(
                "Category *",
                options=[c.id for c in categories],
                format_func=lambda cid: store.get_category(cid).name,
            )
            division = st.selectbox(
                "Division *",
                options=list(Division),
                format_func=lambda d: d.value.title(),
            )
        with col2:
            account_id = st.selectbox(
                "Account *",
                options=[a.id for a in accounts],
                format_func=lambda aid: store.get_account(aid).name,
            )
            txn_date = st.date_input("Date *", value=date.today())
            txn_time = st.time_input("Time *", value=datetime.now().time().replace(microsecond=0))
        description = st.text_input("Description", placeholder="What was it for?")

        submitted = st.form_submit_button("💾 Save", type="primary")

    if submitted:
        try:
            draft = TransactionDraft(
                type=txn_type,
                amount=Decimal(str(amount)).quantize(Decimal("0.01")),
                description=description,
                category=category,
                division=division,
                account_id=account_id,
                date_time=datetime.combine(txn_date, txn_time),
            )
            txn = store.add_transaction(draft)
            st.success(f"Saved {txn.type.value} of {money(txn.amount)}.")
        except ValidationError as e:
            st.error(f"Please check the form: {e.errors()[0]['msg']}")
        except LedgerValidationError as e:
            st.error(str(e))


def render_transfer_page(components: AppComponents):
    """Render the transfer form and transfer list."""
    st.title("🔁 Transfer Between Accounts")
    store = components.store
    accounts = store.accounts

    if len(accounts) < 2:
        st.warning("You need at least two accounts to transfer money.")
        return

    with st.form("add_transfer"):
        col1, col2 = st.columns(2)
        with col1:
            from_id = st.selectbox(
                "From *",
                options=[a.id for a in accounts],
                format_func=lambda aid: f"{store.get_account(aid).name} ({money(store.get_account(aid).balance)})",
            )
            amount = st.number_input("Amount *", min_value=0.0, step=0.01, format="%.2f")
        with col2:
            to_id = st.selectbox(
                "To *",
                options=[a.id for a in accounts],
                index=1,
                format_func=lambda aid: f"{store.get_account(aid).name} ({money(store.get_account(aid).balance)})",
            )
            transfer_date = st.date_input("Date *", value=date.today())
        description = st.text_input("Description", placeholder="Why are you moving this money?")

        submitted = st.form_submit_button("🔁 Transfer", type="primary")

    if submitted:
        try:
            draft = TransferDraft(
                from_account_id=from_id,
                to_account_id=to_id,
                amount=Decimal(str(amount)).quantize(Decimal("0.01")),
                description=description,
                date_time=datetime.combine(transfer_date, datetime.now().time()),
            )
            store.add_transfer(draft)
            st.success(f"Moved {money(draft.amount)}.")
        except ValidationError as e:
            st.error(f"Please check the form: {e.errors()[0]['msg']}")
        except LedgerValidationError as e:
            st.error(str(e))

    st.markdown("---")
    st.markdown("### Past Transfers")
    for transfer in sorted(store.transfers, key=lambda t: t.date_time, reverse=True):
        source = store.get_account(transfer.from_account_id)
        target = store.get_account(transfer.to_account_id)
        st.markdown(
            f"{transfer.date_time:%d %b %Y} · "
            f"{source.name if source else transfer.from_account_id} → "
            f"{target.name if target else transfer.to_account_id}: "
            f"**{money(transfer.amount)}** {transfer.description}"
        )


def render_history_page(components: AppComponents):
    """Render the filtered transaction list with edit and delete."""
    st.title("📜 Transaction History")
    store = components.store

    # Filters
    col1, col2, col3 = st.columns(3)
    with col1:
        division = st.selectbox(
            "Filter by Division",
            options=[ALL] + list(Division),
            format_func=lambda d: "All Divisions" if d == ALL else d.value.title(),
        )
    with col2:
        category = st.selectbox(
            "Filter by Category",
            options=[ALL] + [c.id for c in store.categories],
            format_func=lambda cid: "All Categories" if cid == ALL else store.get_category(cid).name,
        )
    with col3:
        date_range = st.date_input("Date Range", value=[], help="Select date range")

    start_date = end_date = None
    if isinstance(date_range, (list, tuple)) and len(date_range) == 2:
        start_date, end_date = date_range

    filters = FilterOptions(
        division=division,
        category=category,
        start_date=start_date,
        end_date=end_date,
    )
    transactions = sorted(
        store.get_filtered_transactions(filters),
        key=lambda t: t.date_time,
        reverse=True,
    )

    col1, col2 = st.columns(2)
    col1.metric("Income", money(store.get_total_income(transactions)))
    col2.metric("Expense", money(store.get_total_expense(transactions)))

    st.markdown("---")

    if not transactions:
        st.info("📋 No transactions match these filters.")
        return

    now = store.now()
    for txn in transactions:
        editable = store.can_edit(txn.created_at)
        sign = "+" if txn.type == TransactionType.INCOME else "-"
        label = (
            f"{txn.date_time:%d %b %Y %H:%M} · {txn.description or txn.category} · "
            f"{sign}{money(txn.amount)}"
        )
        with st.expander(label if editable else f"🔒 {label}"):
            account = store.get_account(txn.account_id)
            st.markdown(f"**Account:** {account.name if account else txn.account_id}")
            st.markdown(f"**Division:** {txn.division.value.title()}")

            if not editable:
                st.caption("This entry is locked and can no longer be changed.")
                continue

            remaining = time_left(txn.created_at, now, store.edit_window_hours)
            st.caption(f"Editable for another {int(remaining.total_seconds() // 3600)}h "
                       f"{int(remaining.total_seconds() % 3600 // 60)}m")

            types = list(TransactionType)
            new_type = st.radio(
                "Type",
                options=types,
                index=types.index(txn.type),
                format_func=lambda t: t.value.title(),
                horizontal=True,
                key=f"type_{txn.id}",
            )
            category_ids = [c.id for c in store.categories_for(new_type)]
            divisions = list(Division)
            account_ids = [a.id for a in store.accounts]

            col1, col2 = st.columns(2)
            with col1:
                new_amount = st.number_input(
                    "Amount",
                    value=float(txn.amount),
                    min_value=0.01,
                    step=0.01,
                    format="%.2f",
                    key=f"amount_{txn.id}",
                )
                new_category = st.selectbox(
                    "Category",
                    options=category_ids,
                    index=category_ids.index(txn.category) if txn.category in category_ids else 0,
                    format_func=lambda cid: store.get_category(cid).name,
                    key=f"category_{txn.id}",
                )
                new_division = st.selectbox(
                    "Division",
                    options=divisions,
                    index=divisions.index(txn.division),
                    format_func=lambda d: d.value.title(),
                    key=f"division_{txn.id}",
                )
            with col2:
                new_account = st.selectbox(
                    "Account",
                    options=account_ids,
                    index=account_ids.index(txn.account_id) if txn.account_id in account_ids else 0,
                    format_func=lambda aid: store.get_account(aid).name,
                    key=f"account_{txn.id}",
                )
                new_date = st.date_input("Date", value=txn.date_time.date(), key=f"date_{txn.id}")
                new_time = st.time_input("Time", value=txn.date_time.time(), key=f"time_{txn.id}")
            new_description = st.text_input(
                "Description",
                value=txn.description,
                key=f"description_{txn.id}",
            )

            col1, col2 = st.columns(2)
            with col1:
                if st.button("💾 Update", key=f"update_{txn.id}"):
                    try:
                        updated = store.update_transaction(txn.id, {
                            "type": new_type,
                            "amount": Decimal(str(new_amount)).quantize(Decimal("0.01")),
                            "description": new_description,
                            "category": new_category,
                            "division": new_division,
                            "account_id": new_account,
                            "date_time": datetime.combine(new_date, new_time),
                        })
                    except (ValidationError, LedgerValidationError) as e:
                        st.error(str(e))
                    else:
                        if updated:
                            st.rerun()
                        st.error("This entry is locked now.")
            with col2:
                if st.button("🗑️ Delete", key=f"delete_{txn.id}"):
                    if store.delete_transaction(txn.id):
                        st.rerun()
                    st.error("This entry is locked now.")


def render_accounts_page(components: AppComponents):
    """Render accounts with their balances."""
    st.title("🏦 Accounts")
    store = components.store

    st.markdown(
        f"<div class='big-number'>{money(store.get_total_balance())}</div>",
        unsafe_allow_html=True,
    )

    for account in store.accounts:
        with st.expander(f"{account.name} · {money(account.balance)}"):
            name = st.text_input("Name", value=account.name, key=f"name_{account.id}")
            color = st.color_picker("Color", value=account.color, key=f"color_{account.id}")
            col1, col2 = st.columns(2)
            with col1:
                if st.button("💾 Save", key=f"save_{account.id}"):
                    try:
                        store.update_account(account.id, name=name, color=color)
                        st.rerun()
                    except ValidationError as e:
                        st.error(f"Please check the account: {e.errors()[0]['msg']}")
            with col2:
                if st.button("🗑️ Delete", key=f"remove_{account.id}"):
                    try:
                        store.delete_account(account.id)
                        st.rerun()
                    except AccountInUseError as e:
                        st.error(str(e))

    st.markdown("---")
    st.markdown("### Add Account")
    with st.form("add_account"):
        name = st.text_input("Name *")
        color = st.color_picker("Color", value="#3b82f6")
        opening = st.number_input("Opening Balance", value=0.0, step=0.01, format="%.2f")
        if st.form_submit_button("➕ Add", type="primary"):
            if not name:
                st.error("Please enter the account name")
            else:
                try:
                    store.add_account(
                        name=name,
                        color=color,
                        balance=Decimal(str(opening)).quantize(Decimal("0.01")),
                    )
                    st.rerun()
                except (ValidationError, LedgerValidationError) as e:
                    st.error(str(e))


def render_activity_page(components: AppComponents):
    """Render recent audit events."""
    st.title("🧾 Recent Activity")

    events = components.audit_logger.recent_events(limit=50)
    if not events:
        st.info("Nothing has happened yet.")
        return

    for event in events:
        icon = {"error": "🔴", "warning": "🟡"}.get(event.severity.value, "🟢")
        st.markdown(f"{icon} {event.timestamp:%d %b %H:%M:%S} · {event.description}")
        if event.error_message:
            st.caption(event.error_message)


def render_settings_page():
    """Render the settings page."""
    st.title("⚙️ Settings")

    st.markdown("### Configuration Status")

    status = validate_all_settings()

    sections = [
        ("Ledger", "ledger"),
        ("Local Storage", "storage"),
        ("Google Sheets (Storage)", "google_sheets"),
        ("Remote API", "remote_api"),
    ]

    for name, key in sections:
        if status.get(key, False):
            st.success(f"✅ {name} - Configured")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {name} - {error}")

    st.markdown("---")
    st.markdown("### Configuration")
    st.markdown(
        "To configure the application, create a `.env` file. "
        "See `.env.example` for the available variables."
    )


if __name__ == "__main__":
    main()
