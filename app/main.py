"""
Streamlit Frontend for Nexus Manager

One screen per area of the business: a dashboard, the books, and HR.

DESIGN PRINCIPLES:
1. Every number on screen is computed from the current snapshot
2. Every change goes through a service (validated and audited)
3. Errors are shown in plain language, never as tracebacks
4. The AI is only asked when the user presses a button
"""

import asyncio
from datetime import date, timedelta
from decimal import Decimal

import streamlit as st

from nexus_manager.accounting import reports
from nexus_manager.config import get_settings, validate_all_settings
from nexus_manager.hr import MOVABLE_STAGES
from nexus_manager.models import (
    AccountType,
    AssetType,
    BillStatus,
    CandidateStage,
    InvoiceStatus,
    LiabilityType,
    TransactionType,
)
from nexus_manager.orchestrator import AppComponents, create_app_components, reset_demo_data
from nexus_manager.storage import StorageError
from nexus_manager.validation import (
    BusinessRuleError,
    RecordValidator,
    ValidationFailedError,
)


# Page configuration
st.set_page_config(
    page_title="Nexus Manager",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .insight-box {
        padding: 20px;
        background-color: #eef2ff;
        border-radius: 10px;
        border-left: 5px solid #4f46e5;
        margin: 10px 0;
    }
    .muted {
        color: #64748b;
        font-size: 0.9em;
    }
</style>
""", unsafe_allow_html=True)


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def get_components() -> AppComponents:
    """Per-session components; each browser session keeps its own books."""
    if "components" not in st.session_state:
        st.session_state["components"] = create_app_components()
    return st.session_state["components"]


def money(value) -> str:
    symbol = get_settings().app.currency_symbol
    return f"{symbol}{Decimal(value):,.2f}"


def to_decimal(value: float) -> Decimal:
    return Decimal(str(value))


def show_error(error: Exception) -> None:
    """Plain-language message for a refused operation."""
    if isinstance(error, ValidationFailedError):
        st.error(RecordValidator().get_user_friendly_summary(error.result))
    else:
        st.error(str(error))


def main():
    """Main application entry point."""
    components = get_components()
    app_settings = get_settings().app

    st.sidebar.title(f"📊 {app_settings.company_name}")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["🏠 Dashboard", "📒 Accounting", "👥 Human Resources", "⚙️ Settings"],
        index=0,
    )

    st.sidebar.markdown("---")
    if st.sidebar.button("↺ Reset demo data"):
        reset_demo_data(components, st.session_state)
        st.rerun()

    if page == "🏠 Dashboard":
        render_dashboard_page(components)
    elif page == "📒 Accounting":
        render_accounting_page(components)
    elif page == "👥 Human Resources":
        render_hr_page(components)
    elif page == "⚙️ Settings":
        render_settings_page(components)


# =============================================================================
# DASHBOARD
# =============================================================================

def render_dashboard_page(components: AppComponents):
    st.title("🏠 Dashboard")
    data = components.store.data
    stats = reports.dashboard_stats(data)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Assets", money(stats.total_assets))
    col2.metric("Total Liabilities", money(stats.total_liabilities))
    col3.metric("Net Worth", money(stats.net_worth))
    col4.metric("Active Employees", stats.employee_count)

    left, right = st.columns([3, 2])

    with left:
        st.subheader("Income vs. Expenses")
        bars = reports.cash_flow_chart(data)
        st.bar_chart(
            {
                "name": [b.name for b in bars],
                "amount": [float(b.amount) for b in bars],
                "fill": [b.fill for b in bars],
            },
            x="name",
            y="amount",
            color="fill",
        )

    with right:
        st.subheader("🤖 AI Financial Insight")
        if st.button("Generate Insight", type="primary"):
            with st.spinner("Analyzing the books..."):
                st.session_state["insight"] = run_async(components.insight_flow.generate())

        insight = st.session_state.get("insight")
        if insight:
            st.markdown('<div class="insight-box">', unsafe_allow_html=True)
            st.markdown(insight)
            st.markdown("</div>", unsafe_allow_html=True)
        else:
            st.markdown(
                '<p class="muted">Ask the analyst for a summary of profitability, '
                "liquidity and receivables.</p>",
                unsafe_allow_html=True,
            )

    st.subheader("Recent Transactions")
    st.dataframe(
        [
            {
                "Date": t.date.isoformat(),
                "Description": t.description,
                "Category": t.category,
                "Type": t.type.value,
                "Amount": money(t.amount),
            }
            for t in data.transactions[:5]
        ],
        use_container_width=True,
        hide_index=True,
    )


# =============================================================================
# ACCOUNTING
# =============================================================================

def render_accounting_page(components: AppComponents):
    st.title("📒 Accounting")

    tabs = st.tabs([
        "Overview",
        "General Ledger",
        "Receivables",
        "Payables",
        "Assets",
        "Liabilities",
        "Reports",
        "Chart of Accounts",
    ])

    with tabs[0]:
        render_overview_tab(components)
    with tabs[1]:
        render_ledger_tab(components)
    with tabs[2]:
        render_receivables_tab(components)
    with tabs[3]:
        render_payables_tab(components)
    with tabs[4]:
        render_assets_tab(components)
    with tabs[5]:
        render_liabilities_tab(components)
    with tabs[6]:
        render_reports_tab(components)
    with tabs[7]:
        render_accounts_tab(components)


def render_overview_tab(components: AppComponents):
    data = components.store.data
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Revenue", money(reports.total_revenue(data)))
    col2.metric("Expenses", money(reports.total_expenses(data)))
    col3.metric("Receivables", money(reports.total_receivables(data)))
    col4.metric("Payables", money(reports.total_payables(data)))

    if st.button("Flag overdue documents"):
        invoice_ids, bill_ids = components.accounting.mark_overdue()
        if invoice_ids or bill_ids:
            st.warning(
                f"Marked overdue: {', '.join(invoice_ids + bill_ids)}"
            )
        else:
            st.success("Nothing is overdue.")


def render_ledger_tab(components: AppComponents):
    accounting = components.accounting

    with st.expander("➕ New journal entry"):
        with st.form("transaction_form", clear_on_submit=True):
            col1, col2 = st.columns(2)
            with col1:
                description = st.text_input("Description *", max_chars=500)
                amount = st.number_input("Amount *", min_value=0.0, step=0.01, format="%.2f")
            with col2:
                category = st.selectbox("Account *", options=accounting.account_names())
                transaction_type = st.selectbox(
                    "Type",
                    options=list(TransactionType),
                    index=1,
                    format_func=lambda t: t.value,
                )
            entry_date = st.date_input("Date", value=date.today())

            if st.form_submit_button("Record entry", type="primary"):
                try:
                    accounting.add_transaction(
                        description=description,
                        amount=to_decimal(amount),
                        category=category,
                        transaction_type=transaction_type,
                        transaction_date=entry_date,
                    )
                    st.success("Entry recorded.")
                except BusinessRuleError as e:
                    show_error(e)

    st.dataframe(
        [
            {
                "Date": t.date.isoformat(),
                "Description": t.description,
                "Account": t.category,
                "Type": t.type.value,
                "Amount": money(t.amount),
                "Reference": t.reference_id or "",
            }
            for t in components.store.data.transactions
        ],
        use_container_width=True,
        hide_index=True,
    )


def render_receivables_tab(components: AppComponents):
    accounting = components.accounting

    with st.expander("➕ New invoice"):
        client_name = st.text_input("Client *", key="invoice_client")
        col1, col2 = st.columns(2)
        with col1:
            invoice_date = st.date_input("Invoice date", value=date.today(), key="invoice_date")
        with col2:
            due_date = st.date_input(
                "Due date *",
                value=date.today() + timedelta(days=30),
                key="invoice_due",
            )
        items = st.data_editor(
            [{"description": "", "quantity": 1.0, "unit_price": 0.0}],
            num_rows="dynamic",
            use_container_width=True,
            column_config={
                "description": st.column_config.TextColumn("Description", max_chars=200),
                "quantity": st.column_config.NumberColumn("Quantity", min_value=0.0),
                "unit_price": st.column_config.NumberColumn("Unit price", min_value=0.0, format="%.2f"),
            },
            key="invoice_items",
        )
        notes = st.text_area("Notes", key="invoice_notes")

        if st.button("Issue invoice", type="primary"):
            try:
                invoice = accounting.create_invoice(
                    client_name=client_name,
                    due_date=due_date,
                    items=[
                        {
                            "description": row.get("description") or "",
                            "quantity": to_decimal(row.get("quantity") or 0),
                            "unit_price": to_decimal(row.get("unit_price") or 0),
                        }
                        for row in items
                    ],
                    invoice_date=invoice_date,
                    notes=notes,
                )
                st.success(f"Invoice {invoice.id} issued for {money(invoice.total_amount)}.")
            except BusinessRuleError as e:
                show_error(e)

    for invoice in components.store.data.invoices:
        col1, col2, col3, col4, col5 = st.columns([2, 3, 2, 2, 2])
        col1.markdown(f"**{invoice.id}**")
        col2.write(f"{invoice.client_name} · due {invoice.due_date.isoformat()}")
        col3.write(money(invoice.total_amount))
        col4.write(invoice.status.value)
        with col5:
            if invoice.status not in (InvoiceStatus.PAID, InvoiceStatus.VOID):
                if st.button("Mark paid", key=f"pay_{invoice.id}"):
                    try:
                        accounting.mark_invoice_paid(invoice.id)
                        st.rerun()
                    except (BusinessRuleError, StorageError) as e:
                        show_error(e)
                if st.button("Void", key=f"void_{invoice.id}"):
                    try:
                        accounting.void_invoice(invoice.id)
                        st.rerun()
                    except (BusinessRuleError, StorageError) as e:
                        show_error(e)


def render_payables_tab(components: AppComponents):
    accounting = components.accounting

    with st.expander("➕ Enter bill"):
        with st.form("bill_form", clear_on_submit=True):
            col1, col2 = st.columns(2)
            with col1:
                vendor_name = st.text_input("Vendor *", max_chars=200)
                invoice_number = st.text_input("Vendor invoice #", max_chars=50)
                amount = st.number_input("Amount *", min_value=0.0, step=0.01, format="%.2f")
            with col2:
                category = st.selectbox(
                    "Expense account *",
                    options=[a.name for a in accounting.expense_accounts()],
                )
                bill_date = st.date_input("Bill date", value=date.today())
                due_date = st.date_input("Due date", value=date.today() + timedelta(days=30))

            if st.form_submit_button("Save bill", type="primary"):
                try:
                    bill = accounting.create_bill(
                        vendor_name=vendor_name,
                        amount=to_decimal(amount),
                        category=category,
                        invoice_number=invoice_number,
                        due_date=due_date,
                        bill_date=bill_date,
                    )
                    st.success(f"Bill {bill.id} saved.")
                except BusinessRuleError as e:
                    show_error(e)

    for bill in components.store.data.bills:
        col1, col2, col3, col4, col5 = st.columns([2, 3, 2, 2, 2])
        col1.markdown(f"**{bill.id}**")
        due = bill.due_date.isoformat() if bill.due_date else "no due date"
        col2.write(f"{bill.vendor_name} · {bill.category} · due {due}")
        col3.write(money(bill.amount))
        col4.write(bill.status.value)
        with col5:
            if bill.status != BillStatus.PAID:
                if st.button("Pay", key=f"pay_{bill.id}"):
                    try:
                        accounting.pay_bill(bill.id)
                        st.rerun()
                    except (BusinessRuleError, StorageError) as e:
                        show_error(e)


def render_assets_tab(components: AppComponents):
    with st.expander("➕ Add asset"):
        with st.form("asset_form", clear_on_submit=True):
            name = st.text_input("Name *")
            value = st.number_input("Value *", min_value=0.0, step=0.01, format="%.2f")
            asset_type = st.selectbox("Type", options=list(AssetType), format_func=lambda t: t.value)

            if st.form_submit_button("Add asset", type="primary"):
                try:
                    components.accounting.add_asset(name, to_decimal(value), asset_type)
                    st.success("Asset added.")
                except BusinessRuleError as e:
                    show_error(e)

    st.dataframe(
        [
            {
                "Name": a.name,
                "Type": a.type.value,
                "Acquired": a.date_acquired.isoformat(),
                "Value": money(a.value),
            }
            for a in components.store.data.assets
        ],
        use_container_width=True,
        hide_index=True,
    )


def render_liabilities_tab(components: AppComponents):
    with st.expander("➕ Add liability"):
        with st.form("liability_form", clear_on_submit=True):
            name = st.text_input("Name *")
            amount = st.number_input("Amount *", min_value=0.0, step=0.01, format="%.2f")
            liability_type = st.selectbox(
                "Type", options=list(LiabilityType), format_func=lambda t: t.value
            )
            due_date = st.date_input("Due date", value=date.today())

            if st.form_submit_button("Add liability", type="primary"):
                try:
                    components.accounting.add_liability(
                        name, to_decimal(amount), liability_type, due_date=due_date
                    )
                    st.success("Liability added.")
                except BusinessRuleError as e:
                    show_error(e)

    st.dataframe(
        [
            {
                "Name": l.name,
                "Type": l.type.value,
                "Due": l.due_date.isoformat(),
                "Amount": money(l.amount),
            }
            for l in components.store.data.liabilities
        ],
        use_container_width=True,
        hide_index=True,
    )


def render_reports_tab(components: AppComponents):
    data = components.store.data
    report = st.radio(
        "Report",
        ["Balance Sheet", "Profit & Loss", "Aging"],
        horizontal=True,
    )

    if report == "Balance Sheet":
        sheet = reports.balance_sheet(data)
        col1, col2 = st.columns(2)
        with col1:
            st.markdown("#### Assets")
            for line in sheet.assets:
                st.write(f"{line.name} ({line.type}): {money(line.amount)}")
            st.markdown(f"**Total assets: {money(sheet.total_assets)}**")
        with col2:
            st.markdown("#### Liabilities")
            for line in sheet.liabilities:
                st.write(f"{line.name} ({line.type}): {money(line.amount)}")
            st.markdown(f"**Total liabilities: {money(sheet.total_liabilities)}**")
        st.metric("Net Worth", money(sheet.net_worth))

    elif report == "Profit & Loss":
        pnl = reports.profit_and_loss(data)
        col1, col2 = st.columns(2)
        with col1:
            st.markdown("#### Revenue")
            for category, amount in pnl.revenue_by_category.items():
                st.write(f"{category}: {money(amount)}")
            st.markdown(f"**Total revenue: {money(pnl.total_revenue)}**")
        with col2:
            st.markdown("#### Expenses")
            for category, amount in pnl.expenses_by_category.items():
                st.write(f"{category}: {money(amount)}")
            st.markdown(f"**Total expenses: {money(pnl.total_expenses)}**")
        st.metric("Net Income", money(pnl.net_income))

    else:
        as_of = st.date_input("As of", value=date.today(), key="aging_as_of")
        aging = reports.aging_report(data, as_of)
        col1, col2 = st.columns(2)
        with col1:
            st.markdown("#### Receivables")
            st.table({k: money(v) for k, v in aging.receivables_by_bucket.items()})
        with col2:
            st.markdown("#### Payables")
            st.table({k: money(v) for k, v in aging.payables_by_bucket.items()})


def render_accounts_tab(components: AppComponents):
    accounting = components.accounting

    with st.expander("➕ Add account"):
        with st.form("account_form", clear_on_submit=True):
            col1, col2 = st.columns(2)
            with col1:
                code = st.text_input("Code *")
                name = st.text_input("Name *")
            with col2:
                account_type = st.selectbox(
                    "Type *", options=list(AccountType), format_func=lambda t: t.value
                )
                description = st.text_input("Description")

            if st.form_submit_button("Add account", type="primary"):
                try:
                    accounting.add_account(code, name, account_type, description)
                    st.success("Account added.")
                except (BusinessRuleError, StorageError) as e:
                    show_error(e)

    st.dataframe(
        [
            {
                "Code": a.code,
                "Name": a.name,
                "Type": a.type.value,
                "Description": a.description or "",
            }
            for a in accounting.chart_of_accounts()
        ],
        use_container_width=True,
        hide_index=True,
    )


# =============================================================================
# HUMAN RESOURCES
# =============================================================================

def render_hr_page(components: AppComponents):
    st.title("👥 Human Resources")
    tabs = st.tabs(["Directory", "Job Proformas (AI)", "Hiring Pipeline"])

    with tabs[0]:
        render_directory_tab(components)
    with tabs[1]:
        render_proformas_tab(components)
    with tabs[2]:
        render_pipeline_tab(components)


def render_directory_tab(components: AppComponents):
    for employee in components.store.data.employees:
        with st.expander(f"{employee.name} · {employee.role} ({employee.status.value})"):
            st.write(f"**Department:** {employee.department}")
            st.write(f"**Email:** {employee.email}")
            st.write(f"**Start date:** {employee.start_date.isoformat()}")
            st.write(
                "**Credentials:** "
                + (", ".join(employee.credentials) if employee.credentials else "none")
            )

            credential = st.text_input("New credential", key=f"cred_{employee.id}")
            if st.button("Add credential", key=f"add_cred_{employee.id}"):
                try:
                    components.hr.add_credential(employee.id, credential)
                    st.rerun()
                except (BusinessRuleError, StorageError) as e:
                    show_error(e)


def render_proformas_tab(components: AppComponents):
    with st.form("proforma_form", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            title = st.text_input("Job title *")
        with col2:
            department = st.text_input("Department *")

        if st.form_submit_button("✨ Generate proforma", type="primary"):
            with st.spinner("Drafting the job description..."):
                try:
                    proforma = run_async(components.hr.create_proforma(title, department))
                    st.success(f"Proforma created: {proforma.title}")
                except BusinessRuleError as e:
                    show_error(e)

    for proforma in reversed(components.store.data.job_proformas):
        with st.expander(f"{proforma.title} · {proforma.department}"):
            st.write(proforma.description)
            for requirement in proforma.requirements:
                st.markdown(f"- {requirement}")
            st.caption(f"Salary range: {proforma.salary_range}")


def render_pipeline_tab(components: AppComponents):
    hr = components.hr

    with st.expander("➕ Add candidate"):
        with st.form("candidate_form", clear_on_submit=True):
            name = st.text_input("Name *")
            applying_for = st.selectbox("Applying for *", options=hr.proforma_titles())
            resume_summary = st.text_area("Resume summary")

            if st.form_submit_button("Add candidate", type="primary"):
                try:
                    hr.add_candidate(name, applying_for, resume_summary=resume_summary)
                    st.success("Candidate added.")
                except BusinessRuleError as e:
                    show_error(e)

    columns = st.columns(len(MOVABLE_STAGES))
    for column, stage in zip(columns, MOVABLE_STAGES):
        with column:
            st.markdown(f"#### {stage.value}")
            for candidate in hr.open_candidates():
                if candidate.stage != stage:
                    continue
                st.markdown(f"**{candidate.name}**")
                st.caption(candidate.applying_for)
                if candidate.match_score is not None:
                    st.progress(candidate.match_score / 100, text=f"Match {candidate.match_score:.0f}%")

                target = st.selectbox(
                    "Move to",
                    options=list(MOVABLE_STAGES),
                    index=list(MOVABLE_STAGES).index(stage),
                    format_func=lambda s: s.value,
                    key=f"stage_{candidate.id}",
                    label_visibility="collapsed",
                )
                if target != stage:
                    try:
                        hr.move_candidate(candidate.id, target)
                        st.rerun()
                    except (BusinessRuleError, StorageError) as e:
                        show_error(e)

                if stage != CandidateStage.REJECTED:
                    if st.button("Hire", key=f"hire_{candidate.id}"):
                        try:
                            employee = hr.hire_candidate(candidate.id)
                            st.success(f"{employee.name} hired ({employee.email}).")
                            st.rerun()
                        except (BusinessRuleError, StorageError) as e:
                            show_error(e)


# =============================================================================
# SETTINGS
# =============================================================================

def render_settings_page(components: AppComponents):
    st.title("⚙️ Settings")
    st.markdown("### Connection Status")

    status = validate_all_settings()
    services = [
        ("Gemini (AI insights & job descriptions)", "gemini"),
        ("Application settings", "app"),
    ]
    for name, key in services:
        if status.get(key, False):
            st.success(f"✅ {name} - OK")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {name} - {error}")

    st.markdown("---")
    st.markdown("### Activity Log")
    st.dataframe(
        [event.to_table_row() for event in components.audit_logger.recent_events(limit=100)],
        use_container_width=True,
        hide_index=True,
    )

    st.markdown("---")
    st.markdown("### Configuration")
    st.markdown(
        "To configure the application, create a `.env` file with your API keys. "
        "See `.env.example` for the available variables."
    )


if __name__ == "__main__":
    main()
